"""
Cooperative cancellation for state waits.

A CancellationToken is handed explicitly to each wait call. The driver only
reads it; whoever owns the workflow (a signal handler, another thread)
cancels it.
"""

from __future__ import annotations

import logging
import signal
from threading import Event


class CancellationToken:
    """Thread-safe, one-way cancellation flag backed by threading.Event."""

    def __init__(self):
        self._event = Event()

    def cancel(self) -> None:
        """Signal cancellation to every wait holding this token."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, seconds: float) -> bool:
        """Sleep up to `seconds`, waking early on cancellation.

        Returns:
            bool: True if the token was cancelled before the timeout elapsed
        """
        return self._event.wait(seconds)


def install_sigint_handler(token: CancellationToken):
    """Cancel `token` on Ctrl+C instead of raising KeyboardInterrupt.

    Returns:
        The previously installed SIGINT handler, so callers can restore it.
    """

    def _signal_handler(_signum, _frame):
        logging.warning("Interrupt received, cancelling wait...")
        token.cancel()

    return signal.signal(signal.SIGINT, _signal_handler)
