"""
Blocking wait for a remote resource to converge on a target state.

wait_for_state() polls a probe on a fixed interval until the resource
reports the target state, reports a state outside the allowed pending set,
stays missing for longer than the policy allows, or the wait is cancelled.

Elapsed time is not capped while the resource keeps reporting pending
states. Cross-region image copies can run far longer than any fixed
timeout, so the timeout only bounds how long the resource may be missing.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

from .cancellation import CancellationToken
from .errors import ResourceNotFoundError, UnexpectedStateError, WaitInterruptedError
from .probes import FunctionProbe, ProbeResult, StateProbe
from .wait_policy import WaitPolicy, WaitSettings


@dataclass(frozen=True)
class StateChangeConf:
    """What to wait for, and how to ask about it."""

    target: str
    probe: Union[StateProbe, Callable[[], Any]]
    pending: frozenset[str] = field(default_factory=frozenset)
    cancel_token: Optional[CancellationToken] = None

    def __post_init__(self):
        if not self.target:
            raise ValueError("target state is required")
        if not isinstance(self.probe, StateProbe):
            object.__setattr__(self, "probe", FunctionProbe(self.probe))
        pending = self.pending
        if isinstance(pending, str):
            pending = (pending,)
        object.__setattr__(self, "pending", frozenset(pending))

    @property
    def cancelled(self) -> bool:
        return self.cancel_token is not None and self.cancel_token.cancelled


def _pause(seconds: int, cancel_token: Optional[CancellationToken]) -> None:
    if cancel_token is None:
        time.sleep(seconds)
    else:
        cancel_token.wait(seconds)


def wait_for_state(conf: StateChangeConf, policy: Optional[WaitPolicy] = None):
    """
    Watch a resource until it reaches `conf.target`.

    Args:
        conf: Target state, allowed pending states, probe and optional cancel token
        policy: Polling interval and timeout (default: resolved from the environment)

    Returns:
        The resource object reported by the final successful poll

    Raises:
        ResourceNotFoundError: The resource stayed missing past policy.max_ticks polls
        WaitInterruptedError: The cancel token was set before the target was reached
        UnexpectedStateError: The resource reported a state outside target and pending
        Exception: Any error the probe raised or reported, unchanged
    """
    if policy is None:
        policy = WaitSettings.from_env().policy()
    interval = policy.poll_interval
    max_ticks = policy.max_ticks
    not_found_ticks = 0

    logging.info("Waiting for state to become: %s", conf.target)

    while True:
        result: ProbeResult = conf.probe.poll()
        if result.error is not None:
            raise result.error

        if not result.found:
            # Keep polling until the resource has been missing for too long.
            not_found_ticks += 1
            logging.debug("Resource not found (%d/%d)", not_found_ticks, max_ticks)
            if not_found_ticks > max_ticks:
                raise ResourceNotFoundError()
            if conf.cancelled:
                raise WaitInterruptedError()
        else:
            not_found_ticks = 0
            logging.debug("Current state: %s (waiting for %s)", result.state, conf.target)

            if result.state == conf.target:
                return result.resource

            if conf.cancelled:
                raise WaitInterruptedError()

            if result.state not in conf.pending:
                raise UnexpectedStateError(result.state, conf.target)

        _pause(interval, conf.cancel_token)
