"""
Polling interval and timeout policy for state waits.

Some AWS operations, like copying an AMI to a distant region, take a very
long time, and parallel builds polling every 2 seconds can exceed API request
limits. Both values are therefore overridable:

    AWS_POLL_DELAY_SECONDS  polling delay (default 2)
    AWS_TIMEOUT_SECONDS     overall timeout (default 300)

WaitSettings reads the overrides once; WaitPolicy is a pure value built from
them.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .common.aws_client_factory import resolve_env_path

DEFAULT_POLL_INTERVAL_SECONDS = 2
DEFAULT_TIMEOUT_SECONDS = 300

POLL_DELAY_ENV_VAR = "AWS_POLL_DELAY_SECONDS"
TIMEOUT_ENV_VAR = "AWS_TIMEOUT_SECONDS"


def _parse_positive_int(raw: Optional[str]) -> Optional[int]:
    """Return `raw` as a positive int, or None if it is not one."""
    try:
        value = int(raw.strip())
    except (AttributeError, ValueError):
        return None
    if value <= 0:
        return None
    return value


def _resolve_seconds(raw: Optional[str], default: int, label: str) -> int:
    if raw is None or raw == "":
        return default
    value = _parse_positive_int(raw)
    if value is None:
        logging.warning("Invalid %s seconds '%s', using default", label, raw)
        return default
    return value


def resolve_poll_interval(raw: Optional[str]) -> int:
    """Resolve a polling-delay override, falling back to 2 seconds."""
    return _resolve_seconds(raw, DEFAULT_POLL_INTERVAL_SECONDS, "sleep")


def resolve_timeout(raw: Optional[str]) -> int:
    """Resolve a timeout override, falling back to 300 seconds."""
    return _resolve_seconds(raw, DEFAULT_TIMEOUT_SECONDS, "timeout")


@dataclass(frozen=True)
class WaitPolicy:
    """Pacing parameters for one wait, in whole seconds."""

    poll_interval: int = DEFAULT_POLL_INTERVAL_SECONDS
    timeout: int = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self):
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    @property
    def max_attempts(self) -> int:
        """Attempt count for SDK waiters, which take attempts instead of a timeout."""
        return self.timeout // self.poll_interval

    @property
    def max_ticks(self) -> int:
        """Consecutive not-found polls tolerated by wait_for_state.

        One extra tick allows a final poll past the timeout boundary.
        """
        return self.timeout // self.poll_interval + 1


@dataclass(frozen=True)
class WaitSettings:
    """Raw, unvalidated overrides for the polling delay and timeout."""

    poll_interval: Optional[str] = None
    timeout: Optional[str] = None

    @classmethod
    def from_env(cls, env_path: Optional[str] = None) -> "WaitSettings":
        """Read overrides from the process environment and an optional .env file.

        Variables already present in the environment win over the .env file.
        """
        load_dotenv(resolve_env_path(env_path), override=False)
        return cls(
            poll_interval=os.getenv(POLL_DELAY_ENV_VAR),
            timeout=os.getenv(TIMEOUT_ENV_VAR),
        )

    def policy(self) -> WaitPolicy:
        """Resolve both overrides into a WaitPolicy. Never raises on bad input."""
        poll_interval = resolve_poll_interval(self.poll_interval)
        timeout = resolve_timeout(self.timeout)
        logging.info(
            "Using %ds as polling delay (change with %s)", poll_interval, POLL_DELAY_ENV_VAR
        )
        logging.info("Allowing %ds to complete (change with %s)", timeout, TIMEOUT_ENV_VAR)
        return WaitPolicy(poll_interval=poll_interval, timeout=timeout)
