"""
EC2 state-change waiter.

Block a workflow until a slow-to-converge EC2 resource reaches a target
state, stays missing for too long, or the wait is cancelled.
"""

from .cancellation import CancellationToken, install_sigint_handler
from .errors import (
    ResourceNotFoundError,
    StateWaitError,
    UnexpectedStateError,
    WaitInterruptedError,
)
from .probes import (
    AmiProbe,
    FunctionProbe,
    ImportImageTaskProbe,
    InstanceProbe,
    ProbeResult,
    SpotRequestProbe,
    StateProbe,
    VolumeProbe,
)
from .state_change import StateChangeConf, wait_for_state
from .wait_policy import WaitPolicy, WaitSettings, resolve_poll_interval, resolve_timeout

__all__ = [
    "AmiProbe",
    "CancellationToken",
    "FunctionProbe",
    "ImportImageTaskProbe",
    "InstanceProbe",
    "ProbeResult",
    "ResourceNotFoundError",
    "SpotRequestProbe",
    "StateChangeConf",
    "StateProbe",
    "StateWaitError",
    "UnexpectedStateError",
    "VolumeProbe",
    "WaitInterruptedError",
    "WaitPolicy",
    "WaitSettings",
    "install_sigint_handler",
    "resolve_poll_interval",
    "resolve_timeout",
    "wait_for_state",
]
