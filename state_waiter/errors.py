"""Exceptions raised by the state-change poll driver."""


class StateWaitError(Exception):
    """Base class for terminal failures detected by the poll driver."""


class ResourceNotFoundError(StateWaitError):
    """The watched resource never materialized within the not-found budget."""

    def __init__(self, message: str = "couldn't find resource"):
        super().__init__(message)


class WaitInterruptedError(StateWaitError):
    """Cancellation was observed before the resource reached its target."""

    def __init__(self, message: str = "interrupted"):
        super().__init__(message)


class UnexpectedStateError(StateWaitError):
    """The resource reported a state outside the target and pending set."""

    def __init__(self, state: str, target: str):
        self.state = state
        self.target = target
        super().__init__(f"unexpected state '{state}', wanted target '{target}'")
