from __future__ import annotations


class ContextError(Exception):
    # Base for cancellation reasons. Runner operations return these, they do not raise them.
    pass


class Cancelled(ContextError):
    def __init__(self, message: str = "context canceled") -> None:
        super().__init__(message)


class DeadlineExceeded(ContextError, TimeoutError):
    def __init__(self, message: str = "context deadline exceeded") -> None:
        super().__init__(message)
