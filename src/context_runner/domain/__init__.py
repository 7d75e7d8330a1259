from .context import (
    CancelFunc,
    Context,
    ContextState,
    background,
    with_cancel,
    with_deadline,
    with_timeout,
    with_value,
)
from .errors import Cancelled, ContextError, DeadlineExceeded

# Public domain exports keep imports explicit across layers.
__all__ = [
    "CancelFunc",
    "Cancelled",
    "Context",
    "ContextError",
    "ContextState",
    "DeadlineExceeded",
    "background",
    "with_cancel",
    "with_deadline",
    "with_timeout",
    "with_value",
]
