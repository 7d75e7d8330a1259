"""Cancellation contexts and a context-aware task runner (challenge 30)."""

from .domain import (
    Cancelled,
    Context,
    ContextError,
    DeadlineExceeded,
    background,
    with_cancel,
    with_timeout,
    with_value,
)
from .services import (
    ContextManager,
    SimpleContextManager,
    new_context_manager,
    process_items,
    simulate_work,
)

__all__ = [
    "Cancelled",
    "Context",
    "ContextError",
    "ContextManager",
    "DeadlineExceeded",
    "SimpleContextManager",
    "background",
    "new_context_manager",
    "process_items",
    "simulate_work",
    "with_cancel",
    "with_timeout",
    "with_value",
]
