from .context_manager import ContextManager, SimpleContextManager, TaskFn, new_context_manager
from .work import process_items, simulate_work

__all__ = [
    "ContextManager",
    "SimpleContextManager",
    "TaskFn",
    "new_context_manager",
    "process_items",
    "simulate_work",
]
