"""In-memory employee roster (challenge 3)."""

from .domain import Employee
from .services import Manager

__all__ = ["Employee", "Manager"]
