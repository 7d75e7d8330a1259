from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Employee:
    # Mutable on purpose: Manager.find_employee_by_id hands out the live record.
    id: int
    name: str
    age: int
    salary: float
