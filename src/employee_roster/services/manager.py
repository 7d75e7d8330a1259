from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from challenge_kit.observability.logging import debug
from challenge_kit.observability.sinks import LogSink, NullLogSink
from employee_roster.domain.employee import Employee


@dataclass
class Manager:
    """Owns an ordered list of employees.

    Ids are not unique: inserts never check them, and removal/lookup only
    touch the first record with a matching id.
    """

    employees: list[Employee] = field(default_factory=list)
    log_sink: LogSink = field(default_factory=NullLogSink, repr=False, compare=False)

    def add_employee(self, employee: Employee) -> None:
        self.employees.append(employee)
        self.log_sink.emit(debug("employee added", id=employee.id, size=len(self.employees)))

    def remove_employee(self, employee_id: int) -> None:
        # Absent ids are a silent no-op.
        index = self._index_of(employee_id)
        if index is None:
            return
        del self.employees[index]
        self.log_sink.emit(debug("employee removed", id=employee_id, size=len(self.employees)))

    def get_average_salary(self) -> float:
        if not self.employees:
            return 0.0
        return sum(employee.salary for employee in self.employees) / len(self.employees)

    def find_employee_by_id(self, employee_id: int) -> Employee | None:
        """Return the live record for ``employee_id`` or None.

        The returned object is the one stored in the roster; do not hold on to
        it across removals if you rely on it still being present.
        """
        index = self._index_of(employee_id)
        if index is None:
            return None
        return self.employees[index]

    def _index_of(self, employee_id: int) -> int | None:
        for index, employee in enumerate(self.employees):
            if employee.id == employee_id:
                return index
        return None

    def __len__(self) -> int:
        return len(self.employees)

    def __iter__(self) -> Iterator[Employee]:
        return iter(self.employees)
