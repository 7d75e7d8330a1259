from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from challenge_kit.config.models import LoggingConfig
from employee_roster.domain.employee import Employee


class EmployeeDecl(BaseModel):
    # One roster entry as declared in YAML.
    model_config = ConfigDict(extra="forbid")
    id: int
    name: str
    age: int
    salary: float

    def to_employee(self) -> Employee:
        return Employee(id=self.id, name=self.name, age=self.age, salary=self.salary)


class RosterConfig(BaseModel):
    # Demo scenario: seed employees, remove some ids, then look one up.
    model_config = ConfigDict(extra="forbid")
    version: int = 1
    employees: list[EmployeeDecl] = Field(default_factory=list)
    remove: list[int] = Field(default_factory=list)
    find: int | None = None
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
