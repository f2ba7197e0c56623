"""
Service layer for the employee directory.

Resolves employee references for project managers, task owners and
project assignments.  Returns EmployeeInfo DTOs instead of ORM entities.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from pm_kernel.exceptions import EmployeeNotFoundError
from pm_kernel.logging_config import get_logger
from pm_kernel.models.employee import EmployeeModel

logger = get_logger("services.employee")


@dataclass(frozen=True)
class EmployeeInfo:
    """Immutable DTO for employee data."""

    employee_id: str
    first_name: str
    last_name: str
    email: str | None
    job_title: str | None
    is_active: bool

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class EmployeeDirectory(Protocol):
    """What module services need from the employee directory."""

    def get_employee(self, employee_id: str) -> EmployeeInfo:
        """Return the employee or raise EmployeeNotFoundError."""
        ...


class EmployeeService:
    """
    Employee directory backed by the host ``employees`` table.

    Flushes within the caller's transaction; never commits.
    """

    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, employee: EmployeeModel) -> EmployeeInfo:
        return EmployeeInfo(
            employee_id=employee.employee_id,
            first_name=employee.first_name,
            last_name=employee.last_name,
            email=employee.email,
            job_title=employee.job_title,
            is_active=employee.is_active,
        )

    def get_employee(self, employee_id: str) -> EmployeeInfo:
        """
        Get employee by ID.

        Raises:
            EmployeeNotFoundError: If the employee doesn't exist.
        """
        employee = self.session.get(EmployeeModel, employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return self._to_dto(employee)

    def find_employee(self, employee_id: str) -> EmployeeInfo | None:
        """Get employee by ID, returning None if not found."""
        employee = self.session.get(EmployeeModel, employee_id)
        return self._to_dto(employee) if employee is not None else None

    def list_employees(self, active_only: bool = True) -> list[EmployeeInfo]:
        """List employees ordered by last name, then first name."""
        stmt = select(EmployeeModel).order_by(
            EmployeeModel.last_name, EmployeeModel.first_name
        )
        if active_only:
            stmt = stmt.where(EmployeeModel.is_active.is_(True))
        return [self._to_dto(e) for e in self.session.execute(stmt).scalars()]

    def create_employee(
        self,
        employee_id: str,
        first_name: str,
        last_name: str,
        email: str | None = None,
        job_title: str | None = None,
        is_active: bool = True,
    ) -> EmployeeInfo:
        """Register an employee in the directory."""
        employee = EmployeeModel(
            employee_id=employee_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            job_title=job_title,
            is_active=is_active,
        )
        self.session.add(employee)
        self.session.flush()
        logger.info("employee_created", extra={"employee_id": employee_id})
        return self._to_dto(employee)
