"""
Read-side queries for the Project Management module.

``ProjectSelector`` rehydrates entities from stored rows on every call and
never caches them.  It issues only SELECT statements through the kernel
``SqlGateway`` and never writes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy import BigInteger, ColumnElement, cast, func, or_, select

from pm_kernel.db.gateway import SqlGateway
from pm_kernel.models.employee import EmployeeModel
from pm_modules.projects.config import ProjectConfig
from pm_modules.projects.exceptions import ProjectManagementError
from pm_modules.projects.models import Project, Task
from pm_modules.projects.orm import (
    ProjectAssignmentModel,
    ProjectModel,
    ProjectTaskModel,
)

_ZERO = Decimal("0")
_DIGITS = r"^[0-9]+$"

projects = ProjectModel.__table__
project_tasks = ProjectTaskModel.__table__
project_assignments = ProjectAssignmentModel.__table__
employees = EmployeeModel.__table__


@dataclass(frozen=True)
class TeamMember:
    """One row of a project's current team roster."""

    project_id: str
    employee_id: str
    role: str
    start_date: date
    end_date: date | None
    allocation_percentage: Decimal
    first_name: str
    last_name: str
    email: str | None
    job_title: str | None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


def _decimal(value: Any) -> Decimal:
    if value is None:
        return _ZERO
    return value if isinstance(value, Decimal) else Decimal(str(value))


class ProjectSelector:
    """Read-only access to projects, tasks and team rosters."""

    def __init__(self, gateway: SqlGateway, config: ProjectConfig | None = None):
        self._db = gateway
        self._config = config or ProjectConfig()

    # -------------------------------------------------------------------------
    # Row mapping
    # -------------------------------------------------------------------------

    def _to_project(self, row: dict[str, Any]) -> Project:
        return Project(
            project_id=row["project_id"],
            name=row["name"],
            description=row["description"] or "",
            start_date=row["start_date"],
            project_manager=row["project_manager"],
            end_date=row["end_date"],
            budget=_decimal(row["budget"]),
            customer_id=row["customer_id"] or "",
            priority=row["priority"] or self._config.default_project_priority,
            status=row["status"] or self._config.default_project_status,
        )

    def _to_task(self, row: dict[str, Any]) -> Task:
        return Task(
            task_id=row["task_id"],
            project_id=row["project_id"],
            name=row["name"],
            description=row["description"] or "",
            assigned_to=row["assigned_to"] or None,
            parent_task_id=row["parent_task_id"] or None,
            start_date=row["start_date"],
            end_date=row["end_date"],
            estimated_hours=_decimal(row["estimated_hours"]),
            actual_hours=_decimal(row["actual_hours"]),
            progress=_decimal(row["progress"]),
            priority=row["priority"] or self._config.default_task_priority,
            status=row["status"] or self._config.default_task_status,
        )

    def _max_numeric(self, column: ColumnElement[str]) -> int:
        # non-numeric IDs are skipped
        row = self._db.fetch_one(
            select(func.max(cast(column, BigInteger)).label("max_id")).where(
                column.regexp_match(_DIGITS)
            )
        )
        return int(row["max_id"] or 0)

    # -------------------------------------------------------------------------
    # Projects
    # -------------------------------------------------------------------------

    def find_project(self, project_id: str) -> Project | None:
        row = self._db.fetch_one(
            select(projects).where(projects.c.project_id == project_id)
        )
        return self._to_project(row) if row is not None else None

    def get_project(self, project_id: str) -> Project:
        """
        Raises:
            ProjectManagementError: If the project doesn't exist.
        """
        project = self.find_project(project_id)
        if project is None:
            raise ProjectManagementError(f"Project {project_id} not found")
        return project

    def max_project_number(self) -> int:
        """Highest numeric project ID stored, 0 when there are none."""
        return self._max_numeric(projects.c.project_id)

    # -------------------------------------------------------------------------
    # Tasks
    # -------------------------------------------------------------------------

    def find_task(self, task_id: str) -> Task | None:
        row = self._db.fetch_one(
            select(project_tasks).where(project_tasks.c.task_id == task_id)
        )
        return self._to_task(row) if row is not None else None

    def get_task(self, task_id: str) -> Task:
        """
        Raises:
            ProjectManagementError: If the task doesn't exist.
        """
        task = self.find_task(task_id)
        if task is None:
            raise ProjectManagementError(f"Task {task_id} not found")
        return task

    def get_project_tasks(self, project_id: str) -> list[Task]:
        """All tasks of a project grouped by parent (root tasks first), then by ID."""
        rows = self._db.fetch_all(
            select(project_tasks)
            .where(project_tasks.c.project_id == project_id)
            .order_by(
                project_tasks.c.parent_task_id.asc().nulls_first(),
                project_tasks.c.task_id,
            )
        )
        return [self._to_task(row) for row in rows]

    def max_task_number(self) -> int:
        """Highest numeric task ID stored, 0 when there are none."""
        return self._max_numeric(project_tasks.c.task_id)

    # -------------------------------------------------------------------------
    # Assignments
    # -------------------------------------------------------------------------

    def count_active_assignments(
        self, project_id: str, employee_id: str, as_of: date
    ) -> int:
        """Assignments of the employee to the project not yet ended on ``as_of``."""
        row = self._db.fetch_one(
            select(func.count().label("count"))
            .select_from(project_assignments)
            .where(
                project_assignments.c.employee_id == employee_id,
                project_assignments.c.project_id == project_id,
                or_(
                    project_assignments.c.end_date.is_(None),
                    project_assignments.c.end_date >= as_of,
                ),
            )
        )
        return int(row["count"])

    def get_project_team(self, project_id: str, as_of: date) -> list[TeamMember]:
        """Current team roster ordered by last name, then first name."""
        pa = project_assignments
        rows = self._db.fetch_all(
            select(
                pa.c.project_id,
                pa.c.employee_id,
                pa.c.role,
                pa.c.start_date,
                pa.c.end_date,
                pa.c.allocation_percentage,
                employees.c.first_name,
                employees.c.last_name,
                employees.c.email,
                employees.c.job_title,
            )
            .join(employees, pa.c.employee_id == employees.c.employee_id)
            .where(
                pa.c.project_id == project_id,
                or_(pa.c.end_date.is_(None), pa.c.end_date >= as_of),
            )
            .order_by(employees.c.last_name, employees.c.first_name)
        )
        return [
            TeamMember(
                project_id=row["project_id"],
                employee_id=row["employee_id"],
                role=row["role"],
                start_date=row["start_date"],
                end_date=row["end_date"],
                allocation_percentage=_decimal(row["allocation_percentage"]),
                first_name=row["first_name"],
                last_name=row["last_name"],
                email=row["email"],
                job_title=row["job_title"],
            )
            for row in rows
        ]
