"""
SQLAlchemy table definitions for the Project Management module.

Responsibility
--------------
Declare the three tables the module owns: ``projects``, ``project_tasks``
and ``project_assignments``.  ``ProjectService`` and ``ProjectSelector``
issue Core statements against ``Model.__table__``; rows are mapped to the
entities in ``pm_modules.projects.models`` by the selector, not by the ORM.

Invariants enforced
-------------------
* Identities are decimal integer strings allocated by ``SequenceService``.
* Optional descriptive columns are nullable; readers apply configured
  defaults (budget 0, priority "Medium", status "Planning"/"Not Started").
* ``project_tasks.parent_task_id`` is a nullable self-reference; no cycle
  check exists at any layer.
* ``project_assignments`` is keyed by (project_id, employee_id, start_date)
  so expired assignments remain as history next to a newer active one.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from pm_kernel.db.base import Base


class ProjectModel(Base):
    """One row per project."""

    __tablename__ = "projects"

    __table_args__ = (
        Index("idx_projects_manager", "project_manager"),
        Index("idx_projects_status", "status"),
    )

    project_id: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[date] = mapped_column(nullable=False)
    end_date: Mapped[date | None] = mapped_column(nullable=True)
    budget: Mapped[Decimal | None] = mapped_column(nullable=True, default=Decimal("0"))
    customer_id: Mapped[str | None] = mapped_column(String(50), nullable=True)
    project_manager: Mapped[str] = mapped_column(String(50), nullable=False)
    priority: Mapped[str | None] = mapped_column(String(50), nullable=True)
    status: Mapped[str | None] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        return f"<ProjectModel {self.project_id} {self.name} [{self.status}]>"


class ProjectTaskModel(Base):
    """One row per task; hierarchy through ``parent_task_id``."""

    __tablename__ = "project_tasks"

    __table_args__ = (
        Index("idx_project_tasks_project", "project_id", "parent_task_id"),
        Index("idx_project_tasks_assignee", "assigned_to"),
    )

    task_id: Mapped[str] = mapped_column(String(50), primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String(50), ForeignKey("projects.project_id"), nullable=False
    )
    parent_task_id: Mapped[str | None] = mapped_column(
        String(50), ForeignKey("project_tasks.task_id"), nullable=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    assigned_to: Mapped[str | None] = mapped_column(String(50), nullable=True)
    start_date: Mapped[date | None] = mapped_column(nullable=True)
    end_date: Mapped[date | None] = mapped_column(nullable=True)
    estimated_hours: Mapped[Decimal | None] = mapped_column(nullable=True)
    actual_hours: Mapped[Decimal | None] = mapped_column(nullable=True)
    progress: Mapped[Decimal | None] = mapped_column(nullable=True)
    priority: Mapped[str | None] = mapped_column(String(50), nullable=True)
    status: Mapped[str | None] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        return f"<ProjectTaskModel {self.task_id} {self.name} [{self.status}]>"


class ProjectAssignmentModel(Base):
    """An employee's assignment to a project over a date range."""

    __tablename__ = "project_assignments"

    __table_args__ = (
        Index("idx_project_assignments_employee", "employee_id", "project_id"),
    )

    project_id: Mapped[str] = mapped_column(
        String(50), ForeignKey("projects.project_id"), primary_key=True
    )
    employee_id: Mapped[str] = mapped_column(
        String(50), ForeignKey("employees.employee_id"), primary_key=True
    )
    start_date: Mapped[date] = mapped_column(primary_key=True)
    role: Mapped[str] = mapped_column(String(100), nullable=False)
    end_date: Mapped[date | None] = mapped_column(nullable=True)
    allocation_percentage: Mapped[Decimal] = mapped_column(nullable=False)

    def __repr__(self) -> str:
        return (
            f"<ProjectAssignmentModel {self.project_id}/{self.employee_id} "
            f"from {self.start_date}>"
        )
