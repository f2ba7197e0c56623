"""
Project Management Module Service (``pm_modules.projects.service``).

Responsibility
--------------
Orchestrates project bookkeeping: creating projects and tasks, assigning
employees to projects, tracking task progress, and reading projects, tasks
and team rosters back.  Each mutating operation validates its request,
resolves references, allocates an identity, writes one row, and publishes
a notification.

Architecture position
---------------------
**Modules layer** -- ``ProjectService`` is the sole public entry point.
Reads are delegated to ``ProjectSelector``; writes go through the kernel
``SqlGateway``; identities come from the kernel ``SequenceService``;
employee references are resolved through an ``EmployeeDirectory``.

Invariants enforced
-------------------
* Project and task IDs are decimal integer strings, strictly increasing
  and never reused (locked counter row, seeded from the stored maximum).
* An employee holds at most one assignment per project whose end date is
  absent or not yet past.  This is a read-then-insert check and is not
  protected against two concurrent assignments of the same employee.
* Transaction boundary: with ``auto_commit=True`` each mutating method
  commits after its write and rolls back on failure; with
  ``auto_commit=False`` the caller owns commit/rollback.

Failure modes
-------------
* Validation, unresolved reference or a duplicate assignment key
  -> ``ProjectManagementError``.
* Database error  -> ``SQLAlchemyError`` propagates after rollback.
* Notifications are published after the commit.  A crash between the
  commit and the publish loses the notification; the row stays.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy import insert, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pm_kernel.db.gateway import SqlGateway
from pm_kernel.domain.clock import Clock, SystemClock
from pm_kernel.events import EventDispatcher
from pm_kernel.exceptions import EmployeeNotFoundError
from pm_kernel.logging_config import LogContext, get_logger
from pm_kernel.services.employee_service import EmployeeDirectory, EmployeeInfo
from pm_kernel.services.sequence_service import SequenceService
from pm_modules.projects.config import ProjectConfig
from pm_modules.projects.events import (
    EmployeeAssignedToProject,
    ProjectCreated,
    TaskCreated,
    TaskProgressUpdated,
)
from pm_modules.projects.exceptions import ProjectManagementError
from pm_modules.projects.models import Project, ProjectAssignment, Task
from pm_modules.projects.orm import (
    ProjectAssignmentModel,
    ProjectModel,
    ProjectTaskModel,
)
from pm_modules.projects.requests import (
    AssignmentRequest,
    CreateProjectRequest,
    CreateTaskRequest,
    coerce_request,
    parse_decimal,
)
from pm_modules.projects.selectors import ProjectSelector, TeamMember

logger = get_logger("modules.projects.service")

_ZERO = Decimal("0")


def _field(data: Any, camel: str, snake: str) -> Any:
    """Best-effort lookup of a payload field for log lines."""
    if isinstance(data, Mapping):
        return data.get(camel, data.get(snake))
    return getattr(data, snake, None)


class ProjectService:
    """
    Create/read/update orchestration for projects, tasks and assignments.

    Contract
    --------
    * Mutating methods accept either a request struct or a mapping with
      the host payload keys, and return the entity they stored.
    * Read methods return freshly rehydrated entities (or ``TeamMember``
      rows for the roster) and never mutate.

    Non-goals
    ---------
    * No retries, no compensation: any failure propagates to the caller.
    * No cycle detection in the task hierarchy.
    """

    def __init__(
        self,
        session: Session,
        employee_directory: EmployeeDirectory,
        event_dispatcher: EventDispatcher,
        clock: Clock | None = None,
        config: ProjectConfig | None = None,
        auto_commit: bool = True,
    ):
        self._db = SqlGateway(session)
        self._employees = employee_directory
        self._events = event_dispatcher
        self._clock = clock or SystemClock()
        self._config = config or ProjectConfig()
        self._auto_commit = auto_commit
        self._sequences = SequenceService(session)
        self._selector = ProjectSelector(self._db, self._config)

    # =========================================================================
    # Transaction helpers
    # =========================================================================

    def _commit(self) -> None:
        if self._auto_commit:
            self._db.commit()
        else:
            self._db.flush()

    def _rollback(self) -> None:
        if self._auto_commit:
            self._db.rollback()

    def _require_employee(self, employee_id: str) -> EmployeeInfo:
        try:
            return self._employees.get_employee(employee_id)
        except EmployeeNotFoundError as exc:
            raise ProjectManagementError(f"Employee {employee_id} not found", exc) from exc

    # =========================================================================
    # Projects
    # =========================================================================

    def create_project(self, data: CreateProjectRequest | Mapping[str, Any]) -> Project:
        """Validate, store and announce a new project."""
        logger.info(
            "project_create_started",
            extra={"project_name": _field(data, "name", "name")},
        )
        try:
            request = coerce_request(data, CreateProjectRequest)
            self._require_employee(request.project_manager)

            project_id = str(
                self._sequences.next_value(
                    SequenceService.PROJECT,
                    seed_from=self._selector.max_project_number,
                )
            )
            project = Project(
                project_id=project_id,
                name=request.name,
                description=request.description,
                start_date=request.start_date,
                project_manager=request.project_manager,
                end_date=request.end_date,
                budget=request.budget if request.budget is not None else _ZERO,
                customer_id=request.customer_id or "",
                priority=request.priority or self._config.default_project_priority,
                status=request.status or self._config.default_project_status,
            )
            with LogContext.bind(project_id=project_id):
                self._db.execute_write(
                    insert(ProjectModel.__table__).values(
                        project_id=project.project_id,
                        name=project.name,
                        description=project.description,
                        start_date=project.start_date,
                        end_date=project.end_date,
                        budget=project.budget,
                        customer_id=project.customer_id,
                        project_manager=project.project_manager,
                        priority=project.priority,
                        status=project.status,
                    )
                )
                self._commit()
        except Exception:
            self._rollback()
            raise

        with LogContext.bind(project_id=project_id):
            self._events.publish(ProjectCreated(project=project, occurred_at=self._clock.now()))
            logger.info("project_created")
        return project

    def get_project(self, project_id: str) -> Project:
        """Raises ``ProjectManagementError`` when the project doesn't exist."""
        return self._selector.get_project(project_id)

    def get_project_team(self, project_id: str) -> list[TeamMember]:
        """Employees whose assignment has not ended, by last then first name."""
        return self._selector.get_project_team(project_id, self._clock.today())

    # =========================================================================
    # Tasks
    # =========================================================================

    def create_task(self, data: CreateTaskRequest | Mapping[str, Any]) -> Task:
        """Validate, store and announce a new task."""
        with LogContext.bind(project_id=_field(data, "projectId", "project_id")):
            logger.info("task_create_started", extra={"task_name": _field(data, "name", "name")})
            try:
                request = coerce_request(data, CreateTaskRequest)
                self._selector.get_project(request.project_id)
                if request.assigned_to:
                    self._require_employee(request.assigned_to)
                if request.parent_task_id:
                    self._selector.get_task(request.parent_task_id)

                task_id = str(
                    self._sequences.next_value(
                        SequenceService.PROJECT_TASK,
                        seed_from=self._selector.max_task_number,
                    )
                )
                task = Task(
                    task_id=task_id,
                    project_id=request.project_id,
                    name=request.name,
                    description=request.description,
                    assigned_to=request.assigned_to,
                    parent_task_id=request.parent_task_id,
                    start_date=request.start_date,
                    end_date=request.end_date,
                    estimated_hours=(
                        request.estimated_hours if request.estimated_hours is not None else _ZERO
                    ),
                    priority=request.priority or self._config.default_task_priority,
                    status=request.status or self._config.default_task_status,
                )
                with LogContext.bind(task_id=task_id):
                    self._db.execute_write(
                        insert(ProjectTaskModel.__table__).values(
                            task_id=task.task_id,
                            project_id=task.project_id,
                            parent_task_id=task.parent_task_id,
                            name=task.name,
                            description=task.description,
                            assigned_to=task.assigned_to,
                            start_date=task.start_date,
                            end_date=task.end_date,
                            estimated_hours=task.estimated_hours,
                            actual_hours=task.actual_hours,
                            progress=task.progress,
                            priority=task.priority,
                            status=task.status,
                        )
                    )
                    self._commit()
            except Exception:
                self._rollback()
                raise

            with LogContext.bind(task_id=task_id):
                self._events.publish(TaskCreated(task=task, occurred_at=self._clock.now()))
                logger.info("task_created")
        return task

    def get_task(self, task_id: str) -> Task:
        """Raises ``ProjectManagementError`` when the task doesn't exist."""
        return self._selector.get_task(task_id)

    def get_project_tasks(self, project_id: str) -> list[Task]:
        """Tasks grouped by parent, then ordered by ID; tree-building is up to the caller."""
        return self._selector.get_project_tasks(project_id)

    def update_task_progress(
        self,
        task_id: str,
        progress: Decimal | float | int | str,
        status: str,
        actual_hours: Decimal | float | int | str | None = None,
    ) -> Task:
        """
        Set a task's progress (clamped to [0, 100]) and status.

        ``actual_hours`` replaces the stored hours when given; otherwise the
        stored value is written back unchanged.
        """
        with LogContext.bind(task_id=task_id):
            logger.info(
                "task_progress_update_started",
                extra={"progress": progress, "status": status},
            )
            try:
                amount = parse_decimal(progress, "progress")
                if amount is None:
                    raise ProjectManagementError("Progress is required")
                hours = parse_decimal(actual_hours, "actual hours")
                if hours is not None and hours < _ZERO:
                    raise ProjectManagementError("Actual hours cannot be negative")

                task = self._selector.get_task(task_id)
                task.progress = amount
                task.status = status
                if hours is not None:
                    task.actual_hours = hours

                with LogContext.bind(project_id=task.project_id):
                    self._db.execute_write(
                        update(ProjectTaskModel.__table__)
                        .where(ProjectTaskModel.__table__.c.task_id == task.task_id)
                        .values(
                            progress=task.progress,
                            status=task.status,
                            actual_hours=task.actual_hours,
                        )
                    )
                    self._commit()
            except Exception:
                self._rollback()
                raise

            with LogContext.bind(project_id=task.project_id):
                self._events.publish(
                    TaskProgressUpdated(task=task, occurred_at=self._clock.now())
                )
                logger.info(
                    "task_progress_updated",
                    extra={"progress": task.progress, "status": task.status},
                )
        return task

    # =========================================================================
    # Assignments
    # =========================================================================

    def assign_employee_to_project(
        self,
        project_id: str,
        employee_id: str,
        data: AssignmentRequest | Mapping[str, Any] | None = None,
    ) -> ProjectAssignment:
        """
        Assign an employee to a project.

        Fails when the employee already has an assignment to the project
        that has not ended; expired assignments do not block a new one.
        The start date defaults to today and the end date may not precede
        it.  A second assignment starting on the same day as an earlier one
        is rejected as a duplicate.
        """
        with LogContext.bind(project_id=project_id):
            logger.info("employee_assignment_started", extra={"employee_id": employee_id})
            try:
                request = coerce_request(data, AssignmentRequest)
                self._selector.get_project(project_id)
                self._require_employee(employee_id)

                today = self._clock.today()
                if self._selector.count_active_assignments(project_id, employee_id, today) > 0:
                    raise ProjectManagementError("Employee is already assigned to this project")

                start_date = request.start_date or today
                if request.end_date is not None and request.end_date < start_date:
                    raise ProjectManagementError("End date cannot be before start date")

                assignment = ProjectAssignment(
                    project_id=project_id,
                    employee_id=employee_id,
                    start_date=start_date,
                    role=request.role or self._config.default_assignment_role,
                    end_date=request.end_date,
                    allocation_percentage=(
                        request.allocation_percentage
                        if request.allocation_percentage is not None
                        else self._config.default_allocation_percentage
                    ),
                )
                try:
                    self._db.execute_write(
                        insert(ProjectAssignmentModel.__table__).values(
                            project_id=assignment.project_id,
                            employee_id=assignment.employee_id,
                            role=assignment.role,
                            start_date=assignment.start_date,
                            end_date=assignment.end_date,
                            allocation_percentage=assignment.allocation_percentage,
                        )
                    )
                except IntegrityError as exc:
                    raise ProjectManagementError(
                        f"Employee is already assigned to this project from {start_date}",
                        exc,
                    ) from exc
                self._commit()
            except Exception:
                self._rollback()
                raise

            self._events.publish(
                EmployeeAssignedToProject(assignment=assignment, occurred_at=self._clock.now())
            )
            logger.info(
                "employee_assigned",
                extra={"employee_id": employee_id, "role": assignment.role},
            )
        return assignment

    def is_employee_assigned(
        self, project_id: str, employee_id: str, as_of: date | None = None
    ) -> bool:
        """True when the employee has an assignment to the project not ended on ``as_of``."""
        day = as_of or self._clock.today()
        return self._selector.count_active_assignments(project_id, employee_id, day) > 0
