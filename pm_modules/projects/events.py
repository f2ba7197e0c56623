"""
Project management notifications.

One frozen dataclass per kind of change, each tagged with its ``EventKind``
and carrying the entity that changed.  Published through the kernel event
dispatcher after the mutation is stored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from pm_modules.projects.models import Project, ProjectAssignment, Task


class EventKind(str, Enum):
    PROJECT_CREATED = "project.created"
    TASK_CREATED = "task.created"
    TASK_PROGRESS_UPDATED = "task.progress_updated"
    EMPLOYEE_ASSIGNED_TO_PROJECT = "project.employee_assigned"


@dataclass(frozen=True)
class ProjectCreated:
    project: Project
    occurred_at: datetime
    kind: EventKind = field(default=EventKind.PROJECT_CREATED, init=False)


@dataclass(frozen=True)
class TaskCreated:
    task: Task
    occurred_at: datetime
    kind: EventKind = field(default=EventKind.TASK_CREATED, init=False)


@dataclass(frozen=True)
class TaskProgressUpdated:
    task: Task
    occurred_at: datetime
    kind: EventKind = field(default=EventKind.TASK_PROGRESS_UPDATED, init=False)


@dataclass(frozen=True)
class EmployeeAssignedToProject:
    assignment: ProjectAssignment
    occurred_at: datetime
    kind: EventKind = field(default=EventKind.EMPLOYEE_ASSIGNED_TO_PROJECT, init=False)

    @property
    def project_id(self) -> str:
        return self.assignment.project_id

    @property
    def employee_id(self) -> str:
        return self.assignment.employee_id

    @property
    def role(self) -> str:
        return self.assignment.role


ProjectManagementEvent = (
    ProjectCreated | TaskCreated | TaskProgressUpdated | EmployeeAssignedToProject
)
