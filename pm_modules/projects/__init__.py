"""
Project Management Module (``pm_modules.projects``).

Responsibility
--------------
Project/task/resource-assignment bookkeeping for the host accounting
application: create projects, create tasks in a parent/child hierarchy,
assign employees to projects, track task progress, and read back projects,
tasks and team rosters.

Architecture position
---------------------
**Modules layer** -- entities, request structs, notifications, tables, a
read selector and the ``ProjectService`` facade.  Persistence, identity
allocation, the employee directory and event dispatch come from
``pm_kernel``.

Failure modes
-------------
* Every validation or lookup failure raises ``ProjectManagementError``.
* Database errors propagate unchanged.
"""

from pm_modules.projects.config import ProjectConfig
from pm_modules.projects.events import (
    EmployeeAssignedToProject,
    EventKind,
    ProjectCreated,
    ProjectManagementEvent,
    TaskCreated,
    TaskProgressUpdated,
)
from pm_modules.projects.exceptions import ProjectManagementError
from pm_modules.projects.models import Project, ProjectAssignment, Task
from pm_modules.projects.requests import (
    AssignmentRequest,
    CreateProjectRequest,
    CreateTaskRequest,
)
from pm_modules.projects.selectors import ProjectSelector, TeamMember
from pm_modules.projects.service import ProjectService

__all__ = [
    "AssignmentRequest",
    "CreateProjectRequest",
    "CreateTaskRequest",
    "EmployeeAssignedToProject",
    "EventKind",
    "Project",
    "ProjectAssignment",
    "ProjectConfig",
    "ProjectCreated",
    "ProjectManagementError",
    "ProjectManagementEvent",
    "ProjectSelector",
    "ProjectService",
    "Task",
    "TaskCreated",
    "TaskProgressUpdated",
    "TeamMember",
]
