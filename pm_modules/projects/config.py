"""Project Management Configuration."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ProjectConfig:
    """Defaults applied when a payload or a stored row leaves a field empty."""
    default_project_priority: str = "Medium"
    default_project_status: str = "Planning"
    default_task_priority: str = "Medium"
    default_task_status: str = "Not Started"
    default_assignment_role: str = "Team Member"
    default_allocation_percentage: Decimal = Decimal("100")
