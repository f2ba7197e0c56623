"""
Request structs for project management operations.

Each operation takes an explicit frozen request: required fields are
positional and non-optional, optional fields default to ``None`` meaning
"apply the configured default".  Validation that needs no database runs at
construction; reference checks (project, task, employee existence) belong
to ``ProjectService``.

``from_mapping`` accepts the loosely typed payloads the host application
sends: camelCase keys (``startDate``, ``projectManager``...) or their
snake_case spellings.  Empty strings count as missing.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, TypeVar

from pm_modules.projects.exceptions import ProjectManagementError

_ZERO = Decimal("0")


def _lookup(data: Mapping[str, Any], camel: str, snake: str) -> Any:
    value = data.get(camel)
    if value is None:
        value = data.get(snake)
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _text(data: Mapping[str, Any], camel: str, snake: str) -> str | None:
    value = _lookup(data, camel, snake)
    return None if value is None else str(value)


def parse_date(value: Any, label: str) -> date | None:
    """Accept a date, a datetime or an ISO-8601 string."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value).strip()).date()
    except ValueError as exc:
        raise ProjectManagementError(f"Invalid {label}: {value!r}", exc) from exc


def parse_decimal(value: Any, label: str) -> Decimal | None:
    """Accept an int, float, Decimal or numeric string."""
    if value is None:
        return None
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ProjectManagementError(f"Invalid {label}: {value!r}", exc) from exc
    if not amount.is_finite():
        raise ProjectManagementError(f"Invalid {label}: {value!r}")
    return amount


@dataclass(frozen=True)
class CreateProjectRequest:
    name: str
    start_date: date
    project_manager: str
    description: str = ""
    end_date: date | None = None
    budget: Decimal | None = None
    customer_id: str | None = None
    priority: str | None = None
    status: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ProjectManagementError("Project name is required")
        if self.start_date is None:
            raise ProjectManagementError("Start date is required")
        if not self.project_manager:
            raise ProjectManagementError("Project manager is required")
        if self.end_date is not None and self.end_date < self.start_date:
            raise ProjectManagementError("End date cannot be before start date")
        if self.budget is not None and self.budget < _ZERO:
            raise ProjectManagementError("Budget cannot be negative")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> CreateProjectRequest:
        return cls(
            name=_text(data, "name", "name") or "",
            start_date=parse_date(_lookup(data, "startDate", "start_date"), "start date"),
            project_manager=_text(data, "projectManager", "project_manager") or "",
            description=_text(data, "description", "description") or "",
            end_date=parse_date(_lookup(data, "endDate", "end_date"), "end date"),
            budget=parse_decimal(_lookup(data, "budget", "budget"), "budget"),
            customer_id=_text(data, "customerId", "customer_id"),
            priority=_text(data, "priority", "priority"),
            status=_text(data, "status", "status"),
        )


@dataclass(frozen=True)
class CreateTaskRequest:
    project_id: str
    name: str
    description: str = ""
    assigned_to: str | None = None
    parent_task_id: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    estimated_hours: Decimal | None = None
    priority: str | None = None
    status: str | None = None

    def __post_init__(self) -> None:
        if not self.project_id:
            raise ProjectManagementError("Project ID is required")
        if not self.name:
            raise ProjectManagementError("Task name is required")
        if self.estimated_hours is not None and self.estimated_hours < _ZERO:
            raise ProjectManagementError("Estimated hours cannot be negative")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> CreateTaskRequest:
        return cls(
            project_id=_text(data, "projectId", "project_id") or "",
            name=_text(data, "name", "name") or "",
            description=_text(data, "description", "description") or "",
            assigned_to=_text(data, "assignedTo", "assigned_to"),
            parent_task_id=_text(data, "parentTaskId", "parent_task_id"),
            start_date=parse_date(_lookup(data, "startDate", "start_date"), "start date"),
            end_date=parse_date(_lookup(data, "endDate", "end_date"), "end date"),
            estimated_hours=parse_decimal(
                _lookup(data, "estimatedHours", "estimated_hours"), "estimated hours"
            ),
            priority=_text(data, "priority", "priority"),
            status=_text(data, "status", "status"),
        )


@dataclass(frozen=True)
class AssignmentRequest:
    role: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    allocation_percentage: Decimal | None = None

    def __post_init__(self) -> None:
        if (
            self.start_date is not None
            and self.end_date is not None
            and self.end_date < self.start_date
        ):
            raise ProjectManagementError("End date cannot be before start date")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> AssignmentRequest:
        return cls(
            role=_text(data, "role", "role"),
            start_date=parse_date(_lookup(data, "startDate", "start_date"), "start date"),
            end_date=parse_date(_lookup(data, "endDate", "end_date"), "end date"),
            allocation_percentage=parse_decimal(
                _lookup(data, "allocationPercentage", "allocation_percentage"),
                "allocation percentage",
            ),
        )


RequestT = TypeVar("RequestT", CreateProjectRequest, CreateTaskRequest, AssignmentRequest)


def coerce_request(data: RequestT | Mapping[str, Any] | None, cls: type[RequestT]) -> RequestT:
    """Return ``data`` as a ``cls`` instance, building it from a mapping if needed."""
    if isinstance(data, cls):
        return data
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise TypeError(f"Expected {cls.__name__} or a mapping, got {type(data).__name__}")
    return cls.from_mapping(data)
