"""
Project Management Domain Models (``pm_modules.projects.models``).

Responsibility
--------------
Mutable dataclass entities for the nouns of project management: projects,
tasks (optionally nested under a parent task), and time-bounded employee
assignments to projects.  ``ProjectService`` builds them fresh for every
request from the stored rows; nothing here is cached or shared.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.  Validation lives
in the request structs and the service, not here.

Invariants enforced
-------------------
* Identity fields cannot be reassigned once set (``AttributeError``).
* ``Task.progress`` and ``ProjectAssignment.allocation_percentage`` are
  clamped into [0, 100] on every assignment, construction included.
* Amounts, hours and percentages are ``Decimal`` -- never ``float``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, ClassVar

from pm_kernel.domain.clock import SystemClock

COMPLETED = "Completed"

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def clamp_percentage(value: Any) -> Decimal:
    """Coerce ``value`` to Decimal and clamp it into [0, 100]."""
    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    return max(_ZERO, min(_HUNDRED, amount))


def _days_between(start: date, end: date) -> int:
    return abs((end - start).days)


def _today() -> date:
    return SystemClock().today()


class _Entity:
    """Attribute guard shared by the entities."""

    _identity: ClassVar[tuple[str, ...]] = ()
    _percentages: ClassVar[tuple[str, ...]] = ()

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self._identity and name in self.__dict__:
            raise AttributeError(f"{type(self).__name__}.{name} is immutable")
        if name in self._percentages:
            value = clamp_percentage(value)
        super().__setattr__(name, value)


@dataclass
class Project(_Entity):
    """A tracked unit of work with a manager, dates, budget and status."""
    _identity: ClassVar[tuple[str, ...]] = ("project_id",)

    project_id: str
    name: str
    description: str
    start_date: date
    project_manager: str
    end_date: date | None = None
    budget: Decimal = _ZERO
    customer_id: str = ""
    priority: str = "Medium"
    status: str = "Planning"

    @property
    def duration(self) -> int | None:
        """Whole days between start and end; None without an end date."""
        if self.end_date is None:
            return None
        return _days_between(self.start_date, self.end_date)

    def is_overdue(self, as_of: date | None = None) -> bool:
        """Past due from the start of the end day until the project is completed."""
        if self.end_date is None:
            return False
        return self.end_date <= (as_of or _today()) and self.status != COMPLETED


@dataclass
class Task(_Entity):
    """A unit of work within a project, optionally nested under a parent task."""
    _identity: ClassVar[tuple[str, ...]] = ("task_id",)
    _percentages: ClassVar[tuple[str, ...]] = ("progress",)

    task_id: str
    project_id: str
    name: str
    description: str = ""
    assigned_to: str | None = None
    parent_task_id: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    estimated_hours: Decimal = _ZERO
    actual_hours: Decimal = _ZERO
    progress: Decimal = _ZERO
    priority: str = "Medium"
    status: str = "Not Started"

    @property
    def is_completed(self) -> bool:
        return self.status == COMPLETED or self.progress >= _HUNDRED

    @property
    def duration(self) -> int | None:
        if self.start_date is None or self.end_date is None:
            return None
        return _days_between(self.start_date, self.end_date)

    def is_overdue(self, as_of: date | None = None) -> bool:
        if self.end_date is None:
            return False
        return self.end_date <= (as_of or _today()) and not self.is_completed


@dataclass
class ProjectAssignment(_Entity):
    """A time-bounded association of an employee to a project."""
    _identity: ClassVar[tuple[str, ...]] = ("project_id", "employee_id")
    _percentages: ClassVar[tuple[str, ...]] = ("allocation_percentage",)

    project_id: str
    employee_id: str
    start_date: date
    role: str = "Team Member"
    end_date: date | None = None
    allocation_percentage: Decimal = _HUNDRED

    def is_active(self, as_of: date | None = None) -> bool:
        """True while ``as_of`` lies within [start_date, end_date or open]."""
        today = as_of or _today()
        return self.start_date <= today and (
            self.end_date is None or self.end_date >= today
        )
