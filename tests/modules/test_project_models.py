"""
Tests for the project management entities.

Validates:
- Percentage clamping on Task.progress and ProjectAssignment.allocation_percentage
- Derived values: duration, is_overdue, is_completed, is_active
- Identity fields cannot be reassigned
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pm_modules.projects.models import (
    Project,
    ProjectAssignment,
    Task,
    clamp_percentage,
)

AS_OF = date(2024, 6, 15)


def _project(**overrides) -> Project:
    fields = dict(
        project_id="1",
        name="ERP Rollout",
        description="",
        start_date=date(2024, 1, 1),
        project_manager="E001",
    )
    fields.update(overrides)
    return Project(**fields)


def _task(**overrides) -> Task:
    fields = dict(task_id="1", project_id="1", name="Data migration")
    fields.update(overrides)
    return Task(**fields)


# =============================================================================
# Clamping
# =============================================================================


class TestClamping:

    @pytest.mark.parametrize(
        "value, expected",
        [(-10, Decimal("0")), (150, Decimal("100")), (55, Decimal("55"))],
    )
    def test_task_progress_clamped(self, value, expected):
        task = _task()
        task.progress = value
        assert task.progress == expected

    def test_progress_clamped_at_construction(self):
        assert _task(progress=Decimal("250")).progress == Decimal("100")

    def test_allocation_clamped(self):
        assignment = ProjectAssignment("1", "E002", start_date=AS_OF)
        assert assignment.allocation_percentage == Decimal("100")
        assignment.allocation_percentage = Decimal("-5")
        assert assignment.allocation_percentage == Decimal("0")
        assignment.allocation_percentage = "37.5"
        assert assignment.allocation_percentage == Decimal("37.5")

    @given(st.decimals(allow_nan=False, allow_infinity=False))
    def test_clamp_is_bounded_and_idempotent(self, value):
        once = clamp_percentage(value)
        assert Decimal("0") <= once <= Decimal("100")
        assert clamp_percentage(once) == once

    @given(
        st.decimals(min_value=-1000, max_value=1000, allow_nan=False),
        st.decimals(min_value=-1000, max_value=1000, allow_nan=False),
    )
    def test_clamp_is_monotonic(self, a, b):
        low, high = sorted((a, b))
        assert clamp_percentage(low) <= clamp_percentage(high)

    def test_other_fields_are_not_validated(self):
        task = _task()
        task.estimated_hours = Decimal("-3")
        task.status = "whatever"
        assert task.estimated_hours == Decimal("-3")
        assert task.status == "whatever"


# =============================================================================
# Project
# =============================================================================


class TestProject:

    def test_defaults(self):
        project = _project()
        assert project.budget == Decimal("0")
        assert project.customer_id == ""
        assert project.priority == "Medium"
        assert project.status == "Planning"
        assert project.end_date is None

    def test_duration(self):
        assert _project().duration is None
        assert _project(end_date=date(2024, 1, 31)).duration == 30

    def test_overdue_when_end_passed(self):
        project = _project(end_date=date(2024, 6, 14))
        assert project.is_overdue(AS_OF) is True

    def test_overdue_on_end_date(self):
        assert _project(end_date=AS_OF).is_overdue(AS_OF) is True

    def test_not_overdue_before_end_date(self):
        assert _project(end_date=date(2024, 6, 16)).is_overdue(AS_OF) is False

    def test_completed_project_never_overdue(self):
        project = _project(end_date=date(2024, 3, 1), status="Completed")
        assert project.is_overdue(AS_OF) is False

    def test_open_ended_project_never_overdue(self):
        assert _project().is_overdue(AS_OF) is False

    def test_identity_is_immutable(self):
        project = _project()
        with pytest.raises(AttributeError):
            project.project_id = "2"
        project.name = "Renamed"
        assert project.name == "Renamed"


# =============================================================================
# Task
# =============================================================================


class TestTask:

    def test_defaults(self):
        task = _task()
        assert task.priority == "Medium"
        assert task.status == "Not Started"
        assert task.parent_task_id is None
        assert task.actual_hours == Decimal("0")

    def test_completed_by_status(self):
        assert _task(status="Completed").is_completed is True

    def test_completed_by_progress(self):
        task = _task()
        task.progress = 120
        assert task.is_completed is True
        assert task.status == "Not Started"

    def test_overdue_unless_completed(self):
        task = _task(end_date=date(2024, 5, 1))
        assert task.is_overdue(AS_OF) is True
        task.progress = 100
        assert task.is_overdue(AS_OF) is False

    def test_overdue_on_end_date(self):
        assert _task(end_date=AS_OF).is_overdue(AS_OF) is True
        assert _task(end_date=date(2024, 6, 16)).is_overdue(AS_OF) is False

    def test_duration_needs_both_dates(self):
        assert _task(start_date=date(2024, 2, 1)).duration is None
        assert _task(start_date=date(2024, 2, 1), end_date=date(2024, 2, 11)).duration == 10

    def test_identity_is_immutable(self):
        task = _task()
        with pytest.raises(AttributeError):
            task.task_id = "99"


# =============================================================================
# ProjectAssignment
# =============================================================================


class TestProjectAssignment:

    def test_open_ended_assignment_active(self):
        assignment = ProjectAssignment("1", "E002", start_date=date(2024, 1, 1))
        assert assignment.role == "Team Member"
        assert assignment.is_active(AS_OF) is True

    def test_future_assignment_not_active(self):
        assignment = ProjectAssignment("1", "E002", start_date=date(2024, 7, 1))
        assert assignment.is_active(AS_OF) is False

    def test_expired_assignment_not_active(self):
        assignment = ProjectAssignment(
            "1", "E002", start_date=date(2024, 1, 1), end_date=date(2024, 6, 14)
        )
        assert assignment.is_active(AS_OF) is False

    def test_active_on_last_day(self):
        assignment = ProjectAssignment(
            "1", "E002", start_date=date(2024, 1, 1), end_date=AS_OF
        )
        assert assignment.is_active(AS_OF) is True

    def test_key_is_immutable(self):
        assignment = ProjectAssignment("1", "E002", start_date=AS_OF)
        with pytest.raises(AttributeError):
            assignment.employee_id = "E003"
