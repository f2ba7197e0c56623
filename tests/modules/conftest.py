"""
Shared fixtures for module tests.

Seeds the employee directory and wires a ProjectService to a recording
event dispatcher and the deterministic clock.

DESIGN RULE: Every fixture is opt-in.  No autouse.  Each test declares the
parent entities it depends on in its function signature.
"""

from datetime import date
from decimal import Decimal

import pytest

from pm_kernel.events import InMemoryEventDispatcher
from pm_kernel.services.employee_service import EmployeeService
from pm_modules.projects.service import ProjectService

MANAGER_ID = "E001"
DEVELOPER_ID = "E002"
DESIGNER_ID = "E003"


@pytest.fixture
def employee_service(session) -> EmployeeService:
    return EmployeeService(session)


@pytest.fixture
def seeded_employees(session, employee_service) -> dict[str, str]:
    """Three committed directory entries, keyed by role."""
    employee_service.create_employee(
        MANAGER_ID, "Alice", "Smith", email="alice@example.com", job_title="Project Manager"
    )
    employee_service.create_employee(
        DEVELOPER_ID, "Bob", "Jones", email="bob@example.com", job_title="Developer"
    )
    employee_service.create_employee(
        DESIGNER_ID, "Carol", "Adams", email="carol@example.com", job_title="Designer"
    )
    session.commit()
    return {"manager": MANAGER_ID, "developer": DEVELOPER_ID, "designer": DESIGNER_ID}


@pytest.fixture
def published_events() -> list:
    return []


@pytest.fixture
def event_dispatcher(published_events) -> InMemoryEventDispatcher:
    dispatcher = InMemoryEventDispatcher()
    dispatcher.subscribe_all(published_events.append)
    return dispatcher


@pytest.fixture
def project_service(
    session, employee_service, event_dispatcher, deterministic_clock, seeded_employees,
) -> ProjectService:
    return ProjectService(
        session=session,
        employee_directory=employee_service,
        event_dispatcher=event_dispatcher,
        clock=deterministic_clock,
    )


@pytest.fixture
def project_payload() -> dict:
    return {
        "name": "ERP Rollout",
        "description": "Replace the legacy ledger",
        "startDate": "2024-01-01",
        "endDate": "2024-12-31",
        "budget": "150000.00",
        "customerId": "C042",
        "projectManager": MANAGER_ID,
        "priority": "High",
        "status": "Active",
    }


@pytest.fixture
def sample_project(project_service, project_payload):
    return project_service.create_project(project_payload)


@pytest.fixture
def sample_task(project_service, sample_project):
    return project_service.create_task(
        {
            "projectId": sample_project.project_id,
            "name": "Data migration",
            "assignedTo": DEVELOPER_ID,
            "startDate": "2024-02-01",
            "endDate": "2024-03-15",
            "estimatedHours": 120,
        }
    )


@pytest.fixture
def expected_budget() -> Decimal:
    return Decimal("150000.00")


@pytest.fixture
def project_start() -> date:
    return date(2024, 1, 1)
