"""
Tests for EmployeeService, the employee directory lookup.

Covers:
- Registration and lookup
- Not-found behaviour of get_employee vs find_employee
- Listing order and the active filter
"""

import pytest

from pm_kernel.exceptions import EmployeeNotFoundError
from pm_kernel.models.employee import EmployeeModel
from pm_kernel.services.employee_service import EmployeeInfo, EmployeeService


@pytest.fixture
def directory(session) -> EmployeeService:
    service = EmployeeService(session)
    service.create_employee("E010", "Dana", "Young", email="dana@example.com")
    service.create_employee("E011", "Ed", "Brown", job_title="Analyst")
    service.create_employee("E012", "Abe", "Brown", is_active=False)
    return service


class TestEmployeeService:

    def test_create_returns_dto(self, session):
        info = EmployeeService(session).create_employee("E001", "Alice", "Smith")

        assert isinstance(info, EmployeeInfo)
        assert info.display_name == "Alice Smith"
        assert info.is_active is True
        assert session.get(EmployeeModel, "E001") is not None

    def test_get_employee(self, directory):
        info = directory.get_employee("E010")
        assert info.email == "dana@example.com"
        assert info.job_title is None

    def test_get_unknown_employee_raises(self, directory):
        with pytest.raises(EmployeeNotFoundError) as excinfo:
            directory.get_employee("E999")

        assert excinfo.value.employee_id == "E999"
        assert excinfo.value.code == "EMPLOYEE_NOT_FOUND"
        assert str(excinfo.value) == "Employee E999 not found"

    def test_find_unknown_employee_returns_none(self, directory):
        assert directory.find_employee("E999") is None

    def test_list_active_by_name(self, directory):
        assert [e.employee_id for e in directory.list_employees()] == ["E011", "E010"]

    def test_list_includes_inactive(self, directory):
        ids = [e.employee_id for e in directory.list_employees(active_only=False)]
        assert ids == ["E012", "E011", "E010"]

    def test_dto_is_frozen(self, directory):
        info = directory.get_employee("E011")
        with pytest.raises(AttributeError):
            info.last_name = "Green"
