"""Services for the project management kernel (write side)."""

from pm_kernel.services.employee_service import (
    EmployeeDirectory,
    EmployeeInfo,
    EmployeeService,
)
from pm_kernel.services.sequence_service import SequenceCounter, SequenceService

__all__ = [
    "EmployeeDirectory",
    "EmployeeInfo",
    "EmployeeService",
    "SequenceCounter",
    "SequenceService",
]
