"""
Typed exception hierarchy for the project management kernel.

Every error carries a class-level ``code`` attribute so callers and log
pipelines can identify it without parsing messages, and stores its context
as attributes rather than only in the message string.

    ProjectKernelError (base)
    |
    +-- EmployeeError
    |   +-- EmployeeNotFoundError
    |
    +-- SequenceError

Database failures are not wrapped: ``sqlalchemy.exc.SQLAlchemyError``
propagates to the caller unchanged.
"""


class ProjectKernelError(Exception):
    """
    Base exception for all project management errors.

    Subclasses override ``code`` with a stable, machine-readable identifier.
    """

    code: str = "PROJECT_KERNEL_ERROR"


# Employee directory


class EmployeeError(ProjectKernelError):
    """Base exception for employee directory errors."""

    code: str = "EMPLOYEE_ERROR"


class EmployeeNotFoundError(EmployeeError):
    """Employee with given ID was not found in the directory."""

    code: str = "EMPLOYEE_NOT_FOUND"

    def __init__(self, employee_id: str):
        self.employee_id = employee_id
        super().__init__(f"Employee {employee_id} not found")


# Identity allocation


class SequenceError(ProjectKernelError):
    """A named sequence could not be allocated or seeded."""

    code: str = "SEQUENCE_ERROR"

    def __init__(self, sequence_name: str, reason: str):
        self.sequence_name = sequence_name
        self.reason = reason
        super().__init__(f"Sequence {sequence_name}: {reason}")
