"""Tables owned by the host application and read by the kernel."""

from pm_kernel.models.employee import EmployeeModel

__all__ = [
    "EmployeeModel",
]
