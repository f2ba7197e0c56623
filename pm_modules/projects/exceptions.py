"""Error kind raised by every project management operation."""

from __future__ import annotations

from pm_kernel.exceptions import ProjectKernelError


class ProjectManagementError(ProjectKernelError):
    """
    Missing required field, unresolved reference, duplicate active
    assignment, invalid date ordering, or an unparseable payload value.

    ``cause`` holds the wrapped lower-level error, if any; callers raise
    with ``from cause`` so it is also the exception's ``__cause__``.
    """

    code: str = "PROJECT_MANAGEMENT_ERROR"

    def __init__(self, message: str, cause: BaseException | None = None):
        self.message = message
        self.cause = cause
        super().__init__(message)
