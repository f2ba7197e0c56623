"""
Employee directory table.

The host application owns this table; the project management plugin reads
it to resolve employee references and to enrich team rosters.  Only the
columns the plugin consumes are mapped.
"""

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from pm_kernel.db.base import Base


class EmployeeModel(Base):
    """
    A person who can manage projects, own tasks, or be assigned to projects.

    Guarantees:
        - ``employee_id`` is the stable reference stored by project rows.
        - Inactive employees still resolve; the directory does not filter
          on ``is_active``.
    """

    __tablename__ = "employees"

    __table_args__ = (
        Index("idx_employee_name", "last_name", "first_name"),
    )

    employee_id: Mapped[str] = mapped_column(String(50), primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    job_title: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<EmployeeModel {self.employee_id} {self.last_name}, {self.first_name}>"
