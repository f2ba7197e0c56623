"""
Module: pm_kernel.db.base
Responsibility: Declarative base for every table the project management
    schema owns or reads (projects, tasks, assignments, the host employee
    directory, and sequence counters).
Architecture position: Kernel > DB.  Lowest-level import target; MUST NOT
    import from models/, services/, or pm_modules.

Invariants enforced:
    - Decimal maps to Numeric(38, 9).  Budgets, hours and percentages are
      never stored as float.
    - date maps to Date; assignment and schedule dates carry no time part.
    - Primary keys are declared by each table; there is no implicit
      surrogate key because the schema keys rows by business identity
      (project_id, task_id, (project_id, employee_id, start_date)).
"""

from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar

from sqlalchemy import BigInteger, Date, DateTime, Numeric
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all SQLAlchemy models."""

    type_annotation_map: ClassVar[dict] = {
        Decimal: Numeric(38, 9),
        date: Date,
        datetime: DateTime(timezone=True),
        int: BigInteger,
    }
