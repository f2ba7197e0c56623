"""
Module: pm_kernel.db.gateway
Responsibility: The narrow database contract module services talk to:
    ``fetch_one``, ``fetch_all`` and ``execute_write``.  Statements are
    SQLAlchemy Core constructs or ``text()`` SQL; values always travel as
    bound parameters, never interpolated into SQL strings.
Architecture position: Kernel > DB.  Wraps a caller-owned Session.

Failure modes:
    - ``sqlalchemy.exc.SQLAlchemyError`` propagates unchanged.  There are no
      retries at this layer.
"""

from collections.abc import Mapping
from typing import Any

from sqlalchemy import text
from sqlalchemy.orm import Session
from sqlalchemy.sql import Executable

from pm_kernel.logging_config import get_logger

logger = get_logger("db.gateway")

Statement = Executable | str


def _as_executable(statement: Statement) -> Executable:
    if isinstance(statement, str):
        return text(statement)
    return statement


class SqlGateway:
    """
    Parameterized statement execution over a SQLAlchemy Session.

    Contract:
        Rows are returned as plain ``dict`` copies keyed by column label, so
        callers never hold live result objects.

    Non-goals:
        Does NOT open or close the session; ``commit`` and ``rollback`` are
        passed through for callers that own the transaction boundary.
    """

    def __init__(self, session: Session):
        self.session = session

    def fetch_one(
        self,
        statement: Statement,
        params: Mapping[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        """Return the first row of the result, or None when there is none."""
        row = self.session.execute(_as_executable(statement), params or {}).mappings().first()
        return dict(row) if row is not None else None

    def fetch_all(
        self,
        statement: Statement,
        params: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Return every row of the result in statement order."""
        result = self.session.execute(_as_executable(statement), params or {})
        return [dict(row) for row in result.mappings()]

    def execute_write(
        self,
        statement: Statement,
        params: Mapping[str, Any] | None = None,
    ) -> int:
        """Execute an INSERT/UPDATE/DELETE and return the affected row count."""
        result = self.session.execute(_as_executable(statement), params or {})
        logger.debug("statement_executed", extra={"rowcount": result.rowcount})
        return result.rowcount

    def flush(self) -> None:
        self.session.flush()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
