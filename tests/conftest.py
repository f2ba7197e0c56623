"""
Pytest fixtures for the project management test suite.

Provides:
- A database engine and session per test, with the full schema created
- Deterministic clock
- Structured log capture

Environment Variables:
- DATABASE_URL: database URL (e.g. postgresql://pm:pm@localhost/pm_test).
  If not set, an in-memory SQLite database is used.
"""

import json
import logging
import os
from datetime import datetime, timezone
from io import StringIO
from typing import Generator

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from pm_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from pm_kernel.domain.clock import DeterministicClock
from pm_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

DEFAULT_DATABASE_URL = "sqlite://"

# 2024-06-15 09:00 UTC, a Saturday in the middle of the test calendar
TEST_NOW = datetime(2024, 6, 15, 9, 0, 0, tzinfo=timezone.utc)


def get_database_url() -> str:
    return os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture pm_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, project_service):
            project_service.create_project(...)
            logs = captured_logs()
            assert any(r["message"] == "project_created" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("pm_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def db_engine() -> Generator[Engine, None, None]:
    """Fresh engine with every table created; dropped again at teardown."""
    engine = init_engine_from_url(get_database_url())
    create_tables()
    yield engine
    drop_tables()
    reset_engine()


@pytest.fixture
def session(db_engine) -> Generator[Session, None, None]:
    """Session on the per-test engine."""
    sess = get_session()
    yield sess
    sess.rollback()
    sess.close()


# =============================================================================
# Clock fixtures
# =============================================================================


@pytest.fixture
def deterministic_clock() -> DeterministicClock:
    return DeterministicClock(TEST_NOW)
