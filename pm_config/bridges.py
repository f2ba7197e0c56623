"""
Config -> runtime bridges.

Hands the parsed ``PMConfig`` sections to the kernel engine and the
project service.  These live in pm_config because neither pm_kernel nor
pm_modules may import pm_config.

Usage:
    from pm_config import get_active_config
    from pm_config.bridges import build_project_service, init_engine

    config = get_active_config()
    init_engine(config)
    with session_scope() as session:
        service = build_project_service(
            config, session, EmployeeService(session), dispatcher, auto_commit=False,
        )
"""

from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from pm_config.loader import PMConfig
from pm_kernel.db.engine import init_engine_from_url
from pm_kernel.domain.clock import Clock
from pm_kernel.events import EventDispatcher
from pm_kernel.services.employee_service import EmployeeDirectory
from pm_modules.projects.service import ProjectService


def init_engine(config: PMConfig) -> Engine:
    """Initialize the kernel engine from the ``database`` section."""
    db = config.database
    return init_engine_from_url(
        db.url,
        echo=db.echo,
        pool_size=db.pool_size,
        max_overflow=db.max_overflow,
        pool_timeout=db.pool_timeout,
        pool_recycle=db.pool_recycle,
    )


def build_project_service(
    config: PMConfig,
    session: Session,
    employee_directory: EmployeeDirectory,
    event_dispatcher: EventDispatcher,
    clock: Clock | None = None,
    auto_commit: bool = True,
) -> ProjectService:
    """ProjectService using the ``projects`` section for its defaults."""
    return ProjectService(
        session=session,
        employee_directory=employee_directory,
        event_dispatcher=event_dispatcher,
        clock=clock,
        config=config.projects,
        auto_commit=auto_commit,
    )
