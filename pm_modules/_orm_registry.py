"""
Module ORM Registry (``pm_modules._orm_registry``).

Imports every table definition so ``Base.metadata`` knows the complete
schema before ``create_tables()`` runs.  Kernel tables are registered
first because module tables reference them (``employees``).
"""


def import_all_orm_models() -> None:
    """Import kernel and module table definitions (idempotent)."""
    import pm_kernel.models  # noqa: F401
    import pm_kernel.services.sequence_service  # noqa: F401
    import pm_modules.projects.orm  # noqa: F401
