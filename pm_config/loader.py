"""
Configuration Loader (``pm_config.loader``).

Responsibility
--------------
Reads a YAML configuration file and parses its sections into the frozen
dataclasses ``DatabaseConfig`` and ``ProjectConfig``.  Runtime callers go
through ``pm_config.get_active_config()``, not this module.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown section or key, or a section that is not a mapping  -> ``ValueError``.
* Non-numeric allocation percentage  -> ``ValueError``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from pm_modules.projects.config import ProjectConfig


@dataclass(frozen=True)
class DatabaseConfig:
    """Connection settings handed to ``init_engine_from_url``."""
    url: str = "sqlite://"
    echo: bool = False
    pool_size: int = 5
    max_overflow: int = 10
    pool_timeout: int = 30
    pool_recycle: int = 1800


@dataclass(frozen=True)
class PMConfig:
    """The complete plugin configuration."""
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    projects: ProjectConfig = field(default_factory=ProjectConfig)
    source: str | None = None


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file; an empty file yields an empty dict."""
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping")
    return data


def _check_keys(section: str, data: Any, cls: type) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Section '{section}' must be a mapping")
    allowed = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ValueError(f"Unknown keys in section '{section}': {', '.join(unknown)}")
    return dict(data)


def parse_database(data: Any) -> DatabaseConfig:
    return DatabaseConfig(**_check_keys("database", data, DatabaseConfig))


def parse_projects(data: Any) -> ProjectConfig:
    values = _check_keys("projects", data, ProjectConfig)
    if "default_allocation_percentage" in values:
        raw = values["default_allocation_percentage"]
        try:
            values["default_allocation_percentage"] = Decimal(str(raw))
        except InvalidOperation as exc:
            raise ValueError(
                f"default_allocation_percentage is not numeric: {raw!r}"
            ) from exc
    return ProjectConfig(**values)


def parse_config(data: dict[str, Any], source: str | None = None) -> PMConfig:
    unknown = sorted(set(data) - {"database", "projects"})
    if unknown:
        raise ValueError(f"Unknown configuration sections: {', '.join(unknown)}")
    return PMConfig(
        database=parse_database(data.get("database")),
        projects=parse_projects(data.get("projects")),
        source=source,
    )
