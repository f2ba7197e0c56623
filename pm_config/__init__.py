"""
pm_config -- single public entrypoint for plugin configuration.

Responsibility:
    ``get_active_config()`` is the only way runtime code obtains settings.
    Services receive the parsed ``ProjectConfig`` by injection and never
    read files or environment variables themselves.

Failure modes:
    - ``FileNotFoundError`` -- the requested configuration file is missing.
    - ``ValueError`` -- unknown sections/keys or malformed values.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pm_config.loader import DatabaseConfig, PMConfig, load_yaml_file, parse_config

_logger = logging.getLogger("pm_kernel.config")

_DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"


def get_active_config(config_path: Path | str | None = None) -> PMConfig:
    """Load and parse the plugin configuration.

    Args:
        config_path: YAML file to load.  Defaults to the bundled
            ``defaults.yaml``.
    """
    path = Path(config_path) if config_path is not None else _DEFAULT_CONFIG_PATH
    config = parse_config(load_yaml_file(path), source=str(path))
    _logger.info(
        "PM_CONFIG_TRACE",
        extra={
            "config_source": config.source,
            "database_echo": config.database.echo,
            "default_project_status": config.projects.default_project_status,
        },
    )
    return config


__all__ = [
    "DatabaseConfig",
    "PMConfig",
    "get_active_config",
]
