"""Configuration loader for pageassets."""
import importlib.util
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from pageassets.catalog import DEFAULT_LIBRARIES, LibraryCatalog

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "pageassets.config.py"
DEBUG_ENV_VAR = "PAGEASSETS_DEBUG"

_TRUTHY = {"1", "true", "yes", "on"}


def _debug_from_env() -> bool:
    return os.getenv(DEBUG_ENV_VAR, "").strip().lower() in _TRUTHY


@dataclass
class AssetsConfig:
    """Process-wide settings read by registries at render time."""

    debug: bool = field(default_factory=_debug_from_env)
    # Extra or replacement library entries layered over DEFAULT_LIBRARIES
    libraries: Dict[str, Any] = field(default_factory=dict)


settings = AssetsConfig()


def configure(debug: Optional[bool] = None, libraries: Optional[Dict[str, Any]] = None) -> AssetsConfig:
    """Update the process-wide settings. Meant to be called once at startup."""
    if debug is not None:
        settings.debug = bool(debug)
    if libraries is not None:
        settings.libraries = dict(libraries)
    return settings


def get_catalog() -> LibraryCatalog:
    """Default catalog with the configured library overrides applied."""
    return LibraryCatalog(DEFAULT_LIBRARIES).merged(settings.libraries)


def load_config(path: Path | str | None = None) -> AssetsConfig:
    """
    Load configuration from a python file.

    If path is provided, loads from there.
    Otherwise, looks for pageassets.config.py in the current working directory.

    Uppercase ``DEBUG`` and ``LIBRARIES`` variables are read; anything
    missing keeps its default.
    """
    if path is None:
        path = Path.cwd() / DEFAULT_CONFIG_FILENAME
    else:
        path = Path(path)

    config = AssetsConfig()
    if not path.exists():
        return config

    try:
        spec = importlib.util.spec_from_file_location("pageassets_config", path)
        if spec is None or spec.loader is None:
            return config

        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
    except Exception as e:
        logger.warning("Failed to load config from %s: %s", path, e)
        return config

    if hasattr(module, "DEBUG"):
        config.debug = bool(module.DEBUG)
    libraries = getattr(module, "LIBRARIES", None)
    if isinstance(libraries, dict):
        config.libraries = dict(libraries)
    elif libraries is not None:
        logger.warning("Ignoring LIBRARIES in %s: expected a dict", path)
    return config
