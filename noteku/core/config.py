"""
Configuration.

Settings live in config/settings/*.yaml under the project root, which is
the nearest ancestor of the working directory holding a ``.project_root``
marker. Each file is validated against its schema in config_schema.py
when AppConfig is built.

    application.yaml   - name, version, environment
    database.yaml      - URL of the SQL key-value store
    logging.yaml       - level, format, handlers
    notes.yaml         - storage key, untitled placeholder, default category
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from noteku.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    LoggingSchema,
    NotesSchema,
)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

SQLITE_PREFIX = "sqlite+aiosqlite:///"


def find_project_root() -> Path:
    """Walk up from the working directory to the ``.project_root`` marker."""
    current = Path.cwd()
    for candidate in (current, *current.parents):
        if (candidate / ".project_root").exists():
            return candidate
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def load_yaml_config(filename: str) -> dict[str, Any]:
    """
    Read one file from config/settings/.

    Returns:
        The parsed mapping, ``{}`` for an empty file

    Raises:
        FileNotFoundError: If the file does not exist
    """
    config_path = find_project_root() / "config" / "settings" / filename
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _load_validated(schema_cls: type[SchemaT], filename: str) -> SchemaT:
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {filename}:\n{e}") from e


class AppConfig:
    """Validated settings, one typed section per YAML file."""

    def __init__(self) -> None:
        self.application = _load_validated(ApplicationSchema, "application.yaml")
        self.database = _load_validated(DatabaseSchema, "database.yaml")
        self.logging = _load_validated(LoggingSchema, "logging.yaml")
        self.notes = _load_validated(NotesSchema, "notes.yaml")


@lru_cache
def get_app_config() -> AppConfig:
    """Load settings once per process."""
    return AppConfig()


def get_database_url() -> str:
    """
    URL for the SQL store from database.yaml.

    A relative SQLite file path is resolved against the project root and
    its directory created, so the store does not follow the working
    directory around.
    """
    url = get_app_config().database.url
    if not url.startswith(SQLITE_PREFIX):
        return url

    path = url[len(SQLITE_PREFIX):]
    if not path or path == ":memory:" or Path(path).is_absolute():
        return url

    db_path = find_project_root() / path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"{SQLITE_PREFIX}{db_path}"
