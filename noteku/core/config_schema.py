"""
Configuration Schemas.

Pydantic models for each YAML file in config/settings/. Unknown keys,
missing keys and wrong types fail at load time with the offending file
named, rather than surfacing later as a KeyError.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from noteku.schemas.note import Category


class _StrictBase(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ApplicationSchema(_StrictBase):
    """application.yaml"""

    name: str
    version: str
    description: str
    environment: str


class DatabaseSchema(_StrictBase):
    """database.yaml"""

    url: str
    echo: bool = False


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int = Field(gt=0)
    backup_count: int = Field(ge=0)


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    """logging.yaml"""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    format: Literal["json", "console"]
    handlers: HandlersSchema


class NotesSchema(_StrictBase):
    """notes.yaml"""

    storage_key: str = Field(min_length=1)
    untitled_title: str
    default_category: Category
