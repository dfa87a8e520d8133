"""
Note Schemas.

Pydantic models for the persisted note record and the transient
checklist items derived from a To-Do note's markup.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

ALL_CATEGORIES = "All"
"""Filter-only pseudo-category. Never stored on a note."""


def normalize_id(value: Any) -> Any:
    """
    Canonical form of a stored id.

    Whole-number JSON ids become digit strings and blank strings become
    None. Other values pass through for the field to validate.

    Raises:
        ValueError: For a float id with a fractional part
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Note id is not a whole number: {value!r}")
        return str(int(value))
    if isinstance(value, str) and not value.strip():
        return None
    return value


class Category(str, Enum):
    """Fixed set of categories a note can belong to."""

    PERSONAL = "Personal"
    WORK = "Work"
    IDEAS = "Ideas"
    TODO = "To-Do"

    @property
    def is_checklist(self) -> bool:
        """Whether notes of this category hold checklist markup."""
        return self is Category.TODO


class Note(BaseModel):
    """
    A single note.

    ``content`` is always markup: rich text for free-form categories,
    checklist markup for To-Do. ``id`` stays None until the first save.
    """

    id: str | None = Field(default=None, description="Opaque unique identifier")
    title: str = Field(default="", description="Note title")
    content: str = Field(default="", description="Markup body")
    category: Category = Field(default=Category.PERSONAL, description="Note category")
    date: str = Field(default="", description="Display-formatted last-saved date")

    model_config = ConfigDict(extra="ignore")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return normalize_id(value)

    @field_validator("title", "content", "date", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_record(self) -> dict[str, str]:
        """Serialize to the flat all-string record kept in the collection blob."""
        return {
            "id": self.id or "",
            "title": self.title,
            "content": self.content,
            "category": self.category.value,
            "date": self.date,
        }


class ChecklistItem(BaseModel):
    """One row of a To-Do checklist. Lives only in memory while editing."""

    text: str = ""
    checked: bool = False
