# Pydantic schemas package
from noteku.schemas.base import (
    ErrorDetail,
    Result,
    ResultMetadata,
)
from noteku.schemas.note import ALL_CATEGORIES, Category, ChecklistItem, Note
from noteku.schemas.theme import Theme, ThemeMode

__all__ = [
    "ALL_CATEGORIES",
    "Category",
    "ChecklistItem",
    "ErrorDetail",
    "Note",
    "Result",
    "ResultMetadata",
    "Theme",
    "ThemeMode",
]
