"""
Theme Schemas.

Palette value passed explicitly to preview rendering.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from noteku.schemas.note import Category


class ThemeMode(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class Theme(BaseModel):
    """Structured palette for one mode."""

    mode: ThemeMode
    background: str
    surface: str
    text: str
    muted_text: str
    border: str
    accent: str
    category_colors: dict[Category, str]

    model_config = ConfigDict(frozen=True)

    def category_color(self, category: Category | str) -> str:
        """Accent color for a category, falling back to the theme accent."""
        try:
            return self.category_colors.get(Category(category), self.accent)
        except ValueError:
            return self.accent
