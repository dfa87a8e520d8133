"""
Theme Resolver.

Maps a light/dark mode to its fixed palette. The resulting Theme is
passed explicitly to whatever renders previews; there is no global.
"""

from noteku.core.exceptions import ValidationError
from noteku.schemas.note import Category
from noteku.schemas.theme import Theme, ThemeMode

LIGHT_THEME = Theme(
    mode=ThemeMode.LIGHT,
    background="#ffffff",
    surface="#f4f4f5",
    text="#111111",
    muted_text="#444444",
    border="#e4e4e7",
    accent="#000000",
    category_colors={
        Category.PERSONAL: "#3b82f6",
        Category.WORK: "#f97316",
        Category.IDEAS: "#a855f7",
        Category.TODO: "#22c55e",
    },
)

DARK_THEME = Theme(
    mode=ThemeMode.DARK,
    background="#121212",
    surface="#1e1e1e",
    text="#f5f5f5",
    muted_text="#a1a1aa",
    border="#2e2e2e",
    accent="#ffffff",
    category_colors={
        Category.PERSONAL: "#60a5fa",
        Category.WORK: "#fb923c",
        Category.IDEAS: "#c084fc",
        Category.TODO: "#4ade80",
    },
)

_THEMES = {
    ThemeMode.LIGHT: LIGHT_THEME,
    ThemeMode.DARK: DARK_THEME,
}


def resolve_theme(mode: ThemeMode | str) -> Theme:
    """
    Return the palette for ``mode``.

    Raises:
        ValidationError: If mode is neither "light" nor "dark"
    """
    try:
        return _THEMES[ThemeMode(mode)]
    except ValueError as e:
        raise ValidationError(
            f"Unknown theme mode: {mode!r}",
            details={"mode": "Expected 'light' or 'dark'"},
        ) from e
