"""
Note Query.

Pure view construction over an in-memory note list: category and
free-text filtering, and the two-column split used by the masonry grid.
Nothing here re-sorts; callers get notes in the order they passed in.
"""

from collections.abc import Sequence

from noteku.schemas.note import ALL_CATEGORIES, Category, Note


def _category_value(category: Category | str) -> str:
    return category.value if isinstance(category, Category) else category


def matches(note: Note, search_text: str, category: Category | str = ALL_CATEGORIES) -> bool:
    """Whether ``note`` passes the category filter and contains ``search_text``."""
    wanted = _category_value(category)
    if wanted != ALL_CATEGORIES and note.category.value != wanted:
        return False
    if not search_text:
        return True
    needle = search_text.casefold()
    return needle in note.title.casefold() or needle in note.content.casefold()


def filter_notes(
    notes: Sequence[Note],
    search_text: str = "",
    category: Category | str = ALL_CATEGORIES,
) -> list[Note]:
    """
    Filter notes by category and case-insensitive substring search.

    Args:
        notes: Notes in display order
        search_text: Substring looked up in title and content; empty matches all
        category: A Category, its value, or ``"All"``

    Returns:
        Matching notes, input order preserved
    """
    return [note for note in notes if matches(note, search_text, category)]


def partition_for_masonry(notes: Sequence[Note]) -> tuple[list[Note], list[Note]]:
    """Split by position: even indices go left, odd indices go right."""
    return list(notes[0::2]), list(notes[1::2])
