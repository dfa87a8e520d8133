"""
Preview Builder.

Everything a note card needs, derived from the note and an explicit theme.
"""

from pydantic import BaseModel, ConfigDict

from noteku.schemas.note import Category, Note
from noteku.schemas.theme import Theme
from noteku.services.codec import first_image_reference, to_plain_preview


class NotePreview(BaseModel):
    """Card view of a note."""

    id: str | None
    title: str
    category: Category
    date: str
    snippet: str
    image: str | None
    accent: str

    model_config = ConfigDict(frozen=True)

    @property
    def is_empty(self) -> bool:
        """No text and no image to show."""
        return not self.snippet and self.image is None


def build_preview(note: Note, theme: Theme) -> NotePreview:
    return NotePreview(
        id=note.id,
        title=note.title,
        category=note.category,
        date=note.date,
        snippet=to_plain_preview(note.content),
        image=first_image_reference(note.content),
        accent=theme.category_color(note.category),
    )


def build_previews(notes: list[Note], theme: Theme) -> list[NotePreview]:
    return [build_preview(note, theme) for note in notes]
