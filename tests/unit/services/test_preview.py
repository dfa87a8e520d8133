"""
Unit Tests for the Preview Builder.
"""

from noteku.schemas.note import Category, ChecklistItem, Note
from noteku.services.codec import embed_image, encode_checklist
from noteku.services.preview import build_preview, build_previews
from noteku.services.theme import DARK_THEME, LIGHT_THEME


class TestBuildPreview:
    """Tests for card previews."""

    def test_text_note(self):
        note = Note(id="1", title="Plan", content="<p>Ship <b>it</b></p>", category=Category.WORK, date="1/1/2026")

        preview = build_preview(note, LIGHT_THEME)

        assert preview.snippet == "Ship it"
        assert preview.image is None
        assert preview.accent == LIGHT_THEME.category_colors[Category.WORK]
        assert preview.is_empty is False

    def test_accent_follows_theme(self):
        note = Note(id="1", category=Category.IDEAS)
        assert build_preview(note, DARK_THEME).accent == DARK_THEME.category_colors[Category.IDEAS]

    def test_image_only_note_is_not_empty(self):
        note = Note(id="1", content=embed_image("", "data:image/png;base64,AAAA"))

        preview = build_preview(note, LIGHT_THEME)

        assert preview.snippet == ""
        assert preview.image == "data:image/png;base64,AAAA"
        assert preview.is_empty is False

    def test_new_todo_note_is_empty(self):
        note = Note(id="1", category=Category.TODO, content=encode_checklist([]))
        assert build_preview(note, LIGHT_THEME).is_empty is True

    def test_checklist_snippet(self):
        content = encode_checklist([ChecklistItem(text="milk", checked=True)])
        note = Note(id="1", category=Category.TODO, content=content)
        assert build_preview(note, LIGHT_THEME).snippet == "• ☑ milk"

    def test_build_previews_keeps_order(self, sample_notes):
        previews = build_previews(sample_notes, LIGHT_THEME)
        assert [p.id for p in previews] == [n.id for n in sample_notes]
