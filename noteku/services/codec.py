"""
Content Codec.

Converts between checklist markup and ChecklistItem lists, and reduces
any markup to plain text for card previews. Markup is the only stored
form of a note body; everything here is a derived projection of it.

None of these functions raise on malformed input. Broken fragments
degrade to an empty list, an empty string or best-effort text.
"""

import html
import re
from collections.abc import Iterable

from noteku.schemas.note import ChecklistItem
from noteku.services.markup import BLOCK_TAGS, TokenKind, tokenize

UNCHECKED_GLYPH = "☐"
CHECKED_GLYPH = "☑"

CHECKED_MARKERS = ("☑", "✓", "✔", "✅", "[x]", "[X]")
UNCHECKED_MARKERS = ("☐", "⬜", "□", "[ ]")

STRIKE_STYLE = "text-decoration: line-through;"
STRIKE_TAGS = frozenset({"s", "strike", "del"})

WHITESPACE_ENTITIES = ("&nbsp;", "&#160;", "&#xa0;", "&#xA0;", "&ensp;", "&emsp;", "&thinsp;")
BULLET = "• "

_WHITESPACE_RUN = re.compile(r"\s+")


def _strikes(attrs: dict[str, str]) -> bool:
    return "line-through" in attrs.get("style", "").lower()


def _strip_marker(text: str) -> tuple[str, bool | None]:
    """Remove one leading glyph marker. Returns the text and the marker's state."""
    for marker in CHECKED_MARKERS:
        if text.startswith(marker):
            return text[len(marker):].removeprefix(" "), True
    for marker in UNCHECKED_MARKERS:
        if text.startswith(marker):
            return text[len(marker):].removeprefix(" "), False
    return text, None


def _finish_item(parts: list[str], struck: bool) -> ChecklistItem:
    lines = "".join(parts).split("\n")
    text = "\n".join(line.strip(" ") for line in lines).strip()
    text, marker_checked = _strip_marker(text)
    return ChecklistItem(text=text.strip(), checked=struck or bool(marker_checked))


def decode_checklist(markup: str | None) -> list[ChecklistItem]:
    """
    Parse every list item of ``markup`` into a ChecklistItem, in order.

    An item is checked when its ``style`` has a line-through, when its
    text sits inside ``<s>``/``<strike>``/``<del>`` or a line-through
    span, or when it starts with a checked glyph.
    """
    items: list[ChecklistItem] = []
    parts: list[str] | None = None
    struck = False
    strike_stack: list[str] = []

    for token in tokenize(markup):
        if token.kind is TokenKind.START:
            if token.name == "li":
                if parts is not None:
                    items.append(_finish_item(parts, struck))
                parts = []
                struck = _strikes(token.attrs)
                strike_stack = []
            elif parts is None:
                continue
            elif token.name == "br":
                parts.append("\n")
            elif not token.self_closing and (token.name in STRIKE_TAGS or _strikes(token.attrs)):
                strike_stack.append(token.name)
        elif token.kind is TokenKind.END:
            if parts is None:
                continue
            if token.name in ("li", "ul", "ol"):
                items.append(_finish_item(parts, struck))
                parts = None
            elif strike_stack and strike_stack[-1] == token.name:
                strike_stack.pop()
        elif token.kind is TokenKind.TEXT and parts is not None:
            text = _WHITESPACE_RUN.sub(" ", html.unescape(token.data))
            if strike_stack and text.strip():
                struck = True
            parts.append(text)

    if parts is not None:
        items.append(_finish_item(parts, struck))
    return items


def _escape_text(text: str) -> str:
    return html.escape(text, quote=False).replace("\r\n", "\n").replace("\n", "<br>")


def encode_checklist(items: Iterable[ChecklistItem]) -> str:
    """
    Serialize checklist items to markup.

    An empty sequence encodes to ``""``, not to an empty ``<ul></ul>``,
    so an untouched To-Do note still previews as empty.
    """
    rows = []
    for item in items:
        body = _escape_text(item.text)
        if item.checked:
            rows.append(f'<li style="{STRIKE_STYLE}">{CHECKED_GLYPH} {body}</li>')
        else:
            rows.append(f"<li>{UNCHECKED_GLYPH} {body}</li>")
    if not rows:
        return ""
    return "<ul>" + "".join(rows) + "</ul>"


def _normalize_entities(text: str) -> str:
    for entity in WHITESPACE_ENTITIES:
        text = text.replace(entity, " ")
    return text


def to_plain_preview(markup: str | None) -> str:
    """
    Reduce markup to readable card text.

    List items become ``• `` lines. Block boundaries start a new line
    unless the current one is still blank; ``<br>`` always does. Blank
    line runs collapse to one. Tag-free input only has its whitespace
    normalized.
    """
    lines: list[str] = []
    current: list[str] = []

    def line_break(soft: bool = True) -> None:
        line = "".join(current)
        if soft and not line.strip():
            return
        lines.append(line)
        current.clear()

    for token in tokenize(markup):
        if token.kind is TokenKind.TEXT:
            # only whitespace entities are decoded; &lt; and friends stay
            # escaped so previewing a preview never turns text into tags
            data = _normalize_entities(token.data)
            if not data.strip():
                # indentation between tags
                current.append(" ")
                continue
            first, *rest = data.split("\n")
            current.append(first)
            for part in rest:
                line_break(soft=False)
                current.append(part)
        elif token.kind is TokenKind.START:
            if token.name == "li":
                line_break()
                current.clear()
                current.append(BULLET)
            elif token.name == "br":
                line_break(soft=False)
            elif token.name in BLOCK_TAGS:
                line_break()
        elif token.kind is TokenKind.END and token.name in BLOCK_TAGS:
            line_break()
    line_break(soft=False)

    cleaned: list[str] = []
    for line in lines:
        line = " ".join(line.split())
        if line or (cleaned and cleaned[-1]):
            cleaned.append(line)
    return "\n".join(cleaned).strip()


def first_image_reference(markup: str | None) -> str | None:
    """Return the ``src`` of the first embedded image, if any."""
    for token in tokenize(markup):
        if token.kind is TokenKind.START and token.name == "img":
            src = token.attrs.get("src", "").strip()
            if src:
                return src
    return None


def embed_image(markup: str | None, src: str) -> str:
    """Append an image element for a picker-supplied reference such as a data URI."""
    return f'{markup or ""}<img src="{html.escape(src, quote=True)}" />'


def is_checklist_markup(markup: str | None) -> bool:
    """Whether ``markup`` contains at least one list item."""
    return any(
        token.kind is TokenKind.START and token.name == "li"
        for token in tokenize(markup)
    )
