"""
Markup Tokenizer.

A single left-to-right scan that splits editor markup into text runs,
start tags, end tags and ignorable declarations. It never backtracks and
never raises: a ``<`` that does not open a well-formed tag is kept as text,
and an unterminated tag swallows nothing but is emitted as text.

Usage:
    from noteku.services.markup import tokenize, TokenKind

    for token in tokenize('<li style="x">milk</li>'):
        if token.kind is TokenKind.START and token.name == "li":
            ...
"""

import html
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

BLOCK_TAGS = frozenset({
    "p", "div", "ul", "ol", "li", "blockquote", "pre", "tr", "table",
    "h1", "h2", "h3", "h4", "h5", "h6", "hr",
})

VOID_TAGS = frozenset({"br", "img", "hr", "input", "meta", "link", "wbr"})


class TokenKind(Enum):
    TEXT = "text"
    START = "start"
    END = "end"
    IGNORED = "ignored"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    data: str = ""
    name: str = ""
    attrs: dict[str, str] = field(default_factory=dict)
    self_closing: bool = False


def _find_tag_end(markup: str, start: int) -> int:
    """Index of the ``>`` closing a tag opened before ``start``, or -1.

    Quotes are honoured only right after ``=`` so stray apostrophes in
    malformed tags do not hide the closing bracket.
    """
    quote = ""
    prev = ""
    for index in range(start, len(markup)):
        ch = markup[index]
        if quote:
            if ch == quote:
                quote = ""
        elif ch in "\"'" and prev == "=":
            quote = ch
        elif ch == ">":
            return index
        if not ch.isspace():
            prev = ch
    return -1


def _parse_attrs(raw: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    index = 0
    length = len(raw)
    while index < length:
        while index < length and (raw[index].isspace() or raw[index] == "/"):
            index += 1
        name_start = index
        while index < length and not raw[index].isspace() and raw[index] != "=":
            index += 1
        name = raw[name_start:index].lower()
        while index < length and raw[index].isspace():
            index += 1
        value = ""
        if index < length and raw[index] == "=":
            index += 1
            while index < length and raw[index].isspace():
                index += 1
            if index < length and raw[index] in "\"'":
                quote = raw[index]
                end = raw.find(quote, index + 1)
                if end == -1:
                    end = length
                value = raw[index + 1:end]
                index = end + 1
            else:
                value_start = index
                while index < length and not raw[index].isspace():
                    index += 1
                value = raw[value_start:index]
        if name:
            attrs.setdefault(name, html.unescape(value))
        elif index == name_start:
            index += 1
    return attrs


def _parse_tag(body: str) -> Token:
    if body.startswith(("!", "?")):
        return Token(TokenKind.IGNORED, data=body)

    is_end = body.startswith("/")
    if is_end:
        body = body[1:].lstrip()

    self_closing = body.endswith("/")
    if self_closing:
        body = body[:-1]

    name_end = 0
    while name_end < len(body) and (body[name_end].isalnum() or body[name_end] in "-:"):
        name_end += 1
    name = body[:name_end].lower()
    if not name:
        return Token(TokenKind.IGNORED, data=body)

    if is_end:
        return Token(TokenKind.END, name=name)
    return Token(
        TokenKind.START,
        name=name,
        attrs=_parse_attrs(body[name_end:]),
        self_closing=self_closing or name in VOID_TAGS,
    )


def tokenize(markup: str | None) -> Iterator[Token]:
    """Yield tokens for ``markup`` in document order."""
    if not markup:
        return

    length = len(markup)
    index = 0
    text_start = 0
    while index < length:
        lt = markup.find("<", index)
        if lt == -1:
            break

        if markup.startswith("<!--", lt):
            if lt > text_start:
                yield Token(TokenKind.TEXT, data=markup[text_start:lt])
            end = markup.find("-->", lt + 4)
            index = text_start = length if end == -1 else end + 3
            continue

        following = markup[lt + 1:lt + 2]
        if not (following.isalpha() or following in ("/", "!", "?")):
            index = lt + 1
            continue

        close = _find_tag_end(markup, lt + 1)
        if close == -1:
            break

        if lt > text_start:
            yield Token(TokenKind.TEXT, data=markup[text_start:lt])
        yield _parse_tag(markup[lt + 1:close].strip())
        index = text_start = close + 1

    if text_start < length:
        yield Token(TokenKind.TEXT, data=markup[text_start:])
