"""Tokenizer for the inline markup produced by command handlers.

The format is a small HTML-like subset: ``<span class="x">...</span>`` scopes,
``<br>`` line breaks and self-closing tags such as ``<hr/>``. Tokenizing never
fails; an unterminated ``<`` is kept as literal text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

LINE_BREAK_TAG = "br"

_CLASS_ATTR_RE = re.compile(r"""(?:^|\s)class\s*=\s*(["'])(.*?)\1""")


class TokenKind(str, Enum):
    """Kinds of markup tokens."""

    TEXT = "text"
    TAG_OPEN = "tag_open"
    TAG_CLOSE = "tag_close"
    LINE_BREAK = "line_break"
    SELF_CLOSING = "self_closing"


@dataclass(frozen=True, slots=True)
class Token:
    """One unit of parsed markup."""

    kind: TokenKind
    text: str = ""
    tag: str | None = None
    style_class: str | None = None

    @classmethod
    def text_run(cls, text: str) -> Token:
        return cls(kind=TokenKind.TEXT, text=text)


def tokenize(markup: str) -> list[Token]:
    """Split ``markup`` into an ordered list of tokens."""
    tokens: list[Token] = []
    buffer: list[str] = []
    index = 0
    length = len(markup)

    def flush() -> None:
        run = "".join(buffer)
        buffer.clear()
        if run.strip():
            tokens.append(Token.text_run(run))

    while index < length:
        char = markup[index]
        if char != "<":
            buffer.append(char)
            index += 1
            continue

        tag_end = markup.find(">", index + 1)
        if tag_end == -1:
            buffer.append(markup[index:])
            break

        token = _classify_tag(markup[index + 1 : tag_end])
        if token is None:
            buffer.append(markup[index : tag_end + 1])
        else:
            flush()
            tokens.append(token)
        index = tag_end + 1

    flush()
    return tokens


def plain_text(tokens: list[Token]) -> str:
    """Concatenate the text payloads of ``tokens`` in order."""
    return "".join(token.text for token in tokens if token.kind == TokenKind.TEXT)


def _classify_tag(body: str) -> Token | None:
    stripped = body.strip()
    if not stripped or stripped == "/":
        return None

    if _tag_name(stripped.rstrip("/").lstrip("/")) == LINE_BREAK_TAG:
        return Token(kind=TokenKind.LINE_BREAK, tag=LINE_BREAK_TAG)

    if stripped.startswith("/"):
        return Token(kind=TokenKind.TAG_CLOSE, tag=_tag_name(stripped[1:]))

    if stripped.endswith("/"):
        return Token(kind=TokenKind.SELF_CLOSING, tag=_tag_name(stripped[:-1]))

    match = _CLASS_ATTR_RE.search(stripped)
    return Token(
        kind=TokenKind.TAG_OPEN,
        tag=_tag_name(stripped),
        style_class=match.group(2) if match else None,
    )


def _tag_name(body: str) -> str:
    parts = body.split(None, 1)
    return parts[0] if parts else ""
