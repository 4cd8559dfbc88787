"""Typed tokens produced by the tagstring lexer.

Uses NamedTuples for token representation, providing:
- Immutability by default
- Structural pattern matching on fields
- Low memory footprint for long token streams

Every token records the offset of its first source character (the '<' or
'&' for markup tokens) so the builder can report where a problem is.

Thread Safety:
All tokens are immutable and safe to share across threads.

Usage:
    from tagstring.tokens import TagOpenToken, TextToken

    match token:
        case TextToken(content=content):
            print(f"text {content!r}")
        case TagOpenToken(name=name):
            print(f"open <{name}>")

"""

from __future__ import annotations

from typing import Literal, NamedTuple


class TextToken(NamedTuple):
    """Literal text containing no '<' or '&'.

    Attributes:
        content: The text, never empty.
        offset: Position of the first character in the source.

    """

    content: str
    offset: int

    @property
    def type(self) -> Literal["text"]:
        """Token type identifier for dispatch."""
        return "text"


class EntityToken(NamedTuple):
    """Entity reference, ``&name;``.

    Attributes:
        name: Text between '&' and ';'.
        offset: Position of the '&' in the source.

    """

    name: str
    offset: int

    @property
    def type(self) -> Literal["entity"]:
        """Token type identifier for dispatch."""
        return "entity"


class TagOpenToken(NamedTuple):
    """Opening tag, ``<name>``.

    Attributes:
        name: Text between '<' and '>'.
        offset: Position of the '<' in the source.

    """

    name: str
    offset: int

    @property
    def type(self) -> Literal["tag_open"]:
        """Token type identifier for dispatch."""
        return "tag_open"


class TagCloseToken(NamedTuple):
    """Closing tag, ``</name>``.

    Attributes:
        name: Text between '</' and '>'.
        offset: Position of the '<' in the source.

    """

    name: str
    offset: int

    @property
    def type(self) -> Literal["tag_close"]:
        """Token type identifier for dispatch."""
        return "tag_close"


# PEP 695 type alias for all tokens
type Token = TextToken | EntityToken | TagOpenToken | TagCloseToken


__all__ = [
    "TextToken",
    "EntityToken",
    "TagOpenToken",
    "TagCloseToken",
    "Token",
]
