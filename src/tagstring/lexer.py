"""Single-pass lexer for tagstring markup.

Splits a source string into text, entity, and tag tokens. The lexer never
interprets tag names; nesting is the builder's job.

Uses str.find for scanning (C implementation, low constant factor). Every
step advances the position, so tokenizing is O(n) with no backtracking.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from tagstring.errors import EmptyNameError, UnterminatedEntityError, UnterminatedTagError
from tagstring.location import SourceLocation
from tagstring.tokens import EntityToken, TagCloseToken, TagOpenToken, TextToken, Token


class Lexer:
    """Tokenizer for tagstring markup.

    Usage:
            >>> lexer = Lexer("a <b>c</b> &amp;")
            >>> for token in lexer.tokenize():
            ...     print(token)
        TextToken(content='a ', offset=0)
        TagOpenToken(name='b', offset=2)
        TextToken(content='c', offset=5)
        TagCloseToken(name='b', offset=6)
        TextToken(content=' ', offset=10)
        EntityToken(name='amp', offset=11)

    Thread Safety:
        Lexer instances are single-use. Create one per source string.

    """

    __slots__ = (
        "_source",
        "_source_len",  # Cached len(source)
        "_pos",
        "_source_file",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize lexer with source text.

        Args:
            source: Markup source text
            source_file: Optional origin of the source, used in error messages
        """
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._source_file = source_file

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into a token stream.

        Yields:
            Token objects in document order

        Raises:
            UnterminatedTagError: '<' with no following '>'
            UnterminatedEntityError: '&' with no following ';'
            EmptyNameError: '<>', '</>' or '&;'
        """
        source_len = self._source_len
        while self._pos < source_len:
            text = self._scan_text()
            if text is not None:
                yield text

            if self._pos >= source_len:
                break

            if self._source[self._pos] == "<":
                yield self._scan_tag()
            else:
                yield self._scan_entity()

    # =========================================================================
    # Scanners
    # =========================================================================

    def _scan_text(self) -> TextToken | None:
        """Consume the longest run of characters up to the next '<' or '&'.

        Returns:
            TextToken, or None if the run is empty.
        """
        start = self._pos
        end = self._find_markup_start(start)
        if end == start:
            return None
        self._pos = end
        return TextToken(self._source[start:end], start)

    def _scan_tag(self) -> TagOpenToken | TagCloseToken:
        """Consume ``<name>`` or ``</name>`` starting at the current '<'."""
        start = self._pos
        pos = start + 1
        is_close = self._source.startswith("/", pos)
        if is_close:
            pos += 1

        end = self._source.find(">", pos)
        if end == -1:
            raise UnterminatedTagError("unterminated tag: missing '>'", self._location(start))

        name = self._source[pos:end]
        if not name:
            raise EmptyNameError("empty tag name", self._location(start))

        self._pos = end + 1
        if is_close:
            return TagCloseToken(name, start)
        return TagOpenToken(name, start)

    def _scan_entity(self) -> EntityToken:
        """Consume ``&name;`` starting at the current '&'."""
        start = self._pos
        end = self._source.find(";", start + 1)
        if end == -1:
            raise UnterminatedEntityError(
                "unterminated entity: missing ';'", self._location(start)
            )

        name = self._source[start + 1 : end]
        if not name:
            raise EmptyNameError("empty entity name", self._location(start))

        self._pos = end + 1
        return EntityToken(name, start)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _find_markup_start(self, pos: int) -> int:
        """Position of the next '<' or '&' at or after pos, or end of source."""
        lt = self._source.find("<", pos)
        amp = self._source.find("&", pos)
        if lt == -1:
            return amp if amp != -1 else self._source_len
        if amp == -1:
            return lt
        return min(lt, amp)

    def _location(self, offset: int) -> SourceLocation:
        return SourceLocation.from_offset(self._source, offset, self._source_file)


def tokenize(source: str, source_file: str | None = None) -> list[Token]:
    """Tokenize a whole source string.

    The full token list is built before returning, so a failure anywhere in
    the source means no tokens are handed on at all.

    Args:
        source: Markup source text
        source_file: Optional origin of the source, used in error messages

    Returns:
        Tokens in document order

    Raises:
        TokenizeError: On unterminated or empty tags and entities
    """
    return list(Lexer(source, source_file=source_file).tokenize())


__all__ = ["Lexer", "tokenize"]
