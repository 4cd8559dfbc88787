"""Exception classes for tagstring.

Tokenization and building both fail by raising; there is never a partially
built result. Unknown entities and unregistered tags are not errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tagstring.location import SourceLocation


class TagStringError(Exception):
    """Base exception for all tagstring errors."""

    pass


class MarkupError(TagStringError):
    """Markup that cannot be turned into styled text.

    Carries an optional location pointing at the offending character.
    """

    def __init__(self, message: str, location: SourceLocation | None = None) -> None:
        """Initialize markup error with optional location.

        Args:
            message: Error description
            location: Where in the source the error was detected (optional)
        """
        self.message = message
        self.location = location

        prefix = f"{location} " if location is not None else ""

        super().__init__(f"{prefix}{message}")


class TokenizeError(MarkupError):
    """The lexer could not split the source into tokens."""

    pass


class UnterminatedTagError(TokenizeError):
    """A '<' with no closing '>' before the end of input."""

    pass


class UnterminatedEntityError(TokenizeError):
    """An '&' with no closing ';' before the end of input."""

    pass


class EmptyNameError(TokenizeError):
    """A tag or entity with nothing between its delimiters ('<>', '</>', '&;')."""

    pass


class UnbalancedTagsError(MarkupError):
    """Tags do not nest properly.

    Raised when a close tag has no open tag to match, or does not match the
    innermost open tag.
    """

    def __init__(
        self,
        message: str,
        *,
        expected: str | None = None,
        found: str | None = None,
        location: SourceLocation | None = None,
    ) -> None:
        """Initialize unbalanced tags error.

        Args:
            message: Error description
            expected: Name of the innermost open tag, if any
            found: Name of the close tag that was encountered, if any
            location: Where the offending tag starts (optional)
        """
        self.expected = expected
        self.found = found
        super().__init__(message, location)


class UnclosedTagError(UnbalancedTagsError):
    """Input ended while tags were still open."""

    pass
