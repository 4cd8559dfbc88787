"""
tagstring — Inline tag markup to styled text

Turns strings with lightweight tags into runs of text annotated with
attributes. Tags nest, inner tags win on conflicting keys, and ``&lt;``,
``&gt;`` and ``&amp;`` escape the markup characters. Zero runtime dependencies.

Quick Start:
    >>> from tagstring import attributed
    >>> styled = attributed(
    ...     "Testing <loud>this <green>text</green></loud> thing.",
    ...     {"loud": {"font": "Big"}, "green": {"color": "Green"}},
    ... )
    >>> [(run.text, dict(run.attributes)) for run in styled]
    [('Testing ', {}), ('this ', {'font': 'Big'}), ('text', {'font': 'Big', 'color': 'Green'}), (' thing.', {})]

    >>> # Or wrap the markup once and reuse it
    >>> from tagstring import TagString
    >>> TagString("<b>bold</b>").attributed({"b": {"weight": 700}}).text
    'bold'

Attribute keys and values are opaque: fonts, colors, or anything else the
host rendering system uses can be passed through unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from time import perf_counter

from tagstring.builder import StyledTextBuilder, build
from tagstring.config import (
    BuildConfig,
    build_config_context,
    get_build_config,
    reset_build_config,
    set_build_config,
)
from tagstring.entities import ENTITIES, resolve_entity
from tagstring.errors import (
    EmptyNameError,
    MarkupError,
    TagStringError,
    TokenizeError,
    UnbalancedTagsError,
    UnclosedTagError,
    UnterminatedEntityError,
    UnterminatedTagError,
)
from tagstring.lexer import Lexer, tokenize
from tagstring.location import SourceLocation
from tagstring.profiling import BuildAccumulator, get_build_accumulator, profiled_build
from tagstring.styled import Run, StyledText
from tagstring.tokens import EntityToken, TagCloseToken, TagOpenToken, TextToken, Token
from tagstring.utils.logger import get_logger

__version__ = "0.1.0"

logger = get_logger(__name__)


def attributed[K, V](
    source: str,
    attributes_by_tag: Mapping[str, Mapping[K, V]],
    *,
    config: BuildConfig | None = None,
    source_file: str | None = None,
) -> StyledText[K, V]:
    """Convert tag markup into styled text.

    Args:
        source: Markup text, e.g. ``"Hello <b>World</b> &amp; more"``
        attributes_by_tag: Attributes to apply for each tag name. Tags missing
            from the mapping are allowed and contribute no attributes.
        config: Build options (defaults to the context's BuildConfig)
        source_file: Optional origin of the source for error messages

    Returns:
        StyledText with one run per text span or known entity

    Raises:
        TokenizeError: Unterminated or empty tag or entity
        UnbalancedTagsError: Tags that do not nest properly

    Example:
        >>> attributed("A &amp; B", {}).text
        'A & B'
    """
    acc = get_build_accumulator()
    if acc is None:
        return _attributed(source, attributes_by_tag, config, source_file)

    start = perf_counter()
    try:
        styled = _attributed(source, attributes_by_tag, config, source_file)
    except TagStringError:
        acc.record_failure(len(source), perf_counter() - start)
        raise
    acc.record_build(len(source), len(styled), perf_counter() - start)
    return styled


def _attributed[K, V](
    source: str,
    attributes_by_tag: Mapping[str, Mapping[K, V]],
    config: BuildConfig | None,
    source_file: str | None,
) -> StyledText[K, V]:
    tokens = tokenize(source, source_file=source_file)
    return build(
        tokens, attributes_by_tag, source=source, source_file=source_file, config=config
    )


def attributed_or_none[K, V](
    source: str,
    attributes_by_tag: Mapping[str, Mapping[K, V]],
    *,
    config: BuildConfig | None = None,
    source_file: str | None = None,
) -> StyledText[K, V] | None:
    """Like attributed(), but return None instead of raising on bad markup.

    Test the result with ``is None``: an empty source succeeds with an empty
    StyledText, which is falsy because it has no runs.

    Example:
        >>> attributed_or_none("<b>x</i>", {}) is None
        True
    """
    try:
        return attributed(source, attributes_by_tag, config=config, source_file=source_file)
    except TagStringError as e:
        logger.debug("Markup rejected: %s", e)
        return None


@dataclass(frozen=True, slots=True)
class TagString:
    """A markup string that can be turned into styled text.

    Usage:
        >>> loud = TagString("Testing <loud>this</loud>")
        >>> loud.attributed({"loud": {"size": 40}}).attributes_at(8)
        {'size': 40}

    Attributes:
        string: The raw markup passed to the constructor

    """

    string: str

    def __str__(self) -> str:
        return self.string

    def tokenize(self) -> list[Token]:
        """Tokens of the markup, in document order."""
        return tokenize(self.string)

    def attributed[K, V](
        self,
        attributes_by_tag: Mapping[str, Mapping[K, V]],
        *,
        config: BuildConfig | None = None,
    ) -> StyledText[K, V]:
        """Convert this markup into styled text; see tagstring.attributed()."""
        return attributed(self.string, attributes_by_tag, config=config)

    def attributed_or_none[K, V](
        self,
        attributes_by_tag: Mapping[str, Mapping[K, V]],
        *,
        config: BuildConfig | None = None,
    ) -> StyledText[K, V] | None:
        """Convert this markup, returning None if the markup is invalid."""
        return attributed_or_none(self.string, attributes_by_tag, config=config)


__all__ = [  # noqa: RUF022 — grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "attributed",
    "attributed_or_none",
    "TagString",
    # Results
    "Run",
    "StyledText",
    # Components
    "Lexer",
    "tokenize",
    "StyledTextBuilder",
    "build",
    # Tokens
    "Token",
    "TextToken",
    "EntityToken",
    "TagOpenToken",
    "TagCloseToken",
    # Entities
    "ENTITIES",
    "resolve_entity",
    # Errors
    "TagStringError",
    "MarkupError",
    "TokenizeError",
    "UnterminatedTagError",
    "UnterminatedEntityError",
    "EmptyNameError",
    "UnbalancedTagsError",
    "UnclosedTagError",
    # Configuration (ContextVar-based)
    "BuildConfig",
    "get_build_config",
    "set_build_config",
    "reset_build_config",
    "build_config_context",
    # Profiling
    "BuildAccumulator",
    "get_build_accumulator",
    "profiled_build",
    # Location
    "SourceLocation",
]
