"""Styled text builder for tagstring.

Walks a token stream with a stack of open tags and emits one run per text or
entity token, carrying the attributes of every tag open around it.

Attribute resolution:
    The stack is merged from the outermost tag to the innermost, so an inner
    tag's value wins when two tags set the same key. Keys set by only one tag
    are all kept. Tags with no registered attributes contribute nothing but
    still have to be closed in order.

Thread Safety:
    The tag stack and run list are local to each build() call. A builder can
    be reused, including from several threads at once.

"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from tagstring.config import BuildConfig, get_build_config
from tagstring.entities import resolve_entity
from tagstring.errors import UnbalancedTagsError, UnclosedTagError
from tagstring.location import SourceLocation
from tagstring.styled import Run, StyledText
from tagstring.tokens import EntityToken, TagCloseToken, TagOpenToken, TextToken, Token
from tagstring.utils.logger import get_logger

logger = get_logger(__name__)


class StyledTextBuilder[K, V]:
    """Turns tokens into StyledText using a tag → attributes registry.

    Usage:
            >>> from tagstring.lexer import tokenize
            >>> builder = StyledTextBuilder({"b": {"weight": "bold"}})
            >>> styled = builder.build(tokenize("a <b>b</b>"))
            >>> [(run.text, dict(run.attributes)) for run in styled]
            [('a ', {}), ('b', {'weight': 'bold'})]

    """

    __slots__ = ("_attributes_by_tag", "_config", "_source", "_source_file")

    def __init__(
        self,
        attributes_by_tag: Mapping[str, Mapping[K, V]],
        *,
        source: str | None = None,
        source_file: str | None = None,
        config: BuildConfig | None = None,
    ) -> None:
        """Initialize builder.

        Args:
            attributes_by_tag: Attributes to apply for each tag name
            source: Source the tokens came from, used for error locations
            source_file: Optional origin of the source
            config: Build options (defaults to the context's BuildConfig)
        """
        self._attributes_by_tag = attributes_by_tag
        self._source = source
        self._source_file = source_file
        self._config = config if config is not None else get_build_config()

    def build(self, tokens: Iterable[Token]) -> StyledText[K, V]:
        """Build styled text from tokens.

        Args:
            tokens: Tokens in document order

        Returns:
            StyledText with one run per text or known entity token

        Raises:
            UnbalancedTagsError: A close tag does not match the innermost open tag
            UnclosedTagError: Tags are still open at the end and the config
                requires them to be closed
        """
        stack: list[TagOpenToken] = []
        runs: list[Run[K, V]] = []

        for token in tokens:
            match token:
                case TextToken(content=content):
                    runs.append(Run(content, self._effective_attributes(stack)))
                case EntityToken(name=name):
                    replacement = resolve_entity(name)
                    if replacement is None:
                        logger.debug("Dropping unknown entity &%s; at offset %d", name, token.offset)
                        continue
                    runs.append(Run(replacement, self._effective_attributes(stack)))
                case TagOpenToken(name=name):
                    if name not in self._attributes_by_tag:
                        logger.debug("Tag <%s> has no registered attributes", name)
                    stack.append(token)
                case TagCloseToken():
                    self._close(stack, token)

        if stack:
            innermost = stack[-1]
            if self._config.require_closed_tags:
                logger.debug("Input ended with %d open tag(s)", len(stack))
                raise UnclosedTagError(
                    f"unclosed tag <{innermost.name}>",
                    expected=innermost.name,
                    location=self._location(innermost.offset),
                )
            logger.debug("Discarding %d open tag(s) at end of input", len(stack))

        styled = StyledText(tuple(runs))
        if self._config.coalesce_runs:
            return styled.coalesce()
        return styled

    def _close(self, stack: list[TagOpenToken], token: TagCloseToken) -> None:
        """Pop the innermost open tag, which must have the close tag's name."""
        if not stack:
            logger.debug("Close tag </%s> with no open tag", token.name)
            raise UnbalancedTagsError(
                f"close tag </{token.name}> has no matching open tag",
                found=token.name,
                location=self._location(token.offset),
            )

        opened = stack.pop()
        if opened.name != token.name:
            logger.debug("Close tag </%s> does not match <%s>", token.name, opened.name)
            raise UnbalancedTagsError(
                f"close tag </{token.name}> does not match open tag <{opened.name}>",
                expected=opened.name,
                found=token.name,
                location=self._location(token.offset),
            )

    def _effective_attributes(self, stack: list[TagOpenToken]) -> dict[K, V]:
        """Merge attributes of open tags, outermost first so inner keys win."""
        attributes: dict[K, V] = {}
        for opened in stack:
            tag_attributes = self._attributes_by_tag.get(opened.name)
            if tag_attributes:
                attributes.update(tag_attributes)
        return attributes

    def _location(self, offset: int) -> SourceLocation | None:
        if self._source is None:
            return None
        return SourceLocation.from_offset(self._source, offset, self._source_file)


def build[K, V](
    tokens: Iterable[Token],
    attributes_by_tag: Mapping[str, Mapping[K, V]],
    *,
    source: str | None = None,
    source_file: str | None = None,
    config: BuildConfig | None = None,
) -> StyledText[K, V]:
    """Build styled text from a token sequence.

    Args:
        tokens: Tokens in document order (e.g. from tagstring.lexer.tokenize)
        attributes_by_tag: Attributes to apply for each tag name
        source: Source the tokens came from, used for error locations
        source_file: Optional origin of the source
        config: Build options (defaults to the context's BuildConfig)

    Returns:
        StyledText

    Raises:
        UnbalancedTagsError: On mismatched, stray, or (by default) unclosed tags
    """
    builder = StyledTextBuilder(
        attributes_by_tag, source=source, source_file=source_file, config=config
    )
    return builder.build(tokens)


__all__ = ["StyledTextBuilder", "build"]
