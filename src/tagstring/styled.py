"""Styled text result types.

A StyledText is an ordered tuple of runs, each pairing a piece of text with
the attributes in effect for it. Attribute keys and values are opaque here:
they are only compared and copied, never interpreted.

Thread Safety:
Run and StyledText are frozen. Their attribute mappings are built fresh per
run and must not be mutated by callers.

"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Run[K, V]:
    """A span of text with one resolved attribute mapping.

    Attributes:
        text: The literal text of the run
        attributes: Effective attributes for the whole run

    """

    text: str
    attributes: Mapping[K, V] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class StyledText[K, V]:
    """Ordered sequence of runs, the output of a build.

    Adjacent runs are kept separate even when their attributes are equal;
    call coalesce() to merge them.

    Usage:
            >>> styled = StyledText((Run("a", {}), Run("b", {"bold": True})))
            >>> styled.text
            'ab'
            >>> styled.attributes_at(1)
            {'bold': True}

    """

    runs: tuple[Run[K, V], ...] = ()

    @property
    def text(self) -> str:
        """Plain text of all runs concatenated."""
        return "".join(run.text for run in self.runs)

    def __str__(self) -> str:
        return self.text

    def __iter__(self) -> Iterator[Run[K, V]]:
        return iter(self.runs)

    def __len__(self) -> int:
        """Number of runs (not characters)."""
        return len(self.runs)

    def __add__(self, other: object) -> StyledText[K, V]:
        if not isinstance(other, StyledText):
            return NotImplemented
        return StyledText(self.runs + other.runs)

    def coalesce(self) -> StyledText[K, V]:
        """Merge adjacent runs with equal attributes.

        Values are matched by identity before falling back to ``==``, so
        values shared through the tag registry are never compared.

        Returns:
            New StyledText with the same text and per-character attributes
        """
        merged: list[Run[K, V]] = []
        parts: list[str] = []
        current: Mapping[K, V] | None = None
        for run in self.runs:
            if current is not None and _same_attributes(current, run.attributes):
                parts.append(run.text)
                continue
            if current is not None:
                merged.append(Run("".join(parts), current))
            current = run.attributes
            parts = [run.text]
        if current is not None:
            merged.append(Run("".join(parts), current))
        return StyledText(tuple(merged))

    def attributes_at(self, index: int) -> Mapping[K, V]:
        """Attributes in effect at a character index of ``text``.

        Args:
            index: 0-indexed character position

        Returns:
            Attribute mapping of the run containing the character

        Raises:
            IndexError: If index is negative or past the end of the text
        """
        if index < 0:
            raise IndexError(f"index {index} out of range")
        end = 0
        for run in self.runs:
            end += len(run.text)
            if index < end:
                return run.attributes
        raise IndexError(f"index {index} out of range for text of length {end}")


def _same_attributes(a: Mapping[Any, Any], b: Mapping[Any, Any]) -> bool:
    if a is b:
        return True
    if len(a) != len(b):
        return False
    for key, value in a.items():
        if key not in b:
            return False
        other = b[key]
        if value is not other and not value == other:
            return False
    return True


__all__ = ["Run", "StyledText"]
