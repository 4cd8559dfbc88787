"""Entity table for tagstring markup.

Only the three entities needed to escape markup characters are recognized.
The table is read-only; anything else is an unknown entity and is dropped
by the builder.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

ENTITIES: Mapping[str, str] = MappingProxyType(
    {
        "lt": "<",
        "gt": ">",
        "amp": "&",
    }
)


def resolve_entity(name: str) -> str | None:
    """Return the replacement text for an entity name.

    Names are case-sensitive: ``&AMP;`` is unknown.

    Args:
        name: Entity name without delimiters (e.g. "amp")

    Returns:
        Replacement string, or None for an unknown entity

    Example:
        >>> resolve_entity("lt")
        '<'
        >>> resolve_entity("nbsp") is None
        True
    """
    return ENTITIES.get(name)


__all__ = ["ENTITIES", "resolve_entity"]
