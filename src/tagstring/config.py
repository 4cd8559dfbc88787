"""ContextVar-based build configuration for tagstring.

Provides thread-local configuration using Python's ContextVars (PEP 567).
An explicit ``config=`` argument always wins over the context value.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from tagstring import attributed
    from tagstring.config import BuildConfig, build_config_context

    with build_config_context(BuildConfig(require_closed_tags=False)):
        styled = attributed("<b>never closed", {"b": {"weight": "bold"}})

"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Immutable build configuration.

    Attributes:
        require_closed_tags: Fail with UnclosedTagError when input ends while
            tags are still open. When False, leftover tags are discarded.
        coalesce_runs: Merge adjacent runs whose attributes are equal before
            returning the result.

    """

    require_closed_tags: bool = True
    coalesce_runs: bool = False

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "BuildConfig":
        """Create BuildConfig from a mapping.

        Only includes keys that are valid BuildConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Mapping with config values keyed by field name.

        Returns:
            New BuildConfig instance.

        Example:
            >>> config = BuildConfig.from_dict({"coalesce_runs": True, "x": 1})
            >>> config.coalesce_runs
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: BuildConfig = BuildConfig()

_build_config: ContextVar[BuildConfig] = ContextVar(
    "build_config",
    default=_DEFAULT_CONFIG,
)


def get_build_config() -> BuildConfig:
    """Get the build configuration for the current context."""
    return _build_config.get()


def set_build_config(config: BuildConfig) -> None:
    """Set build configuration for the current context.

    Args:
        config: BuildConfig instance to use for this context.

    """
    _build_config.set(config)


def reset_build_config() -> None:
    """Reset to the default configuration."""
    _build_config.set(_DEFAULT_CONFIG)


@contextmanager
def build_config_context(config: BuildConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Args:
        config: BuildConfig to use within the context.

    Example:
        >>> with build_config_context(BuildConfig(coalesce_runs=True)):
        ...     get_build_config().coalesce_runs
        True

    """
    previous = _build_config.get()
    _build_config.set(config)
    try:
        yield
    finally:
        _build_config.set(previous)


__all__ = [
    "BuildConfig",
    "get_build_config",
    "set_build_config",
    "reset_build_config",
    "build_config_context",
]
