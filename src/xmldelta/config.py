"""ContextVar-based comparison configuration for xmldelta.

Provides thread-local configuration using Python's ContextVars (PEP 567).
compare() falls back to the active config when no options are passed, and
the parser reads its whitespace policy from it.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from xmldelta import compare
    from xmldelta.config import CompareConfig, compare_config_context
    from xmldelta.options import Options

    with compare_config_context(CompareConfig(options=Options.IGNORE_ALL_ORDER)):
        diffs = compare(expected_xml, actual_xml)

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

from xmldelta.options import Options


@dataclass(frozen=True, slots=True)
class CompareConfig:
    """Immutable comparison configuration.

    Attributes:
        options: Equality options used when compare() receives none
        preserve_whitespace: Keep whitespace-only text runs as element values
            instead of dropping them while parsing

    """

    options: Options = Options.NONE
    preserve_whitespace: bool = False

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> CompareConfig:
        """Create CompareConfig from dictionary.

        Unknown keys are silently ignored. ``options`` may be an Options
        value, a plain int, or a list of flag names.

        Example:
            >>> config = CompareConfig.from_dict({
            ...     "options": ["ignore_elements_order", "ignore_attributes_order"],
            ...     "unknown_key": "ignored",
            ... })
            >>> config.options == Options.IGNORE_ALL_ORDER
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}

        raw_options = filtered.get("options")
        if isinstance(raw_options, (list, tuple)):
            filtered["options"] = Options.from_names(raw_options)
        elif isinstance(raw_options, int):
            filtered["options"] = Options(raw_options)

        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: CompareConfig = CompareConfig()

_compare_config: ContextVar[CompareConfig] = ContextVar(
    "compare_config",
    default=_DEFAULT_CONFIG,
)


def get_compare_config() -> CompareConfig:
    """Get current comparison configuration (thread-local)."""
    return _compare_config.get()


def set_compare_config(config: CompareConfig) -> None:
    """Set comparison configuration for current context.

    Args:
        config: CompareConfig instance to use for this context.

    """
    _compare_config.set(config)


def reset_compare_config() -> None:
    """Reset to default configuration."""
    _compare_config.set(_DEFAULT_CONFIG)


@contextmanager
def compare_config_context(config: CompareConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config on exit, even if an exception is raised.

    Example:
        >>> with compare_config_context(CompareConfig(preserve_whitespace=True)):
        ...     doc = parse("<a> </a>")
        >>> doc.root.value
        ' '

    """
    previous = _compare_config.get()
    _compare_config.set(config)
    try:
        yield
    finally:
        _compare_config.set(previous)


__all__ = [
    "CompareConfig",
    "compare_config_context",
    "get_compare_config",
    "reset_compare_config",
    "set_compare_config",
]
