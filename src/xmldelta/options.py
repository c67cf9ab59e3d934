"""Equality options for XML comparison.

Options is a bit set: each flag relaxes one structural aspect of the
comparison. Absent flags mean strict, case-sensitive and order-sensitive
comparison.

Example:
    >>> from xmldelta.options import Options
    >>> opts = Options.IGNORE_ALL_ORDER | Options.IGNORE_ELEMENTS_NAME_CASE
    >>> Options.IGNORE_ATTRIBUTES_ORDER in opts
    True
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntFlag


class Options(IntFlag):
    """Flags controlling which differences are ignored.

    Single flags:
        IGNORE_ELEMENTS_NAME_CASE: Compare element names case-insensitively
        IGNORE_ELEMENTS_VALUE_CASE: Compare element text case-insensitively
        IGNORE_ATTRIBUTES_NAME_CASE: Compare attribute names case-insensitively
        IGNORE_ATTRIBUTES_VALUE_CASE: Compare attribute values case-insensitively
        IGNORE_ELEMENTS_ORDER: Match sibling elements by name, not position
        IGNORE_ATTRIBUTES_ORDER: Match attributes by name, not position

    Presets:
        STRICT: Nothing ignored (same as NONE)
        LOOSE: Every case and order difference ignored

    """

    NONE = 0
    IGNORE_ELEMENTS_NAME_CASE = 1
    IGNORE_ELEMENTS_VALUE_CASE = 2
    IGNORE_ATTRIBUTES_NAME_CASE = 4
    IGNORE_ATTRIBUTES_VALUE_CASE = 8
    IGNORE_ELEMENTS_ORDER = 16
    IGNORE_ATTRIBUTES_ORDER = 32

    IGNORE_ELEMENTS_CASE = IGNORE_ELEMENTS_NAME_CASE | IGNORE_ELEMENTS_VALUE_CASE
    IGNORE_ATTRIBUTES_CASE = IGNORE_ATTRIBUTES_NAME_CASE | IGNORE_ATTRIBUTES_VALUE_CASE
    IGNORE_ALL_CASE = IGNORE_ELEMENTS_CASE | IGNORE_ATTRIBUTES_CASE
    IGNORE_ALL_ORDER = IGNORE_ELEMENTS_ORDER | IGNORE_ATTRIBUTES_ORDER

    STRICT = 0
    LOOSE = IGNORE_ALL_CASE | IGNORE_ALL_ORDER

    @classmethod
    def from_names(cls, names: Iterable[str]) -> Options:
        """Combine flags given by name.

        Names are matched case-insensitively and may use dashes, so
        ``"ignore-elements-order"`` and ``"IGNORE_ELEMENTS_ORDER"`` are
        equivalent. Useful when options come from a config file.

        Raises:
            ValueError: If a name does not denote a flag.

        """
        result = cls.NONE
        for name in names:
            key = name.strip().upper().replace("-", "_")
            try:
                result |= cls[key]
            except KeyError:
                msg = f"Unknown option: {name!r}"
                raise ValueError(msg) from None
        return result


__all__ = ["Options"]
