"""Protocols for xmldelta.

Defines the contracts between the node model and the sequence diff engines.
Attributes and elements both satisfy Named and Diffable, which is all an
engine needs to compare two sequences of them.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from xmldelta.diff import DiffSet
    from xmldelta.options import Options
    from xmldelta.path import Path


class Named(Protocol):
    """An item identified by name within its parent."""

    @property
    def name(self) -> str: ...


class Diffable(Protocol):
    """An item that can compare itself against an expected peer.

    Thread Safety:
        Implementations must not mutate either operand; every call returns
        a fresh DiffSet.

    """

    def diff(self, expected: Diffable, path: Path, options: Options) -> DiffSet:
        """Compare self (the actual item) against expected.

        Args:
            expected: Peer of the same kind from the expected document
            path: Location of the item's parent
            options: Active equality options

        Returns:
            Differences found, empty when equivalent
        """
        ...


class NamedDiffable(Named, Diffable, Protocol):
    """Both Named and Diffable; the item type accepted by diff engines."""


class DiffEngine(Protocol):
    """Strategy comparing two sequences of named items."""

    def diff(
        self,
        actual: Sequence[NamedDiffable],
        expected: Sequence[NamedDiffable],
        path: Path,
        options: Options,
    ) -> DiffSet:
        """Compare actual items against expected items.

        Args:
            actual: Items found in the actual document
            expected: Items found in the expected document
            path: Location of the items' parent element
            options: Active equality options

        Returns:
            Missing, unexpected and per-item differences
        """
        ...
