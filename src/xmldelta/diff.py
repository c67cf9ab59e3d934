"""Difference records and the collections that hold them.

Diff is a single finding; DiffSet an immutable, ordered sequence of
findings; DiffSetBuilder the transient accumulator used while a diff
recurses through the tree.

Example:
    >>> diff = Diff("<Star>", "Unexpected element value found.", "Sun", "Vega")
    >>> diffs = DiffSetBuilder().add(diff).build()
    >>> len(diffs), diffs.is_empty
    (1, False)

Thread Safety:
Diff and DiffSet are frozen and safe to share across threads. A builder is
local to one diff call and must not be shared.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import ClassVar, overload


@dataclass(frozen=True, slots=True)
class Diff:
    """A single structural difference.

    Attributes:
        path: Rendered location of the difference (see Path.to_string)
        message: Human-readable description, e.g. ``"Missing element."``
        expected: Expected name or value ("" when not applicable)
        actual: Actual name or value ("" when not applicable)

    """

    path: str
    message: str
    expected: str = ""
    actual: str = ""


@dataclass(frozen=True, slots=True)
class DiffSet:
    """Immutable ordered collection of differences.

    An empty DiffSet means the two documents are equivalent under the
    options used for the comparison.

    """

    items: tuple[Diff, ...] = ()

    EMPTY: ClassVar[DiffSet]

    @property
    def is_empty(self) -> bool:
        return not self.items

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Diff]:
        return iter(self.items)

    def __bool__(self) -> bool:
        return bool(self.items)

    @overload
    def __getitem__(self, index: int) -> Diff: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Diff, ...]: ...

    def __getitem__(self, index: int | slice) -> Diff | tuple[Diff, ...]:
        return self.items[index]

    def __add__(self, other: DiffSet) -> DiffSet:
        if not isinstance(other, DiffSet):
            return NotImplemented
        if not other.items:
            return self
        if not self.items:
            return other
        return DiffSet(self.items + other.items)


DiffSet.EMPTY = DiffSet()


class DiffSetBuilder:
    """Accumulates differences in emission order.

    Usage:
            >>> builder = DiffSetBuilder()
            >>> builder.add(attribute_diffs).add(child_diffs)
            >>> result = builder.build()

    """

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[Diff] = []

    def add(self, item: Diff | DiffSet) -> DiffSetBuilder:
        """Append one Diff, or every Diff of a DiffSet (flattened).

        Returns:
            self for method chaining
        """
        if isinstance(item, Diff):
            self._items.append(item)
        elif isinstance(item, DiffSet):
            self._items.extend(item.items)
        else:
            msg = f"Expected Diff or DiffSet, got {type(item).__name__}"
            raise TypeError(msg)
        return self

    def build(self) -> DiffSet:
        """Freeze the accumulated differences into a DiffSet."""
        if not self._items:
            return DiffSet.EMPTY
        return DiffSet(tuple(self._items))

    def __len__(self) -> int:
        return len(self._items)


__all__ = ["Diff", "DiffSet", "DiffSetBuilder"]
