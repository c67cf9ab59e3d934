"""Sequence diff engines for attributes and child elements.

Two interchangeable strategies compare sequences of named items:

- OrderedDiffEngine walks both sequences by position. Once the items at
  one position disagree by name, the sequences are considered out of step:
  the pair is reported as one unexpected and one missing item and the
  comparison stops there.
- UnorderedDiffEngine pairs items by name regardless of position.

The factory functions pick a strategy per collection kind from the active
Options, so attributes and elements may follow different ordering policies.

Thread Safety:
Engines hold only immutable settings and may be shared freely.

"""

from __future__ import annotations

from collections.abc import Sequence

from xmldelta.diff import Diff, DiffSet, DiffSetBuilder
from xmldelta.options import Options
from xmldelta.path import Path
from xmldelta.protocols import DiffEngine, NamedDiffable
from xmldelta.utils.text import text_equals

ELEMENT = "element"
ATTRIBUTE = "attribute"


class _SequenceDiffEngine:
    """Shared settings and message vocabulary of both strategies."""

    __slots__ = ("_ignore_case", "_kind")

    def __init__(self, kind: str, ignore_case: bool = False) -> None:
        """Initialize engine.

        Args:
            kind: Item kind used in messages ("element" or "attribute")
            ignore_case: Match item names case-insensitively
        """
        self._kind = kind
        self._ignore_case = ignore_case

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def ignore_case(self) -> bool:
        return self._ignore_case

    def _same_name(self, first: NamedDiffable, second: NamedDiffable) -> bool:
        return text_equals(first.name, second.name, self._ignore_case)

    def _missing(self, path: Path, item: NamedDiffable) -> Diff:
        return Diff(str(path), f"Missing {self._kind}.", expected=item.name)

    def _unexpected(self, path: Path, item: NamedDiffable) -> Diff:
        return Diff(str(path), f"Unexpected {self._kind} found.", actual=item.name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self._kind!r}, ignore_case={self._ignore_case})"


class OrderedDiffEngine(_SequenceDiffEngine):
    """Compares two sequences position by position."""

    __slots__ = ()

    def diff(
        self,
        actual: Sequence[NamedDiffable],
        expected: Sequence[NamedDiffable],
        path: Path,
        options: Options,
    ) -> DiffSet:
        builder = DiffSetBuilder()

        for index, expected_item in enumerate(expected):
            if index >= len(actual):
                builder.add(self._missing(path, expected_item))
                continue

            actual_item = actual[index]
            item_diffs = actual_item.diff(expected_item, path, options)
            if item_diffs.is_empty:
                continue

            if not self._same_name(actual_item, expected_item):
                # Out of step: anything compared after this point is noise.
                builder.add(self._unexpected(path, actual_item))
                builder.add(self._missing(path, expected_item))
                return builder.build()

            builder.add(item_diffs)

        for actual_item in actual[len(expected):]:
            builder.add(self._unexpected(path, actual_item))

        return builder.build()


class UnorderedDiffEngine(_SequenceDiffEngine):
    """Compares two sequences by pairing items with equal names."""

    __slots__ = ()

    def diff(
        self,
        actual: Sequence[NamedDiffable],
        expected: Sequence[NamedDiffable],
        path: Path,
        options: Options,
    ) -> DiffSet:
        builder = DiffSetBuilder()
        unmatched = list(range(len(actual)))

        for expected_item in expected:
            candidates = [i for i in unmatched if self._same_name(actual[i], expected_item)]
            if not candidates:
                builder.add(self._missing(path, expected_item))
                continue

            best_index, best_diffs = self._best_match(
                actual, candidates, expected_item, path, options
            )
            unmatched.remove(best_index)
            builder.add(best_diffs)

        for index in unmatched:
            builder.add(self._unexpected(path, actual[index]))

        return builder.build()

    @staticmethod
    def _best_match(
        actual: Sequence[NamedDiffable],
        candidates: list[int],
        expected_item: NamedDiffable,
        path: Path,
        options: Options,
    ) -> tuple[int, DiffSet]:
        """Pick the candidate closest to expected_item.

        The first exact match wins; otherwise the candidate with the fewest
        differences, the earliest one on ties.
        """
        best: tuple[int, DiffSet] | None = None
        for index in candidates:
            item_diffs = actual[index].diff(expected_item, path, options)
            if item_diffs.is_empty:
                return index, item_diffs
            if best is None or len(item_diffs) < len(best[1]):
                best = (index, item_diffs)
        assert best is not None
        return best


def attribute_engine(options: Options) -> DiffEngine:
    """Return the engine comparing attribute collections under options."""
    ignore_case = bool(options & Options.IGNORE_ATTRIBUTES_NAME_CASE)
    if options & Options.IGNORE_ATTRIBUTES_ORDER:
        return UnorderedDiffEngine(ATTRIBUTE, ignore_case)
    return OrderedDiffEngine(ATTRIBUTE, ignore_case)


def element_engine(options: Options) -> DiffEngine:
    """Return the engine comparing sibling elements under options."""
    ignore_case = bool(options & Options.IGNORE_ELEMENTS_NAME_CASE)
    if options & Options.IGNORE_ELEMENTS_ORDER:
        return UnorderedDiffEngine(ELEMENT, ignore_case)
    return OrderedDiffEngine(ELEMENT, ignore_case)


__all__ = [
    "ATTRIBUTE",
    "ELEMENT",
    "OrderedDiffEngine",
    "UnorderedDiffEngine",
    "attribute_engine",
    "element_engine",
]
