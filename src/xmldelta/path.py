"""Immutable paths locating differences inside a document.

A Path is an append-only chain of segments. Extending a path never changes
it; a new Path sharing the old one as its parent is returned instead, so
sibling branches of the recursive diff can share prefixes freely.

Rendering:
    >>> path = Path.empty().extend("SolarSystem").extend("Planet")
    >>> str(path)
    '<SolarSystem><Planet>'
    >>> path.to_string("mass")
    "<SolarSystem><Planet mass='...'>"
    >>> Path.empty().extend("xml", is_declaration=True).to_string("encoding")
    "<?xml encoding='...' ?>"

Thread Safety:
Path is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from xmldelta.stringbuilder import StringBuilder


@dataclass(frozen=True, slots=True)
class Path:
    """One segment of a location, linked to the segments before it.

    The root of every chain is the empty path, which has no name and
    renders as an empty string.

    Attributes:
        parent: Preceding path (None only for the empty path)
        name: Element name of this segment
        is_declaration: Whether the segment denotes the XML declaration

    """

    parent: Path | None = None
    name: str = ""
    is_declaration: bool = False

    @classmethod
    def empty(cls) -> Path:
        """Return the shared empty path."""
        return _EMPTY

    @property
    def is_empty(self) -> bool:
        return self.parent is None

    @property
    def depth(self) -> int:
        """Number of segments in the path."""
        depth = 0
        node = self
        while node.parent is not None:
            depth += 1
            node = node.parent
        return depth

    def extend(self, name: str, is_declaration: bool = False) -> Path:
        """Return a new path with one more segment.

        Args:
            name: Element name (or ``"xml"`` for the declaration)
            is_declaration: Render the segment as ``<?name ?>``

        Raises:
            ValueError: If name is empty.

        """
        if not name:
            msg = "Path segment name must be a non-empty string"
            raise ValueError(msg)
        return Path(parent=self, name=name, is_declaration=is_declaration)

    def segments(self) -> tuple[Path, ...]:
        """Return the non-empty segments from the root down to this one."""
        chain: list[Path] = []
        node = self
        while node.parent is not None:
            chain.append(node)
            node = node.parent
        chain.reverse()
        return tuple(chain)

    def __iter__(self) -> Iterator[str]:
        return (segment.name for segment in self.segments())

    def to_string(self, attribute_name: str = "") -> str:
        """Render the path, optionally highlighting an attribute of the last segment."""
        sb = StringBuilder()
        segments = self.segments()
        last = len(segments) - 1
        for index, segment in enumerate(segments):
            highlighted = attribute_name if index == last else ""
            segment._render(sb, highlighted)
        return sb.build()

    def _render(self, sb: StringBuilder, attribute_name: str) -> None:
        sb.append("<?" if self.is_declaration else "<")
        sb.append(self.name)
        if attribute_name:
            sb.append(f" {attribute_name}='...'")
        sb.append(" ?>" if self.is_declaration else ">")

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Path({self.to_string()!r})"


_EMPTY = Path()


__all__ = ["Path"]
