"""Exception classes for xmldelta.

Structural differences between two documents are never raised; they are
reported as data in a DiffSet. Exceptions are reserved for malformed input
and for misuse of the node model.
"""

from __future__ import annotations


class XmlDeltaError(Exception):
    """Base exception for all xmldelta errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(XmlDeltaError):
    """Malformed markup in one of the two fragments being compared.

    Raised by the lexer or parser; neither attempts to repair its input.
    The string form leads with whatever location is known, so
    ``str(ParseError("Unclosed element <a>", 1, 1, "expected.xml"))`` reads
    ``expected.xml:1:1 Unclosed element <a>``.

    Attributes:
        side: ``"expected"`` or ``"actual"`` once compare() has caught the
            error, None when parse() was called directly
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Record the failure and where in the fragment it happened.

        Args:
            message: What is wrong with the markup
            lineno: 1-indexed line of the offending token
            col_offset: 1-indexed column; ignored without lineno
            source_file: Name the fragment was read from, if any
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file
        self.side: str | None = None

        prefix = _location_prefix(source_file, lineno, col_offset)
        super().__init__(f"{prefix} {message}" if prefix else message)


def _location_prefix(source_file: str | None, lineno: int | None, col_offset: int | None) -> str:
    """Render ``file:line:column``, leaving out the parts that are unknown."""
    parts: list[str] = [source_file] if source_file else []
    if lineno is not None:
        parts.append(str(lineno))
        if col_offset is not None:
            parts.append(str(col_offset))
    return ":".join(parts)


class NodeContractError(XmlDeltaError, ValueError):
    """Invalid arguments passed to a node constructor.

    Raised eagerly, at construction time, for an empty element name, a
    missing declaration, a child of the wrong type and similar mistakes.
    """

    pass


class NodeShapeError(XmlDeltaError, TypeError):
    """Two nodes of different kinds were diffed against each other.

    Parents only compare children of the same kind, so this always
    indicates a programming error on the caller's side.
    """

    def __init__(self, actual: object, expected: object) -> None:
        """Initialize shape error.

        Args:
            actual: Node the diff was invoked on
            expected: Node it was compared against
        """
        self.actual_type = type(actual).__name__
        self.expected_type = type(expected).__name__
        super().__init__(
            f"Cannot diff {self.actual_type} against {self.expected_type}"
        )
