"""
xmldelta: Structural comparison of XML fragments

Parses an expected and an actual XML fragment into immutable trees and
reports every structural difference between them as a path-annotated
record. Element and attribute order, and the case of names and values,
can be ignored selectively.

Quick Start:
    >>> from xmldelta import Options, compare
    >>> diffs = compare("<Star>Sun</Star>", "<Star>Vega</Star>")
    >>> for diff in diffs:
    ...     print(diff.path, diff.message, diff.expected, diff.actual)
    <Star> Unexpected element value found. Sun Vega

    >>> compare("<a x='1' y='2'/>", "<a y='2' x='1'/>", Options.IGNORE_ATTRIBUTES_ORDER).is_empty
    True

Working with trees directly:
    >>> from xmldelta import Path, parse
    >>> actual, expected = parse("<a><b/></a>"), parse("<a><c/></a>")
    >>> len(actual.diff(expected, Path.empty(), Options.NONE))
    2
"""

from __future__ import annotations

from typing import Protocol

from xmldelta.config import (
    CompareConfig,
    compare_config_context,
    get_compare_config,
    reset_compare_config,
    set_compare_config,
)
from xmldelta.diff import Diff, DiffSet, DiffSetBuilder
from xmldelta.engines import (
    OrderedDiffEngine,
    UnorderedDiffEngine,
    attribute_engine,
    element_engine,
)
from xmldelta.errors import NodeContractError, NodeShapeError, ParseError, XmlDeltaError
from xmldelta.lexer import Lexer
from xmldelta.location import SourceLocation
from xmldelta.nodes import (
    NULL,
    Attribute,
    AttributeCollection,
    Declaration,
    Document,
    Element,
    ElementCollection,
    Node,
    Null,
)
from xmldelta.options import Options
from xmldelta.parser import Parser
from xmldelta.path import Path
from xmldelta.tokens import Token, TokenType
from xmldelta.utils.logger import get_logger

__version__ = "0.1.0"

logger = get_logger(__name__)


class _Readable(Protocol):
    def read(self) -> str: ...


def parse(source: str, *, source_file: str | None = None) -> Document:
    """Parse an XML fragment into a Document.

    Args:
        source: XML text; the declaration is optional
        source_file: Optional source file path for error messages

    Returns:
        Document tree (root is NULL for an empty fragment)

    Raises:
        ParseError: If the source is not well-formed

    Example:
        >>> doc = parse('<?xml version="1.0"?><Planet mass="0.055">Mercury</Planet>')
        >>> doc.root.attributes.get("mass").value
        '0.055'
    """
    doc = Parser(source, source_file=source_file).parse()
    root = doc.root
    logger.debug(
        "Parsed %d characters from %s, root %s",
        len(source),
        source_file or "<string>",
        f"<{root.name}>" if isinstance(root, Element) else "NULL",
    )
    return doc


def compare(
    expected: str | _Readable,
    actual: str | _Readable,
    options: Options | None = None,
    *,
    source_file: str | None = None,
) -> DiffSet:
    """Compare two XML fragments.

    Args:
        expected: Expected XML text, or a text stream to read it from
        actual: Actual XML text, or a text stream to read it from
        options: Equality options; None uses the active CompareConfig
        source_file: Optional name used in parse error messages

    Returns:
        Differences found, empty when the fragments are equivalent

    Raises:
        ParseError: If either fragment is malformed; ``error.side`` tells
            which one ("expected" or "actual")

    """
    if options is None:
        options = get_compare_config().options

    expected_doc = _parse_side("expected", expected, source_file)
    actual_doc = _parse_side("actual", actual, source_file)

    diffs = actual_doc.diff(expected_doc, Path.empty(), options)
    logger.debug("Compared documents with options %r: %d difference(s)", options, len(diffs))
    return diffs


def _parse_side(side: str, source: str | _Readable, source_file: str | None) -> Document:
    text = source if isinstance(source, str) else source.read()
    try:
        return parse(text, source_file=source_file)
    except ParseError as e:
        e.side = side
        logger.debug("Cannot parse the %s XML fragment: %s", side, e)
        raise


__all__ = [
    "NULL",
    "Attribute",
    "AttributeCollection",
    "CompareConfig",
    "Declaration",
    "Diff",
    "DiffSet",
    "DiffSetBuilder",
    "Document",
    "Element",
    "ElementCollection",
    "Lexer",
    "Node",
    "NodeContractError",
    "NodeShapeError",
    "Null",
    "Options",
    "OrderedDiffEngine",
    "ParseError",
    "Parser",
    "Path",
    "SourceLocation",
    "Token",
    "TokenType",
    "UnorderedDiffEngine",
    "XmlDeltaError",
    "__version__",
    "attribute_engine",
    "compare",
    "compare_config_context",
    "element_engine",
    "get_compare_config",
    "parse",
    "reset_compare_config",
    "set_compare_config",
]
