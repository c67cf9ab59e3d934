"""Immutable node model for XML documents.

Every node is a frozen value: trees are built once (by the parser or by
hand) and never modified. Each node knows how to render itself back to
XML and how to diff itself against a peer of the same kind from the
expected document.

Node Hierarchy:
Node (base)
├── Null               sentinel for "no child"
├── Attribute
├── AttributeCollection
├── Declaration        the <?xml ...?> pseudo-attributes
├── Element
├── ElementCollection
└── Document           declaration + root element

Diffing:
``actual.diff(expected, path, options)`` is always invoked on the actual
side. Nodes of different kinds are never compared; doing so raises
NodeShapeError.

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import ClassVar, Union, overload

from xmldelta.diff import Diff, DiffSet, DiffSetBuilder
from xmldelta.engines import attribute_engine, element_engine
from xmldelta.errors import NodeContractError, NodeShapeError
from xmldelta.options import Options
from xmldelta.path import Path
from xmldelta.stringbuilder import StringBuilder
from xmldelta.utils.text import escape_attribute, escape_text, text_equals

# =============================================================================
# Base Node
# =============================================================================


class Node:
    """Base class for all nodes."""

    __slots__ = ()

    @property
    def is_null(self) -> bool:
        return False

    def to_xml(self) -> str:
        raise NotImplementedError

    def diff(self, expected: Node, path: Path, options: Options) -> DiffSet:
        raise NotImplementedError

    def _check_peer(self, expected: Node) -> None:
        if type(expected) is not type(self):
            raise NodeShapeError(self, expected)


def _require_name(owner: str, name: object) -> None:
    if not isinstance(name, str) or not name:
        msg = f"{owner} name must be a non-empty string, got {name!r}"
        raise NodeContractError(msg)


def _require_str(owner: str, field: str, value: object) -> None:
    if not isinstance(value, str):
        msg = f"{owner} {field} must be a string, got {type(value).__name__}"
        raise NodeContractError(msg)


# =============================================================================
# Null
# =============================================================================


class Null(Node):
    """The absence of a child node.

    There is exactly one instance, NULL; ``Null()`` returns it.

    """

    __slots__ = ()

    _instance: ClassVar[Null | None] = None

    def __new__(cls) -> Null:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def is_null(self) -> bool:
        return True

    def to_xml(self) -> str:
        return ""

    def diff(self, expected: Node, path: Path, options: Options) -> DiffSet:
        self._check_peer(expected)
        return DiffSet.EMPTY

    def __repr__(self) -> str:
        return "NULL"

    def __reduce__(self) -> str:
        return "NULL"


NULL = Null()


# =============================================================================
# Attributes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Attribute(Node):
    """A name/value pair on an element or on the declaration.

    XML: name="value"

    """

    name: str
    value: str = ""

    def __post_init__(self) -> None:
        _require_name("Attribute", self.name)
        _require_str("Attribute", "value", self.value)

    def to_xml(self) -> str:
        return f'{self.name}="{escape_attribute(self.value)}"'

    def diff(self, expected: Node, path: Path, options: Options) -> DiffSet:
        self._check_peer(expected)
        assert isinstance(expected, Attribute)

        if not text_equals(
            self.name, expected.name, bool(options & Options.IGNORE_ATTRIBUTES_NAME_CASE)
        ):
            return DiffSet(
                (Diff(str(path), "Unexpected attribute found.", expected.name, self.name),)
            )

        if not text_equals(
            self.value, expected.value, bool(options & Options.IGNORE_ATTRIBUTES_VALUE_CASE)
        ):
            return DiffSet(
                (
                    Diff(
                        path.to_string(expected.name),
                        "Unexpected attribute value found.",
                        expected.value,
                        self.value,
                    ),
                )
            )

        return DiffSet.EMPTY


@dataclass(frozen=True, slots=True)
class AttributeCollection(Node):
    """Ordered attributes of one element.

    Storage keeps source order; whether order matters when comparing is
    decided by Options.IGNORE_ATTRIBUTES_ORDER.

    """

    items: tuple[Attribute, ...] = ()

    EMPTY: ClassVar[AttributeCollection]

    def __post_init__(self) -> None:
        if not isinstance(self.items, tuple):
            msg = "AttributeCollection items must be a tuple"
            raise NodeContractError(msg)
        for item in self.items:
            if not isinstance(item, Attribute):
                msg = f"AttributeCollection accepts Attribute items, got {type(item).__name__}"
                raise NodeContractError(msg)

    @classmethod
    def of(cls, attributes: Iterable[Attribute | tuple[str, str]]) -> AttributeCollection:
        """Build a collection from Attributes or (name, value) pairs."""
        items = tuple(a if isinstance(a, Attribute) else Attribute(*a) for a in attributes)
        return cls(items) if items else cls.EMPTY

    def get(self, name: str, ignore_case: bool = False) -> Attribute | None:
        """Return the first attribute called name, or None."""
        for item in self.items:
            if text_equals(item.name, name, ignore_case):
                return item
        return None

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self.items)

    @overload
    def __getitem__(self, index: int) -> Attribute: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Attribute, ...]: ...

    def __getitem__(self, index: int | slice) -> Attribute | tuple[Attribute, ...]:
        return self.items[index]

    def to_xml(self) -> str:
        return " ".join(item.to_xml() for item in self.items)

    def diff(self, expected: Node, path: Path, options: Options) -> DiffSet:
        self._check_peer(expected)
        assert isinstance(expected, AttributeCollection)
        return attribute_engine(options).diff(self.items, expected.items, path, options)


AttributeCollection.EMPTY = AttributeCollection()


# =============================================================================
# Declaration
# =============================================================================


@dataclass(frozen=True, slots=True)
class Declaration(Node):
    """The XML declaration of a document.

    XML: <?xml version="1.0" encoding="UTF-8"?>

    An empty attribute collection stands for a document without
    declaration and renders as an empty string.

    """

    attributes: AttributeCollection = AttributeCollection.EMPTY

    EMPTY: ClassVar[Declaration]

    def __post_init__(self) -> None:
        if not isinstance(self.attributes, AttributeCollection):
            msg = "Declaration attributes must be an AttributeCollection"
            raise NodeContractError(msg)

    def to_xml(self) -> str:
        if not self.attributes:
            return ""
        return f"<?xml {self.attributes.to_xml()}?>"

    def diff(self, expected: Node, path: Path, options: Options) -> DiffSet:
        self._check_peer(expected)
        assert isinstance(expected, Declaration)
        return self.attributes.diff(
            expected.attributes, path.extend("xml", is_declaration=True), options
        )


Declaration.EMPTY = Declaration()


# =============================================================================
# Elements
# =============================================================================


@dataclass(frozen=True, slots=True)
class Element(Node):
    """An XML element.

    An element holds either text (value) or child elements (child); the
    parser never produces both.

    XML: <name attr="...">value</name> or <name attr="..."><child/></name>

    """

    name: str
    value: str = ""
    attributes: AttributeCollection = AttributeCollection.EMPTY
    child: ElementChild = NULL

    def __post_init__(self) -> None:
        _require_name("Element", self.name)
        _require_str("Element", "value", self.value)
        if not isinstance(self.attributes, AttributeCollection):
            msg = "Element attributes must be an AttributeCollection"
            raise NodeContractError(msg)
        if not isinstance(self.child, (Null, Element, ElementCollection)):
            msg = (
                "Element child must be NULL, an Element or an ElementCollection, "
                f"got {type(self.child).__name__}"
            )
            raise NodeContractError(msg)

    def to_xml(self) -> str:
        sb = StringBuilder()
        sb.append("<").append(self.name)
        if self.attributes:
            sb.append(" ").append(self.attributes.to_xml())
        if not self.value and self.child.is_null:
            return sb.append("/>").build()
        sb.append(">")
        sb.append(escape_text(self.value))
        sb.append(self.child.to_xml())
        sb.append("</").append(self.name).append(">")
        return sb.build()

    def diff(self, expected: Node, path: Path, options: Options) -> DiffSet:
        self._check_peer(expected)
        assert isinstance(expected, Element)

        if not text_equals(
            self.name, expected.name, bool(options & Options.IGNORE_ELEMENTS_NAME_CASE)
        ):
            return DiffSet(
                (Diff(str(path), "Unexpected element found.", expected.name, self.name),)
            )

        inner = path.extend(self.name)
        builder = DiffSetBuilder()

        if not text_equals(
            self.value, expected.value, bool(options & Options.IGNORE_ELEMENTS_VALUE_CASE)
        ):
            builder.add(
                Diff(str(inner), "Unexpected element value found.", expected.value, self.value)
            )

        builder.add(self.attributes.diff(expected.attributes, inner, options))
        builder.add(self._diff_child(expected.child, inner, options))
        return builder.build()

    def _diff_child(self, expected: ElementChild, path: Path, options: Options) -> DiffSet:
        if type(self.child) is type(expected):
            return self.child.diff(expected, path, options)
        # Different shapes (e.g. NULL vs. a collection): compare as sequences.
        return element_engine(options).diff(
            _as_elements(self.child), _as_elements(expected), path, options
        )


@dataclass(frozen=True, slots=True)
class ElementCollection(Node):
    """Ordered child elements of one parent.

    Storage keeps source order; whether order matters when comparing is
    decided by Options.IGNORE_ELEMENTS_ORDER.

    """

    items: tuple[Element, ...] = ()

    EMPTY: ClassVar[ElementCollection]

    def __post_init__(self) -> None:
        if not isinstance(self.items, tuple):
            msg = "ElementCollection items must be a tuple"
            raise NodeContractError(msg)
        for item in self.items:
            if not isinstance(item, Element):
                msg = f"ElementCollection accepts Element items, got {type(item).__name__}"
                raise NodeContractError(msg)

    @classmethod
    def of(cls, elements: Iterable[Element]) -> ElementCollection:
        items = tuple(elements)
        return cls(items) if items else cls.EMPTY

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Element]:
        return iter(self.items)

    @overload
    def __getitem__(self, index: int) -> Element: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Element, ...]: ...

    def __getitem__(self, index: int | slice) -> Element | tuple[Element, ...]:
        return self.items[index]

    def to_xml(self) -> str:
        return StringBuilder().extend(item.to_xml() for item in self.items).build()

    def diff(self, expected: Node, path: Path, options: Options) -> DiffSet:
        self._check_peer(expected)
        assert isinstance(expected, ElementCollection)
        return element_engine(options).diff(self.items, expected.items, path, options)


ElementCollection.EMPTY = ElementCollection()

ElementChild = Union[Null, Element, ElementCollection]


def _as_elements(child: ElementChild) -> tuple[Element, ...]:
    if isinstance(child, Element):
        return (child,)
    if isinstance(child, ElementCollection):
        return child.items
    return ()


# =============================================================================
# Document
# =============================================================================


@dataclass(frozen=True, slots=True)
class Document(Node):
    """A parsed XML fragment: declaration plus root element.

    The root is NULL for an empty document. A root handed over as an
    ElementCollection must hold exactly one Element; ``root`` unwraps it.

    """

    declaration: Declaration
    child: Element | ElementCollection | Null = NULL

    def __post_init__(self) -> None:
        if not isinstance(self.declaration, Declaration):
            msg = "Document requires a Declaration (use Declaration.EMPTY for none)"
            raise NodeContractError(msg)
        if isinstance(self.child, ElementCollection):
            if len(self.child) != 1:
                msg = f"Document root collection must hold one Element, got {len(self.child)}"
                raise NodeContractError(msg)
        elif not isinstance(self.child, (Element, Null)):
            msg = f"Document root must be an Element or NULL, got {type(self.child).__name__}"
            raise NodeContractError(msg)

    @property
    def root(self) -> Element | Null:
        if isinstance(self.child, ElementCollection):
            return self.child[0]
        return self.child

    def to_xml(self) -> str:
        return self.declaration.to_xml() + self.child.to_xml()

    def diff(self, expected: Node, path: Path, options: Options) -> DiffSet:
        self._check_peer(expected)
        assert isinstance(expected, Document)

        builder = DiffSetBuilder()
        builder.add(self.declaration.diff(expected.declaration, path, options))

        actual_root, expected_root = self.root, expected.root
        if isinstance(actual_root, Null) and isinstance(expected_root, Element):
            builder.add(Diff(str(path), "Missing element.", expected=expected_root.name))
        elif isinstance(actual_root, Element) and isinstance(expected_root, Null):
            builder.add(Diff(str(path), "Unexpected element found.", actual=actual_root.name))
        else:
            builder.add(actual_root.diff(expected_root, path, options))

        return builder.build()


__all__ = [
    "NULL",
    "Attribute",
    "AttributeCollection",
    "Declaration",
    "Document",
    "Element",
    "ElementChild",
    "ElementCollection",
    "Node",
    "Null",
]
