"""Recursive descent parser producing a Document tree.

Consumes the token stream from Lexer and builds immutable nodes bottom-up:
each element is finished (text, attributes and children collected) before
its parent is.

Tree shape:
- An element without child elements gets NULL as its child and its text
  as its value.
- An element with one or more child elements gets an ElementCollection as
  its child; text mixed in between those children is discarded.
- Comments and processing instructions are skipped; CDATA sections count
  as text.
- The text fragments of an element are joined first. A joined value that
  is whitespace-only becomes "" unless the active CompareConfig sets
  preserve_whitespace, so a comment splitting a run never changes it.

Thread Safety:
Parser instances are single-use and not thread-safe. Create one per
parse operation. Configuration is read from ContextVar (thread-local).
The resulting tree is immutable and thread-safe.

"""

from __future__ import annotations

from xmldelta.config import get_compare_config
from xmldelta.errors import ParseError
from xmldelta.lexer import Lexer
from xmldelta.location import SourceLocation
from xmldelta.nodes import (
    NULL,
    AttributeCollection,
    Declaration,
    Document,
    Element,
    ElementCollection,
)
from xmldelta.tokens import Token, TokenType

_SKIPPED = frozenset({TokenType.COMMENT, TokenType.PROCESSING_INSTRUCTION})


class Parser:
    """Recursive descent parser for XML fragments.

    Usage:
            >>> doc = Parser('<?xml version="1.0"?><Star>Sun</Star>').parse()
            >>> doc.root
        Element(name='Star', value='Sun', ...)

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_tokens",
        "_pos",
        "_current",
        "_preserve_whitespace",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize parser with source text.

        Args:
            source: XML source text
            source_file: Optional source file path for error messages

        """
        self._source = source
        self._source_file = source_file
        self._tokens: list[Token] = []
        self._pos = 0
        self._current: Token | None = None
        self._preserve_whitespace = get_compare_config().preserve_whitespace

    def parse(self) -> Document:
        """Parse the source into a Document.

        Returns:
            Document holding the declaration and the root element (NULL for
            an empty fragment)

        Raises:
            ParseError: If the source is not well-formed

        """
        self._tokens = list(Lexer(self._source, self._source_file).tokenize())
        self._pos = 0
        self._current = self._tokens[0]

        declaration = self._parse_declaration()
        self._skip_misc()
        if self._at(TokenType.EOF):
            return Document(declaration, NULL)

        root = self._parse_element()
        self._skip_misc()
        if not self._at(TokenType.EOF):
            raise self._error("Unexpected content after the root element", self._token())
        return Document(declaration, root)

    # =========================================================================
    # Token navigation
    # =========================================================================

    def _token(self) -> Token:
        assert self._current is not None
        return self._current

    def _at(self, token_type: TokenType) -> bool:
        return self._token().type == token_type

    def _advance(self) -> Token:
        """Consume the current token and return it."""
        token = self._token()
        if token.type != TokenType.EOF:
            self._pos += 1
            self._current = self._tokens[self._pos]
        return token

    def _error(self, message: str, token: Token) -> ParseError:
        loc: SourceLocation = token.location
        return ParseError(message, loc.lineno, loc.col_offset, self._source_file)

    # =========================================================================
    # Prolog and epilog
    # =========================================================================

    def _parse_declaration(self) -> Declaration:
        # Leading blank lines are tolerated (e.g. triple-quoted literals).
        while self._at(TokenType.TEXT) and not self._token().value.strip():
            self._advance()
        if not self._at(TokenType.XML_DECLARATION):
            return Declaration.EMPTY
        token = self._advance()
        return Declaration(AttributeCollection.of(token.attributes))

    def _skip_misc(self) -> None:
        """Skip comments, processing instructions, doctype and blank text outside the root."""
        while True:
            token = self._token()
            if token.type in _SKIPPED or token.type == TokenType.DOCTYPE:
                self._advance()
            elif token.type == TokenType.TEXT and not token.value.strip():
                self._advance()
            elif token.type == TokenType.XML_DECLARATION:
                raise self._error("XML declaration is only allowed at the very start", token)
            elif token.type in (TokenType.TEXT, TokenType.CDATA):
                raise self._error("Text is not allowed outside the root element", token)
            else:
                return

    # =========================================================================
    # Elements
    # =========================================================================

    def _parse_element(self) -> Element:
        start = self._token()
        if start.type not in (TokenType.START_TAG, TokenType.EMPTY_TAG):
            raise self._error(f"Expected an element, found {start.type.name}", start)
        self._advance()

        attributes = AttributeCollection.of(start.attributes)
        if start.type == TokenType.EMPTY_TAG:
            return Element(start.value, "", attributes, NULL)

        texts: list[str] = []
        children: list[Element] = []

        while True:
            token = self._token()
            token_type = token.type

            if token_type == TokenType.END_TAG:
                if token.value != start.value:
                    raise self._error(
                        f"Mismatched end tag </{token.value}>, expected </{start.value}>", token
                    )
                self._advance()
                break
            if token_type in (TokenType.START_TAG, TokenType.EMPTY_TAG):
                children.append(self._parse_element())
            elif token_type in (TokenType.TEXT, TokenType.CDATA):
                texts.append(token.value)
                self._advance()
            elif token_type in _SKIPPED:
                self._advance()
            elif token_type == TokenType.EOF:
                raise self._error(f"Unclosed element <{start.value}>", start)
            else:
                raise self._error(f"{token_type.name} is not allowed inside an element", token)

        if children:
            return Element(start.value, "", attributes, ElementCollection(tuple(children)))
        value = "".join(texts)
        if not self._preserve_whitespace and not value.strip():
            value = ""
        return Element(start.value, value, attributes, NULL)


__all__ = ["Parser"]
