"""Single-pass XML tokenizer.

Scans the source once, left to right, and yields markup and character-data
tokens. Entity references are decoded here so the parser only ever sees
final text. Anything malformed raises ParseError with the line and column
of the offending construct; the lexer never guesses.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

import re
from collections.abc import Iterator

from xmldelta.errors import ParseError
from xmldelta.location import SourceLocation
from xmldelta.tokens import Token, TokenType

_NAME_RE = re.compile(r"[^\W\d][\w.:\-]*|:[\w.:\-]*")
_ENTITY_RE = re.compile(r"&(#[0-9]+|#x[0-9A-Fa-f]+|[^\W\d][\w.\-]*);")
_WHITESPACE = " \t\n\r"
_ATTRIBUTE_WHITESPACE = str.maketrans("\t\n\r", "   ")

_PREDEFINED_ENTITIES = {
    "lt": "<",
    "gt": ">",
    "amp": "&",
    "quot": '"',
    "apos": "'",
}

_TagAttributes = tuple[tuple[str, str], ...]


class Lexer:
    """Tokenizer for XML fragments.

    Usage:
            >>> lexer = Lexer('<Star mass="1">Sun</Star>')
            >>> for token in lexer.tokenize():
            ...     print(token)
        Token(START_TAG, 'Star', 1:1)
        Token(TEXT, 'Sun', 1:16)
        Token(END_TAG, 'Star', 1:19)
        Token(EOF, '', 1:26)

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_source_file",
        "_pos",
        # Incremental line tracking: the last offset whose line is known
        "_synced",
        "_lineno",
        "_line_start",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize lexer with source text.

        Args:
            source: XML source text
            source_file: Optional source file path for error messages
        """
        # Line endings are normalized before anything else, as XML requires.
        self._source = source.replace("\r\n", "\n").replace("\r", "\n")
        self._source_len = len(self._source)
        self._source_file = source_file
        self._pos = 0
        self._synced = 0
        self._lineno = 1
        self._line_start = 0

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into a token stream ending with EOF.

        Raises:
            ParseError: On malformed markup
        """
        source = self._source
        while self._pos < self._source_len:
            if source[self._pos] == "<":
                yield self._scan_markup()
            else:
                yield self._scan_text()
        yield Token(TokenType.EOF, "", self._location_at(self._pos))

    # =========================================================================
    # Location helpers
    # =========================================================================

    def _location_at(self, offset: int) -> SourceLocation:
        """Location of offset; offsets must be requested in increasing order."""
        if offset > self._synced:
            newlines = self._source.count("\n", self._synced, offset)
            if newlines:
                self._lineno += newlines
                self._line_start = self._source.rfind("\n", self._synced, offset) + 1
            self._synced = offset
        return SourceLocation(
            lineno=self._lineno,
            col_offset=offset - self._line_start + 1,
            offset=offset,
            source_file=self._source_file,
        )

    def _error(self, message: str, offset: int) -> ParseError:
        loc = self._location_at(max(offset, self._synced))
        return ParseError(message, loc.lineno, loc.col_offset, self._source_file)

    # =========================================================================
    # Character data
    # =========================================================================

    def _scan_text(self) -> Token:
        start = self._pos
        end = self._source.find("<", start)
        if end == -1:
            end = self._source_len
        location = self._location_at(start)
        text = self._decode(self._source[start:end], start)
        self._pos = end
        return Token(TokenType.TEXT, text, location)

    def _decode(self, raw: str, offset: int) -> str:
        """Replace entity and character references in raw text."""
        if "&" not in raw:
            return raw

        parts: list[str] = []
        pos = 0
        while True:
            amp = raw.find("&", pos)
            if amp == -1:
                parts.append(raw[pos:])
                return "".join(parts)
            parts.append(raw[pos:amp])
            match = _ENTITY_RE.match(raw, amp)
            if match is None:
                raise self._error("Unescaped '&' or malformed entity reference", offset + amp)
            parts.append(self._resolve_entity(match.group(1), offset + amp))
            pos = match.end()

    def _resolve_entity(self, ref: str, offset: int) -> str:
        if ref.startswith("#"):
            code = int(ref[2:], 16) if ref[1] == "x" else int(ref[1:])
            try:
                return chr(code)
            except (ValueError, OverflowError):
                raise self._error(f"Invalid character reference &{ref};", offset) from None
        try:
            return _PREDEFINED_ENTITIES[ref]
        except KeyError:
            raise self._error(f"Undefined entity &{ref};", offset) from None

    # =========================================================================
    # Markup
    # =========================================================================

    def _scan_markup(self) -> Token:
        source = self._source
        start = self._pos
        location = self._location_at(start)

        if source.startswith("<?", start):
            return self._scan_processing_instruction(start, location)
        if source.startswith("<!--", start):
            body, self._pos = self._scan_until("-->", start + 4, "comment")
            return Token(TokenType.COMMENT, body, location)
        if source.startswith("<![CDATA[", start):
            body, self._pos = self._scan_until("]]>", start + 9, "CDATA section")
            return Token(TokenType.CDATA, body, location)
        if source.startswith("<!DOCTYPE", start):
            return self._scan_doctype(start, location)
        if source.startswith("</", start):
            return self._scan_end_tag(start, location)
        return self._scan_start_tag(start, location)

    def _scan_until(self, terminator: str, pos: int, what: str) -> tuple[str, int]:
        end = self._source.find(terminator, pos)
        if end == -1:
            raise self._error(f"Unterminated {what}", self._pos)
        return self._source[pos:end], end + len(terminator)

    def _scan_processing_instruction(self, start: int, location: SourceLocation) -> Token:
        target, pos = self._scan_name(start + 2, "processing instruction target")
        if target == "xml":
            attributes, pos, _ = self._scan_attributes(pos, ("?>",), "XML declaration")
            self._pos = pos
            return Token(TokenType.XML_DECLARATION, target, location, attributes)
        _, self._pos = self._scan_until("?>", pos, "processing instruction")
        return Token(TokenType.PROCESSING_INSTRUCTION, target, location)

    def _scan_doctype(self, start: int, location: SourceLocation) -> Token:
        # The internal subset may itself contain '>' characters.
        source = self._source
        pos = start + 9
        depth = 0
        while pos < self._source_len:
            char = source[pos]
            if char == "[":
                depth += 1
            elif char == "]":
                depth -= 1
            elif char == ">" and depth <= 0:
                self._pos = pos + 1
                return Token(TokenType.DOCTYPE, source[start + 9 : pos].strip(), location)
            pos += 1
        raise self._error("Unterminated DOCTYPE declaration", start)

    def _scan_end_tag(self, start: int, location: SourceLocation) -> Token:
        name, pos = self._scan_name(start + 2, "element name")
        pos = self._skip_whitespace(pos)
        if not self._source.startswith(">", pos):
            raise self._error(f"Expected '>' to close end tag </{name}>", pos)
        self._pos = pos + 1
        return Token(TokenType.END_TAG, name, location)

    def _scan_start_tag(self, start: int, location: SourceLocation) -> Token:
        name, pos = self._scan_name(start + 1, "element name")
        attributes, pos, closer = self._scan_attributes(pos, ("/>", ">"), f"tag <{name}>")
        self._pos = pos
        token_type = TokenType.EMPTY_TAG if closer == "/>" else TokenType.START_TAG
        return Token(token_type, name, location, attributes)

    def _scan_name(self, pos: int, what: str) -> tuple[str, int]:
        match = _NAME_RE.match(self._source, pos)
        if match is None:
            raise self._error(f"Invalid or missing {what}", pos)
        return match.group(), match.end()

    def _skip_whitespace(self, pos: int) -> int:
        source = self._source
        while pos < self._source_len and source[pos] in _WHITESPACE:
            pos += 1
        return pos

    def _scan_attributes(
        self, pos: int, closers: tuple[str, ...], what: str
    ) -> tuple[_TagAttributes, int, str]:
        """Scan name="value" pairs up to one of closers.

        Returns:
            (attributes, position after the closer, closer found)
        """
        source = self._source
        attributes: list[tuple[str, str]] = []
        seen: set[str] = set()

        while True:
            before = pos
            pos = self._skip_whitespace(pos)
            for closer in closers:
                if source.startswith(closer, pos):
                    return tuple(attributes), pos + len(closer), closer
            if pos >= self._source_len:
                raise self._error(f"Unterminated {what}", before)
            if pos == before:
                raise self._error(f"Expected whitespace before attribute in {what}", pos)

            name, pos = self._scan_name(pos, "attribute name")
            pos = self._skip_whitespace(pos)
            if not source.startswith("=", pos):
                raise self._error(f"Expected '=' after attribute '{name}'", pos)
            pos = self._skip_whitespace(pos + 1)

            quote = source[pos] if pos < self._source_len else ""
            if quote not in ("'", '"'):
                raise self._error(f"Attribute '{name}' value must be quoted", pos)
            end = source.find(quote, pos + 1)
            if end == -1:
                raise self._error(f"Unterminated value for attribute '{name}'", pos)
            raw = source[pos + 1 : end]
            if "<" in raw:
                raise self._error(f"Attribute '{name}' value contains '<'", pos)
            if name in seen:
                raise self._error(f"Duplicate attribute '{name}' in {what}", pos)

            seen.add(name)
            value = self._decode(raw.translate(_ATTRIBUTE_WHITESPACE), pos + 1)
            attributes.append((name, value))
            pos = end + 1


__all__ = ["Lexer"]
