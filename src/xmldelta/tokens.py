"""Token and TokenType definitions for the xmldelta lexer.

The lexer produces a stream of Token objects that the parser consumes.
Each Token has a type, a value, decoded attributes (for tags) and a
source location.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from xmldelta.location import SourceLocation


class TokenType(Enum):
    """Token types produced by the lexer."""

    EOF = auto()

    # Markup
    XML_DECLARATION = auto()  # <?xml version="1.0"?>
    START_TAG = auto()  # <name attr="...">
    EMPTY_TAG = auto()  # <name attr="..."/>
    END_TAG = auto()  # </name>

    # Character data
    TEXT = auto()  # entity-decoded text between tags
    CDATA = auto()  # <![CDATA[...]]>

    # Skipped by the parser
    COMMENT = auto()  # <!-- ... -->
    PROCESSING_INSTRUCTION = auto()  # <?target ...?>
    DOCTYPE = auto()  # <!DOCTYPE ...>


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        type: The token type
        value: Tag name for tags, text for character data, raw body otherwise
        location: Where the token starts in the source
        attributes: Decoded (name, value) pairs for tags and the declaration

    """

    type: TokenType
    value: str
    location: SourceLocation
    attributes: tuple[tuple[str, str], ...] = ()

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.location})"


__all__ = ["Token", "TokenType"]
