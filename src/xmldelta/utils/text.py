"""Text helpers shared by the node model and the diff engines.

Escaping is the inverse of what the lexer does on input: the lexer turns a
raw CR into LF everywhere and raw tab, LF or CR inside an attribute value
into a space, so those characters are written as character references to
come back unchanged.

Example:
    >>> from xmldelta.utils.text import escape_attribute, text_equals
    >>> escape_attribute('say "hi" & go')
    'say &quot;hi&quot; &amp; go'
    >>> escape_attribute("a\\tb")
    'a&#9;b'
    >>> text_equals("Planet", "PLANET", ignore_case=True)
    True
"""

from __future__ import annotations

from xml.sax.saxutils import escape

_TEXT_ENTITIES = {"\r": "&#13;"}
_ATTRIBUTE_ENTITIES = {'"': "&quot;", "\t": "&#9;", "\n": "&#10;", "\r": "&#13;"}


def escape_text(text: str) -> str:
    """Escape ``&``, ``<``, ``>`` and CR for use as element content."""
    return escape(text, _TEXT_ENTITIES)


def escape_attribute(text: str) -> str:
    """Escape text for use inside a double-quoted attribute value."""
    return escape(text, _ATTRIBUTE_ENTITIES)


def text_equals(first: str, second: str, ignore_case: bool = False) -> bool:
    """Compare two names or values, optionally without regard to case.

    Case folding is used rather than lower() so that comparisons behave for
    non-ASCII text as well (``"STRASSE"`` equals ``"straße"``).
    """
    if ignore_case:
        return first.casefold() == second.casefold()
    return first == second
