"""Tests for xmldelta utility modules."""

import pytest

from xmldelta.location import SourceLocation
from xmldelta.stringbuilder import StringBuilder
from xmldelta.utils import escape_attribute, escape_text, get_logger, text_equals


class TestEscaping:
    def test_escape_text(self) -> None:
        assert escape_text("a < b && c > d") == "a &lt; b &amp;&amp; c &gt; d"

    def test_escape_text_leaves_quotes(self) -> None:
        assert escape_text("it's \"fine\"") == "it's \"fine\""

    def test_escape_attribute(self) -> None:
        assert escape_attribute('say "hi" & <go>') == "say &quot;hi&quot; &amp; &lt;go&gt;"

    def test_escape_attribute_whitespace_as_references(self) -> None:
        assert escape_attribute("a\tb\nc\rd") == "a&#9;b&#10;c&#13;d"

    def test_escape_text_carriage_return(self) -> None:
        assert escape_text("x\ry\tz\n") == "x&#13;y\tz\n"


class TestTextEquals:
    @pytest.mark.parametrize(
        ("first", "second", "ignore_case", "result"),
        [
            ("Planet", "Planet", False, True),
            ("Planet", "planet", False, False),
            ("Planet", "PLANET", True, True),
            ("straße", "STRASSE", True, True),
            ("Planet", "Planets", True, False),
        ],
    )
    def test_text_equals(self, first: str, second: str, ignore_case: bool, result: bool) -> None:
        assert text_equals(first, second, ignore_case) is result


class TestLogger:
    def test_prefix_added(self) -> None:
        assert get_logger("engines").name == "xmldelta.engines"

    def test_package_names_unchanged(self) -> None:
        assert get_logger("xmldelta").name == "xmldelta"
        assert get_logger("xmldelta.parser").name == "xmldelta.parser"


class TestStringBuilder:
    def test_chaining(self) -> None:
        sb = StringBuilder()
        sb.append("<a").append("").append("/>")
        assert sb.build() == "<a/>"
        assert len(sb) == 2

    def test_extend_skips_empty(self) -> None:
        sb = StringBuilder().extend(["x", "", "y"])
        assert sb.build() == "xy"
        assert len(sb) == 2

    def test_bool(self) -> None:
        assert not StringBuilder()
        assert StringBuilder().append("x")


class TestSourceLocation:
    def test_str_without_file(self) -> None:
        assert str(SourceLocation(3, 7)) == "3:7"

    def test_str_with_file(self) -> None:
        assert str(SourceLocation(3, 7, 41, "expected.xml")) == "expected.xml:3:7"
