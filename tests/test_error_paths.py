"""Tests for the exception hierarchy and error messages."""

import logging

import pytest

from xmldelta import (
    Element,
    NodeContractError,
    NodeShapeError,
    ParseError,
    Path,
    XmlDeltaError,
    compare,
)
from xmldelta.nodes import ElementCollection
from xmldelta.options import Options


class TestHierarchy:
    def test_all_errors_share_base(self) -> None:
        assert issubclass(ParseError, XmlDeltaError)
        assert issubclass(NodeContractError, XmlDeltaError)
        assert issubclass(NodeShapeError, XmlDeltaError)

    def test_builtin_compatibility(self) -> None:
        assert issubclass(NodeContractError, ValueError)
        assert issubclass(NodeShapeError, TypeError)


class TestParseErrorMessage:
    def test_message_only(self) -> None:
        error = ParseError("Bad markup")
        assert str(error) == "Bad markup"
        assert error.lineno is None
        assert error.side is None

    def test_line_and_column(self) -> None:
        assert str(ParseError("Bad markup", 3, 7)) == "3:7 Bad markup"

    def test_line_only(self) -> None:
        assert str(ParseError("Bad markup", 3)) == "3 Bad markup"

    def test_with_file(self) -> None:
        error = ParseError("Bad markup", 3, 7, "expected.xml")
        assert str(error) == "expected.xml:3:7 Bad markup"
        assert error.message == "Bad markup"

    def test_file_without_line(self) -> None:
        assert str(ParseError("Bad markup", source_file="actual.xml")) == "actual.xml Bad markup"

    def test_column_without_line_is_ignored(self) -> None:
        assert str(ParseError("Bad markup", col_offset=7)) == "Bad markup"


class TestNodeShapeError:
    def test_records_types(self) -> None:
        with pytest.raises(NodeShapeError) as exc_info:
            ElementCollection.EMPTY.diff(Element("a"), Path.empty(), Options.NONE)
        assert exc_info.value.actual_type == "ElementCollection"
        assert exc_info.value.expected_type == "Element"
        assert str(exc_info.value) == "Cannot diff ElementCollection against Element"


class TestLogging:
    def test_compare_logs_difference_count(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="xmldelta"):
            compare("<a>1</a>", "<a>2</a>")
        assert any("1 difference(s)" in r.getMessage() for r in caplog.records)
        assert all(r.name.startswith("xmldelta") for r in caplog.records)

    def test_parse_failure_is_logged_and_reraised(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="xmldelta"), pytest.raises(ParseError):
            compare("<a/>", "<a>")
        assert any("actual XML fragment" in r.getMessage() for r in caplog.records)
