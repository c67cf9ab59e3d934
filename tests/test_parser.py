"""Tests for the recursive descent parser."""

import pytest

from xmldelta import (
    NULL,
    AttributeCollection,
    CompareConfig,
    Declaration,
    Element,
    ElementCollection,
    ParseError,
    Parser,
    compare_config_context,
    parse,
)


class TestDocumentShape:
    def test_simple_element(self) -> None:
        doc = parse("<Star>Sun</Star>")
        assert doc.declaration is Declaration.EMPTY
        assert doc.root == Element("Star", "Sun")

    def test_parser_class(self) -> None:
        doc = Parser("<Star/>").parse()
        assert doc.root == Element("Star")

    def test_empty_fragment(self) -> None:
        assert parse("").root is NULL
        assert parse("  \n ").root is NULL

    def test_declaration_only(self) -> None:
        doc = parse('<?xml version="1.0"?>')
        assert doc.root is NULL
        assert doc.declaration.attributes.get("version").value == "1.0"

    def test_declaration_after_leading_whitespace(self) -> None:
        doc = parse('\n  <?xml version="1.0" encoding="UTF-8"?>\n<Root/>')
        assert [a.name for a in doc.declaration.attributes] == ["version", "encoding"]
        assert doc.root == Element("Root")

    def test_attributes_keep_source_order(self) -> None:
        doc = parse("<Planet revolution='58.6 d' diameter='4878 km'>Mercury</Planet>")
        assert doc.root.attributes == AttributeCollection.of(
            [("revolution", "58.6 d"), ("diameter", "4878 km")]
        )

    def test_children_become_collection(self) -> None:
        doc = parse("<a>\n  <b>1</b>\n  <c/>\n</a>")
        assert doc.root == Element(
            "a", child=ElementCollection.of([Element("b", "1"), Element("c")])
        )

    def test_single_child_is_collection(self) -> None:
        doc = parse("<a><b/></a>")
        assert isinstance(doc.root.child, ElementCollection)
        assert len(doc.root.child) == 1

    def test_mixed_content_keeps_elements_only(self) -> None:
        doc = parse("<a>x<b/>y</a>")
        assert doc.root.value == ""
        assert [e.name for e in doc.root.child] == ["b"]

    def test_start_end_pair_equals_empty_tag(self) -> None:
        assert parse("<Child></Child>").root == parse("<Child/>").root

    def test_entities_decoded_in_value(self) -> None:
        assert parse("<a>Fish &amp; Chips</a>").root.value == "Fish & Chips"

    def test_cdata_counts_as_text(self) -> None:
        assert parse("<a>x<![CDATA[<y>]]>z</a>").root.value == "x<y>z"

    def test_comments_and_pis_skipped(self) -> None:
        source = "<!-- top --><?pi data?><a><!-- inner -->text<?pi more?></a><!-- tail -->"
        assert parse(source).root == Element("a", "text")

    def test_doctype_skipped(self) -> None:
        assert parse("<!DOCTYPE a><a/>").root == Element("a")


class TestWhitespace:
    def test_whitespace_only_text_dropped(self) -> None:
        assert parse("<a>   </a>").root.value == ""

    def test_significant_whitespace_kept(self) -> None:
        assert parse("<a>  x  </a>").root.value == "  x  "

    def test_preserve_whitespace_config(self) -> None:
        with compare_config_context(CompareConfig(preserve_whitespace=True)):
            doc = parse("<a> </a>")
        assert doc.root.value == " "

    def test_preserve_whitespace_does_not_change_element_children(self) -> None:
        with compare_config_context(CompareConfig(preserve_whitespace=True)):
            doc = parse("<a>\n  <b/>\n</a>")
        assert doc.root.value == ""
        assert [e.name for e in doc.root.child] == ["b"]

    def test_comment_inside_run_does_not_change_value(self) -> None:
        plain = parse("<a> x</a>").root.value
        assert plain == " x"
        assert parse("<a> <!--c-->x</a>").root.value == plain
        assert parse("<a> <?pi?>x</a>").root.value == plain

    def test_whitespace_only_cdata_dropped(self) -> None:
        assert parse("<a><![CDATA[ ]]></a>").root.value == ""
        assert parse("<a> <![CDATA[\t]]>\n</a>").root.value == ""

    def test_whitespace_only_cdata_kept_when_preserving(self) -> None:
        with compare_config_context(CompareConfig(preserve_whitespace=True)):
            doc = parse("<a><![CDATA[ ]]></a>")
        assert doc.root.value == " "


class TestRoundTrip:
    @pytest.mark.parametrize(
        "source",
        [
            "<a><![CDATA[ ]]></a>",
            '<a x="&#10;"/>',
            "<a>x&#13;y</a>",
            '<a x="a&#9;b"/>',
            '<a x="&#13;&#10;">&#13;&#10;</a>',
            "<a><![CDATA[x\ry]]></a>",
        ],
    )
    def test_to_xml_reparses_to_same_tree(self, source: str) -> None:
        doc = parse(source)
        assert parse(doc.to_xml()) == doc

    def test_attribute_whitespace_references_survive(self) -> None:
        doc = parse('<a x="a&#9;b&#10;c"/>')
        assert doc.root.attributes[0].value == "a\tb\nc"
        assert doc.to_xml() == '<a x="a&#9;b&#10;c"/>'


class TestParseErrors:
    @pytest.mark.parametrize(
        ("source", "message"),
        [
            ("<a></b>", r"Mismatched end tag </b>, expected </a>"),
            ("<a><b></b>", "Unclosed element <a>"),
            ("<a/><b/>", "Unexpected content after the root element"),
            ("<a/>text", "Text is not allowed outside the root element"),
            ("text<a/>", "Text is not allowed outside the root element"),
            ("<a/><?xml version='1.0'?>", "only allowed at the very start"),
            ("</a>", "Expected an element, found END_TAG"),
            ("<a><!DOCTYPE a></a>", "DOCTYPE is not allowed inside an element"),
        ],
    )
    def test_malformed_documents(self, source: str, message: str) -> None:
        with pytest.raises(ParseError, match=message):
            parse(source)

    def test_mismatched_end_tag_location(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("<Root>\n  <Open>\n</Root>")
        assert exc_info.value.lineno == 3
        assert exc_info.value.col_offset == 1

    def test_source_file_in_message(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("<a>", source_file="expected.xml")
        assert str(exc_info.value) == "expected.xml:1:1 Unclosed element <a>"
