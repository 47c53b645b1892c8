"""Unit tests for HtmlToDeltaConverter (html_converter.py)."""

import pytest
from delta import Delta

from html2delta import convert_html as package_convert_html
from html2delta.converter.errors import ConversionError
from html2delta.converter.html_converter import HtmlToDeltaConverter, convert_html
from html2delta.converter.models import ConverterOptions
from html2delta.converter.registry import CustomBlockRegistry
from tests.fixtures import (
    SAMPLE_HTML_ARTICLE,
    SAMPLE_HTML_CODE_BLOCK,
    SAMPLE_HTML_EMBEDS,
    SAMPLE_HTML_NESTED_LIST,
    SAMPLE_HTML_SIMPLE,
)
from tests.helpers import doc, el, line_texts


class TestConvertHtml:
    """Test cases for converting markup end to end."""

    def test_simple_paragraph(self, converter):
        assert converter.convert_html(SAMPLE_HTML_SIMPLE) == [
            {"insert": "Hello, "},
            {"insert": "world", "attributes": {"bold": True}},
            {"insert": "!"},
            {"insert": "\n"},
        ]

    def test_bullet_list(self, converter):
        assert converter.convert_html("<ul><li>A</li><li>B</li></ul>") == [
            {"insert": "A"},
            {"insert": "\n", "attributes": {"list": "bullet"}},
            {"insert": "B"},
            {"insert": "\n", "attributes": {"list": "bullet"}},
        ]

    def test_nested_inline_formatting(self, converter):
        assert converter.convert_html("<b><i>text</i></b>") == [
            {"insert": "text", "attributes": {"bold": True, "italic": True}},
            {"insert": "\n"},
        ]

    def test_full_document(self, converter):
        """Head, comments, scripts and formatting whitespace produce nothing."""
        assert converter.convert_html(SAMPLE_HTML_ARTICLE) == [
            {"insert": "Release notes"},
            {"insert": "\n", "attributes": {"header": 1}},
            {"insert": "This release adds "},
            {"insert": "bold", "attributes": {"bold": True}},
            {"insert": " and "},
            {"insert": "italic", "attributes": {"italic": True}},
            {"insert": " text."},
            {"insert": "\n"},
            {"insert": "First change"},
            {"insert": "\n", "attributes": {"list": "bullet"}},
            {"insert": "Second change"},
            {"insert": "\n", "attributes": {"list": "bullet"}},
            {"insert": "Quoted text"},
            {"insert": "\n", "attributes": {"blockquote": True}},
        ]

    def test_nested_list(self, converter):
        operations = converter.convert_html(SAMPLE_HTML_NESTED_LIST)

        assert line_texts(operations) == ["One", "One.a", "One.b", "Two"]
        assert [op.get("attributes") for op in operations if op["insert"] == "\n"] == [
            {"list": "ordered"},
            {"list": "bullet", "indent": 1},
            {"list": "bullet", "indent": 1},
            {"list": "ordered"},
        ]

    def test_code_block(self, converter):
        assert converter.convert_html(SAMPLE_HTML_CODE_BLOCK) == [
            {"insert": "def f():\n    return 1"},
            {"insert": "\n", "attributes": {"codeBlock": "python"}},
        ]

    def test_embeds(self, converter):
        assert converter.convert_html(SAMPLE_HTML_EMBEDS) == [
            {"insert": "Logo: "},
            {"insert": {"image": "https://example.com/logo.png"}, "attributes": {"alt": "Logo", "width": "120"}},
            {"insert": "\n"},
            {"insert": "\n"},
        ]

    def test_empty_markup(self, converter):
        assert converter.convert_html("") == [{"insert": "\n"}]

    def test_malformed_markup_degrades(self, converter):
        """Unclosed tags are repaired by the parser rather than rejected."""
        operations = converter.convert_html("<p>a<b>b<p>c")

        assert line_texts(operations) == ["ab", "c"]

    def test_html_parser_option(self):
        converter = HtmlToDeltaConverter(options=ConverterOptions(parser="html.parser"))

        assert converter.convert_html("<h3>T</h3>") == [
            {"insert": "T"},
            {"insert": "\n", "attributes": {"header": 3}},
        ]

    def test_unavailable_parser(self):
        converter = HtmlToDeltaConverter(options=ConverterOptions(parser="no-such-parser"))

        with pytest.raises(ConversionError, match="no-such-parser"):
            converter.convert_html("<p>a</p>")


class TestCustomBlocks:
    """Test cases for custom blocks through the converter."""

    def test_custom_tag_output_is_converter_result(self, converter, registry):
        def convert_pullquote(element, attributes):
            return [
                {"insert": element.text_content(), "attributes": {"italic": True}},
                {"insert": "\n", "attributes": {"blockquote": True}},
            ]

        registry.register_tag("pullquote", convert_pullquote)

        operations = converter.convert_html('<pullquote data-author="X">Q</pullquote>')

        assert operations == [
            {"insert": "Q", "attributes": {"italic": True}},
            {"insert": "\n", "attributes": {"blockquote": True}},
        ]

    def test_custom_line_in_wrapper_has_no_blank_line(self, converter, registry):
        registry.register_tag(
            "pullquote",
            lambda element, attributes: [
                {"insert": element.text_content()},
                {"insert": "\n", "attributes": {"blockquote": True}},
            ],
        )

        operations = converter.convert_html("<div><pullquote>Q</pullquote></div><p>z</p>")

        assert operations == [
            {"insert": "Q"},
            {"insert": "\n", "attributes": {"blockquote": True}},
            {"insert": "z"},
            {"insert": "\n"},
        ]


class TestConverterReuse:
    """Test cases for converter state handling."""

    def test_converter_is_reusable(self, converter):
        first = converter.convert_html("<p><b>a</b></p>")
        second = converter.convert_html("<p><b>a</b></p>")

        assert first == second

    def test_conversions_do_not_share_state(self, converter):
        converter.convert_html("<h1>Title<br></h1>")

        assert converter.convert_html("<p>x</p>") == [{"insert": "x"}, {"insert": "\n"}]

    def test_convert_node_tree(self, converter):
        assert converter.convert(doc(el("i", "a"))) == [
            {"insert": "a", "attributes": {"italic": True}},
            {"insert": "\n"},
        ]

    def test_convert_to_delta(self, converter):
        delta = converter.convert_to_delta(doc(el("p", "a")))

        assert isinstance(delta, Delta)
        assert delta.ops == [{"insert": "a"}, {"insert": "\n"}]


class TestModuleFunction:
    """Test cases for the convert_html shortcut."""

    def test_defaults(self):
        assert convert_html("<p>a</p>") == [{"insert": "a"}, {"insert": "\n"}]

    def test_exported_from_package(self):
        assert package_convert_html is convert_html

    def test_with_registry_and_options(self):
        registry = CustomBlockRegistry()
        registry.register_tag("hr", lambda element, attributes: [{"insert": "---"}, {"insert": "\n"}])

        operations = convert_html(
            "<p>a</p><hr>",
            registry=registry,
            options=ConverterOptions(parser="html.parser"),
        )

        assert operations == [
            {"insert": "a"},
            {"insert": "\n"},
            {"insert": "---"},
            {"insert": "\n"},
        ]
