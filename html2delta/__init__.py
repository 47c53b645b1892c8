"""Convert HTML into rich-text delta operations."""

from .converter import (
    ConversionError,
    ConverterOptions,
    CustomBlockError,
    CustomBlockRegistry,
    DeltaBuilder,
    Element,
    Html2DeltaError,
    HtmlToDeltaConverter,
    TagBlock,
    Text,
    convert_html,
    parse_html,
)

__version__ = "0.1.0"

__all__ = [
    "HtmlToDeltaConverter",
    "convert_html",
    "parse_html",
    "CustomBlockRegistry",
    "TagBlock",
    "DeltaBuilder",
    "Element",
    "Text",
    "ConverterOptions",
    "Html2DeltaError",
    "ConversionError",
    "CustomBlockError",
]
