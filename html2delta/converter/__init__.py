"""HTML-to-delta conversion engine.

This module converts an HTML node tree into rich-text delta operations
(insert operations with formatting attributes).

Key classes:
    HtmlToDeltaConverter: Main interface (parse + convert)
    NodeDispatcher: Tag-handler tree walk
    BlockSegmenter: Block newline emission
    DeltaBuilder: Ordered, coalescing operation accumulator
    CustomBlockRegistry: Caller-supplied element converters
    TraversalContext: Immutable inherited formatting
"""

from .builder import DeltaBuilder
from .context import TraversalContext, merge_attributes
from .dispatcher import NodeDispatcher
from .errors import ConversionError, CustomBlockError, Html2DeltaError
from .html_converter import HtmlToDeltaConverter, convert_html
from .models import ConverterOptions
from .nodes import Element, Text, from_soup, parse_html
from .registry import CustomBlock, CustomBlockRegistry, TagBlock
from .segmenter import BlockSegmenter

__all__ = [
    # Main interface
    "HtmlToDeltaConverter",
    "convert_html",
    # Core classes
    "NodeDispatcher",
    "BlockSegmenter",
    "DeltaBuilder",
    "CustomBlockRegistry",
    "CustomBlock",
    "TagBlock",
    "TraversalContext",
    "merge_attributes",
    # Node tree
    "Element",
    "Text",
    "from_soup",
    "parse_html",
    # Options and errors
    "ConverterOptions",
    "Html2DeltaError",
    "ConversionError",
    "CustomBlockError",
]
