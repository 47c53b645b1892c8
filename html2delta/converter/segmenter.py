"""Block segmentation for the conversion engine.

Deltas have no nested block structure: a block is represented by the
newline that ends its line, and the line's block formatting (header, list,
blockquote, code block, alignment) is carried by that newline. The
BlockSegmenter classifies elements and decides when those newlines are
emitted.
"""

import logging
from typing import Mapping, Optional

from .builder import DeltaBuilder
from .context import TraversalContext, merge_attributes
from .models import AttributeSet, ConverterOptions

logger = logging.getLogger(__name__)

# Elements that form a line of their own and always end it, even when empty
LINE_TAGS = frozenset({
    "p",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "li",
    "blockquote",
    "pre",
    "dt",
    "dd",
    "td",
    "th",
    "caption",
    "figcaption",
    "summary",
})

# Block wrappers end a line only when they hold inline content of their own
WRAPPER_TAGS = frozenset({
    "div",
    "section",
    "article",
    "header",
    "footer",
    "main",
    "aside",
    "nav",
    "figure",
    "address",
    "details",
    "tr",
    "center",
})

BLOCK_TAGS = LINE_TAGS | WRAPPER_TAGS

LIST_TYPES = {
    "ul": "bullet",
    "menu": "bullet",
    "ol": "ordered",
}


class BlockSegmenter:
    """Decides where block-closing newline operations go.

    Attributes:
        builder: Builder receiving the newline operations
        options: Converter options (drop_left_align)
    """

    def __init__(self, builder: DeltaBuilder, options: Optional[ConverterOptions] = None):
        self.builder = builder
        self.options = options or ConverterOptions()
        # Builder sizes right after the last block newline and the last <br>
        self._closed_at = -1
        self._break_at = -1

    @staticmethod
    def list_type(tag_name: str) -> Optional[str]:
        """List type for a list container tag, or None."""
        return LIST_TYPES.get(tag_name)

    def line_attributes(
        self,
        tag_name: str,
        context: TraversalContext,
        own: Optional[Mapping] = None,
    ) -> AttributeSet:
        """Compute the attributes for the newline ending a block.

        Inherited block attributes come first, then list item attributes,
        then the element's own block attributes.

        Args:
            tag_name: Block element tag name
            context: Context the block element was entered with
            own: Block attributes resolved from the element itself

        Returns:
            Attribute set for the closing newline
        """
        attributes = dict(context.block_attributes)
        if tag_name == "li":
            attributes = merge_attributes(attributes, context.item_attributes())
        attributes = merge_attributes(attributes, own)
        if self.options.drop_left_align and attributes.get("align") == "left":
            del attributes["align"]
        return attributes

    def open_block(self, context: TraversalContext) -> int:
        """Start a block, ending any pending inline line first.

        Inline content emitted before a nested block belongs to the
        enclosing block, so that line is closed with the enclosing block's
        attributes.

        Args:
            context: Context of the block being entered

        Returns:
            Builder mark to pass to close_block()
        """
        if self.builder.line_open:
            self._end_line(context.block_attributes)
        return self.builder.mark()

    def close_block(self, tag_name: str, attributes: Mapping, mark: int) -> None:
        """End a block with exactly one newline unless a nested block already did.

        Args:
            tag_name: Block element tag name
            attributes: Line attributes from line_attributes()
            mark: Value returned by open_block()
        """
        size = len(self.builder)
        if size == mark:
            # Empty paragraph-like blocks still occupy a line
            if tag_name in LINE_TAGS:
                self._end_line(attributes)
            return

        if size == self._closed_at:
            return

        if size == self._break_at:
            # A trailing <br> is absorbed by the block's own newline
            self.builder.pop()
        self._end_line(attributes)

    def line_break(self, attributes: Mapping) -> None:
        """Emit a soft line break carrying inline attributes."""
        self.builder.append_newline(attributes)
        self._break_at = len(self.builder)

    def note_line_end(self) -> None:
        """Record a newline appended outside the segmenter as the end of a line."""
        self._closed_at = len(self.builder)

    def _end_line(self, attributes: Mapping) -> None:
        self.builder.append_newline(attributes)
        self._closed_at = len(self.builder)
