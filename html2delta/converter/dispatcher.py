"""Tree walk that maps HTML elements to delta operations.

The NodeDispatcher visits the node tree in document order. For each element
it consults the custom block registry first, then a table of built-in tag
handlers; unknown tags are transparent containers. The walk uses an
explicit work stack, so input depth is bounded by memory rather than the
interpreter's recursion limit.
"""

import logging
import re
from typing import Callable, Dict, List, Mapping, NamedTuple, Optional, Union

from . import attributes as resolver
from .builder import DeltaBuilder
from .context import TraversalContext, merge_attributes
from .models import ConverterOptions
from .nodes import Element, Node, Text
from .registry import CustomBlock, CustomBlockRegistry
from .segmenter import BLOCK_TAGS, LIST_TYPES, BlockSegmenter

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"[ \t\n\r\f]+")

# Inline elements whose tag table entry and style attribute format their content
INLINE_TAGS = frozenset({
    "a",
    "abbr",
    "b",
    "cite",
    "code",
    "del",
    "dfn",
    "em",
    "font",
    "i",
    "ins",
    "kbd",
    "label",
    "mark",
    "q",
    "s",
    "samp",
    "small",
    "span",
    "strike",
    "strong",
    "sub",
    "sup",
    "time",
    "u",
    "var",
})


class _Visit(NamedTuple):
    node: Node
    context: TraversalContext


class _Close(NamedTuple):
    tag_name: str
    attributes: Mapping
    mark: int


_WorkItem = Union[_Visit, _Close]
Handler = Callable[[Element, TraversalContext, List[_WorkItem]], None]


class NodeDispatcher:
    """Converts a node tree into operations on a DeltaBuilder.

    Attributes:
        builder: Operation accumulator
        registry: Custom blocks consulted before built-in handlers
        options: Converter options
        segmenter: Block newline emission
    """

    def __init__(
        self,
        builder: DeltaBuilder,
        registry: Optional[CustomBlockRegistry] = None,
        options: Optional[ConverterOptions] = None,
    ):
        self.builder = builder
        self.registry = registry if registry is not None else CustomBlockRegistry()
        self.options = options or ConverterOptions()
        self.segmenter = BlockSegmenter(builder, self.options)

        self.handlers: Dict[str, Handler] = {}
        for tag_name in INLINE_TAGS:
            self.handlers[tag_name] = self._handle_inline
        for tag_name in BLOCK_TAGS:
            self.handlers[tag_name] = self._handle_block
        for tag_name in LIST_TYPES:
            self.handlers[tag_name] = self._handle_list
        for tag_name in self.options.embed_video_tags | {"img"}:
            self.handlers[tag_name] = self._handle_embed
        self.handlers["pre"] = self._handle_code_block
        self.handlers["br"] = self._handle_break
        self.handlers["hr"] = self._handle_divider

    def dispatch(self, root: Node, context: Optional[TraversalContext] = None) -> None:
        """Convert root and its subtree, appending operations to the builder.

        Args:
            root: Root node (typically the parsed document)
            context: Starting context (empty formatting by default)

        Raises:
            CustomBlockError: If a custom block converter fails
        """
        stack: List[_WorkItem] = [_Visit(root, context or TraversalContext())]

        while stack:
            item = stack.pop()
            if isinstance(item, _Close):
                self.segmenter.close_block(item.tag_name, item.attributes, item.mark)
            elif isinstance(item.node, Text):
                self._handle_text(item.node, item.context)
            else:
                self._visit_element(item.node, item.context, stack)

    def _visit_element(self, element: Element, context: TraversalContext, stack: List[_WorkItem]) -> None:
        block = self.registry.find(element)
        if block is not None:
            self._handle_custom(block, element, context)
            return

        if element.tag_name in self.options.skip_tags:
            return

        handler = self.handlers.get(element.tag_name, self._handle_container)
        handler(element, context, stack)

    @staticmethod
    def _push_children(element: Element, context: TraversalContext, stack: List[_WorkItem]) -> None:
        for child in reversed(element.children):
            stack.append(_Visit(child, context))

    def _handle_custom(self, block: CustomBlock, element: Element, context: TraversalContext) -> None:
        operations = self.registry.convert(block, element, context.attributes)
        logger.debug(f"Custom block {block!r} produced {len(operations)} operation(s) for <{element.tag_name}>")
        for operation in operations:
            self.builder.append(operation)
        if operations and self.builder.ends_with_newline:
            self.segmenter.note_line_end()

    def _handle_text(self, text: Text, context: TraversalContext) -> None:
        content = text.content
        if self.options.collapse_whitespace:
            content = _WHITESPACE.sub(" ", content)
            if not self.builder.line_open:
                content = content.lstrip(" ")
        self.builder.insert_text(content, context.attributes)

    def _handle_container(self, element: Element, context: TraversalContext, stack: List[_WorkItem]) -> None:
        # Unknown tags: formatting ignored, content kept
        self._push_children(element, context, stack)

    def _handle_inline(self, element: Element, context: TraversalContext, stack: List[_WorkItem]) -> None:
        attributes = resolver.resolve_inline(element.tag_name, element.attributes)
        style, _ = resolver.split_block_attributes(resolver.resolve_style(element.get("style")))
        attributes = merge_attributes(attributes, style)
        self._push_children(element, context.with_attributes(attributes), stack)

    def _handle_block(self, element: Element, context: TraversalContext, stack: List[_WorkItem]) -> None:
        mark = self.segmenter.open_block(context)

        inline_style, block_style = resolver.split_block_attributes(resolver.resolve_style(element.get("style")))
        own = merge_attributes(resolver.resolve_block(element.tag_name, element.attributes), block_style)
        line = self.segmenter.line_attributes(element.tag_name, context, own)

        stack.append(_Close(element.tag_name, line, mark))
        child_context = context.with_block_attributes(line).with_attributes(inline_style)
        self._push_children(element, child_context, stack)

    def _handle_list(self, element: Element, context: TraversalContext, stack: List[_WorkItem]) -> None:
        list_context = context.enter_list(self.segmenter.list_type(element.tag_name))

        number = 0
        if element.tag_name == "ol":
            start = resolver.parse_integer(element.get("start"))
            if start is not None:
                number = start - 1

        visits = []
        for child in element.children:
            child_context = list_context
            if isinstance(child, Element) and child.tag_name == "li":
                number += 1
                child_context = list_context.with_item_number(number)
            visits.append(_Visit(child, child_context))
        stack.extend(reversed(visits))

    def _handle_code_block(self, element: Element, context: TraversalContext, stack: List[_WorkItem]) -> None:
        mark = self.segmenter.open_block(context)

        code = next(
            (child for child in element.children if isinstance(child, Element) and child.tag_name == "code"),
            None,
        )
        language = resolver.resolve_code_language(
            code.classes if code is not None else [],
            element.classes,
        )
        _, block_style = resolver.split_block_attributes(resolver.resolve_style(element.get("style")))
        own = merge_attributes(resolver.resolve_block(element.tag_name, element.attributes), block_style)
        own["codeBlock"] = language or True
        line = self.segmenter.line_attributes(element.tag_name, context, own)

        text = _code_text(element)
        if text.startswith("\n"):
            text = text[1:]
        if text.endswith("\n"):
            text = text[:-1]
        # Code content is plain text: no inherited inline formatting
        self.builder.insert_text(text)
        self.segmenter.close_block(element.tag_name, line, mark)

    def _handle_break(self, element: Element, context: TraversalContext, stack: List[_WorkItem]) -> None:
        self.segmenter.line_break(context.attributes)

    def _handle_embed(self, element: Element, context: TraversalContext, stack: List[_WorkItem]) -> None:
        attributes = element.attributes
        if element.tag_name == "video" and not (attributes.get("src") or "").strip():
            source = next(
                (child for child in element.children
                 if isinstance(child, Element) and child.tag_name == "source" and child.get("src")),
                None,
            )
            if source is not None:
                attributes = merge_attributes(attributes, {"src": source.get("src")})

        resolved = resolver.resolve_embed(element.tag_name, attributes, self.options.embed_video_tags)
        if resolved is None:
            logger.debug(f"Skipping <{element.tag_name}> without a source")
            return

        embed, embed_attributes = resolved
        self.builder.insert_embed(embed, embed_attributes)

    def _handle_divider(self, element: Element, context: TraversalContext, stack: List[_WorkItem]) -> None:
        mark = self.segmenter.open_block(context)
        self.builder.insert_embed({"divider": True})
        self.segmenter.close_block(element.tag_name, self.segmenter.line_attributes(element.tag_name, context), mark)


def _code_text(element: Element) -> str:
    """Verbatim text of a code block, with <br> as a newline."""
    parts = []
    stack: List[Node] = list(reversed(element.children))
    while stack:
        node = stack.pop()
        if isinstance(node, Text):
            parts.append(node.content)
        elif node.tag_name == "br":
            parts.append("\n")
        else:
            stack.extend(reversed(node.children))
    return "".join(parts)
