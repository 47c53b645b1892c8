"""HTML-to-delta conversion entry point.

HtmlToDeltaConverter ties the pieces together: it parses markup with
BeautifulSoup, walks the resulting node tree with a NodeDispatcher and
returns the operations accumulated by a DeltaBuilder. Each call uses its
own builder and contexts, so one converter may serve many documents.
"""

import logging
from typing import List, Optional

from bs4 import FeatureNotFound
from delta import Delta

from .builder import DeltaBuilder
from .dispatcher import NodeDispatcher
from .errors import ConversionError
from .models import ConverterOptions, Operation
from .nodes import Element, Node, parse_html
from .registry import CustomBlockRegistry

logger = logging.getLogger(__name__)


class HtmlToDeltaConverter:
    """Converts HTML into rich-text delta operations.

    Attributes:
        options: Conversion options
        registry: Custom blocks consulted before built-in handling

    Example:
        >>> converter = HtmlToDeltaConverter()
        >>> converter.convert_html("<p>Hello, <b>world</b>!</p>")
        [{'insert': 'Hello, '}, {'insert': 'world', 'attributes': {'bold': True}}, {'insert': '!'}, {'insert': '\\n'}]
    """

    def __init__(
        self,
        options: Optional[ConverterOptions] = None,
        registry: Optional[CustomBlockRegistry] = None,
    ):
        self.options = options or ConverterOptions()
        self.registry = registry if registry is not None else CustomBlockRegistry()

    def convert(self, node: Node) -> List[Operation]:
        """Convert a node tree into delta operations.

        Args:
            node: Root of the tree (Element or Text)

        Returns:
            Ordered operations, always ending with a newline

        Raises:
            CustomBlockError: If a custom block converter fails
        """
        builder = self._build(node)
        operations = builder.to_operation_list()
        logger.debug(f"Converted document into {len(operations)} operation(s)")
        return operations

    def convert_to_delta(self, node: Node) -> Delta:
        """Convert a node tree into a Delta container."""
        return self._build(node).to_delta()

    def parse(self, markup: str) -> Element:
        """Parse markup with the configured BeautifulSoup tree builder.

        Raises:
            ConversionError: If the configured parser is not installed
        """
        try:
            return parse_html(markup, self.options.parser)
        except FeatureNotFound as e:
            raise ConversionError(
                f"HTML parser '{self.options.parser}' is not available: {e}"
            ) from e

    def convert_html(self, markup: str) -> List[Operation]:
        """Parse markup and convert it into delta operations.

        Args:
            markup: HTML document or fragment

        Returns:
            Ordered operations, always ending with a newline

        Raises:
            ConversionError: If the markup cannot be parsed or a custom block
                converter fails
        """
        return self.convert(self.parse(markup))

    def _build(self, node: Node) -> DeltaBuilder:
        builder = DeltaBuilder()
        NodeDispatcher(builder, self.registry, self.options).dispatch(node)
        return builder


def convert_html(
    markup: str,
    registry: Optional[CustomBlockRegistry] = None,
    options: Optional[ConverterOptions] = None,
) -> List[Operation]:
    """Convert HTML markup into delta operations.

    Args:
        markup: HTML document or fragment
        registry: Optional custom blocks
        options: Optional conversion options

    Returns:
        Ordered operations, always ending with a newline
    """
    return HtmlToDeltaConverter(options=options, registry=registry).convert_html(markup)
