"""Registry of caller-supplied custom block converters.

A custom block claims elements through matches() and produces its own
operations through convert(). The registry is consulted in registration
order before any built-in tag handling; the first match wins and the
element's children are left entirely to the custom converter.
"""

import logging
from typing import Callable, Iterator, List, Mapping, Optional, Protocol, Sequence, runtime_checkable

from .errors import CustomBlockError
from .models import Operation
from .nodes import Element

logger = logging.getLogger(__name__)

Converter = Callable[[Element, Mapping], Sequence[Operation]]


@runtime_checkable
class CustomBlock(Protocol):
    """Capability interface for custom element handling."""

    def matches(self, element: Element) -> bool:
        ...

    def convert(self, element: Element, attributes: Mapping) -> Sequence[Operation]:
        ...


class TagBlock:
    """Custom block matching elements by tag name.

    Attributes:
        tag_names: Lower-case tag names this block claims
        converter: Callable producing operations for a matched element

    Example:
        >>> block = TagBlock("pullquote", lambda el, attrs: [{"insert": el.text_content()}])
    """

    def __init__(self, tag_names, converter: Converter):
        if isinstance(tag_names, str):
            tag_names = [tag_names]
        self.tag_names = frozenset(name.lower() for name in tag_names)
        self.converter = converter

    def matches(self, element: Element) -> bool:
        return element.tag_name in self.tag_names

    def convert(self, element: Element, attributes: Mapping) -> Sequence[Operation]:
        return self.converter(element, attributes)

    def __repr__(self) -> str:
        return f"TagBlock({sorted(self.tag_names)!r})"


class CustomBlockRegistry:
    """Ordered collection of custom blocks.

    Example:
        >>> registry = CustomBlockRegistry()
        >>> registry.register_tag("pullquote", convert_pullquote)
        >>> registry.find(element)
    """

    def __init__(self, blocks: Optional[Sequence[CustomBlock]] = None):
        self._blocks: List[CustomBlock] = []
        for block in blocks or []:
            self.register(block)

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[CustomBlock]:
        return iter(list(self._blocks))

    def register(self, block: CustomBlock) -> CustomBlock:
        """Add a custom block after all previously registered ones.

        Args:
            block: Object with matches() and convert() methods

        Returns:
            The registered block

        Raises:
            TypeError: If block does not provide matches() and convert()
        """
        if not isinstance(block, CustomBlock):
            raise TypeError(
                f"Custom block must define matches() and convert(), got {type(block).__name__}"
            )
        self._blocks.append(block)
        return block

    def register_tag(self, tag_names, converter: Converter) -> TagBlock:
        """Register a converter for one or more tag names."""
        return self.register(TagBlock(tag_names, converter))

    def find(self, element: Element) -> Optional[CustomBlock]:
        """Return the first block claiming element, or None."""
        for block in self._blocks:
            if block.matches(element):
                return block
        return None

    def convert(self, block: CustomBlock, element: Element, attributes: Mapping) -> List[Operation]:
        """Run a custom block and validate its output.

        Args:
            block: Block returned by find()
            element: Matched element
            attributes: Current inline attributes (a copy is passed on)

        Returns:
            Operations produced by the block

        Raises:
            CustomBlockError: If the converter raises or returns anything
                other than a sequence of insert operations
        """
        try:
            result = block.convert(element, dict(attributes))
        except Exception as e:
            logger.warning(f"Custom block {block!r} failed on <{element.tag_name}>: {e}")
            raise CustomBlockError(element.tag_name, str(e), block) from e

        if result is None or isinstance(result, (str, bytes, Mapping)):
            raise CustomBlockError(
                element.tag_name,
                f"expected a list of operations, got {type(result).__name__}",
                block,
            )

        operations = list(result)
        for operation in operations:
            if not isinstance(operation, Mapping) or "insert" not in operation:
                raise CustomBlockError(
                    element.tag_name,
                    f"invalid operation {operation!r}",
                    block,
                )
            insert = operation["insert"]
            if not (isinstance(insert, str) and insert) and not isinstance(insert, Mapping):
                raise CustomBlockError(
                    element.tag_name,
                    f"insert must be a non-empty string or an embed mapping, got {insert!r}",
                    block,
                )
            attributes_value = operation.get("attributes")
            if attributes_value is not None and not isinstance(attributes_value, Mapping):
                raise CustomBlockError(
                    element.tag_name,
                    f"operation attributes must be a mapping, got {type(attributes_value).__name__}",
                    block,
                )
        return operations
