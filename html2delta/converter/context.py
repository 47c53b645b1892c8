"""Traversal context for the conversion engine.

The TraversalContext carries the formatting that is active at a point in
the tree walk. It is immutable: descending into an element derives a new
context, so sibling subtrees can never observe each other's formatting.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .models import AttributeSet


def merge_attributes(parent: Mapping, child: Optional[Mapping]) -> AttributeSet:
    """Merge child attributes over parent attributes.

    Child keys win on conflict. Neither input is modified.

    Args:
        parent: Inherited attributes
        child: Attributes contributed by the element being entered

    Returns:
        New attribute dictionary
    """
    merged = dict(parent)
    if child:
        merged.update(child)
    return merged


def _frozen(attributes: Mapping) -> Mapping:
    return MappingProxyType(dict(attributes))


@dataclass(frozen=True)
class TraversalContext:
    """Formatting state at a point in the tree walk.

    Attributes:
        attributes: Inherited inline formatting (bold, link, color, ...)
        block_attributes: Inherited line formatting from enclosing blocks
            (blockquote, list, align, ...)
        list_types: One entry ("bullet" or "ordered") per active list level
        list_counters: Ordinal of the current item at each list level
    """

    attributes: Mapping = field(default_factory=lambda: _frozen({}))
    block_attributes: Mapping = field(default_factory=lambda: _frozen({}))
    list_types: Tuple[str, ...] = ()
    list_counters: Tuple[int, ...] = ()

    @property
    def list_depth(self) -> int:
        """Number of enclosing list containers."""
        return len(self.list_types)

    @property
    def inside_blockquote(self) -> bool:
        return bool(self.block_attributes.get("blockquote"))

    @property
    def inside_code_block(self) -> bool:
        return "codeBlock" in self.block_attributes

    def with_attributes(self, attributes: Optional[Mapping]) -> "TraversalContext":
        """Derive a context with attributes merged over the inline formatting."""
        if not attributes:
            return self
        return replace(self, attributes=_frozen(merge_attributes(self.attributes, attributes)))

    def with_block_attributes(self, attributes: Optional[Mapping]) -> "TraversalContext":
        """Derive a context with attributes merged over the line formatting."""
        if not attributes:
            return self
        return replace(self, block_attributes=_frozen(merge_attributes(self.block_attributes, attributes)))

    def enter_list(self, list_type: str) -> "TraversalContext":
        """Derive a context one list level deeper with a fresh counter."""
        return replace(
            self,
            list_types=self.list_types + (list_type,),
            list_counters=self.list_counters + (0,),
        )

    def with_item_number(self, number: int) -> "TraversalContext":
        """Derive a context whose innermost list counter is number."""
        if not self.list_counters:
            return self
        return replace(self, list_counters=self.list_counters[:-1] + (number,))

    def item_attributes(self) -> AttributeSet:
        """Line attributes for a list item at the current depth."""
        if not self.list_types:
            return {}
        attributes: AttributeSet = {"list": self.list_types[-1]}
        if self.list_depth > 1:
            attributes["indent"] = self.list_depth - 1
        return attributes
