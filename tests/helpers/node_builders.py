"""Builders for hand-made node trees.

HTML parsers repair and restructure markup, so tests that depend on an
exact tree shape build it directly from Element and Text nodes.
"""

from html2delta.converter.nodes import DOCUMENT_TAG, Element, Text


def el(tag_name, *children, **attributes):
    """Build an Element.

    String children become Text nodes. Keyword attributes use '_' for '-'
    (data_author -> data-author) and a trailing '_' to escape keywords
    (class_ -> class).
    """
    nodes = [Text(child) if isinstance(child, str) else child for child in children]
    attrs = {
        name.rstrip('_').replace('_', '-'): value
        for name, value in attributes.items()
    }
    return Element(tag_name=tag_name, attributes=attrs, children=nodes)


def doc(*children):
    """Build a synthetic document root."""
    return el(DOCUMENT_TAG, *children)


def nest(tag_name, depth, leaf):
    """Wrap leaf in depth nested tag_name elements, without recursion."""
    node = leaf if not isinstance(leaf, str) else Text(leaf)
    for _ in range(depth):
        node = Element(tag_name=tag_name, children=[node])
    return node
