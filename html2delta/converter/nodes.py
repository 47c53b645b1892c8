"""Node tree consumed by the conversion engine.

The engine walks a minimal DOM-like tree of Element and Text nodes. This
module defines that tree and builds it from BeautifulSoup, so any markup the
lxml (or html.parser) tree builder accepts can be converted. Callers using a
different HTML parser can construct Element/Text nodes directly.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import CData, Comment, Declaration, Doctype, ProcessingInstruction

logger = logging.getLogger(__name__)

# NavigableString subclasses that carry no document text
_NON_TEXT_STRINGS = (Comment, CData, Declaration, Doctype, ProcessingInstruction)

DOCUMENT_TAG = "[document]"


@dataclass(frozen=True)
class Text:
    """A text leaf. Content is raw, un-normalized document text."""

    content: str


@dataclass
class Element:
    """An element node.

    Attributes:
        tag_name: Lower-case tag name (e.g. "p", "strong")
        attributes: Attribute name to value mapping
        children: Child nodes in document order
    """

    tag_name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get an attribute value by name."""
        return self.attributes.get(name, default)

    @property
    def classes(self) -> List[str]:
        """Class names from the class attribute."""
        return (self.attributes.get("class") or "").split()

    def text_content(self) -> str:
        """Concatenated text of all descendant Text nodes, verbatim."""
        parts = []
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            if isinstance(node, Text):
                parts.append(node.content)
            else:
                stack.extend(reversed(node.children))
        return "".join(parts)


Node = Union[Element, Text]


def _attributes(tag: Tag) -> Dict[str, str]:
    # bs4 returns multi-valued attributes (class, rel) as lists
    result = {}
    for name, value in tag.attrs.items():
        if isinstance(value, (list, tuple)):
            value = " ".join(value)
        result[name.lower()] = str(value)
    return result


def from_soup(tag: Tag) -> Element:
    """Build an Element tree from a BeautifulSoup tag.

    Comments, doctypes and processing instructions are dropped. The walk is
    iterative so deeply nested markup does not hit the recursion limit.

    Args:
        tag: BeautifulSoup Tag (or BeautifulSoup object) to convert

    Returns:
        Element mirroring the tag and its subtree
    """
    root = Element(tag_name=(tag.name or DOCUMENT_TAG).lower(), attributes=_attributes(tag))
    stack = [(tag, root)]

    while stack:
        source, target = stack.pop()
        for child in source.children:
            if isinstance(child, Tag):
                element = Element(tag_name=child.name.lower(), attributes=_attributes(child))
                target.children.append(element)
                stack.append((child, element))
            elif isinstance(child, NavigableString):
                if isinstance(child, _NON_TEXT_STRINGS):
                    continue
                target.children.append(Text(str(child)))

    return root


def parse_html(markup: str, parser: str = "lxml") -> Element:
    """Parse an HTML string into an Element tree.

    Full documents are reduced to their <body>; fragments are returned
    under a synthetic document element.

    Args:
        markup: HTML markup (document or fragment)
        parser: BeautifulSoup tree builder name

    Returns:
        Root Element of the parsed tree
    """
    soup = BeautifulSoup(markup or "", parser)
    body = soup.find("body")
    root = from_soup(body if body is not None else soup)
    logger.debug(f"Parsed {len(markup or '')} characters of HTML with {parser}")
    return root
