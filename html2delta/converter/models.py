"""Data models for the conversion engine.

This module defines the options and the operation type aliases shared by
the converter components. All models use dataclasses for clean, type-safe
data structures.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Union

# A single delta operation: {"insert": str | dict, "attributes"?: {...}}
Operation = Dict[str, Any]

# Formatting attribute values are booleans, strings or numbers
AttributeValue = Union[bool, str, int, float]
AttributeSet = Dict[str, AttributeValue]

DEFAULT_SKIP_TAGS = frozenset({
    "script",
    "style",
    "head",
    "title",
    "template",
    "noscript",
})

DEFAULT_VIDEO_TAGS = frozenset({"video", "iframe"})


@dataclass
class ConverterOptions:
    """Options controlling an HTML-to-delta conversion.

    Attributes:
        parser: BeautifulSoup tree builder used by convert_html ("lxml",
            "html.parser", "html5lib")
        collapse_whitespace: Collapse whitespace runs in text outside code
            blocks, as a browser would when rendering
        skip_tags: Tags whose whole subtree produces no operations
        drop_left_align: Omit align "left" since it is the editor default
        embed_video_tags: Tags converted to a video embed when they carry src

    Example:
        >>> options = ConverterOptions(collapse_whitespace=False)
    """
    parser: str = "lxml"
    collapse_whitespace: bool = True
    skip_tags: FrozenSet[str] = field(default_factory=lambda: DEFAULT_SKIP_TAGS)
    drop_left_align: bool = False
    embed_video_tags: FrozenSet[str] = field(default_factory=lambda: DEFAULT_VIDEO_TAGS)
