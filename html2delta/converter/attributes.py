"""Attribute resolution for HTML elements.

This module maps a tag name, its attribute map and its inline style string
to a partial set of delta formatting attributes (bold, italic, header,
align, color, ...). All functions are pure and never raise: a value that
cannot be interpreted is dropped and the rest of the element is still
resolved.
"""

import logging
import re
from typing import Callable, Dict, Mapping, Optional, Tuple

from .models import AttributeSet

logger = logging.getLogger(__name__)

# Attribute keys that describe a whole line rather than a run of text.
# These travel on the block-closing newline operation.
BLOCK_KEYS = frozenset({
    "align",
    "header",
    "list",
    "indent",
    "blockquote",
    "codeBlock",
    "lineHeight",
})

ALIGN_VALUES = frozenset({"left", "center", "right", "justify"})

HEADER_TAGS = {f"h{level}": level for level in range(1, 7)}

# Fixed tag table for inline formatting
_TAG_ATTRIBUTES: Dict[str, AttributeSet] = {
    "b": {"bold": True},
    "strong": {"bold": True},
    "i": {"italic": True},
    "em": {"italic": True},
    "cite": {"italic": True},
    "dfn": {"italic": True},
    "u": {"underline": True},
    "ins": {"underline": True},
    "s": {"strike": True},
    "strike": {"strike": True},
    "del": {"strike": True},
    "sup": {"script": "super"},
    "sub": {"script": "sub"},
}

# Values that mean "no explicit color"
_NON_COLORS = frozenset({
    "inherit",
    "initial",
    "unset",
    "revert",
    "currentcolor",
    "transparent",
    "none",
})

_NUMBER_PATTERN = re.compile(r"^([+]?(?:\d+(?:\.\d*)?|\.\d+))\s*([a-z%]*)$")
_RGB_PATTERN = re.compile(r"^rgba?\(\s*([^)]*)\)$")
_IMPORTANT_PATTERN = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)
_LANGUAGE_CLASS_PATTERN = re.compile(r"^(?:language|lang)-(.+)$")


def _number(value: str) -> Optional[float]:
    """Parse a CSS number, stripping any unit. Integral values become int."""
    match = _NUMBER_PATTERN.match(value.strip().lower())
    if not match:
        return None
    number = float(match.group(1))
    if number.is_integer():
        return int(number)
    return number


def parse_integer(value: Optional[str]) -> Optional[int]:
    """Parse an integer attribute value, or None if it is not one."""
    try:
        return int((value or "").strip())
    except ValueError:
        return None


def normalize_color(value: str) -> Optional[str]:
    """Normalize a CSS color value.

    rgb()/rgba() colors become #rrggbb; hex and named colors are returned
    lower-cased. Fully transparent and keyword values yield None.

    Args:
        value: CSS color value

    Returns:
        Normalized color string, or None if the value is not a usable color
    """
    value = value.strip().lower()
    if not value or value in _NON_COLORS:
        return None

    match = _RGB_PATTERN.match(value)
    if match:
        parts = [p.strip() for p in re.split(r"[,\s/]+", match.group(1)) if p.strip()]
        if len(parts) not in (3, 4):
            return None
        if len(parts) == 4:
            alpha = _number(parts[3].rstrip("%"))
            if alpha is None or alpha == 0:
                return None
        channels = []
        for part in parts[:3]:
            if part.endswith("%"):
                number = _number(part[:-1])
                if number is None:
                    return None
                number = number * 255 / 100
            else:
                number = _number(part)
                if number is None:
                    return None
            channels.append(max(0, min(255, int(round(number)))))
        return "#{:02x}{:02x}{:02x}".format(*channels)

    if value.startswith("#"):
        if re.fullmatch(r"#(?:[0-9a-f]{3}|[0-9a-f]{4}|[0-9a-f]{6}|[0-9a-f]{8})", value):
            return value
        return None

    if re.fullmatch(r"[a-z]+", value):
        return value
    return None


def _parse_align(value: str) -> Optional[AttributeSet]:
    value = value.lower()
    if value in ALIGN_VALUES:
        return {"align": value}
    return None


def _parse_color(value: str) -> Optional[AttributeSet]:
    color = normalize_color(value)
    return {"color": color} if color else None


def _parse_background(value: str) -> Optional[AttributeSet]:
    color = normalize_color(value)
    return {"background": color} if color else None


def _parse_font_family(value: str) -> Optional[AttributeSet]:
    family = value.split(",")[0].strip().strip("'\"").strip()
    return {"font": family} if family else None


def _parse_font_size(value: str) -> Optional[AttributeSet]:
    size = _number(value)
    return {"size": size} if size else None


def _parse_line_height(value: str) -> Optional[AttributeSet]:
    height = _number(value)
    return {"lineHeight": height} if height else None


def _parse_font_weight(value: str) -> Optional[AttributeSet]:
    value = value.lower()
    if value in ("bold", "bolder"):
        return {"bold": True}
    weight = _number(value)
    if weight is not None and weight >= 600:
        return {"bold": True}
    return None


def _parse_font_style(value: str) -> Optional[AttributeSet]:
    if value.lower().split()[0] in ("italic", "oblique"):
        return {"italic": True}
    return None


def _parse_text_decoration(value: str) -> Optional[AttributeSet]:
    tokens = value.lower().split()
    result: AttributeSet = {}
    if "underline" in tokens:
        result["underline"] = True
    if "line-through" in tokens:
        result["strike"] = True
    return result or None


def _parse_vertical_align(value: str) -> Optional[AttributeSet]:
    value = value.lower()
    if value in ("super", "sub"):
        return {"script": value}
    return None


_STYLE_PARSERS: Dict[str, Callable[[str], Optional[AttributeSet]]] = {
    "text-align": _parse_align,
    "color": _parse_color,
    "background-color": _parse_background,
    "background": _parse_background,
    "font-family": _parse_font_family,
    "font-size": _parse_font_size,
    "line-height": _parse_line_height,
    "font-weight": _parse_font_weight,
    "font-style": _parse_font_style,
    "text-decoration": _parse_text_decoration,
    "text-decoration-line": _parse_text_decoration,
    "vertical-align": _parse_vertical_align,
}


def resolve_style(style: Optional[str]) -> AttributeSet:
    """Parse an inline style string into formatting attributes.

    Declarations are split on ";" and each on its first ":". Property names
    are trimmed and lower-cased. Unrecognized properties and values that
    cannot be parsed are ignored.

    Args:
        style: Value of a style attribute (may be None)

    Returns:
        Partial attribute set; later declarations override earlier ones
    """
    result: AttributeSet = {}
    if not style:
        return result

    for declaration in style.split(";"):
        name, sep, value = declaration.partition(":")
        if not sep:
            continue
        name = name.strip().lower()
        value = _IMPORTANT_PATTERN.sub("", value.strip())
        if not name or not value:
            continue

        parse = _STYLE_PARSERS.get(name)
        if parse is None:
            continue
        parsed = parse(value)
        if parsed is None:
            logger.debug(f"Dropping unparseable style declaration {name}: {value}")
            continue
        result.update(parsed)

    return result


def resolve_inline(tag_name: str, attrs: Mapping[str, str]) -> AttributeSet:
    """Resolve the inline formatting an element applies to its content.

    Args:
        tag_name: Lower-case tag name
        attrs: Element attributes

    Returns:
        Partial attribute set from the tag table, links and <font>
    """
    result: AttributeSet = dict(_TAG_ATTRIBUTES.get(tag_name, {}))

    if tag_name == "a":
        href = (attrs.get("href") or "").strip()
        if href:
            result["link"] = href

    elif tag_name == "font":
        color = normalize_color(attrs.get("color") or "")
        if color:
            result["color"] = color
        face = _parse_font_family(attrs.get("face") or "")
        if face:
            result.update(face)
        size = _number(attrs.get("size") or "")
        if size:
            result["size"] = size

    return result


def resolve_block(tag_name: str, attrs: Mapping[str, str]) -> AttributeSet:
    """Resolve the line-level attributes a block element carries.

    Args:
        tag_name: Lower-case tag name
        attrs: Element attributes

    Returns:
        Partial attribute set (header, blockquote, align)
    """
    result: AttributeSet = {}

    if tag_name in HEADER_TAGS:
        result["header"] = HEADER_TAGS[tag_name]
    elif tag_name == "blockquote":
        result["blockquote"] = True

    align = _parse_align((attrs.get("align") or "").strip())
    if align:
        result.update(align)

    return result


def resolve_code_language(*class_lists) -> Optional[str]:
    """Find a language tag in language-*/lang-* class names.

    Args:
        class_lists: Class name lists to search, in priority order

    Returns:
        Language name, or None if no class names one
    """
    for classes in class_lists:
        for name in classes:
            match = _LANGUAGE_CLASS_PATTERN.match(name)
            if match:
                return match.group(1)
    return None


def resolve_embed(
    tag_name: str,
    attrs: Mapping[str, str],
    video_tags=frozenset({"video", "iframe"}),
) -> Optional[Tuple[Dict[str, str], AttributeSet]]:
    """Resolve an embed element into an embed object and its attributes.

    Args:
        tag_name: Lower-case tag name
        attrs: Element attributes
        video_tags: Tags treated as video embeds

    Returns:
        (embed object, attributes) tuple, or None when the element has no
        usable source
    """
    src = (attrs.get("src") or "").strip()
    if not src:
        return None

    if tag_name == "img":
        attributes: AttributeSet = {}
        alt = attrs.get("alt")
        if alt:
            attributes["alt"] = alt
        width = (attrs.get("width") or "").strip()
        if width:
            attributes["width"] = width
        return {"image": src}, attributes

    if tag_name in video_tags:
        return {"video": src}, {}

    return None


def split_block_attributes(attributes: Mapping) -> Tuple[AttributeSet, AttributeSet]:
    """Split an attribute set into (inline, block) parts."""
    inline: AttributeSet = {}
    block: AttributeSet = {}
    for key, value in attributes.items():
        if key in BLOCK_KEYS:
            block[key] = value
        else:
            inline[key] = value
    return inline, block
