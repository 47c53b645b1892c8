"""Test helper modules for conversion testing.

This package provides utilities shared by the unit and integration tests:
- node_builders: Build Element/Text trees without an HTML parser
- assertion_helpers: Assertions over operation lists
"""

from .node_builders import doc, el, nest
from .assertion_helpers import (
    assert_ends_with_newline,
    assert_no_empty_inserts,
    line_texts,
)

__all__ = [
    'doc',
    'el',
    'nest',
    'assert_ends_with_newline',
    'assert_no_empty_inserts',
    'line_texts',
]
