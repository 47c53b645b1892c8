"""Test fixtures for html2delta tests.

This module provides sample HTML documents and options files used by the
converter and CLI tests.
"""

from .sample_html import (
    SAMPLE_HTML_SIMPLE,
    SAMPLE_HTML_ARTICLE,
    SAMPLE_HTML_NESTED_LIST,
    SAMPLE_HTML_CODE_BLOCK,
    SAMPLE_HTML_EMBEDS,
    SAMPLE_OPTIONS_YAML,
)

__all__ = [
    "SAMPLE_HTML_SIMPLE",
    "SAMPLE_HTML_ARTICLE",
    "SAMPLE_HTML_NESTED_LIST",
    "SAMPLE_HTML_CODE_BLOCK",
    "SAMPLE_HTML_EMBEDS",
    "SAMPLE_OPTIONS_YAML",
]
