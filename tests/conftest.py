"""Root pytest configuration for all tests."""

import logging

import pytest

from html2delta.converter.builder import DeltaBuilder
from html2delta.converter.html_converter import HtmlToDeltaConverter
from html2delta.converter.registry import CustomBlockRegistry


@pytest.fixture(autouse=True)
def reset_html2delta_logger():
    """Remove handlers the CLI attaches to the package logger between tests."""
    yield
    app_logger = logging.getLogger("html2delta")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.setLevel(logging.NOTSET)


@pytest.fixture
def builder():
    """Empty DeltaBuilder."""
    return DeltaBuilder()


@pytest.fixture
def registry():
    """Empty CustomBlockRegistry."""
    return CustomBlockRegistry()


@pytest.fixture
def converter(registry):
    """Converter with default options and the registry fixture."""
    return HtmlToDeltaConverter(registry=registry)
