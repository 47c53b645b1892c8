"""Typed exception hierarchy for HTML-to-delta conversion errors.

The conversion engine degrades gracefully on malformed markup, so the only
fatal failures are those raised by caller-supplied extensions. All exceptions
inherit from Html2DeltaError for easy catching and keep their context as
attributes to help with debugging.
"""

from typing import Optional


class Html2DeltaError(Exception):
    """Base exception for all html2delta errors.

    Use this to catch any application-level error from the library or CLI.
    """
    pass


class ConversionError(Html2DeltaError):
    """Raised when an HTML document cannot be converted to delta operations."""

    def __init__(self, message: str):
        super().__init__(message)


class CustomBlockError(ConversionError):
    """Raised when a registered custom block converter fails.

    Wraps faults raised inside the converter as well as converters that
    return something other than a list of insert operations.
    """

    def __init__(self, tag_name: str, reason: str, block: Optional[object] = None):
        super().__init__(
            f"Custom block converter for <{tag_name}> failed: {reason}"
        )
        self.tag_name = tag_name
        self.reason = reason
        self.block = block
