"""Error types raised (or returned) while assembling an interior."""

from typing import Optional


class ColoringBuilderError(Exception):
    """Base class for all coloring book assembly errors"""


class LayoutConfigurationError(ColoringBuilderError):
    """A text block or image rectangle falls outside the safe area.

    Only raised when layout checking is strict; the fixed constants are
    expected never to trigger it for supported books.
    """


class ImageDrawError(ColoringBuilderError):
    """An illustration could not be decoded or placed on its page."""

    def __init__(self, page_id: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"Page {page_id}: {message}")
        self.page_id = page_id
        self.cause = cause


class SerializationError(ColoringBuilderError):
    """The finished canvas could not be turned into PDF bytes."""
