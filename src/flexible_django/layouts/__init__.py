"""Layout value objects."""

from .base import Layout, generate_key
from .collection import LayoutCollection
from .defaults import DEFAULT_LAYOUTS, WysiwygLayout
from .depended import (
    DEPENDED_LAYOUT_NAME,
    POINTER_DELIMITER,
    DependedLayout,
    is_depended_layout,
    make_pointer,
    parse_pointer,
)

__all__ = [
    "Layout",
    "LayoutCollection",
    "DependedLayout",
    "WysiwygLayout",
    "DEFAULT_LAYOUTS",
    "DEPENDED_LAYOUT_NAME",
    "POINTER_DELIMITER",
    "generate_key",
    "is_depended_layout",
    "make_pointer",
    "parse_pointer",
]
