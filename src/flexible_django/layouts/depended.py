# flexible_django/layouts/depended.py
from typing import Any

from ..exceptions import DependedLayoutLookupError
from .base import Layout

DEPENDED_LAYOUT_NAME = "depended-layout"
POINTER_DELIMITER = "___"


def make_pointer(model_id: Any, column: str, layout_key: str) -> str:
    """Composite key ``"{model_id}___{column}___{layout_key}"``."""
    return f"{model_id}{POINTER_DELIMITER}{column}{POINTER_DELIMITER}{layout_key}"


def parse_pointer(pointer: Any) -> tuple[str, str, str]:
    """Split a composite key into ``(model_id, column, layout_key)``.

    Raises DependedLayoutLookupError unless there are exactly three parts.
    """
    parts = str(pointer if pointer is not None else "").split(POINTER_DELIMITER)
    if len(parts) != 3:
        raise DependedLayoutLookupError(
            f"Depended layout pointer {pointer!r} must look like 'id{POINTER_DELIMITER}column{POINTER_DELIMITER}key'"
        )
    model_id, column, layout_key = parts
    return model_id, column, layout_key


def is_depended_layout(layout: Layout) -> bool:
    return isinstance(layout, DependedLayout) or layout.name == DEPENDED_LAYOUT_NAME


class DependedLayout(Layout):
    """Placeholder mirroring a layout that lives on another record.

    Its ``layout`` attribute holds the composite key of the target.
    """

    name = DEPENDED_LAYOUT_NAME
    label = "Depended layout"
    fields = ("layout",)

    @property
    def pointer(self) -> Any:
        return self.get_attribute("layout")

    def parse_pointer(self) -> tuple[str, str, str]:
        return parse_pointer(self.pointer)


__all__ = [
    "DEPENDED_LAYOUT_NAME",
    "POINTER_DELIMITER",
    "DependedLayout",
    "is_depended_layout",
    "make_pointer",
    "parse_pointer",
]
