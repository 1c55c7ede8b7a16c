# flexible_django/depended.py
"""
Depended-layout resolution.

A depended layout is a placeholder whose ``layout`` attribute points at a
layout living on another record of the same model:
``"{model_id}___{column}___{layout_key}"``. After a collection is cast, each
placeholder is replaced in place by a freshly cast copy of its target.

- malformed pointers raise `DependedLayoutLookupError`,
- a missing record, column or key leaves the placeholder where it is,
- a pointer already being resolved further up the stack (a cycle) is left
  unresolved.

A resolved layout remembers the placeholder it replaced (`resolved_from`) and
serializes as that placeholder, so writing a cast collection back keeps the
pointer.
"""

import logging
from contextvars import ContextVar
from typing import Any

from django.core.exceptions import ValidationError

from .layouts import Layout, LayoutCollection, is_depended_layout, parse_pointer

logger = logging.getLogger(__name__)

_resolving: ContextVar[tuple[str, ...]] = ContextVar("flexible_depended_resolving", default=())


class DependedLayoutResolver:
    def __init__(self, owner: Any) -> None:
        self.owner = owner

    def resolve(self, layouts: LayoutCollection) -> LayoutCollection:
        for index, layout in enumerate(list(layouts)):
            if not is_depended_layout(layout):
                continue

            pointer = layout.get_attribute("layout")
            model_id, column, layout_key = parse_pointer(pointer)

            found = self.find_target_layout(str(pointer), model_id, column, layout_key)
            if found is not None:
                found.resolved_from = layout
                layouts[index] = found
        return layouts

    def find_target_layout(self, pointer: str, model_id: str, column: str, layout_key: str) -> Layout | None:
        stack = _resolving.get()
        if pointer in stack:
            logger.warning("Depended layout cycle detected at %s; leaving it unresolved", pointer)
            return None

        record = self.find_record(model_id)
        if record is None:
            logger.debug("Depended layout target record %s not found for %s", model_id, pointer)
            return None

        token = _resolving.set(stack + (pointer,))
        try:
            target_layouts = record.flex(column)
        finally:
            _resolving.reset(token)

        found = None
        for candidate in target_layouts:
            if candidate.key == layout_key:
                found = candidate

        if found is None:
            logger.debug("Depended layout key %s not found in %s.%s", layout_key, model_id, column)
        return found

    def find_record(self, model_id: str) -> Any:
        manager = getattr(type(self.owner), "_default_manager", None)
        if manager is None:
            return None
        try:
            return manager.filter(pk=model_id).first()
        except (ValueError, ValidationError):
            logger.debug("Depended layout target id %r is not a valid primary key", model_id)
            return None


__all__ = ["DependedLayoutResolver"]
