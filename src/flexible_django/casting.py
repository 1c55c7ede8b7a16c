# flexible_django/casting.py
"""
flexible_django.casting
=======================

Cast pipeline: raw stored value -> `LayoutCollection`.

Accepted raw values
-------------------
- a JSON string holding a list of layout items,
- a list (or tuple / `LayoutCollection`) of layout items.

Each item may be a JSON string, a mapping ``{"layout", "key", "attributes"}``,
an attribute namespace with the same names, or an already built `Layout`.
Items without a layout name are dropped. Anything unparseable degrades to an
empty or partial collection; only misconfigured layout classes raise.

Attribute values that are non-empty lists (or already cast collections) are
cast recursively as nested layout collections. Each nested layout also gets an
object-shaped snapshot of its attributes on ``layout.attributes`` (JSON
round-tripped into namespaces) for templates and callers written against
loosely typed nested objects.
"""

import json
import logging
from collections.abc import Iterable, Mapping
from types import SimpleNamespace
from typing import Any

from .depended import DependedLayoutResolver
from .encoding import to_namespace
from .layouts import Layout, LayoutCollection
from .registry import LayoutRegistry, get_registry, resolve_layout_class

logger = logging.getLogger(__name__)


def _with_compat_attributes(sub_layout: Layout) -> Layout:
    sub_layout.attributes = to_namespace(sub_layout.get_attributes())
    return sub_layout


class FlexibleCaster:
    """Casts raw values for one owning record (the `owner`, may be None)."""

    def __init__(self, owner: Any = None, *, registry: LayoutRegistry | None = None) -> None:
        self.owner = owner
        self._registry = registry

    @property
    def registry(self) -> LayoutRegistry:
        return self._registry if self._registry is not None else get_registry()

    def to_flexible(
        self,
        value: Any,
        layout_mapping: Mapping[str, Any] | None = None,
        with_: Iterable[str] | None = None,
    ) -> LayoutCollection:
        flexible = self.get_flexible_list_from_value(value)
        if flexible is None:
            return LayoutCollection()

        layouts = LayoutCollection(
            layout
            for layout in self.get_mapped_layouts(flexible, layout_mapping or {}, with_)
            if layout is not None
        )

        return DependedLayoutResolver(self.owner).resolve(layouts)

    def get_flexible_list_from_value(self, value: Any) -> list | None:
        """Normalize a raw value into a list of layout items, or None."""
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except ValueError:
                logger.debug("Flexible value is not valid JSON; casting to an empty collection")
                return None
            return value if isinstance(value, list) else None

        if isinstance(value, (LayoutCollection, tuple)):
            return list(value)

        if isinstance(value, list):
            return value

        return None

    def get_mapped_layouts(
        self,
        flexible: list,
        layout_mapping: Mapping[str, Any],
        with_: Iterable[str] | None = None,
    ) -> list[Layout | None]:
        return [self.get_mapped_layout(item, layout_mapping, with_) for item in flexible]

    def get_mapped_layout(
        self,
        item: Any,
        layout_mapping: Mapping[str, Any],
        with_: Iterable[str] | None = None,
    ) -> Layout | None:
        name = None
        key = None
        attributes: Any = {}

        if isinstance(item, str):
            try:
                item = json.loads(item)
            except ValueError:
                logger.debug("Dropping flexible item: not valid JSON")
                return None

        if isinstance(item, Layout):
            if item.resolved_from is not None:
                # Recast a resolved depended layout from its placeholder.
                item = item.resolved_from
            name = item.name
            key = item.key
            attributes = item.get_attributes()
        elif isinstance(item, Mapping):
            name = item.get("layout")
            key = item.get("key")
            attributes = item.get("attributes") or {}
        elif isinstance(item, SimpleNamespace):
            name = getattr(item, "layout", None)
            key = getattr(item, "key", None)
            attributes = getattr(item, "attributes", None) or {}

        if name is None:
            return None

        if isinstance(attributes, SimpleNamespace):
            attributes = vars(attributes)
        if not isinstance(attributes, Mapping):
            attributes = {}

        return self.create_mapped_layout(str(name), key, attributes, layout_mapping, with_)

    def create_mapped_layout(
        self,
        name: str,
        key: str | None,
        attributes: Mapping[str, Any],
        layout_mapping: Mapping[str, Any],
        with_: Iterable[str] | None = None,
    ) -> Layout:
        if name in layout_mapping:
            layout_cls = resolve_layout_class(layout_mapping[name])
        else:
            layout_cls = self.registry.default_layout_class()

        layout = layout_cls(name, name, [], key, attributes)

        layout.on_load()
        layout.set_model(self.owner)
        layout.set_with(with_)

        attributes = layout.get_attributes()
        for attribute, value in attributes.items():
            if not isinstance(value, (list, LayoutCollection)) or not value:
                continue

            attributes[attribute] = self.to_flexible(value, layout_mapping, with_).map(_with_compat_attributes)

        layout.set_raw_attributes(attributes)
        return layout


def to_flexible(
    value: Any,
    layout_mapping: Mapping[str, Any] | None = None,
    with_: Iterable[str] | None = None,
    *,
    owner: Any = None,
) -> LayoutCollection:
    """Functional shortcut for ``FlexibleCaster(owner).to_flexible(...)``."""
    return FlexibleCaster(owner).to_flexible(value, layout_mapping, with_)


__all__ = ["FlexibleCaster", "to_flexible"]
