# flexible_django/layouts/base.py
"""
flexible_django.layouts.base
============================

`Layout` is one occurrence of a named sub-form inside a flexible attribute.

An instance carries:
- ``name``: the layout type name used for class lookup and storage,
- ``label``: a human readable label (the cast pipeline uses the name),
- ``key``: a stable identifier unique within the owning collection,
- an ordered attribute mapping (values may be nested ``LayoutCollection``s),
- a weak back-reference to the owning record, for contextual hooks only,
- ``with_``: relation names to eager-load, passed through untouched.

Attributes are readable as ``layout.title``, ``layout["title"]`` or
``layout.get_attribute("title")``. Writes through ``set_attribute`` run
``set_<name>_attribute`` mutators when a subclass defines one;
``set_raw_attributes`` bypasses them.

Data attributes named like an instance attribute (``name``, ``key``,
``label``, ``fields``, ``model``, ``attributes``, ``with_``, ``resolved_from``)
are shadowed for dotted access in Python: ``layout.name`` is the layout type
name. Read them with ``layout["name"]`` or ``layout.get_attribute("name")``.
Django templates try ``layout["name"]`` first, so the template context also
carries ``layout_name`` and ``layout_key``.
"""

import logging
import secrets
import weakref
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Callable

from django.template.loader import render_to_string

from ..encoding import to_jsonable

logger = logging.getLogger(__name__)


def generate_key() -> str:
    return secrets.token_hex(8)


class Layout:
    name: str = "layout"
    label: str | None = None
    fields: tuple[str, ...] = ()
    template_name: str | None = None

    # Set to False to keep a class out of auto-discovery.
    auto_load: bool = True

    def __init__(
        self,
        label: str | None = None,
        name: str | None = None,
        fields: Iterable[str] | None = None,
        key: str | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> None:
        self.name = name or type(self).name
        self.label = label or type(self).label or self.name
        self.fields = tuple(fields) if fields is not None else type(self).fields
        self.key = key if key is not None else generate_key()
        # Object-shaped snapshot of the attributes; populated for nested layouts.
        self.attributes: Any = None
        self.with_: tuple[str, ...] = ()
        self._model_ref: Callable[[], Any] | None = None
        # Depended placeholder this layout stands in for, if any.
        self.resolved_from: Layout | None = None
        self._attributes: dict[str, Any] = dict(attributes or {})

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} key={self.key!r}>"

    # ---- hooks -------------------------------------------------------------

    def on_load(self) -> None:
        """Called once by the cast pipeline right after construction."""

    def should_not_be_auto_loaded(self) -> bool:
        return not self.auto_load

    # ---- owner & eager loading --------------------------------------------

    def set_model(self, model: Any) -> "Layout":
        if model is None:
            self._model_ref = None
            return self
        try:
            self._model_ref = weakref.ref(model)
        except TypeError:
            logger.debug("%r is not weak-referenceable; holding it directly", type(model))
            self._model_ref = lambda: model
        return self

    @property
    def model(self) -> Any:
        return self._model_ref() if self._model_ref is not None else None

    def set_with(self, with_: Iterable[str] | None) -> "Layout":
        self.with_ = tuple(with_ or ())
        return self

    # ---- attributes --------------------------------------------------------

    def get_attributes(self) -> dict[str, Any]:
        return dict(self._attributes)

    def set_raw_attributes(self, attributes: Mapping[str, Any]) -> "Layout":
        self._attributes = dict(attributes)
        return self

    def get_attribute(self, key: str, default: Any = None) -> Any:
        return self._attributes.get(key, default)

    def set_attribute(self, key: str, value: Any) -> "Layout":
        mutator = getattr(self, f"set_{key}_attribute", None)
        if callable(mutator):
            value = mutator(value)
        self._attributes[key] = value
        return self

    def __getattr__(self, item: str) -> Any:
        attributes = self.__dict__.get("_attributes")
        if attributes is not None and item in attributes:
            return attributes[item]
        raise AttributeError(f"{type(self).__name__!s} has no attribute {item!r}")

    def __getitem__(self, key: str) -> Any:
        return self._attributes[key]

    def __contains__(self, key: object) -> bool:
        return key in self._attributes

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    # ---- output ------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Storage shape: ``{"layout": name, "key": key, "attributes": {...}}``.

        A resolved depended layout is stored as the placeholder it replaced.
        """
        if self.resolved_from is not None:
            return self.resolved_from.to_dict()
        return {
            "layout": self.name,
            "key": self.key,
            "attributes": to_jsonable(self._attributes),
        }

    def get_template_names(self) -> list[str]:
        if self.template_name:
            return [self.template_name]
        return [f"flexible/{self.name}.html", "flexible/layout.html"]

    def get_context(self) -> dict[str, Any]:
        return {
            "layout": self,
            "layout_name": self.name,
            "layout_key": self.key,
            "attributes": self.get_attributes(),
        }

    def render(self) -> str:
        return render_to_string(self.get_template_names(), self.get_context())


__all__ = ["Layout", "generate_key"]
