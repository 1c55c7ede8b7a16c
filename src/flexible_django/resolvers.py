# flexible_django/resolvers.py
"""
Resolver contract between the cast pipeline and the stored value.

A resolver decides how a flexible attribute is read from and written to a
record. The default `JsonResolver` keeps the ``[{"layout", "key",
"attributes"}, ...]`` JSON shape in the column itself; integrations that store
layouts elsewhere (related rows, another format) implement `ResolverInterface`
(``manage.py make_flexible_resolver`` writes a skeleton).
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any

from .casting import FlexibleCaster
from .encoding import dumps, to_jsonable
from .layouts import Layout, LayoutCollection


class ResolverInterface(ABC):
    @abstractmethod
    def get(self, record: Any, attribute: str, layouts: Mapping[str, Any]) -> Any:  # pragma: no cover - interface only
        """Return the external value of `attribute`, cast with the `layouts` name -> class mapping."""
        raise NotImplementedError

    @abstractmethod
    def set(self, record: Any, attribute: str, groups: Iterable[Any] | None) -> Any:  # pragma: no cover - interface only
        """Return the raw storable value for `groups`."""
        raise NotImplementedError


def _group_to_dict(group: Any) -> dict[str, Any]:
    if isinstance(group, Layout):
        return group.to_dict()
    if isinstance(group, Mapping):
        return {
            "layout": group.get("layout"),
            "key": group.get("key"),
            "attributes": to_jsonable(group.get("attributes") or {}),
        }
    raise TypeError(f"Cannot store {type(group).__name__} as a flexible layout")


class JsonResolver(ResolverInterface):
    """Stores layouts as a JSON string in the attribute's own column."""

    def get(self, record: Any, attribute: str, layouts: Mapping[str, Any]) -> LayoutCollection:
        return FlexibleCaster(record).to_flexible(getattr(record, attribute, None), layouts)

    def set(self, record: Any, attribute: str, groups: Iterable[Any] | None) -> str | None:
        if groups is None:
            return None
        return dumps([_group_to_dict(group) for group in groups])


__all__ = ["ResolverInterface", "JsonResolver"]
