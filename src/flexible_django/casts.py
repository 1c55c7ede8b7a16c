# flexible_django/casts.py
from collections.abc import Iterable, Mapping
from typing import Any

from .layouts import LayoutCollection
from .registry import get_registry
from .resolvers import JsonResolver, ResolverInterface


class FlexibleCast:
    """Model descriptor exposing a flexible column as a `LayoutCollection`.

    Example:
        class Page(HasFlexible, models.Model):
            layout = models.TextField(default="[]")
            blocks = FlexibleCast("layout")

        page.blocks               # LayoutCollection cast from page.layout
        page.blocks = [...]       # layouts / dicts serialized back into page.layout

    Without an explicit `layouts` mapping, every layout known to the registry
    is used.
    """

    def __init__(
        self,
        column: str,
        *,
        layouts: Mapping[str, Any] | None = None,
        resolver: ResolverInterface | None = None,
    ) -> None:
        self.column = column
        self.layouts = layouts
        self.resolver = resolver or JsonResolver()
        self.name: str | None = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def get_layout_mapping(self) -> Mapping[str, Any]:
        if self.layouts is not None:
            return self.layouts
        return get_registry().get_layouts()

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return self.resolver.get(instance, self.column, self.get_layout_mapping())

    def __set__(self, instance: Any, groups: Iterable[Any] | LayoutCollection | None) -> None:
        setattr(instance, self.column, self.resolver.set(instance, self.column, groups))


__all__ = ["FlexibleCast"]
