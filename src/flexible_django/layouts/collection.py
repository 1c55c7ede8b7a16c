# flexible_django/layouts/collection.py
from collections.abc import Iterable, Iterator, MutableSequence
from typing import Any, Callable, overload

from ..encoding import dumps
from .base import Layout


class LayoutCollection(MutableSequence):
    """Ordered layouts of one flexible attribute.

    Order is storage order (and render order). Items are addressable by
    position (``collection[0]``) and by layout key (``collection["a1b2"]``).
    """

    def __init__(self, layouts: Iterable[Layout] = ()) -> None:
        self._items: list[Layout] = list(layouts)

    @overload
    def __getitem__(self, index: int) -> Layout: ...
    @overload
    def __getitem__(self, index: str) -> Layout: ...
    @overload
    def __getitem__(self, index: slice) -> "LayoutCollection": ...

    def __getitem__(self, index):
        if isinstance(index, str):
            found = self.find(index)
            if found is None:
                raise KeyError(index)
            return found
        if isinstance(index, slice):
            return LayoutCollection(self._items[index])
        return self._items[index]

    def __setitem__(self, index, value) -> None:
        if isinstance(index, str):
            position = self.index_of(index)
            if position is None:
                raise KeyError(index)
            index = position
        self._items[index] = value

    def __delitem__(self, index) -> None:
        if isinstance(index, str):
            position = self.index_of(index)
            if position is None:
                raise KeyError(index)
            index = position
        del self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Layout]:
        return iter(self._items)

    def insert(self, index: int, value: Layout) -> None:
        self._items.insert(index, value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LayoutCollection):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"LayoutCollection({self._items!r})"

    # ---- lookups -----------------------------------------------------------

    def find(self, key: str) -> Layout | None:
        for layout in self._items:
            if layout.key == key:
                return layout
        return None

    def index_of(self, key: str) -> int | None:
        for position, layout in enumerate(self._items):
            if layout.key == key:
                return position
        return None

    def keys(self) -> list[str]:
        return [layout.key for layout in self._items]

    def names(self) -> list[str]:
        return [layout.name for layout in self._items]

    def map(self, fn: Callable[[Layout], Any]) -> "LayoutCollection":
        return LayoutCollection(fn(layout) for layout in self._items)

    # ---- output ------------------------------------------------------------

    def to_list(self) -> list[dict[str, Any]]:
        return [layout.to_dict() for layout in self._items]

    def to_json(self, **kwargs: Any) -> str:
        return dumps(self.to_list(), **kwargs)


__all__ = ["LayoutCollection"]
