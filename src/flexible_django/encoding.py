# flexible_django/encoding.py
"""JSON helpers for the ``[{"layout", "key", "attributes"}, ...]`` storage shape."""

import json
from collections.abc import Mapping
from types import SimpleNamespace
from typing import Any

from django.core.serializers.json import DjangoJSONEncoder


def to_jsonable(value: Any) -> Any:
    """Recursively convert layouts, collections and namespaces into plain JSON types."""
    # Local import: layouts import this module for their own serialization.
    from .layouts.base import Layout
    from .layouts.collection import LayoutCollection

    if isinstance(value, Layout):
        return value.to_dict()
    if isinstance(value, LayoutCollection):
        return value.to_list()
    if isinstance(value, SimpleNamespace):
        return {k: to_jsonable(v) for k, v in vars(value).items()}
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


class FlexibleJSONEncoder(DjangoJSONEncoder):
    """DjangoJSONEncoder that also understands layouts and layout collections."""

    def default(self, o: Any) -> Any:
        converted = to_jsonable(o)
        if converted is not o:
            return converted
        return super().default(o)


def dumps(value: Any, **kwargs: Any) -> str:
    kwargs.setdefault("cls", FlexibleJSONEncoder)
    return json.dumps(value, **kwargs)


def to_namespace(value: Any) -> Any:
    """JSON round-trip `value` into nested attribute namespaces (object-of-objects)."""
    return json.loads(dumps(value), object_hook=lambda d: SimpleNamespace(**d))


__all__ = ["FlexibleJSONEncoder", "dumps", "to_jsonable", "to_namespace"]
