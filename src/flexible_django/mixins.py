# flexible_django/mixins.py
"""
`HasFlexible` model mixin.

Gives a Django model:
- casting helpers for its flexible columns (`flexible`, `cast`, `flex`,
  `to_flexible`),
- the option list used to pick a depended layout target, cached under a tag
  and flushed whenever any `HasFlexible` record is saved or deleted (see
  `flexible_django.signals`).

Every ``get_*_for_depended_layout_select`` hook is a classmethod so models can
override the queryset, columns, cache tag, key and TTL.
"""

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any, TypedDict

from django.utils.translation import gettext

from .cache import TaggedCache, get_tagged_cache
from .casting import FlexibleCaster
from .layouts import DEPENDED_LAYOUT_NAME, LayoutCollection, make_pointer
from .registry import get_registry
from .tracing import flexible_span

logger = logging.getLogger(__name__)


class OptionEntry(TypedDict):
    label: str
    group: str


class HasFlexible:
    """Mixin for models storing flexible layouts in one or more columns."""

    # ---- casting -------------------------------------------------------------

    def get_flexible_raw_value(self, attribute: str) -> Any:
        """The stored value of `attribute`, bypassing descriptors when loaded."""
        if attribute in self.__dict__:
            return self.__dict__[attribute]
        return getattr(self, attribute, None)

    def flexible(self, attribute: str, layout_mapping: Mapping[str, Any] | None = None) -> LayoutCollection:
        """Cast the raw stored value of `attribute`."""
        return self.cast(self.get_flexible_raw_value(attribute), layout_mapping)

    def cast(self, value: Any, layout_mapping: Mapping[str, Any] | None = None) -> LayoutCollection:
        return self.to_flexible(value or None, layout_mapping)

    def flex(self, column: str, with_: Iterable[str] | None = None) -> LayoutCollection:
        """Cast `column` with every layout known to the registry."""
        return self.to_flexible(getattr(self, column, None), get_registry().get_layouts(), with_)

    def to_flexible(
        self,
        value: Any,
        layout_mapping: Mapping[str, Any] | None = None,
        with_: Iterable[str] | None = None,
    ) -> LayoutCollection:
        return FlexibleCaster(self).to_flexible(value, layout_mapping, with_)

    # ---- depended layout select: hooks -----------------------------------------

    @classmethod
    def get_options_queryset_for_depended_layout_select(cls):
        return cls._default_manager.all()

    @classmethod
    def get_cache_tag_for_depended_layout_select(cls) -> str | None:
        return "depended-select-options"

    @classmethod
    def get_cache_ttl_for_depended_layout_select(cls) -> int:
        return 60 * 60 * 24

    @classmethod
    def get_cache_key_for_depended_layout_select(cls) -> str:
        return "options-for-depended-layout-select"

    @classmethod
    def get_depended_layout_select_columns(cls) -> list[str]:
        return ["layout"]

    @classmethod
    def get_layouts_to_ignore_from_depended_layout(cls) -> list[str]:
        return []

    @classmethod
    def get_depended_layout_cache(cls) -> TaggedCache:
        return get_tagged_cache()

    def get_depended_layout_group(self, layout: Any = None) -> str:
        name = getattr(self, "name", None)
        if name:
            return str(name)
        return f"{type(self).__name__}: #{self.pk}"

    @staticmethod
    def get_depended_layout_label(layout: Mapping[str, Any]) -> str:
        attributes = layout.get("attributes")
        if isinstance(attributes, Mapping):
            if attributes.get("title") is not None:
                return attributes["title"]
            if attributes.get("name") is not None:
                return attributes["name"]
        return gettext("Unknown")

    # ---- depended layout select: options ----------------------------------------

    @staticmethod
    def _decode_stored_layouts(value: Any) -> Any:
        if isinstance(value, LayoutCollection):
            return value.to_list()
        if isinstance(value, str):
            try:
                return json.loads(value)
            except ValueError:
                return None
        return value

    @classmethod
    def build_options_for_depended_layout_select(cls, model: type["HasFlexible"] | None = None) -> dict[str, OptionEntry]:
        model = model or cls
        columns = model.get_depended_layout_select_columns()
        ignore_layouts = [*cls.get_layouts_to_ignore_from_depended_layout(), DEPENDED_LAYOUT_NAME]

        options: dict[str, OptionEntry] = {}
        with flexible_span(
            "flexible.depended.options",
            attributes={"flexible.model": model.__name__, "flexible.columns": columns},
        ) as span:
            for record in cls.get_options_queryset_for_depended_layout_select():
                for column in columns:
                    layouts = cls._decode_stored_layouts(record.get_flexible_raw_value(column))
                    if not isinstance(layouts, list):
                        continue
                    for layout in layouts:
                        try:
                            if layout["layout"] in ignore_layouts:
                                continue

                            key = make_pointer(record.pk, column, layout["key"])
                            options[key] = {
                                "label": cls.get_depended_layout_label(layout),
                                "group": record.get_depended_layout_group(layout),
                            }
                        except (AttributeError, KeyError, TypeError):
                            logger.debug(
                                "Skipping unreadable layout in %s #%s.%s", model.__name__, record.pk, column,
                                exc_info=True,
                            )
            span.set_attribute("flexible.options.count", len(options))
        return options

    @classmethod
    def get_options_for_depended_layout_select(cls, model: type["HasFlexible"] | None = None) -> dict[str, OptionEntry]:
        """``{"{pk}___{column}___{key}": {"label", "group"}}`` for every selectable layout."""
        cache_tag = cls.get_cache_tag_for_depended_layout_select()

        def builder() -> dict[str, OptionEntry]:
            return cls.build_options_for_depended_layout_select(model)

        if cache_tag:
            return cls.get_depended_layout_cache().remember(
                cache_tag,
                cls.get_cache_key_for_depended_layout_select(),
                cls.get_cache_ttl_for_depended_layout_select(),
                builder,
            )
        return builder()

    def clear_cached_flexible_data(self) -> None:
        cache_tag = self.get_cache_tag_for_depended_layout_select()
        if cache_tag:
            self.get_depended_layout_cache().flush_tag(cache_tag)


__all__ = ["HasFlexible", "OptionEntry"]
