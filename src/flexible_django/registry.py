# flexible_django/registry.py
"""
flexible_django.registry
========================

Layout registry: resolves layout names to `Layout` classes.

Resolution
----------
- ``AUTO_DISCOVERY`` on: every ``.py`` module under ``DISCOVERY_PACKAGE`` is
  imported (recursively) and each `Layout` subclass defined there is
  instantiated without arguments. Classes that refuse to construct
  (``TypeError`` / ``AttributeError`` / ``NotImplementedError``, e.g. abstract
  bases or bases expecting subclass attributes) and classes with
  ``auto_load = False`` are skipped. The result is memoised on the registry
  instance.
- Otherwise ``LAYOUTS`` entries are merged in declaration order. An entry is
  either a Layout class (or its import path) registered under the entry's
  name, or a zero-argument supplier (or its import path) returning a
  ``{name: class}`` mapping. Later entries win.
- Otherwise the built-in defaults.

With ``MERGE_LAYOUTS`` the built-in defaults are merged *after* either path,
so a default replaces a same-named configured or discovered layout.

`get_layouts_from_cache()` persists the result in the Django cache until
`flush_layouts_cache()` is called.
"""

import importlib
import importlib.util
import logging
import threading
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import ModuleType
from typing import Any

from django.utils.module_loading import import_string
from django.utils.safestring import SafeString, mark_safe

from .cache import TaggedCache
from .conf import FlexibleSettings, get_flexible_settings
from .exceptions import LayoutConfigurationError
from .layouts import DEFAULT_LAYOUTS, Layout, LayoutCollection
from .tracing import flexible_span

logger = logging.getLogger(__name__)

LayoutMap = dict[str, type[Layout]]


def _import(entry: Any) -> Any:
    if not isinstance(entry, str):
        return entry
    try:
        return import_string(entry)
    except ImportError as err:
        raise LayoutConfigurationError(f"Could not import layout entry {entry!r}: {err}") from err


def _is_layout_class(obj: Any) -> bool:
    return isinstance(obj, type) and issubclass(obj, Layout)


def resolve_layout_class(entry: Any) -> type[Layout]:
    """Return the Layout class for a class or import path; raise on anything else."""
    target = _import(entry)
    if not _is_layout_class(target):
        raise LayoutConfigurationError(f"{entry!r} is not a Layout subclass")
    return target


def _layout_classes_in(module: ModuleType) -> list[type[Layout]]:
    return [
        obj
        for obj in vars(module).values()
        if _is_layout_class(obj) and obj.__module__ == module.__name__
    ]


class LayoutRegistry:
    """Name -> Layout class resolution, per process or per caller."""

    CACHE_KEY = "flexible.layouts-cache"

    default_layouts: LayoutMap = DEFAULT_LAYOUTS

    def __init__(self, settings: FlexibleSettings | None = None, cache: TaggedCache | None = None) -> None:
        self._settings = settings
        self._cache = cache
        self._loaded_layouts: LayoutMap | None = None

    @property
    def settings(self) -> FlexibleSettings:
        return self._settings if self._settings is not None else get_flexible_settings()

    @property
    def cache(self) -> TaggedCache:
        if self._cache is None:
            self._cache = TaggedCache(alias=self.settings.CACHE_ALIAS)
        return self._cache

    # ---- resolution ----------------------------------------------------------

    def get_layouts(self) -> LayoutMap:
        if self.auto_discovery_is_active():
            return self.auto_discover_layouts()

        configured = self.settings.LAYOUTS
        if configured:
            layouts: LayoutMap = {}
            for name, entry in configured.items():
                target = _import(entry)
                if _is_layout_class(target):
                    layouts[name] = target
                elif callable(target):
                    layouts.update(self._call_supplier(name, target))
                else:
                    raise LayoutConfigurationError(
                        f"FLEXIBLE['LAYOUTS'][{name!r}] must be a Layout class or a supplier, got: {type(target)}"
                    )

            if self.load_default_layouts():
                return {**layouts, **self.default_layouts}
            return layouts

        return dict(self.default_layouts)

    def _call_supplier(self, name: str, supplier: Any) -> LayoutMap:
        result = supplier()
        if not isinstance(result, Mapping):
            raise LayoutConfigurationError(
                f"Layout supplier FLEXIBLE['LAYOUTS'][{name!r}] should return a mapping, got: {type(result)}"
            )
        return {key: resolve_layout_class(value) for key, value in result.items()}

    def auto_discover_layouts(self) -> LayoutMap:
        if self._loaded_layouts is not None:
            return dict(self._loaded_layouts)

        package = self.settings.DISCOVERY_PACKAGE
        layouts: LayoutMap = {}

        with flexible_span("flexible.registry.discover", attributes={"flexible.package": package}) as span:
            for module_name in self._iter_discovery_modules(package):
                module = importlib.import_module(module_name)
                for cls in _layout_classes_in(module):
                    try:
                        layout = cls()
                    except (TypeError, AttributeError, NotImplementedError):
                        # Abstract bases and helpers are not layouts.
                        logger.debug("Skipping %s.%s: not constructible as a layout", module_name, cls.__name__)
                        continue
                    if layout.should_not_be_auto_loaded():
                        logger.debug("Skipping %s.%s: excluded from auto-loading", module_name, cls.__name__)
                        continue
                    layouts[layout.name] = cls
            span.set_attribute("flexible.layouts.count", len(layouts))

        if self.load_default_layouts():
            layouts = {**layouts, **self.default_layouts}

        logger.info("Discovered %d flexible layouts in %s", len(layouts), package)
        self._loaded_layouts = layouts
        return dict(layouts)

    def _iter_discovery_modules(self, package: str) -> Iterator[str]:
        try:
            spec = importlib.util.find_spec(package)
        except ModuleNotFoundError:
            spec = None
        if spec is None:
            logger.debug("Discovery package %s not found; no layouts discovered", package)
            return

        if spec.submodule_search_locations is None:
            yield package
            return

        for location in spec.submodule_search_locations:
            root = Path(location)
            for path in sorted(root.rglob("*.py")):
                parts = path.relative_to(root).with_suffix("").parts
                if parts[-1] == "__init__":
                    parts = parts[:-1]
                if not all(part.isidentifier() for part in parts):
                    logger.debug("Skipping %s: not an importable module path", path)
                    continue
                yield ".".join((package, *parts))

    def auto_discovery_is_active(self) -> bool:
        return self.settings.AUTO_DISCOVERY is True

    def load_default_layouts(self) -> bool:
        return self.settings.MERGE_LAYOUTS is True

    def default_layout_class(self) -> type[Layout]:
        return resolve_layout_class(self.settings.DEFAULT_LAYOUT_CLASS)

    # ---- persistent cache ------------------------------------------------

    @classmethod
    def get_cache_key(cls) -> str:
        return cls.CACHE_KEY

    def get_layouts_from_cache(self) -> LayoutMap:
        return self.cache.remember_forever(self.get_cache_key(), self.get_layouts)

    def flush_layouts_cache(self) -> None:
        self.cache.forget(self.get_cache_key())

    # ---- rendering -----------------------------------------------------------

    def render(self, record: Any, column: str = "layout") -> SafeString:
        """Concatenate the rendering of every layout in `record.<column>`."""
        layouts = getattr(record, column, None)
        if not isinstance(layouts, LayoutCollection):
            layouts = record.flex(column)
        return mark_safe("".join(layout.render() for layout in layouts))


_registry_lock = threading.RLock()
_registry: LayoutRegistry | None = None


def get_registry() -> LayoutRegistry:
    """Return the process-wide registry built from ``settings.FLEXIBLE``."""
    global _registry
    with _registry_lock:
        if _registry is None:
            _registry = LayoutRegistry()
        return _registry


def reset_registry() -> None:
    global _registry
    with _registry_lock:
        _registry = None


__all__ = [
    "LayoutRegistry",
    "get_registry",
    "reset_registry",
    "resolve_layout_class",
]
