# flexible_django/cache.py
"""
Tag-capable cache adapter over the Django cache framework.

Django caches have no native tags, so each tag owns a version counter stored
under ``"{prefix}:tag:{tag}"``. Tagged entries are written under a key that
embeds the current version; flushing a tag bumps the counter, which orphans
every entry written under the previous version (they expire on their own TTL).
"""

import logging
import time
from typing import Any, Callable, TypeVar

from django.core.cache import BaseCache, caches

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


class TaggedCache:
    """`remember(tag, key, ttl, supplier)` / `flush_tag(tag)` on top of a Django cache alias."""

    def __init__(self, backend: BaseCache | None = None, *, alias: str = "default", prefix: str = "flexible") -> None:
        self._backend = backend
        self.alias = alias
        self.prefix = prefix

    @property
    def backend(self) -> BaseCache:
        if self._backend is not None:
            return self._backend
        return caches[self.alias]

    # --- tags ---

    def _tag_key(self, tag: str) -> str:
        return f"{self.prefix}:tag:{tag}"

    def _tag_version(self, tag: str) -> int:
        tag_key = self._tag_key(tag)
        version = self.backend.get(tag_key)
        if version is None:
            self.backend.add(tag_key, time.time_ns(), timeout=None)
            version = self.backend.get(tag_key)
        return int(version)

    def tagged_key(self, tag: str, key: str) -> str:
        return f"{self.prefix}:{tag}:{self._tag_version(tag)}:{key}"

    def remember(self, tag: str, key: str, ttl: int | None, supplier: Callable[[], T]) -> T:
        """Return the tagged entry, computing and storing it for `ttl` seconds on a miss."""
        full_key = self.tagged_key(tag, key)
        value = self.backend.get(full_key, _MISSING)
        if value is not _MISSING:
            return value
        value = supplier()
        self.backend.set(full_key, value, timeout=ttl)
        logger.debug("tagged cache populated: tag=%s key=%s ttl=%s", tag, key, ttl)
        return value

    def flush_tag(self, tag: str) -> None:
        """Invalidate every entry written under `tag`."""
        tag_key = self._tag_key(tag)
        try:
            self.backend.incr(tag_key)
        except ValueError:
            # Counter evicted or never written; a fresh one cannot collide with older versions.
            self.backend.set(tag_key, time.time_ns(), timeout=None)
        logger.debug("tagged cache flushed: tag=%s", tag)

    # --- untagged ---

    def remember_forever(self, key: str, supplier: Callable[[], T]) -> T:
        value = self.backend.get(key, _MISSING)
        if value is not _MISSING:
            return value
        value = supplier()
        self.backend.set(key, value, timeout=None)
        return value

    def forget(self, key: str) -> bool:
        return bool(self.backend.delete(key))


def get_tagged_cache() -> TaggedCache:
    """Return a `TaggedCache` bound to the configured ``CACHE_ALIAS``."""
    from .conf import get_flexible_settings

    return TaggedCache(alias=get_flexible_settings().CACHE_ALIAS)


__all__ = ["TaggedCache", "get_tagged_cache"]
