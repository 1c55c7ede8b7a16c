# flexible_django/signals.py
"""Flush the depended-layout option cache whenever a `HasFlexible` record changes."""

import logging

from django.apps import apps
from django.db.models.signals import post_delete, post_save

from .mixins import HasFlexible

logger = logging.getLogger(__name__)


def clear_flexible_cache_on_save(sender, instance, created, **kwargs):
    instance.clear_cached_flexible_data()


def clear_flexible_cache_on_delete(sender, instance, **kwargs):
    instance.clear_cached_flexible_data()


def connect_flexible_signals() -> list[type]:
    """Connect the flush receivers once per concrete `HasFlexible` model."""
    connected = []
    for model in apps.get_models():
        if not issubclass(model, HasFlexible):
            continue
        label = model._meta.label_lower
        post_save.connect(
            clear_flexible_cache_on_save,
            sender=model,
            dispatch_uid=f"flexible_clear_on_save_{label}",
        )
        post_delete.connect(
            clear_flexible_cache_on_delete,
            sender=model,
            dispatch_uid=f"flexible_clear_on_delete_{label}",
        )
        connected.append(model)
    logger.debug("Flexible cache receivers connected for %d models", len(connected))
    return connected


__all__ = [
    "clear_flexible_cache_on_save",
    "clear_flexible_cache_on_delete",
    "connect_flexible_signals",
]
