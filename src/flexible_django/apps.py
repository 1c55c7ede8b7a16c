# flexible_django/apps.py
"""
flexible_django.apps
====================

AppConfig for `flexible_django`.

Responsibilities
----------------
- Register the FLEXIBLE system checks.
- Reset cached settings / registry when ``settings.FLEXIBLE`` changes.
- Connect the cache-flush receivers for every `HasFlexible` model.
"""

import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class FlexibleDjangoConfig(AppConfig):
    """Django AppConfig for flexible_django."""

    name = "flexible_django"
    label = "flexible"
    verbose_name = "Flexible layouts"

    def ready(self) -> None:
        from . import checks, conf  # noqa: F401  (registers checks and the setting_changed receiver)
        from .signals import connect_flexible_signals

        connected = connect_flexible_signals()
        logger.debug("flexible_django ready; %d flexible models", len(connected))
