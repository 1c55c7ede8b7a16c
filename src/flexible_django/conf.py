# flexible_django/conf.py
"""
flexible_django.conf
====================

Package-level configuration for `flexible_django`.

This is **not** your project's Django `settings.py`. Values are read from
``settings.FLEXIBLE`` and validated into a :class:`FlexibleSettings` model:

    FLEXIBLE = {
        "AUTO_DISCOVERY": False,
        "DISCOVERY_PACKAGE": "flexible",
        "LAYOUTS": {
            "hero": "app.flexible.HeroLayout",            # name -> Layout class (or path)
            "shop": "app.flexible.shop_layouts",          # supplier returning {name: class}
        },
        "MERGE_LAYOUTS": False,
        "DEFAULT_LAYOUT_CLASS": "flexible_django.layouts.Layout",
        "CACHE_ALIAS": "default",
    }

Notes
-----
- The validated model is memoised per process; Django's ``setting_changed``
  signal (fired by ``override_settings`` and the pytest ``settings`` fixture)
  clears it together with the default layout registry.
"""

import logging
from functools import lru_cache
from typing import Any

from django.conf import settings as dj_settings
from django.core.signals import setting_changed
from django.dispatch import receiver
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import LayoutConfigurationError

logger = logging.getLogger(__name__)

SETTINGS_NAME = "FLEXIBLE"


class FlexibleSettings(BaseModel):
    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    AUTO_DISCOVERY: bool = False
    DISCOVERY_PACKAGE: str = "flexible"

    # name -> Layout class / import path, or supplier / supplier import path
    LAYOUTS: dict[str, Any] = Field(default_factory=dict)
    MERGE_LAYOUTS: bool = False

    DEFAULT_LAYOUT_CLASS: Any = "flexible_django.layouts.Layout"
    CACHE_ALIAS: str = "default"


def load_flexible_settings(raw: Any = None) -> FlexibleSettings:
    """Validate a raw ``FLEXIBLE`` mapping (or the project's one) into settings."""
    if raw is None:
        raw = getattr(dj_settings, SETTINGS_NAME, None) or {}
    if isinstance(raw, FlexibleSettings):
        return raw
    if not isinstance(raw, dict):
        raise LayoutConfigurationError(f"settings.{SETTINGS_NAME} must be a dict, got: {type(raw)}")
    try:
        return FlexibleSettings(**raw)
    except ValidationError as err:
        raise LayoutConfigurationError(f"Invalid settings.{SETTINGS_NAME}: {err}") from err


@lru_cache(maxsize=1)
def get_flexible_settings() -> FlexibleSettings:
    return load_flexible_settings()


@receiver(setting_changed, dispatch_uid="flexible_django_setting_changed")
def _reset_on_setting_changed(sender, setting, **kwargs) -> None:
    if setting not in (SETTINGS_NAME, "CACHES"):
        return
    get_flexible_settings.cache_clear()

    from .registry import reset_registry

    reset_registry()
    logger.debug("settings.%s changed; flexible settings and registry reset", setting)


__all__ = [
    "FlexibleSettings",
    "get_flexible_settings",
    "load_flexible_settings",
]
