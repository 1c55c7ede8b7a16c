# flexible_django/checks.py
"""
Django system checks for the `FLEXIBLE` settings.

- ``flexible.E000``: ``settings.FLEXIBLE`` does not validate.
- ``flexible.E001``: ``DEFAULT_LAYOUT_CLASS`` is not importable or not a Layout subclass.
- ``flexible.W001``: ``AUTO_DISCOVERY`` is on but ``DISCOVERY_PACKAGE`` cannot be found.

Run with ``python manage.py check``.
"""

import importlib.util
from typing import Iterable, List, Optional

from django.core import checks

from .conf import load_flexible_settings
from .exceptions import LayoutConfigurationError
from .registry import resolve_layout_class

TAG = "flexible"


@checks.register(TAG)
def check_flexible_settings(app_configs: Optional[Iterable] = None, **kwargs) -> List[checks.CheckMessage]:
    messages: List[checks.CheckMessage] = []

    try:
        conf = load_flexible_settings()
    except LayoutConfigurationError as err:
        return [
            checks.Error(
                str(err),
                hint="FLEXIBLE must be a dict using the keys documented in flexible_django.conf.",
                id=f"{TAG}.E000",
            )
        ]

    try:
        resolve_layout_class(conf.DEFAULT_LAYOUT_CLASS)
    except LayoutConfigurationError as err:
        messages.append(
            checks.Error(
                f"FLEXIBLE['DEFAULT_LAYOUT_CLASS'] is unusable: {err}",
                hint="Point it at a flexible_django.layouts.Layout subclass.",
                id=f"{TAG}.E001",
            )
        )

    if conf.AUTO_DISCOVERY:
        try:
            spec = importlib.util.find_spec(conf.DISCOVERY_PACKAGE)
        except ModuleNotFoundError:
            spec = None
        if spec is None:
            messages.append(
                checks.Warning(
                    f"FLEXIBLE['DISCOVERY_PACKAGE'] {conf.DISCOVERY_PACKAGE!r} was not found; "
                    f"auto-discovery will find no layouts.",
                    id=f"{TAG}.W001",
                )
            )

    return messages


__all__ = ["check_flexible_settings"]
