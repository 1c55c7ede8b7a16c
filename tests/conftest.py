import pytest
from django.core.cache import cache

from flexible_django.conf import get_flexible_settings
from flexible_django.registry import reset_registry


# Reset cached settings, registry and cache between tests to avoid cross-test bleed
@pytest.fixture(autouse=True)
def reset_flexible_state():
    cache.clear()
    get_flexible_settings.cache_clear()
    reset_registry()
    yield
    cache.clear()
    get_flexible_settings.cache_clear()
    reset_registry()


@pytest.fixture
def flexible_settings(settings):
    """Set ``settings.FLEXIBLE`` for one test: ``flexible_settings(AUTO_DISCOVERY=True, ...)``."""

    def _configure(**values):
        settings.FLEXIBLE = dict(values)
        return settings.FLEXIBLE

    return _configure


@pytest.fixture
def hero_item():
    return {"layout": "hero", "key": "hero1", "attributes": {"title": "Welcome", "subtitle": "Hello"}}


@pytest.fixture
def quote_item():
    return {"layout": "quote", "key": "quote1", "attributes": {"name": "Ada", "text": "Notes"}}
