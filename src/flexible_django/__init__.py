"""
flexible_django
===============

Ordered, named layouts stored as JSON in a Django model attribute, cast back
into `Layout` objects.
"""

from .casts import FlexibleCast
from .casting import FlexibleCaster, to_flexible
from .exceptions import DependedLayoutLookupError, FlexibleError, LayoutConfigurationError
from .layouts import DependedLayout, Layout, LayoutCollection, WysiwygLayout
from .mixins import HasFlexible
from .registry import LayoutRegistry, get_registry
from .resolvers import JsonResolver, ResolverInterface

__all__ = [
    "DependedLayout",
    "DependedLayoutLookupError",
    "FlexibleCast",
    "FlexibleCaster",
    "FlexibleError",
    "HasFlexible",
    "JsonResolver",
    "Layout",
    "LayoutCollection",
    "LayoutConfigurationError",
    "LayoutRegistry",
    "ResolverInterface",
    "WysiwygLayout",
    "get_registry",
    "to_flexible",
]
