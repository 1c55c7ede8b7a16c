# flexible_django/exceptions.py
"""Flexible layout exceptions"""
from django.core.exceptions import ImproperlyConfigured


# ----------------------------------------------------------------------------
# Base
# ----------------------------------------------------------------------------
class FlexibleError(Exception): ...


# ----------------------------------------------------------------------------
# Configuration errors (the only failures that abort a cast or registry build)
# ----------------------------------------------------------------------------
class LayoutConfigurationError(FlexibleError, ImproperlyConfigured): ...


# ----------------------------------------------------------------------------
# Depended layout errors
# ----------------------------------------------------------------------------
class DependedLayoutLookupError(FlexibleError, LookupError): ...


__all__ = [
    "FlexibleError",
    "LayoutConfigurationError",
    "DependedLayoutLookupError",
]
