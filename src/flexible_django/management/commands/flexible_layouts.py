# flexible_django/management/commands/flexible_layouts.py
"""
List the layouts known to the flexible registry.

Usage:
    python manage.py flexible_layouts            # name -> class table
    python manage.py flexible_layouts --json     # JSON mapping name -> dotted class path
    python manage.py flexible_layouts --flush    # forget the persistent layouts cache
    python manage.py flexible_layouts --warm     # rebuild the persistent layouts cache
"""

import json
import logging

from django.core.management.base import BaseCommand

from flexible_django.registry import get_registry

logger = logging.getLogger(__name__)


def _dotted(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


class Command(BaseCommand):
    help = "List flexible layouts and manage the persistent layouts cache."

    def add_arguments(self, parser):
        parser.add_argument("--json", action="store_true", help="Output the layout map as JSON.")
        parser.add_argument("--flush", action="store_true", help="Forget the persistent layouts cache.")
        parser.add_argument("--warm", action="store_true", help="Rebuild the persistent layouts cache.")

    def handle(self, *args, **options):
        registry = get_registry()

        if options.get("flush") or options.get("warm"):
            registry.flush_layouts_cache()
            logger.info("Flexible layouts cache flushed (%s)", registry.get_cache_key())
            if not options.get("json"):
                self.stdout.write(self.style.SUCCESS(f"Flushed {registry.get_cache_key()}"))

        if options.get("warm"):
            layouts = registry.get_layouts_from_cache()
        else:
            layouts = registry.get_layouts()

        if options.get("json"):
            self.stdout.write(json.dumps({name: _dotted(cls) for name, cls in layouts.items()}))
            return

        if not layouts:
            self.stdout.write(self.style.WARNING("No flexible layouts registered."))
            return

        width = max(len(name) for name in layouts)
        for name, cls in layouts.items():
            self.stdout.write(f"{name.ljust(width)}  {_dotted(cls)}")
