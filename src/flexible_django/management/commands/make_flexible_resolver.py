# flexible_django/management/commands/make_flexible_resolver.py
"""
Write a resolver skeleton implementing `ResolverInterface`.

Usage:
    python manage.py make_flexible_resolver PageBlocks
    python manage.py make_flexible_resolver PageBlocks --directory app/flexible/resolvers
"""

import keyword
import logging
import re
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError
from django.template import Context, Engine

logger = logging.getLogger(__name__)

TEMPLATE_PATH = Path(__file__).resolve().parents[2] / "templates" / "flexible" / "resolver.py.txt"


def _module_name(class_name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", class_name).lower()


class Command(BaseCommand):
    help = "Create a flexible resolver class skeleton."

    def add_arguments(self, parser):
        parser.add_argument("name", help="Resolver class name, e.g. PageBlocksResolver.")
        parser.add_argument(
            "--directory",
            default="flexible/resolvers",
            help="Target directory (created if missing). Default: flexible/resolvers",
        )
        parser.add_argument("--force", action="store_true", help="Overwrite an existing file.")

    def handle(self, *args, **options):
        class_name = options["name"]
        if not class_name.isidentifier() or keyword.iskeyword(class_name):
            raise CommandError(f"{class_name!r} is not a valid Python class name")

        directory = Path(options["directory"])
        target = directory / f"{_module_name(class_name)}.py"
        if target.exists() and not options.get("force"):
            raise CommandError(f"{target} already exists (use --force to overwrite)")

        template = Engine(autoescape=False).from_string(TEMPLATE_PATH.read_text())
        source = template.render(Context({"class_name": class_name}, autoescape=False))

        directory.mkdir(parents=True, exist_ok=True)
        target.write_text(source)
        logger.info("Flexible resolver %s written to %s", class_name, target)
        self.stdout.write(self.style.SUCCESS(f"Created {target}"))
