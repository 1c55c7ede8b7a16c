from flexible_django.layouts import Layout  # noqa: F401  (imported, not defined here)


class HeadingFormatter:
    def format(self, value):
        return str(value).title()


def slugify_heading(value):
    return str(value).lower().replace(" ", "-")
