# flexible_django/layouts/defaults/wysiwyg.py
from ..base import Layout


class WysiwygLayout(Layout):
    """Rich-text block; ``content`` holds trusted HTML."""

    name = "wysiwyg"
    label = "WYSIWYG"
    fields = ("content",)
