from django.db import models

from flexible_django.casts import FlexibleCast
from flexible_django.mixins import HasFlexible


class Page(HasFlexible, models.Model):
    name = models.CharField(max_length=255, blank=True, default="")
    layout = models.TextField(blank=True, default="[]")
    body = models.JSONField(blank=True, default=list)

    blocks = FlexibleCast("layout")

    @classmethod
    def get_depended_layout_select_columns(cls) -> list[str]:
        return ["layout", "body"]


class Article(HasFlexible, models.Model):
    layout = models.TextField(blank=True, default="[]")

    @classmethod
    def get_cache_key_for_depended_layout_select(cls) -> str:
        return "article-options-for-depended-layout-select"


class Note(models.Model):
    text = models.TextField(blank=True, default="")
