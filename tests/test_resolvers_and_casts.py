import json

import pytest

from flexible_django.casts import FlexibleCast
from flexible_django.layouts import LayoutCollection, WysiwygLayout
from flexible_django.resolvers import JsonResolver, ResolverInterface
from tests.testapp.layouts import HeroLayout, QuoteLayout
from tests.testapp.models import Page


class Record:
    layout = None


def test_resolver_interface_is_abstract():
    with pytest.raises(TypeError):
        ResolverInterface()


def test_json_resolver_get_casts_the_column(hero_item):
    record = Record()
    record.layout = json.dumps([hero_item])

    result = JsonResolver().get(record, "layout", {"hero": HeroLayout})

    assert isinstance(result[0], HeroLayout)
    assert result[0].model is record


def test_json_resolver_set_serializes_layouts_and_mappings(hero_item):
    hero = HeroLayout("hero", "hero", [], "h", {"title": "T"})

    stored = JsonResolver().set(Record(), "layout", [hero, hero_item])

    assert json.loads(stored) == [
        {"layout": "hero", "key": "h", "attributes": {"title": "T"}},
        {"layout": "hero", "key": "hero1", "attributes": {"title": "Welcome", "subtitle": "Hello"}},
    ]


def test_json_resolver_set_none_and_bad_groups():
    assert JsonResolver().set(Record(), "layout", None) is None

    with pytest.raises(TypeError):
        JsonResolver().set(Record(), "layout", [object()])


def test_cast_descriptor_reads_with_registry_layouts():
    page = Page(layout='[{"layout": "wysiwyg", "key": "w", "attributes": {"content": "Hi"}}]')

    assert isinstance(page.blocks, LayoutCollection)
    assert isinstance(page.blocks["w"], WysiwygLayout)
    assert isinstance(Page.blocks, FlexibleCast)


def test_cast_descriptor_writes_back_to_the_column(hero_item):
    page = Page()

    page.blocks = [hero_item]

    assert json.loads(page.layout)[0]["key"] == "hero1"
    assert page.blocks.keys() == ["hero1"]


def test_cast_descriptor_round_trips_a_cast_collection(hero_item, quote_item):
    page = Page(layout=json.dumps([hero_item, quote_item]))

    page.blocks = page.blocks

    assert [item["key"] for item in json.loads(page.layout)] == ["hero1", "quote1"]


def test_cast_descriptor_with_explicit_layouts(quote_item):
    class Holder:
        layout = None
        blocks = FlexibleCast("layout", layouts={"quote": QuoteLayout})

    holder = Holder()
    holder.layout = json.dumps([quote_item])

    assert type(holder.blocks[0]) is QuoteLayout
    assert Holder.blocks.name == "blocks"


def test_cast_descriptor_uses_a_custom_resolver():
    class UpperResolver(ResolverInterface):
        def get(self, record, attribute, layouts):
            return getattr(record, attribute).upper()

        def set(self, record, attribute, groups):
            return ",".join(groups)

    class Holder:
        raw = "abc"
        value = FlexibleCast("raw", resolver=UpperResolver())

    holder = Holder()
    assert holder.value == "ABC"

    holder.value = ["x", "y"]
    assert holder.raw == "x,y"


@pytest.mark.django_db
def test_flexible_and_cast_helpers(hero_item):
    page = Page.objects.create(layout=json.dumps([hero_item]), body=[hero_item])

    assert page.flexible("layout").keys() == ["hero1"]
    assert type(page.flexible("body", {"hero": HeroLayout})[0]) is HeroLayout
    assert page.cast("", {"hero": HeroLayout}) == LayoutCollection()
    assert page.flex("body", with_=["author"])[0].with_ == ("author",)
