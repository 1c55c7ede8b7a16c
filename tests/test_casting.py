"""Tests for the cast pipeline."""

import json
from types import SimpleNamespace

import pytest

from flexible_django.casting import FlexibleCaster, to_flexible
from flexible_django.exceptions import LayoutConfigurationError
from flexible_django.layouts import Layout, LayoutCollection
from tests.testapp.layouts import HeroLayout, LoadTrackingLayout, QuoteLayout, TextLayout

MAPPING = {"hero": HeroLayout, "quote": QuoteLayout}


class Owner:
    """Stand-in for a record; casting only keeps a weak reference to it."""


@pytest.mark.parametrize("raw", [None, "not-json", 42, "{}", '{"layout": "hero"}', {}, "", b"[]"])
def test_malformed_values_cast_to_an_empty_collection(raw):
    result = to_flexible(raw, MAPPING)

    assert isinstance(result, LayoutCollection)
    assert len(result) == 0


def test_list_keeps_length_and_order(hero_item, quote_item):
    result = to_flexible([hero_item, quote_item, {"layout": "hero", "key": "hero2"}], MAPPING)

    assert result.names() == ["hero", "quote", "hero"]
    assert result.keys() == ["hero1", "quote1", "hero2"]


def test_json_string_is_decoded(hero_item, quote_item):
    result = to_flexible(json.dumps([hero_item, quote_item]), MAPPING)

    assert result.keys() == ["hero1", "quote1"]
    assert result["hero1"].title == "Welcome"


def test_tuple_and_collection_values_are_accepted(hero_item):
    from_tuple = to_flexible((hero_item,), MAPPING)
    from_collection = to_flexible(from_tuple, MAPPING)

    assert from_tuple.keys() == ["hero1"]
    assert from_collection.keys() == ["hero1"]
    assert from_collection[0] is not from_tuple[0]


def test_items_without_a_name_are_dropped(hero_item):
    raw = [{"key": "orphan", "attributes": {"a": 1}}, hero_item, "{broken", 7, None]

    result = to_flexible(raw, MAPPING)

    assert result.keys() == ["hero1"]


def test_item_shapes_are_all_understood(hero_item):
    as_string = json.dumps({"layout": "quote", "key": "q", "attributes": {"text": "x"}})
    as_namespace = SimpleNamespace(layout="hero", key="ns", attributes=SimpleNamespace(title="From namespace"))
    as_layout = HeroLayout("hero", "hero", [], "built", {"title": "Built"})

    result = to_flexible([as_string, as_namespace, as_layout, hero_item], MAPPING)

    assert result.keys() == ["q", "ns", "built", "hero1"]
    assert result["q"].text == "x"
    assert result["ns"].get_attributes() == {"title": "From namespace"}
    assert result["built"].title == "Built"
    assert result["built"] is not as_layout


def test_falsy_or_wrong_attributes_become_an_empty_mapping():
    result = to_flexible(
        [
            {"layout": "hero", "key": "a", "attributes": None},
            {"layout": "hero", "key": "b", "attributes": ["not", "a", "mapping"]},
            {"layout": "hero", "key": "c"},
        ],
        MAPPING,
    )

    assert [layout.get_attributes() for layout in result] == [{}, {}, {}]


def test_mapped_name_uses_mapped_class_and_unknown_name_uses_default(hero_item):
    result = to_flexible([hero_item, {"layout": "unknown", "key": "u"}], MAPPING)

    assert type(result["hero1"]) is HeroLayout
    assert type(result["u"]) is Layout
    assert result["u"].name == "unknown"
    assert result["u"].label == "unknown"


def test_default_class_comes_from_settings(flexible_settings):
    flexible_settings(DEFAULT_LAYOUT_CLASS="tests.testapp.layouts.TextLayout")

    result = to_flexible([{"layout": "unknown", "key": "u"}], MAPPING)

    assert type(result[0]) is TextLayout


def test_mapping_accepts_import_paths(hero_item):
    result = to_flexible([hero_item], {"hero": "tests.testapp.layouts.HeroLayout"})

    assert type(result[0]) is HeroLayout


def test_mapping_to_a_non_layout_is_a_configuration_error(hero_item):
    with pytest.raises(LayoutConfigurationError):
        to_flexible([hero_item], {"hero": "tests.testapp.layouts.NotALayout"})


def test_missing_key_is_generated():
    result = to_flexible([{"layout": "hero"}], MAPPING)

    assert len(result[0].key) == 16


def test_hooks_owner_and_eager_loading():
    owner = Owner()

    result = FlexibleCaster(owner).to_flexible(
        [{"layout": "tracked", "key": "t", "attributes": {"items": [{"layout": "tracked", "key": "inner"}]}}],
        {"tracked": LoadTrackingLayout},
        with_=["author", "tags"],
    )

    outer = result["t"]
    inner = outer.items["inner"]
    assert outer.loaded is True
    assert inner.loaded is True
    assert outer.model is owner
    assert inner.model is owner
    assert outer.with_ == ("author", "tags")
    assert inner.with_ == ("author", "tags")


def test_owner_is_not_kept_alive_by_layouts():
    owner = Owner()
    layout = FlexibleCaster(owner).to_flexible([{"layout": "hero", "key": "h"}], MAPPING)[0]

    del owner

    assert layout.model is None


def test_nested_attribute_lists_are_cast_recursively():
    raw = [
        {
            "layout": "hero",
            "key": "outer",
            "attributes": {
                "title": "Outer",
                "children": [{"layout": "x", "key": "k1"}],
                "tags": [],
                "meta": {"color": "red"},
            },
        }
    ]

    outer = to_flexible(raw, MAPPING)[0]

    assert isinstance(outer.children, LayoutCollection)
    assert outer.children.keys() == ["k1"]
    assert outer.tags == []
    assert outer.meta == {"color": "red"}
    assert outer.title == "Outer"


def test_nested_layouts_expose_object_shaped_attributes():
    raw = [
        {
            "layout": "hero",
            "key": "outer",
            "attributes": {
                "children": [
                    {
                        "layout": "quote",
                        "key": "inner",
                        "attributes": {
                            "text": "Nested",
                            "style": {"color": "blue"},
                            "grandchildren": [{"layout": "hero", "key": "deep", "attributes": {"title": "Deep"}}],
                        },
                    }
                ]
            },
        }
    ]

    outer = to_flexible(raw, MAPPING)[0]
    inner = outer.children[0]

    assert outer.attributes is None
    assert isinstance(inner, QuoteLayout)
    assert inner.attributes.text == "Nested"
    assert inner.attributes.style.color == "blue"
    assert inner.attributes.grandchildren[0].key == "deep"
    assert inner.attributes.grandchildren[0].attributes.title == "Deep"
    assert inner.get_attributes()["style"] == {"color": "blue"}


def test_round_trip_keeps_names_and_keys(hero_item, quote_item):
    raw = [hero_item, quote_item, {"layout": "hero", "key": "h2", "attributes": {"children": [quote_item]}}]

    first = to_flexible(raw, MAPPING)
    second = to_flexible(json.loads(first.to_json()), MAPPING)

    assert [(layout.name, layout.key) for layout in second] == [(layout.name, layout.key) for layout in first]
    assert second["h2"].children.keys() == ["quote1"]


def test_raw_attribute_assignment_bypasses_mutators():
    from tests.testapp.layouts import ShoutingLayout

    result = to_flexible([{"layout": "shouting", "key": "s", "attributes": {"text": "quiet"}}], {"shouting": ShoutingLayout})

    assert result[0].text == "quiet"


def test_recasting_a_collection_copies_nested_collections():
    raw = [{"layout": "hero", "key": "outer", "attributes": {"children": [{"layout": "quote", "key": "inner"}]}}]
    owner = Owner()
    first = to_flexible(raw, MAPPING)

    second = FlexibleCaster(owner).to_flexible(first, MAPPING, with_=["x"])

    assert second[0].children is not first[0].children
    assert second[0].children[0] is not first[0].children[0]
    assert second[0].children[0].with_ == ("x",)
    assert second[0].children[0].model is owner
    assert first[0].children[0].with_ == ()


@pytest.mark.parametrize("key", ["", 0])
def test_falsy_stored_keys_are_kept(key):
    result = to_flexible([{"layout": "hero", "key": key}], MAPPING)

    assert result[0].key == key
