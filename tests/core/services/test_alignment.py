import pytest

from pagebuilder_toolkit.core.models import AlignDirection
from pagebuilder_toolkit.core.services.alignment_service import (
    HORIZONTAL_ALIGNS,
    VERTICAL_ALIGNS,
    cycle_value,
    horizontal_align_property,
)
from tests.conftest import node


@pytest.fixture
def page():
    """Section s1 holds Column c1 (no stored align) holding Wrapper w1 holding Button b1."""
    return {
        "items": [
            node("Section", "s1", items=[
                node("Column", "c1", items=[
                    node("Wrapper", "w1", items=[node("Button", "b1", text="Go")]),
                ]),
            ]),
            node("Section", "s2", verticalAlign="bottom", items=[]),
        ]
    }


BUTTON_PATH = ("items", 0, "value", "items", 0, "value", "items", 0, "value", "items", 0)
SECTION_ITEMS = ("items", 0, "value", "items")


def column_of(store):
    return store.document["items"][0]["value"]["items"][0]


def wrapper_of(store):
    return column_of(store)["value"]["items"][0]


class TestCycleValue:
    def test_wraps_both_ways(self):
        assert cycle_value(VERTICAL_ALIGNS, "bottom", "increase") == "top"
        assert cycle_value(VERTICAL_ALIGNS, "top", AlignDirection.DECREASE) == "bottom"

    def test_unknown_current_counts_as_first(self):
        assert cycle_value(HORIZONTAL_ALIGNS, "justify", "increase") == "center"

    def test_full_cycle_returns_to_start(self):
        value = "top"
        seen = []
        for _ in range(4):
            value = cycle_value(VERTICAL_ALIGNS, value, "increase")
            seen.append(value)
        assert seen == ["center", "bottom", "top", "center"]


def test_horizontal_property_by_device():
    assert horizontal_align_property("desktop") == "horizontalAlign"
    assert horizontal_align_property("tablet") == "tabletHorizontalAlign"
    assert horizontal_align_property("mobile") == "mobileHorizontalAlign"
    with pytest.raises(ValueError):
        horizontal_align_property("watch")


class TestVerticalAlign:
    def test_uses_type_default_then_cycles(self, commits, make_component, page):
        store, recorded = commits(page)
        store.set_active_path(BUTTON_PATH)
        section = make_component(store, path=SECTION_ITEMS)

        section.change_vertical_align(0, "increase")

        assert column_of(store)["value"]["verticalAlign"] == "center"
        assert column_of(store)["value"]["_id"] == "c1"
        assert len(recorded) == 1

    def test_repeated_increase_wraps(self, make_store, make_component, page):
        store = make_store(page)
        store.set_active_path(BUTTON_PATH)
        section = make_component(store, path=SECTION_ITEMS)

        seen = []
        for _ in range(4):
            section.change_vertical_align(0, AlignDirection.INCREASE)
            seen.append(column_of(store)["value"]["verticalAlign"])

        assert seen == ["center", "bottom", "top", "center"]

    def test_stored_value_wins_over_default(self, make_store, make_component, page):
        store = make_store(page)
        store.set_active_path(("items", 1))
        make_component(store, path=("items",)).change_vertical_align(1, "decrease")
        assert store.document["items"][1]["value"]["verticalAlign"] == "center"

    def test_no_active_node_is_noop(self, commits, make_component, page):
        store, recorded = commits(page)
        make_component(store, path=SECTION_ITEMS).change_vertical_align(0, "increase")
        assert recorded == []

    def test_owner_outside_collection_is_noop(self, commits, make_component, page):
        store, recorded = commits(page)
        # the closest owner is the Column, above the Wrapper's own collection
        store.set_active_path(BUTTON_PATH)
        wrapper_items = (*SECTION_ITEMS, 0, "value", "items")
        make_component(store, path=wrapper_items).change_vertical_align(0, "increase")
        assert recorded == []

    def test_owner_under_other_index_is_noop(self, commits, make_component, page):
        store, recorded = commits(page)
        store.set_active_path(("items", 1))
        make_component(store, path=("items",)).change_vertical_align(0, "increase")
        assert recorded == []


class TestHorizontalAlign:
    def test_desktop_property_on_wrapper(self, make_store, make_component, page):
        store = make_store(page)
        store.set_active_path(BUTTON_PATH)
        make_component(store, path=SECTION_ITEMS).change_horizontal_align(0, "increase")

        assert wrapper_of(store)["value"]["horizontalAlign"] == "center"

    def test_device_specific_property(self, make_store, make_component, page):
        store = make_store(page, device_mode="mobile")
        store.set_active_path(BUTTON_PATH)
        make_component(store, path=SECTION_ITEMS).change_horizontal_align(0, "decrease")

        value = wrapper_of(store)["value"]
        assert value["mobileHorizontalAlign"] == "right"
        assert "horizontalAlign" not in value

    def test_no_owner_is_noop(self, commits, make_component):
        store, recorded = commits({"items": [node("Button", "b1")]})
        store.set_active_path(("items", 0))
        make_component(store, path=("items",)).change_horizontal_align(0, "increase")
        assert recorded == []
