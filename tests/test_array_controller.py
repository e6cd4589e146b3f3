"""Tests for the array controller."""

import logging
import random

import pytest

from uid_inspector.core import PaginationMode
from uid_inspector.forms import ArrayController
from uid_inspector.protocols import InspectorConfig, CallbackPersistedArray


@pytest.fixture
def make_controller(factory, host):
    def _make(values=None, capacity=10, verbose=False, persisted=None):
        controller = ArrayController(
            factory, host, persisted=persisted,
            config=InspectorConfig(capacity_per_page=capacity, verbose_logging=verbose),
        )
        emitted = []
        controller.subscribe(emitted.append)
        if values is not None:
            controller.refresh(values)
        return controller, emitted
    return _make


def assert_bookkeeping(controller, factory):
    """Value list, live elements and container contents all agree."""
    assert controller.is_consistent()
    held = factory.held_counts()
    assert len(controller.values) == len(controller.records) == sum(held.values())
    capacity = controller.capacity_per_page
    for record in controller.records:
        expected = 0 if controller.mode is PaginationMode.INLINE else record.page_index // capacity + 1
        assert controller.placement_of(record.identity) == expected
        assert factory.page_indices[record.identity] == record.page_index


def test_scenario_add_then_remove(make_controller, factory):
    """refresh no-op, add emits once, remove emits once."""
    controller, emitted = make_controller(["a", "b"])
    assert emitted == []

    controller.refresh(["a", "b"])
    assert controller.values == ["a", "b"]
    assert emitted == []

    controller.add_element("c")
    assert controller.values == ["a", "b", "c"]
    assert emitted == [["a", "b", "c"]]

    controller.remove_element(controller.identity_at(1))
    assert controller.values == ["a", "c"]
    assert emitted == [["a", "b", "c"], ["a", "c"]]
    assert_bookkeeping(controller, factory)


def test_title_tracks_count(make_controller, host):
    """Section title is '<type> (size <count>)'."""
    controller, _ = make_controller()
    assert host.title == "PackedStringArray (size 0)"

    controller.refresh(["x", "y", "z"])
    assert host.title == "PackedStringArray (size 3)"
    assert host.count == 3

    controller.add_element()
    assert host.title == controller.title == "PackedStringArray (size 4)"


def test_set_value_is_idempotent(make_controller):
    """Same value twice emits at most once."""
    controller, emitted = make_controller(["a", "b"])
    identity = controller.identity_at(0)

    controller.set_value_at_index(identity, "uid://new")
    controller.set_value_at_index(identity, "uid://new")

    assert emitted == [["uid://new", "b"]]
    assert controller.records[0].value == "uid://new"


def test_edit_does_not_churn_elements(make_controller, factory):
    """Editing one element of a paginated list never moves or destroys anything."""
    controller, emitted = make_controller([str(i) for i in range(11)])
    assert controller.mode is PaginationMode.PAGINATED
    calls_before = len(factory.calls)

    factory.emit_value_edited(controller.identity_at(5), "edited")

    assert factory.calls[calls_before:] == []
    assert controller.values[5] == "edited"
    assert len(emitted) == 1


def test_inline_to_paginated_transition(make_controller, factory, host):
    """9 -> 10 stays inline, 10 -> 11 gives pages of 10 and 1."""
    controller, _ = make_controller([str(i) for i in range(9)])

    controller.add_element()
    assert controller.mode is PaginationMode.INLINE
    assert host.mode is PaginationMode.INLINE
    assert host.pages == []
    assert factory.held_counts() == {host.inline: 10}

    controller.add_element()
    assert controller.mode is PaginationMode.PAGINATED
    assert host.mode is PaginationMode.PAGINATED
    assert len(host.pages) == 2
    assert factory.held_counts() == {host.pages[0]: 10, host.pages[1]: 1}
    assert host.inline not in factory.held_counts()
    assert_bookkeeping(controller, factory)


def test_paginated_to_inline_collapses_pages(make_controller, factory, host):
    """Shrinking back to one page moves everything inline and frees the pages."""
    controller, _ = make_controller([str(i) for i in range(11)])
    pages = list(host.pages)

    controller.remove_element(controller.identity_at(10))

    assert controller.mode is PaginationMode.INLINE
    assert host.pages == []
    assert host.removed == list(reversed(pages))
    assert factory.held_counts() == {host.inline: 10}
    assert_bookkeeping(controller, factory)


def test_remove_reindexes_later_elements(make_controller, factory):
    """Removing index 3 of 6 leaves indices 0..4 and values in order."""
    controller, emitted = make_controller(["v0", "v1", "v2", "v3", "v4", "v5"])

    controller.remove_element(controller.identity_at(3))

    assert [record.page_index for record in controller.records] == [0, 1, 2, 3, 4]
    assert controller.values == ["v0", "v1", "v2", "v4", "v5"]
    assert emitted == [["v0", "v1", "v2", "v4", "v5"]]
    assert_bookkeeping(controller, factory)


def test_remove_unknown_identity_is_silent(make_controller, factory, caplog):
    """Unknown identities are ignored and logged only in verbose mode."""
    controller, emitted = make_controller(["a"])
    controller.remove_element(999)
    assert emitted == []
    assert controller.values == ["a"]
    assert "999" not in caplog.text

    verbose_controller, verbose_emitted = make_controller(["a"], verbose=True)
    with caplog.at_level(logging.INFO, logger="uid_inspector.forms.array_controller"):
        verbose_controller.remove_element(999)
        verbose_controller.set_value_at_index(999, "x")
    assert verbose_emitted == []
    assert "Unknown element identity: 999" in caplog.text


def test_refresh_grows_and_shrinks_without_emitting(make_controller, factory):
    """refresh appends tail values, trims trailing elements, never emits."""
    controller, emitted = make_controller(["a"])

    controller.refresh(["a", "b", "c"])
    assert controller.values == ["a", "b", "c"]

    first = controller.identity_at(0)
    controller.refresh(["z"])
    assert controller.values == ["a"]
    assert controller.identity_at(0) == first
    assert len(factory.calls_named("destroy")) == 2
    assert emitted == []
    assert_bookkeeping(controller, factory)


def test_refresh_equal_length_keeps_local_edits(make_controller):
    """Edits already in flight are not clobbered by an equal-length refresh."""
    controller, _ = make_controller(["a", "b"])
    controller.set_value_at_index(controller.identity_at(0), "local")

    controller.refresh(["a", "b"])

    assert controller.values == ["local", "b"]


def test_refresh_reads_persisted_array(make_controller):
    """Without an argument refresh pulls from the persisted array."""
    saved = ["uid://one", "uid://two"]
    persisted = CallbackPersistedArray(lambda: saved, lambda values: None)
    controller, _ = make_controller(persisted=persisted)

    controller.refresh()

    assert controller.values == saved


def test_refresh_with_unreadable_persisted_value(make_controller, caplog):
    """A persisted value that is not a string array is logged and ignored."""
    persisted = CallbackPersistedArray(lambda: 42, lambda values: None)
    controller, _ = make_controller(["a"], persisted=persisted)

    controller.refresh()

    assert controller.values == ["a"]
    assert "not a string array" in caplog.text


def test_edits_suppressed_during_refresh(make_controller, factory):
    """Edit callbacks fired while refresh applies values are not echoed."""
    controller, emitted = make_controller()
    original_create = factory.create

    def create_and_echo(initial_value, container):
        identity, handle = original_create(initial_value, container)
        factory.emit_value_edited(identity, initial_value + "!")
        factory.emit_delete_requested(identity)
        return identity, handle

    factory.create = create_and_echo
    controller.refresh(["a", "b"])

    assert controller.values == ["a", "b"]
    assert emitted == []
    assert not controller.is_updating


def test_capacity_change_repaginates_without_touching_values(make_controller, factory, host):
    """Changing capacity recomputes pages only."""
    values = [f"v{i}" for i in range(25)]
    controller, emitted = make_controller(values)
    assert len(host.pages) == 3

    controller.set_capacity_per_page(5)
    assert len(host.pages) == 5
    assert_bookkeeping(controller, factory)

    controller.set_capacity_per_page(30)
    assert host.pages == []
    assert controller.mode is PaginationMode.INLINE
    assert_bookkeeping(controller, factory)

    assert controller.values == values
    assert emitted == []


def test_apply_config_updates_capacity(make_controller, host):
    """A settings change picks up the new capacity."""
    controller, _ = make_controller([str(i) for i in range(8)])
    controller.apply_config(InspectorConfig(capacity_per_page=4))
    assert controller.capacity_per_page == 4
    assert len(host.pages) == 2


def test_invalid_element_is_dropped(make_controller, factory, host, caplog):
    """A dead visual handle is dropped from all maps and the count corrected."""
    controller, emitted = make_controller(["a", "b", "c"])
    factory.invalid.add(controller.identity_at(1))

    controller.add_element("d")

    assert controller.values == ["a", "c", "d"]
    assert host.title == "PackedStringArray (size 3)"
    assert "dropping element" in caplog.text
    assert controller.is_consistent()


def test_capacity_change_corrects_count_after_drop(make_controller, factory, host):
    """Dead elements found while repaginating are dropped from the displayed count."""
    controller, emitted = make_controller(["a", "b", "c"])
    factory.invalid.add(controller.identity_at(1))

    controller.set_capacity_per_page(2)

    assert controller.values == ["a", "c"]
    assert host.count == controller.count == 2
    assert host.title == "PackedStringArray (size 2)"
    assert emitted == []
    assert controller.is_consistent()


def test_identity_at_out_of_range(make_controller):
    """Positions outside the array have no identity."""
    controller, _ = make_controller(["a", "b"])

    assert controller.identity_at(1) is not None
    assert controller.identity_at(2) is None
    assert controller.identity_at(-1) is None


def test_failing_subscriber_does_not_block_others(make_controller, caplog):
    """A subscriber exception is logged and delivery continues."""
    controller, emitted = make_controller(["a"])

    def broken(values):
        raise RuntimeError("boom")

    received = []
    controller.unsubscribe(emitted.append)
    controller.subscribe(broken)
    controller.subscribe(received.append)

    controller.add_element("b")

    assert received == [["a", "b"]]
    assert emitted == []
    assert "boom" in caplog.text


def test_resize_grows_and_trims(make_controller, factory, host):
    """Size box edits grow with empty values or trim the tail, then emit."""
    controller, emitted = make_controller(["a", "b"])

    controller.resize(4)
    assert controller.values == ["a", "b", "", ""]
    assert host.folded is False

    controller.resize(1)
    assert controller.values == ["a"]

    controller.resize(0)
    assert controller.values == []
    assert host.folded is True
    assert emitted == [["a", "b", "", ""], ["a"], []]
    assert_bookkeeping(controller, factory)


def test_reset_clears_without_emitting(make_controller, factory, host):
    """A reverted property empties the editor silently."""
    controller, emitted = make_controller([str(i) for i in range(12)])

    controller.reset()

    assert controller.values == []
    assert host.pages == []
    assert host.count == 0
    assert emitted == []
    assert factory.parent_of == {}


def test_dispose_detaches_from_factory(make_controller, factory):
    """After dispose, factory events no longer reach the controller."""
    controller, emitted = make_controller(["a"])
    identity = controller.identity_at(0)

    controller.dispose()
    factory.emit_value_edited(identity, "b")

    assert controller.values == ["a"]
    assert emitted == []


def test_random_operations_keep_invariants(make_controller, factory, host):
    """Any mix of add/remove/edit/refresh keeps every structure in agreement."""
    rng = random.Random(1234)
    controller, emitted = make_controller([], capacity=4)

    for step in range(300):
        emitted_before = len(emitted)
        operation = rng.choice(["add", "remove", "edit", "refresh", "resize"])
        if operation == "add":
            controller.add_element(f"s{step}")
        elif operation == "remove" and controller.count:
            controller.remove_element(controller.identity_at(rng.randrange(controller.count)))
        elif operation == "edit" and controller.count:
            controller.set_value_at_index(controller.identity_at(rng.randrange(controller.count)), f"e{step}")
        elif operation == "refresh":
            controller.refresh([f"r{i}" for i in range(rng.randrange(0, 15))])
        elif operation == "resize":
            controller.resize(rng.randrange(0, 15))

        assert_bookkeeping(controller, factory)
        assert len(host.pages) == (0 if controller.page_count < 2 else controller.page_count)
        assert host.count == controller.count
        if operation == "refresh":
            assert len(emitted) == emitted_before
        elif len(emitted) > emitted_before:
            assert emitted[-1] == controller.values
