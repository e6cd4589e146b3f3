"""Tests for pagination planning."""

import pytest

from uid_inspector.core import Paginator, PaginationMode, ContainerDelta, INLINE_CONTAINER


@pytest.mark.parametrize("count, expected", [(0, 0), (1, 1), (9, 1), (10, 1), (11, 2), (20, 2), (21, 3)])
def test_compute_page_count(count, expected):
    """Page count is ceil(count / capacity)."""
    assert Paginator(10).compute_page_count(count) == expected


def test_mode_for_page_count():
    """0 or 1 pages is inline, 2 or more is paginated."""
    assert Paginator.mode_for(0) is PaginationMode.INLINE
    assert Paginator.mode_for(1) is PaginationMode.INLINE
    assert Paginator.mode_for(2) is PaginationMode.PAGINATED
    assert Paginator.overflow_count(1) == 0
    assert Paginator.overflow_count(3) == 3


def test_plan_container_delta():
    """Only the difference is created or destroyed."""
    assert Paginator.plan_container_delta(0, 3) == ContainerDelta(add=3)
    assert Paginator.plan_container_delta(4, 2) == ContainerDelta(remove=2)
    assert Paginator.plan_container_delta(2, 2).is_empty


def test_capacity_is_clamped(caplog):
    """Capacity below one is clamped with a warning."""
    paginator = Paginator(0)
    assert paginator.capacity_per_page == 1
    assert "clamping" in caplog.text

    paginator.capacity_per_page = -5
    assert paginator.capacity_per_page == 1


def test_assign_inline_moves_only_misplaced():
    """Inline mode targets container 0; elements already there stay."""
    paginator = Paginator(10)
    moves = paginator.assign_elements_to_pages(["a", "b", "c"], {"a": 0, "b": 0, "c": 2})

    assert [(m.identity, m.source, m.target) for m in moves] == [("c", 2, INLINE_CONTAINER)]


def test_assign_paginated_deterministic_placement():
    """Element i goes to container i // capacity + 1 when paginated."""
    paginator = Paginator(3)
    identities = list(range(7))
    moves = paginator.assign_elements_to_pages(identities, {i: 0 for i in identities})

    assert [m.target for m in moves] == [1, 1, 1, 2, 2, 2, 3]


def test_assign_after_removal_moves_boundary_elements_only():
    """Removing the first element shifts exactly one element per page boundary."""
    paginator = Paginator(3)
    # 7 elements were placed [0,1,2 | 3,4,5 | 6]; element 0 was removed
    placement = {1: 1, 2: 1, 3: 2, 4: 2, 5: 2, 6: 3}
    moves = paginator.assign_elements_to_pages([1, 2, 3, 4, 5, 6], placement)

    assert [(m.identity, m.target) for m in moves] == [(3, 1), (6, 2)]


def test_assign_unplaced_elements_always_move():
    """Identities without a current container are placed."""
    moves = Paginator(10).assign_elements_to_pages(["new"], {})
    assert moves[0].source == -1
    assert moves[0].target == INLINE_CONTAINER
