"""pytest configuration and fixtures for uid-inspector tests."""

import os
from collections import Counter
from typing import Any, Dict, List, Set, Tuple

import pytest

# Headless test runs: no display server is available
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from uid_inspector.core.paginator import PaginationMode
from uid_inspector.protocols import ElementFactoryABC, PageHostABC, MappingUidResolver, register_uid_resolver
from uid_inspector.protocols import inspector_config, uid_resolver, editor_host


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture(autouse=True)
def reset_globals():
    """Each test starts with default config, no listeners, no host."""
    yield
    inspector_config._inspector_config = None
    inspector_config._config_listeners.clear()
    uid_resolver._uid_resolver = None
    editor_host._editor_host = None


@pytest.fixture
def resolver():
    table = {
        "uid://icon": "res://art/icon.png",
        "uid://level": "res://levels/level_01.tscn",
        "uid://long": "res://" + "/".join(["very_deep_directory"] * 4) + "/material.tres",
        "uid://gone": None,
    }
    resolver = MappingUidResolver(table)
    register_uid_resolver(resolver)
    return resolver


class FakeContainer:
    """Stand-in for a page container."""

    def __init__(self, name: str):
        self.name = name

    def __repr__(self):
        return f"FakeContainer({self.name})"


class RecordingFactory(ElementFactoryABC):
    """Element factory that records every call instead of building widgets."""

    def __init__(self):
        super().__init__()
        self.calls: List[Tuple] = []
        self.parent_of: Dict[int, Any] = {}
        self.page_indices: Dict[int, int] = {}
        self.invalid: Set[int] = set()

    def create(self, initial_value, container):
        identity = self._allocate_identity()
        self.calls.append(("create", identity, initial_value, container))
        self.parent_of[identity] = container
        return identity, object()

    def reparent(self, identity, new_container):
        self.calls.append(("reparent", identity, new_container))
        self.parent_of[identity] = new_container

    def destroy(self, identity):
        self.calls.append(("destroy", identity))
        self.parent_of.pop(identity, None)
        self.page_indices.pop(identity, None)

    def is_valid(self, identity):
        return identity in self.parent_of and identity not in self.invalid

    def set_page_index(self, identity, page_index):
        self.page_indices[identity] = page_index

    def calls_named(self, name):
        return [call for call in self.calls if call[0] == name]

    def held_counts(self) -> Counter:
        return Counter(self.parent_of.values())


class RecordingHost(PageHostABC):
    """Page host that keeps plain container objects and remembers what it showed."""

    def __init__(self):
        self.inline = FakeContainer("inline")
        self.pages: List[FakeContainer] = []
        self.removed: List[FakeContainer] = []
        self.mode = PaginationMode.INLINE
        self.title = ""
        self.count = 0
        self.folded = True

    def inline_container(self):
        return self.inline

    def add_page(self, page_number):
        page = FakeContainer(f"page{page_number}")
        self.pages.append(page)
        return page

    def remove_page(self, container):
        assert self.pages[-1] is container
        self.pages.pop()
        self.removed.append(container)

    def show_mode(self, mode):
        self.mode = mode

    def update_count(self, title, count):
        self.title = title
        self.count = count

    def set_folded(self, folded):
        self.folded = folded


@pytest.fixture
def factory():
    return RecordingFactory()


@pytest.fixture
def host():
    return RecordingHost()
