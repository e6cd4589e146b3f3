"""Persisted value contracts.

The host owns the saved value of an edited property. Editors pull it with
get() when the host asks them to refresh, and the host pushes local edits
back with set() when an editor reports a change. This is a push-pull
boundary, not a two-way binding.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional


class PersistedArrayABC(ABC):
    """Saved value of a string-array property."""

    @abstractmethod
    def get(self) -> Optional[List[str]]:
        """Current saved array, or None if the property cannot be read as a string array."""
        ...

    @abstractmethod
    def set(self, values: List[str]) -> None:
        """Replace the saved array."""
        ...


class PersistedValueABC(ABC):
    """Saved value of a single string property."""

    @abstractmethod
    def get(self) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, value: str) -> None:
        ...


class CallbackPersistedArray(PersistedArrayABC):
    """PersistedArrayABC backed by a getter/setter pair supplied by the host."""

    def __init__(self, getter: Callable[[], Any], setter: Callable[[List[str]], None]):
        self._getter = getter
        self._setter = setter

    def get(self) -> Optional[List[str]]:
        value = self._getter()
        if value is None or isinstance(value, str):
            return None
        try:
            items = list(value)
        except TypeError:
            return None
        if not all(isinstance(item, str) for item in items):
            return None
        return items

    def set(self, values: List[str]) -> None:
        self._setter(list(values))


class CallbackPersistedValue(PersistedValueABC):
    """PersistedValueABC backed by a getter/setter pair supplied by the host."""

    def __init__(self, getter: Callable[[], Any], setter: Callable[[str], None]):
        self._getter = getter
        self._setter = setter

    def get(self) -> Optional[str]:
        value = self._getter()
        return value if isinstance(value, str) else None

    def set(self, value: str) -> None:
        self._setter(value)
