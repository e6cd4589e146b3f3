"""Element factory contract.

The array controller never builds widgets itself. It asks an element factory
to create, move and destroy the visual counterpart of each element, and it
learns about user edits only through the two events the factory emits.

Example:
    class MyFactory(ElementFactoryABC):
        def create(self, initial_value, container):
            widget = MyEditor(initial_value, parent=container)
            identity = self._allocate_identity()
            ...
            return identity, widget
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Tuple

ValueEditedCallback = Callable[[int, str], None]
DeleteRequestedCallback = Callable[[int], None]


class ElementFactoryABC(ABC):
    """Abstract base class for element factories.

    Identities are monotonically increasing integers allocated by the factory
    and never reused. Once returned from create() they are owned by the
    caller; no other code addresses the element by position or by reference.
    """

    def __init__(self):
        self._next_identity = 1
        self._value_edited_listeners: List[ValueEditedCallback] = []
        self._delete_requested_listeners: List[DeleteRequestedCallback] = []

    def _allocate_identity(self) -> int:
        identity = self._next_identity
        self._next_identity += 1
        return identity

    @abstractmethod
    def create(self, initial_value: str, container: Any) -> Tuple[int, Any]:
        """Create a visual element seeded with `initial_value` inside `container`.

        Returns:
            (identity, handle) where identity is used for all later addressing.
        """
        ...

    @abstractmethod
    def reparent(self, identity: int, new_container: Any) -> None:
        """Move an existing element into `new_container` without recreating it."""
        ...

    @abstractmethod
    def destroy(self, identity: int) -> None:
        """Free the visual element and invalidate its identity."""
        ...

    @abstractmethod
    def is_valid(self, identity: int) -> bool:
        """Whether the visual handle behind `identity` is still alive."""
        ...

    @abstractmethod
    def set_page_index(self, identity: int, page_index: int) -> None:
        """Tell the element its position in the flat sequence."""
        ...

    def subscribe(self, on_value_edited: ValueEditedCallback,
                  on_delete_requested: DeleteRequestedCallback) -> None:
        """Register listeners for the two user-originated events."""
        self._value_edited_listeners.append(on_value_edited)
        self._delete_requested_listeners.append(on_delete_requested)

    def unsubscribe(self, on_value_edited: ValueEditedCallback,
                    on_delete_requested: DeleteRequestedCallback) -> None:
        if on_value_edited in self._value_edited_listeners:
            self._value_edited_listeners.remove(on_value_edited)
        if on_delete_requested in self._delete_requested_listeners:
            self._delete_requested_listeners.remove(on_delete_requested)

    def emit_value_edited(self, identity: int, new_value: str) -> None:
        for callback in list(self._value_edited_listeners):
            callback(identity, new_value)

    def emit_delete_requested(self, identity: int) -> None:
        for callback in list(self._delete_requested_listeners):
            callback(identity)
