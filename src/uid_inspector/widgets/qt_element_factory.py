"""Qt element factory: UidFieldWidget instances addressed by integer identity."""

import logging
from typing import Any, Dict, Optional, Tuple, TYPE_CHECKING

from PyQt6 import sip
from PyQt6.QtWidgets import QWidget

from uid_inspector.protocols import ElementFactoryABC, InspectorConfig, get_inspector_config
from uid_inspector.widgets.uid_field_widget import UidFieldWidget

if TYPE_CHECKING:
    from uid_inspector.inspector import UidInspector

logger = logging.getLogger(__name__)


class QtElementFactory(ElementFactoryABC):
    """
    Creates array element editors inside page containers.

    Containers are plain QWidgets with a QVBoxLayout. Within a container,
    element widgets are kept sorted by their page index, so a reparent lands
    in the right visual slot whatever order moves arrive in.
    """

    def __init__(self, property_name: str, inspector: Optional["UidInspector"] = None,
                 config: Optional[InspectorConfig] = None):
        super().__init__()
        self._property_name = property_name
        self._inspector = inspector
        self._config = config or get_inspector_config()
        self._widgets: Dict[int, UidFieldWidget] = {}

    def widget(self, identity: int) -> Optional[UidFieldWidget]:
        return self._widgets.get(identity)

    @property
    def live_count(self) -> int:
        return len(self._widgets)

    def create(self, initial_value: str, container: Any) -> Tuple[int, Any]:
        identity = self._allocate_identity()

        widget = UidFieldWidget(part_of_array=True, inspector=self._inspector, config=self._config)
        widget.set_value(initial_value)
        widget.value_edited.connect(lambda value, i=identity: self.emit_value_edited(i, value))
        widget.delete_requested.connect(lambda i=identity: self.emit_delete_requested(i))

        self._widgets[identity] = widget
        if self._inspector is not None:
            self._inspector.track_field(widget)

        # Creation always appends to the array, so the widget goes last
        container.layout().addWidget(widget)
        return identity, widget

    def reparent(self, identity: int, new_container: Any) -> None:
        widget = self._widgets[identity]
        self._insert_sorted(new_container, widget)

    def destroy(self, identity: int) -> None:
        widget = self._widgets.pop(identity, None)
        if widget is None or sip.isdeleted(widget):
            return
        widget.release()
        widget.setParent(None)
        widget.deleteLater()

    def is_valid(self, identity: int) -> bool:
        widget = self._widgets.get(identity)
        if widget is None or sip.isdeleted(widget):
            self._widgets.pop(identity, None)
            return False
        return True

    def set_page_index(self, identity: int, page_index: int) -> None:
        widget = self._widgets.get(identity)
        if widget is not None and not sip.isdeleted(widget):
            widget.set_array_index(self._property_name, page_index)

    def apply_config(self, config: InspectorConfig) -> None:
        self._config = config
        for widget in self._widgets.values():
            if not sip.isdeleted(widget):
                widget.apply_config(config)

    @staticmethod
    def _insert_sorted(container: QWidget, widget: UidFieldWidget) -> None:
        layout = container.layout()
        position = 0
        for index in range(layout.count()):
            other = layout.itemAt(index).widget()
            if other is widget:
                continue
            if isinstance(other, UidFieldWidget) and other.page_index < widget.page_index:
                position += 1
        # insertWidget takes ownership and removes the widget from its old layout
        layout.insertWidget(position, widget)
