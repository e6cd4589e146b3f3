"""
Array property widget for PyQt6.

Collapsible section holding the editors of a UID array property:
- an "Array Size:" spin box
- the inline container, used while the array fits on one page
- a tab widget of overflow pages, used once it does not
- an "+ Add Element" button

The widget is the page host of an ArrayController; all bookkeeping lives in
the controller.
"""

import logging
from typing import Any, List, Optional, TYPE_CHECKING

from PyQt6.QtWidgets import QWidget, QVBoxLayout, QPushButton, QToolButton, QTabWidget, QSizePolicy
from PyQt6.QtCore import Qt, pyqtSignal

from uid_inspector.core.paginator import PaginationMode
from uid_inspector.forms.array_controller import ArrayController, DEFAULT_TYPE_NAME
from uid_inspector.forms.layout_constants import CURRENT_LAYOUT
from uid_inspector.protocols import (
    PageHostABC,
    PersistedArrayABC,
    PyQtWidgetMeta,
    InspectorConfig,
    get_inspector_config,
)
from uid_inspector.services.signal_service import SignalService
from uid_inspector.widgets.no_scroll_spinbox import NoScrollSpinBox
from uid_inspector.widgets.qt_element_factory import QtElementFactory

if TYPE_CHECKING:
    from uid_inspector.inspector import UidInspector

logger = logging.getLogger(__name__)


def _make_container(name: str) -> QWidget:
    container = QWidget()
    container.setObjectName(name)
    layout = QVBoxLayout(container)
    layout.setContentsMargins(*CURRENT_LAYOUT.page_margins)
    layout.setSpacing(CURRENT_LAYOUT.page_spacing)
    layout.setAlignment(Qt.AlignmentFlag.AlignTop)
    return container


class ArrayPropertyWidget(QWidget, PageHostABC, metaclass=PyQtWidgetMeta):
    """Foldable editor for a string-array property of UIDs."""

    array_changed = pyqtSignal(list)

    def __init__(
        self,
        property_name: str,
        persisted: PersistedArrayABC,
        type_name: str = DEFAULT_TYPE_NAME,
        inspector: Optional["UidInspector"] = None,
        config: Optional[InspectorConfig] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.property_name = property_name
        self._persisted = persisted
        config = config or get_inspector_config()

        self._setup_ui()

        self.factory = QtElementFactory(property_name, inspector=inspector, config=config)
        self.controller = ArrayController(
            self.factory, self, persisted=persisted, type_name=type_name, config=config
        )
        self.controller.subscribe(self._on_array_changed)

        self._setup_signals()
        self.set_folded(True)

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.header_button = QToolButton()
        self.header_button.setCheckable(True)
        self.header_button.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextBesideIcon)
        self.header_button.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        layout.addWidget(self.header_button)

        self.content = QWidget()
        content_layout = QVBoxLayout(self.content)
        content_layout.setContentsMargins(*CURRENT_LAYOUT.section_margins)
        content_layout.setSpacing(CURRENT_LAYOUT.section_spacing)

        self.size_box = NoScrollSpinBox()
        self.size_box.setPrefix("Array Size: ")

        self.overflow_tabs = QTabWidget()
        self.overflow_tabs.setHidden(True)

        self.inner_container = _make_container("0")

        self.add_button = QPushButton("+ Add Element")

        content_layout.addWidget(self.size_box)
        content_layout.addWidget(self.overflow_tabs)
        content_layout.addWidget(self.inner_container)
        content_layout.addWidget(self.add_button)
        layout.addWidget(self.content)

    def _setup_signals(self):
        self.header_button.toggled.connect(self._on_header_toggled)
        self.size_box.connect_change_signal(self.controller.resize)
        self.add_button.clicked.connect(self._on_add_pressed)

    # ========== HOST ENTRY POINTS ==========

    def update_property(self) -> None:
        """The host's saved value may have changed."""
        self.controller.refresh()

    def property_reverted(self) -> None:
        """The host cleared the property back to its default."""
        self.controller.reset()

    def apply_config(self, config: InspectorConfig) -> None:
        self.factory.apply_config(config)
        self.controller.apply_config(config)

    @property
    def values(self) -> List[str]:
        return self.controller.values

    def _on_add_pressed(self):
        self.controller.add_element("")

    def _on_array_changed(self, values: List[str]):
        self._persisted.set(values)
        self.array_changed.emit(values)

    def _on_header_toggled(self, expanded: bool):
        self.header_button.setArrowType(
            Qt.ArrowType.DownArrow if expanded else Qt.ArrowType.RightArrow
        )
        self.content.setHidden(not expanded)

    # ========== PAGE HOST ==========

    def inline_container(self) -> Any:
        return self.inner_container

    def add_page(self, page_number: int) -> Any:
        page = _make_container(str(page_number))
        self.overflow_tabs.addTab(page, str(page_number))
        return page

    def remove_page(self, container: Any) -> None:
        index = self.overflow_tabs.indexOf(container)
        if index >= 0:
            self.overflow_tabs.removeTab(index)
        container.deleteLater()

    def show_mode(self, mode: PaginationMode) -> None:
        paginated = mode is PaginationMode.PAGINATED
        self.overflow_tabs.setHidden(not paginated)
        self.inner_container.setHidden(paginated)

    def update_count(self, title: str, count: int) -> None:
        self.header_button.setText(title)
        SignalService.update_widget_value(self.size_box, count)

    def set_folded(self, folded: bool) -> None:
        self.header_button.setChecked(not folded)
        # toggled is not emitted when the state does not change
        self._on_header_toggled(not folded)

    @property
    def is_folded(self) -> bool:
        return not self.header_button.isChecked()
