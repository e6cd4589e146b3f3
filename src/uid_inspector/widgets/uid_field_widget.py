"""
UID field widget for PyQt6.

Editor for a single UID string: the identifier text, a file picker, a button
that reveals the resource in the editor's file browser, and a button showing
the resolved path. Used on its own for string properties and as the element
editor inside array properties.
"""

import logging
from typing import Optional, TYPE_CHECKING

from PyQt6 import sip
from PyQt6.QtWidgets import QWidget, QPushButton, QHBoxLayout, QVBoxLayout, QLabel, QFileDialog, QSizePolicy
from PyQt6.QtCore import pyqtSignal

from uid_inspector.core.deferred_call import DeferredCall
from uid_inspector.forms.layout_constants import CURRENT_LAYOUT
from uid_inspector.protocols import (
    LineEditAdapter,
    InspectorConfig,
    PressOption,
    ResolveResult,
    get_inspector_config,
    get_uid_resolver,
    get_editor_host,
)
from uid_inspector.protocols.uid_resolver import UID_PREFIX
from uid_inspector.services.flag_context_manager import FlagContextManager

if TYPE_CHECKING:
    from uid_inspector.inspector import UidInspector

logger = logging.getLogger(__name__)

FILE_FILTER_TYPES = ["*.tscn", "*.tres", "*.gdshader", "*.png", "*.tga", "*.wav"]

# Lets the release notification finish propagating before the host swaps
# the inspected object out from under this widget
OPEN_TARGET_DELAY_MS = 100


def truncate_path(path: str, max_length: int = CURRENT_LAYOUT.max_path_display_length) -> str:
    """Keep the last `max_length` characters of a path, where the file name is."""
    if len(path) > max_length:
        return path[len(path) - max_length:]
    return path


class UidFieldWidget(QWidget):
    """UID editor with choose/show buttons and a resolved path display."""

    value_edited = pyqtSignal(str)
    delete_requested = pyqtSignal()
    path_revealed = pyqtSignal(str)

    def __init__(
        self,
        label: str = "",
        part_of_array: bool = False,
        inspector: Optional["UidInspector"] = None,
        config: Optional[InspectorConfig] = None,
        parent=None,
    ):
        super().__init__(parent)
        self._inspector = inspector
        self._part_of_array = part_of_array
        self._updating = False
        self._released = False
        self._current_full_path = ""
        self._last_result: Optional[ResolveResult] = None
        self._deferred_open: Optional[DeferredCall] = None
        self.page_index = 0
        self.registry_key: Optional[int] = None

        config = config or get_inspector_config()
        self._press_option = config.press_option
        self._verbose = config.verbose_logging

        self._construct_control()
        self.set_label(label)
        self._setup_signals()
        self.setAcceptDrops(True)
        self.refresh_paths()

    def _construct_control(self):
        """Layout: [label][uid text][Choose][Show][x] above [resolved path]."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(*CURRENT_LAYOUT.field_margins)
        layout.setSpacing(CURRENT_LAYOUT.field_row_spacing)

        top_layout = QHBoxLayout()
        top_layout.setSpacing(CURRENT_LAYOUT.field_row_spacing)

        self.name_label = QLabel()
        self.uid_edit = LineEditAdapter()
        self.uid_edit.set_placeholder(UID_PREFIX)
        self.choose_button = QPushButton("Choose")
        self.show_button = QPushButton("Show")
        self.path_button = QPushButton()
        self.path_button.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)

        top_layout.addWidget(self.name_label, 0)
        top_layout.addWidget(self.uid_edit, CURRENT_LAYOUT.line_edit_stretch)
        top_layout.addWidget(self.choose_button, CURRENT_LAYOUT.button_stretch)
        top_layout.addWidget(self.show_button, CURRENT_LAYOUT.button_stretch)

        self.delete_button: Optional[QPushButton] = None
        if self._part_of_array:
            self.delete_button = QPushButton("✕")
            self.delete_button.setFixedWidth(CURRENT_LAYOUT.delete_button_width)
            self.delete_button.setToolTip("Remove element")
            top_layout.addWidget(self.delete_button, 0)

        layout.addLayout(top_layout)
        layout.addWidget(self.path_button)

    def _setup_signals(self):
        self.uid_edit.connect_change_signal(self._on_text_changed)
        self.uid_edit.returnPressed.connect(self._on_text_submitted)
        self.choose_button.clicked.connect(self._on_choose_pressed)
        self.show_button.clicked.connect(self._on_show_pressed)
        self.path_button.clicked.connect(self._on_path_pressed)
        if self.delete_button is not None:
            self.delete_button.clicked.connect(self._on_delete_pressed)

    # ========== VALUE ==========

    def get_value(self) -> str:
        return self.uid_edit.get_value()

    def set_value(self, value) -> None:
        """Set the UID text without reporting an edit."""
        self.update_from_host("" if value is None else str(value))

    def update_from_host(self, value: str) -> None:
        """Show a host-side value. Does not echo it back as an edit."""
        if value == self.uid_edit.text():
            return
        with FlagContextManager.updating_context(self):
            self.uid_edit.set_value(value)
            self.refresh_paths()

    def set_label(self, text: str) -> None:
        self.name_label.setText(text)
        self.name_label.setVisible(bool(text))

    def set_array_index(self, label_prefix: str, page_index: int) -> None:
        self.page_index = page_index
        self.set_label(f"{label_prefix}{page_index}")

    def apply_config(self, config: InspectorConfig) -> None:
        self._press_option = config.press_option
        self._verbose = config.verbose_logging

    @property
    def press_option(self) -> PressOption:
        return self._press_option

    @property
    def current_full_path(self) -> str:
        return self._current_full_path

    @property
    def last_result(self) -> Optional[ResolveResult]:
        return self._last_result

    # ========== RESOLUTION ==========

    def _resolve(self) -> ResolveResult:
        result = get_uid_resolver().resolve(self.uid_edit.text())
        if not result.ok and self._verbose:
            logger.info(f"UID '{self.uid_edit.text()}' not resolved: {result.reason.message}")
        return result

    def refresh_paths(self) -> None:
        """Re-resolve the UID and update the path and Show buttons."""
        result = self._resolve()
        self._last_result = result

        if result.ok:
            self._current_full_path = result.resolved_path
            self.path_button.setText(truncate_path(result.resolved_path))
            self.path_button.setToolTip(result.resolved_path)
            self.path_button.setEnabled(True)
            self.show_button.setEnabled(True)
        else:
            self._current_full_path = ""
            self.path_button.setText(result.reason.message)
            self.path_button.setToolTip("")
            self.path_button.setEnabled(False)
            self.show_button.setEnabled(False)

    # ========== USER ACTIONS ==========

    def _on_text_changed(self, text: str):
        if self._updating:
            return
        self.refresh_paths()
        self.value_edited.emit(text)

    def _on_text_submitted(self):
        if self._updating:
            return
        self.refresh_paths()

    def _on_delete_pressed(self):
        if self._updating:
            return
        self.delete_requested.emit()

    def _on_show_pressed(self):
        if self._updating:
            return

        result = self._resolve()
        if not result.ok:
            return

        host = get_editor_host()
        if host is None:
            logger.warning("No editor host registered, cannot show resource")
            return

        if host.selected_paths() == [result.resolved_path]:
            if self._verbose:
                logger.info(f"Resource already selected: {result.resolved_path}")
            return

        host.select_file(result.resolved_path)

    def _dialog_start_path(self) -> str:
        result = self._resolve()
        if result.ok:
            return result.resolved_path
        if self._inspector is not None and self._inspector.last_edited_path:
            return self._inspector.last_edited_path
        return ""

    def _on_choose_pressed(self):
        if self._updating:
            return

        selected_path, _ = QFileDialog.getOpenFileName(
            self,
            "Choose Resource",
            self._dialog_start_path(),
            f"Resources ({' '.join(FILE_FILTER_TYPES)})",
        )
        if selected_path:
            self.apply_picked_path(selected_path)

    def apply_picked_path(self, path: str) -> bool:
        """Replace the UID with the one belonging to `path`. Returns False if it has none."""
        uid = get_uid_resolver().uid_for_path(path)
        if uid is None:
            if self._verbose:
                logger.info(f"No UID known for picked path: {path}")
            return False

        if self._inspector is not None:
            self._inspector.set_last_edited_path(path)

        if uid == self.uid_edit.text():
            return True

        # textChanged reports the edit
        self.uid_edit.set_value(uid)
        return True

    def _on_path_pressed(self):
        if self._updating:
            return

        result = self._resolve()
        if not result.ok:
            return

        if self._press_option is PressOption.REVEAL_LOCATION:
            logger.info(f"Path: {result.resolved_path}")
            host = get_editor_host()
            if host is not None:
                host.reveal_path(result.resolved_path)
            self.path_revealed.emit(result.resolved_path)
        elif self._press_option is PressOption.OPEN_TARGET:
            self.open_target_deferred(result.resolved_path)

    def open_target_deferred(self, path: str, scheduler=None) -> None:
        """
        Release this widget from the inspector, then open `path` one tick later.

        Opening a resource replaces the inspected object, which destroys this
        widget; the release must be fully processed first. If the widget is
        destroyed before the continuation runs, nothing is opened.
        """
        host = get_editor_host()
        if host is None:
            logger.warning("No editor host registered, cannot open resource")
            return

        self.release()
        self._deferred_open = DeferredCall(
            delay_ms=OPEN_TARGET_DELAY_MS,
            handler=lambda: host.open_resource(path),
            guard=self.is_alive,
            scheduler=scheduler,
        )
        self._deferred_open.schedule()

    def is_alive(self) -> bool:
        return not sip.isdeleted(self)

    def release(self) -> None:
        """Detach from the inspector registry. Safe to call more than once."""
        if self._released:
            return
        self._released = True
        if self._inspector is not None:
            self._inspector.release_field(self)

    # ========== DRAG AND DROP ==========

    def dragEnterEvent(self, event):
        if event.mimeData().hasUrls():
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event):
        if self._updating:
            return

        urls = [url for url in event.mimeData().urls() if url.isLocalFile()]
        if not urls:
            event.ignore()
            return

        # Use the first dropped file
        if self.apply_picked_path(urls[0].toLocalFile()):
            event.acceptProposedAction()


# Register UidFieldWidget as implementing ValueGettable and ValueSettable
from uid_inspector.protocols import ValueGettable, ValueSettable
ValueGettable.register(UidFieldWidget)
ValueSettable.register(UidFieldWidget)
