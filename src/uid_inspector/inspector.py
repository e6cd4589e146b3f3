"""
UID inspector entry point.

Decides which properties get a UID editor, builds the editor (a single
UidFieldWidget for string properties, an ArrayPropertyWidget for string
arrays), and keeps every live field widget in step with host settings.

Usage:
    inspector = UidInspector()
    editor = inspector.parse_property(
        "icons", PropertyType.PACKED_STRING_ARRAY, PropertyHint.FILE, "uid",
        CallbackPersistedArray(lambda: node.icons, node.set_icons),
    )
    if editor is not None:
        form_layout.addRow("icons", editor)
"""

import logging
from enum import Enum
from typing import Dict, Optional, Union

from PyQt6 import sip
from PyQt6.QtWidgets import QWidget

from uid_inspector.protocols import (
    InspectorConfig,
    PersistedArrayABC,
    PersistedValueABC,
    get_inspector_config,
    add_config_listener,
    remove_config_listener,
)
from uid_inspector.widgets.array_property_widget import ArrayPropertyWidget
from uid_inspector.widgets.uid_field_widget import UidFieldWidget

logger = logging.getLogger(__name__)

UID_HINT_FILTER = "uid"


class PropertyType(Enum):
    """Property value types the inspector can edit."""
    STRING = "String"
    PACKED_STRING_ARRAY = "PackedStringArray"


class PropertyHint(Enum):
    """Editor hint attached to a property by the host."""
    NONE = "none"
    FILE = "file"


class UidInspector:
    """Builds UID editors and tracks every live field widget."""

    def __init__(self, config: Optional[InspectorConfig] = None):
        self._config = config or get_inspector_config()
        self._fields: Dict[int, UidFieldWidget] = {}
        self._arrays: Dict[int, ArrayPropertyWidget] = {}
        self._next_key = 1
        self._last_edited_path = ""
        add_config_listener(self.update_settings)

    def dispose(self) -> None:
        remove_config_listener(self.update_settings)

    @property
    def config(self) -> InspectorConfig:
        return self._config

    @property
    def last_edited_path(self) -> str:
        return self._last_edited_path

    def set_last_edited_path(self, path: str) -> None:
        self._last_edited_path = path

    @property
    def tracked_field_count(self) -> int:
        return len(self._fields)

    # ========== PROPERTY PARSING ==========

    @staticmethod
    def can_handle(value_type: PropertyType, hint: PropertyHint, hint_string: str) -> bool:
        """Only file-hinted properties filtered to UIDs are handled."""
        if hint is not PropertyHint.FILE or hint_string != UID_HINT_FILTER:
            return False
        return value_type in (PropertyType.STRING, PropertyType.PACKED_STRING_ARRAY)

    def parse_property(
        self,
        name: str,
        value_type: PropertyType,
        hint: PropertyHint,
        hint_string: str,
        persisted: Union[PersistedValueABC, PersistedArrayABC],
    ) -> Optional[QWidget]:
        """Build the editor for a property, or return None if it is not a UID property."""
        if not self.can_handle(value_type, hint, hint_string):
            return None

        if value_type is PropertyType.STRING:
            return self.create_field(name, persisted)
        return self.create_array(name, persisted, value_type.value)

    def create_field(self, name: str, persisted: PersistedValueABC) -> UidFieldWidget:
        """Standalone editor for a single UID string property."""
        widget = UidFieldWidget(label=name, part_of_array=False, inspector=self, config=self._config)
        widget.update_from_host(persisted.get() or "")
        widget.value_edited.connect(persisted.set)
        self.track_field(widget)
        return widget

    def create_array(self, name: str, persisted: PersistedArrayABC,
                     type_name: str = PropertyType.PACKED_STRING_ARRAY.value) -> ArrayPropertyWidget:
        """Editor for a UID array property, populated from the persisted value."""
        widget = ArrayPropertyWidget(name, persisted, type_name=type_name, inspector=self, config=self._config)
        key = self._allocate_key()
        self._arrays[key] = widget
        widget.destroyed.connect(lambda *_, k=key: self._arrays.pop(k, None))
        widget.update_property()
        return widget

    # ========== FIELD REGISTRY ==========

    def _allocate_key(self) -> int:
        key = self._next_key
        self._next_key += 1
        return key

    def track_field(self, widget: UidFieldWidget) -> int:
        """Start tracking a field widget; it is dropped automatically when destroyed."""
        key = self._allocate_key()
        widget.registry_key = key
        self._fields[key] = widget
        widget.destroyed.connect(lambda *_, k=key: self._fields.pop(k, None))
        return key

    def release_field(self, widget: UidFieldWidget) -> bool:
        """Stop tracking a field widget. Returns False if it was not tracked."""
        key = widget.registry_key
        if key is None or self._fields.pop(key, None) is None:
            if self._config.verbose_logging:
                logger.info(f"UidInspector.release_field: key {key} probably released already")
            return False
        return True

    def update_settings(self, config: InspectorConfig) -> None:
        """Push new settings to every live editor, dropping ones Qt already deleted."""
        self._config = config

        for key, field in list(self._fields.items()):
            if sip.isdeleted(field):
                if config.verbose_logging:
                    logger.info(f"UidInspector.update_settings: field {key} was no longer valid")
                del self._fields[key]
                continue
            field.apply_config(config)

        for key, array in list(self._arrays.items()):
            if sip.isdeleted(array):
                del self._arrays[key]
                continue
            array.apply_config(config)
