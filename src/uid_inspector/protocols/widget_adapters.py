"""
Widget adapters that wrap Qt widgets to implement the inspector ABCs.

Normalizes Qt's inconsistent APIs:
- QLineEdit.text() vs QSpinBox.value()
- QLineEdit.setText() vs QSpinBox.setValue()
- textChanged vs valueChanged

All adapters implement consistent interface via ABCs:
- get_value() / set_value() for all widgets
- connect_change_signal() for all widgets
"""

from abc import ABCMeta
from typing import Any, Callable

from PyQt6.QtWidgets import QLineEdit, QSpinBox
from PyQt6.QtCore import QObject

from .widget_protocols import (
    ValueGettable, ValueSettable, PlaceholderCapable,
    ChangeSignalEmitter
)

# PyQt-specific metaclass that combines ABCMeta with Qt's metaclass
_QtMetaclass = type(QObject)


class PyQtWidgetMeta(_QtMetaclass, ABCMeta):
    """Metaclass for PyQt widgets that need ABC support."""
    pass


class LineEditAdapter(QLineEdit, ValueGettable, ValueSettable, PlaceholderCapable,
                      ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Adapter for QLineEdit implementing the inspector ABCs.

    Unlike a generic form field, identifier text is kept verbatim: an empty
    line edit reads back as "" and whitespace is not stripped, so the array
    value list always holds exactly what the user typed.
    """

    def get_value(self) -> str:
        """Implement ValueGettable ABC."""
        return self.text()

    def set_value(self, value: Any) -> None:
        """Implement ValueSettable ABC."""
        self.setText("" if value is None else str(value))

    def set_placeholder(self, text: str) -> None:
        """Implement PlaceholderCapable ABC."""
        self.setPlaceholderText(text)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self.textChanged.connect(callback)


class SpinBoxAdapter(QSpinBox, ValueGettable, ValueSettable,
                     ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Adapter for QSpinBox implementing the inspector ABCs.

    Used for element counts, so the default range is non-negative.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setRange(0, 2147483647)

    def get_value(self) -> int:
        """Implement ValueGettable ABC."""
        return self.value()

    def set_value(self, value: Any) -> None:
        """Implement ValueSettable ABC."""
        self.setValue(self.minimum() if value is None else int(value))

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        self.valueChanged.connect(callback)
