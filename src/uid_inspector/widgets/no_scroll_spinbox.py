"""
No-scroll spinbox for PyQt6.

Prevents accidental array resizes from mouse wheel events while the user
scrolls through a long inspector.
"""

from PyQt6.QtGui import QWheelEvent

from uid_inspector.protocols import SpinBoxAdapter


class NoScrollSpinBox(SpinBoxAdapter):
    """SpinBox that ignores wheel events to prevent accidental value changes.

    Inherits from SpinBoxAdapter which already implements ValueGettable/ValueSettable ABCs.
    """

    def wheelEvent(self, event: QWheelEvent):
        """Ignore wheel events to prevent accidental value changes."""
        event.ignore()
