"""
Signal blocking helpers.

Programmatic updates of the array size box must not re-enter the handler
that reacts to user resizes.
"""

from contextlib import contextmanager
from PyQt6.QtWidgets import QWidget, QSpinBox
import logging

logger = logging.getLogger(__name__)


class SignalService:
    """
    Service for blocking widget signals around programmatic updates.

    Examples:
        with SignalService.block_signals(size_box):
            size_box.setValue(3)

        SignalService.update_widget_value(size_box, 3)
    """

    @staticmethod
    @contextmanager
    def block_signals(*widgets: QWidget):
        """Context manager for blocking widget signals."""
        for widget in widgets:
            if widget is not None:
                widget.blockSignals(True)
                logger.debug(f"Blocked signals on {type(widget).__name__}")

        try:
            yield
        finally:
            for widget in widgets:
                if widget is not None:
                    widget.blockSignals(False)
                    logger.debug(f"Unblocked signals on {type(widget).__name__}")

    @staticmethod
    def update_widget_value(widget: QWidget, value: int) -> None:
        """Update a spin box value with signals blocked."""
        if not isinstance(widget, QSpinBox):
            raise ValueError(f"Cannot update value of {type(widget).__name__}")
        with SignalService.block_signals(widget):
            widget.setValue(int(value))
