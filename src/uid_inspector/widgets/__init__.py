"""
Inspector widgets.

Qt implementations of the element factory and page host contracts, plus
the single UID field editor they are built from.
"""

from .no_scroll_spinbox import NoScrollSpinBox
from .uid_field_widget import UidFieldWidget, truncate_path, FILE_FILTER_TYPES
from .qt_element_factory import QtElementFactory
from .array_property_widget import ArrayPropertyWidget

__all__ = [
    "NoScrollSpinBox",
    "UidFieldWidget",
    "truncate_path",
    "FILE_FILTER_TYPES",
    "QtElementFactory",
    "ArrayPropertyWidget",
]
