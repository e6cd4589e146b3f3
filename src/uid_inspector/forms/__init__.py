"""
Array editing model.

ArrayController keeps a UID array's values, element editors and pages in
agreement; layout constants shared by every inspector widget live here too.
"""

from .array_controller import ArrayController, DEFAULT_TYPE_NAME
from .layout_constants import InspectorLayoutConfig, CURRENT_LAYOUT

__all__ = [
    "ArrayController",
    "DEFAULT_TYPE_NAME",
    "InspectorLayoutConfig",
    "CURRENT_LAYOUT",
]
