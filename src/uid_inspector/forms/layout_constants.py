"""
Layout constants for UID inspector widgets.

Centralizes spacing, margins and stretch ratios so single fields and array
elements look the same wherever they are placed.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class InspectorLayoutConfig:
    """Spacing, margins and ratios for inspector widgets."""

    # Field row: [line edit][Choose][Show] above [resolved path]
    field_row_spacing: int = 2
    field_margins: tuple = (0, 0, 0, 0)
    line_edit_stretch: int = 47
    button_stretch: int = 26

    # Array section content (size box, pages, inline container, add button)
    section_spacing: int = 2
    section_margins: tuple = (4, 2, 4, 2)
    page_spacing: int = 1
    page_margins: tuple = (1, 1, 1, 1)

    # Resolved path button shows at most this many trailing characters
    max_path_display_length: int = 40

    delete_button_width: int = 24


CURRENT_LAYOUT = InspectorLayoutConfig()
