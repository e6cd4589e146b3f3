"""
uid-inspector: inline UID editors for PyQt6 property inspectors.

Edits identifier-typed properties (single UIDs and arrays of UIDs) inside a
larger property-editing surface the package does not control.

Architecture:
- Tier 1 (Core): ElementRecord, Paginator, DeferredCall
- Tier 2 (Protocols): ABC contracts for collaborators and widget adapters
- Tier 3 (Services): Re-entrancy flags and signal blocking
- Tier 4 (Forms): ArrayController, the authoritative array model
- Tier 5 (Widgets): Qt field editor, element factory and array section

Key Features:
- Arrays repaginate into fixed-capacity tabs past a density threshold
- Single-field edits never move or recreate element widgets
- Host refreshes are never echoed back as user edits
"""

__version__ = "0.1.0"

from .forms.array_controller import ArrayController
from .inspector import UidInspector, PropertyType, PropertyHint

__all__ = [
    "__version__",
    "ArrayController",
    "UidInspector",
    "PropertyType",
    "PropertyHint",
]
