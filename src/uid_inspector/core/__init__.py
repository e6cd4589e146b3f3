"""
Core utilities.

Pure data and algorithm components with no widget dependencies:
element bookkeeping, pagination planning and deferred continuations.
"""

from .element_record import ElementRecord
from .paginator import (
    Paginator,
    PaginationMode,
    ContainerDelta,
    PageMove,
    INLINE_CONTAINER,
    DEFAULT_CAPACITY_PER_PAGE,
)
from .deferred_call import DeferredCall

__all__ = [
    "ElementRecord",
    "Paginator",
    "PaginationMode",
    "ContainerDelta",
    "PageMove",
    "INLINE_CONTAINER",
    "DEFAULT_CAPACITY_PER_PAGE",
    "DeferredCall",
]
