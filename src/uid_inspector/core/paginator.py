"""
Pagination planning for array editors.

Pure algorithm with no Qt dependency. Given an element count and a
capacity-per-page setting it decides how many overflow pages an array
editor needs, how to grow or shrink the page set, and which elements must
move to reach a valid placement.

Container numbering:
- 0 is the inline container, used while the array fits on one page
- 1..N are the overflow pages, used once two or more pages are needed

Usage:
    paginator = Paginator(capacity_per_page=10)
    target = paginator.compute_page_count(len(values))
    delta = paginator.plan_container_delta(len(pages), paginator.overflow_count(target))
    moves = paginator.assign_elements_to_pages(identities, placement)
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Hashable, List, Mapping, Sequence

logger = logging.getLogger(__name__)

INLINE_CONTAINER = 0
DEFAULT_CAPACITY_PER_PAGE = 10


class PaginationMode(Enum):
    """Which container set currently holds the elements."""
    INLINE = "inline"
    PAGINATED = "paginated"


@dataclass(frozen=True)
class ContainerDelta:
    """Number of overflow containers to create or destroy at the tail."""
    add: int = 0
    remove: int = 0

    @property
    def is_empty(self) -> bool:
        return self.add == 0 and self.remove == 0


@dataclass(frozen=True)
class PageMove:
    """A single reparent: element `identity` goes from one container to another."""
    identity: Hashable
    source: int
    target: int


class Paginator:
    """Computes page counts and minimal element moves for a fixed capacity."""

    def __init__(self, capacity_per_page: int = DEFAULT_CAPACITY_PER_PAGE):
        self._capacity = self._sanitize_capacity(capacity_per_page)

    @staticmethod
    def _sanitize_capacity(capacity_per_page: int) -> int:
        capacity = int(capacity_per_page)
        if capacity < 1:
            logger.warning(f"Invalid capacity per page {capacity_per_page}, clamping to 1")
            return 1
        return capacity

    @property
    def capacity_per_page(self) -> int:
        return self._capacity

    @capacity_per_page.setter
    def capacity_per_page(self, value: int) -> None:
        self._capacity = self._sanitize_capacity(value)

    def compute_page_count(self, element_count: int) -> int:
        """
        Required page count for `element_count` elements.

        0 or 1 means the single inline container is used; 2 or more means
        that many overflow containers. The two are never used together.
        """
        if element_count <= 0:
            return 0
        return math.ceil(element_count / self._capacity)

    @staticmethod
    def mode_for(page_count: int) -> PaginationMode:
        """Pagination mode implied by a page count."""
        return PaginationMode.PAGINATED if page_count >= 2 else PaginationMode.INLINE

    @staticmethod
    def overflow_count(page_count: int) -> int:
        """Number of overflow containers needed for `page_count` pages."""
        return page_count if page_count >= 2 else 0

    @staticmethod
    def plan_container_delta(current_page_count: int, target_page_count: int) -> ContainerDelta:
        """Containers to create (or destroy) at the tail to go from current to target."""
        difference = target_page_count - current_page_count
        if difference > 0:
            return ContainerDelta(add=difference)
        if difference < 0:
            return ContainerDelta(remove=-difference)
        return ContainerDelta()

    def target_container(self, flat_index: int, mode: PaginationMode) -> int:
        """Container number that position `flat_index` belongs in under `mode`."""
        if mode is PaginationMode.INLINE:
            return INLINE_CONTAINER
        return flat_index // self._capacity + 1

    def assign_elements_to_pages(
        self,
        ordered_elements: Sequence[Hashable],
        current_assignment: Mapping[Hashable, int],
    ) -> List[PageMove]:
        """
        Plan the moves that place every element deterministically.

        Element at flat position `i` belongs to overflow page `i // capacity`
        (container `i // capacity + 1`) when paginated, and to the inline
        container otherwise. Elements already in the right container are
        left alone.

        Args:
            ordered_elements: Element identities in flat order
            current_assignment: Identity -> container number it is in now.
                Missing identities are treated as unplaced and always move.

        Returns:
            Moves in flat order, one per element that is not where it belongs.
        """
        mode = self.mode_for(self.compute_page_count(len(ordered_elements)))
        moves: List[PageMove] = []
        for flat_index, identity in enumerate(ordered_elements):
            target = self.target_container(flat_index, mode)
            source = current_assignment.get(identity, -1)
            if source != target:
                moves.append(PageMove(identity=identity, source=source, target=target))
        return moves
