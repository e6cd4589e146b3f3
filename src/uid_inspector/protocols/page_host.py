"""Page host contract.

The page host is the visual shell around an array: the inline container, the
overflow page set, the collapsible section title and the size display. The
array controller decides what goes where; the host only renders it.
"""

from abc import ABC, abstractmethod
from typing import Any

from uid_inspector.core.paginator import PaginationMode


class PageHostABC(ABC):
    """Abstract base class for array page hosts."""

    @abstractmethod
    def inline_container(self) -> Any:
        """The container used while the array fits on a single page."""
        ...

    @abstractmethod
    def add_page(self, page_number: int) -> Any:
        """Append overflow page `page_number` (1-based) and return its container."""
        ...

    @abstractmethod
    def remove_page(self, container: Any) -> None:
        """Free the last overflow page. It holds no elements when this is called."""
        ...

    @abstractmethod
    def show_mode(self, mode: PaginationMode) -> None:
        """Show either the inline container or the overflow pages, never both."""
        ...

    @abstractmethod
    def update_count(self, title: str, count: int) -> None:
        """Render the section title and the element count."""
        ...

    def set_folded(self, folded: bool) -> None:
        """Fold or unfold the section. Hosts without folding ignore this."""
        pass
