"""Editor host protocol.

Actions the inspector asks of the surrounding editor: file selection in its
file browser and opening a resource for editing.
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class EditorHostABC(ABC):
    """Abstract base class for the surrounding editor."""

    @abstractmethod
    def selected_paths(self) -> List[str]:
        """Paths currently selected in the editor's file browser."""
        ...

    @abstractmethod
    def select_file(self, path: str) -> None:
        """Select and reveal `path` in the editor's file browser."""
        ...

    @abstractmethod
    def open_resource(self, path: str) -> None:
        """Open the resource at `path` for editing."""
        ...

    @abstractmethod
    def reveal_path(self, path: str) -> None:
        """Show the full resolved `path` to the user (status bar, output panel)."""
        ...


_editor_host: Optional[EditorHostABC] = None


def register_editor_host(host: EditorHostABC) -> None:
    """Register the global editor host."""
    global _editor_host
    _editor_host = host


def get_editor_host() -> Optional[EditorHostABC]:
    """Get the registered editor host, or None when running without one."""
    return _editor_host
