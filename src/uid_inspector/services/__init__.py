"""
Service layer for inspector widgets.

Cross-cutting concerns: re-entrancy flags and signal blocking.
"""

from .signal_service import SignalService
from .flag_context_manager import FlagContextManager, ManagerFlag

__all__ = [
    "SignalService",
    "FlagContextManager",
    "ManagerFlag",
]
