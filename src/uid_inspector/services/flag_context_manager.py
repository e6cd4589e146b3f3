"""
Context manager factory for boolean re-entrancy flags.

Editors set a flag while they apply host-originated updates so that the
change signals those updates trigger are not mistaken for user edits and
echoed back to the host.

Pattern:
    Instead of:
        self._updating = True
        try:
            # ... logic
        finally:
            self._updating = False

    Use:
        with FlagContextManager.manage_flags(self, _updating=True):
            # ... logic
"""

from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Set
import logging

logger = logging.getLogger(__name__)


class ManagerFlag(Enum):
    """
    Registry of valid editor flags.

    Add new flags here as they're introduced to the codebase.
    """
    UPDATING = '_updating'


class FlagContextManager:
    """
    Context manager factory for boolean flag management.

    Examples:
        with FlagContextManager.manage_flags(self, _updating=True):
            self._apply_host_value(value)

        with FlagContextManager.updating_context(self):
            self._reconcile(persisted)
    """

    VALID_FLAGS: Set[str] = {flag.value for flag in ManagerFlag}

    @staticmethod
    @contextmanager
    def manage_flags(obj: Any, **flags: bool):
        """
        Set flags on entry and restore previous values on exit.

        Args:
            obj: Object to set flags on
            **flags: Flag names and values to set (e.g., _updating=True)

        Raises:
            ValueError: If any flag name is not in VALID_FLAGS registry
        """
        invalid_flags = set(flags.keys()) - FlagContextManager.VALID_FLAGS
        if invalid_flags:
            raise ValueError(
                f"Invalid flags: {invalid_flags}. "
                f"Valid flags: {FlagContextManager.VALID_FLAGS}. "
                f"Add new flags to ManagerFlag enum."
            )

        # Direct attribute access: flags must be initialized in the owner's __init__
        prev_values: Dict[str, bool] = {}
        for flag_name in flags:
            prev_values[flag_name] = getattr(obj, flag_name)

        for flag_name, flag_value in flags.items():
            setattr(obj, flag_name, flag_value)
            logger.debug(f"Setting flag {flag_name}={flag_value} on {type(obj).__name__}")

        try:
            yield
        finally:
            for flag_name, prev_value in prev_values.items():
                setattr(obj, flag_name, prev_value)
                logger.debug(f"Restoring flag {flag_name}={prev_value} on {type(obj).__name__}")

    @staticmethod
    @contextmanager
    def updating_context(obj: Any):
        """Convenience context manager for applying host-originated updates."""
        with FlagContextManager.manage_flags(obj, **{ManagerFlag.UPDATING.value: True}):
            yield

    @staticmethod
    def is_flag_set(obj: Any, flag: ManagerFlag) -> bool:
        """
        Check if a flag is currently set to True.

        Example:
            if FlagContextManager.is_flag_set(self, ManagerFlag.UPDATING):
                return  # Host update in progress, not a user edit
        """
        return getattr(obj, flag.value)
