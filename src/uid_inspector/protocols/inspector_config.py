"""Inspector configuration.

Host-level settings every inspector widget reads at construction and again
whenever the host reports a settings change.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from uid_inspector.core.paginator import DEFAULT_CAPACITY_PER_PAGE

logger = logging.getLogger(__name__)


class PressOption(Enum):
    """What the resolved-path button of a UID field does."""
    REVEAL_LOCATION = "reveal_location"
    OPEN_TARGET = "open_target"


@dataclass(frozen=True)
class InspectorConfig:
    """Configuration for UID inspector widgets.

    Attributes:
        capacity_per_page: Elements per page before an array is paginated
        press_option: Behaviour of the resolved-path button
        verbose_logging: Emit diagnostic log lines for benign conditions
    """

    capacity_per_page: int = DEFAULT_CAPACITY_PER_PAGE
    press_option: PressOption = PressOption.REVEAL_LOCATION
    verbose_logging: bool = False


ConfigListener = Callable[[InspectorConfig], None]

# Global config instance (set by application)
_inspector_config: Optional[InspectorConfig] = None
_config_listeners: List[ConfigListener] = []


def set_inspector_config(config: InspectorConfig) -> None:
    """Set the global inspector configuration and notify listeners.

    Args:
        config: InspectorConfig instance
    """
    global _inspector_config
    _inspector_config = config
    for listener in list(_config_listeners):
        listener(config)


def get_inspector_config() -> InspectorConfig:
    """Get the current inspector configuration.

    Returns:
        Current InspectorConfig or default if not set
    """
    if _inspector_config is None:
        return InspectorConfig()
    return _inspector_config


def add_config_listener(listener: ConfigListener) -> None:
    """Call `listener` with the new config after every set_inspector_config()."""
    if listener not in _config_listeners:
        _config_listeners.append(listener)


def remove_config_listener(listener: ConfigListener) -> None:
    if listener in _config_listeners:
        _config_listeners.remove(listener)
