"""
Protocol definitions and adapters.

ABC-based contracts for widgets and for the external collaborators of the
inspector (element factory, page host, persisted values, UID resolver,
editor host), plus the global configuration registry.
"""

from .widget_protocols import (
    ValueGettable,
    ValueSettable,
    PlaceholderCapable,
    ChangeSignalEmitter,
)
from .widget_adapters import LineEditAdapter, SpinBoxAdapter, PyQtWidgetMeta
from .element_factory import ElementFactoryABC
from .page_host import PageHostABC
from .persisted_array import (
    PersistedArrayABC,
    PersistedValueABC,
    CallbackPersistedArray,
    CallbackPersistedValue,
)
from .uid_resolver import (
    UidResolverABC,
    MappingUidResolver,
    ResolveResult,
    ResolutionFailure,
    register_uid_resolver,
    get_uid_resolver,
)
from .editor_host import EditorHostABC, register_editor_host, get_editor_host
from .inspector_config import (
    InspectorConfig,
    PressOption,
    set_inspector_config,
    get_inspector_config,
    add_config_listener,
    remove_config_listener,
)

__all__ = [
    "ValueGettable",
    "ValueSettable",
    "PlaceholderCapable",
    "ChangeSignalEmitter",
    "LineEditAdapter",
    "SpinBoxAdapter",
    "PyQtWidgetMeta",
    "ElementFactoryABC",
    "PageHostABC",
    "PersistedArrayABC",
    "PersistedValueABC",
    "CallbackPersistedArray",
    "CallbackPersistedValue",
    "UidResolverABC",
    "MappingUidResolver",
    "ResolveResult",
    "ResolutionFailure",
    "register_uid_resolver",
    "get_uid_resolver",
    "EditorHostABC",
    "register_editor_host",
    "get_editor_host",
    "InspectorConfig",
    "PressOption",
    "set_inspector_config",
    "get_inspector_config",
    "add_config_listener",
    "remove_config_listener",
]
