"""UID resolver protocol and registry.

Editors only display resolution results; resolving an identifier to a
resource path belongs to the application. Register a resolver once at
startup:

    register_uid_resolver(MappingUidResolver({"uid://abc123": "res://icon.png"}))
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional

logger = logging.getLogger(__name__)

UID_PREFIX = "uid://"
_UID_PATTERN = re.compile(r"^uid://[a-z0-9]+$")


class ResolutionFailure(Enum):
    """Why an identifier could not be resolved. Rendered, never raised."""
    IS_EMPTY = "No Path Given"
    IS_MALFORMED = "Invalid UID"
    NOT_FOUND = "No Resource Found"
    UNRESOLVABLE = "Unresolvable UID"

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class ResolveResult:
    """Outcome of resolving one identifier."""
    ok: bool
    resolved_path: Optional[str] = None
    reason: Optional[ResolutionFailure] = None

    @classmethod
    def success(cls, resolved_path: str) -> "ResolveResult":
        return cls(ok=True, resolved_path=resolved_path)

    @classmethod
    def failure(cls, reason: ResolutionFailure) -> "ResolveResult":
        return cls(ok=False, reason=reason)


class UidResolverABC(ABC):
    """Abstract base class for UID resolvers."""

    @abstractmethod
    def resolve(self, identifier: Optional[str]) -> ResolveResult:
        """Resolve `identifier` to a resource path."""
        ...

    @abstractmethod
    def uid_for_path(self, path: str) -> Optional[str]:
        """UID text for a resource path, or None if the path has no UID."""
        ...


class MappingUidResolver(UidResolverABC):
    """
    Resolver backed by an in-memory UID table.

    Entries mapped to None are known UIDs whose resource can no longer be
    located; they resolve as UNRESOLVABLE.
    """

    def __init__(self, table: Optional[Mapping[str, Optional[str]]] = None):
        self._table: Dict[str, Optional[str]] = dict(table or {})

    def register(self, uid: str, path: Optional[str]) -> None:
        self._table[uid] = path

    def resolve(self, identifier: Optional[str]) -> ResolveResult:
        if not identifier:
            return ResolveResult.failure(ResolutionFailure.IS_EMPTY)
        if not _UID_PATTERN.match(identifier):
            return ResolveResult.failure(ResolutionFailure.IS_MALFORMED)
        if identifier not in self._table:
            return ResolveResult.failure(ResolutionFailure.NOT_FOUND)
        path = self._table[identifier]
        if path is None:
            return ResolveResult.failure(ResolutionFailure.UNRESOLVABLE)
        return ResolveResult.success(path)

    def uid_for_path(self, path: str) -> Optional[str]:
        for uid, mapped_path in self._table.items():
            if mapped_path == path:
                return uid
        return None


_uid_resolver: Optional[UidResolverABC] = None


def register_uid_resolver(resolver: UidResolverABC) -> None:
    """Register the global UID resolver."""
    global _uid_resolver
    _uid_resolver = resolver


def get_uid_resolver() -> UidResolverABC:
    """Get the registered UID resolver.

    Raises:
        RuntimeError: If no resolver was registered.
    """
    if _uid_resolver is None:
        raise RuntimeError("No UID resolver registered. Call register_uid_resolver(...).")
    return _uid_resolver
