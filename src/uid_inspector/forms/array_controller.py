"""
Array controller for UID array properties.

Owns the authoritative value list of a string-array property, keeps it in
step with the host's persisted array, drives the element factory to create,
move and destroy element editors, and keeps pagination consistent.

Three structures must agree at every point outside a method call:
- the value list (`_values`) and the record list (`_records`), index aligned
- the identity maps (`_index_by_identity`, `_records_by_identity`,
  `_placement`), keyed by exactly the live identities
- the containers, which together hold every element exactly once

Data flow:
    host -> refresh() -> reconcile -> paginate          (never emits)
    element edit -> set_value_at_index() -> changed     (no pagination pass)
    add / remove / resize -> paginate -> changed
    changed -> host persists -> eventually refresh() again
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from uid_inspector.core.element_record import ElementRecord
from uid_inspector.core.paginator import INLINE_CONTAINER, PaginationMode, Paginator
from uid_inspector.exceptions import InvalidElementStateError, UnknownIdentityError
from uid_inspector.protocols.element_factory import ElementFactoryABC
from uid_inspector.protocols.inspector_config import InspectorConfig, get_inspector_config
from uid_inspector.protocols.page_host import PageHostABC
from uid_inspector.protocols.persisted_array import PersistedArrayABC
from uid_inspector.services.flag_context_manager import FlagContextManager

logger = logging.getLogger(__name__)

ChangedCallback = Callable[[List[str]], None]

DEFAULT_TYPE_NAME = "PackedStringArray"


class ArrayController:
    """
    Authoritative model of one edited UID array.

    No exception escapes a public method: unknown identities are logged (in
    verbose mode) and ignored, dead element handles are dropped with a
    warning, and failing `changed` subscribers are logged.
    """

    def __init__(
        self,
        factory: ElementFactoryABC,
        host: PageHostABC,
        persisted: Optional[PersistedArrayABC] = None,
        type_name: str = DEFAULT_TYPE_NAME,
        config: Optional[InspectorConfig] = None,
    ):
        self._factory = factory
        self._host = host
        self._persisted = persisted
        self._type_name = type_name

        config = config or get_inspector_config()
        self._verbose = config.verbose_logging
        self._paginator = Paginator(config.capacity_per_page)

        # Set while host-originated updates are applied
        self._updating = False

        self._values: List[str] = []
        self._records: List[ElementRecord] = []
        self._index_by_identity: Dict[int, int] = {}
        self._records_by_identity: Dict[int, ElementRecord] = {}
        # identity -> container number (0 inline, 1..N overflow pages)
        self._placement: Dict[int, int] = {}
        # overflow page containers, page n at position n - 1
        self._pages: List[Any] = []

        self._listeners: List[ChangedCallback] = []

        self._factory.subscribe(self.set_value_at_index, self.remove_element)
        self._update_count_display()

    # ========== OBSERVERS ==========

    def subscribe(self, callback: ChangedCallback) -> None:
        """Register `callback(values)` for the composite "array changed" event."""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def unsubscribe(self, callback: ChangedCallback) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def dispose(self) -> None:
        """Detach from the factory and drop all subscribers."""
        self._factory.unsubscribe(self.set_value_at_index, self.remove_element)
        self._listeners.clear()

    # ========== READ ACCESS ==========

    @property
    def values(self) -> List[str]:
        return list(self._values)

    @property
    def records(self) -> Tuple[ElementRecord, ...]:
        return tuple(self._records)

    @property
    def count(self) -> int:
        return len(self._values)

    @property
    def capacity_per_page(self) -> int:
        return self._paginator.capacity_per_page

    @property
    def page_count(self) -> int:
        """Required page count for the current size (0 or 1 means inline)."""
        return self._paginator.compute_page_count(len(self._values))

    @property
    def overflow_page_count(self) -> int:
        """Overflow containers currently alive."""
        return len(self._pages)

    @property
    def mode(self) -> PaginationMode:
        return PaginationMode.PAGINATED if self._pages else PaginationMode.INLINE

    @property
    def title(self) -> str:
        return f"{self._type_name} (size {len(self._values)})"

    @property
    def is_updating(self) -> bool:
        return self._updating

    def identity_at(self, page_index: int) -> Optional[int]:
        """Identity of the element at `page_index`, or None if out of range."""
        if not 0 <= page_index < len(self._records):
            return None
        return self._records[page_index].identity

    def placement_of(self, identity: int) -> Optional[int]:
        return self._placement.get(identity)

    def container_members(self, container_number: int) -> List[int]:
        """Identities held by a container, in flat order."""
        return [
            record.identity for record in self._records
            if self._placement.get(record.identity) == container_number
        ]

    def is_consistent(self) -> bool:
        """Check every bookkeeping invariant. Logs each violation found."""
        problems = []
        if len(self._values) != len(self._records):
            problems.append(f"{len(self._values)} values for {len(self._records)} records")
        live = {record.identity for record in self._records}
        for name, mapping in (("index", self._index_by_identity),
                              ("record", self._records_by_identity),
                              ("placement", self._placement)):
            if set(mapping) != live:
                problems.append(f"{name} map keys differ from live identities")
        for position, record in enumerate(self._records):
            if record.page_index != position:
                problems.append(f"record {record.identity} has page_index {record.page_index} at {position}")
            if position < len(self._values) and self._values[position] != record.value:
                problems.append(f"value mismatch at {position}")
            if self._index_by_identity.get(record.identity) != position:
                problems.append(f"index map disagrees for {record.identity}")
            expected = self._paginator.target_container(position, self.mode)
            if self._placement.get(record.identity) != expected:
                problems.append(f"record {record.identity} in container "
                                f"{self._placement.get(record.identity)}, expected {expected}")
        for problem in problems:
            logger.error(f"ArrayController inconsistency: {problem}")
        return not problems

    # ========== HOST-ORIGINATED ==========

    def refresh(self, persisted: Optional[Sequence[str]] = None) -> None:
        """
        Reconcile the element count with the persisted array.

        Equal lengths are a no-op so edits already in flight are not
        clobbered. Longer persisted arrays append their tail values; shorter
        ones trim trailing elements. Never emits `changed`.

        Args:
            persisted: Saved array; read from the PersistedArray when omitted.
        """
        if self._updating:
            if self._verbose:
                logger.info("ArrayController.refresh ignored: already updating")
            return

        if persisted is None:
            if self._persisted is None:
                logger.error("ArrayController.refresh: no persisted array to read from")
                return
            persisted = self._persisted.get()
            if persisted is None:
                logger.error("ArrayController.refresh: persisted value is not a string array")
                return

        next_values = list(persisted)
        if len(next_values) == len(self._values):
            return

        with FlagContextManager.updating_context(self):
            self._reconcile(next_values)
            self._paginate()
            self._update_count_display()

        if self._verbose:
            logger.info(f"ArrayController.refresh: reconciled to {len(self._values)} elements")

    def reset(self) -> None:
        """Remove every element without emitting (the host reverted the property)."""
        with FlagContextManager.updating_context(self):
            self._reconcile([])
            self._paginate()
            self._update_count_display()

    def set_capacity_per_page(self, capacity: int) -> None:
        """Change the page capacity and recompute pagination. Values are untouched."""
        self._paginator.capacity_per_page = capacity
        self._paginate()
        # Pagination may have dropped dead elements
        self._update_count_display()

    def apply_config(self, config: InspectorConfig) -> None:
        """Pick up changed host settings."""
        self._verbose = config.verbose_logging
        if config.capacity_per_page != self._paginator.capacity_per_page:
            self.set_capacity_per_page(config.capacity_per_page)

    # ========== USER-ORIGINATED ==========

    def set_value_at_index(self, identity: int, new_value: str) -> None:
        """Record an edit of one element. Emits only when the value changed."""
        if self._updating:
            return

        try:
            index = self._lookup_index(identity)
        except UnknownIdentityError as e:
            if self._verbose:
                logger.info(f"ArrayController.set_value_at_index ignored: {e}")
            return

        if self._values[index] == new_value:
            return

        self._values[index] = new_value
        self._records[index].value = new_value
        self._emit_changed()

    def add_element(self, initial_value: str = "") -> Optional[int]:
        """Append one element and return its identity."""
        if self._updating:
            return None

        identity = self._append_record(initial_value)
        self._paginate()
        self._update_count_display()
        self._emit_changed()
        return identity

    def remove_element(self, identity: int) -> None:
        """
        Remove one element and shift later elements down by one.

        An unknown identity is expected when a removal races a refresh; it
        is logged in verbose mode and ignored.
        """
        if self._updating:
            return

        try:
            index = self._lookup_index(identity)
        except UnknownIdentityError as e:
            if self._verbose:
                logger.info(f"ArrayController.remove_element ignored: {e}")
            return

        self._drop_record(index)
        self._reindex_from(index)
        self._paginate()
        self._update_count_display()
        self._emit_changed()

    def resize(self, count: int) -> None:
        """Grow with empty values or trim the tail to `count` elements, then emit."""
        if self._updating:
            return

        count = max(0, int(count))
        self._host.set_folded(count == 0)
        if count == len(self._values):
            return

        self._reconcile(self._values[:count] + [""] * max(0, count - len(self._values)))
        self._paginate()
        self._update_count_display()
        self._emit_changed()

    # ========== INTERNALS ==========

    def _lookup_index(self, identity: int) -> int:
        try:
            return self._index_by_identity[identity]
        except KeyError:
            raise UnknownIdentityError(identity) from None

    def _container(self, container_number: int) -> Any:
        if container_number == INLINE_CONTAINER:
            return self._host.inline_container()
        return self._pages[container_number - 1]

    def _reconcile(self, next_values: List[str]) -> None:
        """Bring the element count to len(next_values), touching only the tail."""
        current = len(self._values)
        if len(next_values) > current:
            for value in next_values[current:]:
                self._append_record(value)
        else:
            for _ in range(current - len(next_values)):
                self._drop_record(len(self._records) - 1)

    def _append_record(self, value: str) -> int:
        # Appends go to the last page when paginated, else to the inline container
        container_number = len(self._pages)
        identity, _handle = self._factory.create(value, self._container(container_number))
        page_index = len(self._records)

        record = ElementRecord(identity=identity, value=value, page_index=page_index)
        self._records.append(record)
        self._values.append(value)
        self._index_by_identity[identity] = page_index
        self._records_by_identity[identity] = record
        self._placement[identity] = container_number

        self._factory.set_page_index(identity, page_index)
        return identity

    def _forget_record(self, index: int) -> ElementRecord:
        record = self._records.pop(index)
        self._values.pop(index)
        del self._index_by_identity[record.identity]
        del self._records_by_identity[record.identity]
        del self._placement[record.identity]
        return record

    def _drop_record(self, index: int) -> None:
        identity = self._records[index].identity
        self._factory.destroy(identity)
        self._forget_record(index)

    def _reindex_from(self, start: int) -> None:
        for position in range(start, len(self._records)):
            record = self._records[position]
            record.page_index = position
            self._index_by_identity[record.identity] = position
            self._factory.set_page_index(record.identity, position)

    def _check_element_state(self, record: ElementRecord) -> None:
        if not self._factory.is_valid(record.identity):
            raise InvalidElementStateError(record.identity, record.page_index)

    def _drop_invalid_elements(self) -> None:
        first_dropped = None
        position = 0
        while position < len(self._records):
            try:
                self._check_element_state(self._records[position])
            except InvalidElementStateError as e:
                logger.warning(f"ArrayController dropping element: {e}")
                self._forget_record(position)
                if first_dropped is None:
                    first_dropped = position
                continue
            position += 1

        if first_dropped is not None:
            self._reindex_from(first_dropped)

    def _paginate(self) -> None:
        """
        Bring containers and placement in line with the current size.

        Runs on every count or capacity change, whether or not the overflow
        view is visible. Pages are added before and removed after moving
        elements, so no element is ever inside a container being freed.
        """
        self._drop_invalid_elements()

        target_pages = self._paginator.compute_page_count(len(self._records))
        mode = self._paginator.mode_for(target_pages)
        delta = self._paginator.plan_container_delta(
            len(self._pages), self._paginator.overflow_count(target_pages)
        )

        for _ in range(delta.add):
            self._pages.append(self._host.add_page(len(self._pages) + 1))

        moves = self._paginator.assign_elements_to_pages(
            [record.identity for record in self._records], self._placement
        )
        for move in moves:
            self._factory.reparent(move.identity, self._container(move.target))
            self._placement[move.identity] = move.target

        for _ in range(delta.remove):
            self._host.remove_page(self._pages.pop())

        self._host.show_mode(mode)

        if self._verbose and (moves or not delta.is_empty):
            logger.info(
                f"ArrayController paginate: {len(self._records)} elements, mode={mode.value}, "
                f"pages +{delta.add}/-{delta.remove}, {len(moves)} moves"
            )

    def _update_count_display(self) -> None:
        self._host.update_count(self.title, len(self._values))

    def _emit_changed(self) -> None:
        for callback in list(self._listeners):
            try:
                callback(list(self._values))
            except Exception:
                logger.exception(f"ArrayController changed subscriber {callback!r} failed")
