"""One-shot deferred continuation with a validity guard."""

import logging
from typing import Callable, Optional

from PyQt6.QtCore import QTimer

logger = logging.getLogger(__name__)

Scheduler = Callable[[int, Callable[[], None]], None]


def _qt_single_shot(delay_ms: int, callback: Callable[[], None]) -> None:
    QTimer.singleShot(delay_ms, callback)


class DeferredCall:
    """
    Run a handler once, after the current event has finished propagating.

    The guard is re-checked when the timer fires, so a continuation whose
    target was destroyed in the meantime silently does nothing. The only
    cancellation is `cancel()` or a failing guard.

    Usage:
        self._deferred_open = DeferredCall(
            delay_ms=100,
            handler=lambda: host.open_resource(path),
            guard=lambda: not sip.isdeleted(self),
        )
        self._deferred_open.schedule()
    """

    def __init__(
        self,
        delay_ms: int,
        handler: Callable[[], None],
        guard: Optional[Callable[[], bool]] = None,
        scheduler: Optional[Scheduler] = None,
    ):
        self._delay_ms = delay_ms
        self._handler = handler
        self._guard = guard
        self._scheduler = scheduler or _qt_single_shot
        self._pending = False

    @property
    def pending(self) -> bool:
        return self._pending

    def schedule(self) -> bool:
        """Schedule the handler. Returns False if one is already pending."""
        if self._pending:
            return False
        self._pending = True
        self._scheduler(self._delay_ms, self._fire)
        return True

    def cancel(self) -> None:
        """Drop the pending continuation; the timer still fires but does nothing."""
        self._pending = False

    def _fire(self) -> None:
        if not self._pending:
            return
        self._pending = False
        if self._guard is not None and not self._guard():
            logger.debug("Deferred call skipped: target no longer valid")
            return
        self._handler()
