# SPDX-License-Identifier: MIT

import logging
from typing import Callable, Optional

from gantry.model.drag_state import PointerEvent

logger = logging.getLogger(__name__)

PointerHandler = Callable[[PointerEvent], None]


class PointerSubscription:
    """
    Handle for one handler registered on a PointerScope.

    Releasing is idempotent; the handler is removed the first time and later
    calls do nothing. Usable as a context manager.
    """

    def __init__(self, scope: "PointerScope", handler: PointerHandler) -> None:
        self._scope = scope
        self._handler: Optional[PointerHandler] = handler

    @property
    def active(self) -> bool:
        return self._handler is not None

    def release(self) -> None:
        if self._handler is None:
            return
        self._scope._remove(self._handler)
        self._handler = None

    def __enter__(self) -> "PointerSubscription":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()


class PointerScope:
    """
    Window-wide pointer listener registry.

    Move and up events are delivered here regardless of which bar (if any)
    is under the pointer, so a drag keeps tracking once the pointer leaves
    the bar it started on.
    """

    def __init__(self) -> None:
        self._handlers: list[PointerHandler] = []

    @property
    def listener_count(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: PointerHandler) -> PointerSubscription:
        self._handlers.append(handler)
        logger.debug("pointer listener added (%d active)", len(self._handlers))
        return PointerSubscription(self, handler)

    def dispatch(self, event: PointerEvent) -> None:
        # Handlers may release themselves while handling an up event
        for handler in list(self._handlers):
            handler(event)

    def _remove(self, handler: PointerHandler) -> None:
        self._handlers.remove(handler)
        logger.debug("pointer listener removed (%d active)", len(self._handlers))
