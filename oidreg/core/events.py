"""
Change Notifier — Synchronous fan-out of "the namespace changed".

Subscribers are zero-argument callables invoked in registration order on
the thread that calls notify(). notify() returns only after every
subscriber has returned; a subscriber that raises stops the fan-out and
the exception reaches the caller.
"""

import logging
from typing import Callable, List

logger = logging.getLogger(__name__)

ChangeHandler = Callable[[], None]


class ChangeNotifier:
    """Ordered list of change subscribers."""

    def __init__(self):
        self._handlers: List[ChangeHandler] = []

    def subscribe(self, handler: ChangeHandler) -> ChangeHandler:
        """
        Register a handler. The same callable may be registered twice and
        will then be called twice.

        Returns:
            The handler, so this can be used as a decorator
        """
        if not callable(handler):
            raise TypeError("handler must be callable")
        self._handlers.append(handler)
        return handler

    def unsubscribe(self, handler: ChangeHandler) -> bool:
        """
        Remove the most recent registration of handler.

        Returns:
            True if removed, False if it was not registered
        """
        for index in range(len(self._handlers) - 1, -1, -1):
            if self._handlers[index] == handler:
                del self._handlers[index]
                return True
        return False

    def notify(self) -> None:
        # Snapshot so handlers may (un)subscribe while being notified
        handlers = list(self._handlers)
        if not handlers:
            return
        logger.debug(f"Notifying {len(handlers)} change subscriber(s)")
        for handler in handlers:
            handler()

    def __len__(self) -> int:
        return len(self._handlers)
