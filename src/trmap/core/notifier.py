from __future__ import annotations

import logging
from typing import Callable, List

from ..errors import ReentrantMutationError

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class ChangeNotifier:
    """Coarse "map changed" signal.

    Listeners take no arguments and are called synchronously, in subscription
    order, before the mutating call returns. There is no payload: a listener
    re-reads whatever it needs from the map. While a notification is being
    delivered the map refuses further mutation (see :meth:`ensure_mutable`).
    """

    def __init__(self) -> None:
        self._listeners: List[Listener] = []
        self._delivering = False
        self._revision = 0

    @property
    def revision(self) -> int:
        """Number of notifications raised so far; poll this as a dirty flag."""
        return self._revision

    @property
    def delivering(self) -> bool:
        return self._delivering

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)
            logger.debug("Subscribed listener %s", listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)
            logger.debug("Unsubscribed listener %s", listener)

    def ensure_mutable(self) -> None:
        """Raise if a mutation is attempted from inside a listener."""
        if self._delivering:
            raise ReentrantMutationError("map mutated from inside a change notification")

    def notify(self) -> None:
        self._revision += 1
        listeners = list(self._listeners)
        if not listeners:
            return
        self._delivering = True
        try:
            for listener in listeners:
                try:
                    listener()
                except ReentrantMutationError:
                    raise
                except Exception as exc:
                    logger.exception("Error in change listener %s: %s", listener, exc)
        finally:
            self._delivering = False
