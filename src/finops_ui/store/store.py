"""
Application state container.

Holds one ``CollectionState`` per named slice. ``dispatch`` runs the pure
reducer under a lock so transitions are applied one at a time, then notifies
subscribers with the slice name and its new state.
"""

import itertools
import threading
from typing import Callable

from finops_ui.lib import logs
from finops_ui.store.slice import Action, CollectionState, reduce

LOG = logs.logger(__file__)

Listener = Callable[[str, CollectionState, CollectionState], None]


class Store:
    """
    Named collection slices with synchronous dispatch and pub/sub.

    Listeners are called as ``listener(name, previous, current)`` after every
    dispatch that changed the slice.
    """

    def __init__(self) -> None:
        self._slices: dict[str, CollectionState] = {}
        self._listeners: list[Listener] = []
        self._lock = threading.RLock()
        self._tokens = itertools.count(1)

    def register(self, name: str, initial: CollectionState) -> None:
        with self._lock:
            self._slices.setdefault(name, initial)

    def get_state(self, name: str) -> CollectionState:
        with self._lock:
            try:
                return self._slices[name]
            except KeyError:
                raise KeyError(f"Unknown slice: {name}") from None

    def dispatch(self, name: str, action: Action) -> CollectionState:
        """Apply ``action`` to slice ``name`` and return the new state."""
        with self._lock:
            previous = self.get_state(name)
            current = reduce(previous, action)
            self._slices[name] = current
            listeners = list(self._listeners)
        LOG.debug("dispatch - slice:%s kind:%s phase:%s", name, action.kind.value,
                  action.phase.value if action.phase else None)
        if current is not previous:
            self._notify(listeners, name, previous, current)
        return current

    def next_token(self) -> int:
        """Return a new, strictly increasing query token."""
        with self._lock:
            return next(self._tokens)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a function that unsubscribes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    @staticmethod
    def _notify(
        listeners: list[Listener], name: str, previous: CollectionState, current: CollectionState
    ) -> None:
        for listener in listeners:
            try:
                listener(name, previous, current)
            except Exception:
                LOG.exception("Store listener failed for slice %s", name)
