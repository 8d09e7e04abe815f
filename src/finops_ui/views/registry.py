"""
Per-session controller registry.

Reflex state classes are serialized between events, so the live controllers
(store, debouncers, row trackers) are kept here instead, keyed by the browser
session's client token. Each session owns one ``Store`` shared by all of its
list screens. Sessions idle for longer than ``FINOPS_UI_SESSION_IDLE`` seconds
are dropped on the next lookup.
"""

import threading
import time
from typing import Any, Callable, Mapping

from finops_ui import config
from finops_ui.lib import logs
from finops_ui.services import get_service
from finops_ui.store.actions import CollectionActions
from finops_ui.store.store import Store
from finops_ui.views.list_view import ListView

LOG = logs.logger(__file__)


class Session:
    """
    Controllers for one browser session.

    Attributes:
        store: The session's application state container.
        kind: Service implementation override (``None`` uses configuration).
    """

    def __init__(self, kind: str | None = None) -> None:
        self.store = Store()
        self.kind = kind
        self._views: dict[str, ListView] = {}
        self._lock = threading.Lock()

    def view(
        self, resource: str, slice_name: str | None = None, filters: Mapping[str, Any] | None = None
    ) -> ListView:
        """
        Return the controller for ``resource``, creating it on first use.

        ``slice_name`` lets one resource back several screens, e.g. the
        transactions of a single profile next to the full list.
        """
        name = slice_name or resource
        with self._lock:
            view = self._views.get(name)
            if view is None:
                actions = CollectionActions(
                    self.store, name, get_service(resource, self.kind), filters=filters
                )
                view = ListView(actions)
                self._views[name] = view
            return view

    def close(self) -> None:
        with self._lock:
            for view in self._views.values():
                view.close()
            self._views.clear()


class SessionRegistry:
    """
    Sessions by client token.

    Every lookup stamps the session as seen and drops the ones idle for longer
    than ``idle_seconds``, closing their controllers.
    """

    def __init__(
        self,
        idle_seconds: float = config.SESSION_IDLE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.idle_seconds = idle_seconds
        self._clock = clock
        self._sessions: dict[str, Session] = {}
        self._seen: dict[str, float] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def session(self, token: str) -> Session:
        now = self._clock()
        with self._lock:
            stale = [
                key for key, seen in self._seen.items() if key != token and now - seen > self.idle_seconds
            ]
            expired = [self._sessions.pop(key) for key in stale]
            for key in stale:
                del self._seen[key]
            current = self._sessions.get(token)
            if current is None:
                LOG.info("session - new client token:%s", token)
                current = self._sessions[token] = Session()
            self._seen[token] = now
        for session in expired:
            session.close()
        if expired:
            LOG.info("session - dropped %d idle sessions", len(expired))
        return current

    def drop(self, token: str) -> None:
        with self._lock:
            current = self._sessions.pop(token, None)
            self._seen.pop(token, None)
        if current is not None:
            current.close()


_REGISTRY = SessionRegistry()


def session(token: str) -> Session:
    """Return the session for ``token``, creating it on first use."""
    return _REGISTRY.session(token)


def drop_session(token: str) -> None:
    _REGISTRY.drop(token)
