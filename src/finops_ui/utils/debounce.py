"""
Trailing-edge debouncer.

Each ``call`` cancels the pending timer and starts a new one, so only the last
call within the wait window runs. ``cancel`` drops the pending call, e.g. when
the owning view goes away. A call that already ran is not affected.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol


class Timer(Protocol):
    daemon: bool

    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[..., Timer]


@dataclass(slots=True)
class _Pending:
    fn: Callable[..., Any]
    args: tuple
    kwargs: dict = field(default_factory=dict)
    timer: Timer | None = None


class Debouncer:
    """
    Delay a callable until calls stop arriving for ``wait`` seconds.

    ``timer_factory`` has the ``threading.Timer`` signature and can be swapped
    for a manual timer in tests.
    """

    def __init__(self, wait: float, timer_factory: TimerFactory = threading.Timer) -> None:
        self.wait = wait
        self._timer_factory = timer_factory
        self._timer: Timer | None = None
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def call(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        """Schedule ``fn(*args, **kwargs)``, replacing any pending call."""
        pending = _Pending(fn, args, kwargs)
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            timer = self._timer_factory(self.wait, self._fire, args=(pending,))
            timer.daemon = True
            pending.timer = timer
            self._timer = timer
        timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _fire(self, pending: _Pending) -> None:
        with self._lock:
            # A newer call replaced this one after the timer had already fired.
            if self._timer is not pending.timer:
                return
            self._timer = None
        pending.fn(*pending.args, **pending.kwargs)
