"""Per-screen request state: the in-flight flag and the last user-visible text.

One controller belongs to one screen instance. The presentation layer
subscribes to changes; it never mutates the state directly.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, replace

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RequestState:
    in_flight: bool = False
    last_error: str | None = None
    last_notice: str | None = None


Listener = Callable[[RequestState], None]


class RequestStateController:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._state = RequestState()
        self._active = True
        self._listeners: list[Listener] = []

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def in_flight(self) -> bool:
        return self._state.in_flight

    @property
    def active(self) -> bool:
        """False once the owning screen has been disposed."""

        return self._active

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""

        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def _set(self, state: RequestState) -> list[Listener]:
        # Caller holds the lock; returns the listeners to call once it is released.
        self._state = state
        return list(self._listeners)

    @staticmethod
    def _publish(state: RequestState, listeners: list[Listener]) -> None:
        for listener in listeners:
            try:
                listener(state)
            except Exception:
                logger.exception("Request state listener failed")

    def begin(self) -> bool:
        """Mark a submission in flight.

        Returns False (busy) if one is already in flight or the screen is gone.
        """

        state = RequestState(in_flight=True)
        with self._lock:
            if not self._active or self._state.in_flight:
                return False
            listeners = self._set(state)
        self._publish(state, listeners)
        return True

    def complete(self) -> None:
        with self._lock:
            if not self._active or not self._state.in_flight:
                return
            state = replace(self._state, in_flight=False)
            listeners = self._set(state)
        self._publish(state, listeners)

    def fail(self, message: str) -> None:
        with self._lock:
            if not self._active:
                return
            state = replace(self._state, last_error=message, last_notice=None)
            listeners = self._set(state)
        self._publish(state, listeners)

    def notify(self, message: str) -> None:
        with self._lock:
            if not self._active:
                return
            state = replace(self._state, last_notice=message)
            listeners = self._set(state)
        self._publish(state, listeners)

    def dispose(self) -> None:
        """Tear down with the screen. Later mutations are ignored."""

        with self._lock:
            self._active = False
            self._state = RequestState()
            self._listeners.clear()

    @contextmanager
    def submission(self) -> Iterator[None]:
        """Clear the in-flight flag on every exit path of an already-begun submission."""

        try:
            yield
        finally:
            self.complete()
