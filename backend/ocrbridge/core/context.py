"""Caller-supplied cancellation and deadline handle for provider calls."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from ocrbridge.domain.errors import OCRCancelledError, OCRDeadlineExceeded

logger = logging.getLogger(__name__)


class _Cancellation:
    """Cancel flag and callbacks shared by a context and its children."""

    def __init__(self) -> None:
        self.event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: list[Callable[[], None]] = []

    def cancel(self) -> None:
        with self._lock:
            if self.event.is_set():
                return
            self.event.set()
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            try:
                callback()
            except Exception:
                logger.exception("Cancel callback %r failed", callback)

    def add(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if not self.event.is_set():
                self._callbacks.append(callback)
                return
        callback()

    def remove(self, callback: Callable[[], None]) -> None:
        with self._lock:
            try:
                self._callbacks.remove(callback)
            except ValueError:
                pass


class CallContext:
    """Cancellation flag plus an optional monotonic deadline.

    ``cancel()`` may be called from any thread and runs the callbacks
    registered with ``add_done_callback``. Derived contexts created with
    ``child()`` share the parent's cancellation.
    """

    def __init__(self, timeout: float | None = None, *, _cancellation: _Cancellation | None = None,
                 _deadline: float | None = None):
        self._cancellation = _cancellation or _Cancellation()
        self._deadline = _deadline
        if timeout is not None:
            deadline = time.monotonic() + max(0.0, float(timeout))
            if self._deadline is None or deadline < self._deadline:
                self._deadline = deadline

    @classmethod
    def background(cls) -> CallContext:
        return cls()

    def child(self, timeout: float | None = None) -> CallContext:
        return CallContext(timeout, _cancellation=self._cancellation, _deadline=self._deadline)

    def cancel(self) -> None:
        self._cancellation.cancel()

    def add_done_callback(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` on cancellation, immediately if already cancelled.

        Deadlines do not trigger callbacks; waiters use ``remaining()``.
        """
        self._cancellation.add(callback)

    def remove_done_callback(self, callback: Callable[[], None]) -> None:
        self._cancellation.remove(callback)

    @property
    def cancelled(self) -> bool:
        return self._cancellation.event.is_set()

    @property
    def deadline(self) -> float | None:
        return self._deadline

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> float | None:
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def raise_if_done(self) -> None:
        if self.cancelled:
            raise OCRCancelledError("context cancelled")
        if self.expired:
            raise OCRDeadlineExceeded("context deadline exceeded")
