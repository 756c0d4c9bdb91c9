"""Thread-safe progress and cancellation tracking for decode operations."""

from __future__ import annotations

import threading
from typing import Callable, Optional

from phasm.errors import OperationCancelledError

ProgressCallback = Callable[[int, int], None]


class ProgressTracker:
    """Step counter with a total and a cancellation flag.

    A total of 0 means indeterminate: steps then advance freely. With a
    known total, ``advance`` never goes past ``total - 1``; only ``finish``
    reaches the total.
    """

    def __init__(self, callback: Optional[ProgressCallback] = None) -> None:
        self._lock = threading.Lock()
        self._step = 0
        self._total = 0
        self._cancelled = False
        self.callback = callback

    def _notify(self) -> None:
        if self.callback is not None:
            step, total = self.get()
            self.callback(step, total)

    def init(self, total: int) -> None:
        """Reset the step to 0, set the total and clear cancellation."""
        with self._lock:
            self._cancelled = False
            self._step = 0
            self._total = total
        self._notify()

    def set_total(self, total: int) -> None:
        """Change the total without resetting the current step."""
        with self._lock:
            self._total = total
        self._notify()

    def cancel(self) -> None:
        """Request cancellation of the current operation."""
        with self._lock:
            self._cancelled = True

    def is_cancelled(self) -> bool:
        with self._lock:
            return self._cancelled

    def check_cancelled(self) -> None:
        """Raise OperationCancelledError if cancellation was requested."""
        if self.is_cancelled():
            raise OperationCancelledError()

    def advance(self) -> None:
        """Advance by one step, capped below the total when one is known."""
        with self._lock:
            if self._total == 0 or self._step + 1 < self._total:
                self._step += 1
        self._notify()

    def get(self) -> tuple[int, int]:
        """Return ``(step, total)``."""
        with self._lock:
            return self._step, self._total

    def finish(self) -> None:
        """Mark progress as complete (step equals total)."""
        with self._lock:
            self._step = self._total
        self._notify()


_default = ProgressTracker()


def init(total: int) -> None:
    _default.init(total)


def set_total(total: int) -> None:
    _default.set_total(total)


def cancel() -> None:
    _default.cancel()


def is_cancelled() -> bool:
    return _default.is_cancelled()


def check_cancelled() -> None:
    _default.check_cancelled()


def advance() -> None:
    _default.advance()


def get() -> tuple[int, int]:
    return _default.get()


def finish() -> None:
    _default.finish()