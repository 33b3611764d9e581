"""Per-key coalescing of concurrent calls.

Rendering a LaLiga page costs several seconds of browser time, so when many
requests miss the cache for the same competition only the first one fetches.
The others wait for it and share its result (or its exception).
"""
from __future__ import annotations

import copy
import threading
from typing import Callable, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class _Call(Generic[T]):
    def __init__(self) -> None:
        self.done = threading.Event()
        self.result: Optional[T] = None
        self.error: Optional[BaseException] = None


def _copy_for_waiter(error: BaseException) -> BaseException:
    """Fresh exception per waiting thread so tracebacks are not shared."""
    try:
        clone = copy.copy(error)
    except TypeError:
        # not rebuildable from its args; fall back to a cleared traceback
        return error.with_traceback(None)
    clone.__cause__ = error.__cause__
    return clone.with_traceback(None)


class SingleFlight(Generic[T]):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._calls: Dict[str, _Call[T]] = {}

    def do(self, key: str, fn: Callable[[], T]) -> T:
        with self._lock:
            call = self._calls.get(key)
            leader = call is None
            if call is None:
                call = _Call()
                self._calls[key] = call

        if not leader:
            call.done.wait()
            if call.error is not None:
                raise _copy_for_waiter(call.error)
            return call.result  # type: ignore[return-value]

        try:
            call.result = fn()
        except BaseException as exc:
            call.error = exc
            raise
        finally:
            with self._lock:
                self._calls.pop(key, None)
            call.done.set()
        return call.result

    def in_flight(self, key: str) -> bool:
        with self._lock:
            return key in self._calls


__all__ = ["SingleFlight"]
