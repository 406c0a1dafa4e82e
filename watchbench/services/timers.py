"""
Timer primitives built on the running event loop.

Two flavors are provided: fire-and-forget callbacks (``set_timeout`` /
``clear_timeout``) and a suspend-until-elapsed future (``sleep``) that can be
cancelled through a shared ``AbortSignal``.
"""
import asyncio
from typing import Any, Callable, Dict, Optional


class AbortError(Exception):
    """Raised into a pending ``sleep`` when its signal is aborted."""

    def __init__(self, reason: Any = None):
        super().__init__("The operation was aborted" if reason is None else reason)
        self.reason = reason


class AbortSignal:
    """Broadcast cancellation token shared by many pending timers."""

    def __init__(self):
        self.aborted = False
        self.reason: Any = None
        # dict keeps insertion order and gives O(1) removal
        self._listeners: Dict[Callable[[Any], None], None] = {}

    def add_listener(self, listener: Callable[[Any], None]) -> None:
        self._listeners[listener] = None

    def remove_listener(self, listener: Callable[[Any], None]) -> None:
        self._listeners.pop(listener, None)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def abort(self, reason: Any = None) -> None:
        """Abort once; every registered listener is called with the reason."""
        if self.aborted:
            return
        self.aborted = True
        self.reason = reason
        # listeners unregister themselves while we iterate
        for listener in list(self._listeners):
            listener(reason)


def set_timeout(delay: float, callback: Callable[..., Any], *args: Any) -> asyncio.TimerHandle:
    """Schedule ``callback(*args)`` after ``delay`` seconds."""
    return asyncio.get_running_loop().call_later(delay, callback, *args)


def clear_timeout(handle: Optional[asyncio.TimerHandle]) -> None:
    """Cancel a scheduled callback. Safe on fired or already cancelled handles."""
    if handle is not None:
        handle.cancel()


def sleep(delay: float, value: Any = None, *, signal: Optional[AbortSignal] = None) -> asyncio.Future:
    """Return a future resolving to ``value`` after ``delay`` seconds.

    If ``signal`` aborts first, the timer entry is cancelled and the future
    fails with ``AbortError``.
    """
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    if signal is not None and signal.aborted:
        future.set_exception(AbortError(signal.reason))
        return future

    def _elapse():
        if signal is not None:
            signal.remove_listener(_abort)
        if not future.done():
            future.set_result(value)

    def _abort(reason):
        signal.remove_listener(_abort)
        handle.cancel()
        if not future.done():
            future.set_exception(AbortError(reason))

    handle = loop.call_later(delay, _elapse)
    if signal is not None:
        signal.add_listener(_abort)

    return future
