"""
Watchdogs that warn when a unit of work runs past configured thresholds.

Both wrappers behave the same from the outside; they differ only in how the
warning timers are armed and torn down:

* ``CallbackWatchdog`` keeps one timer handle per threshold and cancels each
  handle directly.
* ``SignalWatchdog`` starts one cancellable sleep per threshold, all listening
  on a single ``AbortSignal``, and tears down by aborting that signal once.
"""
import asyncio
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

from watchbench.config import TIMEOUT_WARNING_TIMES
from watchbench.models.schemas import WarningEvent
from watchbench.services.timers import AbortError, AbortSignal, clear_timeout, set_timeout, sleep

UnitOfWork = Callable[[], Awaitable[Any]]
WarningHandler = Callable[[WarningEvent], Any]


class CallbackWatchdog:
    """One fire-and-forget timer per threshold."""

    def __init__(self, on_warning: Optional[WarningHandler], timeout_warning_times: Iterable[float]):
        self.on_warning = on_warning
        self.timeout_warning_times = tuple(timeout_warning_times)
        self.handles: List[asyncio.TimerHandle] = []

    def _fire(self, timeout_time: float) -> None:
        if self.on_warning is not None:
            self.on_warning(WarningEvent(timeout_time=timeout_time))

    def arm(self) -> None:
        self.handles = []
        for timeout_time in self.timeout_warning_times:
            self.handles.append(set_timeout(timeout_time, self._fire, timeout_time))

    def disarm(self) -> None:
        for handle in self.handles:
            clear_timeout(handle)


class SignalWatchdog:
    """Cancellable sleeps sharing one abort signal."""

    def __init__(self, on_warning: Optional[WarningHandler], timeout_warning_times: Iterable[float]):
        self.on_warning = on_warning
        self.timeout_warning_times = tuple(timeout_warning_times)
        self.signal = AbortSignal()

    def _settle(self, future: asyncio.Future) -> None:
        exc = future.exception()
        if isinstance(exc, AbortError):
            # expected for every threshold that did not elapse
            return
        if exc is not None:
            raise exc
        if self.on_warning is not None:
            self.on_warning(future.result())

    def arm(self) -> None:
        for timeout_time in self.timeout_warning_times:
            future = sleep(
                timeout_time,
                WarningEvent(timeout_time=timeout_time),
                signal=self.signal
            )
            future.add_done_callback(self._settle)

    def disarm(self) -> None:
        self.signal.abort()


async def _run_guarded(watchdog, unit_of_work: UnitOfWork) -> Any:
    try:
        watchdog.arm()
        return await unit_of_work()
    finally:
        watchdog.disarm()


async def wrap_with_callback_watchdog(
    unit_of_work: UnitOfWork,
    on_warning: Optional[WarningHandler] = None,
    timeout_warning_times: Iterable[float] = TIMEOUT_WARNING_TIMES
) -> Any:
    """Run ``unit_of_work`` guarded by per-threshold timer handles."""
    return await _run_guarded(CallbackWatchdog(on_warning, timeout_warning_times), unit_of_work)


async def wrap_with_signal_watchdog(
    unit_of_work: UnitOfWork,
    on_warning: Optional[WarningHandler] = None,
    timeout_warning_times: Iterable[float] = TIMEOUT_WARNING_TIMES
) -> Any:
    """Run ``unit_of_work`` guarded by sleeps that share one abort signal."""
    return await _run_guarded(SignalWatchdog(on_warning, timeout_warning_times), unit_of_work)


WATCHDOG_VARIANTS: Dict[str, Callable[..., Awaitable[Any]]] = {
    "callback": wrap_with_callback_watchdog,
    "signal": wrap_with_signal_watchdog,
}
