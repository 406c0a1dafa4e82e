"""
Named wall-clock timers that report through logging.
"""
import logging
import time
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


def format_duration(seconds: float) -> str:
    """Format elapsed seconds the way a JS console timer does."""
    if seconds < 1:
        return f"{seconds * 1000:.3f}ms"
    if seconds < 60:
        return f"{seconds:.3f}s"

    millis = int(round(seconds * 1000))
    hours, millis = divmod(millis, 3_600_000)
    minutes, millis = divmod(millis, 60_000)
    secs, millis = divmod(millis, 1000)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}.{millis:03d} (h:mm:ss.mmm)"
    return f"{minutes}:{secs:02d}.{millis:03d} (m:ss.mmm)"


class ConsoleTimers:
    """Keeps start times by label."""

    def __init__(self, clock: Optional[Callable[[], float]] = None, log: Optional[logging.Logger] = None):
        self.clock = clock or time.perf_counter
        self.log = log or logger
        self._starts: Dict[str, float] = {}

    def time(self, label: str) -> None:
        """Start a timer."""
        if label in self._starts:
            self.log.warning(f"Label '{label}' already exists")
            return
        self._starts[label] = self.clock()

    def elapsed(self, label: str) -> Optional[float]:
        start = self._starts.get(label)
        if start is None:
            return None
        return self.clock() - start

    def time_log(self, label: str, *data: object) -> Optional[float]:
        """Log the running time of a timer, followed by ``data``."""
        elapsed = self.elapsed(label)
        if elapsed is None:
            self.log.warning(f"No such label '{label}'")
            return None
        self.log.info(" ".join([f"{label}: {format_duration(elapsed)}", *map(str, data)]))
        return elapsed

    def time_end(self, label: str) -> Optional[float]:
        """Log the final time of a timer and forget it."""
        elapsed = self.time_log(label)
        self._starts.pop(label, None)
        return elapsed
