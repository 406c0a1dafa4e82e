"""
Benchmark driver comparing callback-based and signal-based watchdogs.

Each phase wraps ``iterations`` short units of work (an asyncio sleep of
``iteration_delay_ms``) with one watchdog variant. With 300,000 iterations of
1 ms the ideal total is five minutes; anything above that is watchdog setup and
teardown overhead.
"""
import asyncio
import logging
import sys
import time
from typing import List, Optional

import psutil

from watchbench.config import BenchmarkConfig, Settings, settings
from watchbench.models.schemas import PhaseResult, RunResult, WarningEvent
from watchbench.services import collector
from watchbench.services.collector import CollectionUnavailableError
from watchbench.services.console import ConsoleTimers
from watchbench.services.timers import sleep
from watchbench.services.watchdog import WATCHDOG_VARIANTS

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout
)
logger = logging.getLogger(__name__)

GLOBAL_LABEL = "GLOBAL"


def warn_slow_request(event: WarningEvent) -> None:
    """Warning handler used for every iteration."""
    logger.warning(f"nooooo {event.model_dump()}")


class Benchmark:
    """Runs each watchdog variant in a tight sequential loop."""

    def __init__(
        self,
        config: Optional[BenchmarkConfig] = None,
        run_settings: Optional[Settings] = None,
        timers: Optional[ConsoleTimers] = None,
        variants: Optional[List[str]] = None
    ):
        """Initialize benchmark."""
        self.config = config or BenchmarkConfig()
        self.settings = run_settings or settings
        self.timers = timers or ConsoleTimers()
        self.variants = variants or list(WATCHDOG_VARIANTS)
        self._process = psutil.Process() if self.settings.log_memory else None
        self._last_rss = 0

    async def _unit_of_work(self) -> None:
        await sleep(self.config.iteration_delay_ms / 1000)

    def _reset_memory_baseline(self) -> None:
        if self._process is not None:
            self._last_rss = self._process.memory_info().rss

    def _log_progress(self, iteration: int) -> None:
        message = f"Iteration: {iteration:,}"
        if self._process is not None:
            rss = self._process.memory_info().rss
            message = f"Mem: {rss - self._last_rss:,}, {message}"
        self.timers.time_log(GLOBAL_LABEL, message)

    async def run_phase(self, variant: str) -> PhaseResult:
        """Run one watchdog variant for the configured iteration count."""
        if variant not in WATCHDOG_VARIANTS:
            raise ValueError(f"Unknown watchdog variant: {variant}")

        wrap = WATCHDOG_VARIANTS[variant]
        label = f"wat-{variant}"

        self.timers.time(GLOBAL_LABEL)
        self.timers.time_log(GLOBAL_LABEL, f"testing {variant} based")
        self.timers.time(label)

        # Clean baseline, fatal if unavailable
        collector.force_collection()
        self._reset_memory_baseline()

        started = time.perf_counter()
        for i in range(self.config.iterations):
            await wrap(
                self._unit_of_work,
                warn_slow_request,
                self.config.timeout_warning_times
            )
            if i > 0 and i % self.config.log_mem_iterations == 0:
                self._log_progress(i)
        elapsed = time.perf_counter() - started

        self.timers.time_end(label)
        self.timers.time_log(GLOBAL_LABEL, f"--done testing {variant} based--")
        self.timers.time_end(GLOBAL_LABEL)

        return PhaseResult(
            variant=variant,
            label=label,
            iterations=self.config.iterations,
            elapsed_seconds=elapsed
        )

    async def run(self) -> RunResult:
        """Spin up, then run every phase in order."""
        if not collector.is_available():
            raise CollectionUnavailableError("gc.collect is missing!")

        logger.info(
            f"Starting benchmark: {self.config.iterations:,} iterations of "
            f"{self.config.iteration_delay_ms}ms, thresholds {list(self.config.timeout_warning_times)}"
        )

        # Spin up
        await sleep(self.settings.spin_up_seconds)

        started = time.perf_counter()
        phases = [await self.run_phase(variant) for variant in self.variants]
        total = time.perf_counter() - started

        for phase in phases:
            logger.info(f"{phase.label} took {phase.elapsed_seconds:.3f}s")
        logger.info(f"Benchmark finished in {total:.3f}s")

        return RunResult(phases=phases, total_elapsed_seconds=total)


async def main():
    """Main benchmark entry point."""
    benchmark = Benchmark()

    try:
        await benchmark.run()
    except CollectionUnavailableError as e:
        logger.error(f"Cannot benchmark: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Benchmark failed: {e}")
        sys.exit(1)


def run():
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
