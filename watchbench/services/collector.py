"""
Forced garbage collection used to reset the measurement baseline.
"""
import gc
import logging

logger = logging.getLogger(__name__)


class CollectionUnavailableError(RuntimeError):
    """The interpreter exposes no way to force a full collection."""


def is_available() -> bool:
    """Check if a forced collection can be requested."""
    return callable(getattr(gc, "collect", None))


def force_collection() -> int:
    """Run a full collection; fail if the facility is missing."""
    if not is_available():
        raise CollectionUnavailableError("gc.collect is missing!")

    collected = gc.collect()
    logger.debug(f"Forced collection freed {collected} objects")
    return collected
