"""
Pydantic schemas for watchdog events and benchmark results.
"""
from typing import List

from pydantic import BaseModel


class WarningEvent(BaseModel):
    """Passed to the warning handler when a threshold elapses."""
    timeout_time: float


class PhaseResult(BaseModel):
    """Timing of one benchmark phase."""
    variant: str
    label: str
    iterations: int
    elapsed_seconds: float


class RunResult(BaseModel):
    """Timing of a whole benchmark run."""
    phases: List[PhaseResult]
    total_elapsed_seconds: float
