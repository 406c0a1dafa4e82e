"""
Configuration settings for the watchdog benchmark.
"""
from typing import Tuple

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


# Benchmark constants
ITERATIONS = 300_000
LOG_MEM_ITERATIONS = 30_000
ITERATIONS_MILLI = 1
TIMEOUT_WARNING_TIMES: Tuple[float, ...] = (1, 5, 10, 30, 600)


class Settings(BaseSettings):
    """Process settings."""
    
    # Logging
    log_level: str = "INFO"
    log_memory: bool = False
    
    # Delay before the first phase, in seconds
    spin_up_seconds: float = 1.0
    
    class Config:
        env_file = ".env"
        env_prefix = "WATCHBENCH_"
        case_sensitive = False


class BenchmarkConfig(BaseModel):
    """Fixed parameters of one benchmark run."""
    iterations: int = Field(ITERATIONS, ge=1)
    log_mem_iterations: int = Field(LOG_MEM_ITERATIONS, ge=1, description="Progress log cadence")
    iteration_delay_ms: float = Field(ITERATIONS_MILLI, gt=0, description="Unit of work duration in ms")
    timeout_warning_times: Tuple[float, ...] = Field(TIMEOUT_WARNING_TIMES, description="Thresholds in seconds")
    
    class Config:
        frozen = True
    
    @field_validator("timeout_warning_times")
    @classmethod
    def _positive_thresholds(cls, value: Tuple[float, ...]) -> Tuple[float, ...]:
        if any(threshold <= 0 for threshold in value):
            raise ValueError("timeout warning times must be positive")
        return value


# Global settings instance
settings = Settings()
