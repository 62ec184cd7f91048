"""Phase timing for a report run."""
from __future__ import annotations
import logging
import time
from contextlib import contextmanager
from typing import Dict


def _elapsed(since: float) -> float:
    return round(time.perf_counter() - since, 3)


class PipelineTimer:
    """Wall-clock seconds spent in each named phase of one run."""

    def __init__(self):
        self._started = time.perf_counter()
        self.phases: Dict[str, float] = {}

    @contextmanager
    def phase(self, name: str):
        """Time the enclosed block as `<name>_s`, even if it raises."""
        began = time.perf_counter()
        try:
            yield
        finally:
            self.phases[f"{name}_s"] = _elapsed(began)

    def get_summary(self) -> Dict[str, float]:
        """Snapshot of the phase timings plus `total_s` since creation."""
        return {**self.phases, 'total_s': _elapsed(self._started)}

    def log_summary(self, logger: logging.Logger, level: int = logging.INFO) -> None:
        timings = ", ".join(f"{k}={v}" for k, v in self.get_summary().items())
        logger.log(level, "timings: %s", timings)
