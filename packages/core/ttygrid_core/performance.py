"""Per-stage frame build timing and resource budgeting."""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

import psutil

from .logging_setup import get_logger


@dataclass(frozen=True)
class PerformanceTargets:
    frame_ms_max: float = 250.0
    rss_mb_max: float = 300.0


@dataclass(frozen=True)
class BudgetStatus:
    frame_ms: float
    rss_mb: float
    stages: dict[str, float]
    overloaded: bool
    warning: str | None


class PerformanceController:
    def __init__(self, targets: PerformanceTargets | None = None) -> None:
        self.targets = targets or PerformanceTargets()
        self._process = psutil.Process()
        self._stages: dict[str, float] = {}
        self._logger = get_logger()

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            self._stages[name] = self._stages.get(name, 0.0) + elapsed_ms
            self._logger.debug(
                f"{name} took {elapsed_ms:.1f}ms",
                extra={"event": "stage_timing", "stage": name, "elapsed_ms": elapsed_ms},
            )

    @property
    def stages(self) -> dict[str, float]:
        return dict(self._stages)

    def reset(self) -> None:
        self._stages.clear()

    def sample(self) -> BudgetStatus:
        frame_ms = sum(self._stages.values())
        rss_mb = float(self._process.memory_info().rss) / (1024 * 1024)

        warning = None
        if frame_ms > self.targets.frame_ms_max:
            warning = "slow_frame"
        elif rss_mb > self.targets.rss_mb_max:
            warning = "memory_overload"

        status = BudgetStatus(
            frame_ms=frame_ms,
            rss_mb=rss_mb,
            stages=self.stages,
            overloaded=warning is not None,
            warning=warning,
        )
        if status.overloaded:
            self._logger.warning(
                f"frame budget exceeded: {warning} frame_ms={frame_ms:.1f} rss_mb={rss_mb:.1f}",
                extra={"event": "budget_exceeded"},
            )
        return status
