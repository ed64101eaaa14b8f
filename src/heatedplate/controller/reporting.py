"""
Progress observers for the relaxation solver.

The solver calls its observer after every pass; deciding what to show is left
to the classes here.
"""
from __future__ import annotations

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class HistoryRecorder:
    """Keep every ``(iteration, max_change)`` pair reported by the solver."""

    def __init__(self) -> None:
        self.history: list[tuple[int, float]] = []

    def __call__(self, iteration: int, max_change: float) -> None:
        self.history.append((iteration, max_change))

    @property
    def iterations(self) -> list[int]:
        return [it for it, _ in self.history]

    @property
    def changes(self) -> list[float]:
        return [change for _, change in self.history]


class PowerOfTwoReporter:
    """
    Log the change at iterations 1, 2, 4, 8, ...

    Only the reported passes are kept, so a run of n passes leaves
    log2(n) + 1 entries behind. Combine with ``HistoryRecorder`` when every
    pass is needed.

    Args:
        log: Logger to write to. Defaults to this module's logger.
        level: Level of the progress records.
    """

    def __init__(self, log: Optional[logging.Logger] = None, level: int = logging.INFO) -> None:
        self.log = log or logger
        self.level = level
        self.next_report = 1
        self.reported: list[tuple[int, float]] = []

    def __call__(self, iteration: int, max_change: float) -> None:
        if iteration == self.next_report:
            self.reported.append((iteration, max_change))
            self.log.log(self.level, f"{iteration:>8d}  {max_change:g}")
            self.next_report *= 2
