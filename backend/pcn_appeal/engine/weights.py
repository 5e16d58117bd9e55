from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeightTable:
    """Global scoring constants. Snapshots are immutable; calibration makes new ones."""

    version: int = 1
    evidence_quality: float = 0.75
    timing: float = 0.65
    legal_strength: float = 1.0
    statutory_bonus: float = 0.10

    def nudged(self) -> "WeightTable":
        return replace(
            self,
            version=self.version + 1,
            statutory_bonus=self.statutory_bonus * 1.1,
            evidence_quality=self.evidence_quality * 1.05,
            legal_strength=self.legal_strength * 1.15,
        )


class WeightRegistry:
    """Holds the live snapshot. Readers grab the reference once per scoring call."""

    def __init__(self, initial: WeightTable | None = None) -> None:
        self._current = initial or WeightTable()
        self._lock = threading.Lock()

    def current(self) -> WeightTable:
        return self._current

    def publish(self, table: WeightTable) -> WeightTable:
        with self._lock:
            if table.version <= self._current.version:
                logger.warning(
                    "Ignoring weight table v%d, v%d already live",
                    table.version,
                    self._current.version,
                )
                return self._current
            self._current = table
            logger.info("Published weight table v%d", table.version)
            return table


registry = WeightRegistry()
