from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime

from comet_tracker.core.constants import SECONDS_PER_DAY
from comet_tracker.core.timescale import Instant, from_julian_day, to_julian_day


@dataclass(frozen=True)
class SimulationClock:
    """
    Simulated time driven by elapsed wall-clock seconds.

    speed is the number of simulated seconds per wall second: 1.0 tracks real
    time, 86400.0 runs a day per second, negative values run backwards.
    """
    start_jd: float
    speed: float = 1.0

    def __post_init__(self):
        if not math.isfinite(self.start_jd):
            raise ValueError(f"Start must be finite. Got: {self.start_jd}")
        if not math.isfinite(self.speed):
            raise ValueError(f"Speed must be finite. Got: {self.speed}")

    @classmethod
    def starting_at(cls, start: Instant, speed: float = 1.0) -> "SimulationClock":
        return cls(start_jd=to_julian_day(start), speed=speed)

    def jd_at(self, elapsed_s: float) -> float:
        return self.start_jd + elapsed_s * self.speed / SECONDS_PER_DAY

    def datetime_at(self, elapsed_s: float) -> datetime:
        return from_julian_day(self.jd_at(elapsed_s))

    def with_speed(self, speed: float, elapsed_s: float = 0.0) -> "SimulationClock":
        """Re-anchor at the current simulated time with a new speed, so time does not jump."""
        return SimulationClock(start_jd=self.jd_at(elapsed_s), speed=speed)
