from __future__ import annotations

from dataclasses import dataclass

from comet_tracker.core.frames import norm, sub
from comet_tracker.simulation.scenario import Scenario
from comet_tracker.simulation.engine import SimulationLog

SUN_ID = "sun"


@dataclass
class DistanceSystem:
    """Records target-Sun and target-observer distances (AU) each tick."""
    target_id: str = "comet"
    observer_id: str = "earth"
    name: str = "distance"

    def on_step(self, jd: float, scenario: Scenario, log: SimulationLog) -> None:
        target = scenario.body(self.target_id).position_at(jd)
        if not target.available:
            return
        log.record_distance(self.target_id, SUN_ID, jd, target.radius_au)

        observer = scenario.body(self.observer_id).position_at(jd)
        if observer.available:
            d = norm(sub(target.as_tuple(), observer.as_tuple()))
            log.record_distance(self.target_id, self.observer_id, jd, d)
