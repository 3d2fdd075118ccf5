from __future__ import annotations

from dataclasses import dataclass

from comet_tracker.simulation.scenario import Scenario
from comet_tracker.simulation.engine import SimulationLog


@dataclass
class StateRecorderSystem:
    name: str = "state_recorder"

    def on_step(self, jd: float, scenario: Scenario, log: SimulationLog) -> None:
        for body in scenario.body_list():
            pos = body.position_at(jd)
            if pos.available:
                log.record_position(body.body_id, jd, pos.as_tuple())
            else:
                log.record_unavailable(body.body_id, jd)
