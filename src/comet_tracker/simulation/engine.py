from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol, Tuple

from comet_tracker.core.frames import Vector3
from comet_tracker.core.timescale import Instant, to_julian_day
from comet_tracker.simulation.scenario import Scenario

logger = logging.getLogger(__name__)


class System(Protocol):
    """
    Plugin interface for simulation systems.
    Each system runs per tick and can write to the log.
    """
    name: str

    def on_step(self, jd: float, scenario: Scenario, log: "SimulationLog") -> None:
        ...


@dataclass
class SimulationLog:
    """
    Stores outputs from a simulation run. In-memory only.
    """
    # Positions: body_id -> list of (jd, r_au). Unavailable ticks are not recorded here.
    body_positions_au: Dict[str, List[Tuple[float, Vector3]]] = field(default_factory=dict)

    # Distances: (body_id, other_id) -> list of (jd, distance_au); other_id "sun" is heliocentric
    distances_au: Dict[Tuple[str, str], List[Tuple[float, float]]] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list)

    def record_position(self, body_id: str, jd: float, r_au: Vector3) -> None:
        self.body_positions_au.setdefault(body_id, []).append((jd, r_au))

    def record_distance(self, body_id: str, other_id: str, jd: float, distance_au: float) -> None:
        key = (body_id, other_id)
        self.distances_au.setdefault(key, []).append((jd, distance_au))

    def record_unavailable(self, body_id: str, jd: float) -> None:
        self.events.append({"type": "unavailable", "body_id": body_id, "jd": jd})

    def unavailable_count(self, body_id: str) -> int:
        return sum(1 for ev in self.events if ev["type"] == "unavailable" and ev["body_id"] == body_id)


@dataclass
class Engine:
    """
    Fixed-step simulation engine over Julian days.
    Deterministic replay: given same scenario + dt + start/end => same output.
    """
    dt_days: float
    systems: List[System] = field(default_factory=list)

    def run(self, scenario: Scenario, start: Instant, end: Instant) -> SimulationLog:
        if self.dt_days <= 0:
            raise ValueError("dt_days must be positive.")
        jd_start = to_julian_day(start)
        jd_end = to_julian_day(end)
        if jd_end < jd_start:
            raise ValueError("end must be >= start.")

        log = SimulationLog()
        steps = 0

        # Tick loop. Ticks are computed from the step index so long runs do
        # not accumulate rounding; the end is inclusive if it lands exactly.
        while True:
            jd = jd_start + steps * self.dt_days
            if jd > jd_end + 1e-9:
                break
            logger.debug("Tick %d at JD %.6f", steps, jd)
            for sys in self.systems:
                sys.on_step(jd, scenario, log)
            steps += 1

        logger.info(
            "Scenario '%s': %d ticks over JD %.3f..%.3f, %d events",
            scenario.name, steps, jd_start, jd_end, len(log.events),
        )
        return log
