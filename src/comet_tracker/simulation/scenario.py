from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping

from comet_tracker.objects.body import CelestialBody
from comet_tracker.physics.orbit import OrbitalElementSet


@dataclass
class Scenario:
    """
    Container for all bodies in a simulation run.
    Keep this pure: just data + lookup, no stepping logic.
    """
    name: str
    bodies: Dict[str, CelestialBody] = field(default_factory=dict)

    @classmethod
    def from_bodies(cls, name: str, bodies: Mapping[str, CelestialBody]) -> "Scenario":
        scenario = cls(name=name)
        for body in bodies.values():
            scenario.add_body(body)
        return scenario

    def add_body(self, body: CelestialBody) -> None:
        if body.body_id in self.bodies:
            raise ValueError(f"Duplicate body ID: {body.body_id}")
        self.bodies[body.body_id] = body

    def body(self, body_id: str) -> CelestialBody:
        try:
            return self.bodies[body_id]
        except KeyError:
            raise ValueError(f"Unknown body ID: {body_id}") from None

    def body_list(self) -> List[CelestialBody]:
        return list(self.bodies.values())

    def element_table(self) -> Dict[str, OrbitalElementSet]:
        return {body_id: body.elements for body_id, body in self.bodies.items()}
