from __future__ import annotations

from dataclasses import dataclass

from comet_tracker.core.timescale import Instant
from comet_tracker.physics.orbit import OrbitalElementSet, PositionVector, compute_position


@dataclass(frozen=True)
class CelestialBody:
    """
    A domain object representing a planet or comet.
    Purely kinematic: position comes from two-body propagation of fixed elements.
    """
    body_id: str
    name: str
    elements: OrbitalElementSet
    kind: str = "planet"

    def __post_init__(self):
        if not self.body_id or not self.body_id.strip():
            raise ValueError("Body ID cannot be empty or whitespace.")
        if not self.name or not self.name.strip():
            raise ValueError("Body name cannot be empty or whitespace.")

    def position_at(self, instant: Instant) -> PositionVector:
        """
        Heliocentric ecliptic position (AU) at `instant`.
        Returns UNAVAILABLE when the elements cannot be propagated.
        """
        return compute_position(self.elements, instant, label=self.body_id)
