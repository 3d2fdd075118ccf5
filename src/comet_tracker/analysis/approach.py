"""
Distances and close-approach search between sampled trajectories.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from comet_tracker.core.constants import KM_PER_AU
from comet_tracker.core.frames import Vector3, norm, sub
from comet_tracker.physics.orbit import PositionVector


@dataclass(frozen=True)
class CloseApproach:
    """Minimum separation between two sampled trajectories."""
    jd: float
    distance_au: float
    position_primary: Vector3
    position_secondary: Vector3

    @property
    def distance_km(self) -> float:
        return au_to_km(self.distance_au)


def au_to_km(distance_au: float) -> float:
    return distance_au * KM_PER_AU


def distance_au(a: PositionVector, b: PositionVector) -> float:
    """
    Separation between two positions (AU).

    Raises:
        ValueError: if either position is the unavailable sentinel
    """
    if not (a.available and b.available):
        raise ValueError("Cannot measure distance to an unavailable position.")
    return norm(sub(a.as_tuple(), b.as_tuple()))


def find_closest_approach(primary: Sequence[Tuple[float, PositionVector]],
                          secondary: Sequence[Tuple[float, PositionVector]],
                          time_tol_days: float = 1e-6) -> Optional[CloseApproach]:
    """
    Closest approach over the samples the two trajectories share.

    Samples are paired by Julian day (within time_tol_days); samples without
    a partner, or flagged unavailable, are skipped.

    Returns:
        CloseApproach, or None if there is no common available sample
    """
    best: Optional[CloseApproach] = None

    j = 0
    sec: List[Tuple[float, PositionVector]] = sorted(secondary, key=lambda s: s[0])
    for jd, p in sorted(primary, key=lambda s: s[0]):
        while j < len(sec) and sec[j][0] < jd - time_tol_days:
            j += 1
        if j >= len(sec):
            break
        jd2, q = sec[j]
        if abs(jd2 - jd) > time_tol_days:
            continue
        if not (p.available and q.available):
            continue

        d = distance_au(p, q)
        if best is None or d < best.distance_au:
            best = CloseApproach(jd=jd, distance_au=d, position_primary=p.as_tuple(), position_secondary=q.as_tuple())

    return best


def days_until(jd_now: float, jd_event: float) -> float:
    """Days remaining until an event; negative once it has passed."""
    if not (math.isfinite(jd_now) and math.isfinite(jd_event)):
        raise ValueError("Julian days must be finite.")
    return jd_event - jd_now
