"""
Sampled trajectories for orbit tracks and comet trails.
"""

from __future__ import annotations

import math
from typing import List, Tuple

from comet_tracker.core.timescale import Instant, to_julian_day
from comet_tracker.physics.orbit import OrbitalElementSet, PositionVector, compute_position


def sample_times(start: Instant, end: Instant, step_days: float) -> List[float]:
    """Julian days from start to end inclusive (when it lands exactly)."""
    if step_days <= 0:
        raise ValueError("step_days must be positive.")
    jd_start = to_julian_day(start)
    jd_end = to_julian_day(end)
    if jd_end < jd_start:
        raise ValueError("end must be >= start.")

    n = int(math.floor((jd_end - jd_start) / step_days + 1e-9))
    return [jd_start + k * step_days for k in range(n + 1)]


def sample_trajectory(elements: OrbitalElementSet, start: Instant, end: Instant,
                      step_days: float, label: str = "body") -> List[Tuple[float, PositionVector]]:
    """
    Propagate across [start, end] every step_days.

    Unavailable samples are dropped rather than returned as points at the
    origin, so the result can be drawn directly as a polyline.
    """
    points: List[Tuple[float, PositionVector]] = []
    for jd in sample_times(start, end, step_days):
        pos = compute_position(elements, jd, label=label)
        if pos.available:
            points.append((jd, pos))
    return points


def orbit_track(elements: OrbitalElementSet, n_points: int = 180,
                label: str = "body") -> List[Tuple[float, PositionVector]]:
    """
    One full revolution of an elliptic orbit, starting at its epoch.
    """
    if n_points < 2:
        raise ValueError("n_points must be at least 2.")
    elements.validate()
    if elements.period_days is None:
        raise ValueError("orbit_track needs an elliptic element set; use sample_trajectory for hyperbolic ones.")

    step = elements.period_days / n_points
    return sample_trajectory(elements, elements.epoch_jd, elements.epoch_jd + elements.period_days, step, label=label)
