# src/comet_tracker/physics/orbit.py

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional

from comet_tracker.core.constants import GAUSS_K
from comet_tracker.core.frames import Vector3, orbital_plane_to_ecliptic
from comet_tracker.core.timescale import Instant, to_julian_day
from comet_tracker.physics.kepler import (
    InvalidElementsError,
    NonConvergenceError,
    OrbitError,
    solve_elliptic_anomaly,
    solve_hyperbolic_anomaly,
)

logger = logging.getLogger(__name__)


class OrbitBranch(str, Enum):
    ELLIPTIC = "elliptic"
    HYPERBOLIC = "hyperbolic"


@dataclass(frozen=True)
class OrbitalElementSet:
    """
    Classical orbital elements for one heliocentric body.

    Units:
        e: eccentricity (<1 elliptic, >=1 hyperbolic)
        inc_deg, argp_deg, node_deg: inclination, argument of periapsis and
            longitude of the ascending node in degrees
        a_au: semi-major axis in AU (elliptic branch; ignored for hyperbolic)
        M0_deg: mean anomaly at epoch in degrees (elliptic)
        epoch_jd: epoch as a Julian day (elliptic)
        period_days: orbital period in days (elliptic)
        q_au: perihelion distance in AU (hyperbolic)
        tp_jd: time of perihelion passage as a Julian day (hyperbolic)
        branch: optional explicit branch tag; must agree with e when given
        closest_approach_jd, closest_distance_au: display-only metadata

    None marks a missing field. Construction never rejects values, so a bad
    set can still be handed to compute_position() and come back as
    UNAVAILABLE. Call validate() to check.
    """
    e: float
    inc_deg: float = 0.0
    argp_deg: float = 0.0
    node_deg: float = 0.0

    a_au: Optional[float] = None
    M0_deg: Optional[float] = None
    epoch_jd: Optional[float] = None
    period_days: Optional[float] = None

    q_au: Optional[float] = None
    tp_jd: Optional[float] = None

    branch: Optional[OrbitBranch] = None

    closest_approach_jd: Optional[float] = None
    closest_distance_au: Optional[float] = None

    @classmethod
    def elliptic(cls, a_au: float, e: float, inc_deg: float, argp_deg: float, node_deg: float,
                 M0_deg: float, period_days: float, epoch_jd: float, **extra) -> "OrbitalElementSet":
        return cls(e=e, inc_deg=inc_deg, argp_deg=argp_deg, node_deg=node_deg,
                   a_au=a_au, M0_deg=M0_deg, epoch_jd=epoch_jd, period_days=period_days,
                   branch=OrbitBranch.ELLIPTIC, **extra)

    @classmethod
    def hyperbolic(cls, q_au: float, e: float, inc_deg: float, argp_deg: float, node_deg: float,
                   tp_jd: float, **extra) -> "OrbitalElementSet":
        return cls(e=e, inc_deg=inc_deg, argp_deg=argp_deg, node_deg=node_deg,
                   q_au=q_au, tp_jd=tp_jd, branch=OrbitBranch.HYPERBOLIC, **extra)

    def resolved_branch(self) -> OrbitBranch:
        """Branch selected by eccentricity, cross-checked against the explicit tag."""
        if self.e is None:
            raise InvalidElementsError("elements missing: e")
        if not math.isfinite(self.e) or self.e < 0.0:
            raise InvalidElementsError(f"Eccentricity must be finite and >= 0. Got: {self.e}")
        by_e = OrbitBranch.ELLIPTIC if self.e < 1.0 else OrbitBranch.HYPERBOLIC
        if self.branch is None:
            return by_e
        try:
            tagged = OrbitBranch(self.branch)
        except ValueError:
            raise InvalidElementsError(f"Unknown orbit branch: {self.branch!r}") from None
        if tagged is not by_e:
            raise InvalidElementsError(f"Elements tagged {tagged.value} but e={self.e} selects {by_e.value}.")
        return by_e

    def validate(self) -> OrbitBranch:
        """
        Check that the fields required by the selected branch are present and sane.

        Returns:
            The resolved branch.

        Raises:
            InvalidElementsError
        """
        branch = self.resolved_branch()

        angles = {"inc_deg": self.inc_deg, "argp_deg": self.argp_deg, "node_deg": self.node_deg}
        missing = [k for k, v in angles.items() if v is None]
        if missing:
            raise InvalidElementsError(f"{branch.value} elements missing: {', '.join(missing)}")

        if not (0.0 <= self.inc_deg <= 180.0):
            raise InvalidElementsError(f"Inclination must be in range [0, 180] degrees. Got: {self.inc_deg}")
        if not math.isfinite(self.argp_deg):
            raise InvalidElementsError(f"Argument of periapsis must be finite. Got: {self.argp_deg}")
        if not math.isfinite(self.node_deg):
            raise InvalidElementsError(f"Ascending node longitude must be finite. Got: {self.node_deg}")

        elliptic_fields = {
            "a_au": self.a_au,
            "M0_deg": self.M0_deg,
            "epoch_jd": self.epoch_jd,
            "period_days": self.period_days,
        }
        hyperbolic_fields = {"q_au": self.q_au, "tp_jd": self.tp_jd}

        if branch is OrbitBranch.ELLIPTIC:
            required, foreign = elliptic_fields, hyperbolic_fields
        else:
            required, foreign = hyperbolic_fields, {k: v for k, v in elliptic_fields.items() if k != "a_au"}

        missing = [k for k, v in required.items() if v is None]
        if missing:
            raise InvalidElementsError(f"{branch.value} elements missing: {', '.join(missing)}")
        mixed = [k for k, v in foreign.items() if v is not None]
        if mixed:
            raise InvalidElementsError(f"{branch.value} elements must not set: {', '.join(mixed)}")
        for k, v in required.items():
            if not math.isfinite(v):
                raise InvalidElementsError(f"{k} must be finite. Got: {v}")

        if branch is OrbitBranch.ELLIPTIC:
            if self.a_au <= 0:
                raise InvalidElementsError("Semi-major axis must be positive.")
            if self.period_days <= 0:
                raise InvalidElementsError(f"Orbital period must be positive. Got: {self.period_days}")
        else:
            if self.e <= 1.0:
                raise InvalidElementsError(f"Hyperbolic branch requires e > 1 (parabolic orbits unsupported). Got: {self.e}")
            if self.q_au <= 0:
                raise InvalidElementsError(f"Perihelion distance must be positive. Got: {self.q_au}")

        return branch


@dataclass(frozen=True)
class PositionVector:
    """Heliocentric position in AU. available=False marks the sentinel, not a body at the origin."""
    x: float
    y: float
    z: float
    available: bool = True

    def as_tuple(self) -> Vector3:
        return (self.x, self.y, self.z)

    @property
    def radius_au(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)


UNAVAILABLE = PositionVector(0.0, 0.0, 0.0, available=False)


@dataclass(frozen=True)
class PlanePosition:
    """Position within the orbital plane, periapsis along +x."""
    x: float
    y: float
    r_au: float
    true_anomaly_rad: float


def elliptic_mean_motion(elements: OrbitalElementSet) -> float:
    """n = 2*pi / period (rad/day)."""
    return 2.0 * math.pi / elements.period_days


def elliptic_mean_anomaly(elements: OrbitalElementSet, jd: float) -> float:
    """M = M0 + n (jd - epoch), not wrapped."""
    n = elliptic_mean_motion(elements)
    return math.radians(elements.M0_deg) + n * (jd - elements.epoch_jd)


def hyperbolic_semi_major_axis(elements: OrbitalElementSet) -> float:
    """|a| = q / (e - 1) (AU)."""
    return elements.q_au / (elements.e - 1.0)


def hyperbolic_mean_motion(elements: OrbitalElementSet) -> float:
    """n = k / |a|^1.5 (rad/day)."""
    return GAUSS_K / hyperbolic_semi_major_axis(elements) ** 1.5


def hyperbolic_mean_anomaly(elements: OrbitalElementSet, jd: float) -> float:
    return hyperbolic_mean_motion(elements) * (jd - elements.tp_jd)


def orbital_plane_position(elements: OrbitalElementSet, jd: float) -> PlanePosition:
    """
    Solve the anomaly for `jd` and resolve radius and true anomaly.
    Assumes `elements` already passed validate().
    """
    e = elements.e

    if e < 1.0:
        a = elements.a_au
        M = elliptic_mean_anomaly(elements, jd)
        E = solve_elliptic_anomaly(M, e)
        r = a * (1.0 - e * math.cos(E))
        nu = 2.0 * math.atan2(
            math.sqrt(1.0 + e) * math.sin(E / 2.0),
            math.sqrt(1.0 - e) * math.cos(E / 2.0),
        )
    else:
        a = hyperbolic_semi_major_axis(elements)
        M = hyperbolic_mean_anomaly(elements, jd)
        H = solve_hyperbolic_anomaly(M, e)
        r = a * (e * math.cosh(H) - 1.0)
        nu = 2.0 * math.atan(math.sqrt((e + 1.0) / (e - 1.0)) * math.tanh(H / 2.0))

    return PlanePosition(x=r * math.cos(nu), y=r * math.sin(nu), r_au=r, true_anomaly_rad=nu)


def propagate(elements: OrbitalElementSet, instant: Instant) -> PositionVector:
    """
    Heliocentric ecliptic position of a body at `instant`.

    Raises:
        InvalidElementsError: missing, mixed or degenerate elements
        NonConvergenceError: a non-finite value appeared along the way
    """
    elements.validate()
    jd = to_julian_day(instant)

    try:
        plane = orbital_plane_position(elements, jd)
        x, y, z = orbital_plane_to_ecliptic(
            plane.x, plane.y,
            math.radians(elements.argp_deg),
            math.radians(elements.inc_deg),
            math.radians(elements.node_deg),
        )
    except (OverflowError, ZeroDivisionError) as exc:
        raise NonConvergenceError(f"Numeric failure at JD {jd}: {exc}") from exc

    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
        raise NonConvergenceError(f"Non-finite position at JD {jd}: ({x}, {y}, {z})")
    return PositionVector(x, y, z)


def compute_position(elements: OrbitalElementSet, instant: Instant, label: str = "body") -> PositionVector:
    """
    Frame-safe wrapper around propagate().

    Returns UNAVAILABLE instead of raising when the elements are unusable or
    the solve goes non-finite; the reason is logged as a warning.
    """
    try:
        return propagate(elements, instant)
    except OrbitError as exc:
        logger.warning("Position unavailable for %s: %s", label, exc)
        return UNAVAILABLE


def compute_positions(bodies: Mapping[str, OrbitalElementSet], instant: Instant) -> Dict[str, PositionVector]:
    """One position per body id for the same instant."""
    jd = to_julian_day(instant)
    return {body_id: compute_position(elements, jd, label=body_id) for body_id, elements in bodies.items()}
