"""
Static orbital element table and JSON catalog loading.

Bodies are held in an explicit mapping body_id -> OrbitalElementSet that
callers pass around; nothing here is looked up through module state at
propagation time.

JSON layout:

    {
      "bodies": {
        "earth": {"name": "Earth", "kind": "planet",
                  "a_au": 1.0, "e": 0.0167, "inc_deg": 0.0, ...},
        "comet": {"name": "3I/ATLAS", "kind": "comet",
                  "q_au": 1.356419, "e": 6.139587,
                  "tp_jd": "2025-10-29T11:33:16Z", ...}
      }
    }

Julian-day fields (epoch_jd, tp_jd, closest_approach_jd) accept either a
number or an ISO-8601 timestamp.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from comet_tracker.core.constants import J2000_JD
from comet_tracker.core.timescale import to_julian_day
from comet_tracker.objects.body import CelestialBody
from comet_tracker.physics.orbit import OrbitalElementSet, OrbitBranch

logger = logging.getLogger(__name__)

_FLOAT_FIELDS = (
    "e", "inc_deg", "argp_deg", "node_deg",
    "a_au", "M0_deg", "period_days", "q_au", "closest_distance_au",
)
_DATE_FIELDS = ("epoch_jd", "tp_jd", "closest_approach_jd")


def _planet(a, e, i, argp, node, M0, period) -> OrbitalElementSet:
    return OrbitalElementSet.elliptic(a_au=a, e=e, inc_deg=i, argp_deg=argp, node_deg=node,
                                      M0_deg=M0, period_days=period, epoch_jd=J2000_JD)


# Mean elements at J2000 (AU, deg, days)
PLANET_ELEMENTS: Dict[str, OrbitalElementSet] = {
    "mercury": _planet(0.387, 0.2056, 7.0, 29.124, 48.331, 174.794, 87.97),
    "venus": _planet(0.723, 0.0068, 3.4, 54.852, 76.680, 50.416, 224.70),
    "earth": _planet(1.0, 0.0167, 0.0, 102.94719, 0.0, 357.529, 365.25),
    "mars": _planet(1.524, 0.0934, 1.9, 286.496, 49.558, 18.602, 686.98),
    "jupiter": _planet(5.203, 0.0484, 1.3, 273.867, 100.556, 19.804, 4332.59),
    "saturn": _planet(9.537, 0.0542, 2.5, 339.391, 113.715, 317.020, 10759.22),
    "uranus": _planet(19.191, 0.0472, 0.8, 96.734, 74.229, 142.238, 30685.4),
    "neptune": _planet(30.069, 0.0086, 1.8, 273.249, 131.721, 256.228, 60189.0),
}

# Interstellar comet C/2025 N1 (3I/ATLAS)
COMET_ELEMENTS = OrbitalElementSet.hyperbolic(
    q_au=1.356419,
    e=6.139587,
    inc_deg=175.113,
    argp_deg=128.010,
    node_deg=322.157,
    tp_jd=2460977.981439,
    closest_approach_jd=2461028.5,  # 2025-12-19
    closest_distance_au=1.8,
)

BODY_NAMES: Dict[str, str] = {
    "mercury": "Mercury",
    "venus": "Venus",
    "earth": "Earth",
    "mars": "Mars",
    "jupiter": "Jupiter",
    "saturn": "Saturn",
    "uranus": "Uranus",
    "neptune": "Neptune",
    "comet": "3I/ATLAS",
}


def default_elements() -> Dict[str, OrbitalElementSet]:
    """Fresh mapping of the built-in planets plus the comet."""
    table = dict(PLANET_ELEMENTS)
    table["comet"] = COMET_ELEMENTS
    return table


def default_bodies() -> Dict[str, CelestialBody]:
    return {
        body_id: CelestialBody(
            body_id=body_id,
            name=BODY_NAMES[body_id],
            elements=elements,
            kind="comet" if elements.e >= 1.0 else "planet",
        )
        for body_id, elements in default_elements().items()
    }


def _as_jd(value: Union[str, float, int]) -> float:
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return to_julian_day(datetime.fromisoformat(text))
    return to_julian_day(float(value))


def elements_from_dict(data: Mapping[str, Any]) -> OrbitalElementSet:
    """
    Build an OrbitalElementSet from a plain mapping. Unknown keys other than
    name/kind are rejected so typos do not silently drop a field.
    """
    known = set(_FLOAT_FIELDS) | set(_DATE_FIELDS) | {"branch", "name", "kind"}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown element fields: {', '.join(unknown)}")
    if "e" not in data:
        raise ValueError("Element set is missing eccentricity 'e'.")

    kwargs: Dict[str, Any] = {}
    for key in _FLOAT_FIELDS:
        if data.get(key) is not None:
            kwargs[key] = float(data[key])
    for key in _DATE_FIELDS:
        if data.get(key) is not None:
            kwargs[key] = _as_jd(data[key])
    if data.get("branch") is not None:
        kwargs["branch"] = OrbitBranch(data["branch"])

    return OrbitalElementSet(**kwargs)


def catalog_from_dict(data: Mapping[str, Any]) -> Dict[str, CelestialBody]:
    """
    Parse a catalog document. Every element set is validated up front so a
    broken configuration fails at startup rather than once per frame.
    """
    entries = data.get("bodies")
    if not isinstance(entries, Mapping) or not entries:
        raise ValueError("Catalog must contain a non-empty 'bodies' mapping.")

    bodies: Dict[str, CelestialBody] = {}
    for body_id, entry in entries.items():
        try:
            elements = elements_from_dict(entry)
            elements.validate()
        except (ValueError, TypeError) as exc:
            raise ValueError(f"Invalid catalog entry '{body_id}': {exc}") from exc

        kind = entry.get("kind") or ("comet" if elements.e >= 1.0 else "planet")
        bodies[body_id] = CelestialBody(
            body_id=body_id,
            name=entry.get("name") or body_id,
            elements=elements,
            kind=kind,
        )
    return bodies


def load_catalog(path: Union[str, Path]) -> Dict[str, CelestialBody]:
    """Load a JSON catalog file (see module docstring for the layout)."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    bodies = catalog_from_dict(data)
    logger.info("Loaded %d bodies from %s", len(bodies), path)
    return bodies
