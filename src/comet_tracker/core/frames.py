from __future__ import annotations

import math
from typing import Tuple

Vector3 = Tuple[float, float, float]


def rot3(angle_rad: float, v: Vector3) -> Vector3:
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    x, y, z = v
    return (c * x - s * y, s * x + c * y, z)


def rot1(angle_rad: float, v: Vector3) -> Vector3:
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    x, y, z = v
    return (x, c * y - s * z, s * y + c * z)


def dot(a: Vector3, b: Vector3) -> float:
    return a[0]*b[0] + a[1]*b[1] + a[2]*b[2]


def sub(a: Vector3, b: Vector3) -> Vector3:
    return (a[0]-b[0], a[1]-b[1], a[2]-b[2])


def norm(a: Vector3) -> float:
    return math.sqrt(dot(a, a))


def orbital_plane_to_ecliptic(x_orb: float, y_orb: float,
                              argp_rad: float, inc_rad: float, node_rad: float) -> Vector3:
    """
    Rotate an in-plane position (periapsis along +x) into the reference frame.

    Args:
        x_orb, y_orb: Position in the orbital plane (AU)
        argp_rad: Argument of periapsis (radians)
        inc_rad: Inclination (radians)
        node_rad: Longitude of the ascending node (radians)

    Returns:
        (x, y, z) in the reference frame (AU)
    """
    # Order matters: periapsis within the plane, tilt about the line of nodes,
    # then swing the node around the reference pole.
    r = rot3(argp_rad, (x_orb, y_orb, 0.0))
    r = rot1(inc_rad, r)
    return rot3(node_rad, r)
