# Kepler's equation, elliptic and hyperbolic

from __future__ import annotations

import math

from comet_tracker.core.constants import ELLIPTIC_ITERATIONS, HYPERBOLIC_MAX_ITER, HYPERBOLIC_TOL


class OrbitError(ValueError):
    """Base class for anything that prevents a position from being computed."""


class InvalidElementsError(OrbitError):
    """Required fields are missing, inconsistent with the branch, or degenerate."""


class NonConvergenceError(OrbitError, RuntimeError):
    """A solver or intermediate value went non-finite or failed to settle."""


def solve_elliptic_anomaly(M_rad: float, e: float, iterations: int = ELLIPTIC_ITERATIONS) -> float:
    """
    Solve Kepler's equation for elliptic orbits:
        E = M + e sin(E)
    by fixed-point iteration seeded at E0 = M.

    M is not wrapped to [0, 2pi): sin() is periodic, so the
    iteration behaves the same for any magnitude of M and the returned E
    stays on the same revolution as M.

    The contraction factor is e, so after `iterations` sweeps the error is of
    order e**iterations. Ten sweeps are plenty below e ~ 0.95; above that the
    result is an approximation.

    Args:
        M_rad: Mean anomaly (rad)
        e: eccentricity (0 <= e < 1)
        iterations: number of fixed-point sweeps

    Returns:
        E_rad: Eccentric anomaly (rad)
    """
    if not (0.0 <= e < 1.0):
        raise InvalidElementsError(f"Elliptic Kepler solver requires 0 <= e < 1. Got: {e}")
    if not math.isfinite(M_rad):
        raise NonConvergenceError(f"Mean anomaly must be finite. Got: {M_rad}")

    E = M_rad
    for _ in range(iterations):
        E = M_rad + e * math.sin(E)
    return E


def solve_hyperbolic_anomaly(M_rad: float, e: float,
                             tol: float = HYPERBOLIC_TOL,
                             max_iter: int = HYPERBOLIC_MAX_ITER) -> float:
    """
    Solve the hyperbolic Kepler equation:
        M = e sinh(H) - H
    using Newton-Raphson.

    The seed is H0 = M, clamped to asinh(|M| / (e - 1)). That value is an
    upper bound on |H| (since e sinh H - H >= (e - 1) sinh H), so the clamp
    only bites for large |M|, where it keeps sinh() from overflowing and lets
    Newton land in a handful of steps instead of walking down one unit per step.

    Args:
        M_rad: Hyperbolic mean anomaly (rad)
        e: eccentricity (e > 1)
        tol: early-exit threshold on |f(H)|
        max_iter: iteration cap

    Returns:
        H: Hyperbolic anomaly
    """
    if not (e > 1.0) or not math.isfinite(e):
        raise InvalidElementsError(f"Hyperbolic Kepler solver requires e > 1. Got: {e}")
    if not math.isfinite(M_rad):
        raise NonConvergenceError(f"Mean anomaly must be finite. Got: {M_rad}")

    bound = math.asinh(abs(M_rad) / (e - 1.0))
    H = M_rad
    if abs(H) > bound:
        H = math.copysign(bound, M_rad)

    f = e * math.sinh(H) - H - M_rad
    for _ in range(max_iter):
        if abs(f) < tol:
            return H
        fp = e * math.cosh(H) - 1.0
        H -= f / fp
        if abs(H) > bound:
            H = math.copysign(bound, M_rad)
        f = e * math.sinh(H) - H - M_rad
        if not math.isfinite(H) or not math.isfinite(f):
            raise NonConvergenceError(f"Hyperbolic Kepler solver diverged (M={M_rad}, e={e}).")

    # Residual floor scales with |M| once double precision runs out
    if abs(f) > 1e-6 * max(1.0, abs(M_rad)):
        raise NonConvergenceError(
            f"Hyperbolic Kepler solver did not converge within {max_iter} iterations "
            f"(M={M_rad}, e={e}, residual={f})."
        )
    return H
