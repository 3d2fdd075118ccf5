from __future__ import annotations

# Gaussian gravitational constant k (AU^1.5 / day), calibrated for the Sun
GAUSS_K: float = 0.01720209895

# Julian day of the Unix epoch (1970-01-01T00:00:00Z)
JD_UNIX_EPOCH: float = 2440587.5

# J2000.0 reference epoch as a Julian day
J2000_JD: float = 2451545.0

SECONDS_PER_DAY: float = 86400.0

# IAU 2012 astronomical unit in km
KM_PER_AU: float = 149597870.7

# Fixed-point sweeps for the elliptic Kepler solve. Enough for e < ~0.95;
# higher eccentricities converge more slowly and are not compensated.
ELLIPTIC_ITERATIONS: int = 10

# Newton-Raphson settings for the hyperbolic Kepler solve
HYPERBOLIC_TOL: float = 1e-10
HYPERBOLIC_MAX_ITER: int = 15
