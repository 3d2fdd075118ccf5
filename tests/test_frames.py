"""
Tests for vector helpers and the orbital-plane -> ecliptic rotation.
"""
import math
import pytest

from comet_tracker.core.frames import dot, norm, orbital_plane_to_ecliptic, rot1, rot3, sub


class TestVectorOperations:
    def test_dot_product(self):
        a = (1.0, 2.0, 3.0)
        b = (4.0, 5.0, 6.0)
        assert dot(a, b) == 32.0

    def test_subtraction(self):
        assert sub((5.0, 7.0, 9.0), (2.0, 3.0, 4.0)) == (3.0, 4.0, 5.0)

    def test_norm(self):
        assert norm((3.0, 4.0, 0.0)) == 5.0
        assert norm((1.0, 0.0, 0.0)) == 1.0


class TestRotations:
    def test_rot3_90_degrees(self):
        result = rot3(math.pi / 2, (1.0, 0.0, 0.0))
        assert result == pytest.approx((0.0, 1.0, 0.0), abs=1e-12)

    def test_rot3_identity(self):
        v = (1.0, 2.0, 3.0)
        assert rot3(0.0, v) == v

    def test_rot1_90_degrees(self):
        result = rot1(math.pi / 2, (0.0, 1.0, 0.0))
        assert result == pytest.approx((0.0, 0.0, 1.0), abs=1e-12)

    def test_rot1_identity(self):
        v = (1.0, 2.0, 3.0)
        assert rot1(0.0, v) == v

    def test_rotations_preserve_length(self):
        v = (1.2, -3.4, 5.6)
        assert norm(rot1(0.7, rot3(2.1, v))) == pytest.approx(norm(v), rel=1e-14)


class TestOrbitalPlaneToEcliptic:
    def test_zero_inclination_is_exactly_planar(self):
        for argp in [0.0, 0.3, 1.7, 4.0]:
            for node in [0.0, 1.1, 5.9]:
                _x, _y, z = orbital_plane_to_ecliptic(0.8, -0.6, argp, 0.0, node)
                assert z == 0.0

    def test_argument_of_periapsis_turns_in_plane(self):
        r = orbital_plane_to_ecliptic(1.0, 0.0, math.pi / 2, 0.0, 0.0)
        assert r == pytest.approx((0.0, 1.0, 0.0), abs=1e-12)

    def test_polar_orbit_lifts_out_of_plane(self):
        r = orbital_plane_to_ecliptic(1.0, 0.0, math.pi / 2, math.pi / 2, 0.0)
        assert r == pytest.approx((0.0, 0.0, 1.0), abs=1e-12)

    def test_node_swings_about_pole(self):
        r = orbital_plane_to_ecliptic(1.0, 0.0, 0.0, 0.0, math.pi / 2)
        assert r == pytest.approx((0.0, 1.0, 0.0), abs=1e-12)

    def test_matches_closed_form(self):
        x_orb, y_orb = 1.3, 0.4
        w, i, node = math.radians(128.01), math.radians(175.113), math.radians(322.157)

        xp = x_orb * math.cos(w) - y_orb * math.sin(w)
        yp = x_orb * math.sin(w) + y_orb * math.cos(w)
        x_ecl, y_ecl, z_ecl = xp, yp * math.cos(i), yp * math.sin(i)
        expected = (
            x_ecl * math.cos(node) - y_ecl * math.sin(node),
            x_ecl * math.sin(node) + y_ecl * math.cos(node),
            z_ecl,
        )

        assert orbital_plane_to_ecliptic(x_orb, y_orb, w, i, node) == pytest.approx(expected, abs=1e-14)
