import pytest

from comet_tracker.analysis.approach import (
    CloseApproach,
    au_to_km,
    days_until,
    distance_au,
    find_closest_approach,
)
from comet_tracker.analysis.trajectory import orbit_track, sample_times, sample_trajectory
from comet_tracker.core.constants import KM_PER_AU
from comet_tracker.objects.catalog import COMET_ELEMENTS, PLANET_ELEMENTS
from comet_tracker.physics.orbit import UNAVAILABLE, OrbitalElementSet, PositionVector

J2000 = 2451545.0
TP = COMET_ELEMENTS.tp_jd


class TestSampling:
    def test_sample_times_inclusive(self):
        assert sample_times(J2000, J2000 + 10.0, 2.5) == [J2000, J2000 + 2.5, J2000 + 5.0, J2000 + 7.5, J2000 + 10.0]

    def test_sample_times_partial_last_step(self):
        assert sample_times(J2000, J2000 + 4.0, 3.0) == [J2000, J2000 + 3.0]

    def test_sample_times_validation(self):
        with pytest.raises(ValueError, match="step_days must be positive"):
            sample_times(J2000, J2000 + 1.0, 0.0)
        with pytest.raises(ValueError, match="end must be >= start"):
            sample_times(J2000 + 1.0, J2000, 1.0)

    def test_sample_trajectory(self):
        points = sample_trajectory(COMET_ELEMENTS, TP - 10.0, TP + 10.0, 1.0)
        assert len(points) == 21
        assert all(p.available for _jd, p in points)

    def test_sample_trajectory_drops_unavailable(self):
        bad = OrbitalElementSet(e=2.0, q_au=-1.0, tp_jd=TP)
        assert sample_trajectory(bad, TP - 10.0, TP + 10.0, 1.0) == []

    def test_orbit_track_closes(self):
        mars = PLANET_ELEMENTS["mars"]
        track = orbit_track(mars, n_points=90)
        assert len(track) == 91
        first, last = track[0][1], track[-1][1]
        assert first.as_tuple() == pytest.approx(last.as_tuple(), abs=1e-8)

    def test_orbit_track_needs_ellipse(self):
        with pytest.raises(ValueError, match="elliptic element set"):
            orbit_track(COMET_ELEMENTS)


class TestApproach:
    def test_au_to_km(self):
        assert au_to_km(1.0) == KM_PER_AU

    def test_distance(self):
        assert distance_au(PositionVector(1.0, 0.0, 0.0), PositionVector(1.0, 3.0, 4.0)) == 5.0

    def test_distance_refuses_sentinel(self):
        with pytest.raises(ValueError, match="unavailable"):
            distance_au(UNAVAILABLE, PositionVector(1.0, 0.0, 0.0))

    def test_finds_minimum(self):
        a = [(1.0, PositionVector(0.0, 0.0, 0.0)), (2.0, PositionVector(1.0, 0.0, 0.0)), (3.0, PositionVector(2.0, 0.0, 0.0))]
        b = [(1.0, PositionVector(0.0, 3.0, 0.0)), (2.0, PositionVector(1.0, 0.5, 0.0)), (3.0, PositionVector(2.0, 2.0, 0.0))]

        approach = find_closest_approach(a, b)

        assert approach == CloseApproach(jd=2.0, distance_au=0.5, position_primary=(1.0, 0.0, 0.0),
                                         position_secondary=(1.0, 0.5, 0.0))
        assert approach.distance_km == pytest.approx(0.5 * KM_PER_AU)

    def test_skips_unpaired_and_unavailable(self):
        a = [(1.0, PositionVector(0.0, 0.0, 0.0)), (2.0, UNAVAILABLE), (4.0, PositionVector(0.0, 0.0, 0.0))]
        b = [(1.0, PositionVector(0.0, 2.0, 0.0)), (2.0, PositionVector(0.0, 0.1, 0.0)), (3.0, PositionVector(0.0, 0.0, 0.0))]

        approach = find_closest_approach(a, b)

        assert approach.jd == 1.0
        assert approach.distance_au == 2.0

    def test_no_common_samples(self):
        a = [(1.0, PositionVector(0.0, 0.0, 0.0))]
        b = [(5.0, PositionVector(0.0, 0.0, 0.0))]
        assert find_closest_approach(a, b) is None
        assert find_closest_approach([], b) is None

    def test_comet_passes_earth_after_perihelion(self):
        comet = sample_trajectory(COMET_ELEMENTS, TP - 120.0, TP + 120.0, 1.0)
        earth = sample_trajectory(PLANET_ELEMENTS["earth"], TP - 120.0, TP + 120.0, 1.0)

        approach = find_closest_approach(comet, earth)

        assert approach is not None
        assert approach.jd > TP
        assert 1.0 < approach.distance_au < 3.0

    def test_days_until(self):
        assert days_until(J2000, J2000 + 3.5) == 3.5
        assert days_until(J2000 + 1.0, J2000) == -1.0
