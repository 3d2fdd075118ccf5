"""
Run the tracker over a span of days around now and write plotly scenes.

    python -m comet_tracker.scripts.tracker_run [catalog.json]
"""

import logging
import sys
from datetime import datetime, timedelta, timezone

from comet_tracker.analysis.approach import au_to_km, days_until, find_closest_approach
from comet_tracker.analysis.trajectory import sample_trajectory
from comet_tracker.core.timescale import from_julian_day, to_julian_day
from comet_tracker.objects.catalog import default_bodies, load_catalog
from comet_tracker.simulation.engine import Engine
from comet_tracker.simulation.scenario import Scenario
from comet_tracker.simulation.systems.distance_system import DistanceSystem
from comet_tracker.simulation.systems.state_recorder import StateRecorderSystem
from comet_tracker.visualization.plotly_viewer import render_animated_body, render_static_scene

logger = logging.getLogger("tracker_run")


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    argv = sys.argv[1:] if argv is None else argv

    bodies = load_catalog(argv[0]) if argv else default_bodies()
    scenario = Scenario.from_bodies("Comet Tracker", bodies)

    missing = [body_id for body_id in ("comet", "earth") if body_id not in scenario.bodies]
    if missing:
        logger.error("Catalog has no body with id: %s", ", ".join(missing))
        return 1

    now = datetime.now(timezone.utc)
    start = now - timedelta(days=180)
    end = now + timedelta(days=365)

    engine = Engine(dt_days=2.0, systems=[StateRecorderSystem(), DistanceSystem("comet", "earth")])
    log = engine.run(scenario, start, end)

    comet = scenario.body("comet")
    earth = scenario.body("earth")
    comet_path = sample_trajectory(comet.elements, start, end, 0.5, label="comet")
    earth_path = sample_trajectory(earth.elements, start, end, 0.5, label="earth")

    approach = find_closest_approach(comet_path, earth_path)
    if approach is None:
        logger.warning("No common samples for comet and earth.")
    else:
        print(f"Closest approach to Earth: {from_julian_day(approach.jd):%Y-%m-%d} "
              f"at {approach.distance_au:.3f} AU ({au_to_km(approach.distance_au) / 1e6:.1f}M km)")
        remaining = days_until(to_julian_day(now), approach.jd)
        print("Passed Earth!" if remaining <= 0 else f"{int(remaining)} days to go")

    static_path = render_static_scene(log, out_html="out/tracker_scene.html")
    anim_path = render_animated_body(log, body_id="comet", out_html="out/tracker_animated.html")

    print("Wrote:")
    print(" -", static_path)
    print(" -", anim_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
