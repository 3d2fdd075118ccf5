import logging
import math
from datetime import datetime, timezone

from comet_tracker.core.timescale import to_julian_day
from comet_tracker.objects.catalog import default_bodies

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

now = datetime.now(timezone.utc)
jd = to_julian_day(now)
print(f"{now.isoformat()}  JD {jd:.5f}")

for body in default_bodies().values():
    pos = body.position_at(jd)
    if not pos.available:
        print(f"{body.name:10s} unavailable")
        continue
    print(f"{body.name:10s} x={pos.x:+9.4f} y={pos.y:+9.4f} z={pos.z:+9.4f}  r={pos.radius_au:8.4f} AU")
