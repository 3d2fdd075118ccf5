import json
from datetime import datetime, timezone

import pytest

from comet_tracker.core.timescale import to_julian_day
from comet_tracker.objects.catalog import (
    COMET_ELEMENTS,
    PLANET_ELEMENTS,
    catalog_from_dict,
    default_bodies,
    default_elements,
    elements_from_dict,
    load_catalog,
)
from comet_tracker.physics.orbit import OrbitBranch, compute_position


def test_default_table_validates():
    table = default_elements()
    assert set(table) == set(PLANET_ELEMENTS) | {"comet"}
    for elements in table.values():
        elements.validate()
    assert COMET_ELEMENTS.validate() is OrbitBranch.HYPERBOLIC


def test_default_table_is_a_fresh_mapping():
    table = default_elements()
    table.pop("earth")
    assert "earth" in default_elements()


def test_default_bodies_kinds():
    bodies = default_bodies()
    assert bodies["comet"].kind == "comet"
    assert bodies["comet"].name == "3I/ATLAS"
    assert bodies["mars"].kind == "planet"


def test_all_default_bodies_propagate():
    for body in default_bodies().values():
        assert body.position_at(2460977.5).available


def test_planet_distances_are_sensible():
    for body_id, elements in PLANET_ELEMENTS.items():
        r = compute_position(elements, 2460000.0).radius_au
        assert elements.a_au * (1 - elements.e) - 1e-9 <= r <= elements.a_au * (1 + elements.e) + 1e-9, body_id


def test_elements_from_dict_accepts_iso_dates():
    elements = elements_from_dict({
        "e": 6.139587,
        "q_au": 1.356419,
        "tp_jd": "2025-10-29T11:33:16Z",
        "inc_deg": 175.113,
    })
    expected = to_julian_day(datetime(2025, 10, 29, 11, 33, 16, tzinfo=timezone.utc))
    assert elements.tp_jd == expected
    assert elements.validate() is OrbitBranch.HYPERBOLIC


def test_elements_from_dict_rejects_unknown_fields():
    with pytest.raises(ValueError, match="Unknown element fields: inclination"):
        elements_from_dict({"e": 0.1, "inclination": 3.0})


def test_elements_from_dict_requires_eccentricity():
    with pytest.raises(ValueError, match="missing eccentricity"):
        elements_from_dict({"a_au": 1.0})


def test_catalog_from_dict_names_bad_entry():
    data = {"bodies": {"bad": {"e": 2.0, "q_au": -1.0, "tp_jd": 2460000.0}}}
    with pytest.raises(ValueError, match="Invalid catalog entry 'bad'"):
        catalog_from_dict(data)


def test_catalog_requires_bodies():
    with pytest.raises(ValueError, match="non-empty 'bodies'"):
        catalog_from_dict({})


def test_load_catalog(tmp_path, caplog):
    doc = {
        "bodies": {
            "earth": {
                "name": "Earth", "a_au": 1.0, "e": 0.0167, "inc_deg": 0.0,
                "argp_deg": 102.94719, "node_deg": 0.0, "M0_deg": 357.529,
                "period_days": 365.25, "epoch_jd": 2451545.0,
            },
            "comet": {
                "name": "3I/ATLAS", "q_au": 1.356419, "e": 6.139587,
                "inc_deg": 175.113, "argp_deg": 128.010, "node_deg": 322.157,
                "tp_jd": 2460977.981439, "closest_approach_jd": "2025-12-19",
            },
        }
    }
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(doc), encoding="utf-8")

    with caplog.at_level("INFO", logger="comet_tracker.objects.catalog"):
        bodies = load_catalog(path)

    assert set(bodies) == {"earth", "comet"}
    assert bodies["comet"].kind == "comet"
    assert bodies["earth"].kind == "planet"
    assert bodies["comet"].elements.closest_approach_jd == 2461028.5
    assert abs(bodies["earth"].position_at(2451545.0).radius_au - 0.9833) < 1e-3
    assert "Loaded 2 bodies" in caplog.text
