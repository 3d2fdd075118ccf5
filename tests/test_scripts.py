import json

from comet_tracker.scripts.tracker_run import main


def test_tracker_run_reports_missing_ids(tmp_path, caplog, monkeypatch):
    doc = {
        "bodies": {
            "mars": {
                "name": "Mars", "a_au": 1.52371, "e": 0.0934, "inc_deg": 1.85,
                "argp_deg": 286.5, "node_deg": 49.56, "M0_deg": 19.39,
                "period_days": 686.98, "epoch_jd": 2451545.0,
            },
        }
    }
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(doc), encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    with caplog.at_level("ERROR", logger="tracker_run"):
        assert main([str(path)]) == 1

    assert "no body with id: comet, earth" in caplog.text
    assert not (tmp_path / "out").exists()
