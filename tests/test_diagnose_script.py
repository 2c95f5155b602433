import importlib.util
import json
import os

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def _load():
    spec = importlib.util.spec_from_file_location("diagnose_seeds", os.path.join(ROOT, "scripts", "diagnose_seeds.py"))
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


def test_run_for_seed_reports_structure():
    res = _load().run_for_seed("42", room_count=6, grid_size=30)
    assert res["seed"] == "42"
    assert res["rooms"] >= 1
    assert res["issues"]["overlapping_rooms"] == 0
    assert res["issues"]["out_of_bounds"] == 0
    assert res["issues"]["missing_entrance"] == 0


def test_main_prints_json_results(capsys):
    code = _load().main(["--rooms", "4", "--grid", "25", "a", "b"])
    data = json.loads(capsys.readouterr().out)
    assert [r["seed"] for r in data["results"]] == ["a", "b"]
    assert code == (0 if all(r["ok"] for r in data["results"]) else 1)
