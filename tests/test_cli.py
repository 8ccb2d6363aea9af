"""Command line smoke tests."""
import json

import pytest

from rcc_takeoff.__main__ import main


class TestSummary:

    def test_text(self, building_json, capsys):
        assert main(["summary", str(building_json)]) == 0
        out = capsys.readouterr().out
        assert "BUILDING: Test Building" in out
        assert "Total concrete: 34.980" in out

    def test_json(self, building_json, capsys):
        assert main(["summary", str(building_json), "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["building_id"] == "building-1"

    def test_exports(self, building_yaml, tmp_path, capsys):
        out_dir = tmp_path / "out"
        excel = tmp_path / "takeoff.xlsx"
        assert main(["summary", str(building_yaml), "--output", str(out_dir), "--excel", str(excel)]) == 0
        assert (out_dir / "building-1" / "boq_summary.csv").exists()
        assert excel.exists()

    def test_missing_file(self, tmp_path, capsys):
        assert main(["summary", str(tmp_path / "nope.json")]) == 1
        assert "not found" in capsys.readouterr().out


class TestValidate:

    def test_clean_building(self, building_json, capsys):
        assert main(["validate", str(building_json)]) == 0
        assert "0 error(s)" in capsys.readouterr().out

    def test_errors_exit_nonzero(self, tmp_path, building_dict):
        building_dict["floors"][0]["structuralSystem"]["rows"][1]["label"] = "1"
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(building_dict))
        assert main(["validate", str(path)]) == 1


class TestArea:

    def test_span(self, building_json, capsys):
        assert main(["area", str(building_json), "--floor", "floor-1", "1", "2", "A", "B"]) == 0
        assert "Area: 20.000" in capsys.readouterr().out

    def test_invalid_span(self, building_json, capsys):
        assert main(["area", str(building_json), "--floor", "floor-1", "3", "1", "A", "B"]) == 1
        assert "start position must be before end position" in capsys.readouterr().out

    def test_unknown_floor(self, building_json, capsys):
        assert main(["area", str(building_json), "--floor", "roof", "1", "1", "A", "A"]) == 1


class TestUnit:

    def test_column(self, building_json, capsys):
        assert main(["unit", str(building_json), "--floor", "floor-1", "C1"]) == 0
        out = capsys.readouterr().out
        assert "ColumnSpec C1 (per member)" in out
        assert "Grade 60 steel: 37.87 kg" in out

    def test_unknown_spec(self, building_json, capsys):
        assert main(["unit", str(building_json), "--floor", "floor-1", "X1"]) == 1


class TestEstimate:

    def test_print_and_save(self, tmp_path, capsys):
        store = tmp_path / "estimates.json"
        assert main(["estimate", "100", "--group", "concrete", "--breakdown", "volume",
                     "--save", str(store)]) == 0
        out = capsys.readouterr().out
        assert "Estimated Quantity: 110" in out
        assert "Saved:" in out
        assert len(json.loads(store.read_text())) == 1

    def test_non_numeric(self, capsys):
        assert main(["estimate", "abc"]) == 1

    def test_negative_parameter_saved(self, tmp_path, capsys):
        store = tmp_path / "estimates.json"
        assert main(["estimate", "-5", "--save", str(store)]) == 0
        assert "Estimated Quantity: -5.5" in capsys.readouterr().out
        saved = json.loads(store.read_text())
        assert saved[0]["estimated_quantity"] == pytest.approx(-5.5)


def test_no_command(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()
