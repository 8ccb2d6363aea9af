"""JSON/CSV export and pandas workbook export."""
import csv
import json

import pandas as pd
import pytest

from rcc_takeoff.reporting import (
    build_beams_df,
    build_columns_df,
    build_floor_totals_df,
    build_footings_df,
    build_slabs_df,
    export_to_excel,
    export_to_json,
)
from rcc_takeoff.structural import (
    BuildingSummary,
    compute_building_summary,
    export_structural,
    generate_qc_report,
)


@pytest.fixture
def summary(building):
    return compute_building_summary(building)


class TestStructuralExporter:

    def test_export_all(self, tmp_path, building, summary):
        paths = export_structural(tmp_path, "building-1", summary, generate_qc_report(building))

        assert set(paths) == {"json", "beams_csv", "columns_csv", "slabs_csv", "footings_csv", "boq"}
        for path in paths.values():
            assert path.exists()
            assert path.parent == tmp_path / "building-1"

    def test_json_content(self, tmp_path, building, summary):
        paths = export_structural(tmp_path, "building-1", summary, generate_qc_report(building))
        data = json.loads(paths["json"].read_text())
        assert data["summary"]["building_name"] == "Test Building"
        assert data["summary"]["total_concrete_volume"] == pytest.approx(34.98)
        assert data["qc"]["issues"]["errors"] == 0

    def test_json_without_qc(self, tmp_path, summary):
        paths = export_structural(tmp_path, "b", summary)
        assert json.loads(paths["json"].read_text())["qc"] == {}

    def test_columns_csv(self, tmp_path, summary):
        paths = export_structural(tmp_path, "building-1", summary)
        with open(paths["columns_csv"], newline="") as f:
            rows = list(csv.reader(f))
        assert rows[0][:4] == ["Floor", "Column ID", "Locations", "Count"]
        assert rows[1][:4] == ["Ground Floor", "C1", "1A; 1C; 2A; 2C; 3A; 3C", "6"]

    def test_boq_total_row(self, tmp_path, summary):
        paths = export_structural(tmp_path, "building-1", summary)
        with open(paths["boq"], newline="") as f:
            rows = list(csv.reader(f))
        total = next(r for r in rows if r and r[0] == "TOTAL")
        assert float(total[1]) == pytest.approx(34.98)


class TestDataFrames:

    def test_beams_df_total_row(self, summary):
        df = build_beams_df(summary)
        assert len(df) == 2
        assert df.iloc[-1]["Floor"] == "TOTAL"
        assert df.iloc[-1]["Total Length (m)"] == pytest.approx(54.0)

    def test_columns_df(self, summary):
        df = build_columns_df(summary)
        assert df.iloc[0]["Count"] == 6
        assert df.iloc[-1]["Count"] == 6

    def test_slabs_and_footings_df(self, summary):
        slabs = build_slabs_df(summary)
        footings = build_footings_df(summary)
        assert slabs.iloc[0]["Slab ID"] == "S1"
        assert slabs.iloc[0]["Total Area (m²)"] == pytest.approx(40.0)
        assert footings.iloc[0]["Locations"] == "1A, 3C"

    def test_floor_totals_df(self, summary):
        df = build_floor_totals_df(summary)
        assert list(df["Floor"]) == ["Ground Floor", "Foundation", "TOTAL"]
        assert df.iloc[-1]["Concrete (m³)"] == pytest.approx(34.98)

    def test_empty_summary_has_no_total_row(self):
        df = build_beams_df(BuildingSummary())
        assert len(df) == 0
        assert "Beam ID" in df.columns


class TestWorkbook:

    def test_export_to_excel(self, tmp_path, summary):
        path = tmp_path / "out" / "takeoff.xlsx"
        data = export_to_excel(summary, path)

        assert path.exists()
        assert len(data) > 0

        sheets = pd.read_excel(path, sheet_name=None)
        assert list(sheets) == ["Summary", "Floors", "Beams", "Columns", "Slabs", "Footings"]
        assert sheets["Columns"].iloc[0]["Column ID"] == "C1"

    def test_export_to_json(self, tmp_path, summary):
        path = tmp_path / "summary.json"
        text = export_to_json(summary, path)
        assert json.loads(path.read_text()) == json.loads(text)
        assert json.loads(text)["building_id"] == "building-1"
