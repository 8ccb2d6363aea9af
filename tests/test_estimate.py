"""Quick estimate and its JSON store."""
import pytest

from rcc_takeoff.estimate import (
    EstimateRecord,
    EstimateStore,
    calculate_estimate,
    estimate_quantity,
)


class TestCalculateEstimate:

    def test_valid_parameter(self):
        result = calculate_estimate("100", "concrete", "volume")
        assert "Group: concrete" in result
        assert "Breakdown: volume" in result
        assert "Parameter: 100" in result
        assert "Estimated Quantity: 110" in result

    def test_line_order(self):
        lines = calculate_estimate("50", "steel", "weight").split("\n")
        assert [line.split(":")[0] for line in lines] == [
            "Group", "Breakdown", "Parameter", "Estimated Quantity"
        ]

    def test_empty_parameter(self):
        result = calculate_estimate("", "concrete", "volume")
        assert "Parameter: \n" in result
        assert result.endswith("Estimated Quantity: -")

    def test_zero_parameter(self):
        assert "Estimated Quantity: 0" in calculate_estimate("0", "concrete", "volume")

    def test_markup(self):
        assert estimate_quantity("50") == pytest.approx(55.0)

    def test_non_numeric_parameter(self):
        with pytest.raises(ValueError):
            calculate_estimate("abc", "concrete", "volume")


class TestEstimateRecord:

    def test_from_parameter(self):
        record = EstimateRecord.from_parameter("100", "concrete", "volume")
        assert record.estimated_quantity == pytest.approx(110.0)
        assert record.date

    def test_empty_parameter_has_no_quantity(self):
        assert EstimateRecord.from_parameter("", "concrete", "volume").estimated_quantity is None

    def test_negative_parameter_kept(self):
        record = EstimateRecord.from_parameter("-5", "concrete", "volume")
        assert record.estimated_quantity == pytest.approx(-5.5)


class TestEstimateStore:

    def test_save_and_list(self, tmp_path):
        store = EstimateStore(tmp_path / "estimates.json")
        assert store.list() == []

        first = store.save(EstimateRecord.from_parameter("100", "concrete", "volume"))
        second = store.save(EstimateRecord.from_parameter("50", "steel", "weight"))

        assert first["success"] is True
        assert first["id"] != second["id"]

        records = store.list()
        assert [r["group"] for r in records] == ["concrete", "steel"]
        assert records[0]["id"] == first["id"]
        assert records[0]["estimated_quantity"] == pytest.approx(110.0)

    def test_creates_parent_directory(self, tmp_path):
        store = EstimateStore(tmp_path / "data" / "estimates.json")
        store.save(EstimateRecord(group="g", breakdown="b", parameter=""))
        assert (tmp_path / "data" / "estimates.json").exists()
