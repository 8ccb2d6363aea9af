"""Grid geometry: segments, areas, validation."""
import pytest

from rcc_takeoff.structural import GridLine, SlabAssignment
from rcc_takeoff.structural.grid import (
    DUPLICATE_LABEL,
    EMPTY_GRID,
    UNSORTED_POSITIONS,
    X_DIRECTION,
    Y_DIRECTION,
    beam_segments,
    calculate_grid_area,
    calculate_total_slab_area,
    col_beam_index,
    column_index,
    parse_grid_position,
    row_beam_index,
    segment_length,
    span_cells,
    validate_grid_system,
)


class TestIndexing:

    def test_segment_length(self):
        assert segment_length(GridLine("A", 10), GridLine("B", 4)) == 6

    def test_index_formulas(self):
        # 3 rows x 4 cols
        assert col_beam_index(2, 1, 4) == 2 * 3 + 1
        assert row_beam_index(3, 1, 3) == 3 * 2 + 1
        assert column_index(2, 3, 4) == 11


class TestBeamSegments:

    def test_counts_and_order(self, ground_floor):
        segments = beam_segments(ground_floor)
        assert len(segments) == 12
        assert [s.direction for s in segments[:6]] == [X_DIRECTION] * 6
        assert [s.direction for s in segments[6:]] == [Y_DIRECTION] * 6

    def test_labels_and_lengths(self, ground_floor):
        segments = beam_segments(ground_floor)
        assert segments[0].label == "1A-1B"
        assert segments[0].length == 5
        assert segments[6].label == "1A-2A"
        assert segments[6].length == 4

    def test_short_arrays_read_as_unassigned(self, ground_floor):
        ground_floor.col_beam_ids = ["B1"]
        segments = beam_segments(ground_floor)
        assert segments[0].beam_id == "B1"
        assert segments[1].beam_id == ""


class TestCalculateGridArea:

    def test_interior_single_cell(self, grid_rows, grid_cols):
        result = calculate_grid_area("A", "A", "1", "1", grid_rows, grid_cols)
        assert result.is_valid
        assert result.area == 20

    def test_last_cell_reuses_previous_spacing(self, grid_rows, grid_cols):
        result = calculate_grid_area("C", "C", "4", "4", grid_rows, grid_cols)
        assert result.is_valid
        assert result.width == 4
        assert result.length == 5
        assert result.area == 20

    def test_multi_cell_span(self, grid_rows, grid_cols):
        result = calculate_grid_area("A", "C", "1", "3", grid_rows, grid_cols)
        assert result.width == 8
        assert result.length == 10
        assert result.area == 80

    def test_single_line_uses_defaults(self):
        result = calculate_grid_area("A", "A", "1", "1", [GridLine("A", 0)], [GridLine("1", 0)])
        assert result.area == 4.0 * 5.0

    def test_custom_defaults(self):
        result = calculate_grid_area(
            "A", "A", "1", "1", [GridLine("A", 0)], [GridLine("1", 0)],
            default_row_spacing=3.0, default_col_spacing=6.0
        )
        assert result.area == 18.0

    def test_empty_grid(self, grid_cols):
        result = calculate_grid_area("A", "A", "1", "1", [], grid_cols)
        assert not result.is_valid
        assert result.error == "rows or columns are empty"

    def test_missing_labels_all_named(self, grid_rows, grid_cols):
        result = calculate_grid_area("X", "A", "1", "9", grid_rows, grid_cols)
        assert not result.is_valid
        assert 'start row "X"' in result.error
        assert 'end column "9"' in result.error
        assert "end row" not in result.error

    def test_reversed_span(self, grid_rows, grid_cols):
        result = calculate_grid_area("C", "A", "1", "2", grid_rows, grid_cols)
        assert not result.is_valid
        assert result.error == "start position must be before end position"

    def test_zero_dimension_is_invalid(self, grid_rows, grid_cols):
        # Same row line, different columns: zero width
        result = calculate_grid_area("A", "A", "1", "3", grid_rows, grid_cols)
        assert not result.is_valid
        assert "width=0" in result.error

    def test_to_dict(self, grid_rows, grid_cols):
        data = calculate_grid_area("X", "A", "1", "1", grid_rows, grid_cols).to_dict()
        assert data["is_valid"] is False
        assert "error" in data


class TestValidateGridSystem:

    def test_valid(self, grid_rows, grid_cols):
        result = validate_grid_system(grid_rows, grid_cols)
        assert result.is_valid
        assert result.errors == []

    def test_empty(self):
        result = validate_grid_system([], [])
        assert "No rows defined" in result.errors
        assert "No columns defined" in result.errors

    def test_duplicates(self, grid_cols):
        rows = [GridLine("A", 0), GridLine("A", 4)]
        result = validate_grid_system(rows, grid_cols)
        assert result.errors == ["Duplicate row labels: A"]

    def test_unsorted(self, grid_rows):
        cols = [GridLine("1", 0), GridLine("2", 5), GridLine("3", 5)]
        result = validate_grid_system(grid_rows, cols)
        assert result.errors == ["Column positions must be in ascending order"]

    def test_kinds_follow_errors(self):
        rows = [GridLine("A", 4), GridLine("A", 0)]
        result = validate_grid_system(rows, [])
        assert result.kinds == [EMPTY_GRID, DUPLICATE_LABEL, UNSORTED_POSITIONS]
        assert len(result.kinds) == len(result.errors)


class TestGridHelpers:

    def test_parse_grid_position(self, grid_rows, grid_cols):
        assert parse_grid_position("B3", grid_rows, grid_cols) == (1, 2)
        assert parse_grid_position("D1", grid_rows, grid_cols) is None

    def test_parse_prefers_longer_row_label(self):
        rows = [GridLine("A", 0), GridLine("AA", 4)]
        cols = [GridLine("1", 0), GridLine("A1", 5)]
        assert parse_grid_position("AA1", rows, cols) == (1, 0)

    def test_span_cells(self, grid_rows, grid_cols):
        assignment = SlabAssignment("SA1", "S1", "A", "B", "1", "2")
        assert span_cells(assignment, grid_rows, grid_cols) == ["A1", "A2", "B1", "B2"]

    def test_span_cells_unresolved(self, grid_rows, grid_cols):
        assignment = SlabAssignment("SA1", "S1", "A", "Z", "1", "2")
        assert span_cells(assignment, grid_rows, grid_cols) == []

    def test_total_slab_area(self):
        assignments = [
            SlabAssignment("SA1", "S1", "A", "A", "1", "1", area=20),
            SlabAssignment("SA2", "S2", "A", "A", "2", "2", area=20),
            SlabAssignment("SA3", "S1", "B", "B", "1", "1", area=15),
        ]
        assert calculate_total_slab_area(assignments, "S1") == pytest.approx(35)
