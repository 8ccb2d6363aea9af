"""
Grid Geometry Module
Turns row/column grid lines into beam segment lengths and slab areas,
and checks grid integrity.

Nothing here raises for bad queries: area lookups return an AreaResult
with is_valid=False, grid checks return a list of messages.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Dict, Tuple, Optional, Any

from .models import GridLine, Floor, SlabAssignment

logger = logging.getLogger(__name__)


# Pitch used for a single-cell span when a grid has only one line
DEFAULT_ROW_SPACING_M = 4.0
DEFAULT_COL_SPACING_M = 5.0

X_DIRECTION = "x"  # along a row, between adjacent column lines
Y_DIRECTION = "y"  # along a column, between adjacent row lines

# Grid validation problem kinds
EMPTY_GRID = "empty_grid"
DUPLICATE_LABEL = "duplicate_label"
UNSORTED_POSITIONS = "unsorted_positions"


@dataclass
class BeamSegment:
    """One beam span between two adjacent grid lines."""
    beam_id: str
    direction: str
    label: str
    length: float
    index: int  # position in col_beam_ids / row_beam_ids


@dataclass
class AreaResult:
    """Outcome of a grid area lookup."""
    area: float = 0.0
    width: float = 0.0
    length: float = 0.0
    is_valid: bool = True
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'area': self.area,
            'width': self.width,
            'length': self.length,
            'is_valid': self.is_valid
        }
        if self.error:
            data['error'] = self.error
        return data


@dataclass
class GridValidationResult:
    """Grid integrity check result; empty errors means valid."""
    errors: List[str] = field(default_factory=list)
    # Problem kind per message, parallel to errors
    kinds: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, kind: str, message: str) -> None:
        self.kinds.append(kind)
        self.errors.append(message)

    def to_dict(self) -> Dict[str, Any]:
        return {'is_valid': self.is_valid, 'errors': list(self.errors)}


def segment_length(line_a: GridLine, line_b: GridLine) -> float:
    """Distance between two grid lines."""
    return abs(line_b.position - line_a.position)


def col_beam_index(row: int, col_gap: int, num_cols: int) -> int:
    """Slot of the X-direction beam at (row, col_gap) in col_beam_ids."""
    return row * (num_cols - 1) + col_gap


def row_beam_index(col: int, row_gap: int, num_rows: int) -> int:
    """Slot of the Y-direction beam at (col, row_gap) in row_beam_ids."""
    return col * (num_rows - 1) + row_gap


def column_index(row: int, col: int, num_cols: int) -> int:
    """Slot of the column at (row, col) in column_ids."""
    return row * num_cols + col


def _slot(ids: List[str], index: int) -> str:
    # Short arrays read as unassigned
    return ids[index] if index < len(ids) else ""


def x_segments(rows: List[GridLine], cols: List[GridLine], col_beam_ids: List[str]) -> List[BeamSegment]:
    """X-direction segments, row by row."""
    segments = []
    num_cols = len(cols)
    for r, row in enumerate(rows):
        for c in range(num_cols - 1):
            start, end = cols[c], cols[c + 1]
            index = col_beam_index(r, c, num_cols)
            segments.append(BeamSegment(
                beam_id=_slot(col_beam_ids, index),
                direction=X_DIRECTION,
                label=f"{row.label}{start.label}-{row.label}{end.label}",
                length=segment_length(start, end),
                index=index
            ))
    return segments


def y_segments(rows: List[GridLine], cols: List[GridLine], row_beam_ids: List[str]) -> List[BeamSegment]:
    """Y-direction segments, column by column."""
    segments = []
    num_rows = len(rows)
    for c, col in enumerate(cols):
        for r in range(num_rows - 1):
            start, end = rows[r], rows[r + 1]
            index = row_beam_index(c, r, num_rows)
            segments.append(BeamSegment(
                beam_id=_slot(row_beam_ids, index),
                direction=Y_DIRECTION,
                label=f"{start.label}{col.label}-{end.label}{col.label}",
                length=segment_length(start, end),
                index=index
            ))
    return segments


def beam_segments(floor: Floor) -> List[BeamSegment]:
    """All beam segments of a floor, X direction first, assigned or not."""
    return (
        x_segments(floor.rows, floor.cols, floor.col_beam_ids) +
        y_segments(floor.rows, floor.cols, floor.row_beam_ids)
    )


def _index_of(label: str, lines: List[GridLine]) -> int:
    for i, line in enumerate(lines):
        if line.label == label:
            return i
    return -1


def _cell_pitch(index: int, lines: List[GridLine], default: float) -> float:
    """
    Pitch of the bay starting at lines[index].

    The last line has no bay of its own and reuses the previous spacing.
    """
    if len(lines) == 1:
        return default
    if index < len(lines) - 1:
        return abs(lines[index + 1].position - lines[index].position)
    return abs(lines[index].position - lines[index - 1].position)


def calculate_grid_area(
    start_row: str,
    end_row: str,
    start_col: str,
    end_col: str,
    rows: List[GridLine],
    cols: List[GridLine],
    default_row_spacing: float = DEFAULT_ROW_SPACING_M,
    default_col_spacing: float = DEFAULT_COL_SPACING_M
) -> AreaResult:
    """
    Area covered by a row/column span.

    A single cell (same start and end labels) takes the pitch of the bay
    starting at that line; a wider span is measured line to line.

    Returns:
        AreaResult, with is_valid=False and an error message on bad input
    """
    if not rows or not cols:
        return AreaResult(is_valid=False, error="rows or columns are empty")

    start_row_idx = _index_of(start_row, rows)
    end_row_idx = _index_of(end_row, rows)
    start_col_idx = _index_of(start_col, cols)
    end_col_idx = _index_of(end_col, cols)

    missing = []
    if start_row_idx < 0:
        missing.append(f'start row "{start_row}"')
    if end_row_idx < 0:
        missing.append(f'end row "{end_row}"')
    if start_col_idx < 0:
        missing.append(f'start column "{start_col}"')
    if end_col_idx < 0:
        missing.append(f'end column "{end_col}"')
    if missing:
        return AreaResult(is_valid=False, error=f"Grid labels not found: {', '.join(missing)}")

    if start_row_idx > end_row_idx or start_col_idx > end_col_idx:
        return AreaResult(is_valid=False, error="start position must be before end position")

    if start_row_idx == end_row_idx and start_col_idx == end_col_idx:
        width = _cell_pitch(start_row_idx, rows, default_row_spacing)
        length = _cell_pitch(start_col_idx, cols, default_col_spacing)
    else:
        width = abs(rows[end_row_idx].position - rows[start_row_idx].position)
        length = abs(cols[end_col_idx].position - cols[start_col_idx].position)

    if width <= 0 or length <= 0:
        return AreaResult(
            width=width,
            length=length,
            is_valid=False,
            error=f"Invalid dimensions: width={width}, length={length}"
        )

    return AreaResult(area=width * length, width=width, length=length)


def _duplicates(lines: List[GridLine]) -> List[str]:
    seen = set()
    dupes = []
    for line in lines:
        if line.label in seen and line.label not in dupes:
            dupes.append(line.label)
        seen.add(line.label)
    return dupes


def _ascending(lines: List[GridLine]) -> bool:
    return all(a.position < b.position for a, b in zip(lines, lines[1:]))


def validate_grid_system(rows: List[GridLine], cols: List[GridLine]) -> GridValidationResult:
    """
    Check grid integrity.

    Advisory only: quantities are still computed for an invalid grid.
    """
    result = GridValidationResult()

    if not rows:
        result.add(EMPTY_GRID, "No rows defined")
    if not cols:
        result.add(EMPTY_GRID, "No columns defined")

    row_dupes = _duplicates(rows)
    if row_dupes:
        result.add(DUPLICATE_LABEL, f"Duplicate row labels: {', '.join(row_dupes)}")
    col_dupes = _duplicates(cols)
    if col_dupes:
        result.add(DUPLICATE_LABEL, f"Duplicate column labels: {', '.join(col_dupes)}")

    if not _ascending(rows):
        result.add(UNSORTED_POSITIONS, "Row positions must be in ascending order")
    if not _ascending(cols):
        result.add(UNSORTED_POSITIONS, "Column positions must be in ascending order")

    if result.errors:
        logger.debug(f"Grid validation found {len(result.errors)} problem(s)")
    return result


def parse_grid_position(
    position: str,
    rows: List[GridLine],
    cols: List[GridLine]
) -> Optional[Tuple[int, int]]:
    """
    Resolve "<row><col>" (e.g. "A1", "B12") to (row_index, col_index).

    Longer row labels are tried first so "AA1" is not read as "A" + "A1".
    """
    for r in sorted(range(len(rows)), key=lambda i: -len(rows[i].label)):
        label = rows[r].label
        if label and position.startswith(label):
            c = _index_of(position[len(label):], cols)
            if c >= 0:
                return r, c
    return None


def span_cells(assignment: SlabAssignment, rows: List[GridLine], cols: List[GridLine]) -> List[str]:
    """Cell keys covered by a slab assignment; empty if the span does not resolve."""
    r0, r1 = _index_of(assignment.start_row, rows), _index_of(assignment.end_row, rows)
    c0, c1 = _index_of(assignment.start_col, cols), _index_of(assignment.end_col, cols)
    if min(r0, r1, c0, c1) < 0:
        return []
    return [
        f"{rows[r].label}{cols[c].label}"
        for r in range(r0, r1 + 1)
        for c in range(c0, c1 + 1)
    ]


def calculate_total_slab_area(assignments: List[SlabAssignment], slab_spec_id: str) -> float:
    """Sum of assigned areas for one slab spec."""
    return sum(a.area for a in assignments if a.slab_spec_id == slab_spec_id)
