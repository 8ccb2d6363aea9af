"""
Building Data Model
Grid lines, member specifications and floor assignments as read by the
quantity engine, plus loaders for JSON/YAML building documents.

Documents may use the camelCase keys of the grid editor
(``colBeamIds``, ``topBarSize``...) or snake_case keys.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Dict, Optional, Any, Union

import yaml

from .bars import BuildingFormatError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridLine:
    """A labelled coordinate line (meters along its axis)."""
    label: str
    position: float


@dataclass
class StructuralSystem:
    """Row and column grid lines of a floor."""
    rows: List[GridLine] = field(default_factory=list)
    cols: List[GridLine] = field(default_factory=list)

    @property
    def num_rows(self) -> int:
        return len(self.rows)

    @property
    def num_cols(self) -> int:
        return len(self.cols)


@dataclass
class BeamSpec:
    """Beam section (meters) with bar counts per layer; stirrup_qty is per meter of beam."""
    id: str
    width: float
    depth: float
    top_bar_size: Optional[int] = None
    top_bar_qty: int = 0
    web_bar_size: Optional[int] = None
    web_bar_qty: int = 0
    bottom_bar_size: Optional[int] = None
    bottom_bar_qty: int = 0
    stirrup_size: Optional[int] = None
    stirrup_qty: int = 0


@dataclass
class ColumnSpec:
    """Column section and floor-to-floor height (meters); tie spacing in meters."""
    id: str
    width: float
    depth: float
    height: float
    main_bar_size: Optional[int] = None
    main_bar_qty: int = 0
    tie_size: Optional[int] = None
    tie_spacing: float = 0.0


@dataclass
class SlabSpec:
    """Slab thickness and bar spacings, all in millimeters."""
    id: str
    thickness: float
    type: str = "one-way"  # "one-way" or "two-way"
    main_bar_size: Optional[int] = None
    main_bar_spacing: float = 0.0
    distribution_bar_size: Optional[int] = None
    distribution_bar_spacing: float = 0.0
    temperature_bar_size: Optional[int] = None
    temperature_bar_spacing: float = 0.0
    top_bar_size: Optional[int] = None
    top_bar_spacing: Optional[float] = None

    @property
    def is_two_way(self) -> bool:
        return self.type == "two-way"


@dataclass
class FootingSpec:
    """
    Footing footprint and depth (meters).

    Bar spacings are in millimeters except stirrup_spacing, which is in meters.
    """
    id: str
    width: float
    length: float
    depth: float
    type: str = "isolated"  # isolated, combined, strip, raft
    main_bar_size: Optional[int] = None
    main_bar_spacing: float = 0.0
    distribution_bar_size: Optional[int] = None
    distribution_bar_spacing: float = 0.0
    stirrup_size: Optional[int] = None
    stirrup_spacing: float = 0.0
    top_bars_required: bool = False
    top_bar_size: Optional[int] = None
    top_bar_spacing: Optional[float] = None


@dataclass
class SlabAssignment:
    """A slab spec placed over an inclusive row/column span."""
    id: str
    slab_spec_id: str
    start_row: str
    end_row: str
    start_col: str
    end_col: str
    area: float = 0.0

    @property
    def label(self) -> str:
        start = f"{self.start_row}{self.start_col}"
        end = f"{self.end_row}{self.end_col}"
        return start if start == end else f"{start}-{end}"


@dataclass
class FootingAssignment:
    """A footing spec placed at a grid intersection, e.g. "A1"."""
    footing_spec_id: str
    grid_position: str


@dataclass
class Floor:
    """
    One storey: grid, specification catalogs and assignments.

    Flat assignment arrays use the grid editor's index layout:
    col_beam_ids[row * (num_cols - 1) + col_gap],
    row_beam_ids[col * (num_rows - 1) + row_gap],
    column_ids[row * num_cols + col].
    """
    id: str
    level: int
    name: str
    structural_system: StructuralSystem
    beam_specs: List[BeamSpec] = field(default_factory=list)
    column_specs: List[ColumnSpec] = field(default_factory=list)
    slab_specs: List[SlabSpec] = field(default_factory=list)
    footing_specs: List[FootingSpec] = field(default_factory=list)
    col_beam_ids: List[str] = field(default_factory=list)
    row_beam_ids: List[str] = field(default_factory=list)
    column_ids: List[str] = field(default_factory=list)
    slab_assignments: List[SlabAssignment] = field(default_factory=list)
    footing_assignments: List[FootingAssignment] = field(default_factory=list)
    inherits_structural: bool = False

    @property
    def rows(self) -> List[GridLine]:
        return self.structural_system.rows

    @property
    def cols(self) -> List[GridLine]:
        return self.structural_system.cols

    def find_spec(self, spec_id: str):
        """Look up a specification of any kind by id."""
        for catalog in (self.beam_specs, self.column_specs, self.slab_specs, self.footing_specs):
            for spec in catalog:
                if spec.id == spec_id:
                    return spec
        return None


@dataclass
class Building:
    """A named, ordered list of floors."""
    id: str
    name: str
    floors: List[Floor] = field(default_factory=list)

    def get_floor(self, floor_id: str) -> Optional[Floor]:
        for floor in self.floors:
            if floor.id == floor_id:
                return floor
        return None


# =============================================================================
# LOADERS
# =============================================================================

_CAMEL_RE = re.compile(r'(?<!^)(?=[A-Z])')


def _snake(key: str) -> str:
    """colBeamIds -> col_beam_ids"""
    return _CAMEL_RE.sub('_', key).lower()


def _normalize(data: Dict[str, Any]) -> Dict[str, Any]:
    return {_snake(k): v for k, v in data.items()}


def _pick(data: Dict[str, Any], cls) -> Dict[str, Any]:
    """Keep only the keys the dataclass accepts."""
    allowed = cls.__dataclass_fields__.keys()
    return {k: v for k, v in data.items() if k in allowed}


def _spec(cls, raw: Dict[str, Any]):
    data = _pick(_normalize(raw), cls)
    try:
        return cls(**data)
    except TypeError as e:
        raise BuildingFormatError(f"Invalid {cls.__name__} {raw.get('id', '?')}: {e}") from e


def _grid_lines(raw: List[Dict[str, Any]]) -> List[GridLine]:
    return [GridLine(label=str(line['label']), position=float(line['position'])) for line in raw]


def _ids(raw: Optional[List[Any]]) -> List[str]:
    return [str(v) if v else "" for v in (raw or [])]


def floor_from_dict(
    raw: Dict[str, Any],
    default_row_spacing: Optional[float] = None,
    default_col_spacing: Optional[float] = None
) -> Floor:
    """
    Build a Floor from a document dict.

    Slab assignments without an area are measured off the grid, with the
    given fallback pitches for single-line sequences (grid defaults if None).
    """
    data = _normalize(raw)

    system_raw = _normalize(data.get('structural_system') or {})
    system = StructuralSystem(
        rows=_grid_lines(system_raw.get('rows') or []),
        cols=_grid_lines(system_raw.get('cols') or []),
    )
    for key, actual in (('num_rows', system.num_rows), ('num_cols', system.num_cols)):
        declared = system_raw.get(key)
        if declared is not None and int(declared) != actual:
            logger.warning(f"Floor {data.get('id')}: {key}={declared} does not match "
                           f"{actual} grid lines, using {actual}")

    floor = Floor(
        id=str(data.get('id', '')),
        level=int(data.get('level', 0)),
        name=str(data.get('name', '')),
        structural_system=system,
        beam_specs=[_spec(BeamSpec, s) for s in data.get('beam_specs') or []],
        column_specs=[_spec(ColumnSpec, s) for s in data.get('column_specs') or []],
        slab_specs=[_spec(SlabSpec, s) for s in data.get('slab_specs') or []],
        footing_specs=[_spec(FootingSpec, s) for s in data.get('footing_specs') or []],
        col_beam_ids=_ids(data.get('col_beam_ids')),
        row_beam_ids=_ids(data.get('row_beam_ids')),
        column_ids=_ids(data.get('column_ids')),
        footing_assignments=[
            _spec(FootingAssignment, a) for a in data.get('footing_assignments') or []
        ],
        inherits_structural=bool(data.get('inherits_structural', False)),
    )

    from .grid import calculate_grid_area, DEFAULT_ROW_SPACING_M, DEFAULT_COL_SPACING_M

    if default_row_spacing is None:
        default_row_spacing = DEFAULT_ROW_SPACING_M
    if default_col_spacing is None:
        default_col_spacing = DEFAULT_COL_SPACING_M

    for i, raw_assignment in enumerate(data.get('slab_assignments') or []):
        a = _normalize(raw_assignment)
        a.setdefault('id', f"SA{i + 1}")
        if a.get('area') is None:
            result = calculate_grid_area(
                a['start_row'], a['end_row'], a['start_col'], a['end_col'],
                system.rows, system.cols,
                default_row_spacing=default_row_spacing,
                default_col_spacing=default_col_spacing
            )
            a['area'] = result.area if result.is_valid else 0.0
        floor.slab_assignments.append(_spec(SlabAssignment, a))

    return floor


def building_from_dict(
    raw: Dict[str, Any],
    default_row_spacing: Optional[float] = None,
    default_col_spacing: Optional[float] = None
) -> Building:
    """Build a Building from a document dict."""
    if not isinstance(raw, dict):
        raise BuildingFormatError("Building document must be a mapping")
    try:
        floors = [
            floor_from_dict(f, default_row_spacing, default_col_spacing)
            for f in raw.get('floors') or []
        ]
    except BuildingFormatError:
        raise
    except (KeyError, ValueError, TypeError) as e:
        raise BuildingFormatError(f"Invalid floor definition: {e}") from e

    return Building(
        id=str(raw.get('id', '')),
        name=str(raw.get('name', '')),
        floors=floors,
    )


def load_building(
    path: Union[str, Path],
    default_row_spacing: Optional[float] = None,
    default_col_spacing: Optional[float] = None
) -> Building:
    """
    Load a building from a .json, .yaml or .yml file.

    The fallback pitches are passed on to floor_from_dict().

    Raises:
        BuildingFormatError: unknown extension or malformed document
    """
    path = Path(path)
    suffix = path.suffix.lower()

    with open(path) as f:
        if suffix == '.json':
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise BuildingFormatError(f"{path}: {e}") from e
        elif suffix in ('.yaml', '.yml'):
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise BuildingFormatError(f"{path}: {e}") from e
        else:
            raise BuildingFormatError(f"Unsupported building file type: {path.suffix}")

    building = building_from_dict(data, default_row_spacing, default_col_spacing)
    logger.info(f"Loaded building '{building.name}' with {len(building.floors)} floor(s) from {path}")
    return building
