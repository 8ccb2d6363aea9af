"""
Quantity Computation Engine
Walks every floor's beam, column, slab and footing assignments, groups
them by specification and rolls concrete volume and graded steel up to
floor and building totals.

The engine only reads its input. Assignments that name a specification
missing from the floor are skipped and contribute nothing.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any
from pathlib import Path
import yaml

from .models import Building, Floor, load_building
from .grid import beam_segments, calculate_grid_area, AreaResult
from .steel_estimator import (
    calculate_beam_reinforcement_weights,
    calculate_column_reinforcement_weights,
    calculate_slab_reinforcement_weights,
    calculate_footing_reinforcement_weights,
    calculate_beam_concrete_volume,
    calculate_column_concrete_volume,
    calculate_slab_concrete_volume,
    calculate_footing_concrete_volume,
)

logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "rules" / "assumptions.yaml"


@dataclass
class BeamBreakdown:
    """Quantities for one beam spec on a floor."""
    beam_id: str
    segments: List[str] = field(default_factory=list)
    total_length: float = 0.0
    concrete_volume: float = 0.0
    grade40_steel: float = 0.0
    grade60_steel: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'beam_id': self.beam_id,
            'segments': self.segments,
            'total_length': round(self.total_length, 3),
            'concrete_volume': round(self.concrete_volume, 4),
            'grade40_steel': round(self.grade40_steel, 2),
            'grade60_steel': round(self.grade60_steel, 2)
        }


@dataclass
class ColumnBreakdown:
    """Quantities for one column spec on a floor."""
    column_id: str
    locations: List[str] = field(default_factory=list)
    count: int = 0
    concrete_volume: float = 0.0
    grade40_steel: float = 0.0
    grade60_steel: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'column_id': self.column_id,
            'locations': self.locations,
            'count': self.count,
            'concrete_volume': round(self.concrete_volume, 4),
            'grade40_steel': round(self.grade40_steel, 2),
            'grade60_steel': round(self.grade60_steel, 2)
        }


@dataclass
class SlabBreakdown:
    """Quantities for one slab spec on a floor."""
    slab_id: str
    areas: List[str] = field(default_factory=list)
    total_area: float = 0.0
    concrete_volume: float = 0.0
    grade40_steel: float = 0.0
    grade60_steel: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'slab_id': self.slab_id,
            'areas': self.areas,
            'total_area': round(self.total_area, 3),
            'concrete_volume': round(self.concrete_volume, 4),
            'grade40_steel': round(self.grade40_steel, 2),
            'grade60_steel': round(self.grade60_steel, 2)
        }


@dataclass
class FootingBreakdown:
    """Quantities for one footing spec on a floor."""
    footing_id: str
    locations: List[str] = field(default_factory=list)
    count: int = 0
    concrete_volume: float = 0.0
    grade40_steel: float = 0.0
    grade60_steel: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'footing_id': self.footing_id,
            'locations': self.locations,
            'count': self.count,
            'concrete_volume': round(self.concrete_volume, 4),
            'grade40_steel': round(self.grade40_steel, 2),
            'grade60_steel': round(self.grade60_steel, 2)
        }


@dataclass
class FloorSummary:
    """Per-floor totals with per-specification breakdowns."""
    floor_id: str
    floor_name: str
    level: int = 0
    concrete_volume: float = 0.0
    grade40_steel: float = 0.0
    grade60_steel: float = 0.0
    beam_breakdown: List[BeamBreakdown] = field(default_factory=list)
    column_breakdown: List[ColumnBreakdown] = field(default_factory=list)
    slab_breakdown: List[SlabBreakdown] = field(default_factory=list)
    footing_breakdown: List[FootingBreakdown] = field(default_factory=list)

    @property
    def total_steel(self) -> float:
        return self.grade40_steel + self.grade60_steel

    def breakdowns(self) -> List[Any]:
        """All four breakdown lists in beam, column, slab, footing order."""
        return self.beam_breakdown + self.column_breakdown + self.slab_breakdown + self.footing_breakdown

    def to_dict(self) -> Dict[str, Any]:
        return {
            'floor_id': self.floor_id,
            'floor_name': self.floor_name,
            'level': self.level,
            'concrete_volume': round(self.concrete_volume, 4),
            'grade40_steel': round(self.grade40_steel, 2),
            'grade60_steel': round(self.grade60_steel, 2),
            'beam_breakdown': [b.to_dict() for b in self.beam_breakdown],
            'column_breakdown': [c.to_dict() for c in self.column_breakdown],
            'slab_breakdown': [s.to_dict() for s in self.slab_breakdown],
            'footing_breakdown': [f.to_dict() for f in self.footing_breakdown]
        }


@dataclass
class BuildingSummary:
    """Building totals and the per-floor summaries they are summed from."""
    total_concrete_volume: float = 0.0
    total_grade40_steel: float = 0.0
    total_grade60_steel: float = 0.0
    floor_breakdown: List[FloorSummary] = field(default_factory=list)
    building_id: str = ""
    building_name: str = ""

    @property
    def total_steel(self) -> float:
        return self.total_grade40_steel + self.total_grade60_steel

    @property
    def total_steel_tonnes(self) -> float:
        return self.total_steel / 1000

    def to_dict(self) -> Dict[str, Any]:
        return {
            'building_id': self.building_id,
            'building_name': self.building_name,
            'total_concrete_volume': round(self.total_concrete_volume, 4),
            'total_grade40_steel': round(self.total_grade40_steel, 2),
            'total_grade60_steel': round(self.total_grade60_steel, 2),
            'total_steel_tonnes': round(self.total_steel_tonnes, 3),
            'floor_breakdown': [f.to_dict() for f in self.floor_breakdown]
        }


class QuantityEngine:
    """
    Computes concrete volumes and graded steel for a building.

    Stateless apart from read-only configuration, so one engine can be
    shared between callers.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize engine with configuration."""
        self.config = self._load_config(config_path)

        grid = self.config.get('grid', {})
        self.default_row_spacing = grid.get('default_row_spacing_m', 4.0)
        self.default_col_spacing = grid.get('default_col_spacing_m', 5.0)

    def _load_config(self, path: Optional[Path]) -> Dict:
        """Load configuration from assumptions.yaml."""
        try:
            with open(path or DEFAULT_CONFIG_PATH) as f:
                return yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning(f"Config not found at {path or DEFAULT_CONFIG_PATH}, using defaults")
            return self._default_config()

    def _default_config(self) -> Dict:
        """Return default configuration."""
        return {
            'grid': {
                'default_row_spacing_m': 4.0,
                'default_col_spacing_m': 5.0
            },
            'qc': {
                'steel_ratio_kg_per_m3': {
                    'min': {'beam': 60, 'column': 80, 'slab': 30, 'footing': 30},
                    'max': {'beam': 300, 'column': 450, 'slab': 200, 'footing': 200}
                }
            },
            'slab': {
                'min_thickness_mm': {'one-way': 100, 'two-way': 125},
                'main_spacing_factor': 3,
                'max_main_spacing_mm': 300,
                'distribution_spacing_factor': 5,
                'max_distribution_spacing_mm': 450
            }
        }

    def compute_building_summary(self, building: Building) -> BuildingSummary:
        """
        Compute quantities for every floor and sum them.

        Args:
            building: Building to measure (not modified)

        Returns:
            BuildingSummary; all zeros for a building without floors
        """
        logger.info(f"Computing quantities for building '{building.name}' "
                    f"({len(building.floors)} floor(s))")

        summary = BuildingSummary(building_id=building.id, building_name=building.name)

        for floor in building.floors:
            floor_summary = self.build_floor_summary(floor)

            summary.total_concrete_volume += floor_summary.concrete_volume
            summary.total_grade40_steel += floor_summary.grade40_steel
            summary.total_grade60_steel += floor_summary.grade60_steel
            summary.floor_breakdown.append(floor_summary)

        return summary

    def load_building(self, path) -> Building:
        """Load a building, measuring unsized slab spans with the configured pitches."""
        return load_building(path, self.default_row_spacing, self.default_col_spacing)

    def calculate_area(
        self,
        floor: Floor,
        start_row: str,
        end_row: str,
        start_col: str,
        end_col: str
    ) -> AreaResult:
        """Grid area lookup on a floor using the configured fallback pitches."""
        return calculate_grid_area(
            start_row, end_row, start_col, end_col,
            floor.rows, floor.cols,
            default_row_spacing=self.default_row_spacing,
            default_col_spacing=self.default_col_spacing
        )

    def build_floor_summary(self, floor: Floor) -> FloorSummary:
        """Compute breakdowns and totals for one floor."""
        floor_summary = FloorSummary(floor_id=floor.id, floor_name=floor.name, level=floor.level)

        floor_summary.beam_breakdown = self._compute_beam_quantities(floor)
        floor_summary.column_breakdown = self._compute_column_quantities(floor)
        floor_summary.slab_breakdown = self._compute_slab_quantities(floor)
        floor_summary.footing_breakdown = self._compute_footing_quantities(floor)

        for item in floor_summary.breakdowns():
            floor_summary.concrete_volume += item.concrete_volume
            floor_summary.grade40_steel += item.grade40_steel
            floor_summary.grade60_steel += item.grade60_steel

        logger.debug(f"Floor {floor.id}: {floor_summary.concrete_volume:.3f} m³ concrete, "
                     f"{floor_summary.grade40_steel:.1f} kg G40, {floor_summary.grade60_steel:.1f} kg G60")
        return floor_summary

    def _compute_beam_quantities(self, floor: Floor) -> List[BeamBreakdown]:
        """Group assigned segments by beam id, then price each group per meter."""
        groups: Dict[str, BeamBreakdown] = {}
        for segment in beam_segments(floor):
            if not segment.beam_id:
                continue
            group = groups.setdefault(segment.beam_id, BeamBreakdown(beam_id=segment.beam_id))
            group.segments.append(segment.label)
            group.total_length += segment.length

        specs = {spec.id: spec for spec in floor.beam_specs}
        breakdown = []
        for beam_id, group in groups.items():
            spec = specs.get(beam_id)
            if spec is None:
                logger.debug(f"Floor {floor.id}: no beam spec '{beam_id}', skipping")
                continue

            weights = calculate_beam_reinforcement_weights(spec).scaled(group.total_length)
            group.concrete_volume = calculate_beam_concrete_volume(spec, group.total_length)
            group.grade40_steel = weights.grade40_weight
            group.grade60_steel = weights.grade60_weight
            breakdown.append(group)

        return breakdown

    def _compute_column_quantities(self, floor: Floor) -> List[ColumnBreakdown]:
        """Group column slots by id and price each group per member."""
        num_rows, num_cols = floor.structural_system.num_rows, floor.structural_system.num_cols

        groups: Dict[str, ColumnBreakdown] = {}
        for index, column_id in enumerate(floor.column_ids):
            if not column_id:
                continue
            row_index, col_index = divmod(index, num_cols) if num_cols else (num_rows, 0)
            if row_index >= num_rows:
                logger.debug(f"Floor {floor.id}: column slot {index} is outside the grid, skipping")
                continue

            location = f"{floor.rows[row_index].label}{floor.cols[col_index].label}"
            group = groups.setdefault(column_id, ColumnBreakdown(column_id=column_id))
            group.locations.append(location)
            group.count += 1

        specs = {spec.id: spec for spec in floor.column_specs}
        breakdown = []
        for column_id, group in groups.items():
            spec = specs.get(column_id)
            if spec is None:
                logger.debug(f"Floor {floor.id}: no column spec '{column_id}', skipping")
                continue

            weights = calculate_column_reinforcement_weights(spec).scaled(group.count)
            group.concrete_volume = calculate_column_concrete_volume(spec) * group.count
            group.grade40_steel = weights.grade40_weight
            group.grade60_steel = weights.grade60_weight
            breakdown.append(group)

        return breakdown

    def _compute_slab_quantities(self, floor: Floor) -> List[SlabBreakdown]:
        """Group slab assignments by spec and price each group per m²."""
        groups: Dict[str, SlabBreakdown] = {}
        for assignment in floor.slab_assignments:
            if not assignment.slab_spec_id:
                continue
            group = groups.setdefault(assignment.slab_spec_id, SlabBreakdown(slab_id=assignment.slab_spec_id))
            group.areas.append(assignment.label)
            group.total_area += assignment.area

        specs = {spec.id: spec for spec in floor.slab_specs}
        breakdown = []
        for slab_id, group in groups.items():
            spec = specs.get(slab_id)
            if spec is None:
                logger.debug(f"Floor {floor.id}: no slab spec '{slab_id}', skipping")
                continue

            weights = calculate_slab_reinforcement_weights(spec).scaled(group.total_area)
            group.concrete_volume = calculate_slab_concrete_volume(spec, group.total_area)
            group.grade40_steel = weights.grade40_weight
            group.grade60_steel = weights.grade60_weight
            breakdown.append(group)

        return breakdown

    def _compute_footing_quantities(self, floor: Floor) -> List[FootingBreakdown]:
        """Group footing assignments by spec and price each group per member."""
        groups: Dict[str, FootingBreakdown] = {}
        for assignment in floor.footing_assignments:
            if not assignment.footing_spec_id:
                continue
            group = groups.setdefault(
                assignment.footing_spec_id, FootingBreakdown(footing_id=assignment.footing_spec_id)
            )
            group.locations.append(assignment.grid_position)
            group.count += 1

        specs = {spec.id: spec for spec in floor.footing_specs}
        breakdown = []
        for footing_id, group in groups.items():
            spec = specs.get(footing_id)
            if spec is None:
                logger.debug(f"Floor {floor.id}: no footing spec '{footing_id}', skipping")
                continue

            weights = calculate_footing_reinforcement_weights(spec).scaled(group.count)
            group.concrete_volume = calculate_footing_concrete_volume(spec) * group.count
            group.grade40_steel = weights.grade40_weight
            group.grade60_steel = weights.grade60_weight
            breakdown.append(group)

        return breakdown


def compute_building_summary(building: Building, config_path: Optional[Path] = None) -> BuildingSummary:
    """Convenience function to compute a building summary."""
    engine = QuantityEngine(config_path)
    return engine.compute_building_summary(building)


def build_floor_summary(floor: Floor, config_path: Optional[Path] = None) -> FloorSummary:
    """Convenience function to compute one floor."""
    engine = QuantityEngine(config_path)
    return engine.build_floor_summary(floor)
