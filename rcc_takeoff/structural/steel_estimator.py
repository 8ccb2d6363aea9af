"""
Steel Estimation Module
Per-unit reinforcement weights and concrete volumes for each member type:

- Beam: per linear meter
- Column: per member
- Slab: per square meter
- Footing: per member

Every bar contribution is classified by steel_grade(), so all four
calculators split Grade 40 / Grade 60 the same way.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any, Union

from .bars import unit_weight, steel_grade, InvalidSpecificationError
from .models import BeamSpec, ColumnSpec, SlabSpec, FootingSpec

logger = logging.getLogger(__name__)


Spec = Union[BeamSpec, ColumnSpec, SlabSpec, FootingSpec]


@dataclass
class SteelWeights:
    """Reinforcement weight split by grade (kg, kg/m or kg/m² by member)."""
    grade40_weight: float = 0.0
    grade60_weight: float = 0.0

    @property
    def total_weight(self) -> float:
        return self.grade40_weight + self.grade60_weight

    def add(self, diameter_mm: float, weight: float) -> None:
        """Add a contribution to the bucket of its bar diameter."""
        if steel_grade(diameter_mm) == 40:
            self.grade40_weight += weight
        else:
            self.grade60_weight += weight

    def scaled(self, factor: float) -> "SteelWeights":
        return SteelWeights(
            grade40_weight=self.grade40_weight * factor,
            grade60_weight=self.grade60_weight * factor
        )

    def __add__(self, other: "SteelWeights") -> "SteelWeights":
        return SteelWeights(
            grade40_weight=self.grade40_weight + other.grade40_weight,
            grade60_weight=self.grade60_weight + other.grade60_weight
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            'grade40_weight': self.grade40_weight,
            'grade60_weight': self.grade60_weight,
            'total_weight': self.total_weight
        }


@dataclass
class RoundedSteelWeights(SteelWeights):
    """Weights rounded to 2 decimals, total rounded independently."""
    rounded_total: float = 0.0

    @property
    def total_weight(self) -> float:
        return self.rounded_total


def _require_positive(spec_id: str, field_name: str, value) -> float:
    if value is None or value <= 0:
        raise InvalidSpecificationError(spec_id, field_name, value)
    return value


def _require_dimensions(spec, *field_names: str) -> None:
    """Raise on the first negative dimension; zero is a valid (empty) size."""
    for field_name in field_names:
        value = getattr(spec, field_name)
        if value < 0:
            raise InvalidSpecificationError(spec.id, field_name, value, "must not be negative")


# =============================================================================
# BEAM (per linear meter)
# =============================================================================

def calculate_beam_reinforcement_weights(beam: BeamSpec) -> SteelWeights:
    """
    Steel per meter of beam.

    Longitudinal layers weigh unit_weight * qty; stirrups weigh
    unit_weight * 2(width + depth) * stirrup_qty, stirrup_qty being
    stirrups per meter.
    """
    _require_dimensions(beam, "width", "depth")
    weights = SteelWeights()

    for size, qty in (
        (beam.top_bar_size, beam.top_bar_qty),
        (beam.web_bar_size, beam.web_bar_qty),
        (beam.bottom_bar_size, beam.bottom_bar_qty),
    ):
        if size and qty > 0:
            weights.add(size, unit_weight(size) * qty)

    if beam.stirrup_size and beam.stirrup_qty > 0:
        perimeter = 2 * (beam.width + beam.depth)
        weights.add(beam.stirrup_size, unit_weight(beam.stirrup_size) * perimeter * beam.stirrup_qty)

    return weights


def calculate_beam_concrete_volume(beam: BeamSpec, length: float = 1.0) -> float:
    _require_dimensions(beam, "width", "depth")
    return beam.width * beam.depth * length


# =============================================================================
# COLUMN (per member)
# =============================================================================

def calculate_column_reinforcement_weights(column: ColumnSpec) -> SteelWeights:
    """
    Steel in one column.

    Main bars run the full height; ties are closed loops at
    ceil(height / tie_spacing) positions.
    """
    _require_dimensions(column, "width", "depth", "height")
    weights = SteelWeights()

    if column.main_bar_size and column.main_bar_qty > 0:
        weights.add(
            column.main_bar_size,
            unit_weight(column.main_bar_size) * column.height * column.main_bar_qty
        )

    if column.tie_size:
        spacing = _require_positive(column.id, "tie_spacing", column.tie_spacing)
        perimeter = 2 * (column.width + column.depth)
        number_of_ties = math.ceil(column.height / spacing)
        weights.add(column.tie_size, unit_weight(column.tie_size) * perimeter * number_of_ties)

    return weights


def calculate_column_concrete_volume(column: ColumnSpec) -> float:
    _require_dimensions(column, "width", "depth", "height")
    return column.width * column.depth * column.height


# =============================================================================
# SLAB (per square meter)
# =============================================================================

def _bars_per_meter_weight(spec_id: str, field_name: str, size: float, spacing_mm: float) -> float:
    """Weight of one layer of bars at spacing_mm over a 1m strip."""
    spacing = _require_positive(spec_id, field_name, spacing_mm)
    return unit_weight(size) * (1000 / spacing)


def calculate_slab_reinforcement_weights(slab: SlabSpec) -> RoundedSteelWeights:
    """
    Steel per square meter of slab.

    Main, distribution and optional top bars are laid in both directions
    for two-way slabs; temperature bars always form a grid.
    """
    _require_dimensions(slab, "thickness")
    two_way_factor = 2 if slab.is_two_way else 1
    weights = SteelWeights()

    if slab.main_bar_size:
        weight = _bars_per_meter_weight(slab.id, "main_bar_spacing", slab.main_bar_size, slab.main_bar_spacing)
        weights.add(slab.main_bar_size, weight * two_way_factor)

    if slab.distribution_bar_size:
        weight = _bars_per_meter_weight(
            slab.id, "distribution_bar_spacing", slab.distribution_bar_size, slab.distribution_bar_spacing
        )
        weights.add(slab.distribution_bar_size, weight * two_way_factor)

    if slab.temperature_bar_size:
        weight = _bars_per_meter_weight(
            slab.id, "temperature_bar_spacing", slab.temperature_bar_size, slab.temperature_bar_spacing
        )
        weights.add(slab.temperature_bar_size, weight * 2)

    if slab.top_bar_size and slab.top_bar_spacing:
        weight = _bars_per_meter_weight(slab.id, "top_bar_spacing", slab.top_bar_size, slab.top_bar_spacing)
        weights.add(slab.top_bar_size, weight * two_way_factor)

    return RoundedSteelWeights(
        grade40_weight=round(weights.grade40_weight, 2),
        grade60_weight=round(weights.grade60_weight, 2),
        rounded_total=round(weights.total_weight, 2)
    )


def calculate_slab_concrete_volume(slab: SlabSpec, area: float = 1.0) -> float:
    """Concrete for `area` m² of slab (thickness is in mm)."""
    _require_dimensions(slab, "thickness")
    return slab.thickness / 1000 * area


# =============================================================================
# FOOTING (per member)
# =============================================================================

def _two_way_mat_length(spec_id: str, field_name: str, width: float, length: float, spacing_mm: float) -> float:
    """Total bar length of a mat laid in both directions across the footprint."""
    spacing_m = _require_positive(spec_id, field_name, spacing_mm) / 1000
    bars_x = math.ceil(length / spacing_m)
    bars_y = math.ceil(width / spacing_m)
    return bars_x * width + bars_y * length


def calculate_footing_reinforcement_weights(footing: FootingSpec) -> SteelWeights:
    """
    Steel in one footing.

    Main, distribution and (if required) top bars are two-way mats;
    stirrups are perimeter loops at ceil(depth / stirrup_spacing) levels.
    """
    _require_dimensions(footing, "width", "length", "depth")
    weights = SteelWeights()

    if footing.main_bar_size:
        total_length = _two_way_mat_length(
            footing.id, "main_bar_spacing", footing.width, footing.length, footing.main_bar_spacing
        )
        weights.add(footing.main_bar_size, unit_weight(footing.main_bar_size) * total_length)

    if footing.distribution_bar_size:
        total_length = _two_way_mat_length(
            footing.id, "distribution_bar_spacing", footing.width, footing.length,
            footing.distribution_bar_spacing
        )
        weights.add(footing.distribution_bar_size, unit_weight(footing.distribution_bar_size) * total_length)

    if footing.stirrup_size:
        spacing = _require_positive(footing.id, "stirrup_spacing", footing.stirrup_spacing)
        perimeter = 2 * (footing.width + footing.length)
        count = math.ceil(footing.depth / spacing)
        weights.add(footing.stirrup_size, unit_weight(footing.stirrup_size) * perimeter * count)

    if footing.top_bars_required and footing.top_bar_size and footing.top_bar_spacing:
        total_length = _two_way_mat_length(
            footing.id, "top_bar_spacing", footing.width, footing.length, footing.top_bar_spacing
        )
        weights.add(footing.top_bar_size, unit_weight(footing.top_bar_size) * total_length)

    return weights


def calculate_footing_concrete_volume(footing: FootingSpec) -> float:
    _require_dimensions(footing, "width", "length", "depth")
    return footing.width * footing.length * footing.depth


# =============================================================================
# DISPATCH
# =============================================================================

_WEIGHT_CALCULATORS = {
    BeamSpec: calculate_beam_reinforcement_weights,
    ColumnSpec: calculate_column_reinforcement_weights,
    SlabSpec: calculate_slab_reinforcement_weights,
    FootingSpec: calculate_footing_reinforcement_weights,
}

_VOLUME_CALCULATORS = {
    BeamSpec: calculate_beam_concrete_volume,
    ColumnSpec: calculate_column_concrete_volume,
    SlabSpec: calculate_slab_concrete_volume,
    FootingSpec: calculate_footing_concrete_volume,
}


def unit_quantities(spec: Spec) -> SteelWeights:
    """Per-unit steel for any specification (per m, member or m²)."""
    calculator = _WEIGHT_CALCULATORS.get(type(spec))
    if calculator is None:
        raise TypeError(f"Unsupported specification type: {type(spec).__name__}")
    return calculator(spec)


def unit_volume(spec: Spec) -> float:
    """Per-unit concrete volume for any specification."""
    calculator = _VOLUME_CALCULATORS.get(type(spec))
    if calculator is None:
        raise TypeError(f"Unsupported specification type: {type(spec).__name__}")
    return calculator(spec)


# =============================================================================
# SLAB ADVICE
# =============================================================================

# Default slab limits (IS 456 cl. 26.3.3 spacing caps)
SLAB_DEFAULTS = {
    'min_thickness_mm': {'one-way': 100, 'two-way': 125},
    'main_spacing_factor': 3,
    'max_main_spacing_mm': 300,
    'distribution_spacing_factor': 5,
    'max_distribution_spacing_mm': 450,
}


@dataclass
class SlabRecommendation:
    """Advisory slab sizing; never feeds back into quantities."""
    recommended_thickness: float
    recommended_main_spacing: float
    recommended_dist_spacing: float
    design_notes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'recommended_thickness': self.recommended_thickness,
            'recommended_main_spacing': self.recommended_main_spacing,
            'recommended_dist_spacing': self.recommended_dist_spacing,
            'design_notes': self.design_notes
        }


def get_slab_design_recommendations(slab: SlabSpec, config: Optional[Dict] = None) -> SlabRecommendation:
    """Rule-of-thumb thickness and spacing checks for a slab specification."""
    limits = dict(SLAB_DEFAULTS)
    if config:
        limits.update(config)

    min_thickness = limits['min_thickness_mm'].get(slab.type, limits['min_thickness_mm']['one-way'])
    thickness = max(slab.thickness, min_thickness)
    main_spacing = min(limits['main_spacing_factor'] * thickness, limits['max_main_spacing_mm'])
    dist_spacing = min(limits['distribution_spacing_factor'] * thickness, limits['max_distribution_spacing_mm'])

    notes = []
    if slab.thickness < min_thickness:
        notes.append(f"Thickness {slab.thickness:g}mm is below the {min_thickness}mm minimum "
                     f"for a {slab.type} slab")
    if slab.main_bar_size and slab.main_bar_spacing > main_spacing:
        notes.append(f"Main bar spacing {slab.main_bar_spacing:g}mm exceeds {main_spacing:g}mm")
    if slab.distribution_bar_size and slab.distribution_bar_spacing > dist_spacing:
        notes.append(f"Distribution bar spacing {slab.distribution_bar_spacing:g}mm "
                     f"exceeds {dist_spacing:g}mm")
    if slab.main_bar_size and slab.main_bar_size > slab.thickness / 8:
        notes.append(f"Main bar diameter {slab.main_bar_size}mm exceeds one eighth of the thickness")
    if slab.is_two_way and slab.temperature_bar_size:
        notes.append("Two-way slab: temperature bars usually not required in addition to "
                     "two-way main steel")

    return SlabRecommendation(
        recommended_thickness=thickness,
        recommended_main_spacing=main_spacing,
        recommended_dist_spacing=dist_spacing,
        design_notes=notes
    )
