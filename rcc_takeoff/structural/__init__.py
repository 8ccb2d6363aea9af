"""
Structural Quantity Takeoff
For grid-based RCC buildings

Modules:
- bars: Bar property table and Grade 40/60 split
- models: Building data model and document loaders
- grid: Segment lengths, slab areas and grid validation
- steel_estimator: Per-unit steel and concrete for each member type
- quantity_engine: Floor and building aggregation
- qc_structural: Advisory quality checks
- export_structural: Export to JSON/CSV
"""

__version__ = "1.0.0"

from .bars import (
    BAR_SIZES,
    BAR_WEIGHTS,
    GRADE_60_MIN_DIA,
    TakeoffError,
    InvalidSpecificationError,
    BuildingFormatError,
    unit_weight,
    steel_grade,
    is_standard_size
)

from .models import (
    GridLine,
    StructuralSystem,
    BeamSpec,
    ColumnSpec,
    SlabSpec,
    FootingSpec,
    SlabAssignment,
    FootingAssignment,
    Floor,
    Building,
    floor_from_dict,
    building_from_dict,
    load_building
)

from .grid import (
    BeamSegment,
    AreaResult,
    GridValidationResult,
    segment_length,
    col_beam_index,
    row_beam_index,
    column_index,
    beam_segments,
    calculate_grid_area,
    validate_grid_system,
    parse_grid_position,
    span_cells,
    calculate_total_slab_area
)

from .steel_estimator import (
    SteelWeights,
    SlabRecommendation,
    calculate_beam_reinforcement_weights,
    calculate_column_reinforcement_weights,
    calculate_slab_reinforcement_weights,
    calculate_footing_reinforcement_weights,
    calculate_beam_concrete_volume,
    calculate_column_concrete_volume,
    calculate_slab_concrete_volume,
    calculate_footing_concrete_volume,
    unit_quantities,
    unit_volume,
    get_slab_design_recommendations
)

from .quantity_engine import (
    BeamBreakdown,
    ColumnBreakdown,
    SlabBreakdown,
    FootingBreakdown,
    FloorSummary,
    BuildingSummary,
    QuantityEngine,
    compute_building_summary,
    build_floor_summary
)

from .qc_structural import (
    QCIssue,
    StructuralQCReport,
    StructuralQC,
    generate_qc_report,
    Severity,
    QCCode
)

from .export_structural import (
    StructuralExporter,
    export_structural
)

__all__ = [
    # Version
    '__version__',

    # Bars
    'BAR_SIZES',
    'BAR_WEIGHTS',
    'GRADE_60_MIN_DIA',
    'TakeoffError',
    'InvalidSpecificationError',
    'BuildingFormatError',
    'unit_weight',
    'steel_grade',
    'is_standard_size',

    # Data model
    'GridLine',
    'StructuralSystem',
    'BeamSpec',
    'ColumnSpec',
    'SlabSpec',
    'FootingSpec',
    'SlabAssignment',
    'FootingAssignment',
    'Floor',
    'Building',
    'floor_from_dict',
    'building_from_dict',
    'load_building',

    # Grid geometry
    'BeamSegment',
    'AreaResult',
    'GridValidationResult',
    'segment_length',
    'col_beam_index',
    'row_beam_index',
    'column_index',
    'beam_segments',
    'calculate_grid_area',
    'validate_grid_system',
    'parse_grid_position',
    'span_cells',
    'calculate_total_slab_area',

    # Unit calculators
    'SteelWeights',
    'SlabRecommendation',
    'calculate_beam_reinforcement_weights',
    'calculate_column_reinforcement_weights',
    'calculate_slab_reinforcement_weights',
    'calculate_footing_reinforcement_weights',
    'calculate_beam_concrete_volume',
    'calculate_column_concrete_volume',
    'calculate_slab_concrete_volume',
    'calculate_footing_concrete_volume',
    'unit_quantities',
    'unit_volume',
    'get_slab_design_recommendations',

    # Aggregation
    'BeamBreakdown',
    'ColumnBreakdown',
    'SlabBreakdown',
    'FootingBreakdown',
    'FloorSummary',
    'BuildingSummary',
    'QuantityEngine',
    'compute_building_summary',
    'build_floor_summary',

    # QC
    'QCIssue',
    'StructuralQCReport',
    'StructuralQC',
    'generate_qc_report',
    'Severity',
    'QCCode',

    # Export
    'StructuralExporter',
    'export_structural'
]
