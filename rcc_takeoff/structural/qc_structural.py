"""
Structural QC Module
Advisory checks on a building before or alongside quantity takeoff:
grid integrity, dangling or misplaced assignments, unknown bar sizes,
steel density and slab rules of thumb.

Nothing here changes the computed quantities.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any
from enum import Enum
from datetime import datetime

from .bars import is_standard_size, InvalidSpecificationError
from .models import Building, Floor, BeamSpec, ColumnSpec, SlabSpec, FootingSpec
from .grid import (
    validate_grid_system,
    parse_grid_position,
    span_cells,
    EMPTY_GRID,
    DUPLICATE_LABEL,
    UNSORTED_POSITIONS,
)
from .steel_estimator import unit_quantities, unit_volume, get_slab_design_recommendations
from .quantity_engine import QuantityEngine

logger = logging.getLogger(__name__)


class Severity(Enum):
    """Issue severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class QCCode(Enum):
    """Standardized QC codes for issues."""
    # Grid issues
    EMPTY_GRID = "G001"
    DUPLICATE_LABEL = "G002"
    UNSORTED_POSITIONS = "G003"

    # Assignment issues
    UNKNOWN_SPEC = "A001"
    ARRAY_LENGTH_MISMATCH = "A002"
    FOOTING_OFF_GRID = "A003"
    INVALID_SLAB_SPAN = "A004"
    OVERLAPPING_SLABS = "A005"

    # Specification issues
    UNKNOWN_BAR_SIZE = "S001"
    STEEL_RATIO = "S002"
    SLAB_ADVICE = "S003"
    INVALID_SPEC = "S004"


@dataclass
class QCIssue:
    """A single QC issue."""
    code: QCCode
    severity: Severity
    message: str
    floor_id: Optional[str] = None
    element_id: Optional[str] = None
    element_type: Optional[str] = None
    suggestion: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'code': self.code.value,
            'severity': self.severity.value,
            'message': self.message,
            'floor_id': self.floor_id,
            'element_id': self.element_id,
            'element_type': self.element_type,
            'suggestion': self.suggestion
        }


@dataclass
class StructuralQCReport:
    """QC report for a building."""
    issues: List[QCIssue] = field(default_factory=list)
    error_count: int = 0
    warning_count: int = 0
    info_count: int = 0
    timestamp: str = ""

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0

    def by_code(self, code: QCCode) -> List[QCIssue]:
        return [i for i in self.issues if i.code == code]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'issues': {
                'total': len(self.issues),
                'errors': self.error_count,
                'warnings': self.warning_count,
                'info': self.info_count,
                'details': [i.to_dict() for i in self.issues]
            },
            'metadata': {
                'timestamp': self.timestamp
            }
        }


_GRID_CODES = {
    EMPTY_GRID: QCCode.EMPTY_GRID,
    DUPLICATE_LABEL: QCCode.DUPLICATE_LABEL,
    UNSORTED_POSITIONS: QCCode.UNSORTED_POSITIONS,
}

_BAR_FIELDS = {
    BeamSpec: ('top_bar_size', 'web_bar_size', 'bottom_bar_size', 'stirrup_size'),
    ColumnSpec: ('main_bar_size', 'tie_size'),
    SlabSpec: ('main_bar_size', 'distribution_bar_size', 'temperature_bar_size', 'top_bar_size'),
    FootingSpec: ('main_bar_size', 'distribution_bar_size', 'stirrup_size', 'top_bar_size'),
}


class StructuralQC:
    """
    Quality control for building takeoff input.
    """

    def __init__(self, engine: Optional[QuantityEngine] = None):
        self.engine = engine or QuantityEngine()

        ratios = self.engine.config.get('qc', {}).get('steel_ratio_kg_per_m3', {})
        self.min_steel_ratio = ratios.get('min', {})
        self.max_steel_ratio = ratios.get('max', {})
        self.slab_config = self.engine.config.get('slab')

    def generate_report(self, building: Building) -> StructuralQCReport:
        """
        Generate QC report.

        Args:
            building: Building to check

        Returns:
            StructuralQCReport
        """
        report = StructuralQCReport(timestamp=datetime.now().isoformat())

        for floor in building.floors:
            report.issues.extend(self._check_grid(floor))
            report.issues.extend(self._check_array_lengths(floor))
            report.issues.extend(self._check_references(floor))
            report.issues.extend(self._check_footing_positions(floor))
            report.issues.extend(self._check_slab_spans(floor))
            report.issues.extend(self._check_specs(floor))

        for issue in report.issues:
            if issue.severity == Severity.ERROR:
                report.error_count += 1
            elif issue.severity == Severity.WARNING:
                report.warning_count += 1
            else:
                report.info_count += 1

        logger.info(f"QC: {len(report.issues)} issue(s) ({report.error_count} errors, "
                    f"{report.warning_count} warnings)")
        return report

    def _check_grid(self, floor: Floor) -> List[QCIssue]:
        """Grid integrity."""
        issues = []
        result = validate_grid_system(floor.rows, floor.cols)
        for kind, message in zip(result.kinds, result.errors):
            issues.append(QCIssue(
                code=_GRID_CODES[kind],
                severity=Severity.ERROR,
                message=message,
                floor_id=floor.id,
                suggestion="Fix grid lines before relying on quantities"
            ))
        return issues

    def _check_array_lengths(self, floor: Floor) -> List[QCIssue]:
        """Flat assignment arrays must match the grid size."""
        issues = []
        num_rows = floor.structural_system.num_rows
        num_cols = floor.structural_system.num_cols
        expected = {
            'col_beam_ids': num_rows * max(num_cols - 1, 0),
            'row_beam_ids': num_cols * max(num_rows - 1, 0),
            'column_ids': num_rows * num_cols,
        }

        for name, size in expected.items():
            actual = len(getattr(floor, name))
            if actual != size:
                issues.append(QCIssue(
                    code=QCCode.ARRAY_LENGTH_MISMATCH,
                    severity=Severity.WARNING,
                    message=f"{name} has {actual} slots, grid needs {size}",
                    floor_id=floor.id,
                    suggestion="Missing slots are read as unassigned, extra slots are ignored"
                ))
        return issues

    def _check_references(self, floor: Floor) -> List[QCIssue]:
        """Assignments naming a spec that does not exist on the floor."""
        catalogs = [
            ('beam', {s.id for s in floor.beam_specs}, floor.col_beam_ids + floor.row_beam_ids),
            ('column', {s.id for s in floor.column_specs}, floor.column_ids),
            ('slab', {s.id for s in floor.slab_specs}, [a.slab_spec_id for a in floor.slab_assignments]),
            ('footing', {s.id for s in floor.footing_specs},
             [a.footing_spec_id for a in floor.footing_assignments]),
        ]

        issues = []
        for element_type, known, assigned in catalogs:
            for spec_id, count in Counter(i for i in assigned if i).items():
                if spec_id not in known:
                    issues.append(QCIssue(
                        code=QCCode.UNKNOWN_SPEC,
                        severity=Severity.WARNING,
                        message=f"{count} {element_type} assignment(s) reference unknown spec '{spec_id}'",
                        floor_id=floor.id,
                        element_id=spec_id,
                        element_type=element_type,
                        suggestion="These assignments contribute no quantity"
                    ))
        return issues

    def _check_footing_positions(self, floor: Floor) -> List[QCIssue]:
        issues = []
        for assignment in floor.footing_assignments:
            if parse_grid_position(assignment.grid_position, floor.rows, floor.cols) is None:
                issues.append(QCIssue(
                    code=QCCode.FOOTING_OFF_GRID,
                    severity=Severity.WARNING,
                    message=f"Footing {assignment.footing_spec_id} at '{assignment.grid_position}' "
                            f"is not a grid intersection",
                    floor_id=floor.id,
                    element_id=assignment.footing_spec_id,
                    element_type="footing"
                ))
        return issues

    def _check_slab_spans(self, floor: Floor) -> List[QCIssue]:
        """Spans must resolve on the grid and must not cover the same cell twice."""
        issues = []
        owner: Dict[str, str] = {}

        for assignment in floor.slab_assignments:
            result = self.engine.calculate_area(
                floor, assignment.start_row, assignment.end_row,
                assignment.start_col, assignment.end_col
            )
            if not result.is_valid:
                issues.append(QCIssue(
                    code=QCCode.INVALID_SLAB_SPAN,
                    severity=Severity.WARNING,
                    message=f"Slab assignment {assignment.id} ({assignment.label}): {result.error}",
                    floor_id=floor.id,
                    element_id=assignment.slab_spec_id,
                    element_type="slab"
                ))

            for cell in span_cells(assignment, floor.rows, floor.cols):
                if cell in owner:
                    issues.append(QCIssue(
                        code=QCCode.OVERLAPPING_SLABS,
                        severity=Severity.WARNING,
                        message=f"Cell {cell} is covered by slab assignments "
                                f"{owner[cell]} and {assignment.id}",
                        floor_id=floor.id,
                        element_id=assignment.slab_spec_id,
                        element_type="slab",
                        suggestion="Overlapping area is counted twice"
                    ))
                else:
                    owner[cell] = assignment.id
        return issues

    def _check_specs(self, floor: Floor) -> List[QCIssue]:
        """Bar sizes, steel density and slab advice per specification."""
        issues = []
        for spec in floor.beam_specs + floor.column_specs + floor.slab_specs + floor.footing_specs:
            element_type = type(spec).__name__.replace('Spec', '').lower()

            for name in _BAR_FIELDS[type(spec)]:
                size = getattr(spec, name)
                if size and not is_standard_size(size):
                    issues.append(QCIssue(
                        code=QCCode.UNKNOWN_BAR_SIZE,
                        severity=Severity.ERROR,
                        message=f"{element_type.title()} {spec.id}: {name}={size}mm is not a standard bar size",
                        floor_id=floor.id,
                        element_id=spec.id,
                        element_type=element_type,
                        suggestion="Bars of unknown size weigh 0 kg"
                    ))

            issues.extend(self._check_steel_ratio(floor, spec, element_type))

            if isinstance(spec, SlabSpec):
                advice = get_slab_design_recommendations(spec, self.slab_config)
                for note in advice.design_notes:
                    issues.append(QCIssue(
                        code=QCCode.SLAB_ADVICE,
                        severity=Severity.INFO,
                        message=f"Slab {spec.id}: {note}",
                        floor_id=floor.id,
                        element_id=spec.id,
                        element_type="slab"
                    ))
        return issues

    def _check_steel_ratio(self, floor: Floor, spec, element_type: str) -> List[QCIssue]:
        # Per-unit steel over per-unit concrete (per m, m² or member alike)
        try:
            steel = unit_quantities(spec).total_weight
            volume = unit_volume(spec)
        except InvalidSpecificationError as e:
            return [QCIssue(
                code=QCCode.INVALID_SPEC,
                severity=Severity.ERROR,
                message=str(e),
                floor_id=floor.id,
                element_id=spec.id,
                element_type=element_type
            )]

        if volume <= 0:
            return []

        ratio = steel / volume
        low = self.min_steel_ratio.get(element_type)
        high = self.max_steel_ratio.get(element_type)

        if low is not None and ratio < low:
            message = f"{element_type.title()} {spec.id}: {ratio:.0f} kg/m³ is below {low} kg/m³"
        elif high is not None and ratio > high:
            message = f"{element_type.title()} {spec.id}: {ratio:.0f} kg/m³ is above {high} kg/m³"
        else:
            return []

        return [QCIssue(
            code=QCCode.STEEL_RATIO,
            severity=Severity.INFO,
            message=message,
            floor_id=floor.id,
            element_id=spec.id,
            element_type=element_type,
            suggestion="Check bar sizes and quantities"
        )]


def generate_qc_report(building: Building) -> StructuralQCReport:
    """Convenience function to generate QC report."""
    qc = StructuralQC()
    return qc.generate_report(building)
