"""
Reinforcement Bar Properties
Nominal bar diameters, linear mass table and the Grade 40 / Grade 60
classification shared by every member calculator.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


# Standard deformed bar sizes (mm)
BAR_SIZES = [8, 10, 12, 16, 20, 25, 32]

# Linear mass (kg/m) for steel density 7850 kg/m³
BAR_WEIGHTS = {
    8: 0.395,
    10: 0.617,
    12: 0.888,
    16: 1.578,
    20: 2.466,
    25: 3.853,
    32: 6.313,
}

# Bars below this diameter are Grade 40, the rest Grade 60
GRADE_60_MIN_DIA = 16


class TakeoffError(Exception):
    """Base class for takeoff errors."""
    pass


class InvalidSpecificationError(TakeoffError, ValueError):
    """A specification carries a value no quantity can be derived from."""

    def __init__(self, spec_id: str, field_name: str, value, requirement: str = "must be positive"):
        self.spec_id = spec_id
        self.field_name = field_name
        self.value = value
        message = f"Specification '{spec_id}': {field_name} {requirement} (got {value})"
        super().__init__(message)


class BuildingFormatError(TakeoffError, ValueError):
    """A building document could not be read."""
    pass


def unit_weight(diameter_mm: Optional[float]) -> float:
    """
    Linear mass of a bar in kg/m.

    Diameters outside BAR_SIZES weigh nothing.
    """
    if not diameter_mm:
        return 0.0
    if not is_standard_size(diameter_mm):
        logger.debug(f"No unit weight for bar diameter {diameter_mm}mm")
        return 0.0
    return BAR_WEIGHTS[int(diameter_mm)]


def steel_grade(diameter_mm: float) -> int:
    """Return 40 for bars under 16mm, 60 otherwise."""
    return 40 if diameter_mm < GRADE_60_MIN_DIA else 60


def is_standard_size(diameter_mm: Optional[float]) -> bool:
    """True when the diameter is one of BAR_SIZES."""
    if not diameter_mm:
        return False
    return float(diameter_mm).is_integer() and int(diameter_mm) in BAR_WEIGHTS
