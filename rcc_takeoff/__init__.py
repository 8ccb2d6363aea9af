"""
RCC Quantity Takeoff Engine
Concrete volume and graded reinforcement steel for grid-based buildings.
"""

__version__ = "1.0.0"

from pathlib import Path

# Package paths
PACKAGE_ROOT = Path(__file__).parent
RULES_DIR = PACKAGE_ROOT / "rules"

from .structural import (
    Building,
    Floor,
    load_building,
    building_from_dict,
    calculate_grid_area,
    validate_grid_system,
    unit_quantities,
    QuantityEngine,
    compute_building_summary,
    build_floor_summary,
    TakeoffError
)

__all__ = [
    '__version__',
    'PACKAGE_ROOT',
    'RULES_DIR',
    'Building',
    'Floor',
    'load_building',
    'building_from_dict',
    'calculate_grid_area',
    'validate_grid_system',
    'unit_quantities',
    'QuantityEngine',
    'compute_building_summary',
    'build_floor_summary',
    'TakeoffError'
]
