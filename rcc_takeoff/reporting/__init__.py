"""
Reporting Module for Quantity Takeoff
Schedule tables and workbook export.

Modules:
- exporter: pandas table builders, Excel and JSON export
"""

from .exporter import (
    build_beams_df,
    build_columns_df,
    build_slabs_df,
    build_footings_df,
    build_floor_totals_df,
    build_summary_df,
    export_to_excel,
    export_to_json
)

__all__ = [
    # Table builders
    'build_beams_df',
    'build_columns_df',
    'build_slabs_df',
    'build_footings_df',
    'build_floor_totals_df',
    'build_summary_df',

    # Export
    'export_to_excel',
    'export_to_json'
]
