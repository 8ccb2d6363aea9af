"""
Exporter Module
Exports a BuildingSummary to Excel and JSON formats.

Excel sheets:
- Summary
- Floors
- Beams
- Columns
- Slabs
- Footings
"""

import json
from pathlib import Path
from typing import Optional, Union
from io import BytesIO
import pandas as pd
import logging

from ..structural.quantity_engine import BuildingSummary

logger = logging.getLogger(__name__)


STEEL_COLUMNS = ['Concrete (m³)', 'Grade 40 Steel (kg)', 'Grade 60 Steel (kg)']


def _with_totals(df: pd.DataFrame, label_column: str, sum_columns: list) -> pd.DataFrame:
    """Append a TOTAL row summing sum_columns."""
    if len(df) == 0:
        return df

    totals = {col: '' for col in df.columns}
    totals[label_column] = 'TOTAL'
    for col in sum_columns:
        totals[col] = round(df[col].sum(), 4 if col == 'Concrete (m³)' else 2)

    return pd.concat([df, pd.DataFrame([totals])], ignore_index=True)


def build_beams_df(summary: BuildingSummary) -> pd.DataFrame:
    """Build beam schedule DataFrame."""
    columns = ['Floor', 'Beam ID', 'Segments', 'Segment Count', 'Total Length (m)'] + STEEL_COLUMNS

    data = []
    for floor in summary.floor_breakdown:
        for beam in floor.beam_breakdown:
            data.append({
                'Floor': floor.floor_name,
                'Beam ID': beam.beam_id,
                'Segments': ', '.join(beam.segments),
                'Segment Count': len(beam.segments),
                'Total Length (m)': round(beam.total_length, 3),
                'Concrete (m³)': round(beam.concrete_volume, 4),
                'Grade 40 Steel (kg)': round(beam.grade40_steel, 2),
                'Grade 60 Steel (kg)': round(beam.grade60_steel, 2),
            })

    df = pd.DataFrame(data, columns=columns)
    return _with_totals(df, 'Floor', ['Segment Count', 'Total Length (m)'] + STEEL_COLUMNS)


def build_columns_df(summary: BuildingSummary) -> pd.DataFrame:
    """Build column schedule DataFrame."""
    columns = ['Floor', 'Column ID', 'Locations', 'Count'] + STEEL_COLUMNS

    data = []
    for floor in summary.floor_breakdown:
        for col in floor.column_breakdown:
            data.append({
                'Floor': floor.floor_name,
                'Column ID': col.column_id,
                'Locations': ', '.join(col.locations),
                'Count': col.count,
                'Concrete (m³)': round(col.concrete_volume, 4),
                'Grade 40 Steel (kg)': round(col.grade40_steel, 2),
                'Grade 60 Steel (kg)': round(col.grade60_steel, 2),
            })

    df = pd.DataFrame(data, columns=columns)
    return _with_totals(df, 'Floor', ['Count'] + STEEL_COLUMNS)


def build_slabs_df(summary: BuildingSummary) -> pd.DataFrame:
    """Build slab schedule DataFrame."""
    columns = ['Floor', 'Slab ID', 'Areas', 'Total Area (m²)'] + STEEL_COLUMNS

    data = []
    for floor in summary.floor_breakdown:
        for slab in floor.slab_breakdown:
            data.append({
                'Floor': floor.floor_name,
                'Slab ID': slab.slab_id,
                'Areas': ', '.join(slab.areas),
                'Total Area (m²)': round(slab.total_area, 3),
                'Concrete (m³)': round(slab.concrete_volume, 4),
                'Grade 40 Steel (kg)': round(slab.grade40_steel, 2),
                'Grade 60 Steel (kg)': round(slab.grade60_steel, 2),
            })

    df = pd.DataFrame(data, columns=columns)
    return _with_totals(df, 'Floor', ['Total Area (m²)'] + STEEL_COLUMNS)


def build_footings_df(summary: BuildingSummary) -> pd.DataFrame:
    """Build footing schedule DataFrame."""
    columns = ['Floor', 'Footing ID', 'Locations', 'Count'] + STEEL_COLUMNS

    data = []
    for floor in summary.floor_breakdown:
        for ftg in floor.footing_breakdown:
            data.append({
                'Floor': floor.floor_name,
                'Footing ID': ftg.footing_id,
                'Locations': ', '.join(ftg.locations),
                'Count': ftg.count,
                'Concrete (m³)': round(ftg.concrete_volume, 4),
                'Grade 40 Steel (kg)': round(ftg.grade40_steel, 2),
                'Grade 60 Steel (kg)': round(ftg.grade60_steel, 2),
            })

    df = pd.DataFrame(data, columns=columns)
    return _with_totals(df, 'Floor', ['Count'] + STEEL_COLUMNS)


def build_floor_totals_df(summary: BuildingSummary) -> pd.DataFrame:
    """Build per-floor totals DataFrame."""
    columns = ['Level', 'Floor'] + STEEL_COLUMNS + ['Total Steel (kg)']

    data = []
    for floor in summary.floor_breakdown:
        data.append({
            'Level': floor.level,
            'Floor': floor.floor_name,
            'Concrete (m³)': round(floor.concrete_volume, 4),
            'Grade 40 Steel (kg)': round(floor.grade40_steel, 2),
            'Grade 60 Steel (kg)': round(floor.grade60_steel, 2),
            'Total Steel (kg)': round(floor.total_steel, 2),
        })

    df = pd.DataFrame(data, columns=columns)
    return _with_totals(df, 'Floor', STEEL_COLUMNS + ['Total Steel (kg)'])


def build_summary_df(summary: BuildingSummary) -> pd.DataFrame:
    """Build key/value summary DataFrame."""
    return pd.DataFrame({
        'Item': [
            'Building', 'Floors', 'Total Concrete (m³)',
            'Grade 40 Steel (kg)', 'Grade 60 Steel (kg)', 'Total Steel (MT)'
        ],
        'Value': [
            summary.building_name,
            len(summary.floor_breakdown),
            round(summary.total_concrete_volume, 3),
            round(summary.total_grade40_steel, 2),
            round(summary.total_grade60_steel, 2),
            round(summary.total_steel_tonnes, 3),
        ]
    })


def export_to_excel(
    summary: BuildingSummary,
    output_path: Optional[Union[str, Path]] = None
) -> bytes:
    """
    Export summary to an Excel workbook.

    Args:
        summary: Building summary
        output_path: Optional path to also write the file

    Returns:
        Workbook bytes
    """
    sheets = {
        'Summary': build_summary_df(summary),
        'Floors': build_floor_totals_df(summary),
        'Beams': build_beams_df(summary),
        'Columns': build_columns_df(summary),
        'Slabs': build_slabs_df(summary),
        'Footings': build_footings_df(summary),
    }

    buffer = BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        for name, df in sheets.items():
            df.to_excel(writer, sheet_name=name, index=False)

    data = buffer.getvalue()

    if output_path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)
        logger.info(f"Exported Excel: {output_path}")

    return data


def export_to_json(
    summary: BuildingSummary,
    output_path: Optional[Union[str, Path]] = None
) -> str:
    """
    Export summary to JSON.

    Returns:
        JSON string
    """
    text = json.dumps(summary.to_dict(), indent=2)

    if output_path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text)
        logger.info(f"Exported JSON: {output_path}")

    return text
