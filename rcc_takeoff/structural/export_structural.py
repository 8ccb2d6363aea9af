"""
Structural Export Module
Exports building takeoff results:
- JSON (full breakdown with segment/location labels)
- CSV per member type
- BOQ summary CSV (floor and building totals)
"""

import logging
import json
import csv
from pathlib import Path
from typing import Dict, Optional

from .quantity_engine import BuildingSummary, BeamBreakdown, SlabBreakdown
from .qc_structural import StructuralQCReport

logger = logging.getLogger(__name__)


class StructuralExporter:
    """
    Exports building summaries to files.
    """

    def __init__(self, output_dir: Path):
        """Initialize exporter."""
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export_all(
        self,
        building_id: str,
        summary: BuildingSummary,
        qc_report: Optional[StructuralQCReport] = None
    ) -> Dict[str, Path]:
        """
        Export all results under output_dir/<building_id>/.

        Returns:
            Dictionary of output file paths
        """
        paths = {}

        building_dir = self.output_dir / building_id
        building_dir.mkdir(parents=True, exist_ok=True)

        paths['json'] = self.export_json(building_dir / "structural_takeoff.json", summary, qc_report)
        paths.update(self.export_csv(building_dir, summary))
        paths['boq'] = self.export_boq(building_dir / "boq_summary.csv", summary)

        logger.info(f"Exported {len(paths)} files to {building_dir}")
        return paths

    def export_json(
        self,
        output_path: Path,
        summary: BuildingSummary,
        qc_report: Optional[StructuralQCReport] = None
    ) -> Path:
        """Export detailed JSON."""

        data = {
            'version': '1.0',
            'summary': summary.to_dict(),
            'qc': qc_report.to_dict() if qc_report else {}
        }

        with open(output_path, 'w') as f:
            json.dump(data, f, indent=2)

        logger.info(f"Exported JSON: {output_path}")
        return output_path

    def export_csv(self, output_dir: Path, summary: BuildingSummary) -> Dict[str, Path]:
        """Export one CSV per member type, one row per floor and spec."""

        paths = {}

        # (file stem, breakdown attribute, id header, extent columns)
        layouts = [
            ('beams', 'beam_breakdown', 'Beam ID', ['Segments', 'Total Length (m)']),
            ('columns', 'column_breakdown', 'Column ID', ['Locations', 'Count']),
            ('slabs', 'slab_breakdown', 'Slab ID', ['Areas', 'Total Area (m²)']),
            ('footings', 'footing_breakdown', 'Footing ID', ['Locations', 'Count']),
        ]

        for stem, attr, id_header, extent_headers in layouts:
            path = output_dir / f"{stem}.csv"

            with open(path, 'w', newline='') as f:
                writer = csv.writer(f)
                writer.writerow(
                    ['Floor', id_header] + extent_headers +
                    ['Concrete (m³)', 'Grade 40 Steel (kg)', 'Grade 60 Steel (kg)']
                )

                for floor in summary.floor_breakdown:
                    for item in getattr(floor, attr):
                        writer.writerow(
                            [floor.floor_name] + self._extent_row(item) + [
                                f"{item.concrete_volume:.4f}",
                                f"{item.grade40_steel:.2f}",
                                f"{item.grade60_steel:.2f}"
                            ]
                        )

            paths[f'{stem}_csv'] = path
            logger.info(f"Exported {stem} CSV: {path}")

        return paths

    @staticmethod
    def _extent_row(item) -> list:
        if isinstance(item, BeamBreakdown):
            return [item.beam_id, '; '.join(item.segments), f"{item.total_length:.3f}"]
        if isinstance(item, SlabBreakdown):
            return [item.slab_id, '; '.join(item.areas), f"{item.total_area:.3f}"]
        element_id = getattr(item, 'column_id', None) or getattr(item, 'footing_id')
        return [element_id, '; '.join(item.locations), item.count]

    def export_boq(self, output_path: Path, summary: BuildingSummary) -> Path:
        """Export BOQ summary in standard format."""

        with open(output_path, 'w', newline='') as f:
            writer = csv.writer(f)

            writer.writerow(['STRUCTURAL BOQ SUMMARY'])
            writer.writerow([])
            writer.writerow(['Building:', summary.building_name])
            writer.writerow(['Floors:', len(summary.floor_breakdown)])
            writer.writerow([])

            writer.writerow(['Floor', 'Concrete (m³)', 'Grade 40 Steel (kg)',
                             'Grade 60 Steel (kg)', 'Total Steel (kg)'])
            for floor in summary.floor_breakdown:
                writer.writerow([
                    floor.floor_name,
                    f"{floor.concrete_volume:.3f}",
                    f"{floor.grade40_steel:.2f}",
                    f"{floor.grade60_steel:.2f}",
                    f"{floor.total_steel:.2f}"
                ])

            writer.writerow([
                'TOTAL',
                f"{summary.total_concrete_volume:.3f}",
                f"{summary.total_grade40_steel:.2f}",
                f"{summary.total_grade60_steel:.2f}",
                f"{summary.total_steel:.2f}"
            ])
            writer.writerow([])
            writer.writerow(['Total Steel (MT):', f"{summary.total_steel_tonnes:.3f}"])

        logger.info(f"Exported BOQ summary: {output_path}")
        return output_path


def export_structural(
    output_dir: Path,
    building_id: str,
    summary: BuildingSummary,
    qc_report: Optional[StructuralQCReport] = None
) -> Dict[str, Path]:
    """Convenience function to export all results."""
    exporter = StructuralExporter(output_dir)
    return exporter.export_all(building_id, summary, qc_report)
