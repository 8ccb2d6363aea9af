"""
RCC Quantity Takeoff - CLI Entry Point

Commands:
    summary   - Building quantity summary (optionally exported)
    validate  - Grid validation and QC report
    area      - Area of a grid span on one floor
    unit      - Per-unit quantities of one specification
    estimate  - Quick parameter estimate
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .structural import (
    QuantityEngine,
    StructuralQC,
    export_structural,
    unit_quantities,
    unit_volume,
    TakeoffError
)


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )


def _load(engine: QuantityEngine, path: str):
    """Load a building, printing the reason on failure."""
    try:
        return engine.load_building(path)
    except FileNotFoundError:
        print(f"Building file not found: {path}")
    except TakeoffError as e:
        print(f"Could not read building: {e}")
    return None


def _get_floor(building, floor_id: str):
    floor = building.get_floor(floor_id)
    if floor is None:
        known = ', '.join(f.id for f in building.floors) or 'none'
        print(f"Floor '{floor_id}' not found (floors: {known})")
    return floor


def cmd_summary(args):
    """Compute and print the building summary."""
    engine = QuantityEngine()
    building = _load(engine, args.building)
    if building is None:
        return 1

    try:
        summary = engine.compute_building_summary(building)
    except TakeoffError as e:
        print(f"Takeoff failed: {e}")
        return 1

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(f"\n{'='*60}")
        print(f"BUILDING: {summary.building_name}")
        print(f"{'='*60}")
        for floor in summary.floor_breakdown:
            print(f"{floor.floor_name:<20} {floor.concrete_volume:>10.3f} m³ "
                  f"{floor.grade40_steel:>10.2f} kg G40 {floor.grade60_steel:>10.2f} kg G60")
        print(f"{'-'*60}")
        print(f"Total concrete: {summary.total_concrete_volume:.3f} m³")
        print(f"Grade 40 steel: {summary.total_grade40_steel:.2f} kg")
        print(f"Grade 60 steel: {summary.total_grade60_steel:.2f} kg")
        print(f"Total steel: {summary.total_steel_tonnes:.3f} MT")

    if args.output:
        qc_report = StructuralQC(engine).generate_report(building)
        paths = export_structural(Path(args.output), building.id or Path(args.building).stem,
                                  summary, qc_report)
        print(f"\nOutputs: {len(paths)} files in {Path(args.output)}")

    if args.excel:
        from .reporting import export_to_excel
        export_to_excel(summary, args.excel)
        print(f"Excel: {args.excel}")

    return 0


def cmd_validate(args):
    """Run grid validation and QC checks."""
    engine = QuantityEngine()
    building = _load(engine, args.building)
    if building is None:
        return 1

    report = StructuralQC(engine).generate_report(building)

    for issue in report.issues:
        where = f"[{issue.floor_id}]" if issue.floor_id else ""
        print(f"{issue.code.value} {issue.severity.value.upper():<7} {where} {issue.message}")

    print(f"\n{report.error_count} error(s), {report.warning_count} warning(s), "
          f"{report.info_count} info")

    return 1 if report.has_errors else 0


def cmd_area(args):
    """Area of a grid span."""
    engine = QuantityEngine()
    building = _load(engine, args.building)
    if building is None:
        return 1
    floor = _get_floor(building, args.floor)
    if floor is None:
        return 1

    result = engine.calculate_area(
        floor, args.start_row, args.end_row, args.start_col, args.end_col
    )
    if not result.is_valid:
        print(f"Invalid span: {result.error}")
        return 1

    print(f"Width: {result.width:.3f} m")
    print(f"Length: {result.length:.3f} m")
    print(f"Area: {result.area:.3f} m²")
    return 0


def cmd_unit(args):
    """Per-unit quantities of a specification."""
    building = _load(QuantityEngine(), args.building)
    if building is None:
        return 1
    floor = _get_floor(building, args.floor)
    if floor is None:
        return 1

    spec = floor.find_spec(args.spec_id)
    if spec is None:
        print(f"Specification '{args.spec_id}' not found on floor {floor.id}")
        return 1

    try:
        weights = unit_quantities(spec)
    except TakeoffError as e:
        print(f"Invalid specification: {e}")
        return 1

    unit = {'BeamSpec': 'm', 'SlabSpec': 'm²'}.get(type(spec).__name__, 'member')
    print(f"{type(spec).__name__} {spec.id} (per {unit})")
    print(f"Concrete: {unit_volume(spec):.4f} m³")
    print(f"Grade 40 steel: {weights.grade40_weight:.2f} kg")
    print(f"Grade 60 steel: {weights.grade60_weight:.2f} kg")
    print(f"Total steel: {weights.total_weight:.2f} kg")
    return 0


def cmd_estimate(args):
    """Quick parameter estimate, optionally saved."""
    from .estimate import calculate_estimate, EstimateRecord, EstimateStore

    try:
        print(calculate_estimate(args.parameter, args.group, args.breakdown))
    except ValueError as e:
        print(str(e))
        return 1

    if args.save:
        record = EstimateRecord.from_parameter(args.parameter, args.group, args.breakdown)
        result = EstimateStore(args.save).save(record)
        print(f"Saved: {result['id']}")

    return 0


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='RCC Quantity Takeoff Engine',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Building summary
  python -m rcc_takeoff summary building.json

  # Summary with CSV/JSON and Excel export
  python -m rcc_takeoff summary building.json --output ./out --excel ./out/takeoff.xlsx

  # Validate grids and assignments
  python -m rcc_takeoff validate building.yaml

  # Area of slab span A1-B2 on floor f1
  python -m rcc_takeoff area building.json --floor f1 A B 1 2
        """
    )

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Verbose output')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Summary command
    summary_parser = subparsers.add_parser('summary', help='Building quantity summary')
    summary_parser.add_argument('building', help='Building file (.json/.yaml)')
    summary_parser.add_argument('--json', action='store_true',
                                help='Print the summary as JSON')
    summary_parser.add_argument('--output', '-o',
                                help='Export JSON/CSV files to this directory')
    summary_parser.add_argument('--excel',
                                help='Write an Excel workbook to this path')
    summary_parser.set_defaults(func=cmd_summary)

    # Validate command
    validate_parser = subparsers.add_parser('validate', help='Grid validation and QC report')
    validate_parser.add_argument('building', help='Building file (.json/.yaml)')
    validate_parser.set_defaults(func=cmd_validate)

    # Area command
    area_parser = subparsers.add_parser('area', help='Area of a grid span')
    area_parser.add_argument('building', help='Building file (.json/.yaml)')
    area_parser.add_argument('--floor', '-f', required=True, help='Floor id')
    area_parser.add_argument('start_row')
    area_parser.add_argument('end_row')
    area_parser.add_argument('start_col')
    area_parser.add_argument('end_col')
    area_parser.set_defaults(func=cmd_area)

    # Unit command
    unit_parser = subparsers.add_parser('unit', help='Per-unit quantities of a specification')
    unit_parser.add_argument('building', help='Building file (.json/.yaml)')
    unit_parser.add_argument('--floor', '-f', required=True, help='Floor id')
    unit_parser.add_argument('spec_id', help='Beam, column, slab or footing spec id')
    unit_parser.set_defaults(func=cmd_unit)

    # Estimate command
    estimate_parser = subparsers.add_parser('estimate', help='Quick parameter estimate')
    estimate_parser.add_argument('parameter', help='Numeric parameter')
    estimate_parser.add_argument('--group', default='', help='Group name')
    estimate_parser.add_argument('--breakdown', default='', help='Breakdown name')
    estimate_parser.add_argument('--save', help='Append the estimate to this JSON file')
    estimate_parser.set_defaults(func=cmd_estimate)

    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if not hasattr(args, 'func'):
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
