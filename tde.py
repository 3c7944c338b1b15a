#!/usr/bin/env python3
"""
Tracking Data Exporter v1.0.0 - Command Line Version
Export per-frame transform and tracking data of a composition to JSON
"""

import argparse
import sys
from pathlib import Path

from core.feature_samplers import CORNER_PIN_EFFECT, PUPPET_EFFECT
from readers import SUPPORTED_EXTENSIONS
from tracking_exporter import TrackingDataExporter, default_output_path


def build_parser():
    parser = argparse.ArgumentParser(
        prog='TrackingDataExporter',
        description='Export layer transforms, trackers, mesh warps, corner pins and puppet pins to JSON',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export the first composition
  python tde.py scene.json

  # Export a named composition to a specific file
  python tde.py scene.json output.json --comp "Main Comp"

  # List compositions
  python tde.py scene.json --list

  # Compact output rounded to 4 decimals
  python tde.py scene.json --indent 0 --precision 4
        """
    )

    parser.add_argument('input', type=str, help='Input scene description (.json)')
    parser.add_argument('output', type=str, nargs='?',
                        help='Output JSON file (default: <input>_tracking.json)')
    parser.add_argument('--comp', type=str,
                        help='Composition name or 1-based index (default: first composition)')
    parser.add_argument('--list', action='store_true',
                        help='List compositions and exit')
    parser.add_argument('--indent', type=int, default=2,
                        help='JSON indentation, 0 for compact output (default: 2)')
    parser.add_argument('--precision', type=int,
                        help='Decimal places kept for numbers (default: full precision)')
    parser.add_argument('--corner-pin-effect', type=str, default=CORNER_PIN_EFFECT,
                        help=f'Corner pin effect name (default: "{CORNER_PIN_EFFECT}")')
    parser.add_argument('--puppet-effect', type=str, default=PUPPET_EFFECT,
                        help=f'Puppet effect name (default: "{PUPPET_EFFECT}")')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Validate input file exists
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        return 1

    # Validate file extension
    file_ext = input_path.suffix.lower()
    if file_ext not in SUPPORTED_EXTENSIONS:
        print(f"Error: Unsupported file format: {file_ext}", file=sys.stderr)
        print(f"Supported formats: {', '.join(sorted(SUPPORTED_EXTENSIONS))}", file=sys.stderr)
        return 1

    if args.precision is not None and args.precision < 0:
        print("Error: --precision must be zero or positive", file=sys.stderr)
        return 1

    exporter = TrackingDataExporter(
        corner_pin_effect=args.corner_pin_effect,
        puppet_effect=args.puppet_effect
    )

    if args.list:
        try:
            names = exporter.list_compositions(str(input_path))
        except Exception as e:
            print(f"✗ Could not read compositions: {e}", file=sys.stderr)
            return 1
        if not names:
            print("No compositions found.")
        for i, name in enumerate(names, start=1):
            print(f"{i:3d}  {name}")
        return 0

    output_path = Path(args.output) if args.output else default_output_path(input_path)
    indent = args.indent if args.indent > 0 else None

    result = exporter.export(
        input_file=str(input_path),
        output_file=str(output_path),
        composition=args.comp,
        indent=indent,
        precision=args.precision
    )

    if result.get('success'):
        print("=" * 60)
        print(f"✓ {result['message']}")
        print(f"✓ JSON file: {result['json_file']}")
        print("=" * 60)
        return 0

    print(f"\n✗ Export did not complete: {result.get('message', 'Check log above')}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
