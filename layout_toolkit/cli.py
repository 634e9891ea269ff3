"""
Command-line interface for Layout Toolkit.

Usage:
    layout-toolkit convert layout.json --format jsx
    layout-toolkit convert layout.json --format html --output preview.html
    layout-toolkit version
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from layout_toolkit import __version__
from layout_toolkit.core.services import OUTPUT_FORMATS, ConversionService

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="layout-toolkit",
        description="Layout Toolkit - convert saved editor layouts into trees and markup",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  layout-toolkit convert layout.json --format jsx
  layout-toolkit convert layout.json --format html --output preview.html
  layout-toolkit convert layout.json --format debug
  layout-toolkit version
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    convert_parser = subparsers.add_parser("convert", help="Convert a saved layout")
    convert_parser.add_argument("input", help="Layout file holding the stored JSON array")
    convert_parser.add_argument(
        "-f", "--format",
        choices=list(OUTPUT_FORMATS),
        default="jsx",
        help="Output format (default: jsx)"
    )
    convert_parser.add_argument(
        "-o", "--output",
        help="Output file path (default: stdout)"
    )

    subparsers.add_parser("version", help="Show version information")

    return parser


def cmd_convert(args: argparse.Namespace) -> int:
    """Execute the convert command."""
    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"Error: Input file not found: {input_path}", file=sys.stderr)
        return 1

    service = ConversionService()
    result, rendered = service.convert_and_render(
        input_path.read_text(encoding="utf-8"), args.format
    )
    if not result.success:
        print(f"Error: {result.message} ({result.details.get('error', '')})", file=sys.stderr)
        return 1
    for entry in result.details.get("degraded", []):
        print(f"Warning: element '{entry['id']}' rendered as plain text: {entry['reason']}",
              file=sys.stderr)

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(rendered, encoding="utf-8")
        logger.info("Wrote %s output to %s", args.format, output_path)
        print(f"Converted {len(result.nodes)} element(s) -> {output_path}")
    else:
        sys.stdout.write(rendered)
    return 0


def cmd_version(args: argparse.Namespace) -> int:
    """Execute the version command."""
    print(f"layout-toolkit {__version__}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "convert":
        return cmd_convert(args)
    if args.command == "version":
        return cmd_version(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
