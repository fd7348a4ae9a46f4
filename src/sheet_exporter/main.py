#!/usr/bin/env python3
"""
Command-Line Interface for the Sheet Exporter
"""

import argparse
import logging
import os
import sys

from .components.config_loader import ConfigLoader
from .components.data_parser import DataParser
from .exceptions import SheetExportError
from .service import ExportService


def setup_logging(verbose: bool = False):
    """Sets up basic logging for the CLI tool."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Export a JSON list of records to a styled .xlsx sheet.")
    parser.add_argument("input_file", help="Path to the input JSON records file.")
    parser.add_argument("--config", help="Path to a JSON export options file.")
    parser.add_argument("--output-dir", default=".", help="Directory to write the .xlsx file to.")
    parser.add_argument("--filename", help="Output file name without extension.")
    parser.add_argument("--sheet-name", help="Worksheet name.")
    parser.add_argument("--title", help="Main title shown above the headers.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv=None) -> int:
    """Main function to run the sheet exporter from the command line."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    overrides = {
        name: value for name, value in (
            ('filename', args.filename),
            ('sheet_name', args.sheet_name),
            ('main_title', args.title),
        ) if value is not None
    }

    try:
        config_loader = ConfigLoader()
        if args.config:
            options = config_loader.load(args.config, overrides)
        else:
            options = config_loader.from_dict(overrides)

        records = DataParser().parse(args.input_file)
        output_path = ExportService(options).export(records, args.output_dir)

        logging.info(f"Successfully exported {len(records)} records. Output at: {os.path.abspath(output_path)}")
        return 0

    except SheetExportError as e:
        logging.error(f"An error occurred during export: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
