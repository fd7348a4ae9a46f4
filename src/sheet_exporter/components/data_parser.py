#!/usr/bin/env python3
"""
Sheet Exporter
Component: Data Parser
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from ..exceptions import DataParsingError


class DataParser:
    """Parses a JSON file into the list of records to export."""

    def parse(self, file_path: str | Path) -> List[Dict[str, Any]]:
        """
        Loads records from a JSON file.

        The file holds either a list of objects or an object with a "records"
        list.
        """
        logging.info(f"Starting data parsing for: {file_path}")
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                raw_data = json.load(f)
        except FileNotFoundError:
            logging.error(f"Input data file not found: {file_path}")
            raise DataParsingError(f"Input data file not found: {file_path}")
        except json.JSONDecodeError:
            logging.error(f"Invalid JSON in file: {file_path}")
            raise DataParsingError(f"Invalid JSON in file: {file_path}")

        if isinstance(raw_data, dict) and "records" in raw_data:
            logging.info("Detected wrapped 'records' data format.")
            raw_data = raw_data["records"]

        if not isinstance(raw_data, list):
            raise DataParsingError(f"Expected a list of records in {file_path}")

        for index, record in enumerate(raw_data):
            if not isinstance(record, dict):
                raise DataParsingError(f"Record {index} in {file_path} is not an object")

        logging.info(f"Parsed {len(raw_data)} records from {file_path}")
        return raw_data
