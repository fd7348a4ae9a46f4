#!/usr/bin/env python3
"""
Sheet Exporter
Component: Config Loader
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..exceptions import ConfigError, ConfigNotFound
from ..models import ExportOptions


class ConfigLoader:
    """Loads and validates export options"""

    def load(self, config_path: str | Path, overrides: Optional[Dict[str, Any]] = None) -> ExportOptions:
        """
        Loads export options from a JSON file.

        Args:
            config_path: Path to the JSON options file
            overrides: Options that replace values from the file

        Returns:
            A validated ExportOptions object

        Raises:
            ConfigNotFound: If the file is missing, unreadable or invalid JSON
            ConfigError: If the options fail validation
        """
        logging.info(f"Loading export options from: {config_path}")
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = json.load(f)
        except FileNotFoundError:
            raise ConfigNotFound(f"Options file not found: {config_path}")
        except json.JSONDecodeError as e:
            raise ConfigNotFound(f"Invalid JSON in options file {config_path}: {e}")

        if not isinstance(config_data, dict):
            raise ConfigError(f"Options file {config_path} must contain a JSON object")

        return self.from_dict({**config_data, **(overrides or {})})

    def from_dict(self, config_data: Dict[str, Any]) -> ExportOptions:
        """Validate a plain options mapping."""
        try:
            return ExportOptions(**config_data)
        except ValidationError as e:
            raise ConfigError(f"Export options validation failed: {e}") from e
