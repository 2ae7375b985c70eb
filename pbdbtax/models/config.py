"""Configuration management for pbdbtax."""

import os
from pathlib import Path
from typing import Optional, Any

from pbdbtax.models.errors import PbdbError

class ConfigError(PbdbError):
    """Raised when there's an issue with configuration."""
    pass

def _env_int(name: str) -> Optional[int]:
    value = os.environ.get(name)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"Environment variable {name} must be an integer, got '{value}'")

class PbdbConfig:
    """Centralized configuration for pbdbtax."""

    def __init__(self, args: Optional[Any] = None):
        """
        Initialize configuration from args and environment.

        Args:
            args: Arguments from argparse

        Raises:
            ConfigError: If configuration values are invalid
        """
        self.command = getattr(args, 'command', None)

        # Common configuration
        self.verbose = getattr(args, 'verbose', False)

        # Format command configuration
        if self.command == 'format':
            self.input_path = getattr(args, 'input_path', None)
            self.base_names = getattr(args, 'base_name', None)
            if not self.input_path and self.base_names:
                from pbdbtax.core.utils import taxa_list_url
                self.input_path = taxa_list_url(self.base_names)
            self.output_path = Path(getattr(args, 'output', 'PBDBformatted.csv'))
            self.limit = getattr(args, 'limit', None)
            self.workers = getattr(args, 'workers', None)
            if self.workers is None:
                self.workers = _env_int("PBDBTAX_WORKERS")
            if self.workers is None:
                self.workers = os.cpu_count() or 1
            self.batch_size = getattr(args, 'batch_size', None)
            if self.batch_size is None:
                self.batch_size = _env_int("PBDBTAX_BATCH_SIZE")
            self.audit = getattr(args, 'audit', False)
            self.report_path = Path(getattr(args, 'report', 'multiGenera.txt'))
            self.report_subgenera = getattr(args, 'report_subgenera', False)

            if not self.input_path:
                raise ConfigError("No PBDB taxa table given. Pass a file path or URL, or use '--base-name'.")
            if self.workers < 1:
                raise ConfigError(f"Worker count must be at least 1, got {self.workers}")
            if self.batch_size is not None and self.batch_size < 1:
                raise ConfigError(f"Batch size must be at least 1, got {self.batch_size}")
            if self.limit is not None and self.limit < 0:
                raise ConfigError(f"Limit must not be negative, got {self.limit}")

        # Audit command configuration
        elif self.command == 'audit':
            self.lineage_path = Path(getattr(args, 'lineage_path', ''))
            self.report_path = Path(getattr(args, 'report', 'multiGenera.txt'))
            self.report_subgenera = getattr(args, 'report_subgenera', False)

        # Intervals command configuration
        elif self.command == 'intervals':
            self.source = getattr(args, 'source', None)
            self.scale_level = getattr(args, 'scale_level', 4)
            self.extra = getattr(args, 'extra', None)
            self.output_path = Path(getattr(args, 'output', 'PBDBintervals.csv'))
