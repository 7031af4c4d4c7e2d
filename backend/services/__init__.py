"""Services module - Business logic layer"""

from .config_manager import ConfigManager
from .diff_engine import ConfigDiffEngine
from .errors import (
    DiffCalculationError,
    DiffError,
    InvalidConfigError,
    InvalidOptionsError,
    ParseError,
    ValidationError,
)
from .exporters import DiffExporter

__all__ = [
    "ConfigManager",
    "ConfigDiffEngine",
    "DiffExporter",
    "DiffError",
    "InvalidConfigError",
    "InvalidOptionsError",
    "ValidationError",
    "ParseError",
    "DiffCalculationError",
]
