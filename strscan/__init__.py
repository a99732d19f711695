"""
strscan — Printable String Extraction Utility
=============================================
Pulls runs of printable ASCII out of arbitrary binary data, with
configurable character classes, length windows, splitting and
pattern filtering.
"""

__version__ = "1.0.0"
__author__ = "drixpyyy"
__license__ = "MIT"
__description__ = "Printable string extraction from binary data"

from strscan.config import DEFAULT_CONFIG, ConfigError, OutputFormat, ScanConfig, ScanOptions
from strscan.engine import Run, ScanEngine, ScanResult, extract_strings, filter_results

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigError",
    "OutputFormat",
    "Run",
    "ScanConfig",
    "ScanEngine",
    "ScanOptions",
    "ScanResult",
    "extract_strings",
    "filter_results",
]
