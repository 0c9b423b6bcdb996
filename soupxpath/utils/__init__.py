"""
Utility modules for soup-xpath.
"""

# Import key utilities for easy access
from soupxpath.utils.config import Config
from soupxpath.utils.logging import setup_logging, log_exception, PerformanceLogger

__all__ = [
    'Config',
    'setup_logging',
    'log_exception',
    'PerformanceLogger',
]
