"""
Utility functions for htopsettings.
"""

from .logger import setup_logging
from .fileio import atomic_write_text

__all__ = ["setup_logging", "atomic_write_text"]
