"""
Security module for htopsettings.

This module provides privilege-safe filesystem access for binaries that
may be installed with elevated permission bits.
"""

from .privileges import PrivilegeScope, dropped_privileges
from .sanitizer import is_safe_legacy_file

__all__ = [
    "PrivilegeScope",
    "dropped_privileges",
    "is_safe_legacy_file",
]
