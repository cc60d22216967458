"""
Host-supplied catalogs consumed by the settings layer.

This module provides:
- The process field catalog (field names and their flag bits)
- The enumerated range of color schemes
"""

from .fields import FieldDescriptor, FieldCatalog, ProcessFlag, LINUX_CATALOG
from .colors import ColorScheme

__all__ = [
    "FieldDescriptor",
    "FieldCatalog",
    "ProcessFlag",
    "LINUX_CATALOG",
    "ColorScheme",
]
