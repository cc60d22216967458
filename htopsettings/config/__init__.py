"""
Configuration management for htopsettings.

This module handles locating, parsing, defaulting and persisting the
process monitor settings.
"""

from .settings import Settings
from .codec import ConfigCodec, encode_field_id, decode_field_id
from .locations import ConfigLocation, ConfigLocationResolver
from .meters import MeterColumn, default_layout

__all__ = [
    "Settings",
    "ConfigCodec",
    "encode_field_id",
    "decode_field_id",
    "ConfigLocation",
    "ConfigLocationResolver",
    "MeterColumn",
    "default_layout",
]
