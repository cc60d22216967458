"""
Settings management for htopsettings.

Handles loading, saving, and accessing the process monitor configuration.
"""

import logging
import os
from typing import Any, Dict, Iterable, List, Optional

from ..core import ColorScheme, FieldCatalog, LINUX_CATALOG
from .codec import ConfigCodec
from .defaults import DEFAULT_DELAY, DEFAULT_TOGGLES, FIRST_RUN_TOGGLES, TOGGLES
from .locations import ConfigLocationResolver
from .meters import MeterColumn, default_layout

logger = logging.getLogger(__name__)


class Settings:
    """
    Process monitor settings.

    Settings are stored in the htoprc text format. On construction the
    configuration is located and loaded in this order:

        1. The legacy ~/.htoprc, if present and safe to read. It is
           rewritten to the new location and deleted.
        2. The per-user file ($HTOPRC, or $XDG_CONFIG_HOME/htop/htoprc).
        3. The system-wide SYSCONFDIR/htoprc (marks settings as changed).
        4. Compiled-in defaults (marks settings as changed).

    Path:
        ~/.config/htop/htoprc
    """

    def __init__(self, cpu_count: Optional[int] = None,
                 catalog: Optional[FieldCatalog] = None,
                 resolver: Optional[ConfigLocationResolver] = None,
                 load: bool = True):
        """
        Initialize settings.

        Args:
            cpu_count: Number of CPUs, used for the default meter layout
            catalog: Process field catalog supplied by the platform
            resolver: Location resolver (defaults to the real environment)
            load: If False, skip file lookup and keep compiled-in defaults
        """
        self.catalog = catalog or LINUX_CATALOG
        self.cpu_count = cpu_count or os.cpu_count() or 1
        self.codec = ConfigCodec(self.catalog)
        self.resolver = resolver or ConfigLocationResolver()

        self.filename: Optional[str] = None
        self.source: Optional[str] = None
        self.reset()

        if load:
            self.load()

    def reset(self):
        """Restore compiled-in defaults. Does not touch the file location."""
        self.columns: List[MeterColumn] = [MeterColumn(), MeterColumn()]
        self._fields: List[int] = list(self.catalog.default_fields)
        self.sort_key = self.catalog.default_sort_key
        self.direction = 1
        self.color_scheme = int(ColorScheme.DEFAULT)
        self.delay = DEFAULT_DELAY
        for name, value in DEFAULT_TOGGLES.items():
            setattr(self, name, value)
        self.changed = False

    def load(self) -> Optional[str]:
        """
        Locate and read the configuration.

        Returns:
            The path settings were read from, or None if compiled-in
            defaults are in use
        """
        location = self.resolver.resolve()
        self.filename = location.filename

        source = location.legacy_filename or location.filename
        if self.codec.read(source, self):
            self.source = source
            if location.legacy_filename:
                # Transition to the new location and delete the old file
                if self.save():
                    self.resolver.remove_legacy(location.legacy_filename)
            return self.source

        self.changed = True
        system = self.resolver.system_config_path()
        if self.codec.read(system, self):
            logger.info(f"No user configuration, using system file {system}")
            self.source = system
            return self.source

        logger.info("No configuration file found, using defaults")
        self.columns = list(default_layout(self.cpu_count))
        for name, value in FIRST_RUN_TOGGLES.items():
            setattr(self, name, value)
        self.source = None
        return None

    def save(self) -> bool:
        """
        Save current settings to the resolved file.

        Returns:
            True on success. Failures are logged and reported as False;
            the running session keeps its in-memory settings.
        """
        if not self.filename:
            logger.error("Cannot save settings: no configuration path resolved")
            return False

        try:
            ok = self.codec.write(self.filename, self)
        except OSError as e:
            logger.error(f"Failed to save settings: {e}")
            return False

        if ok:
            self.changed = False
            logger.info(f"Saved settings to {self.filename}")
        else:
            logger.error(f"Failed to save settings to {self.filename}")
        return ok

    @property
    def fields(self) -> List[int]:
        """Selected process field ids, in display order."""
        return self._fields

    @fields.setter
    def fields(self, fields: Iterable[int]):
        fields = list(fields)
        if not fields:
            raise ValueError("At least one process field must be selected")
        if len(fields) > self.catalog.count:
            raise ValueError(
                f"At most {self.catalog.count} process fields can be selected, got {len(fields)}"
            )
        invalid = [f for f in fields if not self.catalog.is_valid(f)]
        if invalid:
            raise ValueError(f"Unknown process field ids: {invalid}")
        self._fields = fields

    @property
    def flags(self) -> int:
        """Scanner flags required by the selected fields."""
        return self.catalog.flags_for(self._fields)

    def set_fields(self, fields: Iterable[int]):
        self.fields = fields
        self.changed = True

    def set_sort_key(self, field_id: int):
        """
        Sort by field_id.

        Raises:
            ValueError: If field_id is not in the catalog
        """
        if not self.catalog.is_valid(field_id):
            raise ValueError(f"Unknown process field id: {field_id}")
        self.sort_key = field_id
        self.changed = True

    def invert_sort_order(self):
        """Flip between ascending and descending sort."""
        self.direction = -1 if self.direction == 1 else 1
        self.changed = True

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get setting value by its configuration file key.

        Args:
            key: Key as written in htoprc, e.g. "tree_view"
            default: Value returned for unknown keys

        Returns:
            Setting value or default
        """
        if key in TOGGLES:
            return getattr(self, key)
        if key == "sort_direction":
            return self.direction
        if key in ("sort_key", "delay", "color_scheme", "fields"):
            return getattr(self, key)
        return default

    def set(self, key: str, value: Any):
        """
        Set setting value by its configuration file key.

        Args:
            key: Key as written in htoprc, e.g. "tree_view"
            value: New value

        Raises:
            KeyError: If key is not a known setting
            ValueError: If value is out of range for key
        """
        if key in TOGGLES:
            setattr(self, key, bool(value))
        elif key == "sort_direction":
            if value not in (1, -1):
                raise ValueError(f"Sort direction must be 1 or -1, got {value}")
            self.direction = value
        elif key == "sort_key":
            self.set_sort_key(value)
        elif key == "fields":
            self.fields = value
        elif key == "delay":
            if int(value) < 0:
                raise ValueError(f"Delay cannot be negative, got {value}")
            self.delay = int(value)
        elif key == "color_scheme":
            if ColorScheme.clamp(int(value)) != int(value):
                raise ValueError(f"Unknown color scheme: {value}")
            self.color_scheme = int(value)
        else:
            raise KeyError(key)
        self.changed = True

    def toggle(self, key: str) -> bool:
        """Flip a boolean display option and return its new value."""
        if key not in TOGGLES:
            raise KeyError(key)
        self.set(key, not getattr(self, key))
        return getattr(self, key)

    def cpu_id(self, cpu: int) -> int:
        """Number shown for a 0-based CPU index."""
        return cpu if self.cpu_count_from_zero else cpu + 1

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot of every persisted value, keyed as in htoprc."""
        snapshot: Dict[str, Any] = {
            "fields": list(self._fields),
            "sort_key": self.sort_key,
            "sort_direction": self.direction,
            "color_scheme": self.color_scheme,
            "delay": self.delay,
        }
        for name in TOGGLES:
            snapshot[name] = getattr(self, name)
        for side, column in zip(("left", "right"), self.columns):
            snapshot[f"{side}_meters"] = list(column.names)
            snapshot[f"{side}_meter_modes"] = list(column.modes)
        return snapshot
