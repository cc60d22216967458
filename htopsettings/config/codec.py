"""
Reader and writer for the htoprc text format.

The format is one ``key=value`` pair per line. Lists are space
separated. The parser is deliberately forgiving: lines without ``=``,
unknown keys and non-numeric values are skipped or read as 0 so that
files written by newer or older releases still load.
"""

import io
import logging
import re
from typing import TYPE_CHECKING, List, Optional

from ..core import ColorScheme, FieldCatalog
from ..security import PrivilegeScope
from ..utils import atomic_write_text
from .defaults import FIELD_ID_OFFSET, KEY_ALIASES, TOGGLES
from .meters import default_layout

if TYPE_CHECKING:
    from .settings import Settings

logger = logging.getLogger(__name__)

HEADER = (
    "# Beware! This file is rewritten by htop when settings are changed in the interface.\n"
    "# The parser is also very primitive, and not human-friendly.\n"
)

METER_KEYS = {
    "left_meters": (0, "names"),
    "right_meters": (1, "names"),
    "left_meter_modes": (0, "modes"),
    "right_meter_modes": (1, "modes"),
}

_LEADING_INT = re.compile(r'\s*([+-]?\d+)')


def parse_int(text: str) -> int:
    """Read a leading decimal integer, returning 0 when there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def encode_field_id(field_id: int) -> int:
    """Convert an in-memory field id to its on-disk number."""
    return field_id - FIELD_ID_OFFSET


def decode_field_id(value: int) -> int:
    """Convert an on-disk field number to an in-memory field id."""
    return value + FIELD_ID_OFFSET


class ConfigCodec:
    """
    Parse and serialize Settings in the htoprc format.

    The codec never creates Settings objects itself: parse() applies
    whatever keys it recognizes on top of the values already present,
    which is how compiled-in defaults survive partial files.
    """

    def __init__(self, catalog: FieldCatalog):
        self.catalog = catalog

    def read(self, path: str, settings: "Settings") -> bool:
        """
        Load path into settings.

        Args:
            path: File to read
            settings: Settings to update in place

        Returns:
            False if the file could not be opened, True otherwise
        """
        try:
            with PrivilegeScope():
                with open(path, "r", encoding="utf-8", errors="surrogateescape") as f:
                    text = f.read()
        except OSError as e:
            logger.debug(f"Cannot read {path}: {e}")
            return False

        self.parse(text, settings)
        logger.info(f"Loaded settings from {path}")
        return True

    def parse(self, text: str, settings: "Settings"):
        """
        Apply the recognized lines of text to settings.

        If no meter key appears anywhere, both columns are replaced by the
        default layout for settings.cpu_count. If only some meter keys
        appear, the columns they do not mention are left as they were.
        """
        names: List[Optional[List[str]]] = [None, None]
        modes: List[Optional[List[int]]] = [None, None]
        read_meters = False

        for lineno, line in enumerate(io.StringIO(text), 1):
            if line.startswith("#"):
                continue

            key, sep, value = line.rstrip("\r\n").partition("=")
            if not sep:
                logger.debug(f"Line {lineno}: no '=' separator, skipped")
                continue

            key = KEY_ALIASES.get(key.strip(), key.strip())

            if key == "fields":
                fields = self.decode_fields(value)
                if fields:
                    settings.fields = fields
                else:
                    logger.debug(f"Line {lineno}: no usable field ids, keeping {settings.fields}")
            elif key == "sort_key":
                sort_key = decode_field_id(parse_int(value))
                if self.catalog.is_valid(sort_key):
                    settings.sort_key = sort_key
            elif key == "sort_direction":
                settings.direction = -1 if parse_int(value) < 0 else 1
            elif key == "delay":
                settings.delay = parse_int(value)
            elif key == "color_scheme":
                settings.color_scheme = ColorScheme.clamp(parse_int(value))
            elif key in TOGGLES:
                setattr(settings, key, parse_int(value) != 0)
            elif key in METER_KEYS:
                column, kind = METER_KEYS[key]
                items = value.split()
                if kind == "names":
                    names[column] = items
                else:
                    modes[column] = [parse_int(item) for item in items]
                read_meters = True
            else:
                logger.debug(f"Line {lineno}: unknown key '{key}', skipped")

        if not read_meters:
            settings.columns = list(default_layout(settings.cpu_count))
            return

        for column in (0, 1):
            if names[column] is not None or modes[column] is not None:
                settings.columns[column].assign(names[column] or [], modes[column])

    def decode_fields(self, value: str) -> List[int]:
        """
        Decode a space separated list of on-disk field numbers.

        Ids outside the catalog or naming an unimplemented field are
        dropped. At most catalog.count entries are examined.
        """
        fields = []
        for item in value.split()[:self.catalog.count]:
            field_id = decode_field_id(parse_int(item))
            if self.catalog.is_valid(field_id):
                fields.append(field_id)
        return fields

    def serialize(self, settings: "Settings") -> str:
        """Render settings as htoprc text. Every key is always written."""
        out = io.StringIO()
        out.write(HEADER)
        out.write("fields=" + "".join(f"{encode_field_id(f)} " for f in settings.fields) + "\n")
        out.write(f"sort_key={encode_field_id(settings.sort_key)}\n")
        out.write(f"sort_direction={settings.direction}\n")
        for name in TOGGLES:
            out.write(f"{name}={int(getattr(settings, name))}\n")
        out.write(f"color_scheme={settings.color_scheme}\n")
        out.write(f"delay={settings.delay}\n")
        for side, column in zip(("left", "right"), settings.columns):
            out.write(f"{side}_meters=" + "".join(f"{name} " for name in column.names) + "\n")
            out.write(f"{side}_meter_modes=" + "".join(f"{mode} " for mode in column.modes) + "\n")
        return out.getvalue()

    def write(self, path: str, settings: "Settings") -> bool:
        """
        Atomically replace path with the serialized settings.

        Returns:
            True on success, False if the file could not be written
        """
        text = self.serialize(settings)
        with PrivilegeScope():
            return atomic_write_text(path, text)
