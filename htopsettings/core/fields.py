"""
Process field catalog.

The process scanner owns the real list of columns it can display. The
settings layer only needs three things from it: which integer ids are
valid, the flag bits each field requires from the scanner, and the
default column selection. FieldCatalog wraps exactly that.
"""

from dataclasses import dataclass
from enum import IntFlag
from typing import Iterable, List, Optional, Sequence


class ProcessFlag(IntFlag):
    """Extra data the scanner must collect for a field to be shown."""
    NONE = 0
    IO = 0x0001
    IOPRIO = 0x0100
    OPENVZ = 0x0200
    VSERVER = 0x0400
    CGROUP = 0x0800
    OOM = 0x1000


@dataclass(frozen=True)
class FieldDescriptor:
    """A single selectable process column."""
    name: str
    flags: int = 0


class FieldCatalog:
    """
    Ordered table of process field descriptors, indexed by field id.

    Id 0 is reserved and never valid. Entries with an empty name are
    placeholders for ids the platform does not implement.
    """

    def __init__(self, descriptors: Sequence[FieldDescriptor],
                 default_fields: Iterable[int], default_sort_key: int):
        self._descriptors = list(descriptors)
        self.default_fields = tuple(default_fields)
        self.default_sort_key = default_sort_key

        if not self._descriptors:
            raise ValueError("Field catalog cannot be empty")

        for field_id in self.default_fields + (default_sort_key,):
            if not self.is_valid(field_id):
                raise ValueError(f"Default field id {field_id} is not in the catalog")

    @property
    def count(self) -> int:
        """Number of slots in the catalog, including the reserved id 0."""
        return len(self._descriptors)

    def __len__(self) -> int:
        return self.count

    def __getitem__(self, field_id: int) -> FieldDescriptor:
        return self._descriptors[field_id]

    def is_valid(self, field_id: int) -> bool:
        """Check that field_id is in range and names a real field."""
        return 0 < field_id < self.count and bool(self._descriptors[field_id].name)

    def flags_for(self, fields: Iterable[int]) -> int:
        """Union of the flag bits required by the given fields."""
        flags = 0
        for field_id in fields:
            if self.is_valid(field_id):
                flags |= self._descriptors[field_id].flags
        return flags

    def find(self, name: str) -> Optional[int]:
        """Look up a field id by name."""
        for field_id, descriptor in enumerate(self._descriptors):
            if field_id > 0 and descriptor.name == name:
                return field_id
        return None

    def names(self, fields: Iterable[int]) -> List[str]:
        return [self._descriptors[f].name for f in fields]


def _build_linux_catalog() -> FieldCatalog:
    F = FieldDescriptor
    descriptors = [
        F(""),
        F("PID"),
        F("Command"),
        F("STATE"),
        F("PPID"),
        F("PGRP"),
        F("SESSION"),
        F("TTY_NR"),
        F("TPGID"),
        F(""),
        F("MINFLT"),
        F("CMINFLT"),
        F("MAJFLT"),
        F("CMAJFLT"),
        F("UTIME"),
        F("STIME"),
        F("CUTIME"),
        F("CSTIME"),
        F("PRIORITY"),
        F("NICE"),
        F(""),
        F("STARTTIME"),
    ]
    descriptors.extend(F("") for _ in range(len(descriptors), 38))
    descriptors.extend([
        F("PROCESSOR"),
        F("M_SIZE"),
        F("M_RESIDENT"),
        F("M_SHARE"),
        F("M_TRS"),
        F("M_DRS"),
        F("M_LRS"),
        F("M_DT"),
        F("ST_UID"),
        F("PERCENT_CPU"),
        F("PERCENT_MEM"),
        F("USER"),
        F("TIME"),
        F("NLWP"),
        F("TGID"),
        F("CTID", ProcessFlag.OPENVZ),
        F("VPID", ProcessFlag.OPENVZ),
        F("VXID", ProcessFlag.VSERVER),
        F("RCHAR", ProcessFlag.IO),
        F("WCHAR", ProcessFlag.IO),
        F("SYSCR", ProcessFlag.IO),
        F("SYSCW", ProcessFlag.IO),
        F("RBYTES", ProcessFlag.IO),
        F("WBYTES", ProcessFlag.IO),
        F("CNCLWB", ProcessFlag.IO),
        F("IO_READ_RATE", ProcessFlag.IO),
        F("IO_WRITE_RATE", ProcessFlag.IO),
        F("IO_RATE", ProcessFlag.IO),
        F("CGROUP", ProcessFlag.CGROUP),
        F("OOM", ProcessFlag.OOM),
        F("IO_PRIORITY", ProcessFlag.IOPRIO),
    ])

    by_name = {d.name: i for i, d in enumerate(descriptors) if d.name}
    defaults = [by_name[name] for name in (
        "PID", "USER", "PRIORITY", "NICE", "M_SIZE", "M_RESIDENT", "M_SHARE",
        "STATE", "PERCENT_CPU", "PERCENT_MEM", "TIME", "Command",
    )]
    return FieldCatalog(descriptors, defaults, by_name["PERCENT_CPU"])


# Catalog used when the host does not supply its own
LINUX_CATALOG = _build_linux_catalog()
