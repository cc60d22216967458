"""
Header meter columns and the default layout.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple


@dataclass
class MeterColumn:
    """
    One header column: meter class names with their display modes.

    names and modes are parallel; use add() or assign() to keep them
    the same length.
    """
    names: List[str] = field(default_factory=list)
    modes: List[int] = field(default_factory=list)

    def __post_init__(self):
        if len(self.names) != len(self.modes):
            raise ValueError(
                f"Meter column has {len(self.names)} names but {len(self.modes)} modes"
            )

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self) -> Iterator[Tuple[str, int]]:
        return iter(zip(self.names, self.modes))

    def add(self, name: str, mode: int = 0):
        self.names.append(name)
        self.modes.append(mode)

    def assign(self, names: Sequence[str], modes: Optional[Sequence[int]] = None):
        """
        Replace the column contents.

        Missing modes default to 0 and surplus modes are discarded, so
        the column length always follows names.
        """
        modes = list(modes or [])[:len(names)]
        modes.extend([0] * (len(names) - len(modes)))
        self.names = list(names)
        self.modes = modes


def default_layout(cpu_count: int) -> Tuple[MeterColumn, MeterColumn]:
    """
    Build the header layout used when no meters were configured.

    Machines with more than 4 CPUs split the CPU bars across both
    columns; more than 8 switches to the two-bars-per-row variant.

    Args:
        cpu_count: Number of CPUs on this machine

    Returns:
        (left column, right column), every meter in mode 0
    """
    left = MeterColumn()
    right = MeterColumn()

    if cpu_count > 8:
        left.add("LeftCPUs2")
        right.add("RightCPUs2")
    elif cpu_count > 4:
        left.add("LeftCPUs")
        right.add("RightCPUs")
    else:
        left.add("AllCPUs")

    left.add("Memory")
    left.add("Swap")

    right.add("Tasks")
    right.add("LoadAverage")
    right.add("Uptime")

    return left, right
