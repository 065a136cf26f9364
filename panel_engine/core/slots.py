"""Slot addressing, panel geometry and pagination regions.

Slots are zero-based linear indices. Rows and columns are one-based and
every grid row is ``GRID_WIDTH`` slots wide.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Tuple

from panel_engine.errors import SlotOutOfRange

GRID_WIDTH = 9
MAX_GRID_ROWS = 6


def slot_of(row: int, col: int) -> int:
    """Convert a one-based (row, col) pair to a zero-based slot index."""
    return (col + (row - 1) * GRID_WIDTH) - 1


def row_col_of(slot: int) -> Tuple[int, int]:
    """Inverse of :func:`slot_of`."""
    return slot // GRID_WIDTH + 1, slot % GRID_WIDTH + 1


class PanelType(Enum):
    """Surface kind.

    GRID is the only type with variable rows. The other types have a
    host-defined, fixed capacity.
    """

    GRID = "grid"
    WORKBENCH = "workbench"
    HOPPER = "hopper"
    DISPENSER = "dispenser"
    BREWING = "brewing"

    @property
    def limit(self) -> int:
        """Row width for GRID, largest valid slot index for fixed types."""
        return _TYPE_LIMITS[self]

    @property
    def fill_size(self) -> int:
        """Number of slots a fixed surface shows."""
        return _TYPE_FILL_SIZES[self]

    @property
    def is_grid(self) -> bool:
        return self is PanelType.GRID


_TYPE_LIMITS = {
    PanelType.GRID: 9,
    PanelType.WORKBENCH: 9,
    PanelType.HOPPER: 5,
    PanelType.DISPENSER: 8,
    PanelType.BREWING: 4,
}

_TYPE_FILL_SIZES = {
    PanelType.GRID: 9,
    PanelType.WORKBENCH: 10,
    PanelType.HOPPER: 5,
    PanelType.DISPENSER: 9,
    PanelType.BREWING: 5,
}


@dataclass
class PanelGeometry:
    """Shape of a panel.

    Attributes
    ----------
    type : PanelType
        Surface kind.
    rows : int
        Row count (1..6) for GRID; always 1 for fixed types.
    """

    type: PanelType = PanelType.GRID
    rows: int = 1

    def __post_init__(self) -> None:
        if not self.type.is_grid:
            self.rows = 1
        elif not 1 <= self.rows <= MAX_GRID_ROWS:
            raise ValueError(f"Grid panels have 1 to {MAX_GRID_ROWS} rows, got {self.rows}")

    @property
    def size(self) -> int:
        """Number of slots on the backing surface."""
        if self.type.is_grid:
            return self.rows * GRID_WIDTH
        return self.type.fill_size

    def is_valid_slot(self, slot: int) -> bool:
        if self.type.is_grid:
            return 0 <= slot < self.rows * self.type.limit
        # Fixed types accept the limit itself.
        return 0 <= slot <= self.type.limit

    def validate_slot(self, slot: int) -> None:
        if self.is_valid_slot(slot):
            return
        if self.type.is_grid:
            raise SlotOutOfRange(slot, self.type.name, self.rows)
        raise SlotOutOfRange(slot, self.type.name)


class PaginationRegion:
    """Ordered set of slots reserved for paginated content.

    Examples
    --------
    >>> PaginationRegion.rectangle(2, 2, 3, 8).size
    14
    >>> PaginationRegion.rows(1).slots[:3]
    [0, 1, 2]
    """

    def __init__(self, slots: Iterable[int]) -> None:
        self._slots: List[int] = list(slots)

    @classmethod
    def of(cls, *slots: int) -> "PaginationRegion":
        return cls(slots)

    @classmethod
    def rectangle(cls, start_row: int, start_col: int, end_row: int, end_col: int) -> "PaginationRegion":
        """Slots of the rectangle between two corners, row by row."""
        min_row, max_row = sorted((start_row, end_row))
        min_col, max_col = sorted((start_col, end_col))
        return cls(
            slot_of(row, col)
            for row in range(min_row, max_row + 1)
            for col in range(min_col, max_col + 1)
        )

    @classmethod
    def rows(cls, *rows: int) -> "PaginationRegion":
        return cls(slot_of(row, col) for row in rows for col in range(1, GRID_WIDTH + 1))

    @classmethod
    def columns(cls, max_rows: int, *cols: int) -> "PaginationRegion":
        return cls(slot_of(row, col) for col in cols for row in range(1, max_rows + 1))

    @classmethod
    def all(cls, rows: int) -> "PaginationRegion":
        return cls(range(rows * GRID_WIDTH))

    @property
    def slots(self) -> List[int]:
        return list(self._slots)

    @property
    def size(self) -> int:
        return len(self._slots)

    def contains(self, slot: int) -> bool:
        return slot in self._slots

    def __contains__(self, slot: object) -> bool:
        return slot in self._slots

    def __iter__(self) -> Iterator[int]:
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        return f"PaginationRegion({self._slots!r})"
