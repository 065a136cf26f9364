"""Bulk placement helpers reached through ``panel.filler``.

Every method takes one item or a list. A list repeats cyclically, so the
item at a slot is ``items[slot % len(items)]``.
"""

from enum import Enum
from typing import TYPE_CHECKING, Iterable, List, Sequence, Union

from panel_engine.core.item import PanelItem
from panel_engine.core.slots import GRID_WIDTH, slot_of
from panel_engine.errors import UnsupportedOperation

if TYPE_CHECKING:
    from panel_engine.core.panel import Panel

Fill = Union[PanelItem, Sequence[PanelItem]]


class Side(Enum):
    LEFT = "left"
    RIGHT = "right"
    BOTH = "both"


def _as_list(items: Fill) -> List[PanelItem]:
    if isinstance(items, PanelItem):
        return [items]
    items = list(items)
    if not items:
        raise ValueError("At least one item is required to fill a panel")
    return items


def _pick(items: List[PanelItem], slot: int) -> PanelItem:
    return items[slot % len(items)]


class PanelFiller:
    """Fills rows, borders, rectangles and free slots of a panel.

    Every target slot is validated before the first one is written, so a
    ``SlotOutOfRange`` leaves the panel unchanged.
    """

    def __init__(self, panel: "Panel") -> None:
        self.panel = panel

    def _place(self, slots: Iterable[int], items: List[PanelItem], only_free: bool = False) -> None:
        if only_free:
            slots = [slot for slot in slots if self.panel.get_item(slot) is None]
        else:
            slots = list(slots)
        for slot in slots:
            self.panel.geometry.validate_slot(slot)
        for slot in slots:
            self.panel.set_item(slot, _pick(items, slot))

    def fill_top(self, items: Fill) -> None:
        """Fill the free slots of the first row."""
        self._place(range(GRID_WIDTH), _as_list(items), only_free=True)

    def fill_bottom(self, items: Fill) -> None:
        """Fill the free slots of the last row."""
        start = (self.panel.rows - 1) * GRID_WIDTH
        self._place(range(start, start + GRID_WIDTH), _as_list(items), only_free=True)

    def fill_border(self, items: Fill) -> None:
        """Overwrite the outer ring. Panels with two rows or fewer are left alone."""
        rows = self.panel.rows
        if rows <= 2:
            return
        last_row = (rows - 1) * GRID_WIDTH
        ring = [
            slot
            for slot in range(rows * GRID_WIDTH)
            if slot < GRID_WIDTH or slot >= last_row or slot % GRID_WIDTH in (0, GRID_WIDTH - 1)
        ]
        self._place(ring, _as_list(items))

    def fill_between_points(self, row_from: int, col_from: int, row_to: int, col_to: int, items: Fill) -> None:
        """Overwrite the rectangle spanned by two (row, col) corners, inclusive."""
        min_row, max_row = sorted((row_from, row_to))
        min_col, max_col = sorted((col_from, col_to))
        slots = [
            slot_of(row, col)
            for row in range(max(1, min_row), min(self.panel.rows, max_row) + 1)
            for col in range(max(1, min_col), min(GRID_WIDTH, max_col) + 1)
        ]
        self._place(slots, _as_list(items))

    def fill_side(self, side: Side, items: Fill) -> None:
        if side is Side.BOTH:
            self.fill_side(Side.LEFT, items)
            self.fill_side(Side.RIGHT, items)
            return
        col = 1 if side is Side.LEFT else GRID_WIDTH
        self.fill_between_points(1, col, self.panel.rows, col, items)

    def fill(self, items: Fill) -> None:
        """Fill every free slot.

        Raises
        ------
        UnsupportedOperation
            On paginated and scrolling panels, whose free slots belong to pages.
        """
        if self.panel.is_paged:
            raise UnsupportedOperation("Full filling a panel is not supported in a paginated panel!")
        geometry = self.panel.geometry
        size = geometry.rows * geometry.type.limit if geometry.type.is_grid else geometry.type.fill_size
        self._place(range(size), _as_list(items), only_free=True)
