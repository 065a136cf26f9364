"""Horizontal fill order: column by column, top to bottom."""

from typing import List

from panel_engine.core.slots import GRID_WIDTH, slot_of


def horizontal_slot_order(rows: int, size: int) -> List[int]:
    """Slots in column-major order: fill down a column before the next one."""
    return [
        slot
        for slot in (slot_of(row, col) for col in range(1, GRID_WIDTH + 1) for row in range(1, rows + 1))
        if slot < size
    ]


def horizontal_line_slots(rows: int) -> List[List[int]]:
    """Slots grouped by column, left to right."""
    return [[slot_of(row, col) for row in range(1, rows + 1)] for col in range(1, GRID_WIDTH + 1)]
