"""Vertical fill order: row by row, left to right."""

from typing import List

from panel_engine.core.slots import GRID_WIDTH, slot_of


def vertical_slot_order(rows: int, size: int) -> List[int]:
    """Slots ``0..size`` in row-major order, clipped to ``rows`` rows."""
    return [
        slot
        for slot in (slot_of(row, col) for row in range(1, rows + 1) for col in range(1, GRID_WIDTH + 1))
        if slot < size
    ]


def vertical_line_slots(rows: int) -> List[List[int]]:
    """Slots grouped by row, top to bottom."""
    return [[slot_of(row, col) for col in range(1, GRID_WIDTH + 1)] for row in range(1, rows + 1)]
