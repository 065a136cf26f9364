"""Neo-brutalist palette for the in-memory surface preview."""

from enum import Enum


class CellState(Enum):
    """What a surface cell currently shows."""

    EMPTY = "empty"
    TAGGED = "tagged"  # a payload carrying a panel item identity
    UNTAGGED = "untagged"  # a payload placed by someone other than a panel


CELL_COLORS = {
    CellState.EMPTY: "#F5F5F5",
    CellState.TAGGED: "#00AA55",
    CellState.UNTAGGED: "#FF6B00",
}

TEXT_COLORS = {
    CellState.EMPTY: "#888888",
    CellState.TAGGED: "#FFFFFF",
    CellState.UNTAGGED: "#000000",
}

CSS_CLASSES = {
    CellState.EMPTY: "pe-cell-empty",
    CellState.TAGGED: "pe-cell-tagged",
    CellState.UNTAGGED: "pe-cell-untagged",
}

CELL_LABELS = {
    CellState.EMPTY: "Empty",
    CellState.TAGGED: "Panel item",
    CellState.UNTAGGED: "Foreign",
}
