"""Exceptions raised by the panel engine.

All errors are raised before any state is mutated, so a caller that catches
one can keep using the panel.
"""

from typing import Optional


class PanelError(Exception):
    """Base class for panel engine errors."""


class SlotOutOfRange(PanelError):
    """A slot index is not valid for the panel's current geometry."""

    def __init__(self, slot: int, panel_type: str, rows: Optional[int] = None) -> None:
        self.slot = slot
        self.panel_type = panel_type
        self.rows = rows
        if rows is not None:
            message = (
                f"Slot {slot} is not valid for the panel type - {panel_type} and rows - {rows}!"
            )
        else:
            message = f"Slot {slot} is not valid for the panel type - {panel_type}!"
        super().__init__(message)


class MissingRequiredTitle(PanelError):
    """A panel was constructed without a title."""

    def __init__(self, message: str = "Panel title is missing!") -> None:
        super().__init__(message)


class UnsupportedOperation(PanelError):
    """The operation does not apply to this kind of panel."""


class SchedulerUnavailable(PanelError):
    """The configured scheduler capability is not offered by the scheduler."""
