"""Interaction events delivered by the host's event source."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, Optional

from panel_engine.core.item import TaggedPayload


class Region(Enum):
    """Which container a click landed in."""

    PANEL = "panel"
    SECONDARY = "secondary"  # the viewer's own storage area


class RawAction(Enum):
    """Raw action tag reported by the host for a click."""

    NOTHING = "nothing"
    PICKUP_ALL = "pickup_all"
    PICKUP_SOME = "pickup_some"
    PICKUP_HALF = "pickup_half"
    PICKUP_ONE = "pickup_one"
    PLACE_ALL = "place_all"
    PLACE_SOME = "place_some"
    PLACE_ONE = "place_one"
    SWAP_WITH_CURSOR = "swap_with_cursor"
    DROP_ALL_CURSOR = "drop_all_cursor"
    DROP_ONE_CURSOR = "drop_one_cursor"
    DROP_ALL_SLOT = "drop_all_slot"
    DROP_ONE_SLOT = "drop_one_slot"
    MOVE_TO_OTHER_INVENTORY = "move_to_other_inventory"
    HOTBAR_MOVE_AND_READD = "hotbar_move_and_readd"
    HOTBAR_SWAP = "hotbar_swap"
    CLONE_STACK = "clone_stack"
    COLLECT_TO_CURSOR = "collect_to_cursor"
    UNKNOWN = "unknown"


class ClickType(Enum):
    """Physical click kind (mouse button, modifier keys)."""

    LEFT = "left"
    SHIFT_LEFT = "shift_left"
    RIGHT = "right"
    SHIFT_RIGHT = "shift_right"
    MIDDLE = "middle"
    NUMBER_KEY = "number_key"
    DOUBLE_CLICK = "double_click"
    DROP = "drop"
    CONTROL_DROP = "control_drop"
    CREATIVE = "creative"
    UNKNOWN = "unknown"


@dataclass
class PanelEvent:
    """Fields shared by every event.

    ``surface`` is the top container the viewer has open. The listener only
    handles events whose surface is owned by a panel.
    """

    surface: Any
    viewer: Any = None
    denied: bool = False

    def deny(self) -> None:
        """Cancel the event's default effect. Idempotent."""
        self.denied = True


@dataclass
class ClickEvent(PanelEvent):
    """A click.

    Attributes
    ----------
    clicked_region : Region, optional
        Container the click landed in; ``None`` for clicks outside any.
    slot : int
        Slot index within the clicked container.
    raw_action : RawAction
        What the host would do by default.
    click_type : ClickType
        Which button or key produced the click.
    current_payload : TaggedPayload, optional
        What the surface showed at the slot when clicked.
    top_region : Region
        Kind of the top container. ``SECONDARY`` only when the viewer is
        looking at their own storage.
    """

    clicked_region: Optional[Region] = Region.PANEL
    slot: int = -1
    raw_action: RawAction = RawAction.PICKUP_ALL
    click_type: ClickType = ClickType.LEFT
    current_payload: Optional[TaggedPayload] = None
    top_region: Region = Region.PANEL


@dataclass
class DragEvent(PanelEvent):
    """A drag across one or more raw slots.

    Raw slots below ``top_region_size`` belong to the top container.
    """

    raw_slots: FrozenSet[int] = field(default_factory=frozenset)
    top_region_size: int = 0


@dataclass
class OpenEvent(PanelEvent):
    """A viewer opened the surface."""


@dataclass
class CloseEvent(PanelEvent):
    """A viewer closed the surface. Delivered after the viewer is detached."""
