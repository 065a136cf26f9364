"""
Panel Engine: slot-addressed interactive panels with pagination, scrolling and click routing.
"""

__version__ = "0.1.0"

from panel_engine.config import PanelConfig, SchedulerCapability, get_panel_config
from panel_engine.core.backend import InMemoryBackend, PanelRuntime, SimpleViewer, TickScheduler
from panel_engine.core.builder import PaginatedBuilder, PanelBuilder, ScrollingBuilder
from panel_engine.core.events import ClickEvent, ClickType, DragEvent, RawAction, Region
from panel_engine.core.filler import Side
from panel_engine.core.interaction import InteractionModifier
from panel_engine.core.item import PanelItem, TaggedPayload
from panel_engine.core.panel import Panel, PanelVariant, ScrollDirection
from panel_engine.core.slots import PaginationRegion, PanelGeometry, PanelType, slot_of
from panel_engine.core.title import InteractionTitle, PaginationTitle, StaticTitle
from panel_engine.errors import (
    MissingRequiredTitle,
    PanelError,
    SchedulerUnavailable,
    SlotOutOfRange,
    UnsupportedOperation,
)


def panel() -> PanelBuilder:
    """Start building a plain panel."""
    return PanelBuilder()


def paginated() -> PaginatedBuilder:
    """Start building a paginated panel."""
    return PaginatedBuilder()


def scrolling(direction: ScrollDirection = ScrollDirection.VERTICAL) -> ScrollingBuilder:
    """Start building a scrolling panel."""
    return ScrollingBuilder(direction)


__all__ = [
    "ClickEvent",
    "ClickType",
    "DragEvent",
    "InMemoryBackend",
    "InteractionModifier",
    "InteractionTitle",
    "MissingRequiredTitle",
    "PaginatedBuilder",
    "PaginationRegion",
    "PaginationTitle",
    "Panel",
    "PanelBuilder",
    "PanelConfig",
    "PanelError",
    "PanelGeometry",
    "PanelItem",
    "PanelRuntime",
    "PanelType",
    "PanelVariant",
    "RawAction",
    "Region",
    "SchedulerCapability",
    "SchedulerUnavailable",
    "ScrollDirection",
    "ScrollingBuilder",
    "Side",
    "SimpleViewer",
    "SlotOutOfRange",
    "StaticTitle",
    "TaggedPayload",
    "TickScheduler",
    "UnsupportedOperation",
    "get_panel_config",
    "panel",
    "paginated",
    "scrolling",
    "slot_of",
    "__version__",
]
