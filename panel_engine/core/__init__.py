"""Core model: slots, items, panels, events and host contracts."""

from panel_engine.core.backend import (
    InMemoryBackend,
    InMemorySurface,
    PanelRuntime,
    RenderingBackend,
    Scheduler,
    SimpleViewer,
    Surface,
    TickScheduler,
)
from panel_engine.core.events import ClickEvent, ClickType, CloseEvent, DragEvent, OpenEvent, RawAction, Region
from panel_engine.core.interaction import ActionCategory, InteractionClassifier, InteractionModifier
from panel_engine.core.item import PanelItem, TaggedPayload, is_panel_item
from panel_engine.core.panel import Panel, PanelVariant, ScrollDirection
from panel_engine.core.slots import PaginationRegion, PanelGeometry, PanelType, row_col_of, slot_of

__all__ = [
    "ActionCategory",
    "ClickEvent",
    "ClickType",
    "CloseEvent",
    "DragEvent",
    "InMemoryBackend",
    "InMemorySurface",
    "InteractionClassifier",
    "InteractionModifier",
    "OpenEvent",
    "PaginationRegion",
    "Panel",
    "PanelGeometry",
    "PanelItem",
    "PanelRuntime",
    "PanelType",
    "PanelVariant",
    "RawAction",
    "Region",
    "RenderingBackend",
    "Scheduler",
    "ScrollDirection",
    "SimpleViewer",
    "Surface",
    "TaggedPayload",
    "TickScheduler",
    "is_panel_item",
    "row_col_of",
    "slot_of",
]
