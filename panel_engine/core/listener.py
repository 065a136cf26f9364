"""Routes host events to the panel that owns the surface."""

import logging
from typing import Any, Optional

from panel_engine.core.events import ClickEvent, CloseEvent, DragEvent, OpenEvent, Region
from panel_engine.core.interaction import InteractionClassifier
from panel_engine.core.item import Handler, is_panel_item
from panel_engine.core.panel import Panel

logger = logging.getLogger(__name__)


def _run(handler: Optional[Handler], event: Any) -> None:
    if handler is not None:
        handler(event)


class PanelListener:
    """Event sink for a rendering backend.

    Events from surfaces not owned by a :class:`~panel_engine.core.panel.Panel`
    are ignored. Handler exceptions propagate to the caller.
    """

    def __init__(self, classifier: type = InteractionClassifier) -> None:
        self.classifier = classifier

    def _panel_of(self, event: Any) -> Optional[Panel]:
        owner = getattr(event.surface, "owner", None)
        return owner if isinstance(owner, Panel) else None

    def dispatch(self, event: Any) -> None:
        panel = self._panel_of(event)
        if panel is None:
            return
        if isinstance(event, ClickEvent):
            self.on_click(panel, event)
        elif isinstance(event, DragEvent):
            self.on_drag(panel, event)
        elif isinstance(event, OpenEvent):
            self.on_open(panel, event)
        elif isinstance(event, CloseEvent):
            self.on_close(panel, event)

    def on_click(self, panel: Panel, event: ClickEvent) -> None:
        self.classifier.apply(event, panel.modifiers)
        handlers = panel.handlers

        if event.clicked_region is None:
            _run(handlers.outside_click, event)
            return

        in_panel = event.clicked_region is Region.PANEL
        if in_panel:
            _run(handlers.top_click, event)
        else:
            _run(handlers.secondary_click, event)
        _run(handlers.click, event)

        if in_panel:
            _run(panel.get_slot_handler(event.slot), event)

        item = panel.resolve_item(event.slot)
        if not is_panel_item(event.current_payload, item):
            return

        _run(item.click_handler, event)
        panel.refresh_interaction_title(item, event.slot, event)

    def on_drag(self, panel: Panel, event: DragEvent) -> None:
        self.classifier.apply(event, panel.modifiers)
        _run(panel.handlers.drag, event)

    def on_open(self, panel: Panel, event: OpenEvent) -> None:
        if panel.flags.updating or not panel.flags.run_open_action:
            return
        logger.debug("Panel %r opened for %r", panel.title, event.viewer)
        _run(panel.handlers.open, event)

    def on_close(self, panel: Panel, event: CloseEvent) -> None:
        if panel.flags.updating:
            return
        if panel.flags.run_close_action:
            logger.debug("Panel %r closed for %r", panel.title, event.viewer)
            _run(panel.handlers.close, event)
        if panel.is_paged and event.surface is panel.surface and not panel.viewers:
            panel.release_page_slots()
