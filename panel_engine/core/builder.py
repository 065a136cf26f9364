"""Fluent builders for the three panel variants."""

from typing import Callable, Optional, Set, TypeVar

from panel_engine.core.backend import PanelRuntime
from panel_engine.core.interaction import ALL_MODIFIERS, InteractionModifier
from panel_engine.core.panel import Panel, PanelVariant, ScrollDirection
from panel_engine.core.slots import PaginationRegion, PanelGeometry, PanelType
from panel_engine.core.title import DynamicTitle, InteractionTitle, PaginationTitle
from panel_engine.errors import MissingRequiredTitle

B = TypeVar("B", bound="PanelBuilder")


class PanelBuilder:
    """Collects settings and creates a PLAIN panel.

    Examples
    --------
    >>> panel = PanelBuilder().title("Shop").rows(3).disable_item_take().create()
    """

    variant = PanelVariant.PLAIN

    def __init__(self) -> None:
        self._title: Optional[str] = None
        self._rows = 1
        self._type = PanelType.GRID
        self._runtime: Optional[PanelRuntime] = None
        self._modifiers: Set[InteractionModifier] = set()
        self._title_on_click = False
        self._dynamic_title: Optional[DynamicTitle] = None

    def title(self: B, title: str) -> B:
        self._title = title
        return self

    def rows(self: B, rows: int) -> B:
        self._rows = rows
        return self

    def type(self: B, panel_type: PanelType) -> B:
        self._type = panel_type
        return self

    def runtime(self: B, runtime: PanelRuntime) -> B:
        self._runtime = runtime
        return self

    def disable_item_place(self: B) -> B:
        self._modifiers.add(InteractionModifier.PREVENT_ITEM_PLACE)
        return self

    def disable_item_take(self: B) -> B:
        self._modifiers.add(InteractionModifier.PREVENT_ITEM_TAKE)
        return self

    def disable_item_swap(self: B) -> B:
        self._modifiers.add(InteractionModifier.PREVENT_ITEM_SWAP)
        return self

    def disable_item_drop(self: B) -> B:
        self._modifiers.add(InteractionModifier.PREVENT_ITEM_DROP)
        return self

    def disable_other_actions(self: B) -> B:
        self._modifiers.add(InteractionModifier.PREVENT_OTHER_ACTIONS)
        return self

    def disable_all_interactions(self: B) -> B:
        self._modifiers.update(ALL_MODIFIERS)
        return self

    def enable_item_place(self: B) -> B:
        self._modifiers.discard(InteractionModifier.PREVENT_ITEM_PLACE)
        return self

    def enable_item_take(self: B) -> B:
        self._modifiers.discard(InteractionModifier.PREVENT_ITEM_TAKE)
        return self

    def enable_item_swap(self: B) -> B:
        self._modifiers.discard(InteractionModifier.PREVENT_ITEM_SWAP)
        return self

    def enable_item_drop(self: B) -> B:
        self._modifiers.discard(InteractionModifier.PREVENT_ITEM_DROP)
        return self

    def enable_other_actions(self: B) -> B:
        self._modifiers.discard(InteractionModifier.PREVENT_OTHER_ACTIONS)
        return self

    def enable_all_interactions(self: B) -> B:
        self._modifiers.clear()
        return self

    def update_title_on_item_click(self: B, enable: bool = True) -> B:
        self._title_on_click = enable
        return self

    def apply(self: B, consumer: Callable[[B], None]) -> B:
        """Run ``consumer`` on this builder, for reusable presets."""
        consumer(self)
        return self

    def _check_title(self) -> None:
        if not self._title and self._dynamic_title is None:
            raise MissingRequiredTitle("Panel title is missing!")

    def _panel_kwargs(self) -> dict:
        return {}

    def create(self) -> Panel:
        """Build the panel.

        Raises
        ------
        MissingRequiredTitle
            If no title was set.
        """
        self._check_title()
        panel = Panel(
            self._title,
            PanelGeometry(self._type, self._rows),
            self._modifiers,
            variant=self.variant,
            runtime=self._runtime,
            dynamic_title=self._dynamic_title,
            **self._panel_kwargs(),
        )
        panel.flags.update_title_on_item_click = self._title_on_click
        return panel


class PaginatedBuilder(PanelBuilder):
    """Builder for PAGINATED panels."""

    variant = PanelVariant.PAGINATED

    def __init__(self) -> None:
        super().__init__()
        self._page_size = 0
        self._region: Optional[PaginationRegion] = None

    def page_size(self: B, page_size: int) -> B:
        self._page_size = page_size
        return self

    def region(self: B, region: PaginationRegion) -> B:
        self._region = region
        return self

    def dynamic_title(self: B, base: str, formatter: Optional[Callable] = None) -> B:
        """Title of the form ``"base - Page n/m"`` kept in sync with the page."""
        self._dynamic_title = PaginationTitle(base, formatter=formatter)
        return self

    def interaction_dynamic_title(self: B, base: str, formatter: Optional[Callable] = None) -> B:
        """Title recomputed on every authenticated item click."""
        self._dynamic_title = InteractionTitle(base, formatter)
        self._title_on_click = True
        return self

    def _panel_kwargs(self) -> dict:
        return {"page_size": self._page_size, "region": self._region}


class ScrollingBuilder(PaginatedBuilder):
    """Builder for SCROLLING panels."""

    variant = PanelVariant.SCROLLING

    def __init__(self, direction: ScrollDirection = ScrollDirection.VERTICAL) -> None:
        super().__init__()
        self._direction = direction
        self._step_size = 0

    def direction(self: B, direction: ScrollDirection) -> B:
        self._direction = direction
        return self

    def step_size(self: B, step_size: int) -> B:
        self._step_size = step_size
        return self

    def _panel_kwargs(self) -> dict:
        kwargs = super()._panel_kwargs()
        kwargs.update(direction=self._direction, step_size=self._step_size)
        return kwargs
