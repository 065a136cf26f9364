"""Panel: slot-indexed items, handlers, permissions and pagination.

One ``Panel`` class covers the three variants. PLAIN panels only have fixed
items. PAGINATED and SCROLLING panels also keep a backlog of page items that
are laid into free slots (or a pagination region) one window at a time. The
window arithmetic and the fill order are picked from ``layouts`` by variant
and scroll direction.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Set, Union

from panel_engine.core.backend import PanelRuntime, Surface, default_runtime, is_interactable
from panel_engine.core.events import ClickEvent
from panel_engine.core.filler import PanelFiller
from panel_engine.core.interaction import ALL_MODIFIERS, InteractionModifier
from panel_engine.core.item import Handler, PanelItem
from panel_engine.core.slots import GRID_WIDTH, MAX_GRID_ROWS, PaginationRegion, PanelGeometry, PanelType, slot_of
from panel_engine.core.title import DynamicTitle, InteractionTitle, PaginationTitle
from panel_engine.errors import MissingRequiredTitle, UnsupportedOperation
from panel_engine.layouts.horizontal import horizontal_line_slots, horizontal_slot_order
from panel_engine.layouts.paged import (
    can_open_page,
    can_page_next,
    compute_page_window,
    pages_count,
)
from panel_engine.layouts.scrolling import (
    can_open_scroll,
    can_scroll_next,
    compute_scroll_window,
)
from panel_engine.layouts.vertical import vertical_line_slots, vertical_slot_order

logger = logging.getLogger(__name__)


class PanelVariant(Enum):
    PLAIN = "plain"
    PAGINATED = "paginated"
    SCROLLING = "scrolling"


class ScrollDirection(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass
class PanelFlags:
    """Switches that suppress side effects during internal re-renders."""

    updating: bool = False
    run_close_action: bool = True
    run_open_action: bool = True
    update_title_on_item_click: bool = False


@dataclass
class DefaultHandlers:
    """Panel-wide handlers. Each receives the event."""

    click: Optional[Handler] = None  # any click
    top_click: Optional[Handler] = None
    secondary_click: Optional[Handler] = None
    drag: Optional[Handler] = None
    open: Optional[Handler] = None
    close: Optional[Handler] = None
    outside_click: Optional[Handler] = None


@dataclass
class PageState:
    """Pagination bookkeeping.

    ``page_size`` and ``step_size`` are ``None`` until first computed. The
    ``configured_*`` values are what the caller asked for; ``None`` there means
    "compute lazily".
    """

    backlog: List[PanelItem] = field(default_factory=list)
    configured_page_size: Optional[int] = None
    page_size: Optional[int] = None
    page_number: int = 1
    region: Optional[PaginationRegion] = None
    current_page: Dict[int, PanelItem] = field(default_factory=dict)
    direction: Optional[ScrollDirection] = None
    configured_step_size: Optional[int] = None
    step_size: Optional[int] = None


WindowFn = Callable[[List[PanelItem], int, int, int], List[PanelItem]]
GuardFn = Callable[[int, int, int, int], bool]

_WINDOWS: Dict[PanelVariant, WindowFn] = {
    PanelVariant.PAGINATED: compute_page_window,
    PanelVariant.SCROLLING: compute_scroll_window,
}

_NEXT_GUARDS: Dict[PanelVariant, GuardFn] = {
    PanelVariant.PAGINATED: can_page_next,
    PanelVariant.SCROLLING: can_scroll_next,
}

_OPEN_GUARDS: Dict[PanelVariant, GuardFn] = {
    PanelVariant.PAGINATED: can_open_page,
    PanelVariant.SCROLLING: can_open_scroll,
}

_SLOT_ORDERS = {
    ScrollDirection.VERTICAL: vertical_slot_order,
    ScrollDirection.HORIZONTAL: horizontal_slot_order,
}

_LINES = {
    ScrollDirection.VERTICAL: vertical_line_slots,
    ScrollDirection.HORIZONTAL: horizontal_line_slots,
}


def _lazy(size: int) -> Optional[int]:
    return size if size and size > 0 else None


class Panel:
    """An interactive surface and its item/handler state.

    Parameters
    ----------
    title : str
        Displayed title. Required unless ``dynamic_title`` is given.
    geometry : PanelGeometry, optional
        Defaults to a one-row grid.
    modifiers : iterable of InteractionModifier, optional
        Initial interaction restrictions.
    variant : PanelVariant
        PLAIN, PAGINATED or SCROLLING.
    page_size : int
        Window length for paged variants; 0 computes it on first use.
    region : PaginationRegion, optional
        Slots reserved for page items. Sets the page size to its size.
    direction : ScrollDirection, optional
        Fill order for SCROLLING panels (default VERTICAL).
    step_size : int
        Entries moved per scroll step; 0 computes it on first open.
    runtime : PanelRuntime, optional
        Backend, scheduler and config. Defaults to the shared in-memory one.
    dynamic_title : DynamicTitle, optional
        Title strategy; overrides ``title`` while set.

    Raises
    ------
    MissingRequiredTitle
        If neither a title nor a dynamic title is given.

    Examples
    --------
    >>> panel = Panel("Shop", PanelGeometry(rows=3))
    >>> panel.set_item(4, PanelItem("diamond", click_handler=print))
    >>> panel.open(viewer)
    """

    def __init__(
        self,
        title: Optional[str],
        geometry: Optional[PanelGeometry] = None,
        modifiers: Optional[Iterable[InteractionModifier]] = None,
        *,
        variant: PanelVariant = PanelVariant.PLAIN,
        page_size: int = 0,
        region: Optional[PaginationRegion] = None,
        direction: Optional[ScrollDirection] = None,
        step_size: int = 0,
        runtime: Optional[PanelRuntime] = None,
        dynamic_title: Optional[DynamicTitle] = None,
    ) -> None:
        if not title and dynamic_title is None:
            raise MissingRequiredTitle()
        self._title = title or ""
        self.dynamic_title = dynamic_title
        self.geometry = geometry or PanelGeometry()
        self.modifiers: Set[InteractionModifier] = set(modifiers or ())
        self.variant = variant
        self.handlers = DefaultHandlers()
        self.flags = PanelFlags()
        self._items: Dict[int, PanelItem] = {}
        self._slot_handlers: Dict[int, Optional[Handler]] = {}
        self._runtime = runtime or default_runtime()
        self._surface = self._runtime.create_surface(self.title, self, self.geometry.size)
        self.filler = PanelFiller(self)

        self.pagination: Optional[PageState] = None
        if variant is not PanelVariant.PLAIN:
            self.pagination = PageState(
                configured_page_size=_lazy(page_size),
                page_size=_lazy(page_size),
            )
            if variant is PanelVariant.SCROLLING:
                self.pagination.direction = direction or ScrollDirection.VERTICAL
                self.pagination.configured_step_size = _lazy(step_size)
                self.pagination.step_size = _lazy(step_size)
            if region is not None:
                self.set_region(region)

    def __repr__(self) -> str:
        return (
            f"Panel(title={self.title!r}, variant={self.variant.value}, "
            f"type={self.geometry.type.value}, rows={self.geometry.rows})"
        )

    # ------------------------------------------------------------ properties

    @property
    def title(self) -> str:
        if self.dynamic_title is not None:
            return self.dynamic_title.title
        return self._title

    @property
    def surface(self) -> Surface:
        return self._surface

    @property
    def runtime(self) -> PanelRuntime:
        return self._runtime

    @property
    def rows(self) -> int:
        return self.geometry.rows

    @property
    def panel_type(self) -> PanelType:
        return self.geometry.type

    @property
    def items(self) -> Mapping[int, PanelItem]:
        """Fixed items by slot (read-only copy)."""
        return dict(self._items)

    @property
    def is_paged(self) -> bool:
        return self.pagination is not None

    @property
    def viewers(self) -> List[Any]:
        return self._surface.viewers

    # -------------------------------------------------------- slot and items

    def slot_of(self, row: int, col: int) -> int:
        return slot_of(row, col)

    def set_item(self, slot: int, item: PanelItem) -> None:
        """Place ``item`` at ``slot``. Takes effect on the next render."""
        self.geometry.validate_slot(slot)
        self._items[slot] = item

    def set_items(self, slots: Iterable[int], item: PanelItem) -> None:
        slots = list(slots)
        for slot in slots:
            self.geometry.validate_slot(slot)
        for slot in slots:
            self._items[slot] = item

    def set_item_at(self, row: int, col: int, item: PanelItem) -> None:
        self.set_item(slot_of(row, col), item)

    def get_item(self, slot: int) -> Optional[PanelItem]:
        return self._items.get(slot)

    def remove_item(self, target: Union[int, PanelItem, Any]) -> None:
        """Remove by slot, by item, or by the first item whose payload equals ``target``."""
        if isinstance(target, int) and not isinstance(target, bool):
            self.geometry.validate_slot(target)
            self._items.pop(target, None)
            if target < self._surface.size:
                self._surface.set_slot(target, None)
            return

        if isinstance(target, PanelItem):
            match = next((s for s, it in self._items.items() if it is target), None)
        else:
            match = next((s for s, it in self._items.items() if it.payload == target), None)
        if match is None:
            return
        removed = self._items.pop(match)
        self._remove_from_surface(removed)

    def remove_item_at(self, row: int, col: int) -> None:
        self.remove_item(slot_of(row, col))

    def _remove_from_surface(self, item: PanelItem) -> None:
        for slot in range(self._surface.size):
            shown = self._surface.get_slot(slot)
            if shown is not None and shown == item.tagged:
                self._surface.set_slot(slot, None)

    def add_item(self, *items: PanelItem, expand_if_full: bool = False) -> None:
        """Add items to the first free slots.

        Paged panels append to the backlog instead. On a PLAIN panel, items
        that find no free slot are dropped, unless ``expand_if_full`` is set on
        a grid that can still grow: then the grid gains a row and the leftovers
        are placed again.
        """
        if self.pagination is not None:
            self.pagination.backlog.extend(items)
            return

        limit = self.geometry.rows * GRID_WIDTH if self.geometry.type.is_grid else self.geometry.size
        leftovers: List[PanelItem] = []
        for item in items:
            for slot in range(limit):
                if slot not in self._items:
                    self._items[slot] = item
                    break
            else:
                leftovers.append(item)

        if not leftovers:
            return

        can_grow = (
            self.geometry.type.is_grid
            and self.geometry.rows < min(self._runtime.config.max_grid_rows, MAX_GRID_ROWS)
        )
        if not expand_if_full or not can_grow:
            logger.debug("Panel %r full, dropped %d item(s)", self.title, len(leftovers))
            return

        self.geometry.rows += 1
        logger.debug("Panel %r expanded to %d rows", self.title, self.geometry.rows)
        self._recreate_surface()
        self.add_item(*leftovers, expand_if_full=True)

    def update_item(self, slot: int, value: Union[PanelItem, Any]) -> None:
        """Replace the item (or just its payload) at ``slot`` and show it now."""
        self.geometry.validate_slot(slot)
        if isinstance(value, PanelItem):
            item = value
        else:
            item = self._items.get(slot) or PanelItem(value)
            item.payload = value
        self._items[slot] = item
        if slot < self._surface.size:
            self._surface.set_slot(slot, item.tagged)

    def add_slot_handler(self, slot: int, handler: Optional[Handler]) -> None:
        self.geometry.validate_slot(slot)
        self._slot_handlers[slot] = handler

    def add_slot_handler_at(self, row: int, col: int, handler: Optional[Handler]) -> None:
        self.add_slot_handler(slot_of(row, col), handler)

    def get_slot_handler(self, slot: int) -> Optional[Handler]:
        return self._slot_handlers.get(slot)

    def resolve_item(self, slot: int) -> Optional[PanelItem]:
        """The item logically at ``slot``: the page item first, then the fixed one."""
        if self.pagination is not None:
            page_item = self.pagination.current_page.get(slot)
            if page_item is not None:
                return page_item
        return self._items.get(slot)

    # ------------------------------------------------------------- lifecycle

    def open(self, viewer: Any, page: int = 1) -> None:
        """Render and show the panel to ``viewer``.

        Non-interactable viewers are ignored. For paged panels ``page`` is
        only honoured when it is a valid position; otherwise the current
        page is kept.
        """
        if not is_interactable(viewer):
            logger.debug("Viewer %r cannot interact, not opening %r", viewer, self.title)
            return

        self._surface.clear()
        if self.pagination is not None:
            self.pagination.current_page.clear()
        self._populate()

        if self.pagination is not None:
            state = self.pagination
            page_size = self._ensure_page_size()
            step_size = self._ensure_step_size()
            if _OPEN_GUARDS[self.variant](page, page_size, len(state.backlog), step_size):
                state.page_number = page
            self._populate_page()
            self._refresh_pagination_title()

        self._surface.open(viewer)

    def close(self, viewer: Any, run_close_action: bool = True) -> None:
        """Close ``viewer``'s view a few ticks from now.

        The close handler is skipped for this close when ``run_close_action``
        is False.
        """

        def task() -> None:
            self.flags.run_close_action = run_close_action
            try:
                self._runtime.backend.close_view(viewer)
            finally:
                self.flags.run_close_action = True

        self._runtime.schedule(viewer, self._runtime.config.close_delay_ticks, task)

    def update(self) -> None:
        """Re-render in place without reopening."""
        self._surface.clear()
        self._populate()
        if self.pagination is not None:
            self._update_page()

    def update_title(self, title: str) -> "Panel":
        """Set a static title and reopen the panel for everyone viewing it."""
        self._title = title
        self.dynamic_title = None
        self._recreate_surface()
        return self

    def set_dynamic_title(self, dynamic_title: DynamicTitle) -> "Panel":
        self.dynamic_title = dynamic_title
        self._surface.set_title(self.title)
        return self

    def _recreate_surface(self) -> None:
        self.flags.updating = True
        try:
            viewers = self._surface.viewers
            self._surface = self._runtime.create_surface(self.title, self, self.geometry.size)
            for viewer in viewers:
                if self.pagination is not None:
                    self.open(viewer, self.pagination.page_number)
                else:
                    self.open(viewer)
            if not viewers:
                self.update()
        finally:
            self.flags.updating = False

    def _populate(self) -> None:
        for slot, item in self._items.items():
            # fixed types accept one slot past the surface
            if slot < self._surface.size:
                self._surface.set_slot(slot, item.tagged)

    def _is_occupied(self, slot: int) -> bool:
        return slot in self._items or self._surface.get_slot(slot) is not None

    # ----------------------------------------------------------- permissions

    def disable_item_place(self) -> "Panel":
        self.modifiers.add(InteractionModifier.PREVENT_ITEM_PLACE)
        return self

    def disable_item_take(self) -> "Panel":
        self.modifiers.add(InteractionModifier.PREVENT_ITEM_TAKE)
        return self

    def disable_item_swap(self) -> "Panel":
        self.modifiers.add(InteractionModifier.PREVENT_ITEM_SWAP)
        return self

    def disable_item_drop(self) -> "Panel":
        self.modifiers.add(InteractionModifier.PREVENT_ITEM_DROP)
        return self

    def disable_other_actions(self) -> "Panel":
        self.modifiers.add(InteractionModifier.PREVENT_OTHER_ACTIONS)
        return self

    def disable_all_interactions(self) -> "Panel":
        self.modifiers.update(ALL_MODIFIERS)
        return self

    def enable_item_place(self) -> "Panel":
        self.modifiers.discard(InteractionModifier.PREVENT_ITEM_PLACE)
        return self

    def enable_item_take(self) -> "Panel":
        self.modifiers.discard(InteractionModifier.PREVENT_ITEM_TAKE)
        return self

    def enable_item_swap(self) -> "Panel":
        self.modifiers.discard(InteractionModifier.PREVENT_ITEM_SWAP)
        return self

    def enable_item_drop(self) -> "Panel":
        self.modifiers.discard(InteractionModifier.PREVENT_ITEM_DROP)
        return self

    def enable_other_actions(self) -> "Panel":
        self.modifiers.discard(InteractionModifier.PREVENT_OTHER_ACTIONS)
        return self

    def enable_all_interactions(self) -> "Panel":
        self.modifiers.clear()
        return self

    def all_interactions_disabled(self) -> bool:
        return self.modifiers == set(ALL_MODIFIERS)

    def can_place_items(self) -> bool:
        return InteractionModifier.PREVENT_ITEM_PLACE not in self.modifiers

    def can_take_items(self) -> bool:
        return InteractionModifier.PREVENT_ITEM_TAKE not in self.modifiers

    def can_swap_items(self) -> bool:
        return InteractionModifier.PREVENT_ITEM_SWAP not in self.modifiers

    def can_drop_items(self) -> bool:
        return InteractionModifier.PREVENT_ITEM_DROP not in self.modifiers

    def allows_other_actions(self) -> bool:
        return InteractionModifier.PREVENT_OTHER_ACTIONS not in self.modifiers

    # ---------------------------------------------------------------- titles

    def set_update_title_on_item_click(self, enable: bool) -> "Panel":
        self.flags.update_title_on_item_click = enable
        return self

    def set_pagination_title(self, base: str, formatter: Optional[Callable] = None) -> "Panel":
        """Bind the title to ``"base - Page n/m"`` (or ``formatter``'s output)."""
        state = self._paged()
        title = PaginationTitle(base, state.page_number, self.pages_number(), formatter)
        return self.set_dynamic_title(title)

    def set_interaction_title(self, base: str, formatter: Optional[Callable] = None) -> "Panel":
        """Bind the title to the last item click and turn on title-on-click."""
        self.flags.update_title_on_item_click = True
        return self.set_dynamic_title(InteractionTitle(base, formatter))

    def refresh_interaction_title(self, item: Optional[PanelItem], slot: int, event: ClickEvent) -> None:
        """Recompute an interaction-bound title after an item click."""
        if not self.flags.update_title_on_item_click:
            return
        if not isinstance(self.dynamic_title, InteractionTitle):
            return
        new_title = self.dynamic_title.update_on_click(item, slot, event.click_type, event.raw_action)
        self._surface.set_title(new_title)

    def _refresh_pagination_title(self) -> None:
        if not isinstance(self.dynamic_title, PaginationTitle):
            return
        state = self._paged()
        new_title = self.dynamic_title.update_pages(state.page_number, self.pages_number())
        self._surface.set_title(new_title)

    # ------------------------------------------------------------ pagination

    def _paged(self) -> PageState:
        if self.pagination is None:
            raise UnsupportedOperation(f"Pagination is not supported by a {self.variant.value} panel!")
        return self.pagination

    @property
    def region(self) -> Optional[PaginationRegion]:
        return self._paged().region

    def set_region(self, region: PaginationRegion) -> "Panel":
        state = self._paged()
        state.region = region
        state.configured_page_size = region.size
        state.page_size = region.size
        return self

    def set_page_size(self, page_size: int) -> "Panel":
        state = self._paged()
        state.configured_page_size = _lazy(page_size)
        state.page_size = _lazy(page_size)
        return self

    @property
    def page_size(self) -> int:
        return self._ensure_page_size()

    @property
    def step_size(self) -> int:
        if self.variant is not PanelVariant.SCROLLING:
            raise UnsupportedOperation("Step size only applies to scrolling panels!")
        return self._ensure_step_size()

    @property
    def direction(self) -> Optional[ScrollDirection]:
        return self._paged().direction

    def force_recompute(self) -> None:
        """Forget lazily computed page and step sizes."""
        state = self._paged()
        state.page_size = state.configured_page_size
        state.step_size = state.configured_step_size

    def _ensure_page_size(self) -> int:
        state = self._paged()
        if state.page_size is None:
            state.page_size = self._calculate_page_size()
            logger.debug("Panel %r page size computed as %d", self.title, state.page_size)
        return state.page_size

    def _calculate_page_size(self) -> int:
        state = self._paged()
        if state.region is not None:
            return state.region.size or 1
        limit = min(self.geometry.rows * GRID_WIDTH, self.geometry.size)
        free = sum(1 for slot in range(limit) if slot not in self._items)
        return free or 1

    def _ensure_step_size(self) -> int:
        state = self._paged()
        if self.variant is not PanelVariant.SCROLLING:
            return 0
        if state.step_size is None:
            state.step_size = self._calculate_step_size()
            logger.debug("Panel %r step size computed as %d", self.title, state.step_size)
        return state.step_size

    def _calculate_step_size(self) -> int:
        state = self._paged()
        direction = state.direction or ScrollDirection.VERTICAL
        lines = _LINES[direction](self.geometry.rows)
        if state.region is not None:
            # one row (vertical) or one column (horizontal) of the region
            first = state.region.slots[0] if state.region.size else None
            for line in lines:
                if first in line:
                    return sum(1 for slot in line if slot in state.region) or 1
            return 1
        for line in lines:
            free = sum(1 for slot in line if slot < self.geometry.size and not self._is_occupied(slot))
            if free:
                return free
        return 1

    def pages_number(self) -> int:
        """Number of pages; at least 1."""
        state = self._paged()
        return pages_count(len(state.backlog), self._ensure_page_size())

    def window(self, page: Optional[int] = None) -> List[PanelItem]:
        """Backlog entries visible at ``page`` (default: the current page)."""
        state = self._paged()
        page = state.page_number if page is None else page
        return _WINDOWS[self.variant](
            state.backlog, page, self._ensure_page_size(), self._ensure_step_size()
        )

    @property
    def page_number(self) -> int:
        return self._paged().page_number

    @page_number.setter
    def page_number(self, page: int) -> None:
        self._paged().page_number = page
        self._refresh_pagination_title()

    @property
    def next_page_number(self) -> int:
        state = self._paged()
        if state.page_number + 1 > self.pages_number():
            return state.page_number
        return state.page_number + 1

    @property
    def previous_page_number(self) -> int:
        state = self._paged()
        if state.page_number - 1 == 0:
            return state.page_number
        return state.page_number - 1

    @property
    def page_items(self) -> List[PanelItem]:
        return list(self._paged().backlog)

    @property
    def current_page_items(self) -> Dict[int, PanelItem]:
        return dict(self._paged().current_page)

    def get_page_item(self, slot: int) -> Optional[PanelItem]:
        return self._paged().current_page.get(slot)

    def next(self) -> bool:
        """Move one page (or one scroll step) forward. False at the end."""
        state = self._paged()
        page_size = self._ensure_page_size()
        step_size = self._ensure_step_size()
        if not _NEXT_GUARDS[self.variant](state.page_number, page_size, len(state.backlog), step_size):
            return False
        state.page_number += 1
        self._update_page()
        self._refresh_pagination_title()
        logger.debug("Panel %r moved to page %d", self.title, state.page_number)
        return True

    def previous(self) -> bool:
        """Move one page (or one scroll step) back. False on the first page."""
        state = self._paged()
        if state.page_number - 1 == 0:
            return False
        state.page_number -= 1
        self._update_page()
        self._refresh_pagination_title()
        logger.debug("Panel %r moved to page %d", self.title, state.page_number)
        return True

    def update_page_item(self, slot: int, value: Union[PanelItem, Any]) -> None:
        """Replace the page item (or its payload) shown at ``slot``."""
        state = self._paged()
        old = state.current_page.get(slot)
        if old is None:
            return
        if isinstance(value, PanelItem):
            index = next(i for i, it in enumerate(state.backlog) if it is old)
            state.backlog[index] = value
            state.current_page[slot] = value
            self._surface.set_slot(slot, value.tagged)
            return
        old.payload = value
        self._surface.set_slot(slot, old.tagged)

    def remove_page_item(self, target: Union[PanelItem, Any]) -> None:
        """Remove a backlog entry by item or payload and re-render the page."""
        state = self._paged()
        if isinstance(target, PanelItem):
            index = next((i for i, it in enumerate(state.backlog) if it is target), None)
        else:
            index = next((i for i, it in enumerate(state.backlog) if it.payload == target), None)
        if index is None:
            return
        del state.backlog[index]
        self._update_page()

    def clear_page_items(self, update: bool = False) -> None:
        self._paged().backlog.clear()
        if update:
            self.update()

    def release_page_slots(self) -> None:
        """Empty every slot the current page occupies and forget them."""
        state = self._paged()
        for slot in state.current_page:
            self._surface.set_slot(slot, None)
        state.current_page.clear()

    def _update_page(self) -> None:
        self.release_page_slots()
        self._populate_page()

    def _page_slot_order(self) -> List[int]:
        state = self._paged()
        if state.region is not None:
            return state.region.slots
        if self.variant is PanelVariant.SCROLLING:
            direction = state.direction or ScrollDirection.VERTICAL
            return _SLOT_ORDERS[direction](self.geometry.rows, self._surface.size)
        return list(range(self._surface.size))

    def _populate_page(self) -> None:
        state = self._paged()
        pending = iter(self.window())
        for slot in self._page_slot_order():
            # regions may reach past the current rows
            if slot >= self._surface.size or self._is_occupied(slot):
                continue
            item = next(pending, None)
            if item is None:
                break
            state.current_page[slot] = item
            self._surface.set_slot(slot, item.tagged)
