"""Dynamic titles recomputed from pagination or interaction state.

A dynamic title only produces text. Pushing the text to the surface is the
panel's job and never re-renders items.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

from panel_engine.core.events import ClickType, RawAction

if TYPE_CHECKING:
    from panel_engine.core.item import PanelItem


@dataclass(frozen=True)
class PaginationState:
    base: str
    current_page: int
    total_pages: int


@dataclass(frozen=True)
class InteractionState:
    base: str
    clicked_item: Optional["PanelItem"] = None
    clicked_slot: int = -1
    click_type: Optional[ClickType] = None
    action: Optional[RawAction] = None


def default_pagination_format(state: PaginationState) -> str:
    return f"{state.base} - Page {state.current_page}/{state.total_pages}"


def default_interaction_format(state: InteractionState) -> str:
    return state.base


class DynamicTitle(ABC):
    """A title that can be recomputed from some state."""

    @property
    @abstractmethod
    def title(self) -> str: ...

    @abstractmethod
    def update(self, state: Any) -> str:
        """Replace the state and return the recomputed title."""


class StaticTitle(DynamicTitle):
    """A fixed title. ``update`` ignores its argument."""

    def __init__(self, text: str) -> None:
        self._text = text

    @property
    def title(self) -> str:
        return self._text

    def update(self, state: Any) -> str:
        return self._text


class PaginationTitle(DynamicTitle):
    """Title bound to the current page and page count.

    Parameters
    ----------
    base : str
        Label the formatter decorates.
    current_page, total_pages : int
        Initial state.
    formatter : callable, optional
        ``PaginationState -> str``. Defaults to ``"Base - Page 1/3"``.
    """

    def __init__(
        self,
        base: str,
        current_page: int = 1,
        total_pages: int = 1,
        formatter: Optional[Callable[[PaginationState], str]] = None,
    ) -> None:
        self.base = base
        self.current_page = current_page
        self.total_pages = total_pages
        self._formatter = formatter or default_pagination_format

    @property
    def state(self) -> PaginationState:
        return PaginationState(self.base, self.current_page, self.total_pages)

    @property
    def title(self) -> str:
        return self._formatter(self.state)

    def update(self, state: Any) -> str:
        if isinstance(state, PaginationState):
            self.current_page = state.current_page
            self.total_pages = state.total_pages
        return self.title

    def update_pages(self, current_page: int, total_pages: int) -> str:
        self.current_page = current_page
        self.total_pages = total_pages
        return self.title


class InteractionTitle(DynamicTitle):
    """Title bound to the last item click."""

    def __init__(
        self,
        base: str,
        formatter: Optional[Callable[[InteractionState], str]] = None,
    ) -> None:
        self.base = base
        self._formatter = formatter or default_interaction_format
        self.state = InteractionState(base)

    @property
    def title(self) -> str:
        return self._formatter(self.state)

    def update(self, state: Any) -> str:
        if isinstance(state, InteractionState):
            self.state = state
            return self.title
        return self.base

    def update_on_click(
        self,
        item: Optional["PanelItem"],
        slot: int,
        click_type: Optional[ClickType],
        action: Optional[RawAction],
    ) -> str:
        return self.update(InteractionState(self.base, item, slot, click_type, action))
