"""Interaction classification and permission checks.

The classifier is stateless: a decision depends only on the raw action tag,
where the click landed, and the panel's modifier set.
"""

from enum import Enum
from typing import AbstractSet, FrozenSet

from panel_engine.core.events import ClickEvent, DragEvent, RawAction, Region


class InteractionModifier(Enum):
    """A restriction on what viewers may do with a panel."""

    PREVENT_ITEM_PLACE = "prevent_item_place"
    PREVENT_ITEM_TAKE = "prevent_item_take"
    PREVENT_ITEM_SWAP = "prevent_item_swap"
    PREVENT_ITEM_DROP = "prevent_item_drop"
    PREVENT_OTHER_ACTIONS = "prevent_other_actions"


ALL_MODIFIERS: FrozenSet[InteractionModifier] = frozenset(InteractionModifier)


class ActionCategory(Enum):
    """Semantic category of a click."""

    TAKE = "take"
    PLACE = "place"
    SWAP = "swap"
    DROP = "drop"
    OTHER = "other"

    @property
    def modifier(self) -> InteractionModifier:
        """The modifier that forbids this category."""
        return _CATEGORY_MODIFIERS[self]


_CATEGORY_MODIFIERS = {
    ActionCategory.TAKE: InteractionModifier.PREVENT_ITEM_TAKE,
    ActionCategory.PLACE: InteractionModifier.PREVENT_ITEM_PLACE,
    ActionCategory.SWAP: InteractionModifier.PREVENT_ITEM_SWAP,
    ActionCategory.DROP: InteractionModifier.PREVENT_ITEM_DROP,
    ActionCategory.OTHER: InteractionModifier.PREVENT_OTHER_ACTIONS,
}

TAKE_ACTIONS: FrozenSet[RawAction] = frozenset(
    {
        RawAction.PICKUP_ONE,
        RawAction.PICKUP_SOME,
        RawAction.PICKUP_HALF,
        RawAction.PICKUP_ALL,
        RawAction.COLLECT_TO_CURSOR,
        RawAction.HOTBAR_SWAP,
        RawAction.MOVE_TO_OTHER_INVENTORY,
    }
)

PLACE_ACTIONS: FrozenSet[RawAction] = frozenset(
    {RawAction.PLACE_ONE, RawAction.PLACE_SOME, RawAction.PLACE_ALL}
)

SWAP_ACTIONS: FrozenSet[RawAction] = frozenset(
    {RawAction.HOTBAR_SWAP, RawAction.SWAP_WITH_CURSOR, RawAction.HOTBAR_MOVE_AND_READD}
)

DROP_ACTIONS: FrozenSet[RawAction] = frozenset(
    {
        RawAction.DROP_ONE_SLOT,
        RawAction.DROP_ALL_SLOT,
        RawAction.DROP_ONE_CURSOR,
        RawAction.DROP_ALL_CURSOR,
    }
)

OTHER_ACTIONS: FrozenSet[RawAction] = frozenset({RawAction.CLONE_STACK, RawAction.UNKNOWN})


class InteractionClassifier:
    """Maps click and drag events to categories and allow/deny decisions."""

    @staticmethod
    def is_take(event: ClickEvent) -> bool:
        if event.clicked_region is Region.SECONDARY or event.top_region is Region.SECONDARY:
            return False
        return event.raw_action in TAKE_ACTIONS

    @staticmethod
    def is_place(event: ClickEvent) -> bool:
        # shift-click from the secondary region into the panel
        if (
            event.raw_action is RawAction.MOVE_TO_OTHER_INVENTORY
            and event.clicked_region is Region.SECONDARY
            and event.top_region is not event.clicked_region
        ):
            return True
        # plain click on a panel slot with something on the cursor
        return (
            event.raw_action in PLACE_ACTIONS
            and event.clicked_region is not Region.SECONDARY
            and event.top_region is not Region.SECONDARY
        )

    @staticmethod
    def is_swap(event: ClickEvent) -> bool:
        return (
            event.raw_action in SWAP_ACTIONS
            and event.clicked_region is not Region.SECONDARY
            and event.top_region is not Region.SECONDARY
        )

    @staticmethod
    def is_drop(event: ClickEvent) -> bool:
        return event.raw_action in DROP_ACTIONS and (
            event.clicked_region is not None or event.top_region is not Region.SECONDARY
        )

    @staticmethod
    def is_other(event: ClickEvent) -> bool:
        return event.raw_action in OTHER_ACTIONS and (
            event.clicked_region is not None or event.top_region is not Region.SECONDARY
        )

    @classmethod
    def categories(cls, event: ClickEvent) -> FrozenSet[ActionCategory]:
        """Every category the click falls into. HOTBAR_SWAP is both take and swap."""
        checks = (
            (ActionCategory.TAKE, cls.is_take),
            (ActionCategory.PLACE, cls.is_place),
            (ActionCategory.SWAP, cls.is_swap),
            (ActionCategory.DROP, cls.is_drop),
            (ActionCategory.OTHER, cls.is_other),
        )
        return frozenset(category for category, check in checks if check(event))

    @staticmethod
    def is_dragging_on_panel(event: DragEvent) -> bool:
        return any(slot < event.top_region_size for slot in event.raw_slots)

    @classmethod
    def click_allowed(cls, event: ClickEvent, modifiers: AbstractSet[InteractionModifier]) -> bool:
        if frozenset(modifiers) == ALL_MODIFIERS:
            return False
        return not any(category.modifier in modifiers for category in cls.categories(event))

    @classmethod
    def drag_allowed(cls, event: DragEvent, modifiers: AbstractSet[InteractionModifier]) -> bool:
        if frozenset(modifiers) == ALL_MODIFIERS:
            return False
        if InteractionModifier.PREVENT_ITEM_PLACE not in modifiers:
            return True
        return not cls.is_dragging_on_panel(event)

    @classmethod
    def apply(cls, event, modifiers: AbstractSet[InteractionModifier]) -> bool:  # type: ignore[no-untyped-def]
        """Deny ``event`` if the modifiers forbid it. Returns whether it is allowed."""
        if isinstance(event, ClickEvent):
            allowed = cls.click_allowed(event, modifiers)
        elif isinstance(event, DragEvent):
            allowed = cls.drag_allowed(event, modifiers)
        else:
            return True
        if not allowed:
            event.deny()
        return allowed
