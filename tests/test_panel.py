"""Tests for Panel slot and item operations and lifecycle."""

from unittest.mock import MagicMock

import pytest

from panel_engine.config import PanelConfig
from panel_engine.core.backend import PanelRuntime, SimpleViewer
from panel_engine.core.interaction import InteractionModifier
from panel_engine.core.item import PanelItem
from panel_engine.core.panel import Panel
from panel_engine.core.slots import PanelGeometry, PanelType
from panel_engine.errors import MissingRequiredTitle, SlotOutOfRange, UnsupportedOperation


def _make_runtime():
    return PanelRuntime.in_memory(PanelConfig())


def _make_panel(rows=3, runtime=None, **kwargs):
    return Panel("Test", PanelGeometry(PanelType.GRID, rows), runtime=runtime or _make_runtime(), **kwargs)


def test_missing_title_raises():
    with pytest.raises(MissingRequiredTitle):
        Panel("", runtime=_make_runtime())


def test_set_item_and_get_item():
    panel = _make_panel()
    item = PanelItem("stone")
    panel.set_item(4, item)
    assert panel.get_item(4) is item
    assert panel.items == {4: item}


def test_set_item_out_of_range_leaves_state():
    panel = _make_panel(rows=2)
    with pytest.raises(SlotOutOfRange):
        panel.set_item(18, PanelItem("stone"))
    assert panel.items == {}


def test_set_items_validates_before_mutating():
    panel = _make_panel(rows=1)
    with pytest.raises(SlotOutOfRange):
        panel.set_items([1, 2, 50], PanelItem("stone"))
    assert panel.items == {}


def test_set_item_at_row_col():
    panel = _make_panel()
    item = PanelItem("stone")
    panel.set_item_at(2, 1, item)
    assert panel.get_item(9) is item


def test_items_view_is_read_only_copy():
    panel = _make_panel()
    panel.set_item(0, PanelItem("stone"))
    view = panel.items
    view[1] = PanelItem("dirt")
    assert 1 not in panel.items


def test_remove_item_by_slot_clears_surface():
    panel = _make_panel()
    panel.set_item(3, PanelItem("stone"))
    panel.open(SimpleViewer("alex"))
    panel.remove_item(3)
    assert panel.get_item(3) is None
    assert panel.surface.get_slot(3) is None


def test_remove_item_by_item_and_payload():
    panel = _make_panel()
    first = PanelItem("stone")
    second = PanelItem("dirt")
    panel.set_item(0, first)
    panel.set_item(1, second)
    panel.remove_item(first)
    panel.remove_item("dirt")
    assert panel.items == {}


def test_remove_item_by_payload_removes_first_match_only():
    panel = _make_panel()
    panel.set_item(0, PanelItem("stone"))
    panel.set_item(1, PanelItem("stone"))
    panel.remove_item("stone")
    assert list(panel.items) == [1]


def test_add_item_fills_first_free_slots():
    panel = _make_panel(rows=1)
    panel.set_item(0, PanelItem("fixed"))
    a, b = PanelItem("a"), PanelItem("b")
    panel.add_item(a, b)
    assert panel.get_item(1) is a
    assert panel.get_item(2) is b


def test_add_item_drops_leftovers_without_expansion():
    panel = _make_panel(rows=1)
    panel.add_item(*[PanelItem(i) for i in range(10)])
    assert len(panel.items) == 9
    assert panel.rows == 1


def test_add_item_expands_full_grid():
    panel = _make_panel(rows=3)
    panel.add_item(*[PanelItem(i) for i in range(10)], expand_if_full=False)
    panel.add_item(*[PanelItem(i) for i in range(10, 27)])
    assert len(panel.items) == 27

    item11 = PanelItem("item11")
    panel.add_item(item11, expand_if_full=True)
    assert panel.rows == 4
    assert panel.get_item(27) is item11
    assert panel.surface.size == 36


def test_add_item_expansion_stops_at_six_rows():
    panel = _make_panel(rows=6)
    panel.add_item(*[PanelItem(i) for i in range(55)], expand_if_full=True)
    assert panel.rows == 6
    assert len(panel.items) == 54


def test_add_item_on_fixed_type_uses_fill_size():
    panel = Panel("Hopper", PanelGeometry(PanelType.HOPPER), runtime=_make_runtime())
    panel.add_item(*[PanelItem(i) for i in range(7)], expand_if_full=True)
    assert sorted(panel.items) == [0, 1, 2, 3, 4]


def test_slot_handler_validation():
    panel = _make_panel(rows=1)
    with pytest.raises(SlotOutOfRange):
        panel.add_slot_handler(9, MagicMock())
    handler = MagicMock()
    panel.add_slot_handler_at(1, 3, handler)
    assert panel.get_slot_handler(2) is handler


def test_open_renders_items():
    panel = _make_panel()
    item = PanelItem("stone")
    panel.set_item(5, item)
    viewer = SimpleViewer("alex")
    panel.open(viewer)
    assert panel.surface.get_slot(5) == item.tagged
    assert panel.viewers == [viewer]
    assert viewer.surface is panel.surface


def test_open_refuses_non_interactable_viewer():
    panel = _make_panel()
    viewer = SimpleViewer("alex", interactable=False)
    panel.open(viewer)
    assert panel.viewers == []


def test_update_item_writes_immediately():
    panel = _make_panel()
    panel.set_item(0, PanelItem("stone"))
    panel.open(SimpleViewer("alex"))
    panel.update_item(0, "gold")
    assert panel.surface.get_slot(0).payload == "gold"
    assert panel.get_item(0).payload == "gold"


def test_update_rerenders_in_place():
    panel = _make_panel()
    panel.open(SimpleViewer("alex"))
    surface = panel.surface
    panel.set_item(2, PanelItem("stone"))
    panel.update()
    assert panel.surface is surface
    assert surface.get_slot(2).payload == "stone"


def test_close_is_deferred_two_ticks():
    runtime = _make_runtime()
    panel = _make_panel(runtime=runtime)
    viewer = SimpleViewer("alex")
    panel.open(viewer)
    panel.close(viewer)
    runtime.scheduler.tick()
    assert panel.viewers == [viewer]
    runtime.scheduler.tick()
    assert panel.viewers == []


def test_close_runs_close_handler():
    runtime = _make_runtime()
    panel = _make_panel(runtime=runtime)
    panel.handlers.close = MagicMock()
    viewer = SimpleViewer("alex")
    panel.open(viewer)
    panel.close(viewer)
    runtime.scheduler.tick(2)
    panel.handlers.close.assert_called_once()


def test_close_can_skip_close_handler():
    runtime = _make_runtime()
    panel = _make_panel(runtime=runtime)
    panel.handlers.close = MagicMock()
    viewer = SimpleViewer("alex")
    panel.open(viewer)
    panel.close(viewer, run_close_action=False)
    runtime.scheduler.tick(2)
    panel.handlers.close.assert_not_called()
    assert panel.flags.run_close_action is True


def test_open_handler_runs_on_open():
    panel = _make_panel()
    panel.handlers.open = MagicMock()
    panel.open(SimpleViewer("alex"))
    panel.handlers.open.assert_called_once()


def test_update_title_reopens_without_handlers():
    panel = _make_panel()
    panel.handlers.open = MagicMock()
    panel.handlers.close = MagicMock()
    panel.set_item(0, PanelItem("stone"))
    viewer = SimpleViewer("alex")
    panel.open(viewer)
    old_surface = panel.surface

    panel.update_title("Renamed")

    assert panel.surface is not old_surface
    assert panel.surface.title == "Renamed"
    assert viewer.surface is panel.surface
    assert panel.surface.get_slot(0).payload == "stone"
    assert panel.handlers.open.call_count == 1
    panel.handlers.close.assert_not_called()
    assert panel.flags.updating is False


def test_permission_toggles_chain():
    panel = _make_panel()
    panel.disable_item_take().disable_item_place()
    assert not panel.can_take_items()
    assert not panel.can_place_items()
    assert panel.can_swap_items()
    panel.enable_item_take()
    assert panel.can_take_items()


def test_disable_all_interactions():
    panel = _make_panel(modifiers=[InteractionModifier.PREVENT_ITEM_DROP])
    assert not panel.can_drop_items()
    panel.disable_all_interactions()
    assert panel.all_interactions_disabled()
    panel.enable_all_interactions()
    assert panel.allows_other_actions()
    assert not panel.all_interactions_disabled()


def test_pagination_calls_unsupported_on_plain_panel():
    panel = _make_panel()
    with pytest.raises(UnsupportedOperation):
        panel.next()
    with pytest.raises(UnsupportedOperation):
        panel.pages_number()


def test_add_item_expansion_never_exceeds_six_rows():
    runtime = PanelRuntime.in_memory(PanelConfig(max_grid_rows=9))
    panel = _make_panel(rows=6, runtime=runtime)
    panel.add_item(*[PanelItem(i) for i in range(55)], expand_if_full=True)
    assert panel.rows == 6
