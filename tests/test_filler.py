"""Tests for PanelFiller."""

import pytest

from panel_engine.config import PanelConfig
from panel_engine.core.backend import PanelRuntime
from panel_engine.core.filler import Side
from panel_engine.core.item import PanelItem
from panel_engine.core.panel import Panel
from panel_engine.core.slots import PanelGeometry, PanelType
from panel_engine.errors import SlotOutOfRange


def _make_panel(rows=3, panel_type=PanelType.GRID):
    return Panel("Fill", PanelGeometry(panel_type, rows), runtime=PanelRuntime.in_memory(PanelConfig()))


def test_fill_top_skips_existing():
    panel = _make_panel()
    keep = PanelItem("keep")
    panel.set_item(3, keep)
    glass = PanelItem("glass")
    panel.filler.fill_top(glass)
    assert sorted(panel.items) == list(range(9))
    assert panel.get_item(3) is keep


def test_fill_bottom():
    panel = _make_panel()
    panel.filler.fill_bottom(PanelItem("glass"))
    assert sorted(panel.items) == list(range(18, 27))


def test_fill_border_overwrites_ring():
    panel = _make_panel(rows=4)
    panel.set_item(0, PanelItem("old"))
    panel.set_item(10, PanelItem("inside"))
    glass = PanelItem("glass")
    panel.filler.fill_border(glass)
    ring = set(range(9)) | set(range(27, 36)) | {9, 17, 18, 26}
    assert {s for s, it in panel.items.items() if it is glass} == ring
    assert panel.get_item(10).payload == "inside"


def test_fill_border_ignores_small_panels():
    panel = _make_panel(rows=2)
    panel.filler.fill_border(PanelItem("glass"))
    assert panel.items == {}


def test_fill_between_points():
    panel = _make_panel()
    panel.filler.fill_between_points(3, 4, 2, 2, PanelItem("glass"))
    assert sorted(panel.items) == [10, 11, 12, 19, 20, 21]


def test_fill_side_both():
    panel = _make_panel()
    panel.filler.fill_side(Side.BOTH, PanelItem("glass"))
    assert sorted(panel.items) == [0, 8, 9, 17, 18, 26]


def test_fill_repeats_list_by_slot():
    panel = _make_panel(rows=1)
    a, b = PanelItem("a"), PanelItem("b")
    panel.set_item(1, PanelItem("fixed"))
    panel.filler.fill([a, b])
    assert panel.get_item(0) is a
    assert panel.get_item(1).payload == "fixed"
    assert panel.get_item(2) is a
    assert panel.get_item(3) is b


def test_fill_fixed_type_uses_fill_size():
    panel = _make_panel(panel_type=PanelType.BREWING)
    panel.filler.fill(PanelItem("glass"))
    assert sorted(panel.items) == [0, 1, 2, 3, 4]


def test_fill_empty_list_rejected():
    panel = _make_panel()
    with pytest.raises(ValueError):
        panel.filler.fill([])


def test_fill_top_on_hopper_rejected_without_changes():
    panel = _make_panel(panel_type=PanelType.HOPPER)
    with pytest.raises(SlotOutOfRange):
        panel.filler.fill_top(PanelItem("glass"))
    assert panel.items == {}


def test_fill_between_points_on_hopper_rejected_without_changes():
    panel = _make_panel(panel_type=PanelType.HOPPER)
    with pytest.raises(SlotOutOfRange):
        panel.filler.fill_between_points(1, 1, 1, 9, PanelItem("glass"))
    assert panel.items == {}


def test_fill_between_points_clips_to_grid():
    panel = _make_panel(rows=2)
    panel.filler.fill_between_points(2, 8, 5, 12, PanelItem("glass"))
    assert sorted(panel.items) == [16, 17]
