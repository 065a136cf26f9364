"""Tests for slot addressing, geometry and pagination regions."""

import pytest

from panel_engine.core.slots import PaginationRegion, PanelGeometry, PanelType, row_col_of, slot_of
from panel_engine.errors import SlotOutOfRange


def test_slot_of_corners():
    assert slot_of(1, 1) == 0
    assert slot_of(1, 9) == 8
    assert slot_of(2, 1) == 9
    assert slot_of(3, 9) == 26


def test_row_col_of_inverts_slot_of():
    for row in range(1, 7):
        for col in range(1, 10):
            assert row_col_of(slot_of(row, col)) == (row, col)


def test_grid_geometry_size():
    assert PanelGeometry(PanelType.GRID, 3).size == 27


def test_grid_slot_validation():
    geometry = PanelGeometry(PanelType.GRID, 3)
    assert geometry.is_valid_slot(0)
    assert geometry.is_valid_slot(26)
    assert not geometry.is_valid_slot(27)
    assert not geometry.is_valid_slot(-1)


def test_fixed_type_accepts_limit_slot():
    geometry = PanelGeometry(PanelType.HOPPER)
    assert geometry.size == 5
    assert geometry.is_valid_slot(5)
    assert not geometry.is_valid_slot(6)


def test_fixed_type_forces_single_row():
    assert PanelGeometry(PanelType.DISPENSER, 4).rows == 1


def test_validate_slot_error_carries_details():
    with pytest.raises(SlotOutOfRange) as exc:
        PanelGeometry(PanelType.GRID, 2).validate_slot(18)
    assert exc.value.slot == 18
    assert exc.value.rows == 2
    assert "rows - 2" in str(exc.value)


def test_validate_slot_fixed_message_has_no_rows():
    with pytest.raises(SlotOutOfRange) as exc:
        PanelGeometry(PanelType.BREWING).validate_slot(9)
    assert exc.value.rows is None
    assert "BREWING" in str(exc.value)


def test_region_rectangle_any_corner_order():
    a = PaginationRegion.rectangle(2, 2, 3, 8)
    b = PaginationRegion.rectangle(3, 8, 2, 2)
    assert a.slots == b.slots
    assert a.size == 14
    assert a.slots[0] == 10


def test_region_rows_and_columns():
    assert PaginationRegion.rows(2).slots == list(range(9, 18))
    assert PaginationRegion.columns(3, 1).slots == [0, 9, 18]


def test_region_all_and_contains():
    region = PaginationRegion.all(2)
    assert len(region) == 18
    assert 17 in region
    assert not region.contains(18)


def test_region_slots_is_a_copy():
    region = PaginationRegion.of(1, 2, 3)
    region.slots.append(4)
    assert list(region) == [1, 2, 3]


def test_grid_rows_must_be_between_one_and_six():
    with pytest.raises(ValueError):
        PanelGeometry(PanelType.GRID, 9)
    with pytest.raises(ValueError):
        PanelGeometry(PanelType.GRID, 0)
    assert PanelGeometry(PanelType.GRID, 6).size == 54
