"""Tests for panel items and identity authentication."""

from panel_engine.core.item import PanelItem, TaggedPayload, is_panel_item


def test_items_get_distinct_identities():
    a = PanelItem("stone")
    b = PanelItem("stone")
    assert a.identity != b.identity
    assert a.tagged != b.tagged


def test_identity_survives_payload_change():
    item = PanelItem("stone")
    identity = item.identity
    item.payload = "dirt"
    assert item.identity == identity
    assert item.tagged == TaggedPayload("dirt", identity)


def test_empty_payload_has_no_identity():
    item = PanelItem(None)
    assert item.tagged.is_empty
    assert item.tagged.identity is None


def test_is_panel_item_matches_own_payload():
    item = PanelItem("stone")
    assert is_panel_item(item.tagged, item)


def test_is_panel_item_rejects_forged_identity():
    item = PanelItem("stone")
    assert not is_panel_item(TaggedPayload("stone", "someone-else"), item)


def test_is_panel_item_rejects_untagged_and_missing():
    item = PanelItem("stone")
    assert not is_panel_item(TaggedPayload("stone"), item)
    assert not is_panel_item(None, item)
    assert not is_panel_item(item.tagged, None)
