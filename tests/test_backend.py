"""Tests for the in-memory backend, scheduler and runtime."""

from unittest.mock import MagicMock

import pytest

from panel_engine.config import PanelConfig, SchedulerCapability
from panel_engine.core.backend import (
    InMemoryBackend,
    PanelRuntime,
    SimpleViewer,
    TickScheduler,
    default_runtime,
)
from panel_engine.core.events import CloseEvent, OpenEvent
from panel_engine.core.item import PanelItem, TaggedPayload
from panel_engine.core.panel import Panel
from panel_engine.core.slots import PanelGeometry
from panel_engine.errors import SchedulerUnavailable


def _make_surface(size=9):
    listener = MagicMock()
    backend = InMemoryBackend(listener=listener)
    return backend.create_surface("Shop <b>", "owner", size), listener


def test_set_slot_out_of_range():
    surface, _ = _make_surface()
    with pytest.raises(IndexError):
        surface.set_slot(9, TaggedPayload("x", "id"))


def test_set_slot_none_clears():
    surface, _ = _make_surface()
    surface.set_slot(0, TaggedPayload("x", "id"))
    surface.set_slot(0, None)
    assert surface.contents == {}


def test_open_and_close_emit_events():
    surface, listener = _make_surface()
    viewer = SimpleViewer("alex")
    surface.open(viewer)
    surface.close(viewer)
    events = [call.args[0] for call in listener.dispatch.call_args_list]
    assert isinstance(events[0], OpenEvent)
    assert isinstance(events[1], CloseEvent)
    assert viewer.surface is None


def test_opening_another_surface_closes_previous():
    listener = MagicMock()
    backend = InMemoryBackend(listener=listener)
    first = backend.create_surface("a", None, 9)
    second = backend.create_surface("b", None, 9)
    viewer = SimpleViewer("alex")
    first.open(viewer)
    second.open(viewer)
    assert first.viewers == []
    assert second.viewers == [viewer]


def test_close_view_closes_current_surface():
    backend = InMemoryBackend()
    surface = backend.create_surface("Shop", None, 9)
    viewer = SimpleViewer("alex")
    surface.open(viewer)
    backend.close_view(viewer)
    assert surface.viewers == []


def test_html_preview():
    surface, _ = _make_surface()
    surface.set_slot(0, TaggedPayload("diamond", "id"))
    surface.set_slot(1, TaggedPayload("stone"))
    h = surface.to_html()
    assert "pe-container" in h
    assert "Shop &lt;b&gt;" in h
    assert 'data-slot="8"' in h
    assert "pe-cell-tagged" in h
    assert "pe-cell-untagged" in h
    assert surface._repr_html_() == h


def test_panel_surface_preview_shows_items():
    panel = Panel("Shop", PanelGeometry(rows=2), runtime=PanelRuntime.in_memory(PanelConfig()))
    panel.set_item(3, PanelItem("diamond"))
    panel.open(SimpleViewer("alex"))
    h = panel.surface.to_html()
    assert "&#x27;diamond&#x27;" in h
    assert h.count("data-slot=") == 18


def test_tick_scheduler_runs_due_tasks_in_order():
    scheduler = TickScheduler()
    calls = []
    scheduler.schedule_after(2, lambda: calls.append("b"))
    scheduler.schedule_after(1, lambda: calls.append("a"))
    scheduler.schedule_after(2, lambda: calls.append("c"))
    assert scheduler.pending == 3
    scheduler.tick(2)
    assert calls == ["a", "b", "c"]
    assert scheduler.pending == 0


def test_runtime_uses_per_viewer_scheduler():
    scheduler = MagicMock()
    config = PanelConfig(scheduler_capability=SchedulerCapability.PER_VIEWER)
    runtime = PanelRuntime(backend=InMemoryBackend(), scheduler=scheduler, config=config)
    task = MagicMock()
    viewer = SimpleViewer("alex")
    runtime.schedule(viewer, 2, task)
    scheduler.schedule_for.assert_called_once_with(viewer, 2, task)
    scheduler.schedule_after.assert_not_called()


def test_runtime_rejects_missing_scheduler_capability():
    scheduler = MagicMock(spec=["schedule_after"])
    config = PanelConfig(scheduler_capability=SchedulerCapability.PER_VIEWER)
    with pytest.raises(SchedulerUnavailable):
        PanelRuntime(backend=InMemoryBackend(), scheduler=scheduler, config=config)


def test_close_uses_configured_delay():
    runtime = PanelRuntime.in_memory(PanelConfig(close_delay_ticks=5))
    panel = Panel("Shop", runtime=runtime)
    viewer = SimpleViewer("alex")
    panel.open(viewer)
    panel.close(viewer)
    runtime.scheduler.tick(4)
    assert panel.viewers == [viewer]
    runtime.scheduler.tick()
    assert panel.viewers == []


def test_default_runtime_is_shared():
    runtime = default_runtime(refresh=True)
    assert default_runtime() is runtime
    assert Panel("Shop").runtime is runtime
