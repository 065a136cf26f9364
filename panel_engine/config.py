"""Runtime configuration for panels.

A small frozen snapshot of the tunables the engine reads, built once from
environment variables and then passed around through ``PanelRuntime``.

Environment variables:

- ``PANEL_ENGINE_CLOSE_DELAY_TICKS``: ticks to wait before a scheduled close
  runs (default 2).
- ``PANEL_ENGINE_SCHEDULER``: ``global`` or ``per_viewer`` (default
  ``global``). Selects which scheduler entry point ``Panel.close`` uses.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from panel_engine.errors import SchedulerUnavailable

logger = logging.getLogger(__name__)

DEFAULT_CLOSE_DELAY_TICKS = 2
DEFAULT_MAX_GRID_ROWS = 6


class SchedulerCapability(Enum):
    """How deferred tasks are handed to the host scheduler."""

    GLOBAL = "global"  # scheduler.schedule_after(ticks, task)
    PER_VIEWER = "per_viewer"  # scheduler.schedule_for(viewer, ticks, task)


@dataclass(frozen=True)
class PanelConfig:
    """Immutable engine settings.

    Attributes
    ----------
    close_delay_ticks : int
        Delay applied to ``Panel.close``. Two ticks lets the current event
        finish before the view closes, so an item cannot be taken during the
        same tick the close is issued.
    max_grid_rows : int
        Upper bound for grid growth in ``add_item(expand_if_full=True)``.
    scheduler_capability : SchedulerCapability
        Scheduler entry point to use for deferred tasks.
    """

    close_delay_ticks: int = DEFAULT_CLOSE_DELAY_TICKS
    max_grid_rows: int = DEFAULT_MAX_GRID_ROWS
    scheduler_capability: SchedulerCapability = SchedulerCapability.GLOBAL


_singleton: Optional[PanelConfig] = None


def _coerce_int(val: Optional[str], default: int) -> int:
    if val is None or not val.strip():
        return default
    try:
        return int(val)
    except ValueError:
        logger.warning("Ignoring non-integer config value %r", val)
        return default


def _coerce_capability(val: Optional[str]) -> SchedulerCapability:
    if val is None or not val.strip():
        return SchedulerCapability.GLOBAL
    try:
        return SchedulerCapability(val.strip().lower())
    except ValueError:
        logger.warning("Unknown scheduler capability %r, using global", val)
        return SchedulerCapability.GLOBAL


def build_panel_config() -> PanelConfig:
    """Build a config from the current environment."""
    return PanelConfig(
        close_delay_ticks=max(
            0, _coerce_int(os.getenv("PANEL_ENGINE_CLOSE_DELAY_TICKS"), DEFAULT_CLOSE_DELAY_TICKS)
        ),
        scheduler_capability=_coerce_capability(os.getenv("PANEL_ENGINE_SCHEDULER")),
    )


def get_panel_config(refresh: bool = False) -> PanelConfig:
    """Return the process-wide config, building it on first use."""
    global _singleton
    if _singleton is None or refresh:
        _singleton = build_panel_config()
    return _singleton


def negotiate_capability(scheduler: Any, config: PanelConfig) -> SchedulerCapability:
    """Resolve which scheduler entry point to use, once, at startup.

    Raises
    ------
    SchedulerUnavailable
        If the config asks for per-viewer scheduling and the scheduler has no
        ``schedule_for`` method.
    """
    wanted = config.scheduler_capability
    if wanted is SchedulerCapability.PER_VIEWER:
        if not callable(getattr(scheduler, "schedule_for", None)):
            raise SchedulerUnavailable("Could not find a per-viewer scheduler method.")
        return wanted
    if not callable(getattr(scheduler, "schedule_after", None)):
        raise SchedulerUnavailable("Could not find a scheduler method.")
    return wanted
