"""Host collaborator contracts and an in-memory reference implementation.

The engine never draws anything itself. It talks to a ``RenderingBackend``
that allocates ``Surface`` objects, and to a ``Scheduler`` for the one
deferred operation it needs (closing a view). ``PanelRuntime`` bundles the
two with the engine config.

The in-memory classes are complete enough to drive a panel end to end: the
surface stores what each slot shows, keeps a viewer list, and emits open and
close events to an attached listener the way a host event source would.
"""

import html
import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple

from panel_engine.config import PanelConfig, SchedulerCapability, get_panel_config, negotiate_capability
from panel_engine.core.events import (
    ClickEvent,
    ClickType,
    CloseEvent,
    DragEvent,
    OpenEvent,
    RawAction,
    Region,
)
from panel_engine.core.item import TaggedPayload
from panel_engine.core.slots import GRID_WIDTH
from panel_engine.styles.colors import CELL_COLORS, CELL_LABELS, CSS_CLASSES, TEXT_COLORS, CellState

if TYPE_CHECKING:
    from panel_engine.core.listener import PanelListener

logger = logging.getLogger(__name__)

Task = Callable[[], None]


def is_interactable(viewer: Any) -> bool:
    """Whether the host lets ``viewer`` open a surface right now."""
    return bool(getattr(viewer, "interactable", True))


class Surface(ABC):
    """A displayed container with indexed slots."""

    @property
    @abstractmethod
    def size(self) -> int: ...

    @property
    @abstractmethod
    def title(self) -> str: ...

    @property
    @abstractmethod
    def owner(self) -> Any: ...

    @property
    @abstractmethod
    def viewers(self) -> List[Any]: ...

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def get_slot(self, index: int) -> Optional[TaggedPayload]: ...

    @abstractmethod
    def set_slot(self, index: int, payload: Optional[TaggedPayload]) -> None: ...

    @abstractmethod
    def set_title(self, title: str) -> None: ...

    @abstractmethod
    def open(self, viewer: Any) -> None: ...

    @abstractmethod
    def close(self, viewer: Any) -> None: ...


class RenderingBackend(ABC):
    """Allocates surfaces and closes views."""

    @abstractmethod
    def create_surface(self, title: str, owner: Any, size: int) -> Surface: ...

    @abstractmethod
    def close_view(self, viewer: Any) -> None:
        """Close whatever surface ``viewer`` has open."""


class Scheduler(ABC):
    """Runs tasks a number of ticks in the future."""

    @abstractmethod
    def schedule_after(self, ticks: int, task: Task) -> None: ...


# ---------------------------------------------------------------- in-memory


@dataclass(eq=False)
class SimpleViewer:
    """A viewer for the in-memory backend."""

    name: str
    interactable: bool = True
    surface: Optional["InMemorySurface"] = None

    def __repr__(self) -> str:
        return f"SimpleViewer({self.name!r})"


class InMemorySurface(Surface):
    """Dictionary-backed surface.

    ``set_slot`` outside ``[0, size)`` raises ``IndexError`` as a real host
    container would.
    """

    def __init__(self, backend: "InMemoryBackend", title: str, owner: Any, size: int) -> None:
        self._backend = backend
        self._title = title
        self._owner = owner
        self._size = size
        self._slots: Dict[int, TaggedPayload] = {}
        self._viewers: List[Any] = []
        self._uid = uuid.uuid4().hex[:12]

    @property
    def size(self) -> int:
        return self._size

    @property
    def title(self) -> str:
        return self._title

    @property
    def owner(self) -> Any:
        return self._owner

    @property
    def viewers(self) -> List[Any]:
        return list(self._viewers)

    @property
    def contents(self) -> Dict[int, TaggedPayload]:
        """Non-empty slots."""
        return dict(self._slots)

    def clear(self) -> None:
        self._slots.clear()

    def get_slot(self, index: int) -> Optional[TaggedPayload]:
        return self._slots.get(index)

    def set_slot(self, index: int, payload: Optional[TaggedPayload]) -> None:
        if not 0 <= index < self._size:
            raise IndexError(f"Slot {index} outside surface of size {self._size}")
        if payload is None or payload.is_empty:
            self._slots.pop(index, None)
        else:
            self._slots[index] = payload

    def set_title(self, title: str) -> None:
        self._title = title

    def open(self, viewer: Any) -> None:
        previous = getattr(viewer, "surface", None)
        if previous is not None and previous is not self:
            previous.close(viewer)
        if viewer not in self._viewers:
            self._viewers.append(viewer)
        if hasattr(viewer, "surface"):
            viewer.surface = self
        self._backend.emit(OpenEvent(surface=self, viewer=viewer))

    def close(self, viewer: Any) -> None:
        if viewer not in self._viewers:
            return
        self._viewers.remove(viewer)
        if getattr(viewer, "surface", None) is self:
            viewer.surface = None
        self._backend.emit(CloseEvent(surface=self, viewer=viewer))

    # ------------------------------------------------------------ event source

    def click(
        self,
        viewer: Any,
        slot: int,
        region: Optional[Region] = Region.PANEL,
        raw_action: RawAction = RawAction.PICKUP_ALL,
        click_type: ClickType = ClickType.LEFT,
        current_payload: Optional[TaggedPayload] = None,
    ) -> ClickEvent:
        """Simulate a click and deliver it to the listener.

        The reported payload defaults to what this surface shows at ``slot``
        for panel-region clicks.
        """
        if current_payload is None and region is Region.PANEL:
            current_payload = self.get_slot(slot)
        event = ClickEvent(
            surface=self,
            viewer=viewer,
            clicked_region=region,
            slot=slot,
            raw_action=raw_action,
            click_type=click_type,
            current_payload=current_payload,
        )
        self._backend.emit(event)
        return event

    def drag(self, viewer: Any, raw_slots: Tuple[int, ...]) -> DragEvent:
        event = DragEvent(
            surface=self,
            viewer=viewer,
            raw_slots=frozenset(raw_slots),
            top_region_size=self._size,
        )
        self._backend.emit(event)
        return event

    # ----------------------------------------------------------------- preview

    def _cell_state(self, index: int) -> CellState:
        payload = self._slots.get(index)
        if payload is None:
            return CellState.EMPTY
        if payload.identity is None:
            return CellState.UNTAGGED
        return CellState.TAGGED

    def _repr_html_(self) -> str:
        """Jupyter auto-display."""
        return self.to_html()

    def display(self) -> None:
        """Display in IPython/Jupyter."""
        from IPython.display import HTML
        from IPython.display import display as ipy_display

        ipy_display(HTML(self.to_html()))

    def to_html(self) -> str:
        """Render the surface as an HTML grid."""
        uid = self._uid
        s = f"#pe-{uid}"
        rules = []
        for state, css_cls in CSS_CLASSES.items():
            rules.append(
                f"{s} .{css_cls} {{ background: {CELL_COLORS[state]}; "
                f"color: {TEXT_COLORS[state]}; }}"
            )
        parts = [
            f'<div id="pe-{uid}" class="pe-container">',
            "<style>",
            f"{s} {{ font-family: 'JetBrains Mono', 'Consolas', monospace; }}",
            f"{s} .pe-title {{ border: 3px solid black; padding: 8px; "
            "font-weight: 700; text-transform: uppercase; }}",
            f"{s} .pe-grid {{ display: grid; grid-template-columns: "
            f"repeat({GRID_WIDTH}, 64px); gap: 4px; margin-top: 8px; }}",
            f"{s} .pe-cell {{ border: 3px solid black; height: 64px; font-size: 10px; "
            "overflow: hidden; padding: 2px; }}",
            "\n".join(rules),
            "</style>",
            f'<div class="pe-title">{html.escape(self._title)}</div>',
            '<div class="pe-grid">',
        ]
        for index in range(self._size):
            state = self._cell_state(index)
            payload = self._slots.get(index)
            label = html.escape(repr(payload.payload)) if payload is not None else ""
            parts.append(
                f'<div class="pe-cell {CSS_CLASSES[state]}" data-slot="{index}" '
                f'title="{CELL_LABELS[state]}">{label}</div>'
            )
        parts.append("</div>")
        parts.append("</div>")
        return "\n".join(parts)


class InMemoryBackend(RenderingBackend):
    """Backend whose surfaces live in memory.

    Parameters
    ----------
    listener : PanelListener, optional
        Receives every event the surfaces emit.
    """

    def __init__(self, listener: Optional["PanelListener"] = None) -> None:
        self.listener = listener
        self.surfaces: List[InMemorySurface] = []

    def create_surface(self, title: str, owner: Any, size: int) -> InMemorySurface:
        surface = InMemorySurface(self, title, owner, size)
        self.surfaces.append(surface)
        return surface

    def close_view(self, viewer: Any) -> None:
        surface = getattr(viewer, "surface", None)
        if surface is not None:
            surface.close(viewer)

    def emit(self, event: Any) -> None:
        if self.listener is not None:
            self.listener.dispatch(event)


class TickScheduler(Scheduler):
    """Manually advanced scheduler. Call :meth:`tick` to move time forward."""

    def __init__(self) -> None:
        self.current_tick = 0
        self._pending: List[Tuple[int, int, Task]] = []
        self._seq = 0

    def schedule_after(self, ticks: int, task: Task) -> None:
        self._seq += 1
        self._pending.append((self.current_tick + ticks, self._seq, task))

    def schedule_for(self, viewer: Any, ticks: int, task: Task) -> None:
        self.schedule_after(ticks, task)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def tick(self, count: int = 1) -> None:
        for _ in range(count):
            self.current_tick += 1
            due = sorted(entry for entry in self._pending if entry[0] <= self.current_tick)
            self._pending = [entry for entry in self._pending if entry[0] > self.current_tick]
            for _, _, task in due:
                task()


@dataclass
class PanelRuntime:
    """Collaborators shared by a set of panels.

    The scheduler capability is negotiated once, when the runtime is built.
    """

    backend: RenderingBackend
    scheduler: Any
    config: PanelConfig = field(default_factory=get_panel_config)
    capability: SchedulerCapability = field(init=False)

    def __post_init__(self) -> None:
        self.capability = negotiate_capability(self.scheduler, self.config)

    @classmethod
    def in_memory(cls, config: Optional[PanelConfig] = None) -> "PanelRuntime":
        """Runtime with an in-memory backend, a tick scheduler and a listener."""
        from panel_engine.core.listener import PanelListener

        backend = InMemoryBackend(listener=PanelListener())
        return cls(backend=backend, scheduler=TickScheduler(), config=config or get_panel_config())

    def create_surface(self, title: str, owner: Any, size: int) -> Surface:
        return self.backend.create_surface(title, owner, size)

    def schedule(self, viewer: Any, ticks: int, task: Task) -> None:
        if self.capability is SchedulerCapability.PER_VIEWER:
            self.scheduler.schedule_for(viewer, ticks, task)
        else:
            self.scheduler.schedule_after(ticks, task)


_default_runtime: Optional[PanelRuntime] = None


def default_runtime(refresh: bool = False) -> PanelRuntime:
    """Shared in-memory runtime used by panels built without one."""
    global _default_runtime
    if _default_runtime is None or refresh:
        _default_runtime = PanelRuntime.in_memory()
    return _default_runtime
