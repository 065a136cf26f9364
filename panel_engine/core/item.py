"""Panel items and the identity tag that authenticates them on click."""

import uuid
from dataclasses import dataclass
from typing import Any, Callable, Optional

Handler = Callable[[Any], None]


@dataclass(frozen=True)
class TaggedPayload:
    """A payload as the surface shows it: the raw value plus an identity tag.

    Two tagged payloads with equal raw values but different identities are
    different entries. The identity is ``None`` for empty payloads.
    """

    payload: Any
    identity: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.payload is None


class PanelItem:
    """A single placed entry: an opaque payload, an identity, an optional handler.

    The identity is generated once and survives payload replacement, so the
    click dispatcher can match whatever the surface reports back to exactly
    one item.

    Parameters
    ----------
    payload : Any
        Host-defined payload. ``None`` means an empty cell.
    click_handler : callable, optional
        Called with the click event when this item is clicked.
    """

    def __init__(self, payload: Any, click_handler: Optional[Handler] = None) -> None:
        self._identity = uuid.uuid4().hex
        self.click_handler = click_handler
        self._payload: Any = None
        self._tagged = TaggedPayload(None)
        self.payload = payload

    @property
    def identity(self) -> str:
        return self._identity

    @property
    def payload(self) -> Any:
        return self._payload

    @payload.setter
    def payload(self, payload: Any) -> None:
        self._payload = payload
        if payload is None:
            self._tagged = TaggedPayload(None)
        else:
            self._tagged = TaggedPayload(payload, self._identity)

    @property
    def tagged(self) -> TaggedPayload:
        """The payload in the form written to surfaces."""
        return self._tagged

    def __repr__(self) -> str:
        return f"PanelItem(payload={self._payload!r}, identity={self._identity[:8]})"


def is_panel_item(observed: Optional[TaggedPayload], item: Optional[PanelItem]) -> bool:
    """Check that an observed payload really is ``item``.

    A stale render, or a payload placed at the slot by someone else, carries a
    different (or no) identity and is rejected.
    """
    if observed is None or item is None:
        return False
    if observed.identity is None:
        return False
    return observed.identity == item.identity
