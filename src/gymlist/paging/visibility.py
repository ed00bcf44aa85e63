"""Visibility signal abstraction used by the incremental loader.

The loader only needs to know when a marker element (the "sentinel" rendered
after the last visible row) *becomes* visible. Hosts back `VisibilitySource`
with whatever viewport observation they have; `ManualVisibilitySource` is a
synthetic implementation driven by explicit calls, for tests and headless use.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Hashable, List

from gymlist.logging import get_logger

logger = get_logger(__name__)

VisibleCallback = Callable[[], None]


class Subscription(ABC):
    """Handle for an active observation; releasing it twice is harmless."""

    @abstractmethod
    def unsubscribe(self) -> None:
        """Stop delivering signals for this observation."""
        raise NotImplementedError

    @property
    @abstractmethod
    def active(self) -> bool:
        """True until `unsubscribe()` has been called."""


class VisibilitySource(ABC):
    """Edge-triggered "anchor became visible" signal source."""

    @abstractmethod
    def subscribe(self, anchor: Any, callback: VisibleCallback, *, margin: int = 0) -> Subscription:
        """Call `callback` each time `anchor` enters the viewport.

        `margin` extends the viewport by that many pixels so loading can start
        before the anchor is actually on screen.
        """
        raise NotImplementedError


class _ManualSubscription(Subscription):
    def __init__(
        self,
        source: "ManualVisibilitySource",
        anchor: Hashable,
        callback: VisibleCallback,
        margin: int,
    ) -> None:
        self._source = source
        self.anchor = anchor
        self.callback = callback
        self.margin = margin
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        if self._active:
            self._active = False
            self._source._release(self)


class ManualVisibilitySource(VisibilitySource):
    """Visibility source driven by explicit `set_visible` / `fire` calls."""

    def __init__(self) -> None:
        self._subscriptions: Dict[Hashable, List[_ManualSubscription]] = {}
        self._visible: Dict[Hashable, bool] = {}

    @property
    def active_subscriptions(self) -> int:
        return sum(len(subs) for subs in self._subscriptions.values())

    def subscribe(self, anchor: Any, callback: VisibleCallback, *, margin: int = 0) -> Subscription:
        sub = _ManualSubscription(self, anchor, callback, margin)
        self._subscriptions.setdefault(anchor, []).append(sub)
        logger.debug("visibility_subscribed", anchor=anchor, margin=margin)
        return sub

    def _release(self, sub: _ManualSubscription) -> None:
        subs = self._subscriptions.get(sub.anchor, [])
        if sub in subs:
            subs.remove(sub)
        if not subs:
            self._subscriptions.pop(sub.anchor, None)
        logger.debug("visibility_released", anchor=sub.anchor)

    def set_visible(self, anchor: Hashable, visible: bool) -> None:
        """Update the visibility of `anchor`, signalling only on a hidden -> visible edge."""
        was_visible = self._visible.get(anchor, False)
        self._visible[anchor] = visible
        if visible and not was_visible:
            self.fire(anchor)

    def fire(self, anchor: Hashable) -> None:
        """Deliver one "became visible" signal to every subscriber of `anchor`."""
        for sub in list(self._subscriptions.get(anchor, [])):
            if sub.active:
                sub.callback()
