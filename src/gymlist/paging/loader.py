"""Incremental ("infinite scroll") windowing over an in-memory list.

`IncrementalLoader` exposes a growing prefix of its backing items. Growth is
requested by `load_more()`, either directly or from a visibility signal on the
sentinel rendered after the last row, and committed after a settling delay
handed to a `SettleScheduler`.

State machine::

    IDLE --load_more()--> LOADING --settle--> IDLE (display_count += page)

While LOADING every further request is ignored, so any number of signals
arriving in one loading window yields exactly one growth step.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Generic, List, Optional, Sequence, TypeVar

from pydantic import BaseModel

from gymlist.config import Settings
from gymlist.exceptions import InvalidArgumentError
from gymlist.logging import get_logger
from gymlist.paging.scheduler import ImmediateScheduler, SettleScheduler
from gymlist.paging.visibility import Subscription, VisibilitySource

T = TypeVar("T")

logger = get_logger(__name__)


class LoaderState(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"


class LoaderOptions(BaseModel):
    """Construction options for `IncrementalLoader`."""

    threshold_distance: int = 100
    initial_items_per_page: int = 12
    enabled: bool = True
    settle_delay: float = 0.0  # seconds

    @classmethod
    def from_settings(cls, settings: Settings) -> "LoaderOptions":
        cfg = settings.loader
        return cls(
            threshold_distance=cfg.threshold_distance,
            initial_items_per_page=cfg.initial_items_per_page,
            enabled=cfg.enabled,
            settle_delay=cfg.settle_delay_ms / 1000.0,
        )


@dataclass(frozen=True, slots=True)
class WindowState:
    """Snapshot of the loader's window."""

    display_count: int
    is_loading: bool
    has_more: bool


class IncrementalLoader(Generic[T]):
    """Monotonically growing window over `items`, driven by visibility signals.

    Parameters
    ----------
    items: Sequence[T]
        Backing collection, usually the ranked/filtered result list.
    threshold_distance: int
        Margin in pixels passed to the visibility source; the sentinel counts
        as visible this far below the viewport.
    initial_items_per_page: int
        Size of the first window and of every growth step.
    enabled: bool
        When False the visibility signal is not observed; `load_more()` still works.
    scheduler: SettleScheduler | None
        Defers the commit of each growth step. Defaults to `ImmediateScheduler`.
    visibility: VisibilitySource | None
        Source of "sentinel became visible" signals, used by `observe()`.
    settle_delay: float
        Seconds between entering LOADING and committing the next page.
    """

    def __init__(
        self,
        items: Sequence[T],
        *,
        threshold_distance: int = 100,
        initial_items_per_page: int = 12,
        enabled: bool = True,
        scheduler: Optional[SettleScheduler] = None,
        visibility: Optional[VisibilitySource] = None,
        settle_delay: float = 0.0,
    ) -> None:
        if initial_items_per_page <= 0:
            raise InvalidArgumentError(
                f"initial_items_per_page must be >= 1, got {initial_items_per_page!r}"
            )
        if threshold_distance < 0:
            raise InvalidArgumentError(
                f"threshold_distance must be >= 0, got {threshold_distance!r}"
            )
        if settle_delay < 0:
            raise InvalidArgumentError(f"settle_delay must be >= 0, got {settle_delay!r}")

        self.threshold_distance = threshold_distance
        self.page_size = initial_items_per_page
        self.enabled = enabled
        self.settle_delay = settle_delay
        self._scheduler = scheduler or ImmediateScheduler()
        self._visibility = visibility
        self._subscription: Optional[Subscription] = None
        self._anchor: Any = None

        self._items: Sequence[T] = items
        self._known_length = len(items)
        self._display_count = min(self.page_size, self._known_length)
        self._state = LoaderState.IDLE
        # Bumped by reset() so a settle scheduled before it is discarded
        self._generation = 0

    @classmethod
    def from_options(
        cls,
        items: Sequence[T],
        options: Optional[LoaderOptions] = None,
        *,
        scheduler: Optional[SettleScheduler] = None,
        visibility: Optional[VisibilitySource] = None,
    ) -> "IncrementalLoader[T]":
        opts = options or LoaderOptions()
        return cls(
            items,
            threshold_distance=opts.threshold_distance,
            initial_items_per_page=opts.initial_items_per_page,
            enabled=opts.enabled,
            scheduler=scheduler,
            visibility=visibility,
            settle_delay=opts.settle_delay,
        )

    # ----- Window -----

    def _sync_length(self) -> None:
        if len(self._items) != self._known_length:
            logger.debug("loader_length_changed", old=self._known_length, new=len(self._items))
            self.reset()

    @property
    def items(self) -> Sequence[T]:
        return self._items

    def set_items(self, items: Sequence[T]) -> None:
        """Replace the backing collection, resetting the window if its length changed."""
        self._items = items
        self._sync_length()

    @property
    def display_count(self) -> int:
        self._sync_length()
        return self._display_count

    @property
    def displayed_items(self) -> List[T]:
        self._sync_length()
        return list(self._items[: self._display_count])

    @property
    def has_more(self) -> bool:
        self._sync_length()
        return self._display_count < len(self._items)

    @property
    def is_loading(self) -> bool:
        return self._state is LoaderState.LOADING

    @property
    def loader_state(self) -> LoaderState:
        return self._state

    @property
    def state(self) -> WindowState:
        return WindowState(
            display_count=self.display_count,
            is_loading=self.is_loading,
            has_more=self.has_more,
        )

    # ----- Transitions -----

    def load_more(self) -> bool:
        """Start one growth step; returns False when ineligible (loading or exhausted)."""
        if self._state is not LoaderState.IDLE or not self.has_more:
            logger.debug(
                "load_more_ignored", state=self._state.value, display_count=self._display_count
            )
            return False

        self._state = LoaderState.LOADING
        generation = self._generation
        logger.debug("load_more_started", display_count=self._display_count)
        self._scheduler.call_later(self.settle_delay, lambda: self._settle(generation))
        return True

    def _settle(self, generation: int) -> None:
        self._sync_length()
        if generation != self._generation or self._state is not LoaderState.LOADING:
            logger.debug("settle_discarded", generation=generation)
            return
        self._display_count = min(self._display_count + self.page_size, len(self._items))
        self._state = LoaderState.IDLE
        logger.debug("load_more_settled", display_count=self._display_count, has_more=self.has_more)

    def reset(self) -> None:
        """Return to IDLE with the initial window over the current items."""
        self._generation += 1
        self._known_length = len(self._items)
        self._display_count = min(self.page_size, self._known_length)
        self._state = LoaderState.IDLE
        logger.debug("loader_reset", display_count=self._display_count)

    # ----- Visibility -----

    def on_visible(self) -> None:
        """Handle a "sentinel became visible" signal."""
        if self.enabled and self.has_more and self._state is LoaderState.IDLE:
            self.load_more()
        else:
            logger.debug("visibility_signal_ignored", state=self._state.value, enabled=self.enabled)

    def observe(self, anchor: Any) -> None:
        """Watch `anchor` for visibility, releasing any previous observation first.

        Passing ``None`` only releases the current observation.
        """
        self._release()
        self._anchor = anchor
        if anchor is None or not self.enabled:
            return
        if self._visibility is None:
            raise InvalidArgumentError("observe() requires a visibility source")
        self._subscription = self._visibility.subscribe(
            anchor, self.on_visible, margin=self.threshold_distance
        )

    def _release(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self._anchor = None

    @property
    def observing(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def close(self) -> None:
        """Release the visibility subscription; call when the view is torn down."""
        self._release()

    def __enter__(self) -> "IncrementalLoader[T]":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
