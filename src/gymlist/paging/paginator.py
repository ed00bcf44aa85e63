"""Page-indexed windowing over a list of known size.

`Paginator` owns the page state of one list screen. Page numbers are 1-based
and always clamped into ``[1, total_pages]``; there is always at least one
page, even for an empty list.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, TypeVar

from pydantic import BaseModel

from gymlist.config import Settings
from gymlist.exceptions import InvalidArgumentError
from gymlist.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)

MAX_VISIBLE_PAGES = 5


class PaginatorOptions(BaseModel):
    """Construction options for `Paginator`."""

    initial_page: int = 1
    initial_page_size: int = 12
    total_items: int = 0

    @classmethod
    def from_settings(cls, settings: Settings, *, total_items: int = 0) -> "PaginatorOptions":
        return cls(initial_page_size=settings.pagination.initial_page_size, total_items=total_items)


@dataclass(frozen=True, slots=True)
class PaginationState:
    """Snapshot of a paginator's state and derived values."""

    current_page: int
    page_size: int
    total_items: int
    total_pages: int
    start_index: int
    end_index: int
    has_previous: bool
    has_next: bool
    page_range: Tuple[int, ...]


def _check_page_size(size: int) -> int:
    if size <= 0:
        raise InvalidArgumentError(f"page size must be >= 1, got {size!r}")
    return size


def _check_total_items(total: int) -> int:
    if total < 0:
        raise InvalidArgumentError(f"total items must be >= 0, got {total!r}")
    return total


class Paginator:
    """Page state machine over (current_page, page_size, total_items)."""

    def __init__(
        self, *, initial_page: int = 1, initial_page_size: int = 12, total_items: int = 0
    ) -> None:
        self._page_size = _check_page_size(initial_page_size)
        self._total_items = _check_total_items(total_items)
        self._current_page = 1
        self.set_page(initial_page)

    @classmethod
    def from_options(cls, options: Optional[PaginatorOptions] = None) -> "Paginator":
        opts = options or PaginatorOptions()
        return cls(
            initial_page=opts.initial_page,
            initial_page_size=opts.initial_page_size,
            total_items=opts.total_items,
        )

    # ----- State -----

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def total_items(self) -> int:
        return self._total_items

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self._total_items / self._page_size))

    # ----- Derived -----

    @property
    def start_index(self) -> int:
        return (self._current_page - 1) * self._page_size

    @property
    def end_index(self) -> int:
        """Exclusive index of the last item on the current page."""
        return min(self.start_index + self._page_size, self._total_items)

    @property
    def has_previous(self) -> bool:
        return self._current_page > 1

    @property
    def has_next(self) -> bool:
        return self._current_page < self.total_pages

    @property
    def page_range(self) -> List[int]:
        """Up to five consecutive page numbers around the current page.

        The window keeps its width near the first and last pages by shifting
        instead of shrinking.
        """
        total = self.total_pages
        start = max(1, self._current_page - MAX_VISIBLE_PAGES // 2)
        end = min(total, start + MAX_VISIBLE_PAGES - 1)
        start = max(1, end - MAX_VISIBLE_PAGES + 1)
        return list(range(start, end + 1))

    @property
    def display_range(self) -> Tuple[int, int]:
        """1-based (first, last) item numbers shown on the current page; (0, 0) when empty."""
        if self._total_items == 0:
            return (0, 0)
        return (self.start_index + 1, self.end_index)

    def summary(self) -> str:
        """Caption for the pagination bar, e.g. "Showing 13 to 24 of 30 results"."""
        if self._total_items == 0:
            return "No results"
        first, last = self.display_range
        return f"Showing {first} to {last} of {self._total_items} results"

    @property
    def state(self) -> PaginationState:
        return PaginationState(
            current_page=self._current_page,
            page_size=self._page_size,
            total_items=self._total_items,
            total_pages=self.total_pages,
            start_index=self.start_index,
            end_index=self.end_index,
            has_previous=self.has_previous,
            has_next=self.has_next,
            page_range=tuple(self.page_range),
        )

    # ----- Actions -----

    def set_page(self, page: float) -> None:
        """Go to `page`, clamped into [1, total_pages].

        Fractional pages are truncated; NaN goes to the first page.
        """
        if isinstance(page, float) and math.isnan(page):
            valid = 1
        else:
            valid = int(max(1, min(page, self.total_pages)))
        if valid != page:
            logger.debug("page_clamped", requested=page, page=valid, total_pages=self.total_pages)
        self._current_page = valid

    def set_page_size(self, size: int) -> None:
        """Change the page size and return to the first page."""
        self._page_size = _check_page_size(size)
        self._current_page = 1

    def set_total_items(self, total: int) -> None:
        """Replace the item count, keeping the current page within range."""
        self._total_items = _check_total_items(total)
        self.set_page(self._current_page)

    def next_page(self) -> None:
        if self.has_next:
            self._current_page += 1

    def previous_page(self) -> None:
        if self.has_previous:
            self._current_page -= 1

    def first_page(self) -> None:
        self._current_page = 1

    def last_page(self) -> None:
        self._current_page = self.total_pages

    def paginate_data(self, data: Sequence[T]) -> List[T]:
        """Return the items of `data` that fall on the current page."""
        start = self.start_index
        return list(data[start : start + self._page_size])
