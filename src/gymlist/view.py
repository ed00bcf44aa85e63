"""List screen pipeline: filter, rank, window and highlight one collection.

A `ListView` holds the state of one list-rendering session (the members
table, the leads board, ...). The flow is::

    items -> predicate filter -> rank(query) -> Paginator | IncrementalLoader -> visible rows

and `highlighted()` marks the query inside each rendered field.
"""
from __future__ import annotations

from typing import Any, Callable, Generic, List, Literal, Optional, Sequence, TypeVar

from gymlist.config import Settings
from gymlist.exceptions import InvalidArgumentError
from gymlist.logging import get_logger
from gymlist.paging.loader import IncrementalLoader, LoaderOptions
from gymlist.paging.paginator import Paginator, PaginatorOptions
from gymlist.paging.scheduler import SettleScheduler
from gymlist.paging.visibility import VisibilitySource
from gymlist.search.base_search import FieldValues, HighlightSpan
from gymlist.search.fuzzy import DEFAULT_THRESHOLD, highlight_fields, rank

T = TypeVar("T")

logger = get_logger(__name__)

Mode = Literal["paginate", "infinite"]


class ListView(Generic[T]):
    """Search and windowing state for one list screen."""

    def __init__(
        self,
        items: Sequence[T],
        extract_fields: Callable[[T], FieldValues],
        *,
        mode: Mode = "paginate",
        threshold: float = DEFAULT_THRESHOLD,
        predicate: Optional[Callable[[T], bool]] = None,
        paginator: Optional[Paginator] = None,
        loader: Optional[IncrementalLoader[T]] = None,
        page_size_options: Sequence[int] = (12, 24, 48, 96),
    ) -> None:
        if mode not in ("paginate", "infinite"):
            raise InvalidArgumentError(f"mode must be 'paginate' or 'infinite', got {mode!r}")
        self.mode = mode
        self.extract_fields = extract_fields
        self.threshold = threshold
        self.page_size_options = list(page_size_options)
        self._items: List[T] = list(items)
        self._predicate = predicate
        self._query = ""
        self._results: List[T] = []
        self.paginator: Optional[Paginator] = None
        self.loader: Optional[IncrementalLoader[T]] = None
        if mode == "paginate":
            self.paginator = paginator or Paginator()
        else:
            self.loader = loader or IncrementalLoader([])
        self._refresh()

    @classmethod
    def from_settings(
        cls,
        items: Sequence[T],
        extract_fields: Callable[[T], FieldValues],
        settings: Settings,
        *,
        mode: Mode = "paginate",
        predicate: Optional[Callable[[T], bool]] = None,
        scheduler: Optional[SettleScheduler] = None,
        visibility: Optional[VisibilitySource] = None,
    ) -> "ListView[T]":
        paginator = None
        loader = None
        if mode == "paginate":
            paginator = Paginator.from_options(PaginatorOptions.from_settings(settings))
        else:
            loader = IncrementalLoader.from_options(
                [],
                LoaderOptions.from_settings(settings),
                scheduler=scheduler,
                visibility=visibility,
            )
        return cls(
            items,
            extract_fields,
            mode=mode,
            threshold=settings.search.threshold,
            predicate=predicate,
            paginator=paginator,
            loader=loader,
            page_size_options=settings.pagination.page_size_options,
        )

    # ----- Inputs -----

    @property
    def query(self) -> str:
        return self._query

    def set_query(self, query: str) -> None:
        """Change the search text; the window restarts from the top."""
        self._query = query or ""
        self._refresh(restart=True)

    def set_predicate(self, predicate: Optional[Callable[[T], bool]]) -> None:
        """Apply (or clear) a non-text filter such as a membership status."""
        self._predicate = predicate
        self._refresh(restart=True)

    def set_page_size(self, size: int) -> None:
        """Switch to one of `page_size_options`; the paginator returns to page 1."""
        if size not in self.page_size_options:
            raise InvalidArgumentError(
                f"page size {size!r} is not one of {self.page_size_options}"
            )
        if self.paginator is None:
            raise InvalidArgumentError("set_page_size() needs a paginated view")
        self.paginator.set_page_size(size)

    def set_items(self, items: Sequence[T]) -> None:
        """Replace the underlying collection, e.g. after a refetch."""
        self._items = list(items)
        self._refresh()

    def _refresh(self, *, restart: bool = False) -> None:
        candidates = self._items
        if self._predicate is not None:
            candidates = [item for item in candidates if self._predicate(item)]
        self._results = rank(candidates, self._query, self.extract_fields, self.threshold)

        if self.paginator is not None:
            self.paginator.set_total_items(len(self._results))
            if restart:
                self.paginator.first_page()
        if self.loader is not None:
            self.loader.set_items(self._results)
            if restart:
                self.loader.reset()
        logger.debug("list_view_refreshed", query=self._query, results=len(self._results))

    # ----- Outputs -----

    @property
    def results(self) -> List[T]:
        """Every item passing the filter and query, best match first."""
        return list(self._results)

    @property
    def total(self) -> int:
        return len(self._results)

    @property
    def visible_items(self) -> List[T]:
        """The rows to render now: the current page, or the loaded prefix."""
        if self.paginator is not None:
            return self.paginator.paginate_data(self._results)
        if self.loader is None:
            return []
        return self.loader.displayed_items

    def highlighted(self, item: T) -> List[List[HighlightSpan]]:
        """Spans for each searchable field of `item` under the current query."""
        return highlight_fields(item, self._query, self.extract_fields)

    def close(self) -> None:
        """Release the loader's visibility subscription, if any."""
        if self.loader is not None:
            self.loader.close()

    def __enter__(self) -> "ListView[T]":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
