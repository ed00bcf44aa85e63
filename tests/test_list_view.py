from typing import Any, Dict, List

import pytest

from gymlist.config import Settings
from gymlist.exceptions import InvalidArgumentError
from gymlist.paging.scheduler import ImmediateScheduler
from gymlist.paging.visibility import ManualVisibilitySource
from gymlist.search.base_search import HighlightSpan
from gymlist.search.extractors import member_fields
from gymlist.view import ListView


def _member(i: int, name: str, status: str = "active") -> Dict[str, Any]:
    return {"id": i, "name": name, "phone": f"555-{i:04d}", "email": None, "status": status}


def _roster(n: int) -> List[Dict[str, Any]]:
    return [_member(i, f"Member {i:02d}", "active" if i % 2 else "expired") for i in range(n)]


def _ids(rows: List[Dict[str, Any]]) -> List[int]:
    return [r["id"] for r in rows]


# ---------- Paginated mode ----------


def test_paginated_view_without_query_shows_first_page() -> None:
    view = ListView(_roster(30), member_fields)
    assert view.total == 30
    assert _ids(view.visible_items) == list(range(12))
    assert view.paginator is not None
    assert view.paginator.total_pages == 3


def test_query_ranks_and_returns_to_first_page() -> None:
    rows = [
        _member(101, "Alice Smith"),
        _member(102, "Bob Jones"),
        _member(103, "Alicia Stone"),
    ] + _roster(30)
    view = ListView(rows, member_fields)
    assert view.paginator is not None
    view.paginator.last_page()

    view.set_query("alic")
    assert _ids(view.results) == [101, 103]
    assert view.paginator.current_page == 1
    assert view.paginator.total_pages == 1
    assert _ids(view.visible_items) == [101, 103]


def test_predicate_filters_before_ranking() -> None:
    view = ListView(_roster(30), member_fields)
    view.set_predicate(lambda r: r["status"] == "expired")
    assert view.total == 15
    assert all(r["status"] == "expired" for r in view.results)

    view.set_query("Member 1")
    assert _ids(view.results) == [10, 12, 14, 16, 18]

    view.set_predicate(None)
    # contains-matches first, then the "Member 01" and "Member 21" subsequence matches
    assert _ids(view.results) == list(range(10, 20)) + [1, 21]


def test_replacing_items_keeps_page_in_range() -> None:
    view = ListView(_roster(30), member_fields)
    assert view.paginator is not None
    view.paginator.last_page()
    view.set_items(_roster(14))
    assert view.paginator.current_page == 2
    assert _ids(view.visible_items) == [12, 13]


def test_highlighted_fields_follow_query() -> None:
    row = _member(7, "Alice Smith")
    view = ListView([row], member_fields)
    assert view.highlighted(row)[0] == [HighlightSpan("Alice Smith", False)]

    view.set_query("smith")
    spans = view.highlighted(row)
    assert spans[0] == [HighlightSpan("Alice ", False), HighlightSpan("Smith", True)]
    assert spans[2] == [HighlightSpan("", False)]


def test_unknown_mode_is_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        ListView([], member_fields, mode="carousel")  # type: ignore[arg-type]


# ---------- Infinite mode ----------


def test_infinite_view_grows_on_visibility_and_resets_on_query() -> None:
    source = ManualVisibilitySource()
    settings = Settings(loader={"settle_delay_ms": 0})
    view = ListView.from_settings(
        _roster(30),
        member_fields,
        settings,
        mode="infinite",
        scheduler=ImmediateScheduler(),
        visibility=source,
    )
    assert view.loader is not None
    view.loader.observe("sentinel")

    assert len(view.visible_items) == 12
    source.fire("sentinel")
    assert len(view.visible_items) == 24

    view.set_query("Member 2")
    assert _ids(view.visible_items) == list(range(20, 30)) + [2, 12]
    assert view.loader.has_more is False

    view.close()
    assert source.active_subscriptions == 0


def test_from_settings_applies_configuration() -> None:
    settings = Settings(
        search={"threshold": 0.85},
        pagination={"initial_page_size": 24, "page_size_options": [24, 48]},
    )
    rows = [_member(1, "a-l-i-x"), _member(2, "Alix")]
    with ListView.from_settings(rows, member_fields, settings) as view:
        view.set_query("alix")
        assert _ids(view.results) == [2]
        assert view.paginator is not None
        assert view.paginator.page_size == 24
        assert view.page_size_options == [24, 48]


# ---------- Page size selector ----------


def test_set_page_size_accepts_configured_option_and_resets_page() -> None:
    view = ListView(_roster(100), member_fields)
    assert view.paginator is not None
    view.paginator.last_page()

    view.set_page_size(48)
    assert view.paginator.page_size == 48
    assert view.paginator.current_page == 1
    assert view.paginator.total_pages == 3
    assert len(view.visible_items) == 48


def test_set_page_size_rejects_unlisted_size() -> None:
    view = ListView(_roster(30), member_fields, page_size_options=[12, 24])
    assert view.paginator is not None
    view.paginator.next_page()

    with pytest.raises(InvalidArgumentError):
        view.set_page_size(10)
    assert view.paginator.page_size == 12
    assert view.paginator.current_page == 2


def test_set_page_size_needs_paginated_view() -> None:
    view = ListView(_roster(30), member_fields, mode="infinite")
    with pytest.raises(InvalidArgumentError):
        view.set_page_size(12)
