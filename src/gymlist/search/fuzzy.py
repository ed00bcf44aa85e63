"""Fuzzy scoring, ranking and match highlighting over in-memory lists.

Everything here is a pure function: no index is built and nothing is cached,
so a list can be re-ranked on every keystroke. Matching is substring or
in-order subsequence on case-folded text, nothing more.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Sequence, TypeVar

from gymlist.exceptions import InvalidArgumentError
from gymlist.logging import get_logger
from gymlist.search.base_search import FieldValues, HighlightSpan, MatchResult, as_field_list

T = TypeVar("T")

logger = get_logger(__name__)

EXACT_SCORE = 1.0
CONTAINS_SCORE = 0.9
SUBSEQUENCE_CAP = 0.8
STREAK_BONUS = 0.5
DEFAULT_THRESHOLD = 0.3


def _fold(value: str) -> str:
    # Lowercase per character, keeping the length so offsets map back to the
    # original string (e.g. "İ".lower() is two code points).
    return "".join(
        low if len(low) == 1 else ch for ch, low in ((ch, ch.lower()) for ch in value)
    )


def score(pattern: str, text: str) -> float:
    """Return a similarity score in [0, 1] for `pattern` against `text`.

    1.0 for a case-insensitive exact match, 0.9 when `text` contains
    `pattern`, otherwise a subsequence score capped at 0.8 that rewards
    consecutive runs of matched characters. 0.0 when either side is empty or
    `pattern` is not a subsequence of `text`.
    """
    if not pattern or not text:
        return 0.0

    pattern = _fold(pattern)
    text = _fold(text)

    if text == pattern:
        return EXACT_SCORE
    if pattern in text:
        return CONTAINS_SCORE

    pattern_idx = 0
    streak = 0
    total = 0.0
    for ch in text:
        if pattern_idx == len(pattern):
            break
        if ch == pattern[pattern_idx]:
            total += 1 + streak * STREAK_BONUS
            streak += 1
            pattern_idx += 1
        else:
            streak = 0

    if pattern_idx < len(pattern):
        return 0.0

    max_score = len(pattern) + (len(pattern) - 1) * STREAK_BONUS
    return min(SUBSEQUENCE_CAP, total / max_score)


def best_score(query: str, fields: Iterable[str]) -> float:
    """Highest `score` of `query` across `fields` (0.0 when there are none)."""
    return max((score(query, f or "") for f in fields), default=0.0)


def _check_threshold(threshold: float) -> None:
    if not 0.0 <= threshold <= 1.0:
        raise InvalidArgumentError(f"threshold must be within [0, 1], got {threshold!r}")


def rank_scored(
    items: Sequence[T],
    query: str,
    extract_fields: Callable[[T], FieldValues],
    threshold: float = DEFAULT_THRESHOLD,
) -> List[MatchResult[T]]:
    """Score, filter and order `items` for `query`, keeping the scores.

    An empty or whitespace-only query returns every item in input order with
    a score of 0.0. Otherwise items scoring below `threshold` on all of their
    fields are dropped and the rest are sorted by descending score; equal
    scores keep their input order.
    """
    _check_threshold(threshold)
    if not query or not query.strip():
        return [MatchResult(item, 0.0) for item in items]

    scored = [
        MatchResult(item, best_score(query, as_field_list(extract_fields(item))))
        for item in items
    ]
    kept = [m for m in scored if m.score >= threshold]
    # sorted() is stable, which is what keeps ties in input order
    kept = sorted(kept, key=lambda m: m.score, reverse=True)
    logger.debug("rank", query=query, total=len(scored), kept=len(kept), threshold=threshold)
    return kept


def rank(
    items: Sequence[T],
    query: str,
    extract_fields: Callable[[T], FieldValues],
    threshold: float = DEFAULT_THRESHOLD,
) -> List[T]:
    """Return the items of `items` matching `query`, best match first.

    See `rank_scored` for the filtering and ordering rules. The input
    sequence is never modified.
    """
    return [m.item for m in rank_scored(items, query, extract_fields, threshold)]


def highlight(text: str, query: str) -> List[HighlightSpan]:
    """Split `text` into spans marking the first case-insensitive match of `query`."""
    if not query or not text:
        return [HighlightSpan(text or "", False)]

    index = _fold(text).find(_fold(query))
    if index == -1:
        return [HighlightSpan(text, False)]

    end = index + len(query)
    spans: List[HighlightSpan] = []
    if index > 0:
        spans.append(HighlightSpan(text[:index], False))
    spans.append(HighlightSpan(text[index:end], True))
    if end < len(text):
        spans.append(HighlightSpan(text[end:], False))
    return spans


def highlight_fields(
    item: T,
    query: str,
    extract_fields: Callable[[T], FieldValues],
) -> List[List[HighlightSpan]]:
    """Highlight every searchable field of `item`, one span list per field."""
    return [highlight(text, query) for text in as_field_list(extract_fields(item))]
