"""Fuzzy search over in-memory lists: scoring, ranking and highlighting."""

from .base_search import FieldExtractor, HighlightSpan, MatchResult, as_field_list
from .fuzzy import highlight, highlight_fields, rank, rank_scored, score

__all__ = [
    "FieldExtractor",
    "HighlightSpan",
    "MatchResult",
    "as_field_list",
    "highlight",
    "highlight_fields",
    "rank",
    "rank_scored",
    "score",
]
