"""gymlist: in-memory search, ranking, highlighting and pagination for list screens."""

from .exceptions import ConfigError, GymlistError, InvalidArgumentError
from .paging import IncrementalLoader, ManualVisibilitySource, Paginator
from .search import HighlightSpan, MatchResult, highlight, rank, rank_scored, score
from .view import ListView

__all__ = [
    "ConfigError",
    "GymlistError",
    "HighlightSpan",
    "IncrementalLoader",
    "InvalidArgumentError",
    "ListView",
    "ManualVisibilitySource",
    "MatchResult",
    "Paginator",
    "highlight",
    "rank",
    "rank_scored",
    "score",
]
