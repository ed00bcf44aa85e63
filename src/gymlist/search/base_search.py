"""Shared types for in-memory list search.

Items are opaque to the engine: every operation reaches into a record only
through a caller-supplied field extractor returning the searchable strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, List, Optional, Protocol, Sequence, TypeVar, Union

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)

FieldValues = Union[Optional[str], Sequence[Optional[str]]]


@dataclass(frozen=True, slots=True)
class MatchResult(Generic[T]):
    """An item paired with its effective score in [0, 1]."""

    item: T
    score: float


@dataclass(frozen=True, slots=True)
class HighlightSpan:
    """A slice of displayed text, marked when it is the matched part.

    A list of spans returned by the highlighter concatenates back to the
    original string exactly.
    """

    text: str
    highlighted: bool = False


class FieldExtractor(Protocol[T_contra]):
    """Returns the searchable string(s) of an item."""

    def __call__(self, item: T_contra) -> FieldValues: ...


def as_field_list(values: Any) -> List[str]:
    """Normalize an extractor's return value to a list of strings.

    A single string becomes a one-element list; ``None`` entries become ``""``
    so that missing fields simply score 0.
    """
    if values is None:
        return [""]
    if isinstance(values, str):
        return [values]
    return [v if isinstance(v, str) else ("" if v is None else str(v)) for v in values]
