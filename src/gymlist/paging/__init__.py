"""Windowing over result lists: page-indexed pagination and incremental loading."""

from .loader import IncrementalLoader, LoaderOptions, LoaderState, WindowState
from .paginator import PaginationState, Paginator, PaginatorOptions
from .scheduler import AsyncIOSettleScheduler, ImmediateScheduler, SettleScheduler
from .visibility import ManualVisibilitySource, Subscription, VisibilitySource

__all__ = [
    "AsyncIOSettleScheduler",
    "ImmediateScheduler",
    "IncrementalLoader",
    "LoaderOptions",
    "LoaderState",
    "ManualVisibilitySource",
    "PaginationState",
    "Paginator",
    "PaginatorOptions",
    "SettleScheduler",
    "Subscription",
    "VisibilitySource",
    "WindowState",
]
