"""Custom exception hierarchy for gymlist.

Degenerate input (empty strings, out-of-range pages, ineligible load
requests) is handled without raising. These exceptions cover arguments for
which no sensible result exists, such as a non-positive page size.
"""

from __future__ import annotations


class GymlistError(Exception):
    """Base class for all gymlist exceptions."""


class ConfigError(GymlistError):
    """Raised when configuration loading or validation fails."""


class InvalidArgumentError(GymlistError, ValueError):
    """Raised when an argument lies outside the documented domain (e.g. page size <= 0)."""
