"""Field extractors for the list screens.

An extractor turns an application record into the strings the ranker scores.
Records arrive either as mappings (rows from the data service) or as objects
with attributes, and nested values are addressed with dotted paths such as
``"member.name"``.
"""

from __future__ import annotations

from typing import Any, Callable, List, Mapping

from gymlist.exceptions import InvalidArgumentError


def _lookup(record: Any, path: str) -> Any:
    value = record
    for part in path.split("."):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


def fields(*paths: str) -> Callable[[Any], List[str]]:
    """Build an extractor returning the values at `paths`, in order.

    Missing or ``None`` values come back as ``""``; non-string values are
    converted with ``str()`` so phone numbers stored as integers still match.
    """
    if not paths:
        raise InvalidArgumentError("fields() needs at least one path")

    def extract(record: Any) -> List[str]:
        out: List[str] = []
        for path in paths:
            value = _lookup(record, path)
            out.append("" if value is None else str(value))
        return out

    extract.__name__ = "extract_" + "_".join(p.replace(".", "_") for p in paths)
    return extract


# Searchable fields of the records shown on each screen
member_fields = fields("name", "phone", "email")
lead_fields = fields("name", "phone", "email")
staff_fields = fields("name", "email", "phone")
payment_fields = fields("member.name", "invoice_number")
attendance_fields = fields("name", "phone")
