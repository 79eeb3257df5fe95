"""
list_filter.py — Filtering and lane grouping shared by every list page
Criteria are independent predicates ANDed together. Grouping always yields
every known lane, even when it is empty.
"""

from dataclasses import dataclass, field
from typing import Callable, Iterable

ALL = "All"
UNASSIGNED = "Unassigned"


@dataclass
class FilterCriteria:
    status: str = ALL
    # field name -> required value ("All" = no filter, "Unassigned" = empty)
    fields: dict[str, str] = field(default_factory=dict)
    search: str = ""


def _status_of(record) -> str:
    return record.status


def _field_matches(value, wanted: str) -> bool:
    if wanted == ALL:
        return True
    if wanted == UNASSIGNED:
        return not value
    return value == wanted


def filter_records(
    records: Iterable,
    criteria: FilterCriteria | None,
    search_fields: Iterable[str] = (),
    status_of: Callable = _status_of,
) -> list:
    records = list(records)
    if criteria is None:
        return records

    if criteria.status and criteria.status != ALL:
        records = [r for r in records if status_of(r) == criteria.status]

    for name, wanted in criteria.fields.items():
        if wanted is None:
            continue
        records = [r for r in records if _field_matches(getattr(r, name, ""), wanted)]

    q = (criteria.search or "").strip().lower()
    if q:
        search_fields = tuple(search_fields)
        records = [
            r for r in records
            if any(q in str(getattr(r, f, "") or "").lower() for f in search_fields)
        ]
    return records


def group_by_status(records: Iterable, status_domain: Iterable[str], status_of: Callable = _status_of) -> dict[str, list]:
    """Lanes keyed by status, in domain order. Empty lanes are kept."""
    lanes: dict[str, list] = {s: [] for s in status_domain}
    for r in records:
        lanes.setdefault(status_of(r), []).append(r)
    return lanes
