"""Filtros, orden y formato de la tabla de clientes."""

from datetime import date
from typing import Iterable, List, Optional, Sequence

from .schemas import ClientRecord

EVENT_TYPE_COLORS = {
    "wedding": "pink",
    "funeral": "gray",
    "corporate": "blue",
    "birthday": "orange",
    "anniversary": "gold",
    "other": "default",
}

STATUS_COLORS = {
    "prospect": "default",
    "quoted": "blue",
    "booked": "green",
    "completed": "success",
    "cancelled": "error",
}

SORT_KEYS = ("name", "eventDate", "budget")
PAGE_SIZES = (10, 20, 50, 100)
DEFAULT_PAGE_SIZE = 10

EPOCH = date(1970, 1, 1)


def filter_records(
    records: Iterable[ClientRecord],
    event_types: Sequence[str] = (),
    statuses: Sequence[str] = (),
) -> List[ClientRecord]:
    """Una selección vacía no filtra."""
    out = []
    for record in records:
        if event_types and record.event_type not in event_types:
            continue
        if statuses and record.status not in statuses:
            continue
        out.append(record)
    return out


def _sort_value(key: str):
    if key == "name":
        return lambda r: r.first_name.casefold()
    if key == "eventDate":
        return lambda r: r.event_date or EPOCH
    if key == "budget":
        return lambda r: r.budget or 0
    raise ValueError(f"Unknown sort key: {key}")


def sort_records(records: Iterable[ClientRecord], key: str, descending: bool = False) -> List[ClientRecord]:
    return sorted(records, key=_sort_value(key), reverse=descending)


def format_budget(budget: Optional[float]) -> str:
    if not budget:
        return "-"
    if float(budget).is_integer():
        return f"${int(budget):,}"
    return f"${budget:,.2f}"


def format_event_date(value: Optional[date]) -> str:
    if value is None:
        return "-"
    return value.strftime("%b %d, %Y")


def page_size_from(raw) -> int:
    try:
        size = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_PAGE_SIZE
    return size if size in PAGE_SIZES else DEFAULT_PAGE_SIZE
