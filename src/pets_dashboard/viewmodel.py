"""
Pure derivations over a fetched animal list.

- filter_animals: apply the dashboard's search text + type selector
- summarize: totals, average age bracket, per-type and per-age counts
- type_options / chart_series: shapes the templates and charts consume
- describe_animal: display fields for the detail page

Statistics always cover the full list, not the filtered one; the dashboard
summary describes the whole dataset while the list below it follows the filter.
"""
from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .models import Animal, ChartPoint, DashboardStats, FilterState
from .utils import age_value, bracket_label, contains_ci, dig, pluralize

ALL_TYPES = "all"


def make_filter(search: Optional[str] = None, type_filter: Optional[str] = None) -> FilterState:
    return {"search": search or "", "type": type_filter or ALL_TYPES}


def matches_search(animal: Animal, query: str) -> bool:
    return (
        contains_ci(animal.get("name"), query)
        or contains_ci(animal.get("description"), query)
        or contains_ci(dig(animal, "breeds", "primary"), query)
    )


def matches_type(animal: Animal, type_filter: str) -> bool:
    if type_filter == ALL_TYPES:
        return True
    kind = animal.get("type")
    return isinstance(kind, str) and kind.lower() == type_filter.lower()


def filter_animals(animals: Sequence[Animal], search: str = "", type_filter: str = ALL_TYPES) -> List[Animal]:
    """
    Keep animals whose type matches `type_filter` (case-insensitive, "all" keeps
    everything) and, when `search` is non-empty, whose name, description or
    primary breed contains it (case-insensitive). Order is preserved.
    """
    return [
        a for a in animals
        if matches_type(a, type_filter) and (not search or matches_search(a, search))
    ]


def apply_filter(animals: Sequence[Animal], state: FilterState) -> List[Animal]:
    return filter_animals(animals, state["search"], state["type"])


def summarize(animals: Sequence[Animal]) -> DashboardStats:
    """
    Aggregate statistics over the full list.
    average_age is NaN when the list is empty; its label is then None.
    """
    total = len(animals)
    age_sum = sum(age_value(a.get("age")) for a in animals)
    average = age_sum / total if total else float("nan")

    type_counts: Dict[str, int] = {}
    age_counts: Dict[str, int] = {}
    for a in animals:
        kind = a.get("type")
        type_counts[kind] = type_counts.get(kind, 0) + 1  # type: ignore[index]
        age = a.get("age")
        age_counts[age] = age_counts.get(age, 0) + 1  # type: ignore[index]

    return {
        "total": total,
        "average_age": average,
        "average_age_label": bracket_label(average),
        "types": list(type_counts),
        "type_counts": type_counts,
        "age_counts": age_counts,
    }


def type_options(stats: DashboardStats) -> List[Tuple[str, int]]:
    """(type, count) pairs for the type selector, in first-seen order."""
    return [(t, stats["type_counts"][t]) for t in stats["types"]]


def chart_series(counts: Mapping[Any, int]) -> List[ChartPoint]:
    return [{"name": str(name), "value": count} for name, count in counts.items()]


def location_line(animal: Animal) -> Optional[str]:
    parts = [dig(animal, "contact", "address", k) for k in ("city", "state")]
    parts = [p for p in parts if p]
    return ", ".join(parts) or None


def describe_animal(animal: Animal) -> Dict[str, Any]:
    """
    Flatten an animal into what the detail page shows. Optional fields
    (secondary breed/colour, phone, description, photos) come back as None or
    empty and the template skips them.
    """
    photos = [p.get("large") for p in (animal.get("photos") or []) if p.get("large")]
    return {
        "id": animal.get("id"),
        "name": animal.get("name") or "",
        "status": animal.get("status"),
        "description": animal.get("description") or None,
        "breed": dig(animal, "breeds", "primary"),
        "mixed_with": dig(animal, "breeds", "secondary") or None,
        "color": dig(animal, "colors", "primary"),
        "secondary_color": dig(animal, "colors", "secondary") or None,
        "age": animal.get("age"),
        "size": animal.get("size"),
        "gender": animal.get("gender"),
        "photos": photos,
        "photo_caption": pluralize(len(photos), "photo"),
        "tags": list(animal.get("tags") or []),
        "email": dig(animal, "contact", "email"),
        "phone": dig(animal, "contact", "phone") or None,
        "location": location_line(animal),
    }
