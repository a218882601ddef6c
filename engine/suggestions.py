"""Suggested IDs and pick-list values for the create forms."""

from typing import Iterable, List, Optional

from config.defaults import BUILDING_ID_PREFIX, DEFAULT_DEVELOPER_IDS


def next_prefixed_id(existing_ids: Iterable, prefix: str = BUILDING_ID_PREFIX) -> str:
    """Next ID after the highest '{prefix}{n}' among existing IDs, e.g. B7 -> B8."""
    highest = 0
    for raw in existing_ids:
        value = str(raw)
        if not value.startswith(prefix):
            continue
        suffix = value[len(prefix):]
        if suffix.isdigit():
            highest = max(highest, int(suffix))
    return f"{prefix}{highest + 1}"


def distinct_values(rows: Iterable[dict], field: str, upper: bool = False) -> List[str]:
    """Sorted distinct non-empty values of one column."""
    values = set()
    for row in rows:
        value = row.get(field)
        if value is None or value == "":
            continue
        value = str(value)
        values.add(value.upper() if upper else value)
    return sorted(values)


def existing_developer_ids(rows: Iterable[dict], fallback: Optional[List[str]] = None) -> List[str]:
    ids = distinct_values(rows, "developer_id", upper=True)
    return ids or list(fallback or DEFAULT_DEVELOPER_IDS)


def next_unit_numbers(prefix: str, start: int, count: int) -> List[str]:
    return [f"{prefix}{start + i}" for i in range(count)]
