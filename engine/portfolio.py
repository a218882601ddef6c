"""Directory-level availability summaries, search filters, sorting and paging."""

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from models.building import Building
from models.unit import Unit, VacantSpace
from models.occupancy import AvailabilitySummary
from engine.occupancy import as_number
from config.defaults import DIRECTORY_PAGE_SIZE


@dataclass
class BuildingEntry:
    building: Building
    availability: AvailabilitySummary = field(default_factory=AvailabilitySummary)


@dataclass
class BuildingFilters:
    name: str = ""
    locations: List[str] = field(default_factory=list)
    min_area: Optional[float] = None
    max_area: Optional[float] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        return (not self.name and not self.locations
                and self.min_area is None and self.max_area is None
                and self.min_price is None and self.max_price is None)


def summarize_availability(units: List[Unit], vacant_spaces: List[VacantSpace]) -> AvailabilitySummary:
    """Vacant area, vacant unit count and mean quoted rent for one building.

    The mean is a simple average over vacant-space rows, unlike the
    area-weighted rent shown on the building detail page.
    """
    vacant_ids = {vs.unit_id for vs in vacant_spaces}
    available = [u for u in units if u.id in vacant_ids]
    total_area = sum(as_number(u.chargeable_area) for u in available)
    total_rent = sum(as_number(vs.quoted_rent) for vs in vacant_spaces)
    count = len(available)
    return AvailabilitySummary(
        total_available_area=total_area,
        available_units_count=count,
        average_rent=total_rent / count if count > 0 else 0.0,
        available_unit_areas=[u.chargeable_area for u in available],
    )


def summarize_portfolio(
    buildings: List[Building],
    floors,
    units: List[Unit],
    vacant_spaces: List[VacantSpace],
) -> List[BuildingEntry]:
    """Attach an availability summary to every building from portfolio-wide row lists."""
    floor_building = {f.id: f.building_id for f in floors}
    units_by_building = {}
    unit_building = {}
    for unit in units:
        building_id = floor_building.get(unit.floor_id)
        if building_id is None:
            continue
        units_by_building.setdefault(building_id, []).append(unit)
        unit_building[unit.id] = building_id

    spaces_by_building = {}
    for space in vacant_spaces:
        building_id = unit_building.get(space.unit_id)
        if building_id is not None:
            spaces_by_building.setdefault(building_id, []).append(space)

    return [
        BuildingEntry(
            building=b,
            availability=summarize_availability(
                units_by_building.get(b.id, []), spaces_by_building.get(b.id, []),
            ),
        )
        for b in buildings
    ]


def filter_buildings(entries: Iterable[BuildingEntry], filters: BuildingFilters) -> List[BuildingEntry]:
    """Apply the directory search filters. All numeric bounds are inclusive."""
    result = list(entries)

    if filters.name:
        needle = filters.name.lower()
        result = [e for e in result if needle in (e.building.name or "").lower()]

    if filters.locations:
        wanted = set(filters.locations)
        result = [e for e in result if e.building.location in wanted]

    if filters.min_area is not None or filters.max_area is not None:
        low = filters.min_area if filters.min_area is not None else 0.0
        high = filters.max_area if filters.max_area is not None else math.inf
        result = [e for e in result
                  if low <= e.availability.total_available_area <= high]

    if filters.min_price is not None:
        result = [e for e in result if e.availability.average_rent >= filters.min_price]

    if filters.max_price is not None:
        result = [e for e in result if e.availability.average_rent <= filters.max_price]

    return result


def sort_buildings(entries: List[BuildingEntry], order: str = "default") -> List[BuildingEntry]:
    if order == "price-asc":
        return sorted(entries, key=lambda e: e.availability.average_rent)
    if order == "price-desc":
        return sorted(entries, key=lambda e: e.availability.average_rent, reverse=True)
    if order != "default":
        raise ValueError(f"Unknown sort order: {order}")
    return list(entries)


def paginate(entries: List, page: int, page_size: int = DIRECTORY_PAGE_SIZE) -> Tuple[List, int, int]:
    """Return (items on page, clamped page number, total pages). Pages are 1-based."""
    total_pages = max(1, math.ceil(len(entries) / page_size))
    page = min(max(1, page), total_pages)
    start = (page - 1) * page_size
    return entries[start:start + page_size], page, total_pages


def unique_locations(buildings: List[Building]) -> List[str]:
    return sorted({b.location for b in buildings if b.location})
