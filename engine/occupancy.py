"""Per-floor occupancy report, weighted rent and efficiency formatting for the building detail page."""

import math
from typing import Dict, List, Optional

from models.floor import Floor
from models.unit import Unit, VacantSpace
from models.tenant import Tenant
from models.occupancy import (
    AvailableSpace, AvailableUnit, FloorOccupancy, OccupiedSpace, OccupiedTenant,
)
from config.defaults import MISSING_DISPLAY, UNKNOWN_TENANT


def as_number(value) -> float:
    """Coerce a possibly missing or malformed numeric field to a float, 0 when unusable."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return 0.0 if math.isnan(value) else float(value)
    try:
        number = float(str(value).strip())
    except ValueError:
        return 0.0
    return 0.0 if math.isnan(number) else number


def index_by_unit(rows) -> Dict[str, object]:
    """Map unit_id to its row. Later rows win on collision."""
    return {row.unit_id: row for row in rows}


def group_units_by_floor(units: List[Unit]) -> Dict[str, List[Unit]]:
    by_floor: Dict[str, List[Unit]] = {}
    for unit in units:
        by_floor.setdefault(unit.floor_id, []).append(unit)
    return by_floor


def process_floor_data(
    floors: List[Floor],
    units: List[Unit],
    vacant_spaces: List[VacantSpace],
    tenants: List[Tenant],
) -> List[FloorOccupancy]:
    """Group a building's floor records by floor number with available and occupied space.

    A unit with a vacant-space row is available, otherwise a unit with a tenant
    row is occupied. Units with neither row are only counted in ``other_units``.
    Floor records without a floor number are skipped. Groups are returned
    highest floor first.
    """
    vacant_by_unit = index_by_unit(vacant_spaces)
    tenant_by_unit = index_by_unit(tenants)
    units_by_floor = group_units_by_floor(units)

    groups: Dict[float, FloorOccupancy] = {}

    for floor in floors:
        if floor.floor_no is None:
            continue

        floor_units = units_by_floor.get(floor.id, [])
        available_units = [u for u in floor_units if u.id in vacant_by_unit]
        occupied_units = [u for u in floor_units
                          if u.id not in vacant_by_unit and u.id in tenant_by_unit]
        other_count = len(floor_units) - len(available_units) - len(occupied_units)

        available_area = sum(as_number(u.chargeable_area) for u in available_units)

        available_details = []
        for unit in available_units:
            space = vacant_by_unit.get(unit.id)
            available_details.append(AvailableUnit(
                unit_no=unit.unit_no,
                area=unit.chargeable_area,
                quoted_rent=space.quoted_rent if space else None,
                availability_date=space.availability_date if space else None,
                handover_condition=space.handover_condition if space else None,
            ))

        occupied_details = []
        for unit in occupied_units:
            tenant = tenant_by_unit.get(unit.id)
            occupied_details.append(OccupiedTenant(
                name=(tenant.name if tenant else None) or UNKNOWN_TENANT,
                unit_no=unit.unit_no,
                area=unit.chargeable_area,
                current_rent=as_number(tenant.current_rent) if tenant else 0.0,
            ))

        group = groups.get(floor.floor_no)
        if group is None:
            groups[floor.floor_no] = FloorOccupancy(
                floor_no=floor.floor_no,
                floor_plate=floor.floor_plate,
                units=[floor.no_of_units],
                efficiency=floor.efficiency,
                type_of_space=floor.type_of_space,
                available_space=AvailableSpace(total_area=available_area, units=available_details),
                occupied_space=OccupiedSpace(tenants=occupied_details),
                other_units=other_count,
            )
        else:
            group.units.append(floor.no_of_units)
            group.available_space.total_area += available_area
            group.available_space.units.extend(available_details)
            group.occupied_space.tenants.extend(occupied_details)
            group.other_units += other_count

    return sorted(groups.values(), key=lambda g: g.floor_no, reverse=True)


def calculate_average_rent(processed_floors: List[FloorOccupancy]) -> float:
    """Area-weighted quoted rent over available units. Returns 0.0 when no unit has rent and area."""
    weighted_rent = 0.0
    total_area = 0.0

    for floor in processed_floors:
        for unit in floor.available_space.units:
            rent = as_number(unit.quoted_rent)
            area = as_number(unit.area)
            if rent and area:
                weighted_rent += rent * area
                total_area += area

    return weighted_rent / total_area if total_area > 0 else 0.0


def total_available_area(processed_floors: List[FloorOccupancy]) -> float:
    return sum(f.available_space.total_area for f in processed_floors)


def normalize_efficiency(efficiency) -> Optional[float]:
    """Efficiency as a percentage. Values below 1 are treated as ratios."""
    if efficiency is None or isinstance(efficiency, bool):
        return None
    try:
        value = float(efficiency)
    except (TypeError, ValueError):
        return None
    if math.isnan(value):
        return None
    return value * 100 if value < 1 else value


def format_efficiency(efficiency) -> str:
    """Format a stored efficiency as a whole percentage, e.g. 0.75 -> '75%'."""
    percentage = normalize_efficiency(efficiency)
    if percentage is None:
        return MISSING_DISPLAY
    # half-up, so 82.5 -> 83
    return f"{math.floor(percentage + 0.5)}%"
