"""Read-side queries: one building's snapshot and the portfolio directory."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List

from data.store import DataStore
from data.records import parse_records
from models.building import Building, Developer
from models.floor import Floor
from models.unit import Unit, VacantSpace
from models.tenant import Tenant
from engine.portfolio import BuildingEntry, summarize_portfolio
from config.defaults import (
    TABLE_BUILDINGS, TABLE_DEVELOPERS, TABLE_FLOORS, TABLE_TENANTS,
    TABLE_UNITS, TABLE_VACANT_SPACES,
)

logger = logging.getLogger(__name__)


@dataclass
class BuildingSnapshot:
    """Point-in-time rows for one building, restricted to its own floors and units."""
    building: Building
    floors: List[Floor] = field(default_factory=list)
    units: List[Unit] = field(default_factory=list)
    vacant_spaces: List[VacantSpace] = field(default_factory=list)
    tenants: List[Tenant] = field(default_factory=list)

    @property
    def vacant_unit_ids(self) -> set:
        return {vs.unit_id for vs in self.vacant_spaces}


def fetch_building(store: DataStore, building_id: str) -> Building:
    """Raises NotFoundError when the building does not exist."""
    row = store.select_one(TABLE_BUILDINGS, eq={"id": building_id})
    return parse_records(TABLE_BUILDINGS, [row])[0]


def fetch_building_snapshot(store: DataStore, building_id: str) -> BuildingSnapshot:
    """Load a building with its floors, units, vacant spaces and tenants.

    Vacant spaces and tenants are read concurrently once the unit IDs are known.
    """
    building = fetch_building(store, building_id)

    floor_rows = store.select(TABLE_FLOORS, eq={"building_id": building.id}, order="floor_no")
    floors = parse_records(TABLE_FLOORS, floor_rows)
    floor_ids = [f.id for f in floors]

    if not floor_ids:
        return BuildingSnapshot(building=building, floors=floors)

    units = parse_records(TABLE_UNITS, store.select(TABLE_UNITS, in_={"floor_id": floor_ids}))
    unit_ids = [u.id for u in units]

    if not unit_ids:
        return BuildingSnapshot(building=building, floors=floors, units=units)

    with ThreadPoolExecutor(max_workers=2) as pool:
        vacant_future = pool.submit(store.select, TABLE_VACANT_SPACES, in_={"unit_id": unit_ids})
        tenant_future = pool.submit(store.select, TABLE_TENANTS, in_={"unit_id": unit_ids})
        vacant_rows = vacant_future.result()
        tenant_rows = tenant_future.result()

    logger.debug(
        f"Snapshot {building.id}: {len(floors)} floors, {len(units)} units, "
        f"{len(vacant_rows)} vacant, {len(tenant_rows)} tenants"
    )
    return BuildingSnapshot(
        building=building,
        floors=floors,
        units=units,
        vacant_spaces=parse_records(TABLE_VACANT_SPACES, vacant_rows),
        tenants=parse_records(TABLE_TENANTS, tenant_rows),
    )


def fetch_portfolio(store: DataStore) -> List[BuildingEntry]:
    """Every building with its availability summary, using one read per table."""
    with ThreadPoolExecutor(max_workers=4) as pool:
        futures = {
            table: pool.submit(store.select, table, order=order)
            for table, order in [
                (TABLE_BUILDINGS, "name"),
                (TABLE_FLOORS, None),
                (TABLE_UNITS, None),
                (TABLE_VACANT_SPACES, None),
            ]
        }
        rows = {table: f.result() for table, f in futures.items()}

    return summarize_portfolio(
        parse_records(TABLE_BUILDINGS, rows[TABLE_BUILDINGS]),
        parse_records(TABLE_FLOORS, rows[TABLE_FLOORS]),
        parse_records(TABLE_UNITS, rows[TABLE_UNITS]),
        parse_records(TABLE_VACANT_SPACES, rows[TABLE_VACANT_SPACES]),
    )


def list_developers(store: DataStore) -> List[Developer]:
    return parse_records(TABLE_DEVELOPERS, store.select(TABLE_DEVELOPERS, order="name"))


def list_buildings(store: DataStore) -> List[Building]:
    return parse_records(TABLE_BUILDINGS, store.select(TABLE_BUILDINGS, order="name"))


def list_floors(store: DataStore, building_id: str) -> List[Floor]:
    return parse_records(
        TABLE_FLOORS, store.select(TABLE_FLOORS, eq={"building_id": building_id}, order="floor_no"),
    )


def list_units(store: DataStore, floor_id: str, status: str = None) -> List[Unit]:
    eq = {"floor_id": floor_id}
    if status:
        eq["status"] = status
    return parse_records(TABLE_UNITS, store.select(TABLE_UNITS, eq=eq, order="unit_no"))


def list_tenants(store: DataStore, unit_ids: List[str]) -> List[Tenant]:
    return parse_records(TABLE_TENANTS, store.select(TABLE_TENANTS, in_={"unit_id": unit_ids}))


def list_vacant_spaces(store: DataStore, unit_ids: List[str]) -> List[VacantSpace]:
    return parse_records(TABLE_VACANT_SPACES, store.select(TABLE_VACANT_SPACES, in_={"unit_id": unit_ids}))
