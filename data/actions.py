"""Create, update and delete actions behind the management forms.

Every action validates its input, writes through the given store and reports
the outcome as an ActionResult. Store failures are logged and returned, not raised.
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from data.store import DataStore, StoreError
from data.records import clean_values
from data.validator import validate_record
from engine.suggestions import distinct_values, existing_developer_ids, next_prefixed_id, next_unit_numbers
from config.defaults import (
    BUILDING_ID_PREFIX, DEFAULT_PREMISES_CONDITION, DEFAULT_UNIT_STATUS, DEVELOPER_ID_PREFIX,
    TABLE_BUILDINGS, TABLE_DEVELOPERS, TABLE_FLOORS, TABLE_TENANTS,
    TABLE_UNITS, TABLE_VACANT_SPACES,
)

logger = logging.getLogger(__name__)

# Tables whose IDs are typed by the user and normalised to upper case
USER_KEYED_TABLES = {TABLE_DEVELOPERS, TABLE_BUILDINGS}

# Columns referencing those IDs, normalised the same way wherever they are written
USER_KEYED_REFERENCES = ("developer_id", "building_id")


@dataclass
class ActionResult:
    success: bool
    data: List[dict] = field(default_factory=list)
    error: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def record(self) -> Optional[dict]:
        return self.data[0] if self.data else None


def _failure(message: str) -> ActionResult:
    return ActionResult(success=False, error=message)


def _normalize_keys(table: str, row: Dict) -> Dict:
    keys = USER_KEYED_REFERENCES + ("id",) if table in USER_KEYED_TABLES else USER_KEYED_REFERENCES
    for key in keys:
        if row.get(key):
            row[key] = str(row[key]).upper()
    return row


def _prepare(table: str, values: Dict) -> Dict:
    row = _normalize_keys(table, clean_values(table, values))
    if table not in USER_KEYED_TABLES and table != TABLE_VACANT_SPACES and not row.get("id"):
        row["id"] = str(uuid.uuid4())
    return row


def create_records(store: DataStore, table: str, records: List[Dict], what: str) -> ActionResult:
    if not records:
        return _failure(f"No {what} provided")

    warnings = []
    rows = []
    for values in records:
        check = validate_record(table, values)
        if not check.is_valid:
            return ActionResult(success=False, error=" ".join(check.errors), warnings=check.warnings)
        warnings.extend(check.warnings)
        rows.append(_prepare(table, values))

    try:
        data = store.insert(table, rows)
    except StoreError as e:
        logger.error(f"Error creating {what}: {e}")
        return _failure(str(e))

    logger.info(f"Created {len(data)} {what}")
    return ActionResult(success=True, data=data, warnings=warnings)


def _update(store: DataStore, table: str, record_id: str, values: Dict, what: str) -> ActionResult:
    if not record_id:
        return _failure(f"{what.capitalize()} ID is required")
    if table in USER_KEYED_TABLES:
        record_id = str(record_id).upper()
    values = {k: v for k, v in values.items() if k != "id"}
    check = validate_record(table, values, partial=True)
    if not check.is_valid:
        return ActionResult(success=False, error=" ".join(check.errors))

    try:
        data = store.update(table, _normalize_keys(table, clean_values(table, values)), eq={"id": record_id})
    except StoreError as e:
        logger.error(f"Error updating {what} {record_id}: {e}")
        return _failure(str(e))

    if not data:
        return _failure(f"{what.capitalize()} {record_id} not found")
    return ActionResult(success=True, data=data)


def _delete_unit_children(store: DataStore, unit_ids: List[str]):
    if unit_ids:
        store.delete(TABLE_VACANT_SPACES, in_={"unit_id": unit_ids})
        store.delete(TABLE_TENANTS, in_={"unit_id": unit_ids})


def _delete_floor_children(store: DataStore, floor_ids: List[str]):
    if not floor_ids:
        return
    units = store.select(TABLE_UNITS, columns="id", in_={"floor_id": floor_ids})
    _delete_unit_children(store, [u["id"] for u in units])
    store.delete(TABLE_UNITS, in_={"floor_id": floor_ids})


# --- Developers ---

def create_developer(store: DataStore, values: Dict) -> ActionResult:
    return create_records(store, TABLE_DEVELOPERS, [values], "developer")


def update_developer(store: DataStore, developer_id: str, values: Dict) -> ActionResult:
    return _update(store, TABLE_DEVELOPERS, developer_id, values, "developer")


def delete_developer(store: DataStore, developer_id: str) -> ActionResult:
    """Refuses while buildings still reference the developer."""
    try:
        buildings = store.select(TABLE_BUILDINGS, columns="id", eq={"developer_id": developer_id})
        if buildings:
            return _failure(
                f"Cannot delete developer with ID {developer_id} because it has {len(buildings)} "
                "associated buildings. Please reassign or delete these buildings first."
            )
        store.delete(TABLE_DEVELOPERS, eq={"id": developer_id})
    except StoreError as e:
        logger.error(f"Error deleting developer {developer_id}: {e}")
        return _failure(str(e))
    return ActionResult(success=True)


# --- Buildings ---

def create_building(store: DataStore, values: Dict) -> ActionResult:
    return create_records(store, TABLE_BUILDINGS, [values], "building")


def update_building(store: DataStore, building_id: str, values: Dict) -> ActionResult:
    return _update(store, TABLE_BUILDINGS, building_id, values, "building")


def delete_building(store: DataStore, building_id: str) -> ActionResult:
    """Delete a building with its floors, units, tenants and vacant spaces."""
    try:
        floors = store.select(TABLE_FLOORS, columns="id", eq={"building_id": building_id})
        _delete_floor_children(store, [f["id"] for f in floors])
        store.delete(TABLE_FLOORS, eq={"building_id": building_id})
        store.delete(TABLE_BUILDINGS, eq={"id": building_id})
    except StoreError as e:
        logger.error(f"Error deleting building {building_id}: {e}")
        return _failure(str(e))
    logger.info(f"Deleted building {building_id} and {len(floors)} floors")
    return ActionResult(success=True)


# --- Floors ---

def create_floor(store: DataStore, values: Dict) -> ActionResult:
    return create_records(store, TABLE_FLOORS, [values], "floor")


def create_multiple_floors(store: DataStore, floors: List[Dict]) -> ActionResult:
    return create_records(store, TABLE_FLOORS, floors, "floors")


def update_floor(store: DataStore, floor_id: str, values: Dict) -> ActionResult:
    return _update(store, TABLE_FLOORS, floor_id, values, "floor")


def delete_floor(store: DataStore, floor_id: str) -> ActionResult:
    try:
        _delete_floor_children(store, [floor_id])
        store.delete(TABLE_FLOORS, eq={"id": floor_id})
    except StoreError as e:
        logger.error(f"Error deleting floor {floor_id}: {e}")
        return _failure(str(e))
    return ActionResult(success=True)


# --- Units ---

def create_unit(store: DataStore, values: Dict) -> ActionResult:
    return create_records(store, TABLE_UNITS, [values], "unit")


def create_multiple_units(
    store: DataStore,
    floor_id: str,
    count: int = 1,
    prefix: str = "",
    start: int = 1,
    chargeable_area: float = 0.0,
    carpet_area: float = 0.0,
    premises_condition: str = DEFAULT_PREMISES_CONDITION,
) -> ActionResult:
    """Create ``count`` vacant units numbered {prefix}{start}, {prefix}{start + 1}, ..."""
    if not floor_id:
        return _failure("Floor ID is required")
    if count < 1:
        return _failure("Unit count must be at least 1")
    units = [
        {
            "floor_id": floor_id,
            "unit_no": unit_no,
            "status": DEFAULT_UNIT_STATUS,
            "chargeable_area": chargeable_area,
            "carpet_area": carpet_area,
            "premises_condition": premises_condition or DEFAULT_PREMISES_CONDITION,
        }
        for unit_no in next_unit_numbers(prefix, start, count)
    ]
    logger.info(f"Creating {count} units for floor {floor_id} starting at {prefix}{start}")
    return create_records(store, TABLE_UNITS, units, "units")


def update_unit(store: DataStore, unit_id: str, values: Dict) -> ActionResult:
    return _update(store, TABLE_UNITS, unit_id, values, "unit")


def delete_unit(store: DataStore, unit_id: str) -> ActionResult:
    try:
        _delete_unit_children(store, [unit_id])
        store.delete(TABLE_UNITS, eq={"id": unit_id})
    except StoreError as e:
        logger.error(f"Error deleting unit {unit_id}: {e}")
        return _failure(str(e))
    return ActionResult(success=True)


# --- Tenants & vacant spaces ---

def create_tenant(store: DataStore, values: Dict) -> ActionResult:
    return create_records(store, TABLE_TENANTS, [values], "tenant")


def create_multiple_tenants(store: DataStore, tenants: List[Dict]) -> ActionResult:
    return create_records(store, TABLE_TENANTS, tenants, "tenants")


def update_tenant(store: DataStore, tenant_id: str, values: Dict) -> ActionResult:
    return _update(store, TABLE_TENANTS, tenant_id, values, "tenant")


def delete_tenant(store: DataStore, tenant_id: str) -> ActionResult:
    try:
        store.delete(TABLE_TENANTS, eq={"id": tenant_id})
    except StoreError as e:
        logger.error(f"Error deleting tenant {tenant_id}: {e}")
        return _failure(str(e))
    return ActionResult(success=True)


def record_vacancy(store: DataStore, values: Dict) -> ActionResult:
    """List a unit as available, replacing any earlier listing for it."""
    check = validate_record(TABLE_VACANT_SPACES, values)
    if not check.is_valid:
        return ActionResult(success=False, error=" ".join(check.errors))
    row = _prepare(TABLE_VACANT_SPACES, values)
    try:
        store.delete(TABLE_VACANT_SPACES, eq={"unit_id": row["unit_id"]})
        data = store.insert(TABLE_VACANT_SPACES, [row])
    except StoreError as e:
        logger.error(f"Error recording vacancy for unit {row['unit_id']}: {e}")
        return _failure(str(e))
    return ActionResult(success=True, data=data)


def clear_vacancy(store: DataStore, unit_id: str) -> ActionResult:
    try:
        removed = store.delete(TABLE_VACANT_SPACES, eq={"unit_id": unit_id})
    except StoreError as e:
        logger.error(f"Error clearing vacancy for unit {unit_id}: {e}")
        return _failure(str(e))
    return ActionResult(success=True, data=removed)


# --- Suggestions ---

def suggest_building_id(store: DataStore) -> str:
    try:
        rows = store.select(TABLE_BUILDINGS, columns="id", order="id", desc=True)
    except StoreError as e:
        logger.error(f"Error fetching building IDs: {e}")
        return f"{BUILDING_ID_PREFIX}1"
    return next_prefixed_id([r["id"] for r in rows], BUILDING_ID_PREFIX)


def suggest_developer_id(store: DataStore) -> str:
    try:
        rows = store.select(TABLE_DEVELOPERS, columns="id", order="id", desc=True)
    except StoreError as e:
        logger.error(f"Error fetching developer IDs: {e}")
        return f"{DEVELOPER_ID_PREFIX}1"
    return next_prefixed_id([r["id"] for r in rows], DEVELOPER_ID_PREFIX)


def building_pick_lists(store: DataStore) -> Dict[str, List[str]]:
    """Existing developer IDs, locations, micromarket zones and certifications for form pick lists."""
    try:
        rows = store.select(
            TABLE_BUILDINGS, columns="developer_id, location, micromarket_zone, certifications",
        )
    except StoreError as e:
        logger.error(f"Error fetching building pick lists: {e}")
        rows = []
    return {
        "developer_ids": existing_developer_ids(rows),
        "locations": distinct_values(rows, "location"),
        "micromarket_zones": distinct_values(rows, "micromarket_zone"),
        "certifications": distinct_values(rows, "certifications"),
    }
