"""Raw store rows to typed records, with per-field defaults from FIELD_DEFAULTS."""

import dataclasses
import math
from typing import Any, Dict, List, Optional, Type

from models.building import Building, Developer
from models.floor import Floor
from models.unit import Unit, VacantSpace
from models.tenant import Tenant
from config.defaults import (
    FIELD_DEFAULTS, TABLE_BUILDINGS, TABLE_DEVELOPERS, TABLE_FLOORS,
    TABLE_TENANTS, TABLE_UNITS, TABLE_VACANT_SPACES,
)

RECORD_TYPES: Dict[str, Type] = {
    TABLE_DEVELOPERS: Developer,
    TABLE_BUILDINGS: Building,
    TABLE_FLOORS: Floor,
    TABLE_UNITS: Unit,
    TABLE_VACANT_SPACES: VacantSpace,
    TABLE_TENANTS: Tenant,
}

INT_FIELDS = {
    "floor_no", "no_of_units", "year_built",
    "lock_in_period", "lease_period", "notice_period",
}

FLOAT_FIELDS = {
    "total_area", "cam", "floor_plate", "efficiency",
    "chargeable_area", "carpet_area", "quoted_rent", "current_rent",
    "security_deposit", "escalation", "car_parking_charges",
}

ID_FIELDS = {"id", "developer_id", "building_id", "floor_id", "unit_id"}


def is_missing(value) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value.strip() == ""


def _coerce(name: str, value):
    """Convert one raw value. Returns None when a numeric field is malformed."""
    if name in INT_FIELDS:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        return None if math.isnan(number) else int(number)
    if name in FLOAT_FIELDS:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        return None if math.isnan(number) else number
    if name in ID_FIELDS:
        # spreadsheet IDs like 12.0 come back from pandas as floats
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value).strip()
    if isinstance(value, str):
        return value.strip()
    return value


def field_default(table: str, name: str):
    return FIELD_DEFAULTS.get(table, {}).get(name)


def parse_record(table: str, row: Dict[str, Any]):
    """Build the typed record for one row of ``table``.

    Every declared field is filled: present values are coerced to the field's
    type, and missing or malformed values take the table's default.
    """
    record_type = RECORD_TYPES[table]
    values = {}
    for f in dataclasses.fields(record_type):
        raw = row.get(f.name)
        value = None if is_missing(raw) else _coerce(f.name, raw)
        if value is None:
            value = field_default(table, f.name)
        values[f.name] = value
    return record_type(**values)


def parse_records(table: str, rows: List[Dict[str, Any]]) -> list:
    return [parse_record(table, row) for row in rows]


def to_row(record, drop_none: bool = False) -> Dict[str, Any]:
    """Dict form of a record ready for the store."""
    row = dataclasses.asdict(record)
    if drop_none:
        row = {k: v for k, v in row.items() if v is not None}
    return row


def clean_values(table: str, values: Dict[str, Any], fields: Optional[List[str]] = None) -> Dict[str, Any]:
    """Coerce submitted form values for an insert or update, keeping only known columns."""
    record_type = RECORD_TYPES[table]
    known = {f.name for f in dataclasses.fields(record_type)}
    allowed = known if fields is None else known & set(fields)
    cleaned = {}
    for name, raw in values.items():
        if name not in allowed:
            continue
        value = None if is_missing(raw) else _coerce(name, raw)
        if value is None:
            value = field_default(table, name)
        cleaned[name] = value
    return cleaned
