"""Validation for form submissions and uploaded data files."""

from dataclasses import dataclass, field
from typing import Dict, List

import pandas as pd

from data.records import FLOAT_FIELDS, INT_FIELDS, is_missing
from config.defaults import (
    TABLE_BUILDINGS, TABLE_DEVELOPERS, TABLE_FLOORS, TABLE_TENANTS,
    TABLE_UNITS, TABLE_VACANT_SPACES,
)


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str):
        self.is_valid = False
        self.errors.append(message)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.is_valid = self.is_valid and other.is_valid
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


REQUIRED_FIELDS = {
    TABLE_DEVELOPERS: ["id", "name"],
    TABLE_BUILDINGS: ["id", "name", "developer_id"],
    TABLE_FLOORS: ["building_id"],
    TABLE_UNITS: ["floor_id"],
    TABLE_VACANT_SPACES: ["unit_id"],
    TABLE_TENANTS: ["unit_id", "name"],
}

# Columns an uploaded sheet must carry; IDs are needed to link child rows
REQUIRED_COLUMNS = {
    TABLE_DEVELOPERS: ["id", "name"],
    TABLE_BUILDINGS: ["id", "name", "developer_id"],
    TABLE_FLOORS: ["id", "building_id", "floor_no"],
    TABLE_UNITS: ["id", "floor_id", "unit_no"],
    TABLE_VACANT_SPACES: ["unit_id"],
    TABLE_TENANTS: ["unit_id", "name"],
}

FIELD_LABELS = {
    "id": "ID",
    "developer_id": "Developer ID",
    "building_id": "Building ID",
    "floor_id": "Floor ID",
    "unit_id": "Unit ID",
    "name": "Name",
}

TABLE_LABELS = {
    TABLE_DEVELOPERS: "Developer",
    TABLE_BUILDINGS: "Building",
    TABLE_FLOORS: "Floor",
    TABLE_UNITS: "Unit",
    TABLE_VACANT_SPACES: "Vacant Space",
    TABLE_TENANTS: "Tenant",
}


def _label(name: str) -> str:
    return FIELD_LABELS.get(name, name.replace("_", " ").title())


def validate_record(table: str, values: Dict, partial: bool = False) -> ValidationResult:
    """Check a submitted record. ``partial`` skips required fields, for updates."""
    result = ValidationResult()
    label = TABLE_LABELS[table]

    if not partial:
        for name in REQUIRED_FIELDS[table]:
            if is_missing(values.get(name)):
                result.add_error(f"{label}: {_label(name)} is required.")

    for name, raw in values.items():
        if is_missing(raw) or (name not in INT_FIELDS and name not in FLOAT_FIELDS):
            continue
        try:
            number = float(raw)
        except (TypeError, ValueError):
            result.add_error(f"{label}: {_label(name)} must be a number.")
            continue
        if number < 0 and name != "floor_no":
            result.add_error(f"{label}: {_label(name)} cannot be negative.")

    if table == TABLE_FLOORS and not is_missing(values.get("efficiency")):
        try:
            if float(values["efficiency"]) > 100:
                result.add_error("Floor: Efficiency cannot exceed 100%.")
        except (TypeError, ValueError):
            pass

    if table == TABLE_FLOORS and is_missing(values.get("floor_no")) and not partial:
        result.warnings.append("Floor: no floor number given, the floor will not appear in floor details.")

    return result


def _check_required_columns(df: pd.DataFrame, required: List[str], file_label: str) -> ValidationResult:
    result = ValidationResult()
    missing = [col for col in required if col not in df.columns]
    if missing:
        result.add_error(f"{file_label}: Missing required columns: {', '.join(missing)}")
    if df.empty:
        result.add_error(f"{file_label}: File contains no data rows.")
    return result


def validate_frame(df: pd.DataFrame, table: str) -> ValidationResult:
    """Check an uploaded sheet for one table."""
    file_label = TABLE_LABELS[table]
    result = _check_required_columns(df, REQUIRED_COLUMNS[table], file_label)
    if not result.is_valid:
        return result

    for col in REQUIRED_COLUMNS[table]:
        if col == "floor_no":
            continue
        blanks = df[col].isna() | (df[col].astype(str).str.strip() == "")
        if blanks.any():
            result.add_error(f"{file_label}: {blanks.sum()} rows have no {_label(col)}.")

    for col in df.columns:
        if (col not in INT_FIELDS and col not in FLOAT_FIELDS) or col == "floor_no":
            continue
        numeric = pd.to_numeric(df[col], errors="coerce")
        if (numeric < 0).any():
            result.add_error(f"{file_label}: {_label(col)} cannot be negative.")
        bad = numeric.isna() & df[col].notna()
        if bad.any():
            result.warnings.append(
                f"{file_label}: {bad.sum()} non-numeric {_label(col)} values will be treated as blank."
            )

    if "id" in df.columns:
        dupes = df.duplicated(subset=["id"], keep=False)
        if dupes.any():
            result.add_error(f"{file_label}: Duplicate IDs: {df[dupes]['id'].unique().tolist()}")

    if table == TABLE_UNITS:
        dupes = df.duplicated(subset=["floor_id", "unit_no"], keep=False)
        if dupes.any():
            dupe_rows = df[dupes][["floor_id", "unit_no"]].drop_duplicates().to_dict("records")
            result.add_error(f"Unit: Duplicate unit numbers on a floor: {dupe_rows}")

    return result


def _ids(df: pd.DataFrame, col: str, upper: bool = False) -> set:
    ids = df[col].dropna().astype(str).str.strip()
    return set(ids.str.upper() if upper else ids)


def validate_cross_file(frames: Dict[str, pd.DataFrame]) -> ValidationResult:
    """Check that child rows point at parents present in the upload."""
    result = ValidationResult()
    links = [
        (TABLE_BUILDINGS, "developer_id", TABLE_DEVELOPERS),
        (TABLE_FLOORS, "building_id", TABLE_BUILDINGS),
        (TABLE_UNITS, "floor_id", TABLE_FLOORS),
        (TABLE_VACANT_SPACES, "unit_id", TABLE_UNITS),
        (TABLE_TENANTS, "unit_id", TABLE_UNITS),
    ]
    for child, col, parent in links:
        if child not in frames or parent not in frames:
            continue
        # developer and building IDs are stored upper-cased
        upper = parent in (TABLE_DEVELOPERS, TABLE_BUILDINGS)
        orphans = _ids(frames[child], col, upper) - _ids(frames[parent], "id", upper)
        if orphans:
            result.warnings.append(
                f"{TABLE_LABELS[child]}: references unknown {_label(col)}s "
                f"{', '.join(sorted(orphans))}. They must already exist in the store."
            )

    if TABLE_VACANT_SPACES in frames and TABLE_TENANTS in frames:
        both = _ids(frames[TABLE_VACANT_SPACES], "unit_id") & _ids(frames[TABLE_TENANTS], "unit_id")
        if both:
            result.warnings.append(
                f"Units listed as both vacant and leased: {', '.join(sorted(both))}. "
                "They will be shown as available."
            )
    return result
