"""File upload parsing: CSV/XLSX into per-table DataFrames, then into the store."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List

import pandas as pd

from data.actions import create_records
from data.store import DataStore
from config.defaults import (
    TABLE_BUILDINGS, TABLE_DEVELOPERS, TABLE_FLOORS, TABLE_TENANTS,
    TABLE_UNITS, TABLE_VACANT_SPACES,
)

logger = logging.getLogger(__name__)

# Parents first so child rows can reference them
IMPORT_ORDER = [
    TABLE_DEVELOPERS,
    TABLE_BUILDINGS,
    TABLE_FLOORS,
    TABLE_UNITS,
    TABLE_VACANT_SPACES,
    TABLE_TENANTS,
]

# Expected sheet names for a multi-tab Excel (case-insensitive matching)
SHEET_ALIASES = {
    TABLE_DEVELOPERS: ["developers", "developer", "developer master"],
    TABLE_BUILDINGS: ["buildings", "building", "building master"],
    TABLE_FLOORS: ["floors", "floor", "floor master", "floor plates"],
    TABLE_UNITS: ["units", "unit", "unit master"],
    TABLE_VACANT_SPACES: ["vacant spaces", "vacant_spaces", "vacant", "availability", "available space"],
    TABLE_TENANTS: ["tenants", "tenant", "leases", "tenant master"],
}


@dataclass
class ImportSummary:
    inserted: Dict[str, int] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Lower-case, snake-case column headers so 'Floor No' matches 'floor_no'."""
    df = df.copy()
    df.columns = [str(c).strip().lower().replace(" ", "_") for c in df.columns]
    return df


def load_file(uploaded_file) -> pd.DataFrame:
    """Load an uploaded file (CSV or XLSX) into a DataFrame."""
    name = uploaded_file.name.lower()
    if name.endswith(".csv"):
        return normalize_columns(pd.read_csv(uploaded_file))
    elif name.endswith(".xlsx") or name.endswith(".xls"):
        return normalize_columns(pd.read_excel(uploaded_file, engine="openpyxl"))
    else:
        raise ValueError(f"Unsupported file format: {name}. Use CSV or XLSX.")


def match_sheet(sheet_names: List[str], table: str):
    """Find the sheet for a table. Returns None when the workbook has none."""
    lower_map = {s.lower().strip(): s for s in sheet_names}
    for alias in SHEET_ALIASES[table]:
        if alias in lower_map:
            return lower_map[alias]
    return None


def load_workbook(uploaded_file) -> Dict[str, pd.DataFrame]:
    """Load every recognised sheet of a portfolio workbook, keyed by table name.

    A Buildings sheet is required; the other sheets are optional.
    """
    xl = pd.ExcelFile(uploaded_file, engine="openpyxl")
    sheet_names = xl.sheet_names

    frames = {}
    for table in IMPORT_ORDER:
        sheet = match_sheet(sheet_names, table)
        if sheet is not None:
            frames[table] = normalize_columns(pd.read_excel(xl, sheet_name=sheet))

    if TABLE_BUILDINGS not in frames:
        raise ValueError(
            f"Could not find a sheet for '{TABLE_BUILDINGS}'. "
            f"Expected one of: {SHEET_ALIASES[TABLE_BUILDINGS]}. "
            f"Found sheets: {sheet_names}"
        )
    return frames


def frame_to_records(df: pd.DataFrame) -> List[dict]:
    """DataFrame rows as dicts with NaN replaced by None."""
    return df.astype(object).where(pd.notna(df), None).to_dict("records")


def import_frames(store: DataStore, frames: Dict[str, pd.DataFrame]) -> ImportSummary:
    """Insert validated frames into the store, parents first. Stops at the first failing table."""
    summary = ImportSummary()
    for table in IMPORT_ORDER:
        df = frames.get(table)
        if df is None or df.empty:
            continue
        result = create_records(store, table, frame_to_records(df), table.replace("_", " "))
        summary.warnings.extend(result.warnings)
        if not result.success:
            summary.errors.append(f"{table}: {result.error}")
            logger.error(f"Import stopped at {table}: {result.error}")
            break
        summary.inserted[table] = len(result.data)
    logger.info(f"Imported {summary.inserted}")
    return summary