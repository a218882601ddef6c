"""Generate a synthetic portfolio for the demo store and for spreadsheet templates."""

import os
import random
from typing import Dict

import pandas as pd

from data.loader import import_frames, ImportSummary
from data.store import DataStore
from config.defaults import (
    TABLE_BUILDINGS, TABLE_DEVELOPERS, TABLE_FLOORS, TABLE_TENANTS,
    TABLE_UNITS, TABLE_VACANT_SPACES,
)

SAMPLE_BUILDINGS = [
    # id, developer, name, location, zone, grade, coordinates, certifications, floors
    ("B1", "D1", "Prestige Tech Park", "Bengaluru", "ORR", "A+", "12.9352, 77.6950", "LEED Platinum", 8),
    ("B2", "D1", "Embassy One", "Bengaluru", "CBD", "A", "12.9866, 77.5946", "IGBC Gold", 6),
    ("B3", "D2", "One BKC", "Mumbai", "BKC", "A+", "19.0660, 72.8656", "LEED Gold", 10),
    ("B4", "D2", "Cyber Greens", "Gurugram", "DLF Cyber City", "B", "28.4949, 77.0888", "", 5),
]

TENANT_NAMES = [
    "Acme Analytics", "Northwind Traders", "Globex", "Initech", "Umbrella Health",
    "Stark Industries", "Wayne Enterprises", "Hooli", "Vandelay Imports", "Soylent Foods",
]


def generate_developers_df() -> pd.DataFrame:
    return pd.DataFrame([
        {"id": "D1", "name": "Prestige Group", "group_name": "Prestige", "website": "https://example.com/prestige"},
        {"id": "D2", "name": "RMZ Corp", "group_name": "RMZ", "website": "https://example.com/rmz"},
    ])


def generate_buildings_df() -> pd.DataFrame:
    rows = []
    for b_id, dev, name, loc, zone, grade, coords, certs, n_floors in SAMPLE_BUILDINGS:
        rows.append({
            "id": b_id,
            "developer_id": dev,
            "name": name,
            "location": loc,
            "micromarket_zone": zone,
            "building_structure": "Single Tower",
            "building_title": "Non-Strata",
            "grade": grade,
            "total_area": n_floors * 25000,
            "certifications": certs,
            "google_coordinates": coords,
            "cam": 12,
            "year_built": 2010 + n_floors,
            "construction_status": "Completed",
            "building_status": "Operational",
            "building_image_link": "",
        })
    return pd.DataFrame(rows)


def generate_floors_df() -> pd.DataFrame:
    """Floors per building; B1 floor 3 is recorded as two wings sharing one floor number."""
    random.seed(42)
    rows = []
    for b_id, _, _, _, _, _, _, _, n_floors in SAMPLE_BUILDINGS:
        for floor_no in range(1, n_floors + 1):
            wings = ["A", "B"] if (b_id == "B1" and floor_no == 3) else [""]
            for wing in wings:
                rows.append({
                    "id": f"{b_id}-F{floor_no}{wing}",
                    "building_id": b_id,
                    "floor_no": floor_no,
                    "floor_plate": 25000 if not wing else 12500,
                    "no_of_units": 4 if not wing else 2,
                    "efficiency": random.choice([0.72, 0.75, 0.8, 82]),
                    "type_of_space": "Office",
                })
    return pd.DataFrame(rows)


def _base_units_df() -> pd.DataFrame:
    floors = generate_floors_df()
    rows = []
    for _, floor in floors.iterrows():
        wing = floor["id"][-1] if floor["id"][-1].isalpha() else ""
        for i in range(1, int(floor["no_of_units"]) + 1):
            rows.append({
                "id": f"{floor['id']}-U{i}",
                "floor_id": floor["id"],
                "unit_no": f"{wing}{int(floor['floor_no'])}0{i}",
                "chargeable_area": floor["floor_plate"] / floor["no_of_units"],
                "carpet_area": round(floor["floor_plate"] / floor["no_of_units"] * 0.75),
                "premises_condition": "Warm Shell",
            })
    return pd.DataFrame(rows)


def _split_units():
    """Deterministically mark units vacant, leased, or neither (about 30% / 65% / 5%)."""
    random.seed(7)
    vacant, leased, other = [], [], []
    for unit_id in _base_units_df()["id"]:
        roll = random.random()
        if roll < 0.3:
            vacant.append(unit_id)
        elif roll < 0.95:
            leased.append(unit_id)
        else:
            other.append(unit_id)
    return vacant, leased, other


def generate_units_df() -> pd.DataFrame:
    df = _base_units_df()
    vacant, leased, _ = _split_units()
    df["status"] = ["Vacant" if u in vacant else "Leased" if u in leased else "Under Renovation" for u in df["id"]]
    return df


def generate_vacant_spaces_df() -> pd.DataFrame:
    vacant, _, _ = _split_units()
    random.seed(11)
    return pd.DataFrame([{
        "unit_id": unit_id,
        "quoted_rent": random.choice([85, 95, 110, 125, 140]),
        "availability_date": f"2026-{random.randint(1, 12):02d}-01",
        "handover_condition": random.choice(["Bare Shell", "Warm Shell", "Fully Furnished"]),
    } for unit_id in vacant])


def generate_tenants_df() -> pd.DataFrame:
    _, leased, _ = _split_units()
    random.seed(13)
    rows = []
    for i, unit_id in enumerate(leased):
        start_year = random.randint(2019, 2024)
        term_years = random.choice([3, 5, 9])
        rows.append({
            "id": f"T{i + 1}",
            "unit_id": unit_id,
            "name": random.choice(TENANT_NAMES),
            "current_rent": random.choice([80, 90, 100, 115]),
            "lease_commencement_date": f"{start_year}-04-01",
            "lock_in_period": random.choice([24, 36]),
            "lease_period": term_years * 12,
            "lease_expiry": f"{start_year + term_years}-03-31",
            "escalation": 15,
            "notice_period": 6,
            "type_of_user": "Corporate",
            "status": "Active",
        })
    return pd.DataFrame(rows)


def generate_sample_frames() -> Dict[str, pd.DataFrame]:
    return {
        TABLE_DEVELOPERS: generate_developers_df(),
        TABLE_BUILDINGS: generate_buildings_df(),
        TABLE_FLOORS: generate_floors_df(),
        TABLE_UNITS: generate_units_df(),
        TABLE_VACANT_SPACES: generate_vacant_spaces_df(),
        TABLE_TENANTS: generate_tenants_df(),
    }


def seed_store(store: DataStore) -> ImportSummary:
    """Load the sample portfolio into a store."""
    return import_frames(store, generate_sample_frames())


SHEET_NAMES = {
    TABLE_DEVELOPERS: "Developers",
    TABLE_BUILDINGS: "Buildings",
    TABLE_FLOORS: "Floors",
    TABLE_UNITS: "Units",
    TABLE_VACANT_SPACES: "Vacant Spaces",
    TABLE_TENANTS: "Tenants",
}


def write_sample_workbook(target):
    """Write all six datasets as sheets of one workbook. ``target`` is a path or a binary buffer."""
    with pd.ExcelWriter(target, engine="openpyxl") as writer:
        for table, df in generate_sample_frames().items():
            df.to_excel(writer, sheet_name=SHEET_NAMES[table], index=False)


def generate_sample_excel(output_dir: str) -> str:
    """Write a single multi-tab Excel file with all six datasets."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, "sample_portfolio.xlsx")
    write_sample_workbook(path)
    return path


if __name__ == "__main__":
    out = os.path.join(os.path.dirname(__file__), "..", "sample_files")
    generate_sample_excel(out)
    print("Sample Excel workbook generated in sample_files/")
