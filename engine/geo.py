"""Coordinate parsing and map data for the buildings map."""

import math
from typing import List, Optional, Tuple

import pandas as pd

from engine.portfolio import BuildingEntry

MAP_COLUMNS = ["lat", "lon", "id", "name", "location", "available_area",
               "available_units", "average_rent", "leed"]


def parse_coordinates(value) -> Optional[Tuple[float, float]]:
    """Parse a 'lat, lng' string. Returns None for anything that is not a valid pair."""
    if not value:
        return None
    parts = str(value).split(",")
    if len(parts) != 2:
        return None
    try:
        lat, lng = float(parts[0].strip()), float(parts[1].strip())
    except ValueError:
        return None
    if math.isnan(lat) or math.isnan(lng):
        return None
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        return None
    return lat, lng


def build_map_frame(entries: List[BuildingEntry]) -> pd.DataFrame:
    """One row per building with usable coordinates."""
    rows = []
    for entry in entries:
        coords = parse_coordinates(entry.building.google_coordinates)
        if coords is None:
            continue
        rows.append({
            "lat": coords[0],
            "lon": coords[1],
            "id": entry.building.id,
            "name": entry.building.name,
            "location": entry.building.location,
            "available_area": entry.availability.total_available_area,
            "available_units": entry.availability.available_units_count,
            "average_rent": entry.availability.average_rent,
            "leed": entry.building.is_leed_certified,
        })
    return pd.DataFrame(rows, columns=MAP_COLUMNS)
