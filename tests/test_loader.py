"""Tests for spreadsheet loading and bulk import."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import io

import pandas as pd
import pytest

from data.loader import import_frames, load_file, load_workbook, match_sheet, normalize_columns
from data.repository import fetch_building_snapshot
from data.sample_data import generate_sample_frames, write_sample_workbook
from data.store import InMemoryStore
from data.validator import validate_cross_file, validate_frame


def named_buffer(content, name):
    buffer = io.BytesIO(content) if isinstance(content, bytes) else io.StringIO(content)
    buffer.name = name
    return buffer


class TestNormalizeColumns:
    def test_headers(self):
        df = normalize_columns(pd.DataFrame(columns=[" Floor No", "Chargeable Area", "unit_id"]))
        assert list(df.columns) == ["floor_no", "chargeable_area", "unit_id"]


class TestMatchSheet:
    def test_aliases_case_insensitive(self):
        assert match_sheet(["Building Master", "Leases"], "buildings") == "Building Master"
        assert match_sheet(["Building Master", "Leases"], "tenants") == "Leases"

    def test_missing(self):
        assert match_sheet(["Buildings"], "floors") is None


class TestLoadFile:
    def test_csv(self):
        df = load_file(named_buffer("ID,Name\nD1,Prestige\n", "developers.csv"))
        assert df.to_dict("records") == [{"id": "D1", "name": "Prestige"}]

    def test_unsupported(self):
        with pytest.raises(ValueError):
            load_file(named_buffer("x", "developers.txt"))


class TestLoadWorkbook:
    def test_sample_workbook_round_trip(self):
        buffer = io.BytesIO()
        write_sample_workbook(buffer)
        buffer.seek(0)

        frames = load_workbook(buffer)

        assert set(frames) == set(generate_sample_frames())
        assert len(frames["buildings"]) == 4

    def test_buildings_sheet_required(self):
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            pd.DataFrame({"id": ["F1"]}).to_excel(writer, sheet_name="Floors", index=False)
        buffer.seek(0)

        with pytest.raises(ValueError, match="buildings"):
            load_workbook(buffer)


class TestImportFrames:
    def test_sample_frames_validate_and_import(self):
        frames = generate_sample_frames()
        for table, df in frames.items():
            result = validate_frame(df, table)
            assert result.is_valid, result.errors
        assert validate_cross_file(frames).is_valid

        store = InMemoryStore()
        summary = import_frames(store, frames)

        assert summary.ok
        assert summary.inserted["units"] == len(frames["units"])
        assert store.row_count("tenants") == len(frames["tenants"])

    def test_stops_at_first_failing_table(self):
        frames = {
            "buildings": pd.DataFrame({"id": ["B1"], "name": ["Tower"], "developer_id": ["D1"]}),
            "floors": pd.DataFrame({"id": ["F1"], "building_id": ["B1"], "floor_no": [1],
                                    "floor_plate": [-100]}),
            "units": pd.DataFrame({"id": ["U1"], "floor_id": ["F1"], "unit_no": ["101"]}),
        }
        store = InMemoryStore()
        summary = import_frames(store, frames)

        assert not summary.ok
        assert summary.inserted == {"buildings": 1}
        assert summary.errors[0].startswith("floors:")
        assert store.row_count("units") == 0

    def test_nan_cells_become_defaults(self):
        frames = {"units": pd.DataFrame({"id": ["U1"], "floor_id": ["F1"], "unit_no": ["101"],
                                         "chargeable_area": [float("nan")]})}
        store = InMemoryStore()
        assert import_frames(store, frames).ok
        assert store.select_one("units", eq={"id": "U1"})["chargeable_area"] == 0.0

    def test_lowercase_ids_keep_floors_linked(self):
        frames = {
            "developers": pd.DataFrame({"id": ["d1"], "name": ["Dev"]}),
            "buildings": pd.DataFrame({"id": ["b1"], "name": ["Tower"], "developer_id": ["d1"]}),
            "floors": pd.DataFrame({"id": ["f1"], "building_id": ["b1"], "floor_no": [1],
                                    "floor_plate": [1000]}),
            "units": pd.DataFrame({"id": ["u1"], "floor_id": ["f1"], "unit_no": ["101"]}),
        }
        assert validate_cross_file(frames).is_valid
        assert not validate_cross_file(frames).warnings

        store = InMemoryStore()
        assert import_frames(store, frames).ok

        snapshot = fetch_building_snapshot(store, "B1")
        assert len(snapshot.floors) == 1
        assert snapshot.floors[0].building_id == "B1"
        assert [u.id for u in snapshot.units] == ["u1"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
