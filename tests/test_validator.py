"""Tests for form and upload validation."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pandas as pd

from data.validator import validate_cross_file, validate_frame, validate_record
from config.defaults import (
    TABLE_BUILDINGS, TABLE_DEVELOPERS, TABLE_FLOORS, TABLE_TENANTS, TABLE_UNITS, TABLE_VACANT_SPACES,
)


class TestValidateRecord:
    def test_required_fields(self):
        result = validate_record(TABLE_BUILDINGS, {"id": "B1", "name": " "})
        assert not result.is_valid
        assert "Building: Name is required." in result.errors
        assert "Building: Developer ID is required." in result.errors

    def test_partial_skips_required(self):
        assert validate_record(TABLE_BUILDINGS, {"location": "Pune"}, partial=True).is_valid

    def test_numbers(self):
        result = validate_record(TABLE_UNITS, {"floor_id": "F1", "chargeable_area": "lots", "carpet_area": -5})
        assert "Unit: Chargeable Area must be a number." in result.errors
        assert "Unit: Carpet Area cannot be negative." in result.errors

    def test_basement_floor_allowed(self):
        assert validate_record(TABLE_FLOORS, {"building_id": "B1", "floor_no": -2}).is_valid

    def test_efficiency_above_100(self):
        result = validate_record(TABLE_FLOORS, {"building_id": "B1", "floor_no": 1, "efficiency": 120})
        assert "Floor: Efficiency cannot exceed 100%." in result.errors

    def test_missing_floor_no_warns(self):
        result = validate_record(TABLE_FLOORS, {"building_id": "B1"})
        assert result.is_valid
        assert len(result.warnings) == 1


class TestValidateFrame:
    def test_missing_columns(self):
        result = validate_frame(pd.DataFrame({"id": ["B1"]}), TABLE_BUILDINGS)
        assert not result.is_valid
        assert "name" in result.errors[0]

    def test_empty_frame(self):
        df = pd.DataFrame(columns=["id", "name"])
        assert not validate_frame(df, TABLE_DEVELOPERS).is_valid

    def test_blank_required_values(self):
        df = pd.DataFrame({"unit_id": ["U1"], "name": [None]})
        result = validate_frame(df, TABLE_TENANTS)
        assert result.errors == ["Tenant: 1 rows have no Name."]

    def test_blank_floor_no_is_allowed(self):
        df = pd.DataFrame({"id": ["F1", "F2"], "building_id": ["B1", "B1"], "floor_no": [1, None]})
        assert validate_frame(df, TABLE_FLOORS).is_valid

    def test_negative_and_non_numeric(self):
        df = pd.DataFrame({"unit_id": ["U1", "U2"], "quoted_rent": [-10, "ask"]})
        result = validate_frame(df, TABLE_VACANT_SPACES)
        assert "Vacant Space: Quoted Rent cannot be negative." in result.errors
        assert len(result.warnings) == 1

    def test_duplicate_ids(self):
        df = pd.DataFrame({"id": ["B1", "B1"], "name": ["A", "B"], "developer_id": ["D1", "D1"]})
        assert not validate_frame(df, TABLE_BUILDINGS).is_valid

    def test_duplicate_unit_numbers_on_a_floor(self):
        df = pd.DataFrame({"id": ["U1", "U2", "U3"], "floor_id": ["F1", "F1", "F2"], "unit_no": ["101", "101", "101"]})
        result = validate_frame(df, TABLE_UNITS)
        assert not result.is_valid
        assert "Duplicate unit numbers" in result.errors[0]


class TestValidateCrossFile:
    def test_orphans_and_double_booked_units(self):
        frames = {
            TABLE_FLOORS: pd.DataFrame({"id": ["F1"], "building_id": ["B1"], "floor_no": [1]}),
            TABLE_UNITS: pd.DataFrame({"id": ["U1", "U2"], "floor_id": ["F1", "F9"], "unit_no": ["1", "2"]}),
            TABLE_VACANT_SPACES: pd.DataFrame({"unit_id": ["U1"]}),
            TABLE_TENANTS: pd.DataFrame({"unit_id": ["U1"], "name": ["Acme"]}),
        }
        result = validate_cross_file(frames)
        assert result.is_valid
        assert any("F9" in w for w in result.warnings)
        assert any("both vacant and leased" in w for w in result.warnings)


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
