"""Tests for the floor occupancy report, weighted rent and efficiency formatting."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models.floor import Floor
from models.unit import Unit, VacantSpace
from models.tenant import Tenant
from engine.occupancy import (
    as_number,
    calculate_average_rent,
    format_efficiency,
    normalize_efficiency,
    process_floor_data,
    total_available_area,
)


def make_floor(floor_id="F1", floor_no=1, no_of_units=2, plate=10000, efficiency=0.8, space="Office"):
    return Floor(floor_id, "B1", floor_no, plate, no_of_units, efficiency, space)


def make_unit(unit_id, floor_id="F1", unit_no=None, area=1000):
    return Unit(unit_id, floor_id, unit_no or unit_id, area)


def make_vacancy(unit_id, rent=100, date="2026-01-01", handover="Warm Shell"):
    return VacantSpace(unit_id, rent, date, handover)


def make_tenant(unit_id, name="Acme", rent=90):
    return Tenant(unit_id, name, rent)


class TestProcessFloorData:
    def test_partitions_units_into_available_and_occupied(self):
        floors = [make_floor()]
        units = [make_unit("U1", area=1000), make_unit("U2", area=1500)]

        result = process_floor_data(floors, units, [make_vacancy("U1")], [make_tenant("U2")])

        assert len(result) == 1
        group = result[0]
        assert [u.unit_no for u in group.available_space.units] == ["U1"]
        assert group.available_space.total_area == 1000
        assert [t.unit_no for t in group.occupied_space.tenants] == ["U2"]
        assert group.occupied_space.tenants[0].name == "Acme"
        assert group.occupied_space.tenants[0].current_rent == 90

    def test_available_detail_passes_vacancy_fields_through(self):
        result = process_floor_data(
            [make_floor()], [make_unit("U1")],
            [make_vacancy("U1", rent=120, date="2026-05-01", handover="Bare Shell")], [],
        )
        unit = result[0].available_space.units[0]
        assert unit.quoted_rent == 120
        assert unit.availability_date == "2026-05-01"
        assert unit.handover_condition == "Bare Shell"

    def test_one_group_per_distinct_floor_no(self):
        floors = [
            make_floor("F1", 1), make_floor("F2", 2), make_floor("F3", 2),
            make_floor("F4", 5), make_floor("F5", None),
        ]
        result = process_floor_data(floors, [], [], [])
        assert len(result) == len({f.floor_no for f in floors if f.floor_no is not None})

    def test_null_floor_no_is_excluded(self):
        floors = [make_floor("F1", 1), make_floor("F2", None)]
        units = [make_unit("U1", "F1"), make_unit("U2", "F2", area=5000)]
        vacancies = [make_vacancy("U1"), make_vacancy("U2")]

        result = process_floor_data(floors, units, vacancies, [])

        assert [g.floor_no for g in result] == [1]
        assert total_available_area(result) == 1000
        assert all(u.unit_no != "U2" for g in result for u in g.available_space.units)

    def test_sorted_highest_floor_first(self):
        floors = [make_floor("F1", 2), make_floor("F2", 10), make_floor("F3", -1), make_floor("F4", 4)]
        result = process_floor_data(floors, [], [], [])
        assert [g.floor_no for g in result] == [10, 4, 2, -1]

    def test_area_conservation(self):
        floors = [make_floor("F1", 1), make_floor("F2", 2), make_floor("F3", 2)]
        units = [
            make_unit("U1", "F1", area=1000),
            make_unit("U2", "F2", area=700),
            make_unit("U3", "F3", area=300),
            make_unit("U4", "F3", area=900),
        ]
        vacancies = [make_vacancy("U1"), make_vacancy("U3"), make_vacancy("U4")]

        result = process_floor_data(floors, units, vacancies, [make_tenant("U2")])

        assert total_available_area(result) == 1000 + 300 + 900

    def test_vacant_and_leased_unit_counts_as_available_only(self):
        units = [make_unit("U1")]
        result = process_floor_data([make_floor()], units, [make_vacancy("U1")], [make_tenant("U1")])

        group = result[0]
        available = {u.unit_no for u in group.available_space.units}
        occupied = {t.unit_no for t in group.occupied_space.tenants}
        assert available == {"U1"}
        assert not available & occupied

    def test_unit_in_neither_lookup_is_only_counted_as_other(self):
        units = [make_unit("U1"), make_unit("U2"), make_unit("U3")]
        result = process_floor_data([make_floor()], units, [make_vacancy("U1")], [make_tenant("U2")])

        group = result[0]
        assert group.other_units == 1
        assert len(group.available_space.units) == 1
        assert len(group.occupied_space.tenants) == 1
        assert "other_units" not in group.to_dict()

    def test_floors_sharing_floor_no_merge(self):
        floors = [
            make_floor("F3A", 3, no_of_units=5, plate=8000, efficiency=0.7, space="Office"),
            make_floor("F3B", 3, no_of_units=3, plate=4000, efficiency=0.9, space="Retail"),
        ]
        units = [
            make_unit("A1", "F3A", area=500),
            make_unit("A2", "F3A", area=600),
            make_unit("B1", "F3B", area=400),
            make_unit("B2", "F3B", area=200),
        ]
        vacancies = [make_vacancy("A1"), make_vacancy("B1")]
        tenants = [make_tenant("A2", "Globex"), make_tenant("B2", "Initech")]

        result = process_floor_data(floors, units, vacancies, tenants)

        assert len(result) == 1
        group = result[0]
        assert group.units == [5, 3]
        # first-seen record wins for the descriptive fields
        assert group.floor_plate == 8000
        assert group.efficiency == 0.7
        assert group.type_of_space == "Office"
        assert group.available_space.total_area == 900
        assert [u.unit_no for u in group.available_space.units] == ["A1", "B1"]
        assert [t.name for t in group.occupied_space.tenants] == ["Globex", "Initech"]

    def test_missing_values_degrade_to_defaults(self):
        units = [Unit("U1", "F1", "101", None), Unit("U2", "F1", "102", "abc")]
        tenants = [Tenant("U2", None, None)]
        result = process_floor_data([make_floor()], units, [VacantSpace("U1")], tenants)

        group = result[0]
        assert group.available_space.total_area == 0
        assert group.available_space.units[0].quoted_rent is None
        assert group.occupied_space.tenants[0].name == "Unknown Tenant"
        assert group.occupied_space.tenants[0].current_rent == 0

    def test_duplicate_vacancy_rows_last_one_wins(self):
        vacancies = [make_vacancy("U1", rent=80), make_vacancy("U1", rent=95)]
        result = process_floor_data([make_floor()], [make_unit("U1")], vacancies, [])
        assert result[0].available_space.units[0].quoted_rent == 95

    def test_units_on_other_buildings_floors_are_ignored(self):
        units = [make_unit("U1", "F1"), make_unit("X1", "OTHER", area=9999)]
        result = process_floor_data([make_floor()], units, [make_vacancy("U1"), make_vacancy("X1")], [])
        assert total_available_area(result) == 1000

    def test_inputs_are_not_mutated(self):
        floors = [make_floor("F1", 3, no_of_units=5), make_floor("F2", 3, no_of_units=3)]
        units = [make_unit("U1", "F1"), make_unit("U2", "F2")]
        vacancies = [make_vacancy("U1"), make_vacancy("U2")]
        snapshot = (list(floors), list(units), list(vacancies))

        process_floor_data(floors, units, vacancies, [])

        assert (floors, units, vacancies) == snapshot
        assert floors[0].no_of_units == 5

    def test_empty_floors(self):
        result = process_floor_data([], [make_unit("U1")], [make_vacancy("U1")], [])
        assert result == []
        assert calculate_average_rent(result) == 0.0

    def test_to_dict_shape(self):
        result = process_floor_data([make_floor()], [make_unit("U1")], [make_vacancy("U1")], [])
        data = result[0].to_dict()
        assert set(data) == {
            "floor_no", "floor_plate", "units", "efficiency", "type_of_space",
            "available_space", "occupied_space",
        }
        assert data["available_space"]["units"][0]["unit_no"] == "U1"
        assert data["occupied_space"] == {"tenants": []}


class TestCalculateAverageRent:
    def test_area_weighted(self):
        floors = [make_floor("F1", 1), make_floor("F2", 2)]
        units = [make_unit("U1", "F1", area=1000), make_unit("U2", "F2", area=2000)]
        vacancies = [make_vacancy("U1", rent=50), make_vacancy("U2", rent=80)]

        result = process_floor_data(floors, units, vacancies, [])
        assert calculate_average_rent(result) == 70

    def test_skips_units_without_rent_or_area(self):
        units = [
            make_unit("U1", area=1000),
            make_unit("U2", area=0),
            make_unit("U3", area=3000),
        ]
        vacancies = [make_vacancy("U1", rent=60), make_vacancy("U2", rent=500), make_vacancy("U3", rent=None)]

        result = process_floor_data([make_floor()], units, vacancies, [])
        assert calculate_average_rent(result) == 60

    def test_no_rent_data_returns_zero(self):
        result = process_floor_data([make_floor()], [make_unit("U1")], [make_vacancy("U1", rent=None)], [])
        assert calculate_average_rent(result) == 0.0


class TestEfficiency:
    def test_ratio_is_scaled(self):
        assert format_efficiency(0.75) == "75%"

    def test_percentage_kept(self):
        assert format_efficiency(82) == "82%"

    def test_missing(self):
        assert format_efficiency(None) == "N/A"
        assert format_efficiency(float("nan")) == "N/A"
        assert format_efficiency("not a number") == "N/A"

    def test_rounds_half_up(self):
        assert format_efficiency(82.5) == "83%"
        assert format_efficiency(0.824) == "82%"

    def test_exactly_one_is_a_percentage(self):
        assert normalize_efficiency(1) == 1
        assert format_efficiency(1) == "1%"

    def test_zero(self):
        assert format_efficiency(0) == "0%"


class TestAsNumber:
    def test_values(self):
        assert as_number(None) == 0.0
        assert as_number("12.5") == 12.5
        assert as_number("abc") == 0.0
        assert as_number(float("nan")) == 0.0
        assert as_number(True) == 0.0
        assert as_number(7) == 7.0


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
