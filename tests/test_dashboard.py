"""Tests for the building dashboard: tenant shares and lease expiry."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import date

from models.unit import Unit
from models.tenant import Tenant
from engine.dashboard import (
    build_tenant_occupancy,
    format_lease_date,
    is_expiring_within,
    parse_date,
    selected_tenant_details,
    shorten_label,
)


def make_tenant(unit_id, name, rent=100, expiry="2027-03-31"):
    return Tenant(unit_id, name, rent, lease_commencement_date="2022-04-01",
                  lock_in_period=36, lease_expiry=expiry)


class TestBuildTenantOccupancy:
    def setup_method(self):
        self.units = [
            Unit("U1", "F1", "101", 1000),
            Unit("U2", "F1", "102", 3000),
            Unit("U3", "F1", "103", 1000),
            Unit("U4", "F1", "104", 2000),
            Unit("U5", "F1", "105", 500),
        ]
        self.tenants = [
            make_tenant("U1", "Globex"),
            make_tenant("U2", "Acme"),
            make_tenant("U3", "Globex"),
        ]

    def test_shares_grouped_by_name_largest_first(self):
        report = build_tenant_occupancy(self.units, {"U4"}, self.tenants)

        assert [(t.name, t.area) for t in report.tenant_occupancy] == [("Acme", 3000), ("Globex", 2000)]
        assert report.tenant_occupancy[0].percentage == 60.0
        assert report.tenant_occupancy[1].percentage == 40.0
        assert report.total_available_space == 2000
        assert report.total_leased_area == 5000

    def test_vacant_unit_is_never_counted_as_leased(self):
        report = build_tenant_occupancy(self.units, {"U1"}, self.tenants)
        assert report.total_available_space == 1000
        assert [(t.name, t.area) for t in report.tenant_occupancy] == [("Acme", 3000), ("Globex", 1000)]

    def test_first_tenant_row_per_unit_counts(self):
        tenants = [make_tenant("U1", "Globex"), make_tenant("U1", "Hooli")]
        report = build_tenant_occupancy(self.units, set(), tenants)
        assert [t.name for t in report.tenant_occupancy] == ["Globex"]

    def test_one_lease_row_per_unit(self):
        report = build_tenant_occupancy(self.units, set(), self.tenants)
        assert len(report.tenant_details) == 3
        detail = report.tenant_details[0]
        assert detail.chargeable_area == 1000
        assert detail.lock_in_period == 36
        assert detail.lease_expiry == "2027-03-31"
        assert len(selected_tenant_details(report, "Globex")) == 2

    def test_percentages_round_to_two_places(self):
        units = [Unit("U1", "F1", "1", 1), Unit("U2", "F1", "2", 2)]
        report = build_tenant_occupancy(units, set(), [make_tenant("U1", "A"), make_tenant("U2", "B")])
        assert [t.percentage for t in report.tenant_occupancy] == [66.67, 33.33]

    def test_no_tenants(self):
        report = build_tenant_occupancy(self.units, {"U1"}, [])
        assert report.tenant_occupancy == []
        assert report.total_leased_area == 0


class TestLeaseDates:
    def test_parse(self):
        assert parse_date("2027-03-31") == date(2027, 3, 31)
        assert parse_date("2027-03-31T10:00:00") == date(2027, 3, 31)
        assert parse_date("") is None
        assert parse_date("soon") is None

    def test_format(self):
        assert format_lease_date("2027-03-05") == "5 Mar 2027"
        assert format_lease_date(None) == "N/A"
        assert format_lease_date("not a date") == "Invalid Date"

    def test_expiring_within_window(self):
        today = date(2026, 1, 15)
        assert is_expiring_within("2026-01-15", today=today)
        assert is_expiring_within("2027-07-15", today=today)
        assert not is_expiring_within("2027-07-16", today=today)
        assert not is_expiring_within("2026-01-14", today=today)
        assert not is_expiring_within(None, today=today)

    def test_custom_window(self):
        today = date(2026, 1, 31)
        assert is_expiring_within("2026-02-28", months=1, today=today)
        assert not is_expiring_within("2026-03-01", months=1, today=today)


def test_shorten_label():
    assert shorten_label("Short Name") == "Short Name"
    assert shorten_label("Vandelay Imports Ltd") == "Vandelay Import..."
    assert shorten_label("Exactly15Chars!") == "Exactly15Chars!"


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
