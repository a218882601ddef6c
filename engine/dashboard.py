"""Building dashboard: tenant occupancy shares and lease expiry checks."""

from datetime import date, datetime
from typing import Dict, List, Optional, Set

import pandas as pd

from models.unit import Unit
from models.tenant import Tenant
from models.occupancy import TenantLeaseDetail, TenantOccupancyReport, TenantShare
from engine.occupancy import as_number
from config.defaults import LEASE_EXPIRY_WARNING_MONTHS, MISSING_DISPLAY, TENANT_LABEL_MAX_CHARS


def build_tenant_occupancy(
    units: List[Unit],
    vacant_unit_ids: Set[str],
    tenants: List[Tenant],
) -> TenantOccupancyReport:
    """Aggregate leased area per tenant name, largest first, plus one lease row per unit."""
    first_tenant: Dict[str, Tenant] = {}
    for tenant in tenants:
        first_tenant.setdefault(tenant.unit_id, tenant)

    total_available = 0.0
    tenant_areas: Dict[str, float] = {}
    details: List[TenantLeaseDetail] = []

    for unit in units:
        area = as_number(unit.chargeable_area)
        if unit.id in vacant_unit_ids:
            total_available += area
            continue
        tenant = first_tenant.get(unit.id)
        if tenant is None:
            continue
        tenant_areas[tenant.name] = tenant_areas.get(tenant.name, 0.0) + area
        details.append(TenantLeaseDetail(
            name=tenant.name,
            current_rent=as_number(tenant.current_rent),
            lease_commencement_date=tenant.lease_commencement_date or "",
            lock_in_period=int(as_number(tenant.lock_in_period)),
            lease_expiry=tenant.lease_expiry or "",
            chargeable_area=area,
        ))

    leased_total = sum(tenant_areas.values())
    shares = [
        TenantShare(
            name=name,
            area=area,
            percentage=round(area / leased_total * 100, 2) if leased_total > 0 else 0.0,
        )
        for name, area in tenant_areas.items()
    ]
    shares.sort(key=lambda s: s.area, reverse=True)

    return TenantOccupancyReport(
        total_available_space=total_available,
        tenant_occupancy=shares,
        tenant_details=details,
    )


def parse_date(value) -> Optional[date]:
    """Parse an ISO date or datetime string. Returns None when empty or invalid."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = pd.to_datetime(str(value).strip(), errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()


def is_expiring_within(
    expiry,
    months: int = LEASE_EXPIRY_WARNING_MONTHS,
    today: Optional[date] = None,
) -> bool:
    """True when the expiry date falls between today and ``months`` from today, inclusive."""
    expiry_date = parse_date(expiry)
    if expiry_date is None:
        return False
    today = today or date.today()
    return today <= expiry_date <= (pd.Timestamp(today) + pd.DateOffset(months=months)).date()


def format_lease_date(value) -> str:
    if not value:
        return MISSING_DISPLAY
    parsed = parse_date(value)
    if parsed is None:
        return "Invalid Date"
    return f"{parsed.day} {parsed:%b %Y}"


def shorten_label(name: str, max_chars: int = TENANT_LABEL_MAX_CHARS) -> str:
    return name[:max_chars] + "..." if len(name) > max_chars else name


def selected_tenant_details(report: TenantOccupancyReport, tenant_name: str) -> List[TenantLeaseDetail]:
    return [d for d in report.tenant_details if d.name == tenant_name]
