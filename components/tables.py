"""Styled dataframe display helpers."""

import streamlit as st
import pandas as pd
from typing import List, Optional

from models.occupancy import FloorOccupancy, TenantLeaseDetail
from engine.dashboard import format_lease_date, is_expiring_within
from engine.occupancy import format_efficiency
from config.defaults import MISSING_DISPLAY


def render_styled_table(
    df: pd.DataFrame,
    title: Optional[str] = None,
    height: Optional[int] = None,
    use_container_width: bool = True,
):
    """Render a styled, non-editable dataframe."""
    if title:
        st.subheader(title)
    st.dataframe(df, height=height, use_container_width=use_container_width, hide_index=True)


def floor_summary_frame(floors: List[FloorOccupancy]) -> pd.DataFrame:
    """One row per floor number for the building detail page."""
    return pd.DataFrame([
        {
            "Floor": f.floor_no,
            "Floor Plate": f.floor_plate,
            "Units": " + ".join(str(n) for n in f.units),
            "Efficiency": format_efficiency(f.efficiency),
            "Type of Space": f.type_of_space or MISSING_DISPLAY,
            "Available Area": f.available_space.total_area,
            "Available Units": len(f.available_space.units),
            "Tenants": ", ".join(sorted({t.name for t in f.occupied_space.tenants})) or "-",
        }
        for f in floors
    ])


def available_units_frame(floors: List[FloorOccupancy]) -> pd.DataFrame:
    rows = []
    for f in floors:
        for u in f.available_space.units:
            rows.append({
                "Floor": f.floor_no,
                "Unit": u.unit_no,
                "Area": u.area,
                "Quoted Rent": u.quoted_rent,
                "Available From": format_lease_date(u.availability_date),
                "Handover": u.handover_condition or MISSING_DISPLAY,
            })
    return pd.DataFrame(rows)


def lease_details_frame(details: List[TenantLeaseDetail]) -> pd.DataFrame:
    return pd.DataFrame([
        {
            "Tenant": d.name,
            "Area": d.chargeable_area,
            "Current Rent": d.current_rent,
            "Commencement": format_lease_date(d.lease_commencement_date),
            "Lock-in (months)": d.lock_in_period,
            "Expiry": format_lease_date(d.lease_expiry),
            "Expiring Soon": is_expiring_within(d.lease_expiry),
        }
        for d in details
    ])


def render_lease_table(details: List[TenantLeaseDetail]):
    """Render lease rows with leases expiring soon highlighted."""
    df = lease_details_frame(details)
    if df.empty:
        st.info("No leases to show.")
        return

    def color_expiry(val):
        if val is True:
            return "background-color: #fff3cd; color: #856404; font-weight: bold"
        return ""

    styled = df.style.map(color_expiry, subset=["Expiring Soon"])
    st.dataframe(styled, use_container_width=True, hide_index=True)
