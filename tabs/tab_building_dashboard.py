"""Tab 3: Building Dashboard: tenant mix and upcoming lease expiries."""

import logging

import streamlit as st

from data.repository import fetch_building_snapshot
from data.session_store import get_store
from data.store import NotFoundError, StoreError
from components.charts import leased_vs_available_donut, tenant_occupancy_bar
from components.metrics_cards import render_metric_row
from components.tables import render_lease_table
from engine.dashboard import build_tenant_occupancy, is_expiring_within, selected_tenant_details
from config.defaults import AREA_UNIT, LEASE_EXPIRY_WARNING_MONTHS

logger = logging.getLogger(__name__)


def render(sidebar_state):
    """Render the Building Dashboard tab."""
    st.header("Building Dashboard")

    building_id = sidebar_state.building_id
    if not building_id:
        st.info("Select a building in the sidebar or from the directory.")
        return

    try:
        snapshot = fetch_building_snapshot(get_store(), building_id)
    except NotFoundError:
        st.error(f"Building {building_id} not found.")
        return
    except StoreError as e:
        logger.error(f"Failed to load dashboard for {building_id}: {e}")
        st.error(f"Could not load building: {e}")
        return

    report = build_tenant_occupancy(snapshot.units, snapshot.vacant_unit_ids, snapshot.tenants)
    expiring = [d for d in report.tenant_details if is_expiring_within(d.lease_expiry)]

    st.subheader(snapshot.building.name)
    render_metric_row([
        {"label": "Leased Area", "value": f"{report.total_leased_area:,.0f} {AREA_UNIT}"},
        {"label": "Available Area", "value": f"{report.total_available_space:,.0f} {AREA_UNIT}"},
        {"label": "Tenants", "value": len(report.tenant_occupancy)},
        {"label": f"Expiring ≤ {LEASE_EXPIRY_WARNING_MONTHS} mo", "value": len(expiring),
         "delta": "leases" if expiring else None, "delta_color": "inverse"},
    ])

    if not report.tenant_occupancy:
        st.info("No leased units in this building.")
        if report.total_available_space:
            st.plotly_chart(leased_vs_available_donut(0, report.total_available_space),
                            use_container_width=True)
        return

    col1, col2 = st.columns([3, 2])
    with col1:
        st.plotly_chart(tenant_occupancy_bar(report), use_container_width=True)
    with col2:
        st.plotly_chart(
            leased_vs_available_donut(report.total_leased_area, report.total_available_space),
            use_container_width=True,
        )

    st.divider()
    names = [t.name for t in report.tenant_occupancy]
    tenant = st.selectbox("Tenant", options=[None] + names,
                          format_func=lambda x: "All tenants" if x is None else x,
                          key="dash_tenant")
    details = selected_tenant_details(report, tenant) if tenant else report.tenant_details
    render_lease_table(details)

    if expiring:
        st.warning(
            f"{len(expiring)} leases expire within the next {LEASE_EXPIRY_WARNING_MONTHS} months: "
            f"{', '.join(sorted({d.name for d in expiring}))}."
        )
