"""Tab 2: Building Detail: building facts and the per-floor occupancy report."""

import logging

import streamlit as st

from data.repository import fetch_building_snapshot
from data.session_store import get_store
from data.store import NotFoundError, StoreError
from components.charts import floor_availability_bar
from components.metrics_cards import render_metric_row
from components.tables import available_units_frame, floor_summary_frame, render_styled_table
from engine.occupancy import calculate_average_rent, process_floor_data, total_available_area
from config.defaults import AREA_UNIT, CURRENCY_SYMBOL, MISSING_DISPLAY

logger = logging.getLogger(__name__)

BUILDING_FACTS = [
    ("Developer", "developer_id"),
    ("Location", "location"),
    ("Micromarket", "micromarket_zone"),
    ("Grade", "grade"),
    ("Structure", "building_structure"),
    ("Title", "building_title"),
    ("Certifications", "certifications"),
    ("Year Built", "year_built"),
    ("Construction", "construction_status"),
    ("Status", "building_status"),
]


def _render_facts(building):
    cols = st.columns(5)
    for i, (label, attr) in enumerate(BUILDING_FACTS):
        value = getattr(building, attr)
        cols[i % 5].caption(label)
        cols[i % 5].write(value if value not in (None, "") else MISSING_DISPLAY)


def render(sidebar_state):
    """Render the Building Detail tab."""
    st.header("Building Detail")

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
        logger.error(f"Failed to load building {building_id}: {e}")
        st.error(f"Could not load building: {e}")
        return

    building = snapshot.building
    floors = process_floor_data(snapshot.floors, snapshot.units, snapshot.vacant_spaces, snapshot.tenants)
    average_rent = calculate_average_rent(floors)

    st.subheader(building.name)
    if building.building_image_link:
        st.image(building.building_image_link, use_container_width=True)
    _render_facts(building)

    render_metric_row([
        {"label": "Total Area", "value": f"{building.total_area:,.0f} {AREA_UNIT}"},
        {"label": "Available Area", "value": f"{total_available_area(floors):,.0f} {AREA_UNIT}"},
        {"label": "Avg. Quoted Rent",
         "value": f"{CURRENCY_SYMBOL}{average_rent:,.2f}" if average_rent else MISSING_DISPLAY,
         "help": "Weighted by the chargeable area of each available unit"},
        {"label": "CAM", "value": f"{CURRENCY_SYMBOL}{building.cam:,.2f}"},
    ])

    st.divider()
    if not floors:
        st.info("This building has no floors with a floor number yet.")
        return

    skipped = sum(1 for f in snapshot.floors if f.floor_no is None)
    if skipped:
        st.caption(f"{skipped} floor records without a floor number are not shown.")

    render_styled_table(floor_summary_frame(floors), title="Floors")
    st.plotly_chart(floor_availability_bar(floors), use_container_width=True)

    units_df = available_units_frame(floors)
    if units_df.empty:
        st.info("No available units in this building.")
    else:
        render_styled_table(units_df, title="Available Units")
