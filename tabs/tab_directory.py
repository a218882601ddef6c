"""Tab 1: Building Directory: search, map and paged building cards."""

import logging

import streamlit as st

from data.repository import fetch_portfolio
from data.session_store import get_directory_page, get_store, select_building, set_directory_page
from data.store import StoreError
from components.charts import buildings_map
from components.metrics_cards import render_metric_row
from engine.geo import build_map_frame
from engine.portfolio import BuildingFilters, filter_buildings, paginate, sort_buildings, unique_locations
from config.defaults import AREA_UNIT, CURRENCY_SYMBOL, DIRECTORY_PAGE_SIZE, SORT_LABELS, SORT_ORDERS

logger = logging.getLogger(__name__)


def _optional(value: float):
    return value if value else None


def _render_filters(locations) -> tuple:
    with st.expander("Search & Filters", expanded=True):
        col1, col2 = st.columns([2, 2])
        name = col1.text_input("Building name", key="dir_name")
        selected_locations = col2.multiselect("Location", options=locations, key="dir_locations")

        col3, col4, col5, col6, col7 = st.columns(5)
        min_area = col3.number_input(f"Min area ({AREA_UNIT})", min_value=0.0, step=1000.0, key="dir_min_area")
        max_area = col4.number_input(f"Max area ({AREA_UNIT})", min_value=0.0, step=1000.0, key="dir_max_area")
        min_price = col5.number_input(f"Min rent ({CURRENCY_SYMBOL})", min_value=0.0, step=5.0, key="dir_min_price")
        max_price = col6.number_input(f"Max rent ({CURRENCY_SYMBOL})", min_value=0.0, step=5.0, key="dir_max_price")
        order = col7.selectbox("Sort by", options=SORT_ORDERS, format_func=SORT_LABELS.get, key="dir_sort")

    filters = BuildingFilters(
        name=name.strip(),
        locations=selected_locations,
        min_area=_optional(min_area),
        max_area=_optional(max_area),
        min_price=_optional(min_price),
        max_price=_optional(max_price),
    )
    return filters, order


def _render_card(entry):
    b = entry.building
    a = entry.availability
    with st.container(border=True):
        st.markdown(f"**{b.name}**")
        st.caption(f"{b.location or 'Location unknown'} · Grade {b.grade or '-'} · {b.id}")
        if b.is_leed_certified:
            st.caption(f"🌿 {b.certifications}")
        st.write(f"Available: {a.total_available_area:,.0f} {AREA_UNIT} in {a.available_units_count} units")
        if a.average_rent:
            st.write(f"Avg. quoted rent: {CURRENCY_SYMBOL}{a.average_rent:,.2f}")
        else:
            st.write("Avg. quoted rent: -")
        st.button("View details", key=f"view_{b.id}", on_click=select_building, args=(b.id,))


def render(sidebar_state):
    """Render the Building Directory tab."""
    st.header("Building Directory")

    try:
        entries = fetch_portfolio(get_store())
    except StoreError as e:
        logger.error(f"Failed to load portfolio: {e}")
        st.error(f"Could not load buildings: {e}")
        return

    if not entries:
        st.info("No buildings yet. Add one in the Manage Data tab or import a workbook.")
        return

    filters, order = _render_filters(unique_locations([e.building for e in entries]))
    results = sort_buildings(filter_buildings(entries, filters), order)

    render_metric_row([
        {"label": "Buildings", "value": f"{len(results)} of {len(entries)}"},
        {"label": f"Available Area ({AREA_UNIT})",
         "value": float(sum(e.availability.total_available_area for e in results))},
        {"label": "Available Units", "value": sum(e.availability.available_units_count for e in results)},
    ])

    map_df = build_map_frame(results)
    if map_df.empty:
        st.caption("No building in this selection has valid coordinates.")
    st.plotly_chart(buildings_map(map_df), use_container_width=True)

    if not results:
        st.warning("No buildings match the current filters.")
        return

    items, page, total_pages = paginate(results, get_directory_page(), DIRECTORY_PAGE_SIZE)
    set_directory_page(page)

    for start in range(0, len(items), 3):
        cols = st.columns(3)
        for col, entry in zip(cols, items[start:start + 3]):
            with col:
                _render_card(entry)

    prev_col, info_col, next_col = st.columns([1, 2, 1])
    prev_col.button("◀ Previous", disabled=page <= 1, key="dir_prev",
                    on_click=set_directory_page, args=(page - 1,))
    info_col.markdown(f"<div style='text-align:center'>Page {page} of {total_pages}</div>",
                      unsafe_allow_html=True)
    next_col.button("Next ▶", disabled=page >= total_pages, key="dir_next",
                    on_click=set_directory_page, args=(page + 1,))
