"""Plotly chart builders for the Building Portfolio Manager."""

import plotly.express as px
import plotly.graph_objects as go
import pandas as pd
from typing import List

from models.occupancy import FloorOccupancy, TenantOccupancyReport
from engine.dashboard import shorten_label
from config.defaults import AREA_UNIT, MAP_DEFAULT_CENTER, MAP_DEFAULT_ZOOM


def tenant_occupancy_bar(report: TenantOccupancyReport, title: str = "Tenant Occupancy") -> go.Figure:
    """Horizontal bar of leased area per tenant, largest on top."""
    df = pd.DataFrame([
        {"Tenant": shorten_label(t.name), "Full Name": t.name, "Area": t.area, "Share": t.percentage}
        for t in report.tenant_occupancy
    ])
    fig = px.bar(
        df, x="Area", y="Tenant",
        orientation="h",
        title=title,
        hover_data={"Full Name": True, "Share": ":.2f", "Tenant": False},
        labels={"Area": f"Leased Area ({AREA_UNIT})"},
        color_discrete_sequence=["#4A90D9"],
    )
    fig.update_layout(height=max(300, len(df) * 35), yaxis={"categoryorder": "total ascending"})
    return fig


def leased_vs_available_donut(leased: float, available: float, title: str = "Leased vs Available") -> go.Figure:
    """Donut chart of leased against available chargeable area."""
    total = leased + available
    fig = go.Figure(data=[go.Pie(
        labels=["Leased", "Available"],
        values=[leased, available],
        hole=0.6,
        marker_colors=["#E8734A", "#4A90D9"],
        textinfo="percent+label",
    )])
    fig.update_layout(
        title=title,
        height=350,
        showlegend=True,
        annotations=[dict(text=f"{total:,.0f} {AREA_UNIT}", x=0.5, y=0.5, font_size=14, showarrow=False)],
    )
    return fig


def floor_availability_bar(floors: List[FloorOccupancy]) -> go.Figure:
    """Stacked bar of available and leased area per floor number, top floor first."""
    rows = []
    for f in floors:
        leased = sum(t.area or 0 for t in f.occupied_space.tenants)
        rows.append({"Floor": str(f.floor_no), "Available": f.available_space.total_area, "Leased": leased})
    df = pd.DataFrame(rows, columns=["Floor", "Available", "Leased"])

    fig = px.bar(
        df, x=["Available", "Leased"], y="Floor",
        orientation="h",
        title="Floor Availability",
        labels={"value": f"Area ({AREA_UNIT})", "variable": ""},
        color_discrete_map={"Available": "#4A90D9", "Leased": "#E8734A"},
    )
    fig.update_layout(height=max(300, len(df) * 35), yaxis_type="category", legend_title_text="")
    return fig


def buildings_map(map_df: pd.DataFrame) -> go.Figure:
    """Scatter map of buildings. Centres on the portfolio, or on the default centre when empty."""
    if map_df.empty:
        center = {"lat": MAP_DEFAULT_CENTER[0], "lon": MAP_DEFAULT_CENTER[1]}
    else:
        center = {"lat": map_df["lat"].mean(), "lon": map_df["lon"].mean()}

    fig = px.scatter_mapbox(
        map_df, lat="lat", lon="lon",
        hover_name="name",
        hover_data={"location": True, "available_area": ":,.0f", "available_units": True,
                    "average_rent": ":,.2f", "lat": False, "lon": False},
        color="leed",
        color_discrete_map={True: "#2E9E5B", False: "#4A90D9"},
        zoom=MAP_DEFAULT_ZOOM,
        center=center,
        height=450,
    )
    fig.update_layout(mapbox_style="open-street-map", margin={"r": 0, "t": 0, "l": 0, "b": 0},
                      legend_title_text="LEED")
    return fig
