"""KPI metric cards and queued status messages."""

import streamlit as st


def _display(value):
    if isinstance(value, float):
        return f"{value:,.0f}"
    return value


def render_metric_row(metrics: list[dict]):
    """Render a row of metric cards.

    Each dict carries label and value, plus optional delta, delta_color and help.
    Float values are shown as whole numbers with thousands separators.
    """
    for col, m in zip(st.columns(len(metrics)), metrics):
        col.metric(
            m["label"],
            _display(m["value"]),
            delta=m.get("delta"),
            delta_color=m.get("delta_color", "normal"),
            help=m.get("help"),
        )


def render_flash_messages(messages: list):
    """Show (level, message) pairs queued before the last rerun."""
    for level, message in messages:
        if level == "error":
            st.error(message)
        elif level == "warning":
            st.warning(message)
        else:
            st.success(message)
