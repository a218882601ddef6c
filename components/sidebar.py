"""Global sidebar: signed-in user, sign out and building selection."""

import logging
from dataclasses import dataclass
from typing import Optional

import streamlit as st

from data.repository import list_buildings
from data.session_store import (
    BUILDING_WIDGET_KEY, get_selected_building_id, get_store, get_user,
    set_selected_building_id, sign_out,
)
from data.store import StoreError

logger = logging.getLogger(__name__)


@dataclass
class SidebarState:
    user_email: str
    building_id: Optional[str]


def render_sidebar(backend: str) -> SidebarState:
    """Render the global sidebar controls and return current state."""
    user = get_user()
    with st.sidebar:
        st.title("Building Portfolio")
        st.caption(f"Signed in as {user.email}")
        st.button("Sign out", key="sidebar_sign_out", on_click=sign_out)
        st.divider()

        try:
            buildings = list_buildings(get_store())
        except StoreError as e:
            logger.error(f"Could not load buildings for sidebar: {e}")
            st.error("Could not load buildings.")
            buildings = []

        names = {b.id: f"{b.name} ({b.id})" for b in buildings}
        options = [None] + list(names.keys())
        current = get_selected_building_id()
        # Widget state follows the stored selection, which may have been deleted
        if st.session_state.get(BUILDING_WIDGET_KEY, current) not in options:
            st.session_state[BUILDING_WIDGET_KEY] = None
        else:
            st.session_state.setdefault(BUILDING_WIDGET_KEY, current)

        selected = st.selectbox(
            "Building",
            options=options,
            format_func=lambda x: "Select a building" if x is None else names.get(x, x),
            key=BUILDING_WIDGET_KEY,
        )
        if selected != current:
            set_selected_building_id(selected)

        st.divider()
        st.caption(f"Data backend: {backend}")
        st.caption(f"{len(buildings)} buildings")

    return SidebarState(user_email=user.email, building_id=selected)
