"""Building Portfolio Manager: Streamlit entry point."""

import logging
import os
import sys

import streamlit as st

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config.settings import get_settings
from components.metrics_cards import render_flash_messages
from components.sidebar import render_sidebar
from data.auth import authenticate
from data.session_store import get_store, initialize_session_state, is_authenticated, pop_flashes, set_user
from tabs import (
    tab_directory,
    tab_building_detail,
    tab_building_dashboard,
    tab_manage,
    tab_import,
)

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def render_login():
    """Sign-in form shown until the session has a user."""
    st.title("Building Portfolio")
    with st.form("login"):
        email = st.text_input("Email", key="login_email")
        password = st.text_input("Password", type="password", key="login_password")
        if st.form_submit_button("Sign in", type="primary"):
            user = authenticate(get_store(), email, password)
            if user:
                set_user(user)
                st.rerun()
            else:
                st.error("Invalid email or password.")
    if settings.data_backend == "memory":
        st.caption("Demo mode: sign in with one of the configured demo accounts.")


def main():
    st.set_page_config(
        page_title="Building Portfolio",
        page_icon="🏢",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    initialize_session_state(settings)

    if not is_authenticated():
        render_login()
        return

    sidebar_state = render_sidebar(settings.data_backend)
    render_flash_messages(pop_flashes())

    tab1, tab2, tab3, tab4, tab5 = st.tabs([
        "🏙️ Directory",
        "🏢 Building Detail",
        "📊 Building Dashboard",
        "✏️ Manage Data",
        "📥 Import",
    ])

    with tab1:
        tab_directory.render(sidebar_state)
    with tab2:
        tab_building_detail.render(sidebar_state)
    with tab3:
        tab_building_dashboard.render(sidebar_state)
    with tab4:
        tab_manage.render(sidebar_state)
    with tab5:
        tab_import.render(sidebar_state)


if __name__ == "__main__":
    main()
