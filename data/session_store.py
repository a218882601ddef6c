"""Typed wrapper around st.session_state for the per-session store and UI state."""

import logging
from typing import Optional

import streamlit as st

from data.store import DataStore, create_store
from data.sample_data import seed_store
from models.auth import AuthUser

logger = logging.getLogger(__name__)

BUILDING_WIDGET_KEY = "sidebar_building"


def initialize_session_state(settings):
    """Initialize all session state keys with defaults and build this session's store."""
    defaults = {
        "user": None,
        "selected_building_id": None,
        "directory_page": 1,
        "flash_messages": [],
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default

    if "store" not in st.session_state:
        store = create_store(settings)
        if settings.data_backend == "memory" and settings.load_sample_data:
            summary = seed_store(store)
            if not summary.ok:
                logger.error(f"Sample data failed to load: {summary.errors}")
        st.session_state["store"] = store


# --- Getters ---

def get_store() -> DataStore:
    return st.session_state["store"]


def get_user() -> Optional[AuthUser]:
    return st.session_state.get("user")


def is_authenticated() -> bool:
    return get_user() is not None


def get_selected_building_id() -> Optional[str]:
    return st.session_state.get("selected_building_id")


def get_directory_page() -> int:
    return st.session_state.get("directory_page", 1)


# --- Setters ---

def set_user(user: Optional[AuthUser]):
    st.session_state["user"] = user


def set_selected_building_id(building_id: Optional[str]):
    st.session_state["selected_building_id"] = building_id


def set_directory_page(page: int):
    st.session_state["directory_page"] = page


# --- Flash messages, shown once after a rerun ---

def add_flash(message: str, level: str = "success"):
    st.session_state["flash_messages"].append((level, message))


def pop_flashes() -> list:
    messages = st.session_state.get("flash_messages", [])
    st.session_state["flash_messages"] = []
    return messages


def select_building(building_id: Optional[str]):
    """Button callback: select a building and move the sidebar selector with it."""
    set_selected_building_id(building_id)
    st.session_state[BUILDING_WIDGET_KEY] = building_id


def sign_out():
    set_user(None)
    set_selected_building_id(None)
    st.session_state.pop(BUILDING_WIDGET_KEY, None)
