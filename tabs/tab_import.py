"""Tab 5: Import: bulk upload of portfolio spreadsheets and sample data."""

import io
import logging

import streamlit as st

from data.loader import IMPORT_ORDER, import_frames, load_file, load_workbook
from data.sample_data import generate_sample_frames, write_sample_workbook
from data.session_store import get_store
from data.store import StoreError
from data.validator import TABLE_LABELS, validate_cross_file, validate_frame
from components.metrics_cards import render_metric_row

logger = logging.getLogger(__name__)


def _validate_and_import(frames) -> bool:
    """Validate uploaded frames, then insert them parents first."""
    errors = []
    warnings = []

    for table, df in frames.items():
        result = validate_frame(df, table)
        errors.extend(result.errors)
        warnings.extend(result.warnings)

    if not errors:
        warnings.extend(validate_cross_file(frames).warnings)

    if errors:
        for e in errors:
            st.error(e)
        return False

    for w in warnings:
        st.warning(w)

    try:
        summary = import_frames(get_store(), frames)
    except StoreError as e:
        logger.error(f"Import failed: {e}")
        st.error(f"Import failed: {e}")
        return False

    for w in summary.warnings:
        st.warning(w)
    if summary.inserted:
        render_metric_row([
            {"label": TABLE_LABELS[table] + "s", "value": count}
            for table, count in summary.inserted.items()
        ])
    if not summary.ok:
        for e in summary.errors:
            st.error(e)
        st.caption("Tables listed above the failure were imported. Fix the file and upload the remaining sheets.")
        return False

    st.success("Import complete.")
    return True


def render(sidebar_state):
    """Render the Import tab."""
    st.header("Import Data")

    upload_mode = st.radio(
        "Upload mode",
        ["Single Excel workbook", "Separate files per table"],
        horizontal=True,
        key="import_mode",
    )

    if upload_mode == "Single Excel workbook":
        st.caption(
            "Upload one `.xlsx` file with sheets named **Developers**, **Buildings**, **Floors**, "
            "**Units**, **Vacant Spaces** and **Tenants**. Only the Buildings sheet is required."
        )
        workbook = st.file_uploader("Portfolio workbook", type=["xlsx"], key="import_workbook")
        if st.button("Upload & Validate", type="primary", key="btn_import_workbook"):
            if workbook:
                try:
                    frames = load_workbook(workbook)
                except ValueError as e:
                    st.error(str(e))
                else:
                    _validate_and_import(frames)
            else:
                st.warning("Please upload an Excel file.")
    else:
        uploads = {}
        cols = st.columns(3)
        for i, table in enumerate(IMPORT_ORDER):
            with cols[i % 3]:
                uploads[table] = st.file_uploader(
                    TABLE_LABELS[table], type=["csv", "xlsx"], key=f"import_{table}",
                )
        if st.button("Upload & Validate", type="primary", key="btn_import_files"):
            chosen = {table: f for table, f in uploads.items() if f is not None}
            if not chosen:
                st.warning("Please upload at least one file.")
            else:
                try:
                    frames = {table: load_file(f) for table, f in chosen.items()}
                except ValueError as e:
                    st.error(str(e))
                else:
                    _validate_and_import(frames)

    st.divider()
    st.subheader("Sample Data")
    col_load, col_download = st.columns(2)
    with col_load:
        if st.button("Load Sample Data", key="btn_sample_load"):
            _validate_and_import(generate_sample_frames())
    with col_download:
        buffer = io.BytesIO()
        write_sample_workbook(buffer)
        st.download_button(
            "Download sample workbook",
            data=buffer.getvalue(),
            file_name="sample_portfolio.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            key="btn_sample_download",
        )
