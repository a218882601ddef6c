"""Tab 4: Manage Data: create, edit and delete portfolio records."""

import logging

import pandas as pd
import streamlit as st

from data import actions
from data.records import to_row
from data.repository import list_buildings, list_developers, list_floors, list_tenants, list_units, list_vacant_spaces
from data.session_store import add_flash, get_store
from data.store import StoreError
from engine.dashboard import parse_date
from config.defaults import (
    BUILDING_STATUSES, BUILDING_STRUCTURES, BUILDING_TITLES, CONSTRUCTION_STATUSES,
    DEFAULT_PREMISES_CONDITION, GRADES, HANDOVER_CONDITIONS, PREMISES_CONDITIONS,
    SPACE_TYPES, UNIT_STATUSES,
)

logger = logging.getLogger(__name__)

# (field, label, kind, options) per form; kind is text, number, int, select or date
DEVELOPER_FIELDS = [
    ("name", "Name *", "text", None),
    ("group_name", "Group", "text", None),
    ("contact_person", "Contact Person", "text", None),
    ("contact_email", "Contact Email", "text", None),
    ("contact_phone", "Contact Phone", "text", None),
    ("website", "Website", "text", None),
]

BUILDING_FIELDS = [
    ("name", "Name *", "text", None),
    ("location", "Location", "text", None),
    ("micromarket_zone", "Micromarket Zone", "text", None),
    ("grade", "Grade", "select", GRADES),
    ("building_structure", "Structure", "select", BUILDING_STRUCTURES),
    ("building_title", "Title", "select", BUILDING_TITLES),
    ("total_area", "Total Area (sq ft)", "number", None),
    ("cam", "CAM", "number", None),
    ("certifications", "Certifications", "text", None),
    ("google_coordinates", "Coordinates (lat, lng)", "text", None),
    ("year_built", "Year Built", "int", None),
    ("construction_status", "Construction Status", "select", CONSTRUCTION_STATUSES),
    ("building_status", "Building Status", "select", BUILDING_STATUSES),
    ("building_image_link", "Image Link", "text", None),
]

FLOOR_FIELDS = [
    ("floor_no", "Floor No", "int", None),
    ("floor_plate", "Floor Plate (sq ft)", "number", None),
    ("no_of_units", "No. of Units", "int", None),
    ("efficiency", "Efficiency (%)", "number", None),
    ("type_of_space", "Type of Space", "select", SPACE_TYPES),
    ("floor_plan", "Floor Plan Link", "text", None),
]

UNIT_FIELDS = [
    ("unit_no", "Unit No", "text", None),
    ("chargeable_area", "Chargeable Area (sq ft)", "number", None),
    ("carpet_area", "Carpet Area (sq ft)", "number", None),
    ("status", "Status", "select", UNIT_STATUSES),
    ("premises_condition", "Premises Condition", "select", PREMISES_CONDITIONS),
]

TENANT_FIELDS = [
    ("name", "Tenant Name *", "text", None),
    ("current_rent", "Current Rent", "number", None),
    ("lease_commencement_date", "Lease Commencement", "date", None),
    ("lease_expiry", "Lease Expiry", "date", None),
    ("lease_period", "Lease Period (months)", "int", None),
    ("lock_in_period", "Lock-in (months)", "int", None),
    ("lock_in_expiry", "Lock-in Expiry", "date", None),
    ("security_deposit", "Security Deposit", "number", None),
    ("escalation", "Escalation (%)", "number", None),
    ("notice_period", "Notice Period (months)", "int", None),
    ("primary_industry_sector", "Industry Sector", "text", None),
    ("type_of_user", "Type of User", "text", None),
    ("car_parking_ratio", "Car Parking Ratio", "text", None),
    ("car_parking_charges", "Car Parking Charges", "number", None),
    ("handover_conditions", "Handover Conditions", "text", None),
    ("status", "Status", "text", None),
]

VACANCY_FIELDS = [
    ("quoted_rent", "Quoted Rent", "number", None),
    ("availability_date", "Available From", "date", None),
    ("handover_condition", "Handover Condition", "select", HANDOVER_CONDITIONS),
]


def _render_fields(fields, key_prefix: str, initial: dict = None) -> dict:
    """Render form inputs in two columns and return the entered values."""
    initial = initial or {}
    values = {}
    cols = st.columns(2)
    for i, (name, label, kind, options) in enumerate(fields):
        current = initial.get(name)
        key = f"{key_prefix}_{name}"
        with cols[i % 2]:
            if kind == "number":
                values[name] = st.number_input(label, min_value=0.0, value=float(current) if current is not None else None,
                                               key=key)
            elif kind == "int":
                values[name] = st.number_input(label, value=int(current) if current is not None else None,
                                               step=1, key=key)
            elif kind == "select":
                choices = [None] + list(options)
                if current and current not in choices:
                    choices.append(current)
                values[name] = st.selectbox(label, choices, index=choices.index(current) if current in choices else 0,
                                            format_func=lambda x: "-" if x is None else x, key=key)
            elif kind == "date":
                picked = st.date_input(label, value=parse_date(current), key=key)
                values[name] = picked.isoformat() if picked else None
            else:
                values[name] = st.text_input(label, value=current or "", key=key)
    return values


def _report(result, message: str):
    """Queue a success message and rerun, or show the failure in place."""
    if result.success:
        add_flash(message)
        for warning in result.warnings:
            add_flash(warning, "warning")
        st.rerun()
    else:
        st.error(result.error)


def _pick(label: str, records, describe, key: str):
    """Selectbox over records; returns the chosen record or None."""
    by_id = {r.id: r for r in records}
    choice = st.selectbox(label, [None] + list(by_id), format_func=lambda x: "-" if x is None else describe(by_id[x]),
                          key=key)
    return by_id.get(choice)


def _edit_and_delete(what: str, record, fields, update, delete, key_prefix: str, warning: str = ""):
    with st.form(f"{key_prefix}_edit_{record.id}"):
        values = _render_fields(fields, f"{key_prefix}_edit_{record.id}", to_row(record))
        if st.form_submit_button(f"Save {what}"):
            _report(update(get_store(), record.id, values), f"{what} updated.")
    if warning:
        st.caption(warning)
    if st.button(f"Delete {what}", key=f"{key_prefix}_delete_{record.id}", type="secondary"):
        _report(delete(get_store(), record.id), f"{what} deleted.")


def _developers_section(store):
    st.subheader("Developers")
    developers = list_developers(store)
    if developers:
        st.dataframe(pd.DataFrame([to_row(d) for d in developers]), use_container_width=True, hide_index=True)

    with st.expander("Add developer", expanded=not developers):
        with st.form("dev_create", clear_on_submit=True):
            dev_id = st.text_input("Developer ID *", value=actions.suggest_developer_id(store), key="dev_new_id")
            values = _render_fields(DEVELOPER_FIELDS, "dev_new")
            if st.form_submit_button("Create developer", type="primary"):
                _report(actions.create_developer(store, {"id": dev_id, **values}), "Developer created.")

    developer = _pick("Edit developer", developers, lambda d: f"{d.name} ({d.id})", "dev_pick")
    if developer:
        _edit_and_delete("Developer", developer, DEVELOPER_FIELDS,
                         actions.update_developer, actions.delete_developer, "dev")


def _buildings_section(store):
    st.subheader("Buildings")
    buildings = list_buildings(store)
    picks = actions.building_pick_lists(store)

    with st.expander("Add building", expanded=not buildings):
        with st.form("bld_create", clear_on_submit=True):
            col1, col2 = st.columns(2)
            building_id = col1.text_input("Building ID *", value=actions.suggest_building_id(store), key="bld_new_id")
            developer_ids = sorted(set(picks["developer_ids"]) | {d.id for d in list_developers(store)})
            developer_id = col2.selectbox("Developer ID *", developer_ids, key="bld_new_dev")
            if picks["locations"]:
                st.caption(f"Known locations: {', '.join(picks['locations'])}")
            values = _render_fields(BUILDING_FIELDS, "bld_new")
            if st.form_submit_button("Create building", type="primary"):
                values.update(id=building_id, developer_id=developer_id)
                _report(actions.create_building(store, values), "Building created.")

    building = _pick("Edit building", buildings, lambda b: f"{b.name} ({b.id})", "bld_pick")
    if building:
        _edit_and_delete("Building", building, BUILDING_FIELDS, actions.update_building, actions.delete_building,
                         "bld", warning="Deleting a building also deletes its floors, units, tenants and vacancies.")


def _floors_section(store):
    st.subheader("Floors")
    building = _pick("Building", list_buildings(store), lambda b: f"{b.name} ({b.id})", "flr_building")
    if not building:
        return
    floors = list_floors(store, building.id)
    if floors:
        st.dataframe(pd.DataFrame([to_row(f) for f in floors]), use_container_width=True, hide_index=True)

    with st.expander("Add floors"):
        with st.form("flr_create", clear_on_submit=True):
            values = _render_fields(FLOOR_FIELDS, "flr_new")
            copies = st.number_input("Number of consecutive floors", min_value=1, value=1, step=1, key="flr_count")
            if st.form_submit_button("Create floors", type="primary"):
                start = values.get("floor_no")
                rows = []
                for i in range(int(copies)):
                    row = dict(values, building_id=building.id)
                    if start is not None:
                        row["floor_no"] = int(start) + i
                    rows.append(row)
                _report(actions.create_multiple_floors(store, rows), f"{len(rows)} floors created.")

    floor = _pick("Edit floor", floors, lambda f: f"Floor {f.floor_no} ({f.id})", "flr_pick")
    if floor:
        _edit_and_delete("Floor", floor, FLOOR_FIELDS, actions.update_floor, actions.delete_floor, "flr",
                         warning="Deleting a floor also deletes its units, tenants and vacancies.")


def _units_section(store):
    st.subheader("Units")
    building = _pick("Building", list_buildings(store), lambda b: f"{b.name} ({b.id})", "unit_building")
    if not building:
        return
    floor = _pick("Floor", list_floors(store, building.id), lambda f: f"Floor {f.floor_no} ({f.id})", "unit_floor")
    if not floor:
        return
    units = list_units(store, floor.id)
    if units:
        st.dataframe(pd.DataFrame([to_row(u) for u in units]), use_container_width=True, hide_index=True)

    with st.expander("Add units"):
        with st.form("unit_create", clear_on_submit=True):
            col1, col2, col3 = st.columns(3)
            count = col1.number_input("How many units", min_value=1, value=1, step=1, key="unit_count")
            prefix = col2.text_input("Unit number prefix", value=str(floor.floor_no or ""), key="unit_prefix")
            start = col3.number_input("Start at", min_value=0, value=1, step=1, key="unit_start")
            col4, col5, col6 = st.columns(3)
            chargeable = col4.number_input("Chargeable area each", min_value=0.0, key="unit_chargeable")
            carpet = col5.number_input("Carpet area each", min_value=0.0, key="unit_carpet")
            condition = col6.selectbox("Premises condition", PREMISES_CONDITIONS,
                                       index=PREMISES_CONDITIONS.index(DEFAULT_PREMISES_CONDITION), key="unit_cond")
            if st.form_submit_button("Create units", type="primary"):
                result = actions.create_multiple_units(
                    store, floor.id, count=int(count), prefix=prefix, start=int(start),
                    chargeable_area=chargeable, carpet_area=carpet, premises_condition=condition,
                )
                _report(result, f"{int(count)} units created.")

    unit = _pick("Edit unit", units, lambda u: f"Unit {u.unit_no} ({u.id})", "unit_pick")
    if unit:
        _edit_and_delete("Unit", unit, UNIT_FIELDS, actions.update_unit, actions.delete_unit, "unit",
                         warning="Deleting a unit also deletes its tenant and vacancy rows.")


def _leasing_section(store):
    st.subheader("Tenants & Vacancies")
    building = _pick("Building", list_buildings(store), lambda b: f"{b.name} ({b.id})", "lease_building")
    if not building:
        return
    floor = _pick("Floor", list_floors(store, building.id), lambda f: f"Floor {f.floor_no} ({f.id})", "lease_floor")
    if not floor:
        return
    units = list_units(store, floor.id)
    if units:
        with st.expander("Add tenant to several units"):
            with st.form(f"ten_batch_{floor.id}", clear_on_submit=True):
                chosen = st.multiselect("Units", units, format_func=lambda u: f"Unit {u.unit_no}",
                                        key=f"ten_batch_units_{floor.id}")
                values = _render_fields(TENANT_FIELDS, f"ten_batch_{floor.id}")
                if st.form_submit_button("Create tenants", type="primary"):
                    rows = [{"unit_id": u.id, **values} for u in chosen]
                    _report(actions.create_multiple_tenants(store, rows), f"{len(rows)} tenants created.")

    unit = _pick("Unit", units, lambda u: f"Unit {u.unit_no}", "lease_unit")
    if not unit:
        return

    tenants = list_tenants(store, [unit.id])
    vacancies = list_vacant_spaces(store, [unit.id])
    vacancy = vacancies[-1] if vacancies else None
    if vacancy and tenants:
        st.warning("This unit has both a vacancy listing and a tenant. It is shown as available.")

    st.markdown("**Vacancy listing**")
    with st.form(f"vac_{unit.id}"):
        values = _render_fields(VACANCY_FIELDS, f"vac_{unit.id}", to_row(vacancy) if vacancy else None)
        if st.form_submit_button("Save listing", type="primary"):
            _report(actions.record_vacancy(store, {"unit_id": unit.id, **values}), "Vacancy listing saved.")
    if vacancy and st.button("Remove listing", key=f"vac_clear_{unit.id}"):
        _report(actions.clear_vacancy(store, unit.id), "Vacancy listing removed.")

    st.markdown("**Tenants**")
    if tenants:
        st.dataframe(pd.DataFrame([to_row(t) for t in tenants]), use_container_width=True, hide_index=True)
    with st.expander("Add tenant"):
        with st.form(f"ten_new_{unit.id}", clear_on_submit=True):
            values = _render_fields(TENANT_FIELDS, f"ten_new_{unit.id}")
            if st.form_submit_button("Create tenant", type="primary"):
                _report(actions.create_tenant(store, {"unit_id": unit.id, **values}), "Tenant created.")

    tenant = _pick("Edit tenant", tenants, lambda t: t.name, "ten_pick")
    if tenant:
        _edit_and_delete("Tenant", tenant, TENANT_FIELDS, actions.update_tenant, actions.delete_tenant, "ten")


def render(sidebar_state):
    """Render the Manage Data tab."""
    st.header("Manage Data")
    store = get_store()

    section = st.radio(
        "Records",
        ["Developers", "Buildings", "Floors", "Units", "Tenants & Vacancies"],
        horizontal=True,
        key="manage_section",
    )
    try:
        if section == "Developers":
            _developers_section(store)
        elif section == "Buildings":
            _buildings_section(store)
        elif section == "Floors":
            _floors_section(store)
        elif section == "Units":
            _units_section(store)
        else:
            _leasing_section(store)
    except StoreError as e:
        logger.error(f"Manage data failed: {e}")
        st.error(f"Could not load records: {e}")
