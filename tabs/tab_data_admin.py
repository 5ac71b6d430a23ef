"""Tab 3: Data & Admin — data upload, validation, content export import, rule config."""

import logging

import pandas as pd
import streamlit as st

from data.loader import (
    load_file, load_multi_sheet_excel, load_cms_export,
    parse_coaches, parse_travel_classes, parse_trains,
)
from data.validator import (
    validate_coaches, validate_travel_classes, validate_trains,
    validate_train_coaches, validate_cross_file,
)
from data.sample_data import (
    generate_coaches_df, generate_travel_classes_df,
    generate_trains_df, generate_train_coaches_df,
)
from data.session_store import (
    set_dataset, clear_dataset, get_coaches, get_travel_classes, get_trains,
    get_rule_config, set_rule_config, reset_rule_config, dataset_counts, is_data_loaded,
)
from config.defaults import DIRECTIONS

logger = logging.getLogger(__name__)


def _load_and_validate(coaches_df, classes_df, trains_df, train_coaches_df, source: str):
    """Validate and store uploaded data."""
    errors = []
    warnings = []

    results = [
        validate_coaches(coaches_df),
        validate_travel_classes(classes_df),
        validate_trains(trains_df),
        validate_train_coaches(train_coaches_df),
    ]
    for r in results:
        errors.extend(r.errors)
        warnings.extend(r.warnings)

    if not errors:
        cross = validate_cross_file(coaches_df, classes_df, trains_df, train_coaches_df)
        warnings.extend(cross.warnings)

    if errors:
        for e in errors:
            st.error(e)
        logger.warning("Upload from %s rejected with %d errors", source, len(errors))
        return False

    for w in warnings:
        st.warning(w)

    coaches = parse_coaches(coaches_df)
    classes = parse_travel_classes(classes_df)
    trains = parse_trains(trains_df, train_coaches_df)
    set_dataset(trains, coaches, classes, source)
    logger.info("Loaded %d trains, %d coaches, %d classes from %s", len(trains), len(coaches), len(classes), source)

    st.success(f"Data loaded: {len(trains)} trains, {len(coaches)} coaches, {len(classes)} travel classes")
    return True


def _load_sample():
    _load_and_validate(
        generate_coaches_df(),
        generate_travel_classes_df(),
        generate_trains_df(),
        generate_train_coaches_df(),
        "sample data",
    )


def _render_upload():
    upload_mode = st.radio(
        "Upload mode",
        ["Single Excel file (4 tabs)", "Four separate files", "Content export (JSON)"],
        horizontal=True,
        key="upload_mode",
    )

    if upload_mode == "Single Excel file (4 tabs)":
        st.caption(
            "Upload one `.xlsx` file with four sheets named: "
            "**Coaches**, **Travel Classes**, **Trains**, **Train Coaches** "
            "(also accepts aliases like 'Coach Master', 'Classes', 'Formation', etc.)"
        )
        single_file = st.file_uploader("Excel workbook with 4 tabs", type=["xlsx"], key="upload_single")
        if st.button("Upload & Validate", type="primary", key="btn_upload_single"):
            if single_file:
                try:
                    frames = load_multi_sheet_excel(single_file)
                    _load_and_validate(*frames, source=single_file.name)
                except (ValueError, KeyError) as e:
                    st.error(f"Error loading file: {e}")
            else:
                st.warning("Please upload an Excel file.")

    elif upload_mode == "Four separate files":
        col1, col2 = st.columns(2)
        with col1:
            coaches_file = st.file_uploader("Coaches", type=["csv", "xlsx"], key="upload_coaches")
            classes_file = st.file_uploader("Travel Classes", type=["csv", "xlsx"], key="upload_classes")
        with col2:
            trains_file = st.file_uploader("Trains", type=["csv", "xlsx"], key="upload_trains")
            assignments_file = st.file_uploader("Train Coaches", type=["csv", "xlsx"], key="upload_train_coaches")

        if st.button("Upload & Validate", type="primary", key="btn_upload_multi"):
            files = [coaches_file, classes_file, trains_file, assignments_file]
            if all(files):
                try:
                    frames = [load_file(f) for f in files]
                    _load_and_validate(*frames, source="uploaded files")
                except (ValueError, KeyError) as e:
                    st.error(f"Error loading files: {e}")
            else:
                st.warning("Please upload all four files.")

    else:
        st.caption("Upload a JSON export with `trains`, `coaches` and `travel_classes` lists.")
        export_file = st.file_uploader("Content export", type=["json"], key="upload_json")
        if st.button("Import", type="primary", key="btn_upload_json"):
            if export_file:
                try:
                    trains, coaches, classes = load_cms_export(export_file)
                    set_dataset(trains, coaches, classes, export_file.name)
                    st.success(
                        f"Data loaded: {len(trains)} trains, {len(coaches)} coaches, "
                        f"{len(classes)} travel classes"
                    )
                except ValueError as e:
                    st.error(f"Error loading export: {e}")
            else:
                st.warning("Please upload a JSON file.")

    col_sample, col_clear = st.columns(2)
    with col_sample:
        if st.button("Load Sample Data", key="btn_sample"):
            _load_sample()
    with col_clear:
        if st.button("Clear Data", key="btn_clear", disabled=not is_data_loaded()):
            clear_dataset()
            st.rerun()


def _render_dataset():
    counts = dataset_counts()
    col1, col2, col3 = st.columns(3)
    col1.metric("Trains", counts["trains"])
    col2.metric("Coaches", counts["coaches"])
    col3.metric("Travel Classes", counts["travel_classes"])

    tab_coaches, tab_classes, tab_trains = st.tabs(["Coaches", "Travel Classes", "Trains"])
    with tab_coaches:
        st.dataframe(pd.DataFrame([{
            "Coach Code": c.coach_code,
            "Total Seats": c.total_seats,
            "Front": f"{c.front_start}-{c.front_end}" if c.front_start and c.front_end else "—",
            "Back": f"{c.back_start}-{c.back_end}" if c.back_start and c.back_end else "—",
            "Auto Back Fill": c.auto_back_fill,
        } for c in get_coaches()]), use_container_width=True, hide_index=True)
    with tab_classes:
        st.dataframe(pd.DataFrame([{
            "Class": t.class_name,
            "Short Code": t.short_code,
            "Default Seats": t.default_total_seats,
            "Has Defaults": t.has_defaults,
        } for t in get_travel_classes()]), use_container_width=True, hide_index=True)
    with tab_trains:
        st.dataframe(pd.DataFrame([{
            "Train ID": t.train_id,
            "Name": t.train_name,
            "Origin": t.route.origin_station,
            "Destination": t.route.destination_station,
            "Code From To": t.route.code_from_to,
            "Code To From": t.route.code_to_from,
            "Coaches": ", ".join(t.coach_codes),
        } for t in get_trains()]), use_container_width=True, hide_index=True)


def _render_rule_config():
    config = get_rule_config()

    codes_text = st.text_input(
        "Reverse route codes",
        value=", ".join(config.get("reverse_route_codes", [])),
        key="cfg_reverse_codes",
        help="Route codes that always mean the return leg, comma separated.",
    )
    tokens_text = st.text_input(
        "Reverse code markers",
        value=", ".join(config.get("reverse_code_tokens", [])),
        key="cfg_reverse_tokens",
        help="A route code containing any of these words is treated as the return leg.",
    )
    odd_direction = st.radio(
        "Odd train numbers run",
        DIRECTIONS,
        index=DIRECTIONS.index(config.get("odd_number_direction", "forward")),
        horizontal=True,
        key="cfg_odd_direction",
    )
    include_grid = st.checkbox("Draw seat maps", value=config.get("include_grid", True), key="cfg_include_grid")

    col_save, col_reset = st.columns(2)
    with col_save:
        if st.button("Save Rule Configuration", type="primary"):
            new_config = {
                "reverse_route_codes": [c.strip() for c in codes_text.split(",") if c.strip()],
                "reverse_code_tokens": [t.strip().lower() for t in tokens_text.split(",") if t.strip()],
                "odd_number_direction": odd_direction,
                "include_grid": include_grid,
            }
            set_rule_config(new_config)
            logger.info("Rule configuration updated: %s", new_config)
            st.success("Rule configuration saved.")
    with col_reset:
        if st.button("Reset to Defaults"):
            reset_rule_config()
            st.rerun()


def render(sidebar_state):
    """Render the Data & Admin tab."""
    st.header("Data & Admin")

    st.subheader("Data Upload")
    _render_upload()

    if is_data_loaded():
        st.divider()
        st.subheader("Loaded Data")
        _render_dataset()

    st.divider()
    st.subheader("Rule Configuration")
    _render_rule_config()
