"""
Excel Analysis Page
Compare the reference agency workbook with a daily JSON export
"""

from datetime import date

import pandas as pd
import streamlit as st

from config import MAPPING_FILE_TYPES, SESSION_BASELINE, SESSION_CHANGES, SESSION_SNAPSHOT, SNAPSHOT_FILE_TYPES
from extractors.source_parsers import SOURCE_SNAPSHOT, decode_upload, parse_agency_snapshot, parse_agency_workbook
from reconciliation.changeset import diff_agency_snapshots, summarize_changes
from reconciliation.errors import ReconciliationError
from reconciliation.models import ChangeType
from utils.excel_export import AGENCY_EXPORT_COLUMNS, changes_to_sheets, convert_sheets_to_excel


def _load(uploaded_file, session_key: str, parser, label: str):
    """Parse an upload into session state; any change of input drops the last analysis."""
    previous = st.session_state.get(session_key)
    if uploaded_file is None:
        if previous is not None:
            st.session_state.pop(SESSION_CHANGES, None)
        st.session_state.pop(session_key, None)
        return None

    file_id = getattr(uploaded_file, "file_id", None) or uploaded_file.name
    if previous is not None and previous["file_id"] == file_id:
        return previous

    st.session_state.pop(SESSION_CHANGES, None)
    try:
        records = parser(uploaded_file)
    except ReconciliationError as e:
        st.session_state.pop(session_key, None)
        st.error(f"❌ Error reading {label}: {e}")
        return None

    st.session_state[session_key] = {"name": uploaded_file.name, "file_id": file_id, "data": records}
    return st.session_state[session_key]


def _preview(file_data: dict, title: str):
    st.success(f"✅ Loaded {len(file_data['data'])} records from {file_data['name']}")
    with st.expander(f"👁️ {title}"):
        preview_df = pd.DataFrame([r.as_dict() for r in file_data["data"]], columns=AGENCY_EXPORT_COLUMNS)
        st.dataframe(preview_df, use_container_width=True, hide_index=True)


def excel_analysis_page():
    """Excel Analysis: added, modified and removed agency records."""
    st.markdown('<div class="main-header">📊 Agency Data Analysis Tool</div>', unsafe_allow_html=True)
    st.markdown(
        '<div class="sub-header">Compare your static Excel file with daily JSON data exports '
        'to identify changes in agency records</div>',
        unsafe_allow_html=True,
    )

    st.markdown("---")

    col1, col2 = st.columns(2)
    with col1:
        st.markdown("### 📗 Reference Excel File")
        baseline_file = st.file_uploader(
            "Upload your reference Excel file containing agency data",
            type=MAPPING_FILE_TYPES,
            key="baseline_upload",
        )
        baseline = _load(baseline_file, SESSION_BASELINE, parse_agency_workbook, "Excel file")
        if baseline:
            _preview(baseline, "Excel File Preview")

    with col2:
        st.markdown("### 📄 Daily JSON Export")
        snapshot_file = st.file_uploader(
            "Upload the daily text export (JSON array, timestamp header allowed)",
            type=SNAPSHOT_FILE_TYPES,
            key="snapshot_upload",
        )
        snapshot = _load(
            snapshot_file,
            SESSION_SNAPSHOT,
            lambda f: parse_agency_snapshot(decode_upload(f, SOURCE_SNAPSHOT)),
            "text file",
        )
        if snapshot:
            _preview(snapshot, "Text File Preview")

    st.markdown("---")
    col1, col2, col3 = st.columns([1, 2, 1])
    with col2:
        analyze_button = st.button(
            "🔍 Analyze Changes",
            type="primary",
            use_container_width=True,
            disabled=not (baseline and snapshot),
        )

    if analyze_button and baseline and snapshot:
        with st.spinner("Analyzing changes..."):
            st.session_state[SESSION_CHANGES] = diff_agency_snapshots(baseline["data"], snapshot["data"])

    changes = st.session_state.get(SESSION_CHANGES)
    if changes is None:
        return

    counts = summarize_changes(changes)

    st.markdown("---")
    st.markdown("### ✅ Analysis Complete!")

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Added", counts[ChangeType.ADDED.value])
    with col2:
        st.metric("Modified", counts[ChangeType.MODIFIED.value])
    with col3:
        st.metric("Removed", counts[ChangeType.REMOVED.value])

    if not changes:
        st.info("ℹ️ No changes detected - the daily export matches the reference file.")
        return

    sheets = changes_to_sheets(changes)
    for sheet_name, df in sheets.items():
        with st.expander(f"{sheet_name} ({len(df)} rows)", expanded=True):
            st.dataframe(df, use_container_width=True, hide_index=True)

    st.markdown("---")
    col1, col2, col3 = st.columns([1, 2, 1])
    with col2:
        st.download_button(
            label="📥 Download Changes Excel File",
            data=convert_sheets_to_excel(sheets),
            file_name=f"agency_changes_analysis_{date.today().isoformat()}.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            type="primary",
            use_container_width=True,
        )
