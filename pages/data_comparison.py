"""
Data Comparison Page
Cross-check the OneCX export, the Excel mapping table and GraphQL taxonomy terms
"""

import time
from datetime import date

import pandas as pd
import streamlit as st

from config import (
    COMPARISON_DELAY_SECONDS,
    MAPPING_FILE_TYPES,
    ONECX_FILE_TYPES,
    SESSION_DISCREPANCIES,
    SESSION_MAPPING,
    SESSION_ONECX,
    SESSION_TAXONOMY,
    TAXONOMY_FILE_TYPES,
)
from extractors.source_parsers import (
    SOURCE_ONECX,
    SOURCE_TAXONOMY,
    decode_upload,
    parse_mapping_file,
    parse_onecx_export,
    parse_taxonomy_terms,
)
from reconciliation.classifier import run_comparison, summarize
from reconciliation.errors import ReconciliationError, SourcesNotLoadedError
from reconciliation.models import DISCREPANCY_LABELS, DiscrepancyType, Severity
from utils.excel_export import convert_df_to_csv, convert_df_to_excel, discrepancies_to_dataframe
from utils.pdf_report import discrepancies_to_pdf


def _parse_onecx(uploaded_file):
    return parse_onecx_export(decode_upload(uploaded_file, SOURCE_ONECX))


def _parse_taxonomy(uploaded_file):
    return parse_taxonomy_terms(decode_upload(uploaded_file, SOURCE_TAXONOMY))


def _load_source(uploaded_file, session_key: str, parser, label: str):
    """
    Parse an upload into session state. A failed parse clears only this source.
    """
    marker = f"{session_key}_file"
    if uploaded_file is None:
        if marker in st.session_state:
            # Source removed: the previous result no longer matches the inputs
            st.session_state.pop(SESSION_DISCREPANCIES, None)
        st.session_state.pop(session_key, None)
        st.session_state.pop(marker, None)
        return

    file_id = getattr(uploaded_file, "file_id", None) or uploaded_file.name
    if st.session_state.get(marker) == file_id and session_key in st.session_state:
        return

    st.session_state.pop(SESSION_DISCREPANCIES, None)
    try:
        st.session_state[session_key] = parser(uploaded_file)
        st.session_state[marker] = file_id
    except ReconciliationError as e:
        st.session_state.pop(session_key, None)
        st.session_state.pop(marker, None)
        st.error(f"❌ Error uploading {label} file: {e}")


def _upload_column(title: str, help_text: str, file_types, key: str, session_key: str, parser, noun: str):
    st.markdown(f"### {title}")
    uploaded = st.file_uploader(help_text, type=file_types, key=key)
    _load_source(uploaded, session_key, parser, title)

    records = st.session_state.get(session_key)
    if records is not None:
        st.success(f"✅ Loaded {len(records)} {noun}")
        with st.expander("View sample data (first 5 rows)"):
            st.dataframe(pd.DataFrame([r.as_dict() for r in records[:5]]), use_container_width=True)


def _render_results(result):
    discrepancies = result.discrepancies
    summary = summarize(discrepancies)

    st.markdown("---")
    st.markdown("### ✅ Comparison Results")

    if not discrepancies:
        st.success("No Discrepancies Found. All data sources are consistent with each other.")
        return

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Discrepancies", summary["total"])
    with col2:
        st.metric("Critical", summary["by_severity"].get(Severity.CRITICAL.value, 0))
    with col3:
        st.metric("Warning", summary["by_severity"].get(Severity.WARNING.value, 0))
    with col4:
        st.metric("Minor", summary["by_severity"].get(Severity.MINOR.value, 0))

    with st.expander("Counts by type"):
        counts = pd.DataFrame(
            [
                {"Type": DISCREPANCY_LABELS[t], "Count": summary["by_type"].get(t.value, 0)}
                for t in DiscrepancyType
            ]
        )
        st.dataframe(counts, use_container_width=True, hide_index=True)

    # Filters
    col1, col2 = st.columns(2)
    with col1:
        types = st.multiselect(
            "Filter by type",
            [t.value for t in DiscrepancyType if summary["by_type"].get(t.value)],
            format_func=lambda value: DISCREPANCY_LABELS[DiscrepancyType(value)],
        )
    with col2:
        severities = st.multiselect("Filter by severity", [s.value for s in Severity])

    shown = [
        d for d in discrepancies
        if (not types or d.type.value in types)
        and (not severities or (d.scored and d.severity.value in severities))
    ]

    df = discrepancies_to_dataframe(discrepancies)
    shown_df = df[df["ID"].isin([d.id for d in shown])]
    st.dataframe(shown_df, use_container_width=True, hide_index=True)

    if result.ambiguous_matches:
        with st.expander(f"⚠️ {len(result.ambiguous_matches)} name matches had more than one candidate"):
            st.caption("The first candidate (file order) was used for each of these.")
            rows = [
                {
                    "Direction": m.direction,
                    "Record": getattr(m.source, "onecx_agency_name", None) or getattr(m.source, "onecx_name", ""),
                    "Candidates": 1 + len(m.alternates),
                }
                for m in result.ambiguous_matches
            ]
            st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

    # Downloads
    st.markdown("---")
    today = date.today().isoformat()
    col1, col2, col3 = st.columns(3)
    with col1:
        st.download_button(
            label="📥 Download CSV",
            data=convert_df_to_csv(df),
            file_name=f"data_discrepancies_{today}.csv",
            mime="text/csv",
            use_container_width=True,
        )
    with col2:
        st.download_button(
            label="📥 Download Excel",
            data=convert_df_to_excel(df, sheet_name="Discrepancies"),
            file_name=f"data_discrepancies_{today}.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            use_container_width=True,
        )
    with col3:
        st.download_button(
            label="📥 Download PDF",
            data=discrepancies_to_pdf(discrepancies),
            file_name=f"data_discrepancies_{today}.pdf",
            mime="application/pdf",
            use_container_width=True,
        )


def data_comparison_page():
    """Data Comparison: find discrepancies between three data sources."""
    st.markdown('<div class="main-header">🔀 Data Source Comparison</div>', unsafe_allow_html=True)
    st.markdown(
        '<div class="sub-header">Upload your OneCX JSON, Excel mapping table, and GraphQL terms '
        'to identify discrepancies and mismatches across your data sources.</div>',
        unsafe_allow_html=True,
    )

    st.markdown("---")

    col1, col2, col3 = st.columns(3)
    with col1:
        _upload_column(
            "📄 OneCX JSON", "Upload OneCX_UUID-prod.txt (JSON array format)",
            ONECX_FILE_TYPES, "onecx_upload", SESSION_ONECX, _parse_onecx, "records",
        )
    with col2:
        _upload_column(
            "📗 Excel Mapping", "Upload MuleSoft Mapping Table.xlsx",
            MAPPING_FILE_TYPES, "mapping_upload", SESSION_MAPPING, parse_mapping_file, "records",
        )
    with col3:
        _upload_column(
            "🧬 GraphQL Terms", "Upload graphql.json with taxonomy terms",
            TAXONOMY_FILE_TYPES, "taxonomy_upload", SESSION_TAXONOMY, _parse_taxonomy, "terms",
        )

    all_loaded = all(key in st.session_state for key in (SESSION_ONECX, SESSION_MAPPING, SESSION_TAXONOMY))

    st.markdown("---")
    col1, col2, col3 = st.columns([1, 2, 1])
    with col2:
        compare_button = st.button(
            "🔍 Compare Data Sources",
            type="primary",
            use_container_width=True,
            disabled=not all_loaded,
        )

    if compare_button:
        try:
            with st.spinner("Comparing..."):
                time.sleep(COMPARISON_DELAY_SECONDS)
                st.session_state[SESSION_DISCREPANCIES] = run_comparison(
                    st.session_state.get(SESSION_ONECX),
                    st.session_state.get(SESSION_MAPPING),
                    st.session_state.get(SESSION_TAXONOMY),
                )
        except SourcesNotLoadedError as e:
            st.warning(f"⚠️ {e}")
        except Exception as e:
            st.error(f"❌ Error during comparison: {str(e)}")
            import traceback
            st.code(traceback.format_exc())

    result = st.session_state.get(SESSION_DISCREPANCIES)
    if result is not None:
        _render_results(result)
