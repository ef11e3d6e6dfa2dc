"""
Cyrus Portfolio - personal site with a blog and two data utilities
A Streamlit application

STRUCTURE:
- config.py: Configuration and constants
- reconciliation/: Matching, discrepancy detection and change detection
- extractors/: Parsers for uploaded sources
- utils/: Export helpers and the blog content store
- content/: Bundled blog posts
- pages/: Streamlit page components
"""
import logging

import streamlit as st

from config import (
    APP_ICON,
    APP_LAYOUT,
    APP_TITLE,
    LOG_FORMAT,
    LOG_LEVEL,
    NAV_LABELS,
    PAGE_BLOG,
    PAGE_DATA_COMPARISON,
    PAGE_EXCEL_ANALYSIS,
    PAGE_HOME,
    SESSION_NAV_PAGE,
)

# Import page modules
from pages.blog import blog_page
from pages.data_comparison import data_comparison_page
from pages.excel_analysis import excel_analysis_page
from pages.home import home_page

PAGES = {
    PAGE_HOME: home_page,
    PAGE_BLOG: blog_page,
    PAGE_DATA_COMPARISON: data_comparison_page,
    PAGE_EXCEL_ANALYSIS: excel_analysis_page,
}


def configure_logging():
    """Configure root logging once per process."""
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)


def apply_custom_css():
    """Apply custom CSS styling to the app."""
    st.markdown("""
        <style>
        .hero-title {
            font-size: 4rem;
            font-weight: 800;
            color: #1E293B;
            margin: 2rem 0 0.5rem 0;
        }
        .main-header {
            font-size: 2.5rem;
            font-weight: bold;
            color: #1E88E5;
            text-align: center;
            margin-bottom: 1rem;
        }
        .sub-header {
            font-size: 1.2rem;
            color: #424242;
            text-align: center;
            margin-bottom: 2rem;
        }
        .stButton>button {
            width: 100%;
        }
        </style>
    """, unsafe_allow_html=True)


def main():
    """Main application function."""
    configure_logging()

    st.set_page_config(
        page_title=APP_TITLE,
        page_icon=APP_ICON,
        layout=APP_LAYOUT
    )

    apply_custom_css()

    labels = list(NAV_LABELS.values())
    pages_by_label = {label: page for page, label in NAV_LABELS.items()}

    with st.sidebar:
        st.title(f"{APP_ICON} {APP_TITLE}")
        st.markdown("---")

        label = st.radio(
            "Select Page",
            labels,
            key=SESSION_NAV_PAGE,
            label_visibility="collapsed"
        )

        st.markdown("---")

        st.markdown("### 📋 Data Tools")
        st.markdown("""
        **Data Comparison**
        1. Upload the OneCX JSON export
        2. Upload the Excel mapping table
        3. Upload the GraphQL terms JSON
        4. Compare and download CSV / Excel / PDF

        **Excel Analysis**
        1. Upload the reference Excel file
        2. Upload the daily JSON export
        3. Analyze and download the changes
        """)

    PAGES[pages_by_label[label]]()


if __name__ == "__main__":
    main()
