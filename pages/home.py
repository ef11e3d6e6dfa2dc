"""
Home Page
Landing section and feature grid
"""

import streamlit as st

from config import (
    GITHUB_PROFILE_URL,
    NAV_LABELS,
    PAGE_BLOG,
    PAGE_DATA_COMPARISON,
    PAGE_EXCEL_ANALYSIS,
    SESSION_NAV_PAGE,
)

FEATURES = [
    {"icon": "📊", "title": "Excel Analysis", "description": "Advanced spreadsheet analysis", "page": PAGE_EXCEL_ANALYSIS},
    {"icon": "🔀", "title": "Data Comparison", "description": "Compare multiple data sources for discrepancies", "page": PAGE_DATA_COMPARISON},
    {"icon": "📝", "title": "Personal Blog", "description": "Thoughts, insights, and stories", "page": PAGE_BLOG},
    {"icon": "🐙", "title": "GitHub Profile", "description": "Explore my open source projects", "url": GITHUB_PROFILE_URL},
    {"icon": "💻", "title": "Code Projects", "description": "Interactive coding experiments", "page": None},
]


def _go_to(page: str):
    st.session_state[SESSION_NAV_PAGE] = NAV_LABELS[page]


def home_page():
    """Home Page: hero text and links to every feature."""
    st.markdown('<div class="hero-title">This Is Cyrus</div>', unsafe_allow_html=True)
    st.markdown('<div class="sub-header">Blog posts, data tools and experiments</div>', unsafe_allow_html=True)

    st.markdown("---")
    st.markdown("### ✨ Features")

    columns = st.columns(3)
    for idx, feature in enumerate(FEATURES):
        with columns[idx % 3]:
            with st.container(border=True):
                st.markdown(f"#### {feature['icon']} {feature['title']}")
                st.caption(feature['description'])

                if feature.get("url"):
                    st.link_button("Open ↗", feature["url"], use_container_width=True)
                elif feature.get("page"):
                    st.button(
                        "Open",
                        key=f"feature_{idx}",
                        on_click=_go_to,
                        args=(feature["page"],),
                        use_container_width=True,
                    )
                else:
                    st.button("Coming soon", key=f"feature_{idx}", disabled=True, use_container_width=True)
