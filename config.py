"""
Configuration and constants for the portfolio application
"""
import os

# App Settings
APP_TITLE = "Cyrus Portfolio"
APP_ICON = "🧭"
APP_LAYOUT = "wide"

# Page Names
PAGE_HOME = "Home"
PAGE_BLOG = "Blog"
PAGE_DATA_COMPARISON = "Data Comparison"
PAGE_EXCEL_ANALYSIS = "Excel Analysis"

# Environment Variable Names
ENV_LOG_LEVEL = "PORTFOLIO_LOG_LEVEL"
ENV_COMPARISON_DELAY = "PORTFOLIO_COMPARISON_DELAY"

# Logging
LOG_LEVEL = os.getenv(ENV_LOG_LEVEL, "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Pause before a comparison starts so the spinner is visible
COMPARISON_DELAY_SECONDS = float(os.getenv(ENV_COMPARISON_DELAY, "0.5"))

# Session State Keys
SESSION_ONECX = "onecx_records"
SESSION_MAPPING = "mapping_records"
SESSION_TAXONOMY = "taxonomy_terms"
SESSION_DISCREPANCIES = "comparison_result"
SESSION_BASELINE = "baseline_file"
SESSION_SNAPSHOT = "snapshot_file"
SESSION_CHANGES = "change_records"
SESSION_BLOG_SLUG = "blog_slug"

# Upload file types
ONECX_FILE_TYPES = ["txt", "json"]
MAPPING_FILE_TYPES = ["xlsx", "xls", "csv"]
TAXONOMY_FILE_TYPES = ["json"]
SNAPSHOT_FILE_TYPES = ["txt", "json"]

# Mapping table header aliases (case-insensitive substring match, first alias wins)
MAPPING_COLUMN_ALIASES = {
    "sg_instance_name": ["sg instance name", "instance name", "sg instance"],
    "onecx_name": ["onecx name", "oncecx name"],
    "instance_id": ["instance id", "id"],
    "uuid": ["uuid"],
    "sap_instance_id": ["sap instance id", "sap id"],
}

# Baseline agency workbook columns (camelCase key or display header)
AGENCY_COLUMN_ALIASES = {
    "oid": ["_id", "id"],
    "sg_agency_name": ["sgAgencyName", "SG Agency Name"],
    "sg_instance_id": ["sgInstanceId", "SG Instance ID"],
    "onecx_agency_name": ["oncecxAgencyName", "OneCX Agency Name"],
    "onecx_uuid": ["onecxUuid", "OneCX UUID"],
    "department_name": ["departmentName", "Department Name"],
}

# Sidebar navigation labels
SESSION_NAV_PAGE = "nav_page"
NAV_LABELS = {
    PAGE_HOME: "🏠 Home",
    PAGE_BLOG: "📝 Blog",
    PAGE_DATA_COMPARISON: "🔀 Data Comparison",
    PAGE_EXCEL_ANALYSIS: "📊 Excel Analysis",
}
GITHUB_PROFILE_URL = "https://github.com"
