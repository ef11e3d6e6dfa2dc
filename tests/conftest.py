"""
Shared fixtures for the reconciliation tests
"""

from io import BytesIO

import pandas as pd
import pytest

from reconciliation.models import AgencyRecord, MappingRecord, TaxonomyTerm


def make_upload(data: bytes, name: str) -> BytesIO:
    """In-memory stand-in for a Streamlit UploadedFile."""
    buf = BytesIO(data)
    buf.name = name
    return buf


def excel_upload(df: pd.DataFrame, name: str = "upload.xlsx", header: bool = True) -> BytesIO:
    buf = BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, header=header)
    return make_upload(buf.getvalue(), name)


@pytest.fixture
def consistent_sources():
    """One agency present and named identically in all three sources."""
    agencies = [AgencyRecord(sg_agency_name="DX", sg_instance_id="1", onecx_agency_name="Dept X", onecx_uuid="u1")]
    mappings = [MappingRecord(sg_instance_name="DX", onecx_name="Dept X", instance_id="1", uuid="u1")]
    terms = [TaxonomyTerm(uuid="u1", label="Dept X")]
    return agencies, mappings, terms


@pytest.fixture
def baseline_agencies():
    return [
        AgencyRecord("Health", "100", "Department of Health", "uuid-100", "Health", "oid-100"),
        AgencyRecord("Finance", "200", "Department of Finance", "uuid-200", "Finance", "oid-200"),
        AgencyRecord("Transport", "300", "Department of Transport", "uuid-300", "Transport", "oid-300"),
    ]
