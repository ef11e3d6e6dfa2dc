"""
Tests for CSV, Excel and PDF exports
"""

from io import BytesIO, StringIO

import fitz
import pandas as pd

from reconciliation.changeset import diff_agency_snapshots
from reconciliation.classifier import compare_sources
from reconciliation.models import AgencyRecord, MappingRecord, TaxonomyTerm
from utils.excel_export import (
    DISCREPANCY_COLUMNS,
    changes_to_sheets,
    convert_df_to_csv,
    convert_df_to_excel,
    convert_sheets_to_excel,
    discrepancies_to_dataframe,
)
from utils.pdf_report import discrepancies_to_pdf


def sample_discrepancies():
    agency = AgencyRecord("DX", "1", 'Dept "X", North', "u1", "Dept")
    mapping = MappingRecord("DX", "Dept X North", "1", "u1", "S-1")
    terms = [TaxonomyTerm("u1", "Dept X North"), TaxonomyTerm("u8", "Parks"), TaxonomyTerm("u9", "parks")]
    return compare_sources([agency], [mapping], terms).discrepancies


class TestDiscrepancyTable:

    def test_columns_and_rows(self):
        discrepancies = sample_discrepancies()
        df = discrepancies_to_dataframe(discrepancies)

        assert list(df.columns) == DISCREPANCY_COLUMNS
        assert len(df) == len(discrepancies)
        assert list(df['ID']) == [d.id for d in discrepancies]

    def test_scored_and_unscored_fields(self):
        df = discrepancies_to_dataframe(sample_discrepancies())
        by_type = {}
        for row in df.to_dict(orient='records'):
            by_type.setdefault(row['Type'], row)

        scored = by_type['name_mismatch']
        assert scored['Severity'] in ('minor', 'warning', 'critical')
        assert scored['Matched By'] == 'key'
        assert scored['OneCX UUID'] == 'u1'
        assert scored['Excel SAP Instance ID'] == 'S-1'

        duplicate = by_type['duplicate_label']
        assert duplicate['Severity'] == ''
        assert duplicate['Related UUIDs'] == 'u8, u9'
        assert duplicate['GraphQL Label'] == 'Parks'

    def test_empty(self):
        df = discrepancies_to_dataframe([])
        assert df.empty
        assert list(df.columns) == DISCREPANCY_COLUMNS


class TestCsv:

    def test_quotes_every_cell_and_round_trips(self):
        df = discrepancies_to_dataframe(sample_discrepancies())
        data = convert_df_to_csv(df)

        text = data.decode('utf-8')
        assert text.startswith('"ID","Type"')
        assert '""X""' in text

        back = pd.read_csv(StringIO(text), dtype=str, keep_default_na=False)
        assert list(back['Details']) == list(df['Details'])
        assert list(back['OneCX Agency Name']) == list(df['OneCX Agency Name'])


class TestChangeSheets:

    def test_sheet_split(self, baseline_agencies):
        current = [
            AgencyRecord("Parks", "400", "Department of Parks", "uuid-400", "Parks", "oid-400"),
            baseline_agencies[1],
            AgencyRecord("Transport", "300", "Department of Transit", "uuid-301", "Transport", "oid-300"),
        ]
        sheets = changes_to_sheets(diff_agency_snapshots(baseline_agencies, current))

        assert list(sheets) == ['Added Records', 'Modified Records', 'Removed Records']
        assert list(sheets['Added Records']['sgInstanceId']) == ['400']
        assert list(sheets['Removed Records']['sgInstanceId']) == ['100']

        modified = sheets['Modified Records']
        assert list(modified['Field Changed']) == ['oncecxAgencyName', 'onecxUuid']
        assert list(modified['New Value']) == ['Department of Transit', 'uuid-301']

    def test_empty_sheets_are_left_out(self, baseline_agencies):
        sheets = changes_to_sheets(diff_agency_snapshots(baseline_agencies, baseline_agencies[:2]))
        assert list(sheets) == ['Removed Records']


class TestExcel:

    def test_workbook_round_trip(self):
        sheets = {
            'Added Records': pd.DataFrame([{'sgInstanceId': '400', 'sgAgencyName': 'Parks'}]),
            'Removed Records': pd.DataFrame([{'sgInstanceId': '100', 'sgAgencyName': 'Health'}]),
        }
        data = convert_sheets_to_excel(sheets)

        back = pd.read_excel(BytesIO(data), sheet_name=None, dtype=str)
        assert list(back) == ['Added Records', 'Removed Records']
        assert back['Removed Records'].iloc[0]['sgAgencyName'] == 'Health'

    def test_no_sheets_still_makes_a_workbook(self):
        back = pd.read_excel(BytesIO(convert_sheets_to_excel({})), sheet_name=None)
        assert list(back) == ['No Changes']

    def test_single_frame(self):
        data = convert_df_to_excel(discrepancies_to_dataframe(sample_discrepancies()), sheet_name='Discrepancies')
        back = pd.read_excel(BytesIO(data), sheet_name='Discrepancies', dtype=str)
        assert list(back.columns) == DISCREPANCY_COLUMNS


class TestPdf:

    def test_report_is_a_pdf(self):
        data = discrepancies_to_pdf(sample_discrepancies())
        assert data.startswith(b'%PDF')

        with fitz.open(stream=data, filetype='pdf') as doc:
            text = doc[0].get_text()
        assert 'Data Source Comparison Report' in text
        assert 'Duplicate' in text

    def test_empty_report(self):
        with fitz.open(stream=discrepancies_to_pdf([]), filetype='pdf') as doc:
            assert len(doc) == 1
            assert 'No discrepancies found' in doc[0].get_text()

    def test_every_field_survives_with_non_latin_and_long_values(self):
        """Accented, CJK and over-long values are all extractable and stay on the page."""
        agency = AgencyRecord(
            sg_agency_name="Te Whatu Ora",
            sg_instance_id="0042",
            onecx_agency_name="Manatū Hauora – Ministry of Health 保健",
            onecx_uuid="u-ā1",
            department_name="W" * 95,
            oid="oid-1",
        )
        mapping = MappingRecord(
            sg_instance_name=" ".join(["Regional Public Health Unit"] * 8),
            onecx_name="Manatū Hauora",
            instance_id="0042",
            uuid="u-ā1",
            sap_instance_id="Ŝ-1",
        )
        discrepancies = compare_sources([agency], [mapping], []).discrepancies
        assert discrepancies

        with fitz.open(stream=discrepancies_to_pdf(discrepancies), filetype='pdf') as doc:
            text = "".join(page.get_text() for page in doc)
            words = [(page.rect, word) for page in doc for word in page.get_text("words")]

        compact = "".join(text.split())
        fields = [
            agency.sg_agency_name, agency.sg_instance_id, agency.onecx_agency_name,
            agency.onecx_uuid, agency.department_name,
            mapping.sg_instance_name, mapping.onecx_name, mapping.sap_instance_id,
        ]
        fields += [d.description for d in discrepancies] + [d.details for d in discrepancies]
        for value in fields:
            assert "".join(value.split()) in compact, value
        assert "保健" in text
        assert "·" not in text

        for rect, (x0, y0, x1, y1, *_) in words:
            assert rect.x0 <= x0 and x1 <= rect.x1, (x0, x1)
            assert rect.y0 <= y0 and y1 <= rect.y1, (y0, y1)

    def test_long_reports_paginate(self):
        agencies = [AgencyRecord(onecx_agency_name=f"Agency {i}", onecx_uuid=f"u{i}") for i in range(80)]
        discrepancies = compare_sources(agencies, [], []).discrepancies

        with fitz.open(stream=discrepancies_to_pdf(discrepancies), filetype='pdf') as doc:
            page_count = len(doc)
            assert page_count > 1
            assert f'Page 1 of {page_count}' in doc[0].get_text()
            assert '#80' in doc[page_count - 1].get_text()
