"""
Excel and CSV Export Utilities
"""
import csv
from io import BytesIO

import pandas as pd

from reconciliation.models import ChangeType

DISCREPANCY_COLUMNS = [
    'ID',
    'Type',
    'Severity',
    'Similarity Score',
    'Matched By',
    'Description',
    'Details',
    'OneCX Agency Name',
    'OneCX SG Agency Name',
    'OneCX Instance ID',
    'OneCX UUID',
    'OneCX Department',
    'Excel Instance Name',
    'Excel OneCX Name',
    'Excel Instance ID',
    'Excel UUID',
    'Excel SAP Instance ID',
    'GraphQL Label',
    'GraphQL UUID',
    'Related UUIDs',
]

AGENCY_EXPORT_COLUMNS = ['_id', 'sgAgencyName', 'sgInstanceId', 'oncecxAgencyName', 'onecxUuid', 'departmentName']
MODIFIED_EXPORT_COLUMNS = ['sgInstanceId', 'sgAgencyName', 'Field Changed', 'Old Value', 'New Value']


def _discrepancy_row(discrepancy) -> dict:
    agency = getattr(discrepancy, 'agency', None)
    mapping = getattr(discrepancy, 'mapping', None)
    term = getattr(discrepancy, 'term', None)
    severity = getattr(discrepancy, 'severity', None)
    matched_by = getattr(discrepancy, 'matched_by', None)
    uuids = getattr(discrepancy, 'uuids', ())

    return {
        'ID': discrepancy.id,
        'Type': discrepancy.type.value,
        'Severity': severity.value if severity else '',
        'Similarity Score': getattr(discrepancy, 'similarity_score', None),
        'Matched By': matched_by.value if matched_by else '',
        'Description': discrepancy.description,
        'Details': discrepancy.details,
        'OneCX Agency Name': agency.onecx_agency_name if agency else '',
        'OneCX SG Agency Name': agency.sg_agency_name if agency else '',
        'OneCX Instance ID': agency.sg_instance_id if agency else '',
        'OneCX UUID': agency.onecx_uuid if agency else '',
        'OneCX Department': agency.department_name if agency else '',
        'Excel Instance Name': mapping.sg_instance_name if mapping else '',
        'Excel OneCX Name': mapping.onecx_name if mapping else '',
        'Excel Instance ID': mapping.instance_id if mapping else '',
        'Excel UUID': mapping.uuid if mapping else '',
        'Excel SAP Instance ID': mapping.sap_instance_id if mapping else '',
        'GraphQL Label': term.label if term else getattr(discrepancy, 'label', ''),
        'GraphQL UUID': term.uuid if term else '',
        'Related UUIDs': ', '.join(uuids),
    }


def discrepancies_to_dataframe(discrepancies) -> pd.DataFrame:
    """
    Flatten discrepancies into one row each, with every field of every record involved.
    """
    rows = [_discrepancy_row(d) for d in discrepancies]
    return pd.DataFrame(rows, columns=DISCREPANCY_COLUMNS)


def changes_to_sheets(changes) -> dict:
    """
    Split change records into the Added / Modified / Removed sheets.

    Modified records get one row per changed field. Sheets with no rows are left out.

    Returns:
        dict: sheet name -> DataFrame
    """
    added = [c.record.as_dict() for c in changes if c.type == ChangeType.ADDED]
    removed = [c.record.as_dict() for c in changes if c.type == ChangeType.REMOVED]
    modified = [
        {
            'sgInstanceId': c.record.sg_instance_id,
            'sgAgencyName': c.record.sg_agency_name,
            'Field Changed': delta.field,
            'Old Value': delta.old_value,
            'New Value': delta.new_value,
        }
        for c in changes if c.type == ChangeType.MODIFIED
        for delta in c.changes
    ]

    sheets = {}
    if added:
        sheets['Added Records'] = pd.DataFrame(added, columns=AGENCY_EXPORT_COLUMNS)
    if modified:
        sheets['Modified Records'] = pd.DataFrame(modified, columns=MODIFIED_EXPORT_COLUMNS)
    if removed:
        sheets['Removed Records'] = pd.DataFrame(removed, columns=AGENCY_EXPORT_COLUMNS)
    return sheets


def convert_df_to_csv(df: pd.DataFrame) -> bytes:
    """
    Convert DataFrame to CSV bytes with every cell quoted and embedded quotes doubled.
    """
    return df.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator='\n').encode('utf-8')


def convert_sheets_to_excel(sheets: dict) -> bytes:
    """
    Write several DataFrames into one workbook.

    Args:
        sheets: sheet name -> DataFrame, written in order

    Returns:
        bytes: Excel file as bytes
    """
    if not sheets:
        sheets = {'No Changes': pd.DataFrame()}

    output = BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        for sheet_name, df in sheets.items():
            df.to_excel(writer, index=False, sheet_name=sheet_name)
    return output.getvalue()


def convert_df_to_excel(df: pd.DataFrame, sheet_name: str = "Data") -> bytes:
    """Convert a single DataFrame to Excel bytes for download."""
    return convert_sheets_to_excel({sheet_name: df})
