"""
Source Parsers
Turn uploaded OneCX exports, Excel mapping tables and GraphQL term documents
into records for the reconciliation engine
"""

import json
import logging

import pandas as pd

from config import AGENCY_COLUMN_ALIASES, MAPPING_COLUMN_ALIASES
from reconciliation.errors import SourceParseError
from reconciliation.models import AgencyRecord, MappingRecord, TaxonomyTerm

logger = logging.getLogger(__name__)

SOURCE_ONECX = "OneCX JSON"
SOURCE_MAPPING = "Excel file"
SOURCE_TAXONOMY = "GraphQL JSON"
SOURCE_SNAPSHOT = "daily export"
SOURCE_BASELINE = "reference Excel file"


def _text(value) -> str:
    """Render a cell or JSON value as text; missing values become ''."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _instance_id(value, default: str = "") -> str:
    """
    Instance ids stay as text. Numeric values (42, 42.0) render without a
    decimal part; string ids keep leading zeros and every digit.
    """
    text = _text(value).strip()
    return text or default


def decode_upload(uploaded_file, source: str) -> str:
    """
    Read an uploaded file (Streamlit UploadedFile or any object with getvalue/read) as text.
    """
    raw = uploaded_file.getvalue() if hasattr(uploaded_file, "getvalue") else uploaded_file.read()
    if isinstance(raw, str):
        return raw
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise SourceParseError(source, "file is not UTF-8 text") from e


def _load_json(text: str, source: str):
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("Rejected %s: %s", source, e)
        raise SourceParseError(source, str(e)) from e


def _agency_from_dict(item) -> AgencyRecord:
    # Malformed entries keep their place as empty records
    if not isinstance(item, dict):
        return AgencyRecord()

    oid = item.get("_id")
    if isinstance(oid, dict):
        oid = oid.get("$oid")

    return AgencyRecord(
        sg_agency_name=_text(item.get("sgAgencyName")),
        sg_instance_id=_instance_id(item.get("sgInstanceId")),
        onecx_agency_name=_text(item.get("oncecxAgencyName")),
        onecx_uuid=_text(item.get("onecxUuid")),
        department_name=_text(item.get("departmentName")),
        oid=_text(oid),
    )


def parse_onecx_export(text: str, source: str = SOURCE_ONECX) -> list:
    """
    Parse the OneCX agency export (a JSON array of agency objects).

    Args:
        text: File contents
        source: Source name used in error messages

    Returns:
        list[AgencyRecord] in file order
    """
    data = _load_json(text, source)

    if not isinstance(data, list):
        logger.warning("Rejected %s: top level is %s", source, type(data).__name__)
        raise SourceParseError(source, f"{source} must be an array")

    records = [_agency_from_dict(item) for item in data]
    logger.info("Loaded %d records from %s", len(records), source)
    return records


def parse_agency_snapshot(text: str) -> list:
    """
    Parse a daily export whose JSON array may be preceded by a timestamp/login preamble.
    """
    start = text.find("[")
    if start == -1:
        logger.warning("Rejected %s: no JSON array found", SOURCE_SNAPSHOT)
        raise SourceParseError(SOURCE_SNAPSHOT, "no JSON array found in file")

    return parse_onecx_export(text[start:], source=SOURCE_SNAPSHOT)


def _resolve_column(headers: list, aliases: list):
    """Index of the first header containing an alias; aliases are tried in order."""
    for alias in aliases:
        for index, header in enumerate(headers):
            if alias.lower() in header:
                return index
    return None


def _cell(row: list, index) -> str:
    if index is None or index >= len(row):
        return ""
    return _text(row[index])


def parse_mapping_rows(rows: list) -> list:
    """
    Build mapping records from raw sheet rows (header row first).

    Columns are found by case-insensitive substring match against the
    aliases in ``MAPPING_COLUMN_ALIASES``; a column that cannot be found
    yields empty values. Rows with no content at all are dropped.

    Args:
        rows: list of row lists, header row first

    Returns:
        list[MappingRecord]
    """
    if len(rows) < 2:
        raise SourceParseError(
            SOURCE_MAPPING, "Excel file must have at least a header row and one data row"
        )

    headers = [_text(header).lower() for header in rows[0]]
    columns = {
        field: _resolve_column(headers, aliases)
        for field, aliases in MAPPING_COLUMN_ALIASES.items()
    }

    unresolved = [field for field, index in columns.items() if index is None]
    if unresolved:
        logger.warning("Mapping table has no column for: %s", ", ".join(unresolved))

    records = []
    for row in rows[1:]:
        if all(_text(cell) == "" for cell in row):
            continue
        records.append(MappingRecord(**{field: _cell(row, index) for field, index in columns.items()}))

    logger.info("Loaded %d mapping rows", len(records))
    return records


def _read_table(uploaded_file, source: str, header) -> pd.DataFrame:
    """Read the first sheet of an Excel file (or a CSV) with every cell as text."""
    name = getattr(uploaded_file, "name", "") or ""
    if hasattr(uploaded_file, "seek"):
        uploaded_file.seek(0)
    try:
        if name.lower().endswith(".csv"):
            return pd.read_csv(uploaded_file, header=header, dtype=str)
        return pd.read_excel(uploaded_file, header=header, dtype=str)
    except Exception as e:
        logger.warning("Could not read %s %r: %s", source, name, e)
        raise SourceParseError(source, str(e)) from e


def parse_mapping_file(uploaded_file) -> list:
    """
    Parse the Excel (or CSV) mapping table.

    Args:
        uploaded_file: File-like object with a ``name`` (uploaded file from Streamlit)

    Returns:
        list[MappingRecord]
    """
    df = _read_table(uploaded_file, SOURCE_MAPPING, header=None)
    return parse_mapping_rows(df.values.tolist())


def _first_present(row: dict, aliases: list):
    for alias in aliases:
        value = row.get(alias)
        if _text(value) != "":
            return value
    return None


def parse_agency_workbook(uploaded_file) -> list:
    """
    Parse the reference workbook used as the change-detection baseline.

    Columns may use the export keys (``sgAgencyName``) or display headers
    (``SG Agency Name``). A missing instance id becomes ``'0'``.
    """
    df = _read_table(uploaded_file, SOURCE_BASELINE, header=0)

    records = []
    for row in df.to_dict(orient="records"):
        values = {
            field: _first_present(row, aliases)
            for field, aliases in AGENCY_COLUMN_ALIASES.items()
        }
        records.append(AgencyRecord(
            sg_agency_name=_text(values["sg_agency_name"]),
            sg_instance_id=_instance_id(values["sg_instance_id"], default="0"),
            onecx_agency_name=_text(values["onecx_agency_name"]),
            onecx_uuid=_text(values["onecx_uuid"]),
            department_name=_text(values["department_name"]),
            oid=_text(values["oid"]),
        ))

    logger.info("Loaded %d records from %s", len(records), SOURCE_BASELINE)
    return records


def parse_taxonomy_terms(text: str) -> list:
    """
    Parse a GraphQL response of the shape ``{data: {taxonomyTerms: {terms: [...]}}}``.

    Returns:
        list[TaxonomyTerm]
    """
    data = _load_json(text, SOURCE_TAXONOMY)

    terms = None
    if isinstance(data, dict):
        payload = data.get("data")
        if isinstance(payload, dict):
            taxonomy = payload.get("taxonomyTerms")
            if isinstance(taxonomy, dict):
                terms = taxonomy.get("terms")

    if not isinstance(terms, list):
        logger.warning("Rejected %s: missing data.taxonomyTerms.terms", SOURCE_TAXONOMY)
        raise SourceParseError(
            SOURCE_TAXONOMY, "GraphQL JSON must have data.taxonomyTerms.terms array structure"
        )

    records = [
        TaxonomyTerm(uuid=_text(term.get("uuid")), label=_text(term.get("label")))
        if isinstance(term, dict) else TaxonomyTerm()
        for term in terms
    ]
    logger.info("Loaded %d GraphQL terms", len(records))
    return records
