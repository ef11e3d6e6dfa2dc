"""
Record and result types for the data-comparison and excel-analysis pages.

Three sources take part in a comparison:

- Source A: the OneCX agency export (``AgencyRecord``)
- Source B: the Excel/MuleSoft mapping table (``MappingRecord``)
- Source C: the GraphQL taxonomy-term document (``TaxonomyTerm``)

Records are immutable; the engine only indexes and compares them.
"""
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Dict, Tuple


class DiscrepancyType(str, Enum):
    """Closed set of discrepancy kinds, in the wording used by exports."""
    MISSING_IN_B = "missing_in_b"
    MISSING_IN_A = "missing_in_a"
    UUID_MISMATCH = "uuid_mismatch"
    NAME_MISMATCH = "name_mismatch"
    MISSING_IN_C = "missing_in_c"
    LABEL_MISMATCH = "label_mismatch"
    DUPLICATE_LABEL = "duplicate_label"
    ORPHANED_C = "orphaned_c"


DISCREPANCY_LABELS = {
    DiscrepancyType.MISSING_IN_B: "Missing in Excel",
    DiscrepancyType.MISSING_IN_A: "Missing in OneCX",
    DiscrepancyType.UUID_MISMATCH: "UUID Mismatch",
    DiscrepancyType.NAME_MISMATCH: "Name Mismatch",
    DiscrepancyType.MISSING_IN_C: "Missing in GraphQL",
    DiscrepancyType.LABEL_MISMATCH: "Label Mismatch",
    DiscrepancyType.DUPLICATE_LABEL: "Duplicate Label",
    DiscrepancyType.ORPHANED_C: "Orphaned GraphQL Term",
}


class Severity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    MINOR = "minor"


class MatchMethod(str, Enum):
    KEY = "key"
    NAME = "name"


class ChangeType(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"


@dataclass(frozen=True)
class AgencyRecord:
    """One agency row from the OneCX export (also the daily snapshot shape)."""
    sg_agency_name: str = ""
    sg_instance_id: str = ""
    onecx_agency_name: str = ""
    onecx_uuid: str = ""
    department_name: str = ""
    oid: str = ""

    def as_dict(self) -> Dict[str, str]:
        return {
            "_id": self.oid,
            "sgAgencyName": self.sg_agency_name,
            "sgInstanceId": self.sg_instance_id,
            "oncecxAgencyName": self.onecx_agency_name,
            "onecxUuid": self.onecx_uuid,
            "departmentName": self.department_name,
        }


@dataclass(frozen=True)
class MappingRecord:
    """One data row from the Excel mapping table."""
    sg_instance_name: str = ""
    onecx_name: str = ""
    instance_id: str = ""
    uuid: str = ""
    sap_instance_id: str = ""

    def as_dict(self) -> Dict[str, str]:
        return {
            "SG Instance Name": self.sg_instance_name,
            "OneCX Name": self.onecx_name,
            "Instance ID": self.instance_id,
            "UUID": self.uuid,
            "SAP Instance ID": self.sap_instance_id,
        }


@dataclass(frozen=True)
class TaxonomyTerm:
    """One term from ``data.taxonomyTerms.terms``."""
    uuid: str = ""
    label: str = ""

    def as_dict(self) -> Dict[str, str]:
        return {"uuid": self.uuid, "label": self.label}


# ---------------------------------------------------------------------------
# Discrepancies: one variant per pass outcome, keyed by ``type``
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Discrepancy:
    id: str
    description: str
    details: str

    type: ClassVar[DiscrepancyType]
    scored: ClassVar[bool] = False


@dataclass(frozen=True)
class MissingInMapping(Discrepancy):
    agency: AgencyRecord

    type: ClassVar[DiscrepancyType] = DiscrepancyType.MISSING_IN_B


@dataclass(frozen=True)
class MissingInAgencies(Discrepancy):
    mapping: MappingRecord

    type: ClassVar[DiscrepancyType] = DiscrepancyType.MISSING_IN_A


@dataclass(frozen=True)
class UuidMismatch(Discrepancy):
    agency: AgencyRecord
    mapping: MappingRecord
    matched_by: MatchMethod

    type: ClassVar[DiscrepancyType] = DiscrepancyType.UUID_MISMATCH


@dataclass(frozen=True)
class NameMismatch(Discrepancy):
    agency: AgencyRecord
    mapping: MappingRecord
    matched_by: MatchMethod
    severity: Severity
    similarity_score: float

    type: ClassVar[DiscrepancyType] = DiscrepancyType.NAME_MISMATCH
    scored: ClassVar[bool] = True


@dataclass(frozen=True)
class MissingInTaxonomy(Discrepancy):
    mapping: MappingRecord

    type: ClassVar[DiscrepancyType] = DiscrepancyType.MISSING_IN_C


@dataclass(frozen=True)
class LabelMismatch(Discrepancy):
    mapping: MappingRecord
    term: TaxonomyTerm
    severity: Severity
    similarity_score: float

    type: ClassVar[DiscrepancyType] = DiscrepancyType.LABEL_MISMATCH
    scored: ClassVar[bool] = True


@dataclass(frozen=True)
class ThreeWayLabelMismatch(Discrepancy):
    """OneCX and Excel agree on the name, GraphQL carries another label."""
    agency: AgencyRecord
    mapping: MappingRecord
    term: TaxonomyTerm

    type: ClassVar[DiscrepancyType] = DiscrepancyType.LABEL_MISMATCH


@dataclass(frozen=True)
class ThreeWayNameMismatch(Discrepancy):
    """Excel and GraphQL agree on the name, OneCX carries another one."""
    agency: AgencyRecord
    mapping: MappingRecord
    term: TaxonomyTerm

    type: ClassVar[DiscrepancyType] = DiscrepancyType.NAME_MISMATCH


@dataclass(frozen=True)
class DuplicateLabel(Discrepancy):
    label: str
    terms: Tuple[TaxonomyTerm, ...]

    type: ClassVar[DiscrepancyType] = DiscrepancyType.DUPLICATE_LABEL

    @property
    def uuids(self) -> Tuple[str, ...]:
        return tuple(term.uuid for term in self.terms)


@dataclass(frozen=True)
class OrphanedTerm(Discrepancy):
    term: TaxonomyTerm

    type: ClassVar[DiscrepancyType] = DiscrepancyType.ORPHANED_C


# ---------------------------------------------------------------------------
# Change-set records (excel-analysis page)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldChange:
    field: str
    old_value: str
    new_value: str


@dataclass(frozen=True)
class ChangeRecord:
    type: ChangeType
    record: AgencyRecord
    changes: Tuple[FieldChange, ...] = ()
    matched_by: str = "sgInstanceId"
