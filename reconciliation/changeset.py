"""
Change detection between a baseline agency workbook and a daily export.

Records are keyed strictly by ``sg_instance_id``; there is no name fallback
and no similarity scoring.
"""
import logging
from collections import Counter
from typing import Dict, List, Sequence

from reconciliation.models import AgencyRecord, ChangeRecord, ChangeType, FieldChange

logger = logging.getLogger(__name__)

MATCH_KEY = "sgInstanceId"

# (attribute, export field name) pairs compared for modified records
TRACKED_FIELDS = [
    ("sg_agency_name", "sgAgencyName"),
    ("onecx_agency_name", "oncecxAgencyName"),
    ("onecx_uuid", "onecxUuid"),
    ("department_name", "departmentName"),
]


def _field_changes(old: AgencyRecord, new: AgencyRecord) -> List[FieldChange]:
    changes = []
    for attribute, field_name in TRACKED_FIELDS:
        old_value = getattr(old, attribute)
        new_value = getattr(new, attribute)
        if old_value != new_value:
            changes.append(FieldChange(field_name, old_value, new_value))
    return changes


def diff_agency_snapshots(
    baseline: Sequence[AgencyRecord],
    current: Sequence[AgencyRecord],
) -> List[ChangeRecord]:
    """
    Classify records as added, removed or modified.

    Output order: added (current order), removed (baseline order), then
    modified (baseline order). A modified record carries every changed field.
    """
    baseline_by_id: Dict[str, AgencyRecord] = {r.sg_instance_id: r for r in baseline}
    current_by_id: Dict[str, AgencyRecord] = {r.sg_instance_id: r for r in current}

    changes: List[ChangeRecord] = []

    for record in current:
        if record.sg_instance_id not in baseline_by_id:
            changes.append(ChangeRecord(ChangeType.ADDED, record, matched_by=MATCH_KEY))

    for record in baseline:
        if record.sg_instance_id not in current_by_id:
            changes.append(ChangeRecord(ChangeType.REMOVED, record, matched_by=MATCH_KEY))

    for record in baseline:
        newer = current_by_id.get(record.sg_instance_id)
        if newer is None:
            continue
        field_changes = _field_changes(record, newer)
        if field_changes:
            changes.append(ChangeRecord(ChangeType.MODIFIED, newer, tuple(field_changes), MATCH_KEY))

    logger.info("Diffed %d baseline against %d current records: %d changes",
                len(baseline), len(current), len(changes))
    return changes


def summarize_changes(changes: Sequence[ChangeRecord]) -> Dict[str, int]:
    counts = Counter(change.type for change in changes)
    return {change_type.value: counts.get(change_type, 0) for change_type in ChangeType}
