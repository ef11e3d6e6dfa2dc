"""
Three-way discrepancy detection across OneCX, the Excel mapping table and
GraphQL taxonomy terms.

The comparison runs five passes in a fixed order, all appending to one list:

1. OneCX -> Excel   presence, UUID and name consistency (name scored)
2. Excel -> OneCX   presence
3. Excel -> GraphQL presence (by UUID only) and label consistency (scored)
4. OneCX/Excel/GraphQL cross-check for UUID-verified OneCX/Excel pairs
5. GraphQL duplicate labels and terms no Excel row references

Discrepancy ids count up from 1 in emission order and restart with every run.
"""
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from reconciliation.errors import SourcesNotLoadedError
from reconciliation.indexer import index_agencies, index_mappings, index_terms
from reconciliation.matcher import MatchResult, resolve_match
from reconciliation.models import (
    AgencyRecord,
    Discrepancy,
    DuplicateLabel,
    LabelMismatch,
    MappingRecord,
    MissingInAgencies,
    MissingInMapping,
    MissingInTaxonomy,
    NameMismatch,
    OrphanedTerm,
    TaxonomyTerm,
    ThreeWayLabelMismatch,
    ThreeWayNameMismatch,
    UuidMismatch,
)
from reconciliation.normalizer import normalize_name
from reconciliation.similarity import grade_mismatch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AmbiguousMatch:
    """A name-fallback match that had more than one candidate."""
    direction: str
    source: object
    chosen: object
    alternates: tuple


@dataclass
class ComparisonResult:
    discrepancies: List[Discrepancy] = field(default_factory=list)
    ambiguous_matches: List[AmbiguousMatch] = field(default_factory=list)

    def __len__(self):
        return len(self.discrepancies)

    def __iter__(self):
        return iter(self.discrepancies)


class _DiscrepancyLog:
    """Discrepancy list plus the id counter for a single run."""

    def __init__(self):
        self.items: List[Discrepancy] = []
        self._last_id = 0

    def emit(self, variant, **fields) -> Discrepancy:
        self._last_id += 1
        discrepancy = variant(id=str(self._last_id), **fields)
        self.items.append(discrepancy)
        return discrepancy


def _qualified(severity, text: str) -> str:
    return f"{severity.value.capitalize()}: {text}"


def compare_sources(
    agencies: Sequence[AgencyRecord],
    mappings: Sequence[MappingRecord],
    terms: Sequence[TaxonomyTerm],
) -> ComparisonResult:
    """
    Compare the three sources and return every discrepancy found.

    Pure function of its inputs; empty sources are valid.
    """
    agency_index = index_agencies(agencies)
    mapping_index = index_mappings(mappings)
    term_index = index_terms(terms)

    log = _DiscrepancyLog()
    ambiguous: List[AmbiguousMatch] = []

    # Pass 1: OneCX -> Excel
    agency_matches: List[MatchResult] = []
    for agency in agencies:
        match = resolve_match(agency.onecx_uuid, agency.onecx_agency_name, mapping_index)
        agency_matches.append(match)

        if match.ambiguous:
            ambiguous.append(AmbiguousMatch("onecx->excel", agency, match.record, match.alternates))
            logger.debug("OneCX agency %r matched %d Excel rows by name, using the first",
                         agency.onecx_agency_name, len(match.alternates) + 1)

        if not match.matched:
            log.emit(
                MissingInMapping,
                description="OneCX record missing in Excel mapping table",
                details=f'OneCX Agency: "{agency.onecx_agency_name}", UUID: {agency.onecx_uuid}',
                agency=agency,
            )
            continue

        mapping = match.record
        if agency.onecx_uuid != mapping.uuid:
            log.emit(
                UuidMismatch,
                description=f"UUID mismatch between OneCX and Excel (matched by {match.method.value})",
                details=f"OneCX UUID: {agency.onecx_uuid} | Excel UUID: {mapping.uuid}",
                agency=agency,
                mapping=mapping,
                matched_by=match.method,
            )

        if normalize_name(agency.onecx_agency_name) != normalize_name(mapping.onecx_name):
            score, severity = grade_mismatch(agency.onecx_agency_name, mapping.onecx_name)
            log.emit(
                NameMismatch,
                description=_qualified(
                    severity,
                    f"Agency name mismatch between OneCX and Excel (matched by {match.method.value})",
                ),
                details=(
                    f'OneCX: "{agency.onecx_agency_name}" | Excel: "{mapping.onecx_name}"'
                    f" | Similarity: {score:.0%}"
                ),
                agency=agency,
                mapping=mapping,
                matched_by=match.method,
                severity=severity,
                similarity_score=score,
            )

    # Pass 2: Excel -> OneCX
    for mapping in mappings:
        match = resolve_match(mapping.uuid, mapping.onecx_name, agency_index)

        if match.ambiguous:
            ambiguous.append(AmbiguousMatch("excel->onecx", mapping, match.record, match.alternates))
            logger.debug("Excel row %r matched %d OneCX agencies by name, using the first",
                         mapping.onecx_name, len(match.alternates) + 1)

        if not match.matched:
            log.emit(
                MissingInAgencies,
                description="Excel record missing in OneCX data",
                details=f'Excel Name: "{mapping.onecx_name}", UUID: {mapping.uuid}',
                mapping=mapping,
            )

    # Pass 3: Excel -> GraphQL, UUID only
    for mapping in mappings:
        term = term_index.get(mapping.uuid)

        if term is None:
            log.emit(
                MissingInTaxonomy,
                description="Excel UUID not found in GraphQL terms",
                details=f'UUID: {mapping.uuid} | Excel Name: "{mapping.onecx_name}"',
                mapping=mapping,
            )
            continue

        if normalize_name(mapping.onecx_name) != normalize_name(term.label):
            score, severity = grade_mismatch(mapping.onecx_name, term.label)
            log.emit(
                LabelMismatch,
                description=_qualified(severity, "Label mismatch between Excel and GraphQL for same UUID"),
                details=(
                    f'UUID: {mapping.uuid} | Excel: "{mapping.onecx_name}" | GraphQL: "{term.label}"'
                    f" | Similarity: {score:.0%}"
                ),
                mapping=mapping,
                term=term,
                severity=severity,
                similarity_score=score,
            )

    # Pass 4: three-way cross-check on UUID-verified OneCX/Excel pairs.
    # Only the two "one source disagrees" shapes below are reported.
    for agency, match in zip(agencies, agency_matches):
        if not match.matched or agency.onecx_uuid != match.record.uuid:
            continue

        term = term_index.get(agency.onecx_uuid)
        if term is None:
            continue

        mapping = match.record
        agency_name = normalize_name(agency.onecx_agency_name)
        mapping_name = normalize_name(mapping.onecx_name)
        term_label = normalize_name(term.label)

        if agency_name == mapping_name and mapping_name != term_label:
            log.emit(
                ThreeWayLabelMismatch,
                description="Three-way validation: OneCX and Excel names match but GraphQL label differs",
                details=(
                    f'UUID: {agency.onecx_uuid} | OneCX/Excel: "{agency.onecx_agency_name}"'
                    f' | GraphQL: "{term.label}"'
                ),
                agency=agency,
                mapping=mapping,
                term=term,
            )
        elif agency_name != mapping_name and mapping_name == term_label:
            log.emit(
                ThreeWayNameMismatch,
                description="Three-way validation: Excel and GraphQL names match but OneCX differs",
                details=(
                    f'UUID: {agency.onecx_uuid} | OneCX: "{agency.onecx_agency_name}"'
                    f' | Excel/GraphQL: "{mapping.onecx_name}"'
                ),
                agency=agency,
                mapping=mapping,
                term=term,
            )

    # Pass 5: GraphQL duplicates and orphans
    for _, duplicates in term_index.duplicate_names():
        uuids = ", ".join(term.uuid for term in duplicates)
        log.emit(
            DuplicateLabel,
            description="Duplicate label found in GraphQL with different UUIDs",
            details=f'Label: "{duplicates[0].label}", UUIDs: {uuids}',
            label=duplicates[0].label,
            terms=tuple(duplicates),
        )

    referenced_uuids = {mapping.uuid for mapping in mappings}
    for term in terms:
        if term.uuid not in referenced_uuids:
            log.emit(
                OrphanedTerm,
                description="GraphQL term not referenced in Excel mapping table",
                details=f'UUID: {term.uuid}, Label: "{term.label}"',
                term=term,
            )

    return ComparisonResult(discrepancies=log.items, ambiguous_matches=ambiguous)


def run_comparison(
    agencies: Optional[Sequence[AgencyRecord]],
    mappings: Optional[Sequence[MappingRecord]],
    terms: Optional[Sequence[TaxonomyTerm]],
) -> ComparisonResult:
    """
    Entry point used by the data-comparison page.

    A source that has not been loaded is passed as ``None``; the run is
    refused before any work is done.
    """
    missing = [
        label for label, source in (
            ("OneCX JSON", agencies),
            ("Excel mapping", mappings),
            ("GraphQL terms", terms),
        )
        if source is None
    ]
    if missing:
        raise SourcesNotLoadedError(missing)

    result = compare_sources(agencies, mappings, terms)

    logger.info(
        "Compared %d OneCX, %d Excel and %d GraphQL records: %d discrepancies, %d ambiguous name matches",
        len(agencies), len(mappings), len(terms), len(result.discrepancies), len(result.ambiguous_matches),
    )
    return result


def summarize(discrepancies: Sequence[Discrepancy]) -> Dict:
    """Counts per discrepancy type and per severity (unscored ones excluded)."""
    by_type = Counter(d.type.value for d in discrepancies)
    by_severity = Counter(d.severity.value for d in discrepancies if d.scored)
    return {
        "total": len(discrepancies),
        "by_type": dict(by_type),
        "by_severity": dict(by_severity),
    }
