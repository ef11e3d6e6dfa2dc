"""
Tests for the three-way discrepancy classifier
"""

import pytest

from reconciliation.classifier import compare_sources, run_comparison, summarize
from reconciliation.errors import SourcesNotLoadedError
from reconciliation.models import (
    AgencyRecord,
    DiscrepancyType,
    DuplicateLabel,
    LabelMismatch,
    MappingRecord,
    MatchMethod,
    MissingInAgencies,
    MissingInMapping,
    MissingInTaxonomy,
    NameMismatch,
    OrphanedTerm,
    Severity,
    TaxonomyTerm,
    ThreeWayLabelMismatch,
    ThreeWayNameMismatch,
    UuidMismatch,
)


def types_of(result):
    return [d.type for d in result.discrepancies]


class TestBasicProperties:

    def test_all_sources_empty(self):
        result = compare_sources([], [], [])
        assert result.discrepancies == []
        assert result.ambiguous_matches == []

    def test_fully_consistent(self, consistent_sources):
        assert compare_sources(*consistent_sources).discrepancies == []

    def test_missing_in_mapping_only(self):
        agency = AgencyRecord(onecx_agency_name="Dept X", onecx_uuid="u1")
        result = compare_sources([agency], [], [])

        assert len(result) == 1
        discrepancy = result.discrepancies[0]
        assert isinstance(discrepancy, MissingInMapping)
        assert discrepancy.type == DiscrepancyType.MISSING_IN_B
        assert discrepancy.agency is agency
        assert discrepancy.id == "1"
        assert '"Dept X"' in discrepancy.details

    def test_ids_restart_every_run(self):
        agency = AgencyRecord(onecx_agency_name="Dept X", onecx_uuid="u1")
        first = compare_sources([agency, agency], [], [])
        second = compare_sources([agency], [], [])
        assert [d.id for d in first] == ["1", "2"]
        assert [d.id for d in second] == ["1"]


class TestOneCXToExcel:

    def test_name_fallback_with_different_uuid(self):
        agency = AgencyRecord(onecx_agency_name="Dept X", onecx_uuid="u1")
        mapping = MappingRecord(onecx_name="dept x", uuid="u2")
        result = compare_sources([agency], [mapping], [])

        assert types_of(result) == [DiscrepancyType.UUID_MISMATCH, DiscrepancyType.MISSING_IN_C]
        uuid_mismatch = result.discrepancies[0]
        assert isinstance(uuid_mismatch, UuidMismatch)
        assert uuid_mismatch.matched_by == MatchMethod.NAME
        assert uuid_mismatch.mapping is mapping
        assert "matched by name" in uuid_mismatch.description
        assert [d.id for d in result] == ["1", "2"]

    def test_key_match_with_different_name_is_scored(self):
        agency = AgencyRecord(onecx_agency_name="Dept of Health", onecx_uuid="u1")
        mapping = MappingRecord(onecx_name="Department of Health", uuid="u1")
        term = TaxonomyTerm(uuid="u1", label="Department of Health")
        result = compare_sources([agency], [mapping], [term])

        assert len(result) == 2
        scored, three_way = result.discrepancies

        assert isinstance(scored, NameMismatch)
        assert scored.matched_by == MatchMethod.KEY
        assert scored.severity == Severity.WARNING
        assert scored.similarity_score == pytest.approx(0.7 * 0.5 + 0.3 * (1 - 6 / 20))
        assert scored.description.startswith("Warning:")

        assert isinstance(three_way, ThreeWayNameMismatch)
        assert three_way.type == DiscrepancyType.NAME_MISMATCH
        assert not three_way.scored
        assert not hasattr(three_way, "severity")
        assert three_way.term is term

    def test_last_mapping_row_wins_for_duplicate_uuid(self):
        agency = AgencyRecord(onecx_agency_name="New Name", onecx_uuid="u1")
        mappings = [MappingRecord(onecx_name="Old Name", uuid="u1"), MappingRecord(onecx_name="New Name", uuid="u1")]
        terms = [TaxonomyTerm(uuid="u1", label="New Name")]
        result = compare_sources([agency], mappings, terms)

        # Only the first Excel row disagrees with GraphQL
        assert types_of(result) == [DiscrepancyType.LABEL_MISMATCH]
        assert result.discrepancies[0].mapping is mappings[0]

    def test_ambiguous_name_match_is_reported(self):
        agency = AgencyRecord(onecx_agency_name="Dept X", onecx_uuid="a1")
        first = MappingRecord(onecx_name="Dept X", uuid="b1")
        second = MappingRecord(onecx_name="DEPT X", uuid="b2")
        result = compare_sources([agency], [first, second], [])

        assert len(result.ambiguous_matches) == 1
        ambiguous = result.ambiguous_matches[0]
        assert ambiguous.direction == "onecx->excel"
        assert ambiguous.chosen is first
        assert ambiguous.alternates == (second,)

        uuid_mismatches = [d for d in result if d.type == DiscrepancyType.UUID_MISMATCH]
        assert len(uuid_mismatches) == 1
        assert uuid_mismatches[0].mapping is first


class TestExcelToOneCX:

    def test_unmatched_excel_row(self):
        mapping = MappingRecord(onecx_name="Only In Excel", uuid="u9")
        term = TaxonomyTerm(uuid="u9", label="Only In Excel")
        result = compare_sources([], [mapping], [term])

        assert len(result) == 1
        assert isinstance(result.discrepancies[0], MissingInAgencies)
        assert result.discrepancies[0].type == DiscrepancyType.MISSING_IN_A

    def test_matched_by_name_is_not_missing(self):
        agency = AgencyRecord(onecx_agency_name="Dept X", onecx_uuid="")
        mapping = MappingRecord(onecx_name="Dept X", uuid="u1")
        result = compare_sources([agency], [mapping], [TaxonomyTerm(uuid="u1", label="Dept X")])

        assert types_of(result) == [DiscrepancyType.UUID_MISMATCH]


class TestExcelToGraphQL:

    def test_label_mismatch_is_scored(self):
        mapping = MappingRecord(onecx_name="Acme Corp", uuid="u1")
        term = TaxonomyTerm(uuid="u1", label="Acme Corporation")
        result = compare_sources([], [mapping], [term])

        labels = [d for d in result if d.type == DiscrepancyType.LABEL_MISMATCH]
        assert len(labels) == 1
        label = labels[0]
        assert isinstance(label, LabelMismatch)
        assert label.severity in (Severity.MINOR, Severity.WARNING)
        assert 0.3 < label.similarity_score <= 1.0
        assert label.mapping is mapping and label.term is term

        assert [d.type for d in result if d.type != DiscrepancyType.LABEL_MISMATCH] == [DiscrepancyType.MISSING_IN_A]

    def test_no_name_fallback_into_graphql(self):
        mapping = MappingRecord(onecx_name="Dept X", uuid="u1")
        term = TaxonomyTerm(uuid="u2", label="Dept X")
        result = compare_sources([], [mapping], [term])

        assert types_of(result) == [
            DiscrepancyType.MISSING_IN_A,
            DiscrepancyType.MISSING_IN_C,
            DiscrepancyType.ORPHANED_C,
        ]
        assert isinstance(result.discrepancies[1], MissingInTaxonomy)


class TestThreeWay:

    def test_graphql_label_differs(self):
        agency = AgencyRecord(onecx_agency_name="X Agency", onecx_uuid="u1")
        mapping = MappingRecord(onecx_name="X Agency", uuid="u1")
        term = TaxonomyTerm(uuid="u1", label="Y Bureau")
        result = compare_sources([agency], [mapping], [term])

        assert [type(d) for d in result] == [LabelMismatch, ThreeWayLabelMismatch]
        three_way = result.discrepancies[1]
        assert three_way.agency is agency
        assert three_way.mapping is mapping
        assert three_way.term is term
        assert three_way.id == "2"

    def test_all_three_differ_reports_no_three_way(self):
        agency = AgencyRecord(onecx_agency_name="Alpha", onecx_uuid="u1")
        mapping = MappingRecord(onecx_name="Beta", uuid="u1")
        term = TaxonomyTerm(uuid="u1", label="Gamma")
        result = compare_sources([agency], [mapping], [term])

        assert [type(d) for d in result] == [NameMismatch, LabelMismatch]

    def test_name_matched_pair_with_other_uuid_is_skipped(self):
        agency = AgencyRecord(onecx_agency_name="Dept X", onecx_uuid="u1")
        mapping = MappingRecord(onecx_name="Dept X", uuid="u2")
        terms = [TaxonomyTerm(uuid="u1", label="Other"), TaxonomyTerm(uuid="u2", label="Dept X")]
        result = compare_sources([agency], [mapping], terms)

        assert types_of(result) == [DiscrepancyType.UUID_MISMATCH, DiscrepancyType.ORPHANED_C]


class TestGraphQLSweep:

    def test_duplicate_label(self):
        terms = [TaxonomyTerm(uuid="u1", label="X"), TaxonomyTerm(uuid="u2", label="X")]
        result = compare_sources([], [], terms)

        duplicates = [d for d in result if d.type == DiscrepancyType.DUPLICATE_LABEL]
        assert len(duplicates) == 1
        assert isinstance(duplicates[0], DuplicateLabel)
        assert duplicates[0].uuids == ("u1", "u2")
        assert "u1, u2" in duplicates[0].details

    def test_duplicate_label_regardless_of_excel(self):
        terms = [TaxonomyTerm(uuid="u1", label="X"), TaxonomyTerm(uuid="u2", label="x ")]
        mappings = [MappingRecord(onecx_name="X", uuid="u1"), MappingRecord(onecx_name="X", uuid="u2")]
        result = compare_sources([], mappings, terms)

        assert len([d for d in result if d.type == DiscrepancyType.DUPLICATE_LABEL]) == 1
        assert not [d for d in result if d.type == DiscrepancyType.ORPHANED_C]

    def test_orphaned_term(self, consistent_sources):
        agencies, mappings, terms = consistent_sources
        orphan = TaxonomyTerm(uuid="u7", label="Nobody Uses Me")
        result = compare_sources(agencies, mappings, terms + [orphan])

        assert len(result) == 1
        assert isinstance(result.discrepancies[0], OrphanedTerm)
        assert result.discrepancies[0].term is orphan


class TestRunComparison:

    def test_refuses_missing_sources(self):
        with pytest.raises(SourcesNotLoadedError) as excinfo:
            run_comparison([], None, None)
        assert excinfo.value.missing == ["Excel mapping", "GraphQL terms"]

    def test_empty_but_loaded_sources_run(self):
        assert run_comparison([], [], []).discrepancies == []

    def test_summary_counts(self):
        agency = AgencyRecord(onecx_agency_name="Alpha", onecx_uuid="u1")
        mapping = MappingRecord(onecx_name="Beta", uuid="u1")
        term = TaxonomyTerm(uuid="u1", label="Gamma")
        result = run_comparison([agency], [mapping], [term])

        summary = summarize(result.discrepancies)
        assert summary["total"] == 2
        assert summary["by_type"] == {"name_mismatch": 1, "label_mismatch": 1}
        assert sum(summary["by_severity"].values()) == 2
