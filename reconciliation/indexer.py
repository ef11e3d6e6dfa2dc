"""
Lookup structures over one source's records
"""
from typing import Callable, Dict, Iterable, Iterator, List, Tuple

from reconciliation.models import AgencyRecord, MappingRecord, TaxonomyTerm
from reconciliation.normalizer import normalize_name


class RecordIndex:
    """
    Exact-key and normalized-name lookups over a record sequence.

    ``by_key`` keeps the last record seen for a key. ``by_name`` keeps every
    record sharing a normalized name, in input order. Records with an empty
    key or an empty name are left out of the matching structure.
    """

    def __init__(self, records: Iterable, key_of: Callable, name_of: Callable):
        self.by_key: Dict[str, object] = {}
        self.by_name: Dict[str, List] = {}

        for record in records:
            key = key_of(record)
            if key:
                self.by_key[key] = record

            name = name_of(record)
            if name:
                self.by_name.setdefault(normalize_name(name), []).append(record)

    def get(self, key: str):
        if not key:
            return None
        return self.by_key.get(key)

    def named(self, normalized_name: str) -> List:
        return self.by_name.get(normalized_name, [])

    def duplicate_names(self) -> Iterator[Tuple[str, List]]:
        """Yield (normalized name, records) for names carried by more than one record."""
        for name, records in self.by_name.items():
            if len(records) > 1:
                yield name, records

    def __len__(self):
        return len(self.by_key)


def index_agencies(records: Iterable[AgencyRecord]) -> RecordIndex:
    return RecordIndex(records, lambda r: r.onecx_uuid, lambda r: r.onecx_agency_name)


def index_mappings(records: Iterable[MappingRecord]) -> RecordIndex:
    return RecordIndex(records, lambda r: r.uuid, lambda r: r.onecx_name)


def index_terms(terms: Iterable[TaxonomyTerm]) -> RecordIndex:
    return RecordIndex(terms, lambda t: t.uuid, lambda t: t.label)
