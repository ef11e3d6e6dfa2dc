"""
Key-then-name resolution of a record's counterpart in another source
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from reconciliation.indexer import RecordIndex
from reconciliation.models import MatchMethod
from reconciliation.normalizer import normalize_name


@dataclass(frozen=True)
class MatchResult:
    """
    Outcome of resolving one record against another source.

    When several records share the normalized name, the first one (input
    order) is taken and the rest are kept in ``alternates``.
    """
    record: Optional[object] = None
    method: Optional[MatchMethod] = None
    alternates: Tuple = ()

    @property
    def matched(self) -> bool:
        return self.record is not None

    @property
    def ambiguous(self) -> bool:
        return bool(self.alternates)


NO_MATCH = MatchResult()


def resolve_match(key: str, name: str, index: RecordIndex) -> MatchResult:
    """
    Find the counterpart of a record in ``index``.

    1. exact key lookup
    2. normalized name lookup, first candidate wins
    3. otherwise unmatched
    """
    record = index.get(key)
    if record is not None:
        return MatchResult(record, MatchMethod.KEY)

    if name:
        candidates = index.named(normalize_name(name))
        if candidates:
            return MatchResult(candidates[0], MatchMethod.NAME, tuple(candidates[1:]))

    return NO_MATCH
