"""
String similarity scoring and severity banding for name/label mismatches.

score = TOKEN_WEIGHT * token_similarity + STRING_WEIGHT * string_similarity

- token_similarity: share of tokens (longer than two characters) that have a
  counterpart within 20% edit distance in the other name
- string_similarity: 1 - Levenshtein distance / longest normalized length
"""
from typing import Set, Tuple

from rapidfuzz.distance import Levenshtein

from reconciliation.models import Severity
from reconciliation.normalizer import normalize_name

# Severity bands
MINOR_THRESHOLD = 0.6
WARNING_THRESHOLD = 0.3

# Score weights
TOKEN_WEIGHT = 0.7
STRING_WEIGHT = 0.3

# Tokens shorter than this ("of", "for") are ignored
MIN_TOKEN_LENGTH = 3

# Allowed per-token edit distance, as a percentage of the shorter token
TOKEN_TOLERANCE_PERCENT = 20


def edit_distance(a: str, b: str) -> int:
    """Classic Levenshtein distance (unit cost insert/delete/substitute)."""
    return Levenshtein.distance(a, b)


def tokenize(normalized: str) -> Set[str]:
    return {token for token in normalized.split() if len(token) >= MIN_TOKEN_LENGTH}


def _tokens_match(token_a: str, token_b: str) -> bool:
    allowed = min(len(token_a), len(token_b)) * TOKEN_TOLERANCE_PERCENT // 100
    return edit_distance(token_a, token_b) <= allowed


def token_similarity(tokens_a: Set[str], tokens_b: Set[str]) -> float:
    """
    Fraction of tokens with a close counterpart on the other side.

    Common tokens are counted from both sides and the smaller count is
    used, so the result does not depend on argument order.
    """
    if not tokens_a or not tokens_b:
        return 0.0

    common_a = sum(1 for a in tokens_a if any(_tokens_match(a, b) for b in tokens_b))
    common_b = sum(1 for b in tokens_b if any(_tokens_match(b, a) for a in tokens_a))

    return min(common_a, common_b) / max(len(tokens_a), len(tokens_b))


def string_similarity(norm_a: str, norm_b: str) -> float:
    longest = max(len(norm_a), len(norm_b))
    if longest == 0:
        return 0.0
    return 1 - edit_distance(norm_a, norm_b) / longest


def similarity(a: str, b: str) -> float:
    """
    Closeness of two names in [0, 1].

    Returns 0.0 when either name normalizes to empty (both empty included)
    and 1.0 when the normalized forms are equal.
    """
    norm_a = normalize_name(a)
    norm_b = normalize_name(b)

    if not norm_a or not norm_b:
        return 0.0
    if norm_a == norm_b:
        return 1.0

    token_score = token_similarity(tokenize(norm_a), tokenize(norm_b))
    string_score = string_similarity(norm_a, norm_b)

    return TOKEN_WEIGHT * token_score + STRING_WEIGHT * string_score


def severity_for_score(score: float) -> Severity:
    if score >= MINOR_THRESHOLD:
        return Severity.MINOR
    if score >= WARNING_THRESHOLD:
        return Severity.WARNING
    return Severity.CRITICAL


def grade_mismatch(a: str, b: str) -> Tuple[float, Severity]:
    """Score two mismatching names and band the result."""
    score = similarity(a, b)
    return score, severity_for_score(score)
