"""
Name normalization shared by every name/label comparison
"""
import re

_WHITESPACE = re.compile(r'\s+')
_DOUBLE_QUOTES = re.compile('[“”„‟]')
_APOSTROPHES = re.compile('[‘’‚‛]')


def normalize_name(name: str) -> str:
    """
    Canonicalize a free-text name for equality checks.

    Trims, lowercases, collapses whitespace runs to one space and
    straightens typographic quotes. Two names are the same agency
    when their normalized forms are equal.
    """
    if not name:
        return ""

    name = name.strip().lower()
    name = _WHITESPACE.sub(' ', name)
    name = _DOUBLE_QUOTES.sub('"', name)
    name = _APOSTROPHES.sub("'", name)

    return name
