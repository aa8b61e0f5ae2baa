"""
Text standardization and cleanup for credit extraction.
"""

import re
import unicodedata
from typing import Iterable, List, Pattern, Sequence, Tuple

# Four digit years, ranges are reduced to their endpoints
YEAR_PATTERN = re.compile(r"(?<!\d)\d{4}(?!\d)")
YEAR_LIST = r"\d{4}(?:\s*[,&/+–-]\s*\d{4})*"

LEADING_YEARS_PATTERN = re.compile(rf"\s*(?P<years>{YEAR_LIST})(?!\d)")
TRAILING_YEARS_PATTERN = re.compile(rf"^(?P<name>.*?)[\s,]+(?P<years>{YEAR_LIST})\s*$")
# Year list continuing a terminated clause, e.g. "Label 1998, 2001"
FOLLOWING_YEARS_PATTERN = re.compile(
    rf"[\s,]*(?P<years>{YEAR_LIST})(?!\d)(?=\s*(?:[,.;)]|$))"
)

# Punctuation between category/year and the name, e.g. "© 2019 - Label"
LEAD_IN_PATTERN = re.compile(r"[\s,;:]*(?:[–-]\s+)?")

_NAME_STRIP_CHARS = " \t,;:"
_LETTER_PATTERN = re.compile(r"[^\W\d_]")
_WHITESPACE_PATTERN = re.compile(r"\s+")
_SIMPLIFY_PATTERN = re.compile(r"[\W_]+")


def standardize(text: str, substitutions: Iterable[Tuple[Pattern, str]]) -> str:
    """
    Apply dialect substitution rules to raw credit text.

    Args:
        text: Raw credit text
        substitutions: Pairs of pattern and replacement, applied in order

    Returns:
        Standardized text
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n").replace("\u00a0", " ")
    for pattern, replacement in substitutions:
        text = pattern.sub(replacement, text)
    return text


def clean_type(text: str, type_rules: Iterable[Tuple[Pattern, str]]) -> str:
    """Clean and standardize a free text category label."""
    label = _WHITESPACE_PATTERN.sub(" ", text.strip().lower())
    for pattern, replacement in type_rules:
        label = pattern.sub(replacement, label)
    return label


def simplify_name(name: str) -> str:
    """Simplify a name to ease case and diacritic insensitive matching."""
    decomposed = unicodedata.normalize("NFKD", name)
    # drops combining marks of the decomposition as well
    return _SIMPLIFY_PATTERN.sub("", decomposed).casefold()


def split_years(text: str) -> List[str]:
    """Extract all four digit years from text, in order of appearance."""
    return YEAR_PATTERN.findall(text)


def strip_trailing_years(name_span: str) -> Tuple[str, List[str]]:
    """Split trailing years off a name span, e.g. "Label 2019"."""
    match = TRAILING_YEARS_PATTERN.match(name_span)
    if match and is_name(match.group("name")):
        return match.group("name"), split_years(match.group("years"))
    return name_span, []


def split_names(name_span: str, separator: Pattern) -> List[str]:
    """Split a joint credit into cleaned names."""
    parts = []
    last = 0
    for match in separator.finditer(name_span):
        if match.end() == last and match.start() == last:
            continue
        parts.append(name_span[last : match.start()])
        last = match.end()
    parts.append(name_span[last:])

    return [clean_name(part) for part in parts if clean_name(part)]


def clean_name(name: str) -> str:
    """Trim whitespace and dangling punctuation around a name."""
    return _WHITESPACE_PATTERN.sub(" ", name).strip(_NAME_STRIP_CHARS)


def is_name(text: str) -> bool:
    """Names need at least one letter, years and punctuation are not owners."""
    return bool(_LETTER_PATTERN.search(text))


def is_excluded(name: str, excluded_names: Sequence[Pattern]) -> bool:
    return any(pattern.search(name) for pattern in excluded_names)
