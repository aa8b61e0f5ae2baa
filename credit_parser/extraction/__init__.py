"""
Copyright Credit Extraction Module.

This module turns free-form copyright and legal credit text into
copyright items naming a rights holder, its legal categories and years.
"""

from .accumulator import CreditAccumulator, merge_duplicates, parse_copyright_notice
from .classifier import LineClassifier
from .patterns import CategoryRule, PatternConfig, compile_rule, parse_user_pattern
from .types import (
    EMPTY,
    AwaitingCategory,
    AwaitingName,
    AwaitingYear,
    CopyrightItem,
    Empty,
    ExtractionError,
    LineResult,
    LineStatus,
    ParseState,
    ParseSummary,
)

__all__ = [
    # Core classes
    "CreditAccumulator",
    "LineClassifier",
    "PatternConfig",
    "parse_copyright_notice",
    "merge_duplicates",
    # Rule helpers
    "CategoryRule",
    "compile_rule",
    "parse_user_pattern",
    # Data types
    "CopyrightItem",
    "LineResult",
    "LineStatus",
    "ParseSummary",
    # Carry-over state
    "ParseState",
    "Empty",
    "AwaitingName",
    "AwaitingCategory",
    "AwaitingYear",
    "EMPTY",
    # Exceptions
    "ExtractionError",
]
