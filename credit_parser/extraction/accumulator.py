"""
Whole-text credit accumulation.

Threads the carry-over state through the line classifier, collects the
completed copyright items and merges duplicates.
"""

from typing import Dict, List, Optional, Tuple

import structlog

from .classifier import LineClassifier
from .normalizer import simplify_name, standardize
from .patterns import PatternConfig
from .types import (
    EMPTY,
    CopyrightItem,
    ExtractionError,
    ParseState,
    ParseSummary,
    merge_unique,
)

logger = structlog.get_logger(__name__)


class CreditAccumulator:
    """
    Parses multi-line copyright and legal credit text.

    The accumulator keeps no state between calls, parsing the same text
    with the same configuration always gives the same items.
    """

    def __init__(self, config: PatternConfig):
        """
        Initialize credit accumulator.

        Args:
            config: Recognizer rules of the credit text dialect
        """
        self.config = config
        self.classifier = LineClassifier(config)
        self.logger = logger.bind(component="CreditAccumulator")

    def parse(self, text: str) -> List[CopyrightItem]:
        """
        Parse credit text into copyright items.

        Args:
            text: Free-form credit text, possibly spanning several lines

        Returns:
            Deduplicated items in order of first appearance
        """
        items, _ = self.parse_with_summary(text)
        return items

    def parse_with_summary(self, text: str) -> Tuple[List[CopyrightItem], ParseSummary]:
        """Parse credit text and report how each line was classified."""
        if not isinstance(text, str):
            raise ExtractionError(f"Credit text must be a string, got {type(text).__name__}")

        summary = ParseSummary()
        collected: List[CopyrightItem] = []
        state: ParseState = EMPTY

        for line in standardize(text, self.config.substitutions).splitlines():
            result = self.classifier.classify(line, state)
            summary.record(result)
            collected.extend(result.items)
            state = result.state

        # partial information is kept, owners without category included
        pending = state.finalize()
        if pending:
            self.logger.debug("Finalized pending clause at end of input", items=len(pending))
        summary.finalized_at_end = len(pending)
        collected.extend(pending)

        items = merge_duplicates(collected)
        summary.items_returned = len(items)

        self.logger.debug("Parsed credit text", **summary.to_dict())
        return items, summary


def merge_duplicates(items: List[CopyrightItem]) -> List[CopyrightItem]:
    """
    Merge items with the same name and types.

    Names are compared case and diacritic insensitively, the first spelling
    and position are kept and years of later duplicates are appended.
    """
    merged: Dict[Tuple[str, Tuple[str, ...]], CopyrightItem] = {}
    for item in items:
        key = (simplify_name(item.name) or item.name, item.types)
        existing = merged.get(key)
        if existing is None:
            merged[key] = item
        else:
            merged[key] = CopyrightItem(
                name=existing.name,
                types=existing.types,
                years=merge_unique(existing.years, item.years),
            )
    return list(merged.values())


def parse_copyright_notice(
    text: str, config: Optional[PatternConfig] = None
) -> List[CopyrightItem]:
    """
    Parse credit text with the given or the default dialect.

    Args:
        text: Free-form credit text
        config: Recognizer rules, the packaged default dialect when omitted

    Returns:
        Deduplicated copyright items
    """
    if config is None:
        from ..config.loader import load_dialect

        config = load_dialect()
    return CreditAccumulator(config).parse(text)
