"""
Type definitions for copyright credit extraction module.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple, Union

from ..types.common import CreditParserError


class ExtractionError(CreditParserError):
    """Base exception for credit extraction errors."""
    pass


class LineStatus(Enum):
    """Outcome of classifying a single line of credit text."""
    SKIPPED = "skipped"    # No recognizable credit
    PARTIAL = "partial"    # Clause continues on a following line
    DONE = "done"          # Complete, terminated credit clause


def merge_unique(*groups: Tuple[str, ...]) -> Tuple[str, ...]:
    """Concatenate string tuples, keeping the first occurrence of each value."""
    merged: List[str] = []
    for group in groups:
        for value in group:
            if value not in merged:
                merged.append(value)
    return tuple(merged)


@dataclass(frozen=True)
class CopyrightItem:
    """A rights holder with its legal categories and years."""

    name: str
    types: Tuple[str, ...] = ()
    years: Tuple[str, ...] = ()

    @property
    def year(self) -> Union[None, str, List[str]]:
        """Single year as a string, several years as a list."""
        if not self.years:
            return None
        if len(self.years) == 1:
            return self.years[0]
        return list(self.years)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data: Dict[str, Any] = {"name": self.name, "types": list(self.types)}
        if self.years:
            data["year"] = self.year
        return data


# Carry-over state between lines. Every variant is immutable, classifying a
# line returns the next state instead of mutating the current one.

@dataclass(frozen=True)
class Empty:
    """No clause in progress."""

    def finalize(self) -> List[CopyrightItem]:
        return []


@dataclass(frozen=True)
class AwaitingName:
    """A category marker was seen, the rights holder follows later."""

    types: Tuple[str, ...]
    years: Tuple[str, ...] = ()

    def finalize(self) -> List[CopyrightItem]:
        # nothing to emit without an owner
        return []


@dataclass(frozen=True)
class AwaitingCategory:
    """Owner names are known but no category has been seen yet."""

    names: Tuple[str, ...]
    years: Tuple[str, ...] = ()

    def finalize(self) -> List[CopyrightItem]:
        return [CopyrightItem(name=name, years=self.years) for name in self.names]


@dataclass(frozen=True)
class AwaitingYear:
    """Owner and category are known, the clause is not terminated yet."""

    names: Tuple[str, ...]
    types: Tuple[str, ...]
    years: Tuple[str, ...] = ()

    def finalize(self) -> List[CopyrightItem]:
        return [
            CopyrightItem(name=name, types=self.types, years=self.years)
            for name in self.names
        ]


ParseState = Union[Empty, AwaitingName, AwaitingCategory, AwaitingYear]

EMPTY = Empty()


@dataclass
class LineResult:
    """Classification of one line."""

    status: LineStatus
    state: ParseState
    items: List[CopyrightItem] = field(default_factory=list)


@dataclass
class ParseSummary:
    """Line status counts of a parse run."""

    lines: int = 0
    skipped: int = 0
    partial: int = 0
    done: int = 0
    items_found: int = 0
    items_returned: int = 0
    finalized_at_end: int = 0

    def record(self, result: LineResult) -> None:
        self.lines += 1
        self.items_found += len(result.items)
        if result.status == LineStatus.DONE:
            self.done += 1
        elif result.status == LineStatus.PARTIAL:
            self.partial += 1
        else:
            self.skipped += 1

    def to_dict(self) -> Dict[str, int]:
        return {
            "lines": self.lines,
            "skipped": self.skipped,
            "partial": self.partial,
            "done": self.done,
            "items_found": self.items_found,
            "items_returned": self.items_returned,
            "finalized_at_end": self.finalized_at_end,
        }
