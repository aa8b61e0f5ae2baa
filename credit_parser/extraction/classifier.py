"""
Line classification for copyright and legal credits.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import structlog

from .normalizer import (
    FOLLOWING_YEARS_PATTERN,
    LEADING_YEARS_PATTERN,
    LEAD_IN_PATTERN,
    clean_type,
    is_excluded,
    is_name,
    split_names,
    split_years,
    strip_trailing_years,
)
from .patterns import PatternConfig
from .types import (
    EMPTY,
    AwaitingCategory,
    AwaitingName,
    AwaitingYear,
    CopyrightItem,
    Empty,
    LineResult,
    LineStatus,
    ParseState,
    merge_unique,
)

logger = structlog.get_logger(__name__)


@dataclass
class Marker:
    """One or more adjacent category markers, e.g. "℗ & ©"."""

    start: int
    end: int
    types: Tuple[str, ...]


@dataclass
class Clause:
    """Owner names and years read after a marker."""

    names: Tuple[str, ...] = ()
    years: Tuple[str, ...] = ()
    terminated: bool = False


class LineClassifier:
    """
    Classifies single lines of credit text.

    Each call receives the state carried over from the previous line and
    returns the next state together with the credits completed on this
    line. Names are recognized after a category marker, at the start of a
    line continuing a pending marker, or on a line without any marker.
    """

    def __init__(self, config: PatternConfig):
        self.config = config
        self.logger = logger.bind(component="LineClassifier")

    def classify(self, line: str, state: ParseState = EMPTY) -> LineResult:
        """
        Classify one line.

        Args:
            line: Line of standardized credit text
            state: State carried over from the previous line

        Returns:
            Line status, next state and completed copyright items
        """
        text = line.strip()
        if not text:
            return LineResult(LineStatus.SKIPPED, state)
        if len(text) > self.config.max_line_length:
            self.logger.warning(
                "Skipped overlong line",
                length=len(text),
                max_line_length=self.config.max_line_length,
            )
            return LineResult(LineStatus.SKIPPED, state)

        items: List[CopyrightItem] = []
        recognized = False
        pos = 0

        # a terminator in front of any content closes the carried clause
        if not isinstance(state, Empty):
            terminator = self.config.terminator.match(text)
            if terminator:
                items.extend(state.finalize())
                state = EMPTY
                pos = terminator.end()
                recognized = True

        markers = self.find_markers(text, pos)
        head_end = markers[0].start if markers else len(text)

        if text[pos:head_end].strip():
            state, head_items, head_recognized = self._read_head(
                text, pos, head_end, state, has_markers=bool(markers)
            )
            items.extend(head_items)
            recognized = recognized or head_recognized

        for index, marker in enumerate(markers):
            if index + 1 < len(markers):
                segment_end = markers[index + 1].start
            else:
                segment_end = len(text)
            state, marker_items = self._read_marker(text, marker, segment_end, state)
            items.extend(marker_items)
            recognized = True

        if recognized and not isinstance(state, Empty):
            status = LineStatus.PARTIAL
        elif items:
            status = LineStatus.DONE
        else:
            status = LineStatus.SKIPPED

        self.logger.debug(
            "Classified line",
            status=status.value,
            markers=len(markers),
            items=len(items),
            state=type(state).__name__,
        )
        return LineResult(status, state, items)

    def find_markers(self, text: str, pos: int = 0) -> List[Marker]:
        """Find all category markers in text, starting at the given position."""
        pattern = self.config.marker_pattern
        if pattern is None:
            return []

        markers = []
        while pos < len(text):
            found = pattern.search(text, pos)
            if not found:
                break
            if found.end() == found.start():
                pos = found.start() + 1
                continue

            marker = self._read_marker_types(text, found.start())
            if marker is None:
                label = clean_type(found.group(0), self.config.type_rules)
                marker = Marker(found.start(), found.end(), (label,))
            markers.append(marker)
            pos = marker.end

        return markers

    def _read_marker_types(self, text: str, start: int) -> Optional[Marker]:
        types: List[str] = []
        pos = end = start

        while True:
            found = self._match_category(text, pos)
            if found is None:
                break
            rule, match = found
            types.append(rule.label or clean_type(match.group(0), self.config.type_rules))
            end = match.end()

            joiner = self.config.category_joiner.match(text, end)
            pos = joiner.end() if joiner else end

        if not types:
            return None
        return Marker(start, end, merge_unique(tuple(types)))

    def _match_category(self, text: str, pos: int):
        best = None
        for rule in self.config.categories:
            match = rule.pattern.match(text, pos)
            if match and match.end() > match.start():
                if best is None or match.end() > best[1].end():
                    best = (rule, match)
        return best

    def _read_clause(self, text: str, start: int, end: int) -> Clause:
        """Read years and owner names from text[start:end]."""
        segment = text[start:end]
        years: List[str] = []
        pos = 0

        leading = LEADING_YEARS_PATTERN.match(segment)
        if leading:
            years.extend(split_years(leading.group("years")))
            pos = leading.end()
        # the lead-in may swallow punctuation that terminates the clause
        lead_in = pos
        pos = LEAD_IN_PATTERN.match(segment, pos).end()

        match = self.config.clause_pattern.match(segment, pos)
        terminated = match is not None
        if match is None:
            match = self.config.open_clause_pattern.match(segment, pos)

        names = []
        if match is not None:
            span, trailing = strip_trailing_years(match.group("names"))
            for name in split_names(span, self.config.name_separator):
                if not is_name(name):
                    continue
                if is_excluded(name, self.config.excluded_names):
                    self.logger.debug("Skipped excluded name", name=name)
                    continue
                names.append(name)
            if names:
                years.extend(trailing)
                if terminated:
                    following = FOLLOWING_YEARS_PATTERN.match(segment, match.end())
                    if following:
                        years.extend(split_years(following.group("years")))

        if not names:
            # years or punctuation only, the clause may still end here
            return Clause(
                years=merge_unique(tuple(years)),
                terminated=self._terminates(text, start + lead_in, end),
            )

        return Clause(
            names=merge_unique(tuple(names)),
            years=merge_unique(tuple(years)),
            terminated=terminated,
        )

    def _terminates(self, text: str, start: int, end: int) -> bool:
        match = self.config.terminator.search(text, start)
        return match is not None and match.start() <= end

    def _read_head(
        self, text: str, start: int, end: int, state: ParseState, has_markers: bool
    ) -> Tuple[ParseState, List[CopyrightItem], bool]:
        """Read text in front of the first marker of a line."""
        if isinstance(state, AwaitingName):
            clause = self._read_clause(text, start, end)
            if clause.names:
                return self._open_clause(
                    clause.names,
                    state.types,
                    merge_unique(state.years, clause.years),
                    clause.terminated,
                )
            if clause.years:
                return (
                    AwaitingName(state.types, merge_unique(state.years, clause.years)),
                    [],
                    True,
                )
            return state, [], False

        if isinstance(state, (AwaitingCategory, AwaitingYear)):
            # continuation of a named clause contributes years only
            head = text[start:end]
            years = tuple(split_years(head))
            if years:
                if isinstance(state, AwaitingYear):
                    state = AwaitingYear(
                        state.names, state.types, merge_unique(state.years, years)
                    )
                else:
                    state = AwaitingCategory(state.names, merge_unique(state.years, years))
            if not has_markers and self.config.terminator.search(head):
                return EMPTY, state.finalize(), True
            return state, [], bool(years)

        # a line without any marker may still name an owner
        if has_markers:
            return state, [], False
        clause = self._read_clause(text, start, end)
        if clause.names:
            return self._open_clause(clause.names, (), clause.years, clause.terminated)
        return state, [], False

    def _read_marker(
        self, text: str, marker: Marker, end: int, state: ParseState
    ) -> Tuple[ParseState, List[CopyrightItem]]:
        """Read the clause introduced by a marker."""
        clause = self._read_clause(text, marker.end, end)

        if clause.names:
            items: List[CopyrightItem] = []
            if isinstance(state, AwaitingName):
                # a pending category applies to the owner that follows it
                items.extend(
                    CopyrightItem(name=name, types=state.types, years=state.years)
                    for name in clause.names
                )
            else:
                items.extend(state.finalize())
            state, opened, _ = self._open_clause(
                clause.names, marker.types, clause.years, clause.terminated
            )
            return state, items + opened

        if isinstance(state, (AwaitingCategory, AwaitingYear)):
            types = merge_unique(getattr(state, "types", ()), marker.types)
            years = merge_unique(state.years, clause.years)
            if clause.terminated:
                return EMPTY, AwaitingYear(state.names, types, years).finalize()
            return AwaitingYear(state.names, types, years), []

        if isinstance(state, AwaitingName):
            return (
                AwaitingName(
                    merge_unique(state.types, marker.types),
                    merge_unique(state.years, clause.years),
                ),
                [],
            )
        return AwaitingName(marker.types, clause.years), []

    @staticmethod
    def _open_clause(
        names: Tuple[str, ...],
        types: Tuple[str, ...],
        years: Tuple[str, ...],
        terminated: bool,
    ) -> Tuple[ParseState, List[CopyrightItem], bool]:
        if terminated:
            items = [CopyrightItem(name=name, types=types, years=years) for name in names]
            return EMPTY, items, True
        if types:
            return AwaitingYear(names, types, years), [], True
        return AwaitingCategory(names, years), [], True
