"""
Recognizer rules for copyright and legal credits.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional, Pattern, Sequence, Tuple, Union

import structlog

from ..types.common import ConfigError

logger = structlog.get_logger(__name__)

RuleSource = Union[str, Pattern]

# Credit text is matched case-insensitively unless a rule says otherwise
DEFAULT_FLAGS = re.IGNORECASE

# Adjacent category markers belong to the same clause, e.g. "℗ & ©"
DEFAULT_CATEGORY_JOINER = r"\s*(?:[&+]|\band\b)?\s*"

# Regular expression literal as typed by users, e.g. "/\s&\s/i"
REGEX_LITERAL_PATTERN = re.compile(r"^/(.+?)/([gimsuy]*)$")

# Longer lines are skipped, name matching slows down on long unbroken text
DEFAULT_MAX_LINE_LENGTH = 2000

_LITERAL_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
}


def compile_rule(value: RuleSource, rule_name: str, flags: int = DEFAULT_FLAGS) -> Pattern:
    """
    Compile a recognizer rule.

    Args:
        value: Regular expression source, "/source/flags" literal or compiled pattern
        rule_name: Name of the rule, used in error messages
        flags: Flags for sources without explicit flags

    Returns:
        Compiled pattern

    Raises:
        ConfigError: If the rule is missing, empty or does not compile
    """
    if isinstance(value, re.Pattern):
        if not value.pattern:
            raise ConfigError(f"Empty {rule_name} rule", source=rule_name)
        return value

    if not isinstance(value, str) or not value:
        raise ConfigError(f"Missing {rule_name} rule", source=rule_name)

    source = value
    literal = REGEX_LITERAL_PATTERN.match(value)
    if literal:
        source = literal.group(1)
        flags = 0
        for flag in literal.group(2):
            flags |= _LITERAL_FLAGS.get(flag, 0)

    try:
        return re.compile(source, flags)
    except re.error as e:
        raise ConfigError(
            f"Invalid {rule_name} rule {value!r}: {e}", source=rule_name, pattern=value
        ) from e


def parse_user_pattern(value: str) -> str:
    """
    Interpret a pattern typed by a user.

    Slash-delimited values are regular expressions, everything else
    is matched literally.
    """
    if REGEX_LITERAL_PATTERN.match(value):
        return value
    return re.escape(value)


@dataclass(frozen=True)
class CategoryRule:
    """Marker of a legal category, with an optional fixed label."""

    pattern: Pattern
    label: Optional[str] = None


@dataclass(frozen=True)
class PatternConfig:
    """
    Recognizer rules for one credit text dialect.

    The three core rules recognize rights holder names, split joint
    credits and mark the end of a clause. Category markers, label
    cleanup, text standardization and excluded names are optional
    dialect fragments.
    """

    name_recognizer: Pattern
    name_separator: Pattern
    terminator: Pattern
    categories: Tuple[CategoryRule, ...] = ()
    category_joiner: Pattern = field(
        default_factory=lambda: re.compile(DEFAULT_CATEGORY_JOINER, DEFAULT_FLAGS)
    )
    type_rules: Tuple[Tuple[Pattern, str], ...] = ()
    substitutions: Tuple[Tuple[Pattern, str], ...] = ()
    excluded_names: Tuple[Pattern, ...] = ()
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH

    # Assembled from the rules above
    clause_pattern: Pattern = field(init=False, repr=False, compare=False)
    open_clause_pattern: Pattern = field(init=False, repr=False, compare=False)
    marker_pattern: Optional[Pattern] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        for rule_name in ("name_recognizer", "name_separator", "terminator"):
            rule = getattr(self, rule_name)
            if not isinstance(rule, re.Pattern) or not rule.pattern:
                raise ConfigError(f"Missing {rule_name} rule", source=rule_name)
        if self.max_line_length <= 0:
            raise ConfigError("Line length limit must be positive", source="max_line_length")

        name = self.name_recognizer.pattern
        separator = self.name_separator.pattern
        names = rf"(?P<names>(?:{name})(?:(?:{separator})(?:{name}))*)"

        object.__setattr__(
            self,
            "clause_pattern",
            self._assemble(rf"\s*{names}(?:{self.terminator.pattern})", "clause"),
        )
        object.__setattr__(
            self, "open_clause_pattern", self._assemble(rf"\s*{names}\s*$", "clause")
        )

        marker = None
        if self.categories:
            marker = self._assemble(
                "|".join(f"(?:{rule.pattern.pattern})" for rule in self.categories),
                "category",
            )
        object.__setattr__(self, "marker_pattern", marker)

    @staticmethod
    def _assemble(source: str, rule_name: str) -> Pattern:
        try:
            return re.compile(source, DEFAULT_FLAGS)
        except re.error as e:
            raise ConfigError(
                f"Rules do not combine into a valid {rule_name} pattern: {e}",
                source=rule_name,
                pattern=source,
            ) from e

    @classmethod
    def create(
        cls,
        name_recognizer: RuleSource,
        name_separator: RuleSource,
        terminator: RuleSource,
        categories: Iterable[Union[RuleSource, Tuple[RuleSource, Optional[str]]]] = (),
        category_joiner: Optional[RuleSource] = None,
        type_rules: Iterable[Tuple[RuleSource, str]] = (),
        substitutions: Iterable[Tuple[RuleSource, str]] = (),
        excluded_names: Iterable[RuleSource] = (),
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
    ) -> "PatternConfig":
        """
        Build a configuration from rule sources.

        Categories are given either as a pattern or as a (pattern, label)
        pair; without a label the matched text is cleaned into the label.

        Raises:
            ConfigError: If any rule is missing or does not compile
        """
        category_rules = []
        for category in categories:
            if isinstance(category, (tuple, list)):
                pattern, label = category
            else:
                pattern, label = category, None
            category_rules.append(CategoryRule(compile_rule(pattern, "category"), label))

        config = cls(
            name_recognizer=compile_rule(name_recognizer, "name_recognizer"),
            # the separator splits names as given, without implicit flags
            name_separator=compile_rule(name_separator, "name_separator", flags=0),
            terminator=compile_rule(terminator, "terminator"),
            categories=tuple(category_rules),
            category_joiner=compile_rule(
                category_joiner or DEFAULT_CATEGORY_JOINER, "category_joiner"
            ),
            type_rules=_compile_pairs(type_rules, "type_rule"),
            substitutions=_compile_pairs(substitutions, "substitution"),
            excluded_names=tuple(
                compile_rule(pattern, "excluded_name") for pattern in excluded_names
            ),
            max_line_length=max_line_length,
        )

        logger.debug(
            "Built pattern config",
            categories=len(config.categories),
            substitutions=len(config.substitutions),
        )
        return config

    def with_overrides(
        self,
        name_recognizer: Optional[RuleSource] = None,
        name_separator: Optional[RuleSource] = None,
        terminator: Optional[RuleSource] = None,
    ) -> "PatternConfig":
        """Copy of this configuration with some core rules replaced."""
        return PatternConfig(
            name_recognizer=compile_rule(name_recognizer, "name_recognizer")
            if name_recognizer
            else self.name_recognizer,
            name_separator=compile_rule(name_separator, "name_separator", flags=0)
            if name_separator
            else self.name_separator,
            terminator=compile_rule(terminator, "terminator")
            if terminator
            else self.terminator,
            categories=self.categories,
            category_joiner=self.category_joiner,
            type_rules=self.type_rules,
            substitutions=self.substitutions,
            excluded_names=self.excluded_names,
            max_line_length=self.max_line_length,
        )


def _compile_pairs(
    pairs: Iterable[Sequence], rule_name: str
) -> Tuple[Tuple[Pattern, str], ...]:
    compiled = []
    for pair in pairs:
        if len(pair) != 2:
            raise ConfigError(
                f"A {rule_name} needs a pattern and a replacement", source=rule_name
            )
        pattern, replacement = pair
        compiled.append((compile_rule(pattern, rule_name), replacement))
    return tuple(compiled)
