"""
Pydantic schema of dialect configuration files.
"""

from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from ..extraction.patterns import DEFAULT_MAX_LINE_LENGTH, PatternConfig


class DialectPatterns(BaseModel):
    """The three core recognizer rules."""

    name: str = Field(..., min_length=1, description="Recognizes a rights holder name")
    name_separator: str = Field(..., min_length=1, description="Splits joint credits")
    terminator: str = Field(..., min_length=1, description="Ends a credit clause")


class CategoryModel(BaseModel):
    pattern: str = Field(..., min_length=1)
    label: Optional[str] = None


class RuleModel(BaseModel):
    pattern: str = Field(..., min_length=1)
    replacement: str = ""


class DialectModel(BaseModel):
    """Recognizer rules of one credit text dialect."""

    name: str = "custom"
    description: Optional[str] = None
    patterns: DialectPatterns
    categories: List[CategoryModel] = Field(default_factory=list)
    category_joiner: Optional[str] = None
    type_rules: List[RuleModel] = Field(default_factory=list)
    substitutions: List[RuleModel] = Field(default_factory=list)
    excluded_names: List[str] = Field(default_factory=list)
    max_line_length: int = Field(default=DEFAULT_MAX_LINE_LENGTH, gt=0)

    @field_validator("excluded_names")
    @classmethod
    def excluded_names_not_empty(cls, v):
        if any(not pattern for pattern in v):
            raise ValueError("Excluded name patterns cannot be empty")
        return v

    def to_pattern_config(self) -> PatternConfig:
        """
        Compile the dialect.

        Raises:
            ConfigError: If a rule does not compile
        """
        return PatternConfig.create(
            name_recognizer=self.patterns.name,
            name_separator=self.patterns.name_separator,
            terminator=self.patterns.terminator,
            categories=[(category.pattern, category.label) for category in self.categories],
            category_joiner=self.category_joiner,
            type_rules=[(rule.pattern, rule.replacement) for rule in self.type_rules],
            substitutions=[(rule.pattern, rule.replacement) for rule in self.substitutions],
            excluded_names=self.excluded_names,
            max_line_length=self.max_line_length,
        )


def validate_dialect_yaml(yaml_content: str) -> DialectModel:
    """Validate YAML content against the dialect schema."""
    data = yaml.safe_load(yaml_content)
    return DialectModel.model_validate(data)
