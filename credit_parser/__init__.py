"""
Copyright credit parser.

Turns free-form copyright and legal credit text into copyright items and
maps them onto relationship edits of a catalog.
"""

from .extraction import (
    CopyrightItem,
    CreditAccumulator,
    LineClassifier,
    PatternConfig,
    parse_copyright_notice,
)
from .relationships import RelationshipMapper, RelationshipType, TypeVocabulary
from .schemas import RelationshipEdit
from .types import ConfigError, CreditParserError

__version__ = "0.1.0"

__all__ = [
    # Core classes
    "PatternConfig",
    "LineClassifier",
    "CreditAccumulator",
    "RelationshipMapper",
    "TypeVocabulary",
    "parse_copyright_notice",
    # Data types
    "CopyrightItem",
    "RelationshipEdit",
    "RelationshipType",
    # Exceptions
    "CreditParserError",
    "ConfigError",
]
