"""
Relationship Mapping Module.

This module maps parsed copyright items onto the relationship types of
a catalog, using an injected type vocabulary.
"""

from .mapper import RelationshipMapper, edit_years
from .types import MappingError, RelationshipType, RelationshipTypeModel, VocabularyModel
from .vocabulary import TypeVocabulary, normalize_label

__all__ = [
    # Core classes
    "RelationshipMapper",
    "TypeVocabulary",
    "edit_years",
    "normalize_label",
    # Data types
    "RelationshipType",
    "RelationshipTypeModel",
    "VocabularyModel",
    # Exceptions
    "MappingError",
]
