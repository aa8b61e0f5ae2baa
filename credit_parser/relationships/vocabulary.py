"""
Relationship type vocabulary.

Maps free text legal category labels onto the relationship types of a
catalog, separately per entity type (release, recording) and target type
(label, artist).
"""

import re
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import structlog
from pydantic import ValidationError

from ..types.common import ConfigError
from .types import RelationshipType, VocabularyModel

logger = structlog.get_logger(__name__)

DEFAULT_ENTITY_TYPE = "release"
DEFAULT_TARGET_TYPE = "label"

_WHITESPACE_PATTERN = re.compile(r"\s+")

TypeTable = Dict[str, Dict[str, Dict[str, RelationshipType]]]


def normalize_label(label: str) -> str:
    """Labels are compared case-insensitively with collapsed whitespace."""
    return _WHITESPACE_PATTERN.sub(" ", label.strip()).casefold()


class TypeVocabulary:
    """Lookup of relationship types by category label."""

    def __init__(self, types: TypeTable, default: RelationshipType, name: str = "custom"):
        self.name = name
        self.default = default
        self._types: TypeTable = {
            entity_type: {
                target_type: {normalize_label(label): rel for label, rel in labels.items()}
                for target_type, labels in targets.items()
            }
            for entity_type, targets in types.items()
        }

    def lookup(
        self,
        label: str,
        target_type: str = DEFAULT_TARGET_TYPE,
        entity_type: str = DEFAULT_ENTITY_TYPE,
    ) -> Optional[RelationshipType]:
        """Relationship type of a label, None when the vocabulary has no entry."""
        labels = self._types.get(entity_type, {}).get(target_type, {})
        return labels.get(normalize_label(label))

    def resolve(
        self,
        label: Optional[str],
        target_type: str = DEFAULT_TARGET_TYPE,
        entity_type: str = DEFAULT_ENTITY_TYPE,
    ) -> Tuple[RelationshipType, bool]:
        """
        Resolve a label, falling back to the default type.

        Returns:
            Relationship type and whether the result needs review
        """
        if label:
            relationship = self.lookup(label, target_type, entity_type)
            if relationship is not None:
                return relationship, False
        return self.default, True

    def labels(
        self,
        target_type: str = DEFAULT_TARGET_TYPE,
        entity_type: str = DEFAULT_ENTITY_TYPE,
    ) -> Tuple[str, ...]:
        return tuple(self._types.get(entity_type, {}).get(target_type, {}))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], source: str = "vocabulary") -> "TypeVocabulary":
        """
        Build a vocabulary from parsed configuration data.

        Raises:
            ConfigError: If the data violates the vocabulary schema, e.g. an
                entry without its year_scoped flag
        """
        try:
            model = VocabularyModel.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid vocabulary {source}: {e}", source=source) from e

        types = {
            entity_type: {
                target_type: {label: entry.to_type() for label, entry in labels.items()}
                for target_type, labels in targets.items()
            }
            for entity_type, targets in model.types.items()
        }
        vocabulary = cls(types, model.default.to_type(), name=model.name)

        logger.debug(
            "Built type vocabulary",
            vocabulary=vocabulary.name,
            entity_types=sorted(types),
        )
        return vocabulary

    @classmethod
    def from_labels(
        cls,
        labels: Mapping[str, Union[RelationshipType, Tuple[Union[int, str], bool]]],
        default: Union[RelationshipType, Tuple[Union[int, str], bool]] = ("needs-review", False),
        target_type: str = DEFAULT_TARGET_TYPE,
        entity_type: str = DEFAULT_ENTITY_TYPE,
    ) -> "TypeVocabulary":
        """Flat vocabulary for a single entity and target type."""
        return cls(
            {entity_type: {target_type: {label: _as_type(rel) for label, rel in labels.items()}}},
            _as_type(default),
        )


def _as_type(value) -> RelationshipType:
    if isinstance(value, RelationshipType):
        return value
    link_type, year_scoped = value
    return RelationshipType(link_type=link_type, year_scoped=year_scoped)
