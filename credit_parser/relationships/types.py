"""
Type definitions for relationship mapping module.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Union

from pydantic import BaseModel, Field, field_validator

from ..types.common import CreditParserError


class MappingError(CreditParserError):
    """Base exception for relationship mapping errors."""
    pass


@dataclass(frozen=True)
class RelationshipType:
    """Target relationship type of a legal category."""

    link_type: Union[int, str]
    year_scoped: bool
    name: Optional[str] = None


# Vocabulary file schema

class RelationshipTypeModel(BaseModel):
    link_type: Union[int, str]
    year_scoped: bool = Field(..., description="One edit per year for multi-year credits")
    name: Optional[str] = None

    def to_type(self) -> RelationshipType:
        return RelationshipType(
            link_type=self.link_type, year_scoped=self.year_scoped, name=self.name
        )


class VocabularyModel(BaseModel):
    """Relationship types per entity type, target type and category label."""

    name: str = "custom"
    description: Optional[str] = None
    default: RelationshipTypeModel
    types: Dict[str, Dict[str, Dict[str, RelationshipTypeModel]]] = Field(
        default_factory=dict
    )

    @field_validator("types")
    @classmethod
    def labels_not_empty(cls, v):
        for entity_type, targets in v.items():
            for target_type, labels in targets.items():
                if any(not label.strip() for label in labels):
                    raise ValueError(
                        f"Empty category label for {entity_type}/{target_type}"
                    )
        return v
