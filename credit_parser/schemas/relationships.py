from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field


class TargetType(str, Enum):
    LABEL = "label"
    ARTIST = "artist"


class RelationshipEdit(BaseModel):
    """One relationship to create between a catalog entity and a rights holder."""

    entity_ref: str
    relationship_type: Union[int, str]
    target_name: str = Field(..., min_length=1)
    target_type: TargetType = TargetType.LABEL
    year: Optional[str] = Field(None, pattern=r"^\d{4}$")
    category: Optional[str] = None  # label the edit was mapped from
    needs_review: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
