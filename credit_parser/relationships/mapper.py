"""
Mapping of copyright items onto catalog relationship edits.
"""

from typing import Iterable, List, Optional, Sequence, Set, Tuple

import structlog

from ..extraction.normalizer import simplify_name
from ..extraction.types import CopyrightItem
from ..schemas.relationships import RelationshipEdit, TargetType
from .types import MappingError, RelationshipType
from .vocabulary import TypeVocabulary

logger = structlog.get_logger(__name__)

RELEASE = "release"
RECORDING = "recording"


class RelationshipMapper:
    """
    Translates copyright items into relationship edits.

    Every category label of an item is looked up in the vocabulary, labels
    without an entry map to the vocabulary default and are flagged for
    review, so no extracted credit is dropped.
    """

    def __init__(self, vocabulary: TypeVocabulary):
        self.vocabulary = vocabulary
        self.logger = logger.bind(component="RelationshipMapper")

    def to_relationship_edits(
        self,
        items: Iterable[CopyrightItem],
        entity_ref: str,
        artist_names: Iterable[str] = (),
        force_artist: bool = False,
        recording_refs: Sequence[str] = (),
    ) -> List[RelationshipEdit]:
        """
        Map copyright items to relationship edits.

        Args:
            items: Parsed copyright items
            entity_ref: Reference of the release the edits apply to
            artist_names: Names that refer to artists rather than labels
            force_artist: Treat every rights holder as an artist
            recording_refs: Recordings that receive phonographic credits too

        Returns:
            Edits ordered by item, then type, then year ascending
        """
        if not entity_ref:
            raise MappingError("Relationship edits need an entity reference")

        artists = {simplify_name(name) for name in artist_names}
        edits: List[RelationshipEdit] = []
        seen: Set[Tuple] = set()

        for item in items:
            if force_artist or simplify_name(item.name) in artists:
                target_type = TargetType.ARTIST
            else:
                target_type = TargetType.LABEL

            # category-less items still produce a reviewable edit
            labels: Tuple[Optional[str], ...] = item.types or (None,)
            for label in labels:
                relationship, needs_review = self.vocabulary.resolve(
                    label, target_type.value, RELEASE
                )
                if needs_review:
                    self.logger.debug(
                        "No relationship type for category",
                        category=label,
                        target_type=target_type.value,
                    )

                for year in edit_years(item.years, relationship):
                    self._add(
                        edits,
                        seen,
                        RelationshipEdit(
                            entity_ref=entity_ref,
                            relationship_type=relationship.link_type,
                            target_name=item.name,
                            target_type=target_type,
                            year=year,
                            category=label,
                            needs_review=needs_review,
                        ),
                    )

                if label and recording_refs:
                    recording = self.vocabulary.lookup(label, target_type.value, RECORDING)
                    if recording is not None:
                        year = item.years[0] if len(item.years) == 1 else None
                        for recording_ref in recording_refs:
                            self._add(
                                edits,
                                seen,
                                RelationshipEdit(
                                    entity_ref=recording_ref,
                                    relationship_type=recording.link_type,
                                    target_name=item.name,
                                    target_type=target_type,
                                    year=year,
                                    category=label,
                                ),
                            )

        self.logger.debug(
            "Mapped relationship edits", entity_ref=entity_ref, edits=len(edits)
        )
        return edits

    @staticmethod
    def _add(edits: List[RelationshipEdit], seen: Set[Tuple], edit: RelationshipEdit) -> None:
        key = (
            edit.entity_ref,
            edit.relationship_type,
            edit.target_name,
            edit.target_type,
            edit.year,
            # default type edits stay apart so each unknown label is kept
            edit.category if edit.needs_review else None,
        )
        if key not in seen:
            seen.add(key)
            edits.append(edit)


def edit_years(
    years: Sequence[str], relationship: RelationshipType
) -> List[Optional[str]]:
    """
    Years to create edits for.

    A single year always dates its edit. Several years give one edit per
    year for year-scoped types and one undated edit otherwise.
    """
    if not years:
        return [None]
    if len(years) == 1:
        return [years[0]]
    if relationship.year_scoped:
        return sorted(set(years))
    return [None]
