"""
Tests for mapping copyright items onto relationship edits.
"""

import pytest

from credit_parser.extraction.types import CopyrightItem
from credit_parser.relationships.mapper import RelationshipMapper, edit_years
from credit_parser.relationships.types import MappingError, RelationshipType
from credit_parser.relationships.vocabulary import TypeVocabulary
from credit_parser.schemas.relationships import RelationshipEdit, TargetType


@pytest.fixture
def mapper(musicbrainz_vocabulary):
    return RelationshipMapper(musicbrainz_vocabulary)


def summarize(edits):
    return [(edit.entity_ref, edit.relationship_type, edit.target_name, edit.year) for edit in edits]


class TestRelationshipMapper:
    """Test relationship edits for release credits."""

    def test_year_scoped_type_with_several_years(self, mapper):
        """Test one edit per year for year-scoped types."""
        items = [CopyrightItem("Example Label", ("©",), ("1998", "2001"))]
        edits = mapper.to_relationship_edits(items, "release-1")

        assert summarize(edits) == [
            ("release-1", 708, "Example Label", "1998"),
            ("release-1", 708, "Example Label", "2001"),
        ]
        assert all(edit.category == "©" for edit in edits)
        assert not any(edit.needs_review for edit in edits)

    def test_type_without_year_scope_with_several_years(self, mapper):
        """Test a single undated edit for types that are not year-scoped."""
        items = [CopyrightItem("Some Label", ("licensed to",), ("1998", "2001"))]
        edits = mapper.to_relationship_edits(items, "release-1")

        assert summarize(edits) == [("release-1", 833, "Some Label", None)]

    def test_single_year_is_kept(self, mapper):
        """Test a single year dates the edit whatever the type."""
        items = [CopyrightItem("Some Label", ("licensed from",), ("2019",))]
        edits = mapper.to_relationship_edits(items, "release-1")

        assert summarize(edits) == [("release-1", 712, "Some Label", "2019")]

    def test_unknown_category_needs_review(self, mapper):
        """Test unknown labels map to the default type instead of failing."""
        items = [CopyrightItem("Some Writer", ("lyrics",))]
        edits = mapper.to_relationship_edits(items, "release-1")

        assert len(edits) == 1
        assert edits[0].relationship_type == "needs-review"
        assert edits[0].category == "lyrics"
        assert edits[0].needs_review is True

    def test_unknown_categories_are_kept_apart(self, mapper):
        """Test every unknown label gets its own edit for review."""
        items = [CopyrightItem("Some Writer", ("lyrics", "arranged by"), ("2019",))]
        edits = mapper.to_relationship_edits(items, "release-1")

        assert [edit.category for edit in edits] == ["lyrics", "arranged by"]
        assert all(edit.relationship_type == "needs-review" for edit in edits)
        assert all(edit.year == "2019" for edit in edits)

    def test_item_without_category_needs_review(self, mapper):
        """Test category-less items are not dropped."""
        edits = mapper.to_relationship_edits([CopyrightItem("Some Label")], "release-1")

        assert len(edits) == 1
        assert edits[0].relationship_type == "needs-review"
        assert edits[0].category is None
        assert edits[0].needs_review is True

    def test_ordering(self, mapper):
        """Test edits are ordered by item, type and ascending year."""
        items = [
            CopyrightItem("Label A", ("©", "℗"), ("2001", "1998")),
            CopyrightItem("Label B", ("distributed by",)),
        ]
        edits = mapper.to_relationship_edits(items, "release-1")

        assert summarize(edits) == [
            ("release-1", 708, "Label A", "1998"),
            ("release-1", 708, "Label A", "2001"),
            ("release-1", 711, "Label A", "1998"),
            ("release-1", 711, "Label A", "2001"),
            ("release-1", 361, "Label B", None),
        ]

    def test_identical_edits_are_emitted_once(self):
        """Test labels mapping to the same type give a single edit."""
        vocabulary = TypeVocabulary.from_labels({"©": (1, True), "copyright": (1, True)})
        items = [CopyrightItem("Some Label", ("©", "copyright"), ("2019",))]

        edits = RelationshipMapper(vocabulary).to_relationship_edits(items, "release-1")

        assert summarize(edits) == [("release-1", 1, "Some Label", "2019")]

    def test_requires_entity_reference(self, mapper):
        """Test edits cannot be created without a target entity."""
        with pytest.raises(MappingError):
            mapper.to_relationship_edits([CopyrightItem("Some Label", ("©",))], "")


class TestArtistTargets:
    """Test rights holders that are artists."""

    def test_artist_names_match_insensitively(self, mapper):
        """Test artist names are compared without case and diacritics."""
        items = [
            CopyrightItem("Beyoncé", ("©",), ("2016",)),
            CopyrightItem("Some Label", ("©",), ("2016",)),
        ]
        edits = mapper.to_relationship_edits(items, "release-1", artist_names=["BEYONCE"])

        assert [(edit.relationship_type, edit.target_type) for edit in edits] == [
            (709, TargetType.ARTIST),
            (708, TargetType.LABEL),
        ]

    def test_force_artist(self, mapper):
        """Test every rights holder can be forced to be an artist."""
        items = [CopyrightItem("Some Artist", ("℗",), ("2016",))]
        edits = mapper.to_relationship_edits(items, "release-1", force_artist=True)

        assert edits[0].relationship_type == 710
        assert edits[0].target_type == TargetType.ARTIST

    def test_artist_without_vocabulary_entry(self, mapper):
        """Test artist credits without an artist type need review."""
        items = [CopyrightItem("Some Artist", ("licensed to",))]
        edits = mapper.to_relationship_edits(items, "release-1", force_artist=True)

        assert edits[0].needs_review is True


class TestRecordingEdits:
    """Test phonographic credits for recordings."""

    def test_recordings_receive_phonographic_copyright(self, mapper):
        """Test ℗ credits are repeated for every recording."""
        items = [CopyrightItem("Some Label", ("℗",), ("2019",))]
        edits = mapper.to_relationship_edits(
            items, "release-1", recording_refs=["recording-1", "recording-2"]
        )

        assert summarize(edits) == [
            ("release-1", 711, "Some Label", "2019"),
            ("recording-1", 867, "Some Label", "2019"),
            ("recording-2", 867, "Some Label", "2019"),
        ]

    def test_recording_edits_with_several_years_are_undated(self, mapper):
        """Test recording edits only carry a single year."""
        items = [CopyrightItem("Some Label", ("℗",), ("2018", "2019"))]
        edits = mapper.to_relationship_edits(items, "release-1", recording_refs=["recording-1"])

        assert summarize(edits)[-1] == ("recording-1", 867, "Some Label", None)

    def test_other_categories_are_release_only(self, mapper):
        """Test categories without recording type give no recording edits."""
        items = [CopyrightItem("Some Label", ("©",), ("2019",))]
        edits = mapper.to_relationship_edits(items, "release-1", recording_refs=["recording-1"])

        assert [edit.entity_ref for edit in edits] == ["release-1"]


class TestEndToEnd:
    """Test parsing followed by mapping."""

    @pytest.mark.parametrize(
        "line",
        ["℗ 2019 Some Label", "℗ Some Label 2019"],
    )
    def test_single_credit_gives_single_edit(self, accumulator, mapper, line):
        """Test a single credit round-trips to one edit."""
        edits = mapper.to_relationship_edits(accumulator.parse(line), "release-1")

        assert edits == [
            RelationshipEdit(
                entity_ref="release-1",
                relationship_type=711,
                target_name="Some Label",
                target_type=TargetType.LABEL,
                year="2019",
                category="℗",
            )
        ]

    def test_multi_year_credit(self, accumulator, mapper):
        """Test a multi-year copyright gives one edit per year."""
        edits = mapper.to_relationship_edits(
            accumulator.parse("© 1998, 2001 Example Label"), "release-1"
        )

        assert [(edit.target_name, edit.year) for edit in edits] == [
            ("Example Label", "1998"),
            ("Example Label", "2001"),
        ]


class TestEditYears:
    """Test year expansion rules."""

    def test_edit_years(self):
        """Test year expansion for scoped and unscoped types."""
        scoped = RelationshipType(link_type=1, year_scoped=True)
        unscoped = RelationshipType(link_type=2, year_scoped=False)

        assert edit_years((), scoped) == [None]
        assert edit_years(("2019",), unscoped) == ["2019"]
        assert edit_years(("2020", "2019", "2020"), scoped) == ["2019", "2020"]
        assert edit_years(("2020", "2019"), unscoped) == [None]

    def test_edit_serialization(self):
        """Test edits serialize to plain data."""
        edit = RelationshipEdit(
            entity_ref="release-1",
            relationship_type=708,
            target_name="Some Label",
            year="2019",
            category="©",
        )

        assert edit.to_dict() == {
            "entity_ref": "release-1",
            "relationship_type": 708,
            "target_name": "Some Label",
            "target_type": "label",
            "year": "2019",
            "category": "©",
            "needs_review": False,
        }

    def test_edit_rejects_malformed_year(self):
        """Test years are four digit numerals."""
        with pytest.raises(ValueError):
            RelationshipEdit(
                entity_ref="release-1",
                relationship_type=708,
                target_name="Some Label",
                year="1998-2001",
            )
