"""
Tests for the relationship type vocabulary.
"""

import pytest

from credit_parser.relationships.types import RelationshipType
from credit_parser.relationships.vocabulary import TypeVocabulary
from credit_parser.types.common import ConfigError


VOCABULARY_DATA = {
    "name": "test",
    "default": {"link_type": "review", "year_scoped": False},
    "types": {
        "release": {
            "label": {
                "©": {"link_type": 708, "year_scoped": True},
                "Licensed To": {"link_type": 833, "year_scoped": False},
            },
        },
        "recording": {
            "label": {"℗": {"link_type": 867, "year_scoped": True}},
        },
    },
}


class TestTypeVocabulary:
    """Test vocabulary construction and lookup."""

    def test_from_mapping(self):
        """Test vocabularies are built from configuration data."""
        vocabulary = TypeVocabulary.from_mapping(VOCABULARY_DATA)

        assert vocabulary.name == "test"
        assert vocabulary.default == RelationshipType("review", False)
        assert vocabulary.lookup("©") == RelationshipType(708, True)
        assert vocabulary.lookup("℗", entity_type="recording") == RelationshipType(867, True)

    def test_lookup_is_case_insensitive(self):
        """Test labels match regardless of case and spacing."""
        vocabulary = TypeVocabulary.from_mapping(VOCABULARY_DATA)
        assert vocabulary.lookup("licensed  to").link_type == 833

    def test_lookup_is_scoped(self):
        """Test lookups respect entity and target type."""
        vocabulary = TypeVocabulary.from_mapping(VOCABULARY_DATA)

        assert vocabulary.lookup("©", target_type="artist") is None
        assert vocabulary.lookup("©", entity_type="recording") is None

    def test_resolve_falls_back_to_default(self):
        """Test unknown or missing labels resolve to the default for review."""
        vocabulary = TypeVocabulary.from_mapping(VOCABULARY_DATA)

        assert vocabulary.resolve("©") == (RelationshipType(708, True), False)
        assert vocabulary.resolve("lyrics") == (vocabulary.default, True)
        assert vocabulary.resolve(None) == (vocabulary.default, True)

    def test_labels(self):
        """Test known labels are listed normalized."""
        vocabulary = TypeVocabulary.from_mapping(VOCABULARY_DATA)
        assert vocabulary.labels() == ("©", "licensed to")

    def test_missing_year_scope_flag(self):
        """Test every type must say whether it is year-scoped."""
        data = {
            "default": {"link_type": "review", "year_scoped": False},
            "types": {"release": {"label": {"©": {"link_type": 708}}}},
        }

        with pytest.raises(ConfigError) as exc_info:
            TypeVocabulary.from_mapping(data, source="broken.yaml")
        assert "year_scoped" in str(exc_info.value)
        assert exc_info.value.source == "broken.yaml"

    def test_missing_default(self):
        """Test a vocabulary needs a default type."""
        with pytest.raises(ConfigError):
            TypeVocabulary.from_mapping({"types": {}})

    def test_empty_label(self):
        """Test empty category labels are rejected."""
        data = {
            "default": {"link_type": "review", "year_scoped": False},
            "types": {"release": {"label": {" ": {"link_type": 1, "year_scoped": True}}}},
        }
        with pytest.raises(ConfigError):
            TypeVocabulary.from_mapping(data)

    def test_from_labels(self):
        """Test flat vocabularies for a single entity and target type."""
        vocabulary = TypeVocabulary.from_labels(
            {"lyrics": ("lyricist", False), "©": RelationshipType(1, True)},
            default=("other", False),
        )

        assert vocabulary.lookup("Lyrics") == RelationshipType("lyricist", False)
        assert vocabulary.lookup("©") == RelationshipType(1, True)
        assert vocabulary.default == RelationshipType("other", False)

    def test_packaged_vocabulary(self, musicbrainz_vocabulary):
        """Test the packaged vocabulary flags copyrights as year-scoped."""
        assert musicbrainz_vocabulary.lookup("©").year_scoped is True
        assert musicbrainz_vocabulary.lookup("licensed to").year_scoped is False
        assert musicbrainz_vocabulary.lookup("℗", "artist", "recording").link_type == 869
