import pytest
import structlog
from pathlib import Path

from credit_parser.config.loader import ConfigLoader
from credit_parser.extraction.accumulator import CreditAccumulator
from credit_parser.extraction.patterns import PatternConfig


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def config_loader() -> ConfigLoader:
    """Loader reading only the packaged configurations."""
    return ConfigLoader()


@pytest.fixture
def default_config(config_loader) -> PatternConfig:
    return config_loader.load_dialect("default")


@pytest.fixture
def accumulator(default_config) -> CreditAccumulator:
    return CreditAccumulator(default_config)


@pytest.fixture
def musicbrainz_vocabulary(config_loader):
    return config_loader.load_vocabulary("musicbrainz")


@pytest.fixture
def semicolon_config() -> PatternConfig:
    """Dialect whose clauses only end at a semicolon."""
    return PatternConfig.create(
        name_recognizer=r"[^;©℗]+?",
        name_separator=r"\s*/\s*",
        terminator=r";",
        categories=[r"[©℗]"],
    )


@pytest.fixture
def lyrics_config() -> PatternConfig:
    """Dialect for songwriting credits with comma and "and" separated names."""
    return PatternConfig.create(
        name_recognizer=r"[^,]+?",
        name_separator=r"\s*,\s*|\s+and\s+",
        terminator=r"$",
        categories=[(r"lyrics\s+by", "lyrics")],
    )


@pytest.fixture
def config_dir(tmp_path) -> Path:
    """Directory for dialect and vocabulary files written by a test."""
    (tmp_path / "dialects").mkdir()
    (tmp_path / "vocabularies").mkdir()
    return tmp_path
