"""
Dialect and vocabulary configuration loader.

This module loads recognizer rules for credit text dialects and
relationship type vocabularies from YAML files, validates them and
caches the compiled results.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import structlog
import yaml
from pydantic import ValidationError

from ..extraction.patterns import PatternConfig
from ..relationships.vocabulary import TypeVocabulary
from ..types.common import ConfigError
from .models import DialectModel

logger = structlog.get_logger(__name__)

PACKAGE_CONFIG_DIR = Path(__file__).parent.parent / "configs"

DEFAULT_DIALECT = "default"
DEFAULT_VOCABULARY = "musicbrainz"


class ConfigLoader:
    """
    Loader for dialect and vocabulary configuration files.

    Names are looked up in the configured directory first and in the
    packaged configurations second. A name ending in ".yaml" or ".yml" is
    read as a file path.
    """

    def __init__(
        self,
        dialect_dir: Optional[Path] = None,
        vocabulary_dir: Optional[Path] = None,
    ):
        """
        Initialize config loader.

        Args:
            dialect_dir: Directory containing additional dialect files
            vocabulary_dir: Directory containing additional vocabulary files
        """
        self.dialect_dirs = self._search_path(dialect_dir, "dialects")
        self.vocabulary_dirs = self._search_path(vocabulary_dir, "vocabularies")
        self.logger = logger.bind(component="ConfigLoader")

        # Cache for compiled configurations
        self._dialect_cache: Dict[str, PatternConfig] = {}
        self._vocabulary_cache: Dict[str, TypeVocabulary] = {}

        self.logger.debug(
            "Initialized config loader",
            dialect_dirs=[str(path) for path in self.dialect_dirs],
            vocabulary_dirs=[str(path) for path in self.vocabulary_dirs],
        )

    @staticmethod
    def _search_path(config_dir: Optional[Path], kind: str) -> List[Path]:
        dirs = [PACKAGE_CONFIG_DIR / kind]
        if config_dir is not None:
            dirs.insert(0, Path(config_dir))
        return dirs

    def load_dialect(self, name: str = DEFAULT_DIALECT) -> PatternConfig:
        """
        Load the recognizer rules of a dialect.

        Unknown dialect names fall back to the packaged default dialect.

        Args:
            name: Dialect name or path to a dialect file

        Returns:
            Compiled pattern configuration

        Raises:
            ConfigError: If the dialect file is invalid
        """
        if name in self._dialect_cache:
            return self._dialect_cache[name]

        config_path = self._find(name, self.dialect_dirs)
        if config_path is None:
            if name == DEFAULT_DIALECT:
                raise ConfigError("Packaged default dialect is missing", source=name)
            self.logger.warning("Dialect not found, using default", dialect=name)
            config = self.load_dialect(DEFAULT_DIALECT)
        else:
            config = self.load_dialect_file(config_path)
            self.logger.info("Loaded dialect", dialect=name, path=str(config_path))

        self._dialect_cache[name] = config
        return config

    def load_dialect_file(self, config_path: Path) -> PatternConfig:
        """Load and compile a dialect file."""
        data = self._load_yaml_config(config_path)
        try:
            model = DialectModel.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid dialect {config_path}: {e}", source=str(config_path)) from e
        return model.to_pattern_config()

    def load_vocabulary(self, name: str = DEFAULT_VOCABULARY) -> TypeVocabulary:
        """
        Load a relationship type vocabulary.

        Args:
            name: Vocabulary name or path to a vocabulary file

        Returns:
            Type vocabulary

        Raises:
            ConfigError: If the vocabulary does not exist or is invalid
        """
        if name in self._vocabulary_cache:
            return self._vocabulary_cache[name]

        config_path = self._find(name, self.vocabulary_dirs)
        if config_path is None:
            raise ConfigError(f"Vocabulary not found: {name}", source=name)

        vocabulary = TypeVocabulary.from_mapping(
            self._load_yaml_config(config_path), source=str(config_path)
        )
        self.logger.info("Loaded vocabulary", vocabulary=name, path=str(config_path))

        self._vocabulary_cache[name] = vocabulary
        return vocabulary

    def _find(self, name: str, search_dirs: List[Path]) -> Optional[Path]:
        if name.endswith((".yaml", ".yml")):
            path = Path(name)
            return path if path.exists() else None

        for config_dir in search_dirs:
            config_path = config_dir / f"{name.lower()}.yaml"
            if config_path.exists():
                return config_path
        return None

    def _load_yaml_config(self, config_path: Path) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            self.logger.error(
                "Error loading YAML config", path=str(config_path), error=str(e)
            )
            raise ConfigError(
                f"Cannot read {config_path}: {e}", source=str(config_path)
            ) from e

        if not isinstance(config, dict):
            raise ConfigError(
                "Configuration must be a dictionary", source=str(config_path)
            )
        return config

    def available_dialects(self) -> List[str]:
        """Get list of available dialect names."""
        return self._available(self.dialect_dirs)

    def available_vocabularies(self) -> List[str]:
        """Get list of available vocabulary names."""
        return self._available(self.vocabulary_dirs)

    @staticmethod
    def _available(search_dirs: List[Path]) -> List[str]:
        names = set()
        for config_dir in search_dirs:
            if config_dir.exists():
                names.update(path.stem for path in config_dir.glob("*.yaml"))
        return sorted(names)

    def clear_cache(self):
        """Clear the configuration caches."""
        self._dialect_cache.clear()
        self._vocabulary_cache.clear()
        self.logger.debug("Cleared config cache")

    def reload_dialect(self, name: str = DEFAULT_DIALECT) -> PatternConfig:
        """Reload a dialect, bypassing cache."""
        self._dialect_cache.pop(name, None)
        return self.load_dialect(name)


# Global instance for convenient access
_global_loader: Optional[ConfigLoader] = None


def get_config_loader(
    dialect_dir: Optional[Path] = None, vocabulary_dir: Optional[Path] = None
) -> ConfigLoader:
    """Get global configuration loader instance."""
    global _global_loader

    if _global_loader is None or dialect_dir is not None or vocabulary_dir is not None:
        _global_loader = ConfigLoader(dialect_dir, vocabulary_dir)

    return _global_loader


def load_dialect(
    name: str = DEFAULT_DIALECT, dialect_dir: Optional[Union[str, Path]] = None
) -> PatternConfig:
    """
    Convenience function to load a dialect.

    Args:
        name: Dialect name or file path
        dialect_dir: Optional dialect directory override

    Returns:
        Compiled pattern configuration
    """
    loader = get_config_loader(Path(dialect_dir) if dialect_dir else None)
    return loader.load_dialect(name)


def load_vocabulary(
    name: str = DEFAULT_VOCABULARY, vocabulary_dir: Optional[Union[str, Path]] = None
) -> TypeVocabulary:
    """
    Convenience function to load a vocabulary.

    Args:
        name: Vocabulary name or file path
        vocabulary_dir: Optional vocabulary directory override

    Returns:
        Type vocabulary
    """
    loader = get_config_loader(
        vocabulary_dir=Path(vocabulary_dir) if vocabulary_dir else None
    )
    return loader.load_vocabulary(name)
