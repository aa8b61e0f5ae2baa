"""
Configuration loading for credit text dialects and type vocabularies.
"""

from .loader import (
    DEFAULT_DIALECT,
    DEFAULT_VOCABULARY,
    ConfigLoader,
    get_config_loader,
    load_dialect,
    load_vocabulary,
)
from .models import DialectModel, validate_dialect_yaml

__all__ = [
    "ConfigLoader",
    "DialectModel",
    "DEFAULT_DIALECT",
    "DEFAULT_VOCABULARY",
    "get_config_loader",
    "load_dialect",
    "load_vocabulary",
    "validate_dialect_yaml",
]
