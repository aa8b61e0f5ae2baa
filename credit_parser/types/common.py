"""
Common types used across multiple modules to avoid circular imports.
"""

from typing import Optional


class CreditParserError(Exception):
    """Base exception for credit parser errors."""
    pass


class ConfigError(CreditParserError):
    """Invalid recognizer rule, dialect or vocabulary configuration."""

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        pattern: Optional[str] = None,
    ):
        self.source = source
        self.pattern = pattern
        super().__init__(message)
