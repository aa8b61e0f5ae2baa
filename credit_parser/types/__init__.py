from .common import ConfigError, CreditParserError

__all__ = ["ConfigError", "CreditParserError"]
