"""Exception hierarchy for the Draft → Lexical converter."""


class ConverterError(Exception):
    """Base exception for all draft-lexical errors."""


class ParseError(ConverterError):
    """Raised when the source document is malformed or cannot be read."""


class ConversionError(ConverterError):
    """Raised when a document cannot be converted to a Lexical tree."""


class ConfigError(ConverterError):
    """Raised when configuration is invalid or missing."""
