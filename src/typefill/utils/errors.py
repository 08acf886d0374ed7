"""Typed exceptions for configuration and generation failures."""


class TypefillError(Exception):
    """Base class for all errors raised by the package."""


class ConfigurationError(TypefillError, ValueError):
    """Raised when a generator setting is out of range."""


class InvalidOverrideError(ConfigurationError):
    """Raised when an override function does not have the required shape."""


class GenerationError(TypefillError, TypeError):
    """Base class for errors detected while generating a value."""


class NotAReferenceError(GenerationError):
    """Raised when a fill target is not a :class:`~typefill.Ref` or struct instance."""


class UnsupportedKindError(GenerationError):
    """Raised when no random value can be produced for a type."""


class StaleContinuationError(GenerationError):
    """Raised when a continuation is used after its call has returned."""
