"""Custom exceptions for the hero image domain."""


class HeroImageError(Exception):
    """Base exception for this project."""


class ConfigError(HeroImageError):
    """Raised when runtime configuration is invalid."""


class InvalidDescriptorError(HeroImageError, ValueError):
    """Raised when an entity descriptor violates its preconditions."""


class ProviderError(HeroImageError):
    """Raised when a third-party image search provider call fails."""


class ProducerError(HeroImageError):
    """Raised when the structured record producer fails."""
