"""Exceptions raised by the condenser package."""


class CondenserError(Exception):
    """Base class for condenser errors."""


class ConfigError(CondenserError):
    """Raised when an environment setting can't be parsed."""


class ProviderNotConfiguredError(CondenserError):
    """Raised when a provider's API key is not set."""
