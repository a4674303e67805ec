"""Custom exceptions for Subscription Message Extractor."""


class SubscriptionExtractorError(Exception):
    """Base exception for all Subscription Message Extractor errors."""


class ConfigurationError(SubscriptionExtractorError):
    """Exception raised for configuration related errors."""


class RegistryFrozenError(SubscriptionExtractorError):
    """Exception raised when registering a pattern on a frozen registry snapshot."""


class InvalidMessageError(SubscriptionExtractorError):
    """Exception raised for malformed input messages."""
