"""
Custom exceptions for the entity resolution module.

Resolution itself never raises to callers (failures collapse to ``None``).
These exceptions are raised by the explicit cache lifecycle operations and
by configuration helpers, and carry HTTP-like codes so the router can map
them consistently.
"""
from typing import Optional


class EntityResolverError(Exception):
    """Base exception for all entity resolution errors."""

    def __init__(
        self,
        message: str,
        code: int = 500,
        retryable: bool = True,
        retry_after: Optional[float] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.retryable = retryable
        self.retry_after = retry_after

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        result = {
            "error_code": self.code,
            "error_message": self.message,
            "retryable": self.retryable,
        }
        if self.retry_after is not None:
            result["retry_after"] = self.retry_after
        return result


class UnknownEntityTypeError(EntityResolverError):
    """404 Not Found - No resolver is registered for the entity type."""

    def __init__(self, entity_type: str = ""):
        message = f"Unknown entity type '{entity_type}'" if entity_type else "Unknown entity type"
        super().__init__(message, code=404, retryable=False)


class CachingDisabledError(EntityResolverError):
    """503 Service Unavailable - No credential configured for the context cache service."""

    def __init__(self, message: str = "Context caching is disabled (no Gemini API key configured)."):
        super().__init__(message, code=503, retryable=False)


class CacheManagerError(EntityResolverError):
    """502 Bad Gateway - The remote context cache service failed."""

    def __init__(self, message: str = "Context cache service request failed.", operation: str = ""):
        self.operation = operation
        full_message = f"Cache operation '{operation}' failed: {message}" if operation else message
        super().__init__(full_message, code=502, retryable=True)


class ProviderConfigurationError(EntityResolverError):
    """500 Internal Server Error - LLM provider is misconfigured."""

    def __init__(self, message: str = "LLM provider is not configured."):
        super().__init__(message, code=500, retryable=False)
