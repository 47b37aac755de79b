"""Utility modules for topdish.

- **errors** -- Exception hierarchy rooted at TopDishError.  Provider
  failures (LLMError subclasses) are kept apart from extraction failures
  (ExtractionParseError) so callers can word user messages differently.
- **logging** -- structlog setup: coloured console output in development,
  structured JSON in production.
"""

from topdish.utils.errors import (
    AuthenticationError,
    ConfigurationError,
    ExtractionParseError,
    InvalidInputError,
    LLMError,
    ProviderError,
    ProviderUnavailableError,
    QuotaExceededError,
    TopDishError,
    TransportError,
    UnexpectedResponseError,
)
from topdish.utils.logging import configure_logging, get_logger

__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "ExtractionParseError",
    "InvalidInputError",
    "LLMError",
    "ProviderError",
    "ProviderUnavailableError",
    "QuotaExceededError",
    "TopDishError",
    "TransportError",
    "UnexpectedResponseError",
    "configure_logging",
    "get_logger",
]
