"""Custom exception hierarchy for topdish.

All application exceptions inherit from :class:`TopDishError`, which
carries an optional ``provider_name`` so error handlers can identify which
model provider (e.g. "huggingface", "openai") caused the failure.

The hierarchy separates infrastructure failures from extraction failures:

    TopDishError  (base -- catch-all for any topdish error)
    +-- ConfigurationError        (missing / blank credential or setting)
    +-- InvalidInputError         (caller violated a precondition)
    +-- ExtractionParseError      (model output held no parseable dish JSON)
    +-- LLMError                  (any model API call failure)
        +-- AuthenticationError       (credential rejected, 401/403)
        +-- TransportError            (DNS, refused connection, timeout)
        +-- ProviderUnavailableError  (cold-start retry exhausted)
        +-- QuotaExceededError        (429 / quota exhausted)
        +-- UnexpectedResponseError   (2xx body off the documented schema)
        +-- ProviderError             (any other non-2xx status)

Callers that want different user messaging for "the model misbehaved" and
"the infrastructure failed" catch :class:`ExtractionParseError` and
:class:`LLMError` separately.
"""


class TopDishError(Exception):
    """Base exception for all topdish errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name``.  ``__str__`` prefixes the provider name in brackets,
    e.g. ``[huggingface] Model is still loading``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Configuration / caller errors
# ---------------------------------------------------------------------------

class ConfigurationError(TopDishError):
    """Raised when a required setting (usually an API key) is missing or blank."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class InvalidInputError(TopDishError):
    """Raised when a caller passes input that violates a precondition."""

    def __init__(
        self,
        message: str = "Invalid input",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Extraction errors
# ---------------------------------------------------------------------------

class ExtractionParseError(TopDishError):
    """Raised when the model's reply contains no parseable dish array.

    Distinct from :class:`LLMError`: the provider answered, but what it said
    could not be turned into dishes.
    """

    def __init__(
        self,
        message: str = "Failed to parse dish data from AI response",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Provider errors
# ---------------------------------------------------------------------------

class LLMError(TopDishError):
    """Raised when a model API call fails."""

    def __init__(
        self,
        message: str = "LLM API call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class AuthenticationError(LLMError):
    """Raised when the provider rejects the configured credential (401/403)."""

    def __init__(
        self,
        message: str = "API key was rejected",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class TransportError(LLMError):
    """Raised when the provider cannot be reached at all."""

    def __init__(
        self,
        message: str = "Unable to connect to the model provider",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ProviderUnavailableError(LLMError):
    """Raised when a model is still unavailable after the cold-start retry."""

    def __init__(
        self,
        message: str = "Model is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class QuotaExceededError(LLMError):
    """Raised on HTTP 429 or an exhausted account quota.  Never retried here."""

    def __init__(
        self,
        message: str = "Rate limit or quota exceeded",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class UnexpectedResponseError(LLMError):
    """Raised when a successful response does not match the provider's schema."""

    def __init__(
        self,
        message: str = "Unexpected response format",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ProviderError(LLMError):
    """Raised for any non-2xx status without a more specific mapping.

    ``status_code`` holds the HTTP status returned by the provider.
    """

    def __init__(
        self,
        message: str = "Model provider returned an error",
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self._status_code = status_code
        super().__init__(message=message, provider_name=provider_name)

    @property
    def status_code(self) -> int | None:
        return self._status_code
