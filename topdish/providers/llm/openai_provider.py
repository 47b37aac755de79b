"""OpenAI chat-completions provider adapter.

Wraps the ``openai`` async client to implement :class:`ILLMProvider`.  When
``openai_base_url`` is configured the client points at that URL instead, so
any OpenAI-compatible endpoint works through the same adapter.

The SDK's built-in retries are switched off: one ``invoke`` issues exactly
one HTTP request, and retry decisions belong to the caller.
"""

from __future__ import annotations

import openai
import structlog

from topdish.config.settings import Settings
from topdish.interfaces.llm_provider import ILLMProvider
from topdish.models.generation import GenerationRequest
from topdish.utils.errors import (
    AuthenticationError,
    ConfigurationError,
    ProviderError,
    QuotaExceededError,
    TransportError,
    UnexpectedResponseError,
)

logger = structlog.get_logger(logger_name=__name__)


class OpenAILLMProvider(ILLMProvider):
    """LLM provider backed by an OpenAI-compatible chat API.

    Sends the prompt as a single user message to ``gpt-3.5-turbo`` by
    default.  The rest of the app never imports or calls ``openai`` directly.
    """

    def __init__(self, settings: Settings) -> None:
        self._api_key = settings.openai_api_key
        self._model = settings.openai_model or "gpt-3.5-turbo"

        client_kwargs: dict = {
            "api_key": self._api_key,
            "timeout": openai.Timeout(settings.llm_request_timeout, connect=5.0),
            "max_retries": 0,  # SDK default is 2; one invoke = one request
        }
        # OpenAI-compatible endpoints (LM Studio, vLLM, OpenRouter) only need
        # a different base URL.
        if settings.openai_base_url:
            client_kwargs["base_url"] = settings.openai_base_url

        self._client = openai.AsyncOpenAI(**client_kwargs)
        self._provider_label = (
            "openai-compatible" if settings.openai_base_url else "openai"
        )

    # ------------------------------------------------------------------
    # ILLMProvider implementation
    # ------------------------------------------------------------------

    async def invoke(self, request: GenerationRequest) -> str:
        """Generate text via the chat completions API."""
        if not self.is_available():
            raise ConfigurationError(
                message=(
                    "OpenAI API key is not configured. "
                    "Set OPENAI_API_KEY in the environment or .env file."
                ),
                provider_name=self.get_provider_name(),
            )

        # SDK exception order matters: APITimeoutError subclasses
        # APIConnectionError, and the auth/rate-limit errors subclass
        # APIStatusError, so the specific handlers come first.
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": request.prompt}],
                max_tokens=request.max_output_tokens,
                temperature=request.temperature,
            )
        except openai.APITimeoutError as exc:
            raise TransportError(
                message=f"{self._provider_label} request timed out",
                provider_name=self.get_provider_name(),
            ) from exc
        except openai.APIConnectionError as exc:
            raise TransportError(
                message=f"Network error: unable to connect to {self._provider_label} API ({exc})",
                provider_name=self.get_provider_name(),
            ) from exc
        except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
            raise AuthenticationError(
                message=f"Invalid {self._provider_label} API key (HTTP {exc.status_code})",
                provider_name=self.get_provider_name(),
            ) from exc
        except openai.RateLimitError as exc:
            raise QuotaExceededError(
                message=f"{self._provider_label} rate limit or quota exceeded: {exc.message}",
                provider_name=self.get_provider_name(),
            ) from exc
        except openai.APIStatusError as exc:
            raise ProviderError(
                message=exc.message or f"{self._provider_label} returned HTTP {exc.status_code}",
                provider_name=self.get_provider_name(),
                status_code=exc.status_code,
            ) from exc
        except openai.APIResponseValidationError as exc:
            raise UnexpectedResponseError(
                message=f"{self._provider_label} response failed validation: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        content = None
        choices = getattr(response, "choices", None)
        if choices:
            content = choices[0].message.content
        if not isinstance(content, str) or not content.strip():
            raise UnexpectedResponseError(
                message=f"{self._provider_label} returned an empty response",
                provider_name=self.get_provider_name(),
            )

        logger.info(
            "openai_completion",
            model=self._model,
            provider=self._provider_label,
            tokens=response.usage.total_tokens if response.usage else None,
        )
        return content.strip()

    def get_provider_name(self) -> str:
        """Return 'openai' or 'openai-compatible' depending on configuration."""
        return self._provider_label

    def is_available(self) -> bool:
        """Return ``True`` if a non-blank API key is configured."""
        return bool(self._api_key and self._api_key.strip())

    async def aclose(self) -> None:
        await self._client.close()
