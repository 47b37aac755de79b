"""Hugging Face Inference API provider adapter.

Posts prompts to the hosted text-generation endpoint of an open model
(``mistralai/Mistral-7B-Instruct-v0.2`` by default) over ``httpx``.

Hosted open models are unloaded when idle.  The first request after a quiet
period gets HTTP 503 while the model warms up, so this adapter waits a fixed
delay and retries the identical request exactly once.  A second 503 is
reported as :class:`ProviderUnavailableError`; there is no third attempt.
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import structlog

from topdish.config.settings import Settings
from topdish.interfaces.llm_provider import ILLMProvider
from topdish.models.generation import GenerationRequest
from topdish.utils.errors import (
    AuthenticationError,
    ConfigurationError,
    ProviderError,
    ProviderUnavailableError,
    QuotaExceededError,
    TransportError,
    UnexpectedResponseError,
)

logger = structlog.get_logger(logger_name=__name__)

_COLD_START_STATUS = 503


class HuggingFaceLLMProvider(ILLMProvider):
    """LLM provider backed by the Hugging Face Inference API.

    Parameters
    ----------
    settings:
        Supplies the API key, model id, base URL, timeout and cold-start
        retry delay.
    http_client:
        Optional shared ``httpx.AsyncClient``.  When omitted the provider
        creates its own and closes it in :meth:`aclose`.
    """

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = settings.huggingface_api_key
        self._model = settings.huggingface_model
        self._url = f"{settings.huggingface_base_url.rstrip('/')}/{self._model}"
        self._retry_delay = settings.cold_start_retry_delay
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.llm_request_timeout, connect=5.0),
        )

    # ------------------------------------------------------------------
    # ILLMProvider implementation
    # ------------------------------------------------------------------

    async def invoke(self, request: GenerationRequest) -> str:
        """Generate text, retrying once if the model is still loading."""
        if not self.is_available():
            raise ConfigurationError(
                message=(
                    "Hugging Face API key is not configured. "
                    "Set HUGGINGFACE_API_KEY in the environment or .env file."
                ),
                provider_name=self.get_provider_name(),
            )

        response = await self._post(request)
        if response.status_code == _COLD_START_STATUS:
            logger.warning(
                "huggingface_model_loading",
                model=self._model,
                retry_in_s=self._retry_delay,
            )
            await asyncio.sleep(self._retry_delay)
            response = await self._post(request)
            if response.status_code == _COLD_START_STATUS:
                raise ProviderUnavailableError(
                    message=(
                        f"Model {self._model} is still loading after one retry: "
                        f"{self._error_message(response) or 'HTTP 503'}"
                    ),
                    provider_name=self.get_provider_name(),
                )

        self._raise_for_status(response)
        text = self._parse_generated_text(response)
        logger.info(
            "huggingface_completion",
            model=self._model,
            chars=len(text),
        )
        return text

    def get_provider_name(self) -> str:
        return "huggingface"

    def is_available(self) -> bool:
        """Return ``True`` if a non-blank API key is configured."""
        return bool(self._api_key and self._api_key.strip())

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _build_payload(self, request: GenerationRequest) -> dict[str, Any]:
        return {
            "inputs": request.prompt,
            "parameters": {
                "max_new_tokens": request.max_output_tokens,
                "temperature": request.temperature,
                "return_full_text": False,
            },
        }

    async def _post(self, request: GenerationRequest) -> httpx.Response:
        """Issue one POST to the model endpoint."""
        try:
            return await self._client.post(
                self._url,
                headers={
                    "Authorization": f"Bearer {self._api_key.strip()}",
                    "Content-Type": "application/json",
                },
                json=self._build_payload(request),
            )
        except httpx.TimeoutException as exc:
            raise TransportError(
                message=f"Request to Hugging Face timed out: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.TransportError as exc:
            raise TransportError(
                message=f"Network error: unable to connect to Hugging Face API ({exc})",
                provider_name=self.get_provider_name(),
            ) from exc

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Map a non-2xx response onto the error taxonomy."""
        status = response.status_code
        if 200 <= status < 300:
            return

        detail = self._error_message(response)
        # 403 covers tokens without inference scope as well as revoked ones.
        if status in (401, 403):
            raise AuthenticationError(
                message=f"Invalid Hugging Face API key (HTTP {status})",
                provider_name=self.get_provider_name(),
            )
        # 402 is returned once the monthly inference credit is used up.  Some
        # deployments send quota exhaustion as a plain 400 with "quota" in the
        # error text, so the body is checked too.
        if status in (402, 429) or (detail and "quota" in detail.lower()):
            raise QuotaExceededError(
                message=f"Hugging Face quota exceeded (HTTP {status}): {detail or 'no detail'}",
                provider_name=self.get_provider_name(),
            )
        # Everything else (400, 5xx other than cold start) keeps its status code.
        raise ProviderError(
            message=detail or f"Failed to generate response from Hugging Face (status {status})",
            provider_name=self.get_provider_name(),
            status_code=status,
        )

    @staticmethod
    def _error_message(response: httpx.Response) -> str | None:
        """Pull the ``error`` field out of an error body, if there is one."""
        try:
            data = response.json()
        except ValueError:
            return response.text.strip() or None
        if isinstance(data, dict):
            error = data.get("error")
            if isinstance(error, dict):
                error = error.get("message")
            if isinstance(error, str) and error.strip():
                return error.strip()
        return None

    def _parse_generated_text(self, response: httpx.Response) -> str:
        """Read ``generated_text`` from either documented success shape.

        The endpoint answers ``[{"generated_text": ...}]`` for most models and
        ``{"generated_text": ...}`` for a few.
        """
        try:
            data = response.json()
        except ValueError as exc:
            raise UnexpectedResponseError(
                message="Hugging Face returned a non-JSON body",
                provider_name=self.get_provider_name(),
            ) from exc

        text: Any = None
        if isinstance(data, list) and data and isinstance(data[0], dict):
            text = data[0].get("generated_text")
        elif isinstance(data, dict):
            text = data.get("generated_text")

        if not isinstance(text, str) or not text.strip():
            raise UnexpectedResponseError(
                message="Unexpected response format from Hugging Face",
                provider_name=self.get_provider_name(),
            )
        return text.strip()
