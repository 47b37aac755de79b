"""Provider-agnostic text generation facade.

The GenerationService is the only thing the extractors talk to.  It resolves
one provider adapter from :class:`Settings` when it is constructed and routes
every ``generate`` call to that adapter for its whole lifetime; there is no
per-call switching.  Results and errors pass through untouched, and no retry
is added on top of the adapter's own cold-start retry.

The service is built once at startup and passed explicitly to whatever needs
it (see ``topdish/cli/analyze.py``), rather than living in a module global.
"""

from __future__ import annotations

from topdish.config.settings import DEFAULT_PROVIDER, KNOWN_PROVIDERS, OPENAI, Settings
from topdish.interfaces.llm_provider import ILLMProvider
from topdish.models.generation import GenerationRequest
from topdish.providers.llm.huggingface_provider import HuggingFaceLLMProvider
from topdish.providers.llm.openai_provider import OpenAILLMProvider
from topdish.utils.errors import InvalidInputError
from topdish.utils.logging import get_logger

_logger = get_logger(__name__)


def build_llm_provider(settings: Settings) -> ILLMProvider:
    """Select the provider named by ``settings.llm_provider``.

    Unset or unrecognised values fall back to Hugging Face.
    """
    requested = (settings.llm_provider or "").strip().lower()
    if requested and requested not in KNOWN_PROVIDERS:
        _logger.warning(
            "unknown_llm_provider",
            requested=settings.llm_provider,
            fallback=DEFAULT_PROVIDER,
        )

    if settings.get_selected_provider() == OPENAI:
        return OpenAILLMProvider(settings=settings)
    return HuggingFaceLLMProvider(settings=settings)


class GenerationService:
    """Single ``generate(prompt) -> text`` entry point over one provider.

    Parameters
    ----------
    settings:
        Supplies the default generation parameters and, when ``provider`` is
        not given, the provider selection.
    provider:
        Optional pre-built adapter; tests and callers that share an HTTP
        client inject one here.
    """

    def __init__(
        self,
        settings: Settings,
        provider: ILLMProvider | None = None,
    ) -> None:
        self._provider = provider or build_llm_provider(settings)
        self._max_output_tokens = settings.llm_max_output_tokens
        self._temperature = settings.llm_temperature
        _logger.info("generation_service_ready", provider=self.provider_name)

    @property
    def provider_name(self) -> str:
        return self._provider.get_provider_name()

    async def generate(self, prompt: str) -> str:
        """Send *prompt* to the selected provider and return its text."""
        if not prompt or not prompt.strip():
            raise InvalidInputError(
                message="Cannot generate from an empty prompt",
                provider_name=self.provider_name,
            )
        request = GenerationRequest(
            prompt=prompt,
            max_output_tokens=self._max_output_tokens,
            temperature=self._temperature,
        )
        return await self._provider.invoke(request)

    async def aclose(self) -> None:
        """Release the provider's HTTP resources."""
        close = getattr(self._provider, "aclose", None)
        if close is not None:
            await close()
