"""Abstract base class for hosted language-model providers.

Defines the single capability every model backend must offer: turn a
:class:`GenerationRequest` into text.  Implementations wrap the Hugging Face
Inference API or the OpenAI chat API; the facade in
``topdish/services/generation_service.py`` keeps every call-site
provider-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from topdish.models.generation import GenerationRequest


# Concrete implementations: HuggingFaceLLMProvider, OpenAILLMProvider
# Located in: topdish/providers/llm/
class ILLMProvider(ABC):
    """Contract for model backends used by the extraction pipeline."""

    @abstractmethod
    async def invoke(self, request: GenerationRequest) -> str:
        """Send one generation request and return the model's text.

        Parameters
        ----------
        request:
            Prompt plus generation parameters (max tokens, temperature).

        Returns
        -------
        str
            Non-empty model output with surrounding whitespace trimmed.  No
            guarantee is made about its internal format; it may wrap JSON in
            prose.

        Raises
        ------
        topdish.utils.errors.ConfigurationError
            If the provider's credential is missing; raised before any
            network call.
        topdish.utils.errors.LLMError
            Any subclass, for transport, authentication, quota, availability,
            status or schema failures.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this provider, e.g. ``"huggingface"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if a credential is configured.

        Does not contact the remote service.
        """
