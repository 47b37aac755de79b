"""Public interface definitions for external service providers.

Every hosted language model is reached only through :class:`ILLMProvider`.
Concrete adapters live in ``topdish/providers/llm/`` and are selected once by
``build_llm_provider`` in ``topdish/services/generation_service.py``:

    Interface       ->  Concrete implementations
    ------------------------------------------------------------
    ILLMProvider    ->  HuggingFaceLLMProvider, OpenAILLMProvider
"""

from topdish.interfaces.llm_provider import ILLMProvider

__all__ = ["ILLMProvider"]
