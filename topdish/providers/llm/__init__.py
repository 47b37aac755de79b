"""LLM provider adapters.

Two concrete implementations of ILLMProvider (topdish/interfaces/llm_provider.py):
    - HuggingFaceLLMProvider -- hosted open models on the Inference API
                                (retries once on a cold-start 503)
    - OpenAILLMProvider      -- gpt-3.5-turbo or any OpenAI-compatible API

``build_llm_provider`` in topdish/services/generation_service.py picks one
from Settings.llm_provider when the GenerationService is constructed.
"""

from topdish.providers.llm.huggingface_provider import HuggingFaceLLMProvider
from topdish.providers.llm.openai_provider import OpenAILLMProvider

__all__ = ["HuggingFaceLLMProvider", "OpenAILLMProvider"]
