"""Configuration module: exports Settings and the provider selector constants."""

from topdish.config.settings import (
    DEFAULT_PROVIDER,
    HUGGINGFACE,
    KNOWN_PROVIDERS,
    OPENAI,
    Settings,
)

__all__ = ["Settings", "HUGGINGFACE", "OPENAI", "KNOWN_PROVIDERS", "DEFAULT_PROVIDER"]
