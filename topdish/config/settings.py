"""Application settings loaded from environment variables via pydantic-settings.

Values are read from, in priority order:

  1. Environment variables, e.g. ``HUGGINGFACE_API_KEY=hf_abc123``
  2. A ``.env`` file in the working directory (local development)

Field ``huggingface_api_key`` maps to env var ``HUGGINGFACE_API_KEY``.
An empty string means "not configured"; providers check for it before
making any request.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

HUGGINGFACE = "huggingface"
OPENAI = "openai"
KNOWN_PROVIDERS = (HUGGINGFACE, OPENAI)
DEFAULT_PROVIDER = HUGGINGFACE


class Settings(BaseSettings):
    """topdish application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === LLM provider selection ===
    # "huggingface" or "openai"; anything else falls back to huggingface.
    llm_provider: str = DEFAULT_PROVIDER

    # === Hugging Face Inference API ===
    huggingface_api_key: str = ""
    huggingface_model: str = "mistralai/Mistral-7B-Instruct-v0.2"
    huggingface_base_url: str = "https://api-inference.huggingface.co/models"

    # === OpenAI ===
    openai_api_key: str = ""
    openai_model: str = "gpt-3.5-turbo"
    openai_base_url: str = ""  # Custom base URL for OpenAI-compatible APIs

    # === Generation parameters ===
    llm_max_output_tokens: int = 500
    llm_temperature: float = 0.7
    llm_request_timeout: float = 30.0
    # Seconds to wait before the single retry on a cold-start 503.
    cold_start_retry_delay: float = 5.0

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    def get_selected_provider(self) -> str:
        """Return the normalised provider selector, defaulting to huggingface."""
        selected = (self.llm_provider or "").strip().lower()
        if selected in KNOWN_PROVIDERS:
            return selected
        return DEFAULT_PROVIDER
