"""Generation request model passed from the facade to a provider adapter."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GenerationRequest(BaseModel):
    """A single text-generation request.

    Built fresh for every call and never persisted.  The prompt must contain
    at least one non-whitespace character.
    """

    model_config = ConfigDict(frozen=True)

    prompt: str = Field(min_length=1, pattern=r"\S")
    max_output_tokens: int = Field(default=500, gt=0)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
