"""Review model for the topdish pipeline.

A Review is one customer review as fetched by the place-search collaborator.
Reviews are read-only once fetched; the extractors only ever read them.

The field aliases accept the raw place-details payload shape
(``author_name``, ``time`` as epoch seconds) as well as the canonical names,
so a saved API response validates without a translation step.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Review(BaseModel):
    """A single restaurant review."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str
    # Star rating, 1 (worst) to 5 (best).  Some sources send halves (4.5).
    rating: float = Field(ge=1, le=5)
    author: str = Field(
        default="",
        validation_alias=AliasChoices("author", "author_name"),
    )
    # Epoch integers are parsed as UTC by pydantic.
    submitted_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=timezone.utc),  # noqa: UP017
        validation_alias=AliasChoices("submitted_at", "submittedAt", "time"),
    )
