"""Dish and pipeline result models.

A Dish is created only by the DishRanker (topdish/services/dish_ranker.py)
from one object of the model's JSON reply.
``rank`` is always re-assigned by position after truncation; any rank the
model emitted itself is discarded.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Dish(BaseModel):
    """One of a restaurant's top-ranked dishes."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    category: str = ""
    description: str = ""
    # Model-reported mention count, passed through verbatim.  Not checked
    # against the review text.  None when the model omitted it.
    mentions: int | None = None
    # 1-based and dense: a result of length n has ranks 1..n.
    rank: int = Field(ge=1)


class PipelineResult(BaseModel):
    """Output of one full TopDishPipeline run."""

    model_config = ConfigDict(frozen=True)

    # Categories used for ranking, in the order they were supplied or suggested.
    categories: list[str] = Field(default_factory=list)
    dishes: list[Dish] = Field(default_factory=list)
    provider_name: str = ""
