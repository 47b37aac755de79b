"""topdish domain models, re-exported for ``from topdish.models import ...``.

    - review.py     -- Review, as fetched by the place-search collaborator
    - generation.py -- GenerationRequest sent to a provider adapter
    - dish.py       -- Dish (ranker output) and PipelineResult
"""

from __future__ import annotations

from topdish.models.dish import Dish, PipelineResult
from topdish.models.generation import GenerationRequest
from topdish.models.review import Review

__all__ = ["Dish", "GenerationRequest", "PipelineResult", "Review"]
