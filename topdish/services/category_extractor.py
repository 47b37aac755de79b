"""LLM-based dish category extraction.

Asks the model which dish categories (Appetizers, Pizza, Desserts, ...) the
reviews talk about, so the caller can offer them as choices before ranking.

Categories are an enhancement, not a requirement: if the model call fails or
its reply holds no parseable JSON array, the extractor logs a warning and
returns an empty list.  It never raises for provider or parse failures.
"""

from __future__ import annotations

import json
import re
from collections.abc import Sequence
from typing import Any

from topdish.models.review import Review
from topdish.services.generation_service import GenerationService
from topdish.utils.logging import get_logger

# First bracketed span, non-greedy, across newlines.  Category arrays are
# flat lists of strings, so the first closing bracket ends the array.  A
# category name containing "]" cuts the match short; the parse then fails and
# the extractor falls back to [].
_JSON_ARRAY_RE = re.compile(r"\[.*?\]", re.DOTALL)

# Only the first reviews go into the prompt to bound its size.
MAX_REVIEWS_FOR_CATEGORIES = 10


class CategoryExtractor:
    """Suggests dish categories from review text using an LLM."""

    def __init__(self, generation_service: GenerationService) -> None:
        self._generation = generation_service
        self._logger = get_logger(__name__)

    async def extract_categories(self, reviews: Sequence[Review]) -> list[str]:
        """Return the dish categories mentioned in *reviews*.

        Only the first :data:`MAX_REVIEWS_FOR_CATEGORIES` reviews are used,
        in input order.  Returns ``[]`` when there is nothing to analyse, the
        model call fails, or its reply cannot be parsed.
        """
        if not reviews:
            return []

        prompt = self._build_prompt(reviews)
        try:
            response = await self._generation.generate(prompt)
        except Exception as exc:
            self._logger.warning(
                "category_extraction_failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return []

        categories = self._parse_categories(response)
        self._logger.info("category_extraction_complete", categories=len(categories))
        return categories

    # ------------------------------------------------------------------
    # Prompt construction
    # ------------------------------------------------------------------

    @staticmethod
    def _build_prompt(reviews: Sequence[Review]) -> str:
        review_texts = "\n\n".join(
            review.text for review in list(reviews)[:MAX_REVIEWS_FOR_CATEGORIES]
        )
        return (
            "Analyze the following restaurant reviews and extract unique dish "
            "categories mentioned (e.g., Appetizers, Main Courses, Desserts, "
            "Pizza, Pasta, Seafood, etc.).\n"
            "Return only a JSON array of category names, nothing else.\n"
            "\n"
            "Reviews:\n"
            f"{review_texts}"
        )

    # ------------------------------------------------------------------
    # Response parsing
    # ------------------------------------------------------------------

    def _parse_categories(self, response: str) -> list[str]:
        """Pull the first JSON array of strings out of free-form model text."""
        match = _JSON_ARRAY_RE.search(response)
        if match is None:
            self._logger.warning("category_array_not_found", response_chars=len(response))
            return []

        try:
            parsed: Any = json.loads(match.group(0))
        except json.JSONDecodeError as exc:
            self._logger.warning("category_json_invalid", error=str(exc))
            return []

        if not isinstance(parsed, list):
            return []
        # Model order is kept; it reads as a relevance hint downstream.
        return [item.strip() for item in parsed if isinstance(item, str) and item.strip()]
