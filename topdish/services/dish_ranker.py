"""LLM-based top-dish ranking.

Sends every review (index, star rating, text) plus the chosen categories to
the model and asks for the most mentioned, best rated dishes as a JSON array.
The reply is parsed into :class:`Dish` models, cut to :data:`TOP_N`, and
re-ranked by position.

Unlike the CategoryExtractor, this stage fails loudly.  An empty list would
read as "this restaurant has no good dishes", which is a different answer
from "the model's reply could not be read", so unparseable output raises
:class:`ExtractionParseError`.  Provider errors propagate unchanged.
"""

from __future__ import annotations

import json
import re
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from topdish.models.dish import Dish
from topdish.models.review import Review
from topdish.services.generation_service import GenerationService
from topdish.utils.errors import ExtractionParseError, InvalidInputError
from topdish.utils.logging import get_logger

# First "[" to last "]", greedy across newlines, so nested objects and
# pretty-printed arrays survive intact.  Bracketed prose after the array is
# swallowed too; json.loads then fails and the call raises ExtractionParseError.
_JSON_ARRAY_RE = re.compile(r"\[.*\]", re.DOTALL)

# Number of dishes returned.  Fixed, independent of how many the model sends.
TOP_N = 2

_OUTPUT_EXAMPLE = (
    "[\n"
    "  {\n"
    '    "name": "Dish Name",\n'
    '    "category": "Category Name",\n'
    '    "description": "Brief description from reviews",\n'
    '    "mentions": number\n'
    "  }\n"
    "]"
)


class DishRanker:
    """Ranks a restaurant's most praised dishes from its reviews."""

    def __init__(self, generation_service: GenerationService) -> None:
        self._generation = generation_service
        self._logger = get_logger(__name__)

    async def rank_top_dishes(
        self,
        reviews: Sequence[Review],
        categories: Sequence[str],
    ) -> list[Dish]:
        """Return up to :data:`TOP_N` dishes ranked 1..n.

        Raises
        ------
        InvalidInputError
            If *reviews* is empty.  No model call is made.
        ExtractionParseError
            If the reply holds no parseable array of dish objects.
        topdish.utils.errors.LLMError
            Propagated unchanged from the generation service.
        """
        if not reviews:
            raise InvalidInputError(message="No reviews available for analysis.")

        self._logger.info(
            "dish_ranking_start",
            reviews=len(reviews),
            categories=list(categories),
        )
        response = await self._generation.generate(self._build_prompt(reviews, categories))
        entries = self._parse_dish_entries(response)
        dishes = self._build_dishes(entries)
        self._logger.info(
            "dish_ranking_complete",
            returned=len(entries),
            kept=len(dishes),
        )
        return dishes

    # ------------------------------------------------------------------
    # Prompt construction
    # ------------------------------------------------------------------

    @staticmethod
    def _build_prompt(reviews: Sequence[Review], categories: Sequence[str]) -> str:
        review_texts = "\n\n".join(
            # ":g" renders 5.0 as "5" and keeps 4.5 as "4.5".
            f"Review {index} (Rating: {review.rating:g}/5):\n{review.text}"
            for index, review in enumerate(reviews, start=1)
        )
        return (
            f"Analyze the following restaurant reviews and identify the top {TOP_N} "
            "most mentioned and highly rated dishes in the categories: "
            f"{', '.join(categories)}.\n"
            "\n"
            "For each dish, provide:\n"
            "- The exact dish name as mentioned in reviews\n"
            "- The category it belongs to\n"
            "- A brief description based on what reviewers said\n"
            "- How many times it was mentioned\n"
            "\n"
            "Return the results as a JSON array with this exact format:\n"
            f"{_OUTPUT_EXAMPLE}\n"
            "\n"
            "Reviews:\n"
            f"{review_texts}\n"
            "\n"
            f"Return at most {TOP_N} entries. "
            "Return ONLY the JSON array, no additional text."
        )

    # ------------------------------------------------------------------
    # Response parsing
    # ------------------------------------------------------------------

    def _parse_dish_entries(self, response: str) -> list[dict[str, Any]]:
        """Decode the bracketed span of *response* into a list of objects."""
        match = _JSON_ARRAY_RE.search(response)
        if match is None:
            self._logger.error("dish_array_not_found", response_chars=len(response))
            raise ExtractionParseError(
                message="Failed to parse dish data from AI response: no JSON array found",
                provider_name=self._generation.provider_name,
            )

        try:
            parsed: Any = json.loads(match.group(0))
        except json.JSONDecodeError as exc:
            self._logger.error("dish_json_invalid", error=str(exc))
            raise ExtractionParseError(
                message=f"Failed to parse dish data from AI response: {exc}",
                provider_name=self._generation.provider_name,
            ) from exc

        if not isinstance(parsed, list) or not all(isinstance(e, dict) for e in parsed):
            raise ExtractionParseError(
                message="Failed to parse dish data from AI response: expected an array of objects",
                provider_name=self._generation.provider_name,
            )
        return parsed

    def _build_dishes(self, entries: list[dict[str, Any]]) -> list[Dish]:
        """Truncate to TOP_N and assign ranks by position.

        Any ``rank`` the model sent is ignored.
        """
        dishes: list[Dish] = []
        for rank, entry in enumerate(entries[:TOP_N], start=1):
            try:
                dishes.append(
                    Dish(
                        name=entry.get("name"),
                        category=entry.get("category") or "",
                        description=entry.get("description") or "",
                        # None when the model left the count out; no default.
                        mentions=entry.get("mentions"),
                        rank=rank,
                    )
                )
            except ValidationError as exc:
                raise ExtractionParseError(
                    message=f"Dish entry {rank} has an invalid shape: {exc.error_count()} error(s)",
                    provider_name=self._generation.provider_name,
                ) from exc
        return dishes
