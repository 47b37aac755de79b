"""Orchestrator for the two-step top-dish analysis.

Step 1 suggests dish categories from the reviews (best-effort).  Step 2 ranks
the top dishes in the categories the user picked (required).  The steps run
one after the other because the chosen categories feed the ranking prompt.

The split into :meth:`suggest_categories` and :meth:`find_top_dishes` mirrors
the interactive flow, where the user confirms categories between the two
calls.  :meth:`run` chains both for non-interactive callers such as the CLI.

Every call builds its own prompts and results; the pipeline keeps no state
between calls, so concurrent runs never interleave.  Cancelling the awaiting
task is how a caller abandons a run.
"""

from __future__ import annotations

from collections.abc import Sequence

from topdish.models.dish import Dish, PipelineResult
from topdish.models.review import Review
from topdish.services.category_extractor import CategoryExtractor
from topdish.services.dish_ranker import DishRanker
from topdish.services.generation_service import GenerationService
from topdish.utils.errors import InvalidInputError
from topdish.utils.logging import get_logger


class TopDishPipeline:
    """Runs category suggestion and dish ranking over one GenerationService.

    Parameters
    ----------
    generation_service:
        The facade both stages call.
    category_extractor, dish_ranker:
        Optional overrides, built from *generation_service* when omitted.
    """

    def __init__(
        self,
        generation_service: GenerationService,
        category_extractor: CategoryExtractor | None = None,
        dish_ranker: DishRanker | None = None,
    ) -> None:
        self._generation = generation_service
        self._category_extractor = category_extractor or CategoryExtractor(generation_service)
        self._dish_ranker = dish_ranker or DishRanker(generation_service)
        self._logger = get_logger(__name__)

    async def suggest_categories(self, reviews: Sequence[Review]) -> list[str]:
        """Step 1: categories the reviews mention.  Never raises."""
        return await self._category_extractor.extract_categories(reviews)

    async def find_top_dishes(
        self,
        reviews: Sequence[Review],
        selected_categories: Sequence[str],
    ) -> list[Dish]:
        """Step 2: rank dishes within the selected categories."""
        categories = [c for c in selected_categories if c and c.strip()]
        if not categories:
            raise InvalidInputError(message="Please select at least one category")
        return await self._dish_ranker.rank_top_dishes(reviews, categories)

    async def run(
        self,
        reviews: Sequence[Review],
        categories: Sequence[str] | None = None,
    ) -> PipelineResult:
        """Run both steps, using *categories* instead of suggestions when given.

        Raises
        ------
        InvalidInputError
            If there are no reviews, or no categories were given and none
            could be suggested.
        """
        if not reviews:
            raise InvalidInputError(message="No reviews found for this restaurant.")

        if categories:
            chosen = list(categories)
            self._logger.info("pipeline_categories_seeded", categories=chosen)
        else:
            chosen = await self.suggest_categories(reviews)
            self._logger.info("pipeline_categories_suggested", categories=chosen)

        dishes = await self.find_top_dishes(reviews, chosen)
        return PipelineResult(
            categories=chosen,
            dishes=dishes,
            provider_name=self._generation.provider_name,
        )
