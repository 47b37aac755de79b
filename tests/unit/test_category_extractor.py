"""Unit tests for the CategoryExtractor service with a mocked generation service."""

from __future__ import annotations

import pytest

from tests.conftest import make_generation_service, make_review
from topdish.services.category_extractor import MAX_REVIEWS_FOR_CATEGORIES, CategoryExtractor
from topdish.utils.errors import (
    AuthenticationError,
    ConfigurationError,
    ProviderUnavailableError,
    TransportError,
)


def _prompt_sent(service) -> str:
    return service.generate.call_args.args[0]


class TestCategoryExtractorPrompt:
    """Which reviews end up in the prompt."""

    @pytest.mark.asyncio()
    async def test_fewer_than_ten_reviews_all_included_once(self) -> None:
        reviews = [make_review(i) for i in range(1, 7)]
        service = make_generation_service('["Pizza"]')

        await CategoryExtractor(service).extract_categories(reviews)

        prompt = _prompt_sent(service)
        for review in reviews:
            assert prompt.count(review.text) == 1

    @pytest.mark.asyncio()
    async def test_only_first_ten_reviews_in_order(self) -> None:
        reviews = [make_review(i, text=f"<<review-{i:02d}>>") for i in range(1, 15)]
        service = make_generation_service('["Pizza"]')

        await CategoryExtractor(service).extract_categories(reviews)

        prompt = _prompt_sent(service)
        included = [r.text for r in reviews[:MAX_REVIEWS_FOR_CATEGORIES]]
        excluded = [r.text for r in reviews[MAX_REVIEWS_FOR_CATEGORIES:]]
        assert all(prompt.count(text) == 1 for text in included)
        assert not any(text in prompt for text in excluded)
        positions = [prompt.index(text) for text in included]
        assert positions == sorted(positions)

    @pytest.mark.asyncio()
    async def test_reviews_joined_with_blank_lines(self) -> None:
        reviews = [make_review(1, text="First."), make_review(2, text="Second.")]
        service = make_generation_service("[]")

        await CategoryExtractor(service).extract_categories(reviews)

        assert "First.\n\nSecond." in _prompt_sent(service)

    @pytest.mark.asyncio()
    async def test_prompt_asks_for_json_array_only(self) -> None:
        service = make_generation_service("[]")

        await CategoryExtractor(service).extract_categories([make_review(1)])

        assert "Return only a JSON array of category names" in _prompt_sent(service)

    @pytest.mark.asyncio()
    async def test_generates_once(self) -> None:
        service = make_generation_service('["Pizza"]')

        await CategoryExtractor(service).extract_categories([make_review(1)])

        assert service.generate.await_count == 1

    @pytest.mark.asyncio()
    async def test_empty_reviews_skip_generation(self) -> None:
        service = make_generation_service('["Pizza"]')

        result = await CategoryExtractor(service).extract_categories([])

        assert result == []
        service.generate.assert_not_called()


class TestCategoryExtractorParsing:
    """Parsing of free-form model output."""

    @pytest.mark.asyncio()
    async def test_plain_array(self) -> None:
        service = make_generation_service('["Appetizers", "Main Courses", "Desserts"]')

        result = await CategoryExtractor(service).extract_categories([make_review(1)])

        assert result == ["Appetizers", "Main Courses", "Desserts"]

    @pytest.mark.asyncio()
    async def test_array_wrapped_in_prose_and_newlines(self) -> None:
        response = 'Sure! Here are the categories:\n[\n  "Pizza",\n  "Pasta"\n]\nEnjoy.'
        service = make_generation_service(response)

        result = await CategoryExtractor(service).extract_categories([make_review(1)])

        assert result == ["Pizza", "Pasta"]

    @pytest.mark.asyncio()
    async def test_first_array_wins(self) -> None:
        service = make_generation_service('["Seafood"] and also ["Steak"]')

        result = await CategoryExtractor(service).extract_categories([make_review(1)])

        assert result == ["Seafood"]

    @pytest.mark.asyncio()
    async def test_model_order_and_duplicates_preserved(self) -> None:
        service = make_generation_service('["Desserts", "pizza", "Pizza", "Desserts"]')

        result = await CategoryExtractor(service).extract_categories([make_review(1)])

        assert result == ["Desserts", "pizza", "Pizza", "Desserts"]

    @pytest.mark.asyncio()
    async def test_non_string_items_dropped(self) -> None:
        service = make_generation_service('["Pizza", 3, null, "  ", "Salads"]')

        result = await CategoryExtractor(service).extract_categories([make_review(1)])

        assert result == ["Pizza", "Salads"]

    @pytest.mark.asyncio()
    async def test_no_brackets_returns_empty(self) -> None:
        service = make_generation_service("Pizza, Pasta and Desserts")

        result = await CategoryExtractor(service).extract_categories([make_review(1)])

        assert result == []

    @pytest.mark.asyncio()
    async def test_invalid_json_returns_empty(self) -> None:
        service = make_generation_service("[Pizza, Pasta]")

        result = await CategoryExtractor(service).extract_categories([make_review(1)])

        assert result == []

    @pytest.mark.asyncio()
    async def test_repeated_calls_identical(self) -> None:
        service = make_generation_service('Categories: ["Noodles", "Curries"]')
        extractor = CategoryExtractor(service)
        reviews = [make_review(1), make_review(2)]

        first = await extractor.extract_categories(reviews)
        second = await extractor.extract_categories(reviews)

        assert first == second == ["Noodles", "Curries"]


class TestCategoryExtractorFailures:
    """Every failure is recovered into an empty list."""

    @pytest.mark.asyncio()
    @pytest.mark.parametrize(
        "error",
        [
            ConfigurationError(provider_name="huggingface"),
            AuthenticationError(provider_name="huggingface"),
            TransportError(provider_name="huggingface"),
            ProviderUnavailableError(provider_name="huggingface"),
            RuntimeError("unexpected"),
        ],
    )
    async def test_generation_failure_returns_empty(self, error: Exception) -> None:
        service = make_generation_service(error)

        result = await CategoryExtractor(service).extract_categories([make_review(1)])

        assert result == []
        assert service.generate.await_count == 1
