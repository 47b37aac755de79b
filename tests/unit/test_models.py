"""Unit tests for topdish Pydantic models."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from topdish.models import Dish, GenerationRequest, PipelineResult, Review


class TestReview:
    def test_canonical_fields(self) -> None:
        review = Review(
            text="Great pizza",
            rating=5,
            author="Alex",
            submitted_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        assert review.author == "Alex"
        assert review.submitted_at.year == 2024

    def test_place_details_payload_aliases(self) -> None:
        review = Review.model_validate(
            {"text": "Great pizza", "rating": 4, "author_name": "Sam", "time": 1704067200}
        )
        assert review.author == "Sam"
        assert review.submitted_at == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_half_star_rating_accepted(self) -> None:
        review = Review(text="x", rating=4.5, author="a")
        assert review.rating == pytest.approx(4.5)

    @pytest.mark.parametrize("rating", [0, 0.5, 5.5, 6])
    def test_rating_out_of_range_rejected(self, rating: float) -> None:
        with pytest.raises(ValidationError):
            Review(text="x", rating=rating)

    def test_frozen(self) -> None:
        review = Review(text="x", rating=3)
        with pytest.raises(ValidationError):
            review.text = "changed"  # type: ignore[misc]


class TestGenerationRequest:
    def test_defaults(self) -> None:
        request = GenerationRequest(prompt="hello")
        assert request.max_output_tokens == 500
        assert request.temperature == pytest.approx(0.7)

    @pytest.mark.parametrize("prompt", ["", "   \n"])
    def test_blank_prompt_rejected(self, prompt: str) -> None:
        with pytest.raises(ValidationError):
            GenerationRequest(prompt=prompt)


class TestDish:
    def test_rank_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Dish(name="Pad Thai", mentions=3, rank=0)

    def test_optional_fields_default_empty(self) -> None:
        dish = Dish(name="Pad Thai", rank=1)
        assert dish.category == ""
        assert dish.description == ""
        assert dish.mentions is None

    def test_pipeline_result_serializes(self) -> None:
        result = PipelineResult(
            categories=["Mains"],
            dishes=[Dish(name="Pad Thai", category="Mains", mentions=3, rank=1)],
            provider_name="huggingface",
        )
        data = result.model_dump(mode="json")
        assert data["dishes"][0]["rank"] == 1
        assert data["categories"] == ["Mains"]
