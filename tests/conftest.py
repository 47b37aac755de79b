"""Shared pytest fixtures for the topdish test suite."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from topdish.config.settings import Settings
from topdish.interfaces.llm_provider import ILLMProvider
from topdish.models.review import Review
from topdish.services.generation_service import GenerationService

PAD_THAI_RESPONSE = (
    'Here you go: [{"name":"Pad Thai","category":"Main Courses",'
    '"description":"loved by all","mentions":12},'
    '{"name":"Mango Sticky Rice","category":"Desserts",'
    '"description":"sweet finish","mentions":9},'
    '{"name":"Tom Yum","category":"Soups","description":"spicy","mentions":3}]'
)


def make_settings(**overrides: Any) -> Settings:
    """Build Settings with test-safe defaults.

    Passing values explicitly keeps the developer's own .env and environment
    from leaking into tests.
    """
    defaults: dict[str, Any] = {
        "llm_provider": "huggingface",
        "huggingface_api_key": "hf_test",
        "huggingface_model": "mistralai/Mistral-7B-Instruct-v0.2",
        "huggingface_base_url": "https://api-inference.huggingface.co/models",
        "openai_api_key": "sk-test",
        "openai_model": "gpt-3.5-turbo",
        "openai_base_url": "",
        "cold_start_retry_delay": 5.0,
        "app_env": "test",
    }
    defaults.update(overrides)
    return Settings(**defaults)


def make_review(index: int, rating: float = 5, text: str | None = None) -> Review:
    return Review(
        text=text if text is not None else f"Review body number {index}.",
        rating=rating,
        author=f"Diner {index}",
        submitted_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def make_generation_service(response: str | Exception) -> GenerationService:
    """Mock GenerationService whose generate() returns or raises *response*."""
    mock = MagicMock(spec=GenerationService)
    mock.provider_name = "mock-llm"
    if isinstance(response, Exception):
        mock.generate = AsyncMock(side_effect=response)
    else:
        mock.generate = AsyncMock(return_value=response)
    return mock


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def sample_reviews() -> list[Review]:
    """Three realistic reviews of a Thai restaurant."""
    return [
        Review(
            text="The Pad Thai was incredible, best I've had outside Bangkok.",
            rating=5,
            author="Alex",
            submitted_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
        ),
        Review(
            text="Mango sticky rice for dessert was a sweet finish. Pad Thai also great.",
            rating=4,
            author="Sam",
            submitted_at=datetime(2024, 3, 2, tzinfo=timezone.utc),
        ),
        Review(
            text="Tom Yum was too spicy for me, service was slow.",
            rating=2,
            author="Jordan",
            submitted_at=datetime(2024, 3, 3, tzinfo=timezone.utc),
        ),
    ]


@pytest.fixture
def mock_llm_provider() -> ILLMProvider:
    """Mock ILLMProvider; override ``invoke`` per test."""
    mock = MagicMock(spec=ILLMProvider)
    mock.get_provider_name.return_value = "mock-llm"
    mock.is_available.return_value = True
    mock.invoke = AsyncMock(return_value=PAD_THAI_RESPONSE)
    return mock


@pytest.fixture
def reviews_file(tmp_path: Path) -> Path:
    """A JSON file of reviews in the place-details payload shape."""
    payload = {
        "result": {
            "name": "Thai Garden",
            "reviews": [
                {
                    "text": "The Pad Thai was incredible.",
                    "rating": 5,
                    "author_name": "Alex",
                    "time": 1709251200,
                },
                {
                    "text": "Mango sticky rice was a sweet finish.",
                    "rating": 4,
                    "author_name": "Sam",
                    "time": 1709337600,
                },
            ],
        }
    }
    path = tmp_path / "reviews.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path
