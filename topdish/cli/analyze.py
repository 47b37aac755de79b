# =============================================================================
# topdish/cli/analyze.py -- CLI Analyze Command
# =============================================================================
#
# Runs the top-dish analysis on a file of already-fetched reviews:
#
#   Step 1: Categories -- suggest dish categories (skipped with --category)
#   Step 2: Ranking    -- rank the top dishes in those categories
#
# Typical usage:
#   python -m topdish.cli.analyze reviews.json
#   python -m topdish.cli.analyze reviews.json --category Desserts --category Pizza
#   python -m topdish.cli.analyze reviews.json --json -o dishes.json
#
# Input file: a JSON array of review objects, or a saved place-details
# payload with a "reviews" key.  Each review needs "text" and "rating";
# "author"/"author_name" and "time" (epoch seconds) are optional.
#
# Exit codes: 0 success, 1 analysis failed, 2 unreadable input file.
# =============================================================================

"""Standalone CLI for ranking a restaurant's top dishes from its reviews.

Usage::

    python -m topdish.cli.analyze reviews.json
    python -m topdish.cli.analyze reviews.json --category Desserts --json

The model provider is chosen from ``LLM_PROVIDER`` (``huggingface`` or
``openai``) and its API key from the environment or a ``.env`` file.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import time
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from topdish.config.settings import Settings
from topdish.models.dish import PipelineResult
from topdish.models.review import Review
from topdish.pipeline.orchestrator import TopDishPipeline
from topdish.services.generation_service import GenerationService
from topdish.utils.errors import ExtractionParseError, LLMError, TopDishError
from topdish.utils.logging import configure_logging

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_BAD_INPUT = 2


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


def _load_reviews(path: Path) -> list[Review]:
    """Read and validate reviews from *path*.

    Raises
    ------
    ValueError
        If the file is missing or unreadable, is not JSON, or holds no valid
        reviews.
    """
    if not path.exists():
        raise ValueError(f"File not found: {path}")

    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ValueError(f"Cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path.name} is not valid JSON: {exc}") from exc

    if isinstance(data, dict):
        # A raw place-details response nests reviews under "result".
        container = data["result"] if isinstance(data.get("result"), dict) else data
        data = container.get("reviews")
    if not isinstance(data, list):
        raise ValueError("Expected a JSON array of reviews or an object with a 'reviews' key")

    try:
        reviews = [Review.model_validate(item) for item in data]
    except ValidationError as exc:
        raise ValueError(f"Invalid review record: {exc.error_count()} error(s)") from exc

    if not reviews:
        raise ValueError("No reviews found in input file")
    return reviews


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def _format_text_output(result: PipelineResult) -> str:
    """Format the pipeline result as a human-readable report."""
    lines: list[str] = []
    sep = "=" * 60

    lines.append(sep)
    lines.append("  topdish -- Top Dishes")
    lines.append(sep)
    lines.append("")
    if result.provider_name:
        lines.append(f"Model provider: {result.provider_name}")
    if result.categories:
        lines.append(f"Categories: {', '.join(result.categories)}")
    lines.append("")

    if not result.dishes:
        lines.append("No dishes were identified.")
    for dish in result.dishes:
        lines.append(f"#{dish.rank}  {dish.name}")
        if dish.category:
            lines.append(f"    Category:  {dish.category}")
        if dish.mentions is not None:
            lines.append(f"    Mentions:  {dish.mentions}")
        if dish.description:
            lines.append(f"    {dish.description}")
        lines.append("")

    return "\n".join(lines)


def _format_json_output(result: PipelineResult) -> str:
    """Serialize the pipeline result to JSON."""
    return json.dumps(result.model_dump(mode="json"), indent=2)


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------


def _suppress_logs() -> None:
    """Send logs to stderr at WARNING+ so stdout holds only the report."""
    configure_logging(log_level="WARNING", stream=sys.stderr)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


async def _run(
    reviews_path: Path,
    categories: list[str] | None,
    json_output: bool,
    output_file: str | None,
    generation_service: GenerationService | None = None,
) -> int:
    """Load reviews, run the pipeline and write the report.

    Returns one of the ``EXIT_*`` codes.
    """
    try:
        reviews = _load_reviews(reviews_path)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT

    owns_service = generation_service is None
    service = generation_service or GenerationService(Settings())
    pipeline = TopDishPipeline(service)

    print(f"Analyzing {len(reviews)} review(s) with {service.provider_name}", file=sys.stderr)
    start = time.monotonic()
    try:
        result = await pipeline.run(reviews, categories=categories)
    except ExtractionParseError as exc:
        print(f"Error: the model's answer could not be read. {exc}", file=sys.stderr)
        return EXIT_FAILED
    except LLMError as exc:
        print(f"Error: the model provider failed. {exc}", file=sys.stderr)
        return EXIT_FAILED
    except TopDishError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILED
    finally:
        if owns_service:
            await service.aclose()

    print(f"Done in {time.monotonic() - start:.1f}s", file=sys.stderr)

    text = _format_json_output(result) if json_output else _format_text_output(result)
    if output_file:
        Path(output_file).write_text(text, encoding="utf-8")
        print(f"Results written to: {output_file}", file=sys.stderr)
    else:
        print(text)
    return EXIT_OK


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m topdish.cli.analyze",
        description="Rank a restaurant's most praised dishes from its reviews.",
    )
    parser.add_argument(
        "reviews",
        type=str,
        help="Path to a JSON file of reviews.",
    )
    parser.add_argument(
        "--category", "-c",
        action="append",
        dest="categories",
        default=None,
        help="Dish category to rank within (repeatable). Defaults to suggested categories.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output results as JSON instead of formatted text.",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Write results to a file instead of stdout.",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress log output (implied by --json).",
    )
    return parser


def main() -> None:
    """CLI entry point for the analyze tool."""
    parser = _build_parser()
    args = parser.parse_args()

    if args.quiet or args.json_output:
        _suppress_logs()
    else:
        settings = Settings()
        configure_logging(log_level=settings.log_level, stream=sys.stderr)

    exit_code = asyncio.run(
        _run(
            Path(args.reviews).resolve(),
            args.categories,
            args.json_output,
            args.output,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
