"""Pipeline orchestration for the top-dish analysis."""

from topdish.pipeline.orchestrator import TopDishPipeline

__all__ = ["TopDishPipeline"]
