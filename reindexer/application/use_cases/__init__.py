"""Use cases: the reindex pipeline and its wiring from settings."""

from reindexer.application.use_cases.reindex_pipeline import (
    ReindexPipeline,
    build_pipeline,
    build_query,
    run_pipeline,
)

__all__ = ["ReindexPipeline", "build_pipeline", "build_query", "run_pipeline"]
