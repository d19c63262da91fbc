"""docstore-reindexer: search a document store, rewrite matching documents, write them back.

Quick start:
    >>> from reindexer.application.use_cases import run_pipeline
    >>> from reindexer.core.config import get_settings
    >>> from reindexer.infrastructure.store import build_store_client
    >>> settings = get_settings()
    >>> async with build_store_client(settings) as store:
    ...     summary = await run_pipeline(store, settings)
"""

__version__ = "1.0.0"
