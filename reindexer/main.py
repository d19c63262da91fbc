"""Run the reindex pipeline from settings.

Usage:
    python -m reindexer
    reindexer
Connection, query and write-back targets come from the environment or
.env (see reindexer.core.config.Settings). Exits 1 on a fatal error.
"""

import asyncio
import signal
import sys

from reindexer.application.dtos.pipeline import PipelineSummary
from reindexer.application.use_cases.reindex_pipeline import run_pipeline
from reindexer.core.config import get_settings
from reindexer.domain.exceptions import PipelineAborted
from reindexer.infrastructure.store import CLIENT_VERSION, build_store_client
from reindexer.shared.telemetry import TelemetryConfig, get_logger, setup_logging

logger = get_logger(__name__)


async def main() -> PipelineSummary:
    """Build the store client, run the pipeline, close the client."""
    settings = get_settings()
    telemetry = TelemetryConfig.from_settings(settings)
    telemetry.setup_telemetry(
        exporter_type=settings.telemetry_exporter,
        otlp_endpoint=settings.telemetry_otlp_endpoint,
        sample_rate=settings.telemetry_sample_rate,
    )
    telemetry.instrument_httpx()
    telemetry.instrument_logging()

    # SIGINT/SIGTERM cancel in-flight store calls instead of waiting on them.
    cancel_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, cancel_event.set)
        except NotImplementedError:
            logger.debug("Signal handlers not supported on this platform")

    try:
        async with build_store_client(settings) as store:
            return await run_pipeline(
                store,
                settings,
                cancel_event=cancel_event,
                client_version=CLIENT_VERSION,
            )
    finally:
        telemetry.shutdown()


def run() -> None:
    """Console entry point."""
    setup_logging()
    try:
        asyncio.run(main())
    except PipelineAborted as e:
        logger.error("%s", e.message)
        sys.exit(1)


if __name__ == "__main__":
    run()
