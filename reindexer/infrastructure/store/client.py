"""Document store client construction.

The client is built explicitly by the composition root and passed to the
query executor and index writer; there is no process-wide instance.
Basic auth is used when STORE_USERNAME is set.
"""

import httpx

from reindexer.core.config import Settings
from reindexer.infrastructure.store._rest_client import DocumentStoreRESTClient
from reindexer.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

# Reported in the startup banner next to the server version.
CLIENT_VERSION = f"httpx/{httpx.__version__}"


def _build_auth(settings: Settings) -> httpx.Auth | None:
    if not settings.store_username:
        return None
    password = (
        settings.store_password.get_secret_value() if settings.store_password else ""
    )
    return httpx.BasicAuth(settings.store_username, password)


def build_store_client(
    settings: Settings,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> DocumentStoreRESTClient:
    """Create a DocumentStoreRESTClient for ``settings.store_url``.

    Args:
        settings: Loaded settings (connection address, credentials, timeout).
        http_client: Optional injected httpx client; the caller keeps ownership.

    Returns:
        Client implementing IDocumentStore. Close it with ``aclose()``.
    """
    logger.debug(
        "Creating document store client for %s (auth=%s)",
        settings.store_url,
        "basic" if settings.store_username else "none",
    )
    return DocumentStoreRESTClient(
        settings.store_url,
        auth=_build_auth(settings),
        timeout=settings.store_timeout_seconds,
        http_client=http_client,
    )
