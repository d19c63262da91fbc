"""Document store REST client (httpx)."""

from reindexer.infrastructure.store.client import CLIENT_VERSION, build_store_client
from reindexer.infrastructure.store._rest_client import DocumentStoreRESTClient

__all__ = [
    "CLIENT_VERSION",
    "DocumentStoreRESTClient",
    "build_store_client",
]
