"""Application ports (Protocols) for external collaborators."""

from reindexer.application.interfaces.store import IDocumentStore, RawResponse

__all__ = ["IDocumentStore", "RawResponse"]
