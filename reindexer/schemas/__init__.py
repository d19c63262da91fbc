"""Pydantic wire schemas for document store responses."""
