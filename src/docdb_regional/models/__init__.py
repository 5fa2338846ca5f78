"""Pydantic models for query bodies."""

from docdb_regional.models.query import Query, QueryParameter

__all__ = [
    "Query",
    "QueryParameter",
]
