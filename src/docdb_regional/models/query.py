"""Query body model sent to the service's query endpoint."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class QueryParameter(BaseModel):
    """A named query parameter, e.g. ``@id``."""

    name: str
    value: Any


class Query(BaseModel):
    """SQL query text with optional named parameters."""

    query: str = Field(min_length=1)
    parameters: list[QueryParameter] = Field(default_factory=list)

    @classmethod
    def build(cls, query: str, **params: Any) -> Query:
        """Build a query from keyword parameters; names get an ``@`` prefix if missing."""
        return cls(
            query=query,
            parameters=[
                QueryParameter(name=name if name.startswith("@") else f"@{name}", value=value)
                for name, value in params.items()
            ],
        )
