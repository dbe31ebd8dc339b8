"""Shared execution helper for Supabase queries."""

import logging
from typing import Any, Protocol

import httpx
from postgrest.exceptions import APIError

from caloai.domain.errors import PersistenceError

logger = logging.getLogger(__name__)


class ExecutableQuery(Protocol):
    """A built PostgREST request."""

    def execute(self) -> Any:
        """Send the request and return the API response."""


def execute(query: ExecutableQuery, operation: str) -> Any:
    """Run a query, converting client failures into ``PersistenceError``."""
    try:
        return query.execute()
    except (APIError, httpx.HTTPError) as exc:
        logger.exception("Supabase %s failed", operation)
        raise PersistenceError(f"Failed to {operation}", details=str(exc)) from exc
