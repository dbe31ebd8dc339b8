"""Shared helpers for route handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request

from caloai.domain.errors import ValidationError

if TYPE_CHECKING:
    from caloai.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


def require_address(address: str | None) -> str:
    """Return the wallet address or reject the request."""
    if not address or not address.strip():
        raise ValidationError("Missing wallet address")
    return address.strip()
