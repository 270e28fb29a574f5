"""Shared request data types."""

from dataclasses import dataclass

import httpx


@dataclass(frozen=True)
class PreparedRequest:
    """Prepared data for an upstream request."""

    method: str
    target_url: str
    headers: httpx.Headers
    body: bytes | None
