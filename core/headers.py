"""Header construction for upstream requests and relayed responses."""

import base64
from collections.abc import Iterable, Mapping

import httpx

# Hop-by-hop headers dropped in both directions.
HOP_BY_HOP_HEADERS = (
    "connection",
    "upgrade",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailers",
    "transfer-encoding",
)

REQUEST_EXCLUDED_HEADERS = ("host", "content-length", "proxy-connection") + HOP_BY_HOP_HEADERS
RESPONSE_EXCLUDED_HEADERS = ("keep-alive",) + HOP_BY_HOP_HEADERS

ALLOWED_METHODS = "GET, POST, PUT, PATCH, DELETE, OPTIONS"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": ALLOWED_METHODS,
    "Access-Control-Allow-Headers": "Content-Type",
}

PREFLIGHT_HEADERS = {**CORS_HEADERS, "Access-Control-Max-Age": "86400"}

HeaderItems = Mapping[str, str] | Iterable[tuple[str, str]]


def basic_auth_value(username: str, password: str) -> str:
    credentials = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
    return f"Basic {credentials}"


def _items(headers: HeaderItems) -> Iterable[tuple[str, str]]:
    if isinstance(headers, Mapping):
        return headers.items()
    return headers


class HeaderBuilder:
    """Build upstream request headers and client response headers."""

    def __init__(self, username: str = "", password: str = "") -> None:
        self._authorization = basic_auth_value(username, password) if username and password else None

    def build_upstream_headers(self, headers: HeaderItems, has_body: bool) -> httpx.Headers:
        """Copy inbound headers minus framing/hop-by-hop ones, then inject auth."""
        upstream = httpx.Headers()
        for key, value in _items(headers):
            if key.lower() not in REQUEST_EXCLUDED_HEADERS:
                # Last value wins for repeated names.
                upstream[key] = value

        if self._authorization:
            upstream["Authorization"] = self._authorization

        if has_body and "content-type" not in upstream:
            upstream["Content-Type"] = "application/json"
        return upstream

    def build_client_headers(self, headers: HeaderItems) -> dict[str, str]:
        """Copy upstream response headers minus hop-by-hop ones, then add CORS."""
        client: dict[str, str] = {}
        for key, value in _items(headers):
            key_lower = key.lower()
            if key_lower not in RESPONSE_EXCLUDED_HEADERS:
                client[key_lower] = value

        for key, value in CORS_HEADERS.items():
            client[key.lower()] = value
        return client
