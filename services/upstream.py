"""HTTP proxying utilities for upstream requests."""

from collections.abc import AsyncIterator

import httpx

from core.exceptions import UpstreamConnectionError, UpstreamError, UpstreamTimeoutError
from core.request_types import PreparedRequest


class UpstreamClient:
    """Send prepared requests upstream without buffering the response body."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def send(self, prepared: PreparedRequest) -> httpx.Response:
        """Send the request and return once status and headers have arrived."""
        try:
            request = self._client.build_request(
                prepared.method,
                prepared.target_url,
                headers=prepared.headers,
                content=prepared.body,
            )
            return await self._client.send(request, stream=True)
        except httpx.TimeoutException as e:
            raise UpstreamTimeoutError(f"Upstream timeout: {e}", target=prepared.target_url) from e
        except httpx.RequestError as e:
            raise UpstreamConnectionError(
                f"Upstream connection error: {e}", target=prepared.target_url
            ) from e
        except httpx.InvalidURL as e:
            raise UpstreamError(f"Invalid upstream URL: {e}", target=prepared.target_url) from e

    async def iter_body(self, response: httpx.Response) -> AsyncIterator[bytes]:
        """Yield the response body exactly as received, then close the response."""
        try:
            async for chunk in response.aiter_raw():
                yield chunk
        finally:
            await self.close_response(response)

    async def close_response(self, response: httpx.Response) -> None:
        """Clean up streaming resources."""
        await response.aclose()
