"""Forwarding orchestration: inbound request to upstream request."""

from core.config import Config
from core.headers import HeaderBuilder, HeaderItems
from core.request_types import PreparedRequest
from core.router import build_target_url, extract_forwarded_path

BODYLESS_METHODS = ("GET", "HEAD", "OPTIONS")


class ForwardingService:
    """Prepare inbound requests for the configured upstream."""

    def __init__(
        self,
        config: Config,
        header_builder: HeaderBuilder | None = None,
    ) -> None:
        self._base_url = config.upstream.base_url
        self._marker = config.proxy.route_marker
        self._headers = header_builder or HeaderBuilder(
            config.upstream.username, config.upstream.password
        )

    @staticmethod
    def carries_body(method: str) -> bool:
        return method.upper() not in BODYLESS_METHODS

    def target_url(self, path: str, query: str) -> str:
        forwarded = extract_forwarded_path(path, self._marker)
        return build_target_url(self._base_url, forwarded, query)

    def prepare(
        self,
        method: str,
        path: str,
        query: str,
        headers: HeaderItems,
        body: bytes | None = None,
    ) -> PreparedRequest:
        """Build the upstream request for one inbound request."""
        method = method.upper()
        if not self.carries_body(method):
            body = None
        upstream_headers = self._headers.build_upstream_headers(headers, has_body=bool(body))
        return PreparedRequest(method, self.target_url(path, query), upstream_headers, body)

    def client_headers(self, headers: HeaderItems) -> dict[str, str]:
        return self._headers.build_client_headers(headers)
