"""FastAPI route handlers."""

from fastapi import Request, Response
from fastapi.responses import JSONResponse, StreamingResponse

from core.config import Config
from core.headers import PREFLIGHT_HEADERS
from core.protocols import RequestLogger
from services.forwarding import ForwardingService
from services.upstream import UpstreamClient
from ui.log_utils import write_incoming_log

INTERNAL_ERROR_BODY = {"error": "Internal server error"}


def _raw_target(request: Request) -> tuple[str, str]:
    """Inbound path and query string with percent-escapes intact.

    request.url is rebuilt from the decoded path, so an escaped "?" or "#"
    would corrupt both parts; read them from the ASGI scope instead.
    """
    raw_path = request.scope.get("raw_path")
    path = raw_path.decode("latin-1") if raw_path is not None else request.scope["path"]
    return path, request.scope.get("query_string", b"").decode("latin-1")


async def handle_forward(
    request: Request,
    config: Config,
    logger: RequestLogger,
) -> Response:
    """Forward the request upstream and stream the reply back."""
    method = request.method
    path = request.scope["path"]
    forwarding: ForwardingService = request.app.state.forwarding_service
    upstream: UpstreamClient = request.app.state.upstream_client

    try:
        body = await request.body() if forwarding.carries_body(method) else None
        headers = request.headers.items()
        if config.proxy.debug:
            write_incoming_log(method, path, dict(headers), body)

        raw_path, query = _raw_target(request)
        prepared = forwarding.prepare(method, raw_path, query, headers, body)
        logger.log_forward(method, path, prepared.target_url)
        response = await upstream.send(prepared)
    except Exception as e:
        logger.log_error(f"{method} {path}", 500, f"{type(e).__name__}: {e}")
        return JSONResponse(INTERNAL_ERROR_BODY, status_code=500)

    logger.log_response(method, path, response.status_code)
    # iter_body closes the upstream response, including on client disconnect.
    return StreamingResponse(
        upstream.iter_body(response),
        status_code=response.status_code,
        headers=forwarding.client_headers(response.headers.multi_items()),
    )


async def handle_preflight() -> Response:
    """Answer CORS preflight locally without contacting the upstream."""
    return Response(status_code=200, headers=PREFLIGHT_HEADERS)
