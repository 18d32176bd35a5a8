"""Pass-through proxy to the search engine."""

import logging

import httpx
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import PlainTextResponse

router = APIRouter()

logger = logging.getLogger(__name__)

# Connection-level headers that must not be forwarded in either direction
HOP_BY_HOP_HEADERS = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailers",
    "transfer-encoding",
    "upgrade",
}
REQUEST_SKIP_HEADERS = HOP_BY_HOP_HEADERS | {"host", "content-length"}
# httpx has already decoded the body, so length/encoding no longer apply
RESPONSE_SKIP_HEADERS = HOP_BY_HOP_HEADERS | {"content-length", "content-encoding"}


def get_upstream_client(request: Request) -> httpx.AsyncClient:
    """Dependency to get the engine HTTP client."""
    return request.app.state.upstream


def build_forward_headers(request: Request) -> dict[str, str]:
    """Copy request headers for the upstream call."""
    headers = {
        key: value
        for key, value in request.headers.items()
        if key.lower() not in REQUEST_SKIP_HEADERS
    }
    if "content-type" not in headers:
        headers["content-type"] = "application/json"

    if request.client:
        headers["x-forwarded-for"] = request.client.host
    headers["x-forwarded-host"] = request.headers.get("host", "")
    headers["x-forwarded-proto"] = request.url.scheme
    return headers


# CORS preflights are answered by the middleware before routing
PROXY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("", methods=PROXY_METHODS)
@router.api_route("/{path:path}", methods=PROXY_METHODS)
async def forward(
    request: Request,
    upstream: httpx.AsyncClient = Depends(get_upstream_client),
):
    """
    Forward the request to the engine with the proxy prefix removed.

    The bare prefix maps to the engine root. Returns 502 when the engine
    cannot be reached.
    """
    path = request.path_params.get("path", "")
    upstream_request = upstream.build_request(
        request.method,
        f"/{path}",
        params=list(request.query_params.multi_items()),
        headers=build_forward_headers(request),
        content=await request.body(),
    )

    try:
        upstream_response = await upstream.send(upstream_request)
    except httpx.RequestError as e:
        logger.error("Proxy error: %s", e)
        return PlainTextResponse("Proxy error", status_code=502)

    headers = {
        key: value
        for key, value in upstream_response.headers.items()
        if key.lower() not in RESPONSE_SKIP_HEADERS
    }
    logger.debug("%s /%s -> %d", request.method, path, upstream_response.status_code)

    return Response(
        content=upstream_response.content,
        status_code=upstream_response.status_code,
        headers=headers,
    )
