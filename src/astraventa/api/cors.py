"""CORS and cache headers shared by every relay response."""

from typing import Any

from fastapi.responses import JSONResponse, Response

ALLOWED_HEADERS = "authorization, x-client-info, apikey, content-type, x-client-id"
ALLOWED_METHODS = "POST, OPTIONS"
PREFLIGHT_MAX_AGE = "86400"


def cors_headers(origin: str) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Max-Age": PREFLIGHT_MAX_AGE,
        "Access-Control-Expose-Headers": "*",
    }


def response_headers(origin: str) -> dict[str, str]:
    """CORS headers plus caching disabled."""
    return {**cors_headers(origin), "Cache-Control": "no-store"}


def json_response(content: Any, status_code: int = 200, *, origin: str = "*") -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers=response_headers(origin))


def preflight_response(origin: str) -> Response:
    return Response(status_code=204, headers=response_headers(origin))
