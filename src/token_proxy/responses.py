"""
Response envelope helpers.

All proxy responses are built here so content type and CORS headers are
applied uniformly.
"""

from typing import Any

from fastapi.responses import JSONResponse, Response

from .config import ProxySettings
from .cors import cors_headers


def json_response(payload: Any, status_code: int, origin: str, settings: ProxySettings) -> JSONResponse:
    """Serialize payload as JSON with CORS headers attached."""
    return JSONResponse(
        content=payload,
        status_code=status_code,
        headers=cors_headers(origin, settings.allowed_origins),
        media_type="application/json",
    )


def preflight_response(origin: str, settings: ProxySettings) -> Response:
    """Empty 204 answer to a CORS preflight."""
    return Response(
        status_code=204,
        headers=cors_headers(origin, settings.allowed_origins),
    )
