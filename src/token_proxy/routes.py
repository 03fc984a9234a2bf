"""
Token Proxy Routes

Route definitions for the token proxy: CORS preflight, the per-provider
token endpoints, the health check and a catch-all 404. Every response goes
through the envelope helpers so CORS headers are always present.
"""

import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from ..shared.logging_utils import OAuthLogger
from ..shared.oauth_models import ErrorEnvelope, HealthStatus
from .providers import get_provider
from .responses import json_response, preflight_response

router = APIRouter()
logger = OAuthLogger("TOKEN-PROXY")

NOT_FOUND = "Not found"

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


def _origin(request: Request) -> str:
    return request.headers.get("origin", "")


def not_found_response(request: Request) -> JSONResponse:
    return json_response(
        ErrorEnvelope(error=NOT_FOUND).to_payload(),
        404, _origin(request), request.app.state.settings
    )


@router.options("/{path:path}")
async def cors_preflight(request: Request, path: str) -> Response:
    """Answer CORS preflight requests for any path."""
    logger.log_oauth_message(
        "CLIENT", "TOKEN-PROXY",
        "PREFLIGHT",
        {
            "path": f"/{path}",
            "origin": _origin(request) or "(none)"
        }
    )
    return preflight_response(_origin(request), request.app.state.settings)


@router.post("/auth/{provider}/token")
async def token_exchange(request: Request, provider: str) -> JSONResponse:
    """
    Exchange an authorization code with the named provider.

    The body is JSON: {"code", "redirect_uri"} plus "code_verifier" for
    providers that use PKCE. Unknown providers get the standard 404.
    """
    descriptor = get_provider(provider)
    if descriptor is None:
        return not_found_response(request)

    return await request.app.state.exchanger.exchange(descriptor, request, _origin(request))


@router.get("/health")
async def health_check(request: Request) -> JSONResponse:
    """Health check endpoint for monitoring."""
    health = HealthStatus(timestamp=int(time.time() * 1000))
    return json_response(health.model_dump(), 200, _origin(request), request.app.state.settings)


@router.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
async def not_found(request: Request, path: str) -> JSONResponse:
    """Anything not matched above."""
    return not_found_response(request)
