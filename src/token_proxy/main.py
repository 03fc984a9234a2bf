"""
OAuth Token Proxy

This FastAPI application exchanges OAuth 2.0 authorization codes with
third-party identity providers on behalf of client applications, so that
provider client secrets stay on the server.

Key Endpoints:
- `POST /auth/{provider}/token` - Authorization code exchange, provider is
  one of video, chat, music, social, streaming
- `GET /health` - Health check endpoint
- `OPTIONS *` - CORS preflight

Security Features:
- Client secrets injected server-side, never returned to callers
- HTTP Basic or form-body client authentication per provider
- Configurable CORS allow-list
- Error responses without internal detail
"""

from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..shared.logging_utils import OAuthLogger
from .config import ProxySettings
from .exchange import TokenExchanger
from .providers import PROVIDERS
from .routes import not_found_response, router

# Initialize logger
logger = OAuthLogger("TOKEN-PROXY")


def create_app(settings: Optional[ProxySettings] = None,
               transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    """
    Build the token proxy application.

    Args:
        settings: Proxy configuration, read from the environment when omitted
        transport: Optional httpx transport for upstream provider calls

    Returns:
        FastAPI: Configured application
    """
    if settings is None:
        settings = ProxySettings.from_env()

    app = FastAPI(
        title="OAuth Token Proxy",
        description="Server-side authorization code exchange for third-party identity providers",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.settings = settings
    app.state.exchanger = TokenExchanger(settings, transport=transport)

    @app.middleware("http")
    async def log_requests(request, call_next):
        """Log every inbound request; the health check is too chatty to log."""
        if request.url.path != "/health":
            logger.log_http_request(
                request.method,
                request.url.path,
                headers={
                    "origin": request.headers.get("origin", ""),
                    "content-type": request.headers.get("content-type", "")
                }
            )

        return await call_next(request)

    @app.exception_handler(StarletteHTTPException)
    async def unmatched_route_handler(request, exc):
        """Methods no route accepts get the JSON 404 envelope, not a bare 405."""
        if exc.status_code in (404, 405):
            return not_found_response(request)
        return await http_exception_handler(request, exc)

    app.include_router(router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = app.state.settings

    logger.log_startup(settings.port, {
        "host": settings.host,
        "providers": ", ".join(PROVIDERS),
        "allowed_origins": settings.allowed_origins or "(none)"
    })

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level="info"
    )
