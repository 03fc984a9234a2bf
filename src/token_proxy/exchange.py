"""
Authorization code exchange against upstream identity providers.

A single routine serves every provider. The provider descriptor decides the
token endpoint, how client credentials are delivered, which fields are
required and whether the successful payload is post-processed.
"""

from typing import Any, Dict, Optional, Tuple

import httpx
from fastapi import Request
from fastapi.responses import JSONResponse

from ..shared.crypto_utils import encode_basic_credentials
from ..shared.logging_utils import OAuthLogger
from ..shared.oauth_models import CredentialDelivery, ErrorEnvelope, TokenExchangeRequest
from .config import ProxySettings
from .providers import ProviderDescriptor
from .responses import json_response

logger = OAuthLogger("TOKEN-PROXY")

TOKEN_EXCHANGE_FAILED = "Token exchange failed"
INTERNAL_SERVER_ERROR = "Internal server error"

# JSON values a field may hold and still count as absent
ABSENT_VALUES = (None, "", 0, False)


class TokenExchanger:
    """
    Performs provider token exchanges on behalf of calling applications.

    Holds no per-request state. The optional httpx transport replaces the
    network for the upstream client (tests pass an httpx.MockTransport).
    """

    def __init__(self, settings: ProxySettings,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.transport = transport

    def build_upstream_request(self, provider: ProviderDescriptor,
                               exchange_request: TokenExchangeRequest) -> Tuple[Dict[str, str], Dict[str, str]]:
        """
        Build the form body and headers for the provider token endpoint.

        Returns:
            Tuple[Dict[str, str], Dict[str, str]]: (form_data, headers)
        """
        credentials = self.settings.credentials_for(provider.name)
        headers = {"Content-Type": "application/x-www-form-urlencoded"}
        form = exchange_request.to_form()

        if provider.delivery == CredentialDelivery.BASIC:
            headers["Authorization"] = encode_basic_credentials(
                credentials.client_id, credentials.client_secret
            )
        else:
            form = {
                "client_id": credentials.client_id,
                "client_secret": credentials.client_secret,
                **form,
            }

        for name in provider.extra_fields:
            form[name] = getattr(exchange_request, name)

        return form, headers

    def _finish_payload(self, provider: ProviderDescriptor, data: Any) -> Any:
        if provider.post_process is None:
            return data
        if provider.uses_pkce and not self.settings.pkce_debug_payload:
            return data
        return provider.post_process(data)

    async def exchange(self, provider: ProviderDescriptor, request: Request, origin: str) -> JSONResponse:
        """
        Exchange an authorization code for tokens with one provider.

        Args:
            provider: Descriptor of the target provider
            request: Inbound request carrying a JSON body
            origin: Request Origin header, empty string when absent

        Returns:
            JSONResponse: Upstream payload on success, an error envelope otherwise
        """
        tag = provider.label.upper()

        try:
            body = await request.json()
            fields = body if isinstance(body, dict) else {}

            missing = [name for name in provider.required_fields if fields.get(name) in ABSENT_VALUES]
            if missing:
                logger.log_token_exchange(tag, "validation", {
                    "missing_fields": missing,
                    "result": "rejected"
                }, success=False)
                return json_response(
                    ErrorEnvelope(error=provider.missing_message).to_payload(),
                    400, origin, self.settings
                )

            exchange_request = TokenExchangeRequest(
                code=fields["code"],
                redirect_uri=fields["redirect_uri"],
                code_verifier=fields.get("code_verifier"),
            )
            form, headers = self.build_upstream_request(provider, exchange_request)

            logger.log_token_exchange(tag, "request", {
                "endpoint": provider.token_url,
                "credential_delivery": provider.delivery.value,
                "code": exchange_request.code,
                "redirect_uri": exchange_request.redirect_uri,
                "form_fields": sorted(form.keys())
            })

            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(provider.token_url, data=form, headers=headers)

            data = response.json()

            if not response.is_success:
                logger.log_token_exchange(tag, "failed", {
                    "status_code": response.status_code,
                    "details": data
                }, success=False)
                return json_response(
                    ErrorEnvelope(error=TOKEN_EXCHANGE_FAILED, details=data).to_payload(),
                    response.status_code, origin, self.settings
                )

            logger.log_token_exchange(tag, "success", {
                "status_code": response.status_code,
                "has_access_token": isinstance(data, dict) and bool(data.get("access_token")),
                "response_keys": list(data.keys()) if isinstance(data, dict) else []
            })

            return json_response(self._finish_payload(provider, data), 200, origin, self.settings)

        except Exception as e:
            logger.log_error("token_exchange_error", str(e), {
                "provider": tag,
                "exception": type(e).__name__
            })
            return json_response(
                ErrorEnvelope(error=INTERNAL_SERVER_ERROR).to_payload(),
                500, origin, self.settings
            )
