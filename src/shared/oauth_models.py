"""
Pydantic models for the token proxy request/response shapes.

This module defines the transient data models that flow through a token
exchange: the inbound exchange request, per-provider credentials held in
configuration, and the JSON envelopes returned to callers.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, Optional
from enum import Enum


class GrantType(str, Enum):
    """OAuth 2.0 grant types forwarded upstream."""
    AUTHORIZATION_CODE = "authorization_code"


class CredentialDelivery(str, Enum):
    """How client credentials reach the provider's token endpoint."""
    BODY = "body"
    BASIC = "basic"


class TokenExchangeRequest(BaseModel):
    """
    Inbound authorization code exchange request.

    `code_verifier` is only required by providers that use PKCE; the
    exchange routine checks presence before this model is built.
    """
    code: str = Field(..., min_length=1, description="Authorization code")
    redirect_uri: str = Field(..., min_length=1, description="Redirect URI used for the authorization request")
    code_verifier: Optional[str] = Field(default=None, description="PKCE code verifier")

    model_config = ConfigDict(validate_assignment=True)

    @field_validator('code', 'redirect_uri', 'code_verifier', mode="before")
    @classmethod
    def coerce_to_string(cls, v):
        """Accept any JSON scalar the way a form encoder would."""
        if v is None:
            return v
        if isinstance(v, bool):
            return "true" if v else "false"
        return str(v)

    def to_form(self) -> Dict[str, str]:
        """Form fields common to every provider."""
        return {
            "code": self.code,
            "grant_type": GrantType.AUTHORIZATION_CODE.value,
            "redirect_uri": self.redirect_uri,
        }


class ProviderCredentials(BaseModel):
    """Client identifier and secret for one provider. Never sent to callers."""
    client_id: str = Field(default="", description="OAuth client identifier")
    client_secret: str = Field(default="", description="OAuth client secret")

    def __repr__(self) -> str:
        return f"ProviderCredentials(client_id={self.client_id!r}, client_secret='[REDACTED]')"

    __str__ = __repr__


class ErrorEnvelope(BaseModel):
    """Error body returned to callers."""
    error: str = Field(..., description="Error message")
    details: Optional[Any] = Field(
        default=None,
        description="Upstream error body, when the provider rejected the exchange"
    )

    def to_payload(self) -> Dict[str, Any]:
        # details is kept whenever it was given, even as JSON null
        return self.model_dump(exclude_unset=True)


class HealthStatus(BaseModel):
    """Health check response."""
    status: str = Field(default="ok")
    timestamp: int = Field(..., description="Milliseconds since the Unix epoch")
