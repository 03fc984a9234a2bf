"""
Provider descriptors for the token proxy.

Each supported identity provider is described by a small table entry: its
token endpoint, how client credentials are delivered, which request fields
are required and forwarded, and an optional hook applied to successful
upstream payloads. The exchange routine is driven entirely by these entries.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from ..shared.oauth_models import CredentialDelivery


MISSING_FIELDS_MESSAGE = "Missing code or redirect_uri"
MISSING_PKCE_FIELDS_MESSAGE = "Missing code, redirect_uri, or code_verifier"


def attach_debug_summary(payload: Any) -> Any:
    """
    Append a `_debug` summary of the upstream token response.

    Used for the PKCE provider, whose clients historically relied on it to
    troubleshoot exchanges.
    """
    if not isinstance(payload, dict):
        return payload

    summary = {
        "hasAccessToken": bool(payload.get("access_token")),
        "tokenType": payload.get("token_type"),
        "expiresIn": payload.get("expires_in"),
        "scope": payload.get("scope"),
        "responseKeys": list(payload.keys()),
    }
    return {**payload, "_debug": summary}


@dataclass(frozen=True)
class ProviderDescriptor:
    """
    Static description of one provider's token exchange.

    Attributes:
        name: URL path segment, /auth/{name}/token
        label: Display name used in logs
        token_url: Provider token endpoint
        delivery: Where client credentials go (form body or Basic header)
        required_fields: Inbound fields that must be present and non-empty
        extra_fields: Inbound fields forwarded upstream besides code/redirect_uri
        missing_message: Error message for a failed presence check
        post_process: Optional transform of a successful upstream payload
    """
    name: str
    label: str
    token_url: str
    delivery: CredentialDelivery
    required_fields: Tuple[str, ...] = ("code", "redirect_uri")
    extra_fields: Tuple[str, ...] = ()
    missing_message: str = MISSING_FIELDS_MESSAGE
    post_process: Optional[Callable[[Any], Any]] = field(default=None, compare=False)

    @property
    def uses_pkce(self) -> bool:
        return "code_verifier" in self.required_fields


PROVIDERS: Dict[str, ProviderDescriptor] = {
    descriptor.name: descriptor
    for descriptor in (
        ProviderDescriptor(
            name="video",
            label="YouTube",
            token_url="https://oauth2.googleapis.com/token",
            delivery=CredentialDelivery.BODY,
        ),
        ProviderDescriptor(
            name="chat",
            label="Discord",
            token_url="https://discord.com/api/oauth2/token",
            delivery=CredentialDelivery.BODY,
        ),
        ProviderDescriptor(
            name="music",
            label="Spotify",
            token_url="https://accounts.spotify.com/api/token",
            delivery=CredentialDelivery.BASIC,
        ),
        ProviderDescriptor(
            name="social",
            label="Twitter",
            token_url="https://api.twitter.com/2/oauth2/token",
            delivery=CredentialDelivery.BASIC,
            required_fields=("code", "redirect_uri", "code_verifier"),
            extra_fields=("code_verifier",),
            missing_message=MISSING_PKCE_FIELDS_MESSAGE,
            post_process=attach_debug_summary,
        ),
        ProviderDescriptor(
            name="streaming",
            label="Twitch",
            token_url="https://id.twitch.tv/oauth2/token",
            delivery=CredentialDelivery.BODY,
        ),
    )
}


def get_provider(name: str) -> Optional[ProviderDescriptor]:
    """Look up a provider by its path segment."""
    return PROVIDERS.get(name)
