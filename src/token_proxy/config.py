"""
Token proxy configuration.

Settings are read from the environment once, at application start, into an
explicit ProxySettings object that is handed to the application factory.
Handlers only ever see the object they were given.
"""

import os
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from ..shared.oauth_models import ProviderCredentials


# Environment variable prefix for each provider's client id/secret pair
PROVIDER_ENV_PREFIXES = {
    "video": "YOUTUBE",
    "chat": "DISCORD",
    "music": "SPOTIFY",
    "social": "TWITTER",
    "streaming": "TWITCH",
}

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8787

_TRUTHY = {"1", "true", "yes", "on"}


class ProxySettings(BaseModel):
    """
    Runtime configuration for the token proxy.

    Attributes:
        credentials: Provider name -> client credentials
        allowed_origins: Comma-separated CORS allow-list, may contain "*"
        host: Bind address for the bundled uvicorn runner
        port: Bind port for the bundled uvicorn runner
        pkce_debug_payload: Attach the `_debug` summary to PKCE exchanges
    """
    credentials: Dict[str, ProviderCredentials] = Field(default_factory=dict)
    allowed_origins: str = Field(default="")
    host: str = Field(default=DEFAULT_HOST)
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    pkce_debug_payload: bool = Field(default=True)

    @field_validator('credentials')
    @classmethod
    def validate_provider_names(cls, v):
        unknown = set(v) - set(PROVIDER_ENV_PREFIXES)
        if unknown:
            raise ValueError(f"Unknown providers in credentials: {sorted(unknown)}")
        return v

    def credentials_for(self, provider: str) -> ProviderCredentials:
        """Credentials for a provider; unset providers get empty strings."""
        return self.credentials.get(provider, ProviderCredentials())

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ProxySettings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from, defaults to os.environ

        Returns:
            ProxySettings: Populated settings
        """
        env = os.environ if environ is None else environ

        credentials = {
            provider: ProviderCredentials(
                client_id=env.get(f"{prefix}_CLIENT_ID", ""),
                client_secret=env.get(f"{prefix}_CLIENT_SECRET", ""),
            )
            for provider, prefix in PROVIDER_ENV_PREFIXES.items()
        }

        return cls(
            credentials=credentials,
            allowed_origins=env.get("ALLOWED_ORIGINS", ""),
            host=env.get("PROXY_HOST", DEFAULT_HOST),
            port=int(env.get("PROXY_PORT", DEFAULT_PORT)),
            pkce_debug_payload=env.get("PKCE_DEBUG_PAYLOAD", "true").strip().lower() in _TRUTHY,
        )
