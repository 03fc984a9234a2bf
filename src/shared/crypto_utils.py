"""
HTTP Basic client authentication helpers.

Some providers expect the client identifier and secret in an
`Authorization: Basic` header (RFC 6749 section 2.3.1) rather than as
form fields. These helpers build and parse that header value.
"""

import base64
import binascii
from typing import Tuple


def encode_basic_credentials(client_id: str, client_secret: str) -> str:
    """
    Build the value of an `Authorization` header for HTTP Basic auth.

    Args:
        client_id: OAuth client identifier
        client_secret: OAuth client secret

    Returns:
        str: "Basic <base64(client_id:client_secret)>"

    Example:
        encode_basic_credentials("id", "secret")
        # Returns: "Basic aWQ6c2VjcmV0"
    """
    raw = f"{client_id}:{client_secret}".encode('utf-8')
    return f"Basic {base64.b64encode(raw).decode('ascii')}"


def decode_basic_credentials(header_value: str) -> Tuple[str, str]:
    """
    Parse an `Authorization: Basic` header value back into its parts.

    Raises:
        ValueError: If the value is not a well-formed Basic credential
    """
    scheme, _, encoded = header_value.partition(" ")
    if scheme != "Basic" or not encoded:
        raise ValueError("Authorization header is not Basic credentials")

    try:
        decoded = base64.b64decode(encoded, validate=True).decode('utf-8')
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ValueError(f"Invalid Basic credentials encoding: {e}")

    client_id, separator, client_secret = decoded.partition(":")
    if not separator:
        raise ValueError("Basic credentials missing ':' separator")

    return client_id, client_secret
