"""
CORS policy for token proxy responses.

Every response, including errors and preflights, carries these headers.
"""

from typing import Dict, List


ALLOW_METHODS = "POST, OPTIONS"
ALLOW_HEADERS = "Content-Type"
MAX_AGE = "86400"
WILDCARD = "*"


def resolve_allowed_origin(origin: str, allowed: List[str]) -> str:
    """
    Pick the Access-Control-Allow-Origin value for a request.

    The request origin is echoed when it is allow-listed or the list holds
    the wildcard. Otherwise the first configured origin is returned, even
    though it will not match the caller.
    """
    if origin in allowed or WILDCARD in allowed:
        return origin
    return allowed[0] if allowed else ""


def cors_headers(origin: str, allowed_origins: str) -> Dict[str, str]:
    """
    Compute CORS response headers.

    Args:
        origin: Request Origin header, empty string when absent
        allowed_origins: Comma-separated allow-list

    Returns:
        Dict[str, str]: Header name -> value
    """
    allowed = [entry.strip() for entry in allowed_origins.split(",")]

    return {
        "Access-Control-Allow-Origin": resolve_allowed_origin(origin, allowed),
        "Access-Control-Allow-Methods": ALLOW_METHODS,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
        "Access-Control-Max-Age": MAX_AGE,
    }
