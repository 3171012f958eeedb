"""CORS headers attached to every proxy response"""

from typing import Dict, Optional


ALLOWED_HEADERS = (
    "X-CSRF-Token, X-Requested-With, Accept, Accept-Version, Content-Length, "
    "Content-MD5, Content-Type, Date, X-Api-Version, Authorization"
)

CHAT_METHODS = "GET,OPTIONS,PATCH,DELETE,POST,PUT"
MODELS_METHODS = "GET,OPTIONS"


def cors_headers(allow_methods: Optional[str] = None) -> Dict[str, str]:
    """
    Build CORS headers for an endpoint

    Args:
        allow_methods: Methods to advertise; when omitted only the
            origin header is set

    Returns:
        Header name -> value
    """
    headers = {"Access-Control-Allow-Origin": "*"}
    if allow_methods:
        headers["Access-Control-Allow-Credentials"] = "true"
        headers["Access-Control-Allow-Methods"] = allow_methods
        headers["Access-Control-Allow-Headers"] = ALLOWED_HEADERS
    return headers
