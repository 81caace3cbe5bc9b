"""HTTP client utilities with a configurable user agent."""

from typing import Optional

import requests

# Identifier historically sent to Repology. Repology asks API clients to
# identify themselves, so callers may override it with their own value.
DEFAULT_USER_AGENT = "vrmiguel"


def get_default_headers(user_agent: Optional[str] = None, accept: Optional[str] = "application/json") -> dict:
    """
    Get default HTTP headers with user agent.

    Args:
        user_agent: User-Agent value, defaults to DEFAULT_USER_AGENT
        accept: Optional Accept header value

    Returns:
        Dictionary of HTTP headers
    """
    headers = {"User-Agent": user_agent or DEFAULT_USER_AGENT}
    if accept:
        headers["Accept"] = accept
    return headers


def create_session(user_agent: Optional[str] = None) -> requests.Session:
    """Create a requests.Session carrying the default headers."""
    session = requests.Session()
    session.headers.update(get_default_headers(user_agent))
    return session
