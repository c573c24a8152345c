"""HTTP infrastructure package.

Thin ``requests`` wrapper shared by the asset uploader and the default
remote target implementation.
"""

from .client import HTTPClient, HTTPResult, SnapdiffHTTPClient, join_url
from .user_agent import format_user_agent, resolve_user_agent

__all__ = [
    "HTTPClient",
    "HTTPResult",
    "SnapdiffHTTPClient",
    "format_user_agent",
    "join_url",
    "resolve_user_agent",
]
