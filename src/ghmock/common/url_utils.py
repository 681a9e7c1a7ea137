"""
ghmock URL Utilities

Splitting a target host and re-pointing URLs at it.
"""

from urllib.parse import urlparse, urlunparse
from typing import Tuple


def split_host(host: str) -> Tuple[str, str]:
    """
    Split a ``scheme://authority`` host into its two parts.

    Args:
        host: Target host, e.g. ``http://127.0.0.1:8080``

    Returns:
        Tuple of (scheme, authority)

    Raises:
        ValueError: If the host has no scheme separator
    """
    scheme, sep, authority = host.partition('://')
    if not sep or not scheme or not authority:
        raise ValueError(f"host must look like scheme://authority, got {host!r}")
    return scheme, authority.rstrip('/')


def rewrite_url(url: str, host: str) -> str:
    """
    Replace scheme and authority of ``url`` while preserving path and query.

    Args:
        url: Original URL
        host: Target host (``scheme://authority``)

    Returns:
        URL pointing at the target host
    """
    scheme, authority = split_host(host)
    parsed = urlparse(url)

    return urlunparse((
        scheme,
        authority,
        parsed.path,
        parsed.params,
        parsed.query,
        parsed.fragment
    ))
