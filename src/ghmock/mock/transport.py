"""
ghmock Host-Enforcing Transports

Send every request to the mock server, whatever host the client was
configured with. The client keeps building its requests exactly as it would
against https://api.github.com; only the destination changes.
"""

from typing import Optional

import httpx
import requests
from requests.adapters import HTTPAdapter

from ..common import split_host, rewrite_url


def _enforce_host(request: httpx.Request, host: str):
    scheme, authority = split_host(host)
    request.url = request.url.copy_with(scheme=scheme, netloc=authority.encode('ascii'))
    request.headers['Host'] = authority


class EnforceHostTransport(httpx.BaseTransport):
    """
    Rewrite the scheme and authority of every request to ``host``.

    Responses and errors of the upstream transport are returned unchanged.

    Example:
        transport = EnforceHostTransport('http://127.0.0.1:8080', httpx.HTTPTransport())
        client = httpx.Client(transport=transport, base_url='https://api.github.com')
    """

    def __init__(self, host: str, upstream: Optional[httpx.BaseTransport] = None):
        split_host(host)  # fail early on a malformed host
        self.host = host
        self.upstream = upstream or httpx.HTTPTransport()

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        _enforce_host(request, self.host)
        return self.upstream.handle_request(request)

    def close(self):
        self.upstream.close()


class AsyncEnforceHostTransport(httpx.AsyncBaseTransport):
    """Async counterpart of ``EnforceHostTransport`` for ``httpx.AsyncClient``."""

    def __init__(self, host: str, upstream: Optional[httpx.AsyncBaseTransport] = None):
        split_host(host)
        self.host = host
        self.upstream = upstream or httpx.AsyncHTTPTransport()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        _enforce_host(request, self.host)
        return await self.upstream.handle_async_request(request)

    async def aclose(self):
        await self.upstream.aclose()


class EnforceHostAdapter(HTTPAdapter):
    """
    ``requests`` adapter that rewrites every prepared request to ``host``.

    Example:
        session = requests.Session()
        adapter = EnforceHostAdapter('http://127.0.0.1:8080')
        session.mount('http://', adapter)
        session.mount('https://', adapter)
    """

    def __init__(self, host: str, **kwargs):
        split_host(host)
        self.host = host
        super().__init__(**kwargs)

    def send(self, request: requests.PreparedRequest, **kwargs) -> requests.Response:
        _, authority = split_host(self.host)
        request.url = rewrite_url(request.url, self.host)
        request.headers['Host'] = authority
        return super().send(request, **kwargs)
