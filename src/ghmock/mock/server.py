"""
ghmock Mock Server

FastAPI-based mock of the GitHub REST API, served by uvicorn on a loopback
port, plus factories returning HTTP clients wired to it.

Features:
- Real HTTP server per backend, no shared state between backends
- Endpoint routing by method and path template
- FIFO, paginated and custom response handlers
- httpx (sync and async) and requests clients redirected to the mock
- Test-configuration defects re-raised in the calling thread
"""

from __future__ import annotations  # Enable forward references for type hints

import logging
import socket
import threading
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx
import requests
import uvicorn
from fastapi import FastAPI, Request, Response

from .errors import MockDefectError, MockServerError
from .options import MockBackendOption
from .router import EndpointRouter
from .transport import AsyncEnforceHostTransport, EnforceHostAdapter, EnforceHostTransport

DEFAULT_BASE_URL = "https://api.github.com"

@dataclass
class MockConfig:
    """Configuration for the mock server."""

    host: str = "127.0.0.1"
    port: int = 0  # 0 picks a free port
    log_level: str = "warning"  # uvicorn only; ghmock.mock keeps the caller's level
    access_log: bool = False

    startup_timeout: float = 5.0  # seconds
    shutdown_timeout: float = 5.0  # seconds


class MockBackend:
    """
    A mocked GitHub backend bound to a real loopback socket.

    Options are applied to a fresh router in the order given. The backend
    starts listening on ``start()`` and releases its socket on ``close()``.

    Handlers raising ``MockDefectError`` (for example a sequenced endpoint
    asked for more responses than it has) are recorded; ``raise_for_defects()``
    re-raises them and ``close()`` re-raises any that nobody reported.

    Example:
        with MockBackend(with_request_match(GET_USERS_BY_USERNAME, [user])) as backend:
            httpx.get(f"{backend.url}/users/octocat")
    """

    def __init__(self, *options: MockBackendOption, config: Optional[MockConfig] = None):
        self.config = config or MockConfig()
        self.defects: List[MockDefectError] = []
        self._defects_lock = threading.Lock()

        self.logger = logging.getLogger("ghmock.mock")

        self.router = EndpointRouter()
        for option in options:
            option(self.router)

        self.app = self._create_app()

        self._socket: Optional[socket.socket] = None
        self._server: Optional[uvicorn.Server] = None
        self._thread: Optional[threading.Thread] = None

    def _create_app(self) -> FastAPI:
        """Create the FastAPI application with a single catch-all route."""
        app = FastAPI(
            title="ghmock",
            description="Mocked GitHub REST API",
            docs_url=None,
            redoc_url=None,
            openapi_url=None
        )

        async def mock_request(request: Request) -> Response:
            """Dispatch every request through the endpoint router."""
            return await self._handle_request(request)

        # methods=None accepts every verb, so unknown ones still reach the router
        app.add_route("/{path:path}", mock_request, methods=None, include_in_schema=False)

        return app

    async def _handle_request(self, request: Request) -> Response:
        try:
            return await self.router.dispatch(request)
        except MockDefectError as exc:
            with self._defects_lock:
                self.defects.append(exc)
            self.logger.critical(f"Mock defect on {request.method} {request.url.path}: {exc}")
            raise

    @property
    def url(self) -> str:
        """Base URL of the running server, e.g. ``http://127.0.0.1:54321``."""
        if self._socket is None:
            raise MockServerError("mock server is not running")
        host, port = self._socket.getsockname()[:2]
        return f"http://{host}:{port}"

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> MockBackend:
        """
        Bind the socket and serve the app from a daemon thread.

        Returns:
            The backend itself, once it accepts connections

        Raises:
            MockServerError: If the server does not come up in time
        """
        if self._socket is not None:
            raise MockServerError("mock server already started")

        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((self.config.host, self.config.port))
        except OSError as e:
            sock.close()
            raise MockServerError(
                f"cannot bind {self.config.host}:{self.config.port}: {e}"
            ) from e
        self._socket = sock

        server_config = uvicorn.Config(
            self.app,
            log_config=None,
            log_level=self.config.log_level,
            access_log=self.config.access_log,
            lifespan="off"
        )
        self._server = uvicorn.Server(server_config)
        self._thread = threading.Thread(
            target=self._server.run,
            kwargs={'sockets': [sock]},
            name=f"ghmock-{sock.getsockname()[1]}",
            daemon=True
        )
        self._thread.start()

        deadline = time.monotonic() + self.config.startup_timeout
        while not self._server.started:
            if not self._thread.is_alive():
                self._release()
                raise MockServerError("mock server exited during startup")
            if time.monotonic() > deadline:
                self.close()
                raise MockServerError(
                    f"mock server did not start within {self.config.startup_timeout}s"
                )
            time.sleep(0.01)

        self.logger.info(f"Mock server listening on {self.url} ({len(self.router)} endpoints)")
        return self

    def raise_for_defects(self):
        """Re-raise the first recorded defect, forgetting all of them."""
        with self._defects_lock:
            if not self.defects:
                return
            defect = self.defects[0]
            self.defects.clear()
        raise defect

    def close(self):
        """
        Stop the server and release the listening socket.

        Raises:
            MockDefectError: If a defect was recorded and never reported
        """
        if self._server is not None:
            url = self.url
            self._server.should_exit = True
            if self._thread is not None:
                self._thread.join(timeout=self.config.shutdown_timeout)
                if self._thread.is_alive():
                    self.logger.warning(f"Mock server on {url} did not stop in time")
            self.logger.info(f"Mock server on {url} stopped")
        self._release()
        self.raise_for_defects()

    def _release(self):
        if self._socket is not None:
            self._socket.close()
        self._socket = None
        self._server = None
        self._thread = None

    def __enter__(self) -> MockBackend:
        if self._socket is None:
            self.start()
        return self

    def __exit__(self, *exc_info):
        self.close()


class MockedHTTPClient(httpx.Client):
    """``httpx.Client`` talking to a ``MockBackend``; closing it stops the backend."""

    def __init__(self, backend: MockBackend, **kwargs):
        self.backend = backend
        super().__init__(**kwargs)

    def close(self):
        try:
            super().close()
        finally:
            self.backend.close()

    def __exit__(self, *exc_info):
        try:
            super().__exit__(*exc_info)
        finally:
            self.backend.close()


class MockedAsyncHTTPClient(httpx.AsyncClient):
    """``httpx.AsyncClient`` talking to a ``MockBackend``."""

    def __init__(self, backend: MockBackend, **kwargs):
        self.backend = backend
        super().__init__(**kwargs)

    async def aclose(self):
        try:
            await super().aclose()
        finally:
            self.backend.close()

    async def __aexit__(self, *exc_info):
        try:
            await super().__aexit__(*exc_info)
        finally:
            self.backend.close()


class MockedSession(requests.Session):
    """``requests.Session`` talking to a ``MockBackend``."""

    def __init__(self, backend: MockBackend):
        super().__init__()
        self.backend = backend

    def close(self):
        try:
            super().close()
        finally:
            self.backend.close()


def _with_defect_hook(event_hooks: Optional[Dict[str, Any]], hook) -> Dict[str, List[Any]]:
    hooks = {name: list(funcs) for name, funcs in (event_hooks or {}).items()}
    hooks['response'] = [hook] + hooks.get('response', [])
    return hooks


def new_mocked_http_client(
    *options: MockBackendOption,
    config: Optional[MockConfig] = None,
    **client_kwargs
) -> MockedHTTPClient:
    """
    Start a mocked GitHub backend and return an httpx client pointed at it.

    The client is configured for https://api.github.com by default; every
    request is rewritten to the mock server by ``EnforceHostTransport``.

    Args:
        *options: Backend options, applied in order
        config: Optional MockConfig for the server
        **client_kwargs: Passed to ``httpx.Client``

    Returns:
        MockedHTTPClient; closing it stops the mock server

    Example:
        client = new_mocked_http_client(
            with_request_match(
                GET_USERS_BY_USERNAME,
                [{'name': 'foobar'}],
            ),
        )
        user = client.get('/users/someUser').json()
    """
    backend = MockBackend(*options, config=config).start()

    def raise_for_defects(response: httpx.Response):
        backend.raise_for_defects()

    try:
        client_kwargs.setdefault('base_url', DEFAULT_BASE_URL)
        event_hooks = _with_defect_hook(client_kwargs.pop('event_hooks', None), raise_for_defects)
        return MockedHTTPClient(
            backend,
            transport=EnforceHostTransport(backend.url, httpx.HTTPTransport()),
            event_hooks=event_hooks,
            **client_kwargs
        )
    except Exception:
        backend.close()
        raise


def new_mocked_async_client(
    *options: MockBackendOption,
    config: Optional[MockConfig] = None,
    **client_kwargs
) -> MockedAsyncHTTPClient:
    """Async variant of ``new_mocked_http_client``."""
    backend = MockBackend(*options, config=config).start()

    async def raise_for_defects(response: httpx.Response):
        backend.raise_for_defects()

    try:
        client_kwargs.setdefault('base_url', DEFAULT_BASE_URL)
        event_hooks = _with_defect_hook(client_kwargs.pop('event_hooks', None), raise_for_defects)
        return MockedAsyncHTTPClient(
            backend,
            transport=AsyncEnforceHostTransport(backend.url, httpx.AsyncHTTPTransport()),
            event_hooks=event_hooks,
            **client_kwargs
        )
    except Exception:
        backend.close()
        raise


def new_mocked_session(
    *options: MockBackendOption,
    config: Optional[MockConfig] = None
) -> MockedSession:
    """
    Start a mocked GitHub backend and return a requests session pointed at it.

    Example:
        session = new_mocked_session(with_request_match(GET_USERS_BY_USERNAME, [user]))
        session.get('https://api.github.com/users/octocat').json()
    """
    backend = MockBackend(*options, config=config).start()

    def raise_for_defects(response: requests.Response, *args, **kwargs):
        backend.raise_for_defects()

    session = MockedSession(backend)
    adapter = EnforceHostAdapter(backend.url)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.hooks['response'].append(raise_for_defects)
    return session
