"""
ghmock Mock Server Module

Mocked GitHub REST API for network-free integration tests.

This module provides:
- FastAPI-based mock server on a real loopback socket
- Endpoint router with path templates
- FIFO, paginated and custom response handlers
- Host-enforcing transports for httpx and requests
"""

from .server import (
    MockBackend,
    MockConfig,
    MockedHTTPClient,
    MockedAsyncHTTPClient,
    MockedSession,
    new_mocked_http_client,
    new_mocked_async_client,
    new_mocked_session
)
from .router import EndpointPattern, EndpointRouter
from .handlers import FIFOResponseHandler, PaginatedResponseHandler, write_error
from .options import (
    MockBackendOption,
    with_request_match,
    with_request_match_pages,
    with_request_match_handler
)
from .transport import EnforceHostTransport, AsyncEnforceHostTransport, EnforceHostAdapter
from .loader import BackendDefinition, load_backend_options
from .errors import (
    MockError,
    MockDefectError,
    MocksExhaustedError,
    InvalidPageError,
    MockServerError,
    BackendFileError
)

__all__ = [
    # Server
    'MockBackend',
    'MockConfig',
    'MockedHTTPClient',
    'MockedAsyncHTTPClient',
    'MockedSession',
    'new_mocked_http_client',
    'new_mocked_async_client',
    'new_mocked_session',

    # Routing
    'EndpointPattern',
    'EndpointRouter',

    # Handlers
    'FIFOResponseHandler',
    'PaginatedResponseHandler',
    'write_error',

    # Options
    'MockBackendOption',
    'with_request_match',
    'with_request_match_pages',
    'with_request_match_handler',

    # Transports
    'EnforceHostTransport',
    'AsyncEnforceHostTransport',
    'EnforceHostAdapter',

    # Backend files
    'BackendDefinition',
    'load_backend_options',

    # Errors
    'MockError',
    'MockDefectError',
    'MocksExhaustedError',
    'InvalidPageError',
    'MockServerError',
    'BackendFileError',
]
