"""
ghmock - mocked GitHub REST API backend for tests
"""

from .mock import (
    EndpointPattern,
    MockBackend,
    MockConfig,
    new_mocked_http_client,
    new_mocked_async_client,
    new_mocked_session,
    with_request_match,
    with_request_match_pages,
    with_request_match_handler,
    write_error
)
from .common import must_marshal

__all__ = [
    'EndpointPattern',
    'MockBackend',
    'MockConfig',
    'new_mocked_http_client',
    'new_mocked_async_client',
    'new_mocked_session',
    'with_request_match',
    'with_request_match_pages',
    'with_request_match_handler',
    'write_error',
    'must_marshal',
]

__version__ = '1.0.0'
