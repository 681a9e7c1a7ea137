"""
ghmock Backend Options

Functions that register one endpoint on the router being built.

Example:
    client = new_mocked_http_client(
        with_request_match(
            GET_USERS_BY_USERNAME,
            [{'name': 'foobar'}],
        ),
        with_request_match_pages(
            GET_ORGS_REPOS_BY_ORG,
            [[{'name': 'repo-A'}], [{'name': 'repo-B'}]],
        ),
        with_request_match_handler(
            GET_ORGS_PROJECTS_BY_ORG,
            lambda request: write_error(500, "projects failed"),
        ),
    )
"""

from typing import Any, Callable, Iterable

from ..common import to_body
from .handlers import FIFOResponseHandler, PaginatedResponseHandler
from .router import EndpointPattern, EndpointRouter, Handler

MockBackendOption = Callable[[EndpointRouter], None]


def with_request_match(endpoint: EndpointPattern, responses: Iterable[Any]) -> MockBackendOption:
    """
    Serve ``responses`` in order, one per request.

    Each response may be raw bytes, a str, or any JSON serializable object.
    """
    bodies = [to_body(response) for response in responses]

    def option(router: EndpointRouter):
        router.register(endpoint, FIFOResponseHandler(bodies))

    return option


def with_request_match_pages(endpoint: EndpointPattern, pages: Iterable[Any]) -> MockBackendOption:
    """Serve ``pages`` by the ``page`` query parameter with ``Link`` headers."""
    bodies = [to_body(page) for page in pages]

    def option(router: EndpointRouter):
        router.register(endpoint, PaginatedResponseHandler(bodies))

    return option


def with_request_match_handler(endpoint: EndpointPattern, handler: Handler) -> MockBackendOption:
    """Install an arbitrary request handler as-is."""

    def option(router: EndpointRouter):
        router.register(endpoint, handler)

    return option
