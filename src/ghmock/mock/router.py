"""
ghmock Endpoint Router

Maps (method, path template) pairs to response handlers.

Features:
- Structural path template matching (``/repos/{owner}/{repo}``)
- Last registration wins for the same endpoint
- First registered endpoint wins when two templates match one path
- GitHub-style 404 fallback for unmatched requests
"""

import inspect
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Union

from fastapi import Request, Response
from starlette.convertors import Convertor
from starlette.routing import compile_path

from .handlers import write_error, get_handler_name

logger = logging.getLogger("ghmock.mock")

Handler = Callable[[Request], Union[Response, Awaitable[Response]]]


@dataclass(frozen=True)
class EndpointPattern:
    """
    One GitHub API operation.

    Example:
        EndpointPattern("/repos/{owner}/{repo}/actions/artifacts", "GET")
    """

    pattern: str  # eg. "/repos/{owner}/{repo}/actions/artifacts"
    method: str  # "GET", "POST", "PATCH", etc

    def __post_init__(self):
        object.__setattr__(self, 'method', self.method.upper())


@dataclass
class _Route:
    endpoint: EndpointPattern
    handler: Handler
    regex: re.Pattern = field(repr=False)
    convertors: Dict[str, Convertor] = field(repr=False)


def not_found(request: Request) -> Response:
    """Default fallback naming the unmatched path."""
    return write_error(404, f"mock response not found for {request.url.path}")


class EndpointRouter:
    """
    Dispatch requests to the handler registered for their endpoint.

    Registering the same ``EndpointPattern`` twice replaces the first
    handler. When two different patterns with the same method both match a
    concrete path, the one registered first is used.

    Example:
        router = EndpointRouter()
        router.register(EndpointPattern("/users/{username}", "GET"), handler)

        found = router.match("GET", "/users/octocat")
        if found:
            handler, params = found  # params == {'username': 'octocat'}
    """

    def __init__(self, not_found_handler: Optional[Handler] = None):
        self.not_found_handler = not_found_handler or not_found
        self._routes: Dict[EndpointPattern, _Route] = {}

    def register(self, endpoint: EndpointPattern, handler: Handler):
        """Bind ``handler`` to ``endpoint``, replacing any earlier binding."""
        regex, _, convertors = compile_path(endpoint.pattern)

        if endpoint in self._routes:
            logger.debug(f"Replacing handler for {endpoint.method} {endpoint.pattern}")

        # assigning an existing key keeps its original position
        self._routes[endpoint] = _Route(endpoint, handler, regex, convertors)

    @property
    def endpoints(self) -> List[EndpointPattern]:
        """Registered endpoints in registration order."""
        return list(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def match(self, method: str, path: str) -> Optional[Tuple[Handler, Dict[str, Any]]]:
        """
        Find the handler for a concrete request.

        Args:
            method: HTTP method
            path: Decoded request path, without query string

        Returns:
            Tuple of (handler, path parameters), or None when nothing matches
        """
        method = method.upper()

        for route in self._routes.values():
            if route.endpoint.method != method:
                continue

            matched = route.regex.match(path)
            if matched is None:
                continue

            params = {
                key: route.convertors[key].convert(value)
                for key, value in matched.groupdict().items()
            }
            return route.handler, params

        return None

    async def dispatch(self, request: Request) -> Response:
        """
        Run the handler matching ``request`` or the not-found fallback.

        Path parameters of the matched template are exposed to the handler
        as ``request.path_params``.
        """
        method = request.method
        path = request.url.path

        found = self.match(method, path)
        if found is None:
            logger.warning(f"No mock registered for {method} {path}")
            handler, params = self.not_found_handler, {}
        else:
            handler, params = found
            logger.debug(f"Dispatching {method} {path} to {get_handler_name(handler)}")

        request.scope['path_params'] = params

        response = handler(request)
        if inspect.isawaitable(response):
            response = await response
        return response
