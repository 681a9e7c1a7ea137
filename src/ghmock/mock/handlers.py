"""
ghmock Response Handlers

Stateful handlers that replay canned GitHub API responses.

Features:
- FIFO replay of a fixed list of bodies
- Page-number driven replay with a synthesized ``Link`` header
- GitHub-style error envelopes

A handler is any callable taking a ``Request`` and returning a ``Response``
(or an awaitable resolving to one).
"""

import logging
import re
from typing import List, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from .errors import MocksExhaustedError, InvalidPageError

logger = logging.getLogger("ghmock.mock")

PAGE_NUMBER = re.compile(r"[+-]?[0-9]+")


def write_error(status_code: int, message: str) -> Response:
    """
    Build a response carrying GitHub's error envelope.

    Args:
        status_code: HTTP status code
        message: Human readable error message

    Returns:
        JSON response with body ``{"message": message}``

    Example:
        def broken(request):
            return write_error(500, "github went belly up or something")
    """
    return JSONResponse(content={'message': message}, status_code=status_code)


class FIFOResponseHandler:
    """
    Serve a fixed list of bodies in order, one per request.

    An empty list means the endpoint exists but has nothing to say: every
    request gets an empty 200. Once a non-empty list is used up, the next
    request raises ``MocksExhaustedError``.

    The cursor is advanced without locking, so a sequenced endpoint must not
    receive more than one request at a time.

    Example:
        handler = FIFOResponseHandler([b'{"id": 1}', b'{"id": 2}'])
    """

    def __init__(self, responses: List[bytes]):
        self.responses = list(responses)
        self.current_index = 0

    def __call__(self, request: Request) -> Response:
        if not self.responses:
            return Response()

        if self.current_index >= len(self.responses):
            raise MocksExhaustedError(request.url.path, len(self.responses))

        body = self.responses[self.current_index]
        self.current_index += 1

        logger.debug(
            f"Serving response {self.current_index}/{len(self.responses)} "
            f"for {request.url.path}"
        )
        return Response(content=body)


class PaginatedResponseHandler:
    """
    Serve one body per page and honor GitHub's pagination headers.

    The page is taken from the ``page`` query parameter on every request, so
    the handler keeps no state between requests. Each response carries a
    ``Link`` header such as::

        <?page=1>; rel="first", <?page=3>; rel="last", <?page=3>; rel="next", <?page=1>; rel="prev"

    Only the page number is encoded in the links; that is all a client needs
    to keep paginating.

    See: https://docs.github.com/en/rest/guides/traversing-with-pagination
    """

    def __init__(self, response_pages: List[bytes]):
        self.response_pages = list(response_pages)

    def get_current_page(self, request: Request) -> int:
        """
        Read the requested page number, defaulting to 1.

        Raises:
            InvalidPageError: If ``page`` is present but not an integer
        """
        raw_page = request.query_params.get('page', '')
        if raw_page == '':
            return 1

        # int() alone would also accept "1_0" and " 2"
        if not PAGE_NUMBER.fullmatch(raw_page):
            raise InvalidPageError(raw_page)

        return int(raw_page)

    def generate_link_header(self, current_page: int) -> str:
        """Build the ``Link`` header value for ``current_page``."""
        last_page = len(self.response_pages)

        links = [
            '<?page=1>; rel="first"',
            f'<?page={last_page}>; rel="last"',
        ]

        if current_page < last_page:
            links.append(f'<?page={current_page + 1}>; rel="next"')

        if current_page > 1:
            links.append(f'<?page={current_page - 1}>; rel="prev"')

        return ', '.join(links)

    def __call__(self, request: Request) -> Response:
        current_page = self.get_current_page(request)
        headers = {'Link': self.generate_link_header(current_page)}

        if not self.response_pages:
            return Response(headers=headers)

        if not 1 <= current_page <= len(self.response_pages):
            raise InvalidPageError(str(current_page))

        logger.debug(
            f"Serving page {current_page}/{len(self.response_pages)} "
            f"for {request.url.path}"
        )
        return Response(
            content=self.response_pages[current_page - 1],
            headers=headers
        )


def get_handler_name(handler: Optional[object]) -> str:
    """Describe a handler for log messages."""
    if handler is None:
        return 'none'
    return getattr(handler, '__name__', type(handler).__name__)
