"""
ghmock Errors

Exception hierarchy for the mock backend.

Simulated API errors are never exceptions: they are ordinary responses built
with ``write_error``. The classes below describe problems with the mock
itself.
"""


class MockError(Exception):
    """Base class for all ghmock errors."""


class MockDefectError(MockError):
    """
    A mismatch between the declared mock data and the requests a test made.

    These are never reported to the client as an API error. The backend
    records them and the factory-built clients re-raise them in the calling
    thread.
    """


class MocksExhaustedError(MockDefectError):
    """A sequenced endpoint received more requests than it has responses."""

    def __init__(self, path: str, available: int):
        self.path = path
        self.available = available
        super().__init__(
            f"no more mocks available for {path} "
            f"(all {available} configured responses were served)"
        )


class InvalidPageError(MockDefectError):
    """A paginated endpoint received a page it cannot serve."""

    def __init__(self, page: str):
        self.page = page
        super().__init__(f"invalid page: {page}")


class MockServerError(MockError):
    """The mock server could not be started."""


class BackendFileError(MockError):
    """A backend definition file is malformed."""
