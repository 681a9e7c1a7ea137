"""
Tests for ghmock Endpoint Router

Tests endpoint registration and dispatch including:
- Endpoint descriptors
- Structural path template matching
- Last-registration-wins replacement
- First-registered-wins resolution of overlapping templates
- GitHub-style not-found fallback
"""

import pytest
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.testclient import TestClient

from ghmock.mock.router import EndpointPattern, EndpointRouter
from ghmock.mock.server import MockBackend
from ghmock.mock.options import with_request_match, with_request_match_handler


def text_handler(text):
    """Handler returning a fixed plain text body."""
    return lambda request: PlainTextResponse(text)


@pytest.fixture
def router():
    """Router with a couple of GitHub endpoints."""
    router = EndpointRouter()
    router.register(EndpointPattern("/users/{username}", "GET"), text_handler("user"))
    router.register(EndpointPattern("/repos/{owner}/{repo}", "GET"), text_handler("repo"))
    router.register(EndpointPattern("/repos/{owner}/{repo}", "PATCH"), text_handler("patched"))
    return router


class TestEndpointPattern:
    """Test EndpointPattern dataclass."""

    def test_method_is_upper_cased(self):
        """Test lower-case methods are normalized."""
        endpoint = EndpointPattern("/users/{username}", "get")

        assert endpoint.method == "GET"

    def test_identity_is_pattern_and_method(self):
        """Test equal pairs are the same endpoint."""
        assert EndpointPattern("/user", "GET") == EndpointPattern("/user", "get")
        assert EndpointPattern("/user", "GET") != EndpointPattern("/user", "PATCH")
        assert len({EndpointPattern("/user", "GET"), EndpointPattern("/user", "GET")}) == 1

    def test_immutable(self):
        """Test descriptors cannot be changed after creation."""
        endpoint = EndpointPattern("/user", "GET")

        with pytest.raises(AttributeError):
            endpoint.pattern = "/users"


class TestEndpointRouterMatch:
    """Test EndpointRouter.match."""

    def test_match_named_segments(self, router):
        """Test templates match structurally and extract parameters."""
        found = router.match("GET", "/repos/octocat/hello-world")

        assert found is not None
        handler, params = found
        assert params == {'owner': 'octocat', 'repo': 'hello-world'}

    def test_method_must_match_exactly(self, router):
        """Test the same path with another method does not match."""
        assert router.match("DELETE", "/repos/octocat/hello-world") is None

    def test_method_case_insensitive_lookup(self, router):
        """Test lookups normalize the method."""
        assert router.match("patch", "/repos/octocat/hello-world") is not None

    def test_segment_does_not_span_slashes(self, router):
        """Test a named segment matches exactly one path segment."""
        assert router.match("GET", "/users/octocat/orgs") is None
        assert router.match("GET", "/users/") is None

    def test_literal_template_is_not_raw_string_equality(self, router):
        """Test template text itself is not a concrete path match."""
        assert router.match("GET", "/users/{username}") is not None
        assert router.match("GET", "/users") is None

    def test_path_convertor(self):
        """Test {name:path} segments span slashes."""
        router = EndpointRouter()
        router.register(
            EndpointPattern("/repos/{owner}/{repo}/contents/{path:path}", "GET"),
            text_handler("content")
        )

        _, params = router.match("GET", "/repos/o/r/contents/docs/README.md")

        assert params['path'] == "docs/README.md"

    def test_endpoints_in_registration_order(self, router):
        """Test registered endpoints are listed in order."""
        assert [e.method for e in router.endpoints] == ["GET", "GET", "PATCH"]
        assert len(router) == 3


class TestEndpointRouterRegistration:
    """Test duplicate and overlapping registrations."""

    def test_last_registration_wins(self):
        """Test re-registering an endpoint replaces its handler."""
        endpoint = EndpointPattern("/user", "GET")
        first = text_handler("first")
        second = text_handler("second")

        router = EndpointRouter()
        router.register(endpoint, first)
        router.register(endpoint, second)

        handler, _ = router.match("GET", "/user")
        assert handler is second
        assert len(router) == 1

    def test_first_registered_wins_on_overlap(self):
        """Test overlapping templates resolve to the earliest registration."""
        specific = text_handler("latest release")
        generic = text_handler("release by id")

        router = EndpointRouter()
        router.register(EndpointPattern("/repos/{owner}/{repo}/releases/latest", "GET"), specific)
        router.register(EndpointPattern("/repos/{owner}/{repo}/releases/{release_id}", "GET"), generic)

        handler, _ = router.match("GET", "/repos/o/r/releases/latest")
        assert handler is specific

        handler, params = router.match("GET", "/repos/o/r/releases/42")
        assert handler is generic
        assert params == {'owner': 'o', 'repo': 'r', 'release_id': '42'}

    def test_first_registered_wins_regardless_of_specificity(self):
        """Test a generic template registered first shadows a specific one."""
        generic = text_handler("generic")
        specific = text_handler("specific")

        router = EndpointRouter()
        router.register(EndpointPattern("/repos/{owner}/{repo}/releases/{release_id}", "GET"), generic)
        router.register(EndpointPattern("/repos/{owner}/{repo}/releases/latest", "GET"), specific)

        handler, _ = router.match("GET", "/repos/o/r/releases/latest")
        assert handler is generic

    def test_replacement_keeps_position(self):
        """Test replacing a handler does not change overlap precedence."""
        generic_endpoint = EndpointPattern("/users/{username}", "GET")
        router = EndpointRouter()
        router.register(generic_endpoint, text_handler("generic"))
        router.register(EndpointPattern("/users/octocat", "GET"), text_handler("octocat"))

        replacement = text_handler("replacement")
        router.register(generic_endpoint, replacement)

        handler, _ = router.match("GET", "/users/octocat")
        assert handler is replacement


class TestEndpointRouterDispatch:
    """Test dispatch through the mock server app."""

    def test_dispatch_to_matching_handler(self):
        """Test a matching request is served by its handler."""
        backend = MockBackend(
            with_request_match(EndpointPattern("/users/{username}", "GET"), [{'login': 'octocat'}])
        )
        client = TestClient(backend.app)

        response = client.get("/users/octocat")

        assert response.status_code == 200
        assert response.json() == {'login': 'octocat'}

    def test_not_found_names_path(self):
        """Test unmatched requests get a 404 error envelope."""
        backend = MockBackend()
        client = TestClient(backend.app)

        response = client.get("/orgs/foobar/repos", params={'page': 2})

        assert response.status_code == 404
        assert response.json() == {'message': "mock response not found for /orgs/foobar/repos"}

    def test_not_found_for_wrong_method(self):
        """Test a registered path with another method is not found."""
        backend = MockBackend(
            with_request_match(EndpointPattern("/user", "GET"), [{'login': 'octocat'}])
        )
        client = TestClient(backend.app)

        response = client.post("/user", json={})

        assert response.status_code == 404
        assert response.json()['message'] == "mock response not found for /user"

    def test_not_found_for_unusual_method(self):
        """Test verbs outside the common set still reach the router."""
        backend = MockBackend()
        client = TestClient(backend.app)

        response = client.request("TRACE", "/users/octocat")

        assert response.status_code == 404
        assert response.json() == {'message': "mock response not found for /users/octocat"}

    def test_dispatch_custom_method(self):
        """Test an endpoint registered with a non-standard verb is served."""
        backend = MockBackend(
            with_request_match(EndpointPattern("/repos/{owner}/{repo}/contents", "PROPFIND"), [b'ok'])
        )
        client = TestClient(backend.app)

        response = client.request("PROPFIND", "/repos/octocat/hello-world/contents")

        assert response.status_code == 200
        assert response.content == b'ok'

    def test_path_params_exposed_to_handler(self):
        """Test handlers see the matched template parameters."""
        backend = MockBackend(
            with_request_match_handler(
                EndpointPattern("/repos/{owner}/{repo}", "GET"),
                lambda request: JSONResponse(dict(request.path_params))
            )
        )
        client = TestClient(backend.app)

        response = client.get("/repos/octocat/hello-world")

        assert response.json() == {'owner': 'octocat', 'repo': 'hello-world'}

    def test_async_handler(self):
        """Test coroutine handlers are awaited."""
        async def echo_title(request):
            payload = await request.json()
            return JSONResponse({'title': payload['title'], 'number': 1}, status_code=201)

        backend = MockBackend(
            with_request_match_handler(
                EndpointPattern("/repos/{owner}/{repo}/issues", "POST"),
                echo_title
            )
        )
        client = TestClient(backend.app)

        response = client.post("/repos/o/r/issues", json={'title': 'Bug'})

        assert response.status_code == 201
        assert response.json() == {'title': 'Bug', 'number': 1}

    def test_custom_not_found_handler(self):
        """Test the fallback can be replaced on the router."""
        backend = MockBackend()
        backend.router.not_found_handler = lambda request: PlainTextResponse("nope", status_code=410)
        client = TestClient(backend.app)

        response = client.get("/anything")

        assert response.status_code == 410
        assert response.text == "nope"
