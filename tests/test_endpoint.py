"""Tests for endpoints, environments and request building."""

import json
from datetime import datetime, timezone

import pytest
from apiwire import ApiEnvironment, Endpoint, HttpMethod, MissingBaseURLError, RawBody
from apiwire.models import build_request, build_url, resolve_base_url
from apiwire.models.request import HttpRequest

BASE_URL = "https://api.example.com"


class TestHttpMethod:
    """Tests for HttpMethod."""

    def test_wire_names(self):
        """Test that every method's wire name equals its name."""
        for method in HttpMethod:
            assert method.value == method.name
        assert [m.value for m in HttpMethod] == ["GET", "POST", "PUT", "DELETE", "PATCH"]


class TestEndpoint:
    """Tests for the Endpoint value type."""

    def test_defaults(self):
        """Test default query, body and auth requirement."""
        endpoint = Endpoint("/users", HttpMethod.GET)
        assert endpoint.query is None
        assert endpoint.body is None
        assert endpoint.requires_auth is False

    def test_is_immutable(self):
        """Test that endpoints cannot be mutated."""
        endpoint = Endpoint("/users", HttpMethod.GET)
        with pytest.raises(AttributeError):
            endpoint.path = "/other"  # type: ignore[misc]


class TestBuildUrl:
    """Tests for URL resolution."""

    def test_appends_path(self):
        """Test that the path is appended to the base URL."""
        assert build_url(BASE_URL, "/users") == "https://api.example.com/users"

    def test_single_slash_between_base_and_path(self):
        """Test that a trailing slash on the base does not double up."""
        assert build_url("https://api.example.com/v1/", "/users") == "https://api.example.com/v1/users"

    def test_base_path_preserved(self):
        """Test that a base URL path prefix is kept."""
        assert build_url("https://api.example.com/v2", "/posts/1") == "https://api.example.com/v2/posts/1"

    def test_query_attached(self):
        """Test that query pairs are attached in order."""
        url = build_url(BASE_URL, "/posts", [("_limit", "10"), ("_page", "2")])
        assert url == "https://api.example.com/posts?_limit=10&_page=2"

    def test_query_values_encoded(self):
        """Test that query values are percent-encoded."""
        url = build_url(BASE_URL, "/search", [("q", "a b&c")])
        assert url == "https://api.example.com/search?q=a%20b%26c"

    @pytest.mark.parametrize("query", [None, []])
    def test_no_query_string_without_items(self, query):
        """Test that absent or empty query produces no '?'."""
        url = build_url(BASE_URL, "/posts", query)
        assert url == "https://api.example.com/posts"
        assert "?" not in url


class TestBuildRequest:
    """Tests for request derivation."""

    def test_get_with_query(self):
        """Test the GET-with-query example."""
        endpoint = Endpoint("/posts", HttpMethod.GET, query=[("_limit", "10")])
        request = build_request(endpoint, BASE_URL)

        assert request.url == "https://api.example.com/posts?_limit=10"
        assert request.method == "GET"
        assert request.body is None
        assert request.header("Authorization") is None
        assert request.header("Content-Type") is None

    def test_post_with_body(self):
        """Test that a body is serialized and sets Content-Type."""
        endpoint = Endpoint(
            "/posts",
            HttpMethod.POST,
            body={"title": "a", "body": "b", "userId": 1},
            requires_auth=False,
        )
        request = build_request(endpoint, BASE_URL)

        assert request.method == "POST"
        assert request.header("Content-Type") == "application/json"
        assert json.loads(request.body) == {"title": "a", "body": "b", "userId": 1}
        assert request.header("Authorization") is None

    def test_empty_body_still_sent(self):
        """Test that an empty mapping is sent as {} with Content-Type."""
        request = build_request(Endpoint("/ping", HttpMethod.POST, body={}), BASE_URL)
        assert request.body == b"{}"
        assert request.header("Content-Type") == "application/json"

    def test_nested_values_and_dates(self):
        """Test nested JSON values and datetime encoding in bodies."""
        created = datetime(2024, 1, 1, 12, 34, 56, 789000, tzinfo=timezone.utc)
        endpoint = Endpoint(
            "/events",
            HttpMethod.PUT,
            body={"tags": ["a", "b"], "meta": {"n": None, "ok": True}, "at": created},
        )
        payload = json.loads(build_request(endpoint, BASE_URL).body)
        assert payload == {
            "tags": ["a", "b"],
            "meta": {"n": None, "ok": True},
            "at": "2024-01-01T12:34:56.789Z",
        }

    def test_raw_body_sent_verbatim(self):
        """Test the pre-serialized body escape hatch."""
        endpoint = Endpoint("/raw", HttpMethod.PATCH, body=RawBody(b'{"x":1}'))
        request = build_request(endpoint, BASE_URL)
        assert request.body == b'{"x":1}'
        assert request.header("content-type") == "application/json"

    def test_custom_endpoint_type(self):
        """Test that any object with the endpoint attributes works."""

        class DeleteUser:
            def __init__(self, user_id):
                self.path = f"/users/{user_id}"
                self.method = HttpMethod.DELETE
                self.query = None
                self.body = None
                self.requires_auth = True

        request = build_request(DeleteUser(99), BASE_URL)
        assert request.url == "https://api.example.com/users/99"
        assert request.method == "DELETE"


class TestHttpRequest:
    """Tests for HttpRequest header helpers."""

    def test_with_header_returns_copy(self):
        """Test that with_header leaves the original untouched."""
        original = HttpRequest(method="GET", url=BASE_URL, headers={"Accept": "text/plain"})
        updated = original.with_header("X-Trace", "1")

        assert original.header("X-Trace") is None
        assert updated.header("X-Trace") == "1"
        assert updated.header("Accept") == "text/plain"

    def test_with_header_replaces_case_insensitively(self):
        """Test that an existing header is replaced regardless of case."""
        request = HttpRequest(method="GET", url=BASE_URL, headers={"authorization": "old"})
        updated = request.with_header("Authorization", "new")
        assert dict(updated.headers) == {"Authorization": "new"}


class TestEnvironment:
    """Tests for ApiEnvironment and base URL resolution."""

    def test_stores_base_url(self):
        """Test that the base URL is resolved as given."""
        env = ApiEnvironment(base_url=BASE_URL)
        assert resolve_base_url(env) == BASE_URL

    def test_missing_base_url_is_fatal(self):
        """Test that a missing base URL raises the fatal config error."""
        with pytest.raises(MissingBaseURLError):
            resolve_base_url(ApiEnvironment())

    def test_invalid_base_url_is_fatal(self):
        """Test that a base URL without scheme/host is rejected."""
        with pytest.raises(MissingBaseURLError):
            resolve_base_url(ApiEnvironment(base_url="not a url"))

    def test_missing_base_url_not_recoverable_error(self):
        """Test that the fatal error sits outside the ApiwireError hierarchy."""
        from apiwire import ApiwireError

        assert not issubclass(MissingBaseURLError, ApiwireError)
        assert issubclass(MissingBaseURLError, RuntimeError)

    def test_environment_equality(self):
        """Test that environments compare by value."""
        assert ApiEnvironment(base_url=BASE_URL) == ApiEnvironment(base_url=BASE_URL)
        assert ApiEnvironment(base_url=BASE_URL) != ApiEnvironment(base_url="https://other.example.com")
