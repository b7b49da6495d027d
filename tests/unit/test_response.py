"""
Unit tests for HTTP response building and serialization.
"""

import json

import pytest

from httpcodec.http.protocol import HTTPVersion
from httpcodec.http.response import (
    HTTPResponse,
    ResponseBuilder,
    ResponseConfig,
    parse_response,
)
from httpcodec.http.status_codes import HTTPStatus, is_valid_status, reason_phrase


class TestHTTPResponse:
    """Tests for HTTPResponse construction and mutators."""

    def test_create_defaults(self):
        """Test a fresh response is HTTP/1.1 200 OK, empty."""
        response = HTTPResponse.create()

        assert response.version == HTTPVersion.HTTP_1_1
        assert response.status_code == 200
        assert response.status_text == "OK"
        assert len(response.headers) == 0
        assert response.body == b""

    def test_create_with_config(self):
        """Test initial status from ResponseConfig."""
        response = HTTPResponse.create(ResponseConfig(status_code=404, status_text="Not Found"))

        assert response.status_line == "HTTP/1.1 404 Not Found"

    def test_create_rejects_other_versions(self):
        """Test only HTTP/1.1 can be configured."""
        with pytest.raises(ValueError):
            HTTPResponse.create(ResponseConfig(version=HTTPVersion.HTTP_1_0))

    @pytest.mark.parametrize("body", [b"", b"Hellow", b"\x00\xff" * 100])
    def test_set_body_sets_content_length(self, body: bytes):
        """Test content-length always equals the new body length."""
        response = HTTPResponse.create().set_body(body)

        assert response.get_header("content-length") == str(len(body))
        assert response.body == body

    def test_set_body_counts_bytes_not_characters(self):
        """Test str bodies are UTF-8 encoded before counting."""
        response = HTTPResponse.create().set_body("héllo")

        assert response.body == "héllo".encode("utf-8")
        assert response.get_header("Content-Length") == "6"

    def test_set_body_recomputes_after_manual_override(self):
        """Test set_body wins over an earlier manual content-length."""
        response = HTTPResponse.create()
        response.set_header("Content-Length", "999")
        response.set_body(b"abc")

        assert response.get_header("content-length") == "3"

    def test_manual_content_length_after_body_is_kept(self):
        """Test a later set_header overrides the derived value unchecked."""
        response = HTTPResponse.create().set_body(b"abc")
        response.set_header("content-length", "10")

        assert response.get_header("content-length") == "10"
        assert response.body == b"abc"

    def test_set_status_code_unvalidated(self):
        """Test the builder stores out-of-range codes as given."""
        response = HTTPResponse.create().set_status_code(42)
        assert response.status_code == 42

        response.set_status_code(HTTPStatus.CREATED)
        assert response.status_code == 201
        assert type(response.status_code) is int

    def test_set_header_case_insensitive(self):
        """Test header replace-on-conflict through the response."""
        response = HTTPResponse.create()
        response.set_header("X-Foo", "Bar")
        response.set_header("x-foo", "Baz")

        assert len(response.headers) == 1
        assert response.get_header("X-FOO") == "Baz"

    def test_chaining(self):
        """Test that mutators return the response."""
        response = (HTTPResponse.create()
            .set_status_code(202)
            .set_status_text("Accepted")
            .set_header("X-One", "1")
            .set_body(b"queued"))

        assert response.status_line == "HTTP/1.1 202 Accepted"
        assert response.get_header("x-one") == "1"

    def test_status_categories(self):
        """Test status category helpers."""
        assert HTTPResponse(status_code=204).is_success
        assert HTTPResponse(status_code=302).is_redirect
        assert HTTPResponse(status_code=404).is_client_error
        assert HTTPResponse(status_code=503).is_server_error
        assert not HTTPResponse(status_code=200).is_client_error


class TestSerialization:
    """Tests for to_bytes()."""

    def test_round_trip_example(self):
        """Test the 201 Created response renders every part."""
        response = HTTPResponse.create(ResponseConfig(status_code=201, status_text="Created"))
        response.set_header("content-type", "application/json")
        response.set_header("location", "http://example.com/users/123")
        response.set_body(b"Hellow")

        result = response.to_bytes()

        assert result.startswith(b"HTTP/1.1 201 Created\r\n")
        assert b"content-type: application/json\r\n" in result
        assert b"location: http://example.com/users/123\r\n" in result
        assert b"content-length: 6\r\n" in result
        assert result.endswith(b"\r\n\r\nHellow")

        head, body = result.split(b"\r\n\r\n", 1)
        assert body == b"Hellow"
        assert sorted(head.split(b"\r\n")[1:]) == sorted([
            b"content-type: application/json",
            b"location: http://example.com/users/123",
            b"content-length: 6",
        ])

    def test_headers_in_insertion_order(self):
        """Test headers render in the order they were last set."""
        response = HTTPResponse.create()
        response.set_header("B", "2")
        response.set_header("A", "1")
        response.set_body(b"x")

        assert response.to_bytes() == (
            b"HTTP/1.1 200 OK\r\n"
            b"b: 2\r\n"
            b"a: 1\r\n"
            b"content-length: 1\r\n"
            b"\r\n"
            b"x"
        )

    def test_no_headers_no_body(self):
        """Test the minimal response."""
        assert HTTPResponse.create().to_bytes() == b"HTTP/1.1 200 OK\r\n\r\n"

    def test_nothing_added(self):
        """Test no Date/Server/Content-Length is invented."""
        response = HTTPResponse.create()
        response.body = b"raw"

        assert response.to_bytes() == b"HTTP/1.1 200 OK\r\n\r\nraw"

    def test_to_bytes_does_not_mutate(self):
        """Test serialization leaves the response untouched."""
        response = HTTPResponse.create().set_header("X-A", "1").set_body(b"body")
        before = (response.status_code, response.status_text, response.headers.copy(), response.body)

        first = response.to_bytes()
        second = response.to_bytes()

        assert first == second
        assert (response.status_code, response.status_text, response.headers, response.body) == before

    def test_bytes_protocol(self):
        """Test bytes(response) equals to_bytes()."""
        response = HTTPResponse.create().set_body(b"hi")
        assert bytes(response) == response.to_bytes()

    def test_reparse_serialized_response(self):
        """Test a built response parses back to the same values."""
        built = (HTTPResponse.create()
            .set_status_code(404)
            .set_status_text("Not Found Here")
            .set_header("Content-Type", "text/plain")
            .set_body(b"missing"))

        parsed = parse_response(built.to_bytes())

        assert parsed.status_code == 404
        assert parsed.status_text == "Not Found Here"
        assert parsed.headers == built.headers
        assert parsed.body == b"missing"

    def test_non_latin1_text_serializes(self):
        """Test builder text outside Latin-1 is written as UTF-8."""
        payload = (HTTPResponse.create()
            .set_status_text("成功")
            .set_header("X-Name", "é☃")
            .set_header("X-Plain", "café")
            .to_bytes())

        assert payload.startswith("HTTP/1.1 200 成功\r\n".encode("utf-8"))
        assert "x-name: é☃\r\n".encode("utf-8") in payload
        assert b"x-plain: caf\xe9\r\n" in payload
        assert payload.endswith(b"\r\n\r\n")

    def test_json_null_body_cached(self):
        """Test a JSON null body is cached and set_body clears the cache."""
        response = HTTPResponse.create().set_body(b"null")
        assert response.json is None

        response.set_body(b'{"ok": true}')
        assert response.json == {"ok": True}


class TestResponseBuilder:
    """Tests for ResponseBuilder class."""

    def test_status_fills_phrase(self):
        """Test status() looks up the registered phrase."""
        response = ResponseBuilder().status(HTTPStatus.CREATED).build()

        assert response.status_code == 201
        assert response.status_text == "Created"

    def test_status_with_explicit_text(self):
        """Test status() with a custom phrase."""
        response = ResponseBuilder().status(200, "Fine").build()
        assert response.status_line == "HTTP/1.1 200 Fine"

    def test_status_unregistered_code(self):
        """Test unregistered codes get an empty phrase."""
        response = ResponseBuilder().status(299).build()
        assert response.status_line == "HTTP/1.1 299 "

    def test_json_body(self):
        """Test JSON body encoding."""
        data = {"name": "John", "age": 30}
        response = ResponseBuilder().json(data).build()

        assert response.get_header("Content-Type") == "application/json; charset=utf-8"
        assert json.loads(response.body) == data
        assert response.get_header("content-length") == str(len(response.body))

    def test_text_body(self):
        """Test plain text body."""
        response = ResponseBuilder().text("Hello, World!").build()

        assert response.get_header("content-type") == "text/plain; charset=utf-8"
        assert response.body == b"Hello, World!"

    def test_headers_bulk(self):
        """Test headers() sets several at once."""
        response = ResponseBuilder().headers({"X-A": "1", "X-B": "2"}).build()
        assert response.headers == {"x-a": "1", "x-b": "2"}

    def test_build_returns_snapshot(self):
        """Test later builder calls don't change built responses."""
        builder = ResponseBuilder().header("X-A", "1")
        first = builder.build()
        builder.header("X-B", "2").body(b"more")

        assert "x-b" not in first.headers
        assert first.body == b""

    def test_builder_to_bytes(self):
        """Test the builder can serialize directly."""
        payload = ResponseBuilder().status(HTTPStatus.NO_CONTENT).to_bytes()
        assert payload == b"HTTP/1.1 204 No Content\r\n\r\n"

    def test_builder_config(self):
        """Test the builder honours ResponseConfig."""
        builder = ResponseBuilder(ResponseConfig(status_code=500, status_text="Oops"))
        assert builder.build().status_line == "HTTP/1.1 500 Oops"


class TestHTTPStatus:
    """Tests for HTTPStatus enum and helpers."""

    def test_status_phrases(self):
        """Test reason phrases."""
        assert HTTPStatus.OK.phrase == "OK"
        assert HTTPStatus.NOT_FOUND.phrase == "Not Found"
        assert HTTPStatus.INTERNAL_SERVER_ERROR.phrase == "Internal Server Error"
        assert HTTPStatus.HTTP_VERSION_NOT_SUPPORTED.phrase == "HTTP Version Not Supported"
        assert HTTPStatus.REQUEST_HEADER_FIELDS_TOO_LARGE.phrase == "Request Header Fields Too Large"

    def test_status_categories(self):
        """Test category helpers."""
        assert HTTPStatus.OK.is_success
        assert HTTPStatus.NOT_FOUND.is_error
        assert not HTTPStatus.FOUND.is_error

    def test_reason_phrase_lookup(self):
        """Test reason_phrase() for registered and unregistered codes."""
        assert reason_phrase(404) == "Not Found"
        assert reason_phrase(299) == ""
        assert reason_phrase(299, "Custom") == "Custom"

    @pytest.mark.parametrize("code,valid", [(99, False), (100, True), (599, True), (600, False)])
    def test_valid_range(self, code: int, valid: bool):
        """Test the 100-599 status range."""
        assert is_valid_status(code) is valid
