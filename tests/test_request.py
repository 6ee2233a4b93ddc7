"""Tests for kennel.http.request — frozen Request with async body access."""

import json

import pytest

from kennel.errors import PayloadTooLarge
from kennel.http.request import Request


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope."""
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "method": "GET",
        "path": "/",
        "headers": [],
    }
    base.update(overrides)
    return base


def _make_receive(*bodies: bytes, calls: list[int] | None = None):
    """Create an ASGI receive callable that yields bodies, counting calls."""
    messages = []
    for i, body in enumerate(bodies):
        is_last = i == len(bodies) - 1
        messages.append({"type": "http.request", "body": body, "more_body": not is_last})
    if not messages:
        messages.append({"type": "http.request", "body": b"", "more_body": False})
    it = iter(messages)

    async def receive():
        if calls is not None:
            calls.append(1)
        return next(it)

    return receive


def _json_request(*bodies: bytes) -> Request:
    scope = _make_scope(method="POST", headers=[(b"content-type", b"application/json")])
    return Request.from_asgi(scope, _make_receive(*bodies))


class TestRequestFromASGI:
    def test_basic_fields(self) -> None:
        req = Request.from_asgi(_make_scope(method="POST", path="/dogs"), _make_receive())

        assert req.method == "POST"
        assert req.path == "/dogs"
        assert req.path_params == {}

    def test_frozen(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive())
        with pytest.raises(AttributeError):
            req.method = "POST"  # type: ignore[misc]


class TestRequestHeaders:
    def test_content_type(self) -> None:
        scope = _make_scope(headers=[(b"Content-Type", b"application/json")])
        req = Request.from_asgi(scope, _make_receive())
        assert req.content_type == "application/json"

    @pytest.mark.parametrize(
        ("content_type", "expected"),
        [
            (b"application/json", True),
            (b"application/json; charset=utf-8", True),
            (b"application/merge-patch+json", True),
            (b"text/plain", False),
        ],
    )
    def test_is_json(self, content_type: bytes, expected: bool) -> None:
        scope = _make_scope(headers=[(b"content-type", content_type)])
        req = Request.from_asgi(scope, _make_receive())
        assert req.is_json is expected

    def test_is_json_without_header(self) -> None:
        assert Request.from_asgi(_make_scope(), _make_receive()).is_json is False

    def test_content_length(self) -> None:
        scope = _make_scope(headers=[(b"content-length", b"12")])
        assert Request.from_asgi(scope, _make_receive()).content_length == 12

    def test_content_length_invalid(self) -> None:
        scope = _make_scope(headers=[(b"content-length", b"lots")])
        assert Request.from_asgi(scope, _make_receive()).content_length is None

    def test_content_length_missing(self) -> None:
        assert Request.from_asgi(_make_scope(), _make_receive()).content_length is None


class TestRequestBody:
    async def test_body(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"hello"))
        assert await req.body() == b"hello"

    async def test_body_chunked(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"hel", b"lo"))
        assert await req.body() == b"hello"

    async def test_body_cached(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"once"))
        assert await req.body() == b"once"
        assert await req.body() == b"once"

    async def test_stream_stops_on_disconnect(self) -> None:
        async def receive():
            return {"type": "http.disconnect"}

        req = Request.from_asgi(_make_scope(), receive)
        assert await req.body() == b""

    async def test_limit_within_bounds(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"12345", b"67890"))
        assert await req.body(limit=10) == b"1234567890"

    async def test_limit_stops_reading_early(self) -> None:
        calls: list[int] = []
        chunks = [b"x" * 10] * 5
        req = Request.from_asgi(_make_scope(), _make_receive(*chunks, calls=calls))

        with pytest.raises(PayloadTooLarge) as exc_info:
            await req.body(limit=15)

        assert exc_info.value.status == 413
        assert len(calls) == 2


class TestRequestJSON:
    async def test_json(self) -> None:
        req = _json_request(json.dumps({"name": "Rex"}).encode())
        assert await req.json() == {"name": "Rex"}
        assert req.data == {"name": "Rex"}

    async def test_empty_body_is_none(self) -> None:
        req = _json_request()
        assert await req.json() is None
        assert req.data is None

    async def test_malformed(self) -> None:
        req = _json_request(b"{not json")
        with pytest.raises(ValueError):
            await req.json()

    async def test_invalid_utf8(self) -> None:
        req = _json_request(b'{"name": "\xff"}')
        with pytest.raises(ValueError):
            await req.json()

    @pytest.mark.parametrize("token", [b"NaN", b"Infinity", b"-Infinity"])
    async def test_non_standard_constants_rejected(self, token: bytes) -> None:
        req = _json_request(b'{"weight": ' + token + b"}")
        with pytest.raises(ValueError, match="not valid JSON"):
            await req.json()

    def test_data_before_parse(self) -> None:
        assert _json_request(b"{}").data is None


class TestWithPathParams:
    async def test_shares_parsed_body(self) -> None:
        req = _json_request(b'{"name": "Rex"}')
        await req.json()

        routed = req.with_path_params({"id": "abc"})
        assert routed.path_params == {"id": "abc"}
        assert routed.data == {"name": "Rex"}
        assert req.path_params == {}
