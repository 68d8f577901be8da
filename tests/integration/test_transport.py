"""Integration tests for the httpx transport and response normalization.

Real httpx clients are used; only the network is replaced with httpx.MockTransport.
"""

import json

import httpx
import pytest

from discogs_database_client.errors import (
    PARSE_FAILED,
    REQUEST_FAILED,
    STATUS_MESSAGES,
    DiscogsContentTypeError,
    DiscogsHTTPError,
    DiscogsNetworkError,
    DiscogsParseError,
    DiscogsValidationError,
)
from discogs_database_client.models import ClientConfig, ImageResponse, RateLimit, RequestDescriptor
from discogs_database_client.paths import PathBuilder
from discogs_database_client.transport import HttpxTransport

REQUEST = RequestDescriptor(
    host="api.discogs.com",
    path="/artists/87016?key=k&secret=s",
    user_agent="test-agent/1.0",
)


def _transport(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpxTransport(client=client)


def _respond(status_code=200, content=b"", headers=None):
    calls = []

    def handler(request: httpx.Request):
        calls.append(request)
        return httpx.Response(status_code, content=content, headers=headers or {})

    return handler, calls


class TestRequest:
    @pytest.mark.asyncio
    async def test_sends_get_with_user_agent(self):
        handler, calls = _respond(200, b'{"id": 1}', {"content-type": "application/json"})
        await _transport(handler).send(REQUEST)

        assert len(calls) == 1
        assert calls[0].method == "GET"
        assert calls[0].headers["user-agent"] == "test-agent/1.0"
        assert str(calls[0].url) == "https://api.discogs.com/artists/87016?key=k&secret=s"

    @pytest.mark.asyncio
    async def test_keeps_search_operators_unescaped(self):
        handler, calls = _respond(200, b"{}", {"content-type": "application/json"})
        request = RequestDescriptor(
            host="api.discogs.com",
            path="/database/search?q=artist:afx%20OR%20artist:tool&page=1&per_page=50&key=k&secret=s",
            user_agent="ua",
        )
        await _transport(handler).send(request)

        assert calls[0].url.query == b"q=artist:afx%20OR%20artist:tool&page=1&per_page=50&key=k&secret=s"

    @pytest.mark.asyncio
    async def test_hash_in_query_keeps_credentials(self):
        handler, calls = _respond(200, b"{}", {"content-type": "application/json"})
        paths = PathBuilder(ClientConfig(access_key="k", access_secret="s"))
        path = paths.search_path({"q": "track #1"})
        assert path == "/database/search?q=track%20#1&page=1&per_page=50&key=k&secret=s"

        request = RequestDescriptor(host="api.discogs.com", path=path, user_agent="ua")
        await _transport(handler).send(request)

        assert calls[0].url.raw_path == b"/database/search?q=track%20%231&page=1&per_page=50&key=k&secret=s"
        assert calls[0].url.fragment == ""

    def test_url_scheme(self):
        transport = HttpxTransport(client=httpx.AsyncClient(), scheme="http")
        assert transport.url_for(REQUEST) == "http://api.discogs.com/artists/87016?key=k&secret=s"


class TestSuccess:
    @pytest.mark.asyncio
    async def test_json_body(self):
        handler, _ = _respond(200, b'{"id":1}', {"content-type": "application/json"})
        result = await _transport(handler).send(REQUEST)
        assert result == {"id": 1}

    @pytest.mark.asyncio
    async def test_json_with_charset_and_201(self):
        handler, _ = _respond(201, b"[1, 2]", {"content-type": "application/json; charset=utf-8"})
        result = await _transport(handler).send(REQUEST)
        assert result == [1, 2]

    @pytest.mark.asyncio
    async def test_missing_content_type_parses_json(self):
        handler, _ = _respond(200, b'{"id":1}')
        result = await _transport(handler).send(REQUEST)
        assert result == {"id": 1}

    @pytest.mark.asyncio
    async def test_missing_content_type_invalid_json(self):
        handler, _ = _respond(200, b"not json")
        with pytest.raises(DiscogsParseError) as exc:
            await _transport(handler).send(REQUEST)
        assert exc.value.to_dict() == {"error": PARSE_FAILED}

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        handler, _ = _respond(200, b"{oops", {"content-type": "application/json"})
        with pytest.raises(DiscogsParseError):
            await _transport(handler).send(REQUEST)

    @pytest.mark.asyncio
    async def test_image_passthrough(self):
        jpeg = b"\xff\xd8\xff\xe0binary"
        headers = {
            "content-type": "image/jpeg",
            "x-ratelimit-limit": "1000",
            "x-ratelimit-remaining": "999",
            "x-ratelimit-reset": "86400",
            "x-ratelimit-type": "image",
        }
        handler, _ = _respond(200, jpeg, headers)
        result = await _transport(handler).send(REQUEST)

        assert isinstance(result, ImageResponse)
        assert result.content_type == "image/jpeg"
        assert result.image == jpeg
        assert result.rate_limit == RateLimit(limit="1000", remaining="999", reset="86400", type="image")

    @pytest.mark.asyncio
    async def test_image_without_rate_limit_headers(self):
        handler, _ = _respond(200, b"png", {"content-type": "image/png"})
        result = await _transport(handler).send(REQUEST)
        assert result.rate_limit == RateLimit()

    @pytest.mark.asyncio
    async def test_unknown_content_type(self):
        handler, _ = _respond(200, b"<html></html>", {"content-type": "text/html"})
        with pytest.raises(DiscogsContentTypeError) as exc:
            await _transport(handler).send(REQUEST)
        assert exc.value.content_type == "text/html"
        assert exc.value.error == "unknown content type"


class TestErrors:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", sorted(STATUS_MESSAGES))
    async def test_known_statuses(self, status):
        handler, _ = _respond(status, b'{"message": "ignored"}', {"content-type": "application/json"})
        with pytest.raises(DiscogsHTTPError) as exc:
            await _transport(handler).send(REQUEST)
        assert exc.value.to_dict() == {"error": STATUS_MESSAGES[status], "statusCode": status}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [204, 302, 429, 502, 503])
    async def test_unexpected_statuses(self, status):
        handler, _ = _respond(status)
        with pytest.raises(DiscogsHTTPError) as exc:
            await _transport(handler).send(REQUEST)
        assert exc.value.to_dict() == {"error": REQUEST_FAILED, "statusCode": status}

    @pytest.mark.asyncio
    async def test_400_with_json_body(self):
        handler, _ = _respond(400, json.dumps({"message": "bad id"}).encode(), {"content-type": "application/json"})
        with pytest.raises(DiscogsValidationError) as exc:
            await _transport(handler).send(REQUEST)
        assert exc.value.status_code == 400
        assert exc.value.body == {"message": "bad id"}
        assert exc.value.to_dict() == {"message": "bad id", "statusCode": 400}

    @pytest.mark.asyncio
    async def test_400_with_invalid_body(self):
        handler, _ = _respond(400, b"Bad Request")
        with pytest.raises(DiscogsParseError):
            await _transport(handler).send(REQUEST)

    @pytest.mark.asyncio
    async def test_network_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection failed", request=request)

        with pytest.raises(DiscogsNetworkError) as exc:
            await _transport(handler).send(REQUEST)
        assert exc.value.status_code is None
        assert isinstance(exc.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_corrupt_content_encoding(self):
        headers = {"content-type": "application/json", "content-encoding": "gzip"}
        handler, _ = _respond(200, b"not gzip", headers)
        with pytest.raises(DiscogsParseError) as exc:
            await _transport(handler).send(REQUEST)
        assert isinstance(exc.value.__cause__, httpx.DecodingError)

    @pytest.mark.asyncio
    async def test_other_request_errors(self):
        def handler(request):
            raise httpx.TooManyRedirects("too many redirects", request=request)

        with pytest.raises(DiscogsNetworkError) as exc:
            await _transport(handler).send(REQUEST)
        assert isinstance(exc.value.__cause__, httpx.TooManyRedirects)


class TestClose:
    @pytest.mark.asyncio
    async def test_does_not_close_injected_client(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        await HttpxTransport(client=client).aclose()
        assert not client.is_closed
        await client.aclose()

    @pytest.mark.asyncio
    async def test_closes_own_client(self):
        transport = HttpxTransport()
        await transport.aclose()
        assert transport._client.is_closed
