"""HTTP transport for the Discogs API using httpx.

A transport sends one GET for a ``RequestDescriptor`` and turns the response
into either a result (parsed JSON or an ``ImageResponse``) or a raised
``DiscogsError``.
"""

import json
import logging
from typing import Protocol

import httpx

from . import errors
from .models import DEFAULT_TIMEOUT, ImageResponse, RateLimit, RequestDescriptor

logger = logging.getLogger(__name__)

# Statuses whose body carries nothing useful; the error text is fixed
_STATUS_ERRORS = frozenset(errors.STATUS_MESSAGES)
_SUCCESS = frozenset({200, 201})
_BAD_REQUEST = 400

RATE_LIMIT_HEADERS = {
    "limit": "x-ratelimit-limit",
    "remaining": "x-ratelimit-remaining",
    "reset": "x-ratelimit-reset",
    "type": "x-ratelimit-type",
}

class Transport(Protocol):
    async def send(self, request: RequestDescriptor) -> dict | list | ImageResponse: ...

def _parse_json(raw: bytes):
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise errors.DiscogsParseError() from e

def _is_json(content_type: str | None) -> bool:
    # A missing content-type is treated as JSON
    if not content_type:
        return True
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")

def _is_image(content_type: str | None) -> bool:
    return bool(content_type) and content_type.strip().lower().startswith("image/")

def _rate_limit(headers: httpx.Headers) -> RateLimit:
    return RateLimit(**{field: headers.get(name) for field, name in RATE_LIMIT_HEADERS.items()})

async def read_response(response: httpx.Response) -> dict | list | ImageResponse:
    """Normalize a (streamed) response into a result or raise a ``DiscogsError``.

    The body is only read for 400 and success statuses.
    """
    status = response.status_code

    if status in _STATUS_ERRORS:
        raise errors.DiscogsHTTPError.from_status(status)

    if status not in _SUCCESS and status != _BAD_REQUEST:
        raise errors.DiscogsHTTPError(errors.REQUEST_FAILED, status)

    raw = await response.aread()

    if status == _BAD_REQUEST:
        raise errors.DiscogsValidationError(_parse_json(raw), status)

    content_type = response.headers.get("content-type")
    if _is_json(content_type):
        return _parse_json(raw)
    if _is_image(content_type):
        return ImageResponse(
            content_type=content_type,
            rate_limit=_rate_limit(response.headers),
            image=raw,
        )
    raise errors.DiscogsContentTypeError(content_type)

class HttpxTransport:
    """Default transport: one streamed GET per call over ``httpx.AsyncClient``.

    Pass ``client`` to reuse an existing ``httpx.AsyncClient`` (it is then not
    closed by ``aclose``).
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        scheme: str = "https",
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self.scheme = scheme

    def url_for(self, request: RequestDescriptor) -> str:
        # A raw "#" (allowed in q) would otherwise start a fragment and drop the credentials
        return f"{self.scheme}://{request.host}{request.path.replace('#', '%23')}"

    async def send(self, request: RequestDescriptor) -> dict | list | ImageResponse:
        # Never log the query string, it holds the credentials
        logger.debug("GET %s%s", request.host, request.path.split("?", 1)[0])
        try:
            async with self._client.stream(
                "GET",
                self.url_for(request),
                headers={"user-agent": request.user_agent},
            ) as response:
                return await read_response(response)
        except httpx.DecodingError as e:
            raise errors.DiscogsParseError() from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise errors.DiscogsNetworkError(str(e) or type(e).__name__) from e

    async def aclose(self):
        if self._owns_client:
            await self._client.aclose()
