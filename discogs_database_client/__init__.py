"""Async client for the Discogs database API.

Builds authenticated request paths for artists, releases, masters, labels,
images and search, and normalizes responses into a result or a
``DiscogsError``.
"""

from .cli import main
from .client import DiscogsClient
from .errors import (
    DiscogsContentTypeError,
    DiscogsError,
    DiscogsHTTPError,
    DiscogsNetworkError,
    DiscogsParseError,
    DiscogsValidationError,
)
from .models import ClientConfig, ImageResponse, Pagination, RateLimit, RequestDescriptor
from .paths import PathBuilder
from .transport import HttpxTransport, Transport

__all__ = [
    "main",
    "DiscogsClient",
    "ClientConfig",
    "Pagination",
    "RateLimit",
    "ImageResponse",
    "RequestDescriptor",
    "PathBuilder",
    "Transport",
    "HttpxTransport",
    "DiscogsError",
    "DiscogsNetworkError",
    "DiscogsHTTPError",
    "DiscogsValidationError",
    "DiscogsParseError",
    "DiscogsContentTypeError",
]

if __name__ == "__main__":
    main()
