"""Data models and constants for the Discogs database client."""

from dataclasses import dataclass

VERSION = "0.1.0"

DEFAULT_HOST = "api.discogs.com"
DEFAULT_BASE_PATH = "/"
DEFAULT_PER_PAGE = 50
MAX_PER_PAGE = 100  # Enforced by Discogs, not locally
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = f"discogs-database-client/{VERSION}"


@dataclass(frozen=True)
class ClientConfig:
    """Immutable configuration owned by a single client."""

    host: str = DEFAULT_HOST
    base_path: str = DEFAULT_BASE_PATH
    default_per_page: int = DEFAULT_PER_PAGE
    user_agent: str = DEFAULT_USER_AGENT
    access_key: str = ""
    access_secret: str = ""

    @classmethod
    def from_settings(cls, settings) -> "ClientConfig":
        return cls(
            host=settings.host,
            base_path=settings.base_path,
            default_per_page=settings.default_per_page,
            user_agent=settings.user_agent,
            access_key=settings.access_key,
            access_secret=settings.access_secret,
        )


@dataclass(frozen=True)
class Pagination:
    """Page selection for list resources. Missing values fall back to defaults."""

    page: int | None = None
    per_page: int | None = None


@dataclass(frozen=True)
class RequestDescriptor:
    host: str
    path: str
    user_agent: str


@dataclass(frozen=True)
class RateLimit:
    """Rate limit headers from an image response, copied verbatim."""

    limit: str | None = None
    remaining: str | None = None
    reset: str | None = None
    type: str | None = None


@dataclass(frozen=True)
class ImageResponse:
    """Binary image returned by the image resource."""

    content_type: str
    rate_limit: RateLimit
    image: bytes
