"""Async client for the Discogs database resources."""

from collections.abc import Mapping

from .models import DEFAULT_TIMEOUT, ClientConfig, ImageResponse, Pagination, RequestDescriptor
from .paths import PathBuilder
from .settings import get_settings
from .transport import HttpxTransport, Transport


class DiscogsClient:
    """Read-only client for artists, releases, masters, labels, images and search.

    Each call sends a single GET and returns the parsed JSON (or an
    ``ImageResponse``), or raises a ``DiscogsError``. The client holds no
    per-call state, so concurrent calls on one instance are safe.

    Usage:
        async with DiscogsClient() as discogs:
            artist = await discogs.artist(87016)
            releases = await discogs.artist_releases(87016, Pagination(page=2))
    """

    def __init__(self, config: ClientConfig | None = None, transport: Transport | None = None):
        timeout = DEFAULT_TIMEOUT
        if config is None:
            settings = get_settings()
            config = ClientConfig.from_settings(settings)
            timeout = settings.timeout
        if transport is None:
            transport = HttpxTransport(timeout=timeout)

        self.config = config
        self.paths = PathBuilder(config)
        self._transport = transport

    async def _get(self, path: str):
        return await self._transport.send(
            RequestDescriptor(host=self.config.host, path=path, user_agent=self.config.user_agent)
        )

    async def _database(self, resources, resource_id, pagination: Pagination | None = None):
        return await self._get(self.paths.database_path(resources, resource_id, pagination))

    async def artist(self, artist_id: int | str):
        """A person who contributed to a release in some capacity."""
        return await self._database(["artists"], artist_id)

    async def artist_releases(self, artist_id: int | str, pagination: Pagination | None = None):
        """Releases and masters associated with an artist."""
        return await self._database(["artists", "releases"], artist_id, pagination)

    async def release(self, release_id: int | str):
        """A physical or digital object released by one or more artists."""
        return await self._database(["releases"], release_id)

    async def master(self, master_id: int | str):
        """A set of similar releases with a main release."""
        return await self._database(["masters"], master_id)

    async def master_versions(self, master_id: int | str, pagination: Pagination | None = None):
        """All releases that are versions of a master."""
        return await self._database(["masters", "versions"], master_id, pagination)

    async def label(self, label_id: int | str):
        """A label, company, studio or other entity involved with releases."""
        return await self._database(["labels"], label_id)

    async def label_releases(self, label_id: int | str, pagination: Pagination | None = None):
        """Releases associated with a label."""
        return await self._database(["labels", "releases"], label_id, pagination)

    async def image(self, filename: str) -> ImageResponse:
        """Binary image data. Image requests count against a separate rate limit."""
        return await self._get(self.paths.image_path(filename))

    async def search(self, query: Mapping[str, object] | None = None, **params):
        """Search the database.

        Args:
            query: Search parameters, e.g. {"q": "artist:afx", "type": "release"}
            **params: Extra parameters, applied after ``query``

        Returns:
            Parsed JSON search results.
        """
        merged = {**(query or {}), **params}
        return await self._get(self.paths.search_path(merged))

    async def aclose(self):
        aclose = getattr(self._transport, "aclose", None)
        if aclose is not None:
            await aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()
