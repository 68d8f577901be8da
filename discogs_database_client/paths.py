"""Request path construction for Discogs database resources.

Everything here is pure: a path is a function of the client configuration
and the call's arguments, and no network access happens.
"""

import re
from collections.abc import Mapping, Sequence
from urllib.parse import quote_plus

from .models import ClientConfig, Pagination

_WHITESPACE = re.compile(r"\s")


def encode_component(value) -> str:
    """Percent-encode a search parameter value the way Discogs expects.

    Like a URI component encoding, but ``!'()*`` are escaped too and spaces
    become ``+``.
    """
    return quote_plus(str(value), safe="")


def escape_query(value) -> str:
    """Escape the free-text ``q`` parameter.

    Only whitespace is escaped. Discogs reads ``:``, ``?``, ``-`` and friends
    as search operators and rejects them when percent-encoded.
    """
    return _WHITESPACE.sub("%20", str(value))


class PathBuilder:
    """Builds authenticated request paths from a ``ClientConfig``."""

    def __init__(self, config: ClientConfig):
        self.config = config

    def _auth(self, has_query: bool) -> str:
        joiner = "&" if has_query else "?"
        return f"{joiner}key={self.config.access_key}&secret={self.config.access_secret}"

    def _page_params(self, page, per_page) -> str:
        page = 1 if page is None else page
        per_page = self.config.default_per_page if per_page is None else per_page
        return f"page={page}&per_page={per_page}"

    def database_path(
        self,
        resources: Sequence[str],
        resource_id: int | str,
        pagination: Pagination | None = None,
    ) -> str:
        """Path for ``resources[0]/<id>[/resources[1]]`` with optional pagination."""
        if not 1 <= len(resources) <= 2:
            raise ValueError(f"Expected one or two resource segments, got {len(resources)}")

        path = f"{self.config.base_path}{resources[0]}/{resource_id}"
        if len(resources) == 2:
            path += f"/{resources[1]}"

        if pagination is not None:
            path += "?" + self._page_params(pagination.page, pagination.per_page)

        return path + self._auth(has_query=pagination is not None)

    def search_path(self, query: Mapping[str, object] | None = None) -> str:
        """Path for the database search endpoint.

        Parameters keep their insertion order; ``page`` and ``per_page`` always
        come last, right before the credentials.
        """
        params = dict(query or {})
        page = params.pop("page", None)
        per_page = params.pop("per_page", None)

        parts = []
        for key, value in params.items():
            if key == "q":
                parts.append(f"{key}={escape_query(value)}")
            else:
                parts.append(f"{key}={encode_component(value)}")
        parts.append(self._page_params(page, per_page))

        return f"{self.config.base_path}database/search?" + "&".join(parts) + self._auth(has_query=True)

    def image_path(self, filename: str) -> str:
        return f"{self.config.base_path}image/{filename}" + self._auth(has_query=False)
