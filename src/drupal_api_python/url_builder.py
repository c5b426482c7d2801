from collections.abc import Sequence
from typing import Optional, Union
from urllib.parse import quote

import httpx

from drupal_api_python.config import DEFAULT_API_PREFIX, DEFAULT_FRONT_PAGE
from drupal_api_python.errors import MissingRequiredArgumentError
from drupal_api_python.types import EndpointSearchParams
from drupal_api_python.utils import encode_uri_component, stringify_query


class UrlBuilder:
    """
    Builds URLs and paths for a Drupal site.

    Handles the API prefix for JSON:API endpoints, locale prefixes, path prefixes
    and nested query parameters.
    """

    def __init__(
        self,
        base_url: str,
        api_prefix: str = DEFAULT_API_PREFIX,
        front_page: str = DEFAULT_FRONT_PAGE,
    ):
        self.base_url = base_url
        self.api_prefix = api_prefix
        self.front_page = front_page

    @property
    def base_url(self) -> str:
        return self._base_url

    @base_url.setter
    def base_url(self, base_url: str) -> None:
        if not base_url or not isinstance(base_url, str):
            raise MissingRequiredArgumentError("base_url")
        self._base_url = base_url

    @property
    def api_prefix(self) -> str:
        return self._api_prefix

    @api_prefix.setter
    def api_prefix(self, api_prefix: str) -> None:
        self._api_prefix = api_prefix if not api_prefix or api_prefix.startswith("/") else f"/{api_prefix}"

    def build_url(self, path: str, search_params: Optional[EndpointSearchParams] = None) -> httpx.URL:
        """
        Build a URL from a path and optional query parameters.

        Absolute paths are kept as they are, relative paths are resolved against
        the base URL. search_params may be a mapping (nested values use bracket
        notation), a pre-encoded query string, or an object with a
        get_query_object() method.

            builder.build_url("/foo", {"bar": "baz"})
            # https://example.com/foo?bar=baz
        """
        url = httpx.URL(self.base_url).join(path)

        search = search_params
        if search is not None and hasattr(search, "get_query_object"):
            search = search.get_query_object()

        if isinstance(search, str):
            query = quote(search.lstrip("?"), safe="=&%[]+")
        else:
            query = stringify_query(search) if search else ""

        if query:
            url = url.copy_with(query=query.encode("ascii"))

        return url

    def build_endpoint(
        self,
        locale: str = "",
        path: str = "",
        search_params: Optional[EndpointSearchParams] = None,
    ) -> str:
        """Build a JSON:API endpoint URL: /{locale} + api prefix + path."""
        locale_segment = f"/{locale}" if locale else ""

        if path and not path.startswith("/"):
            path = f"/{path}"

        return str(self.build_url(f"{locale_segment}{self.api_prefix}{path}", search_params))

    def construct_path_from_segment(
        self,
        segment: Union[str, Sequence[str], None],
        locale: Optional[str] = None,
        default_locale: Optional[str] = None,
        path_prefix: str = "",
    ) -> str:
        """
        Construct a page path from a route segment.

        Each part of the segment is percent-encoded on its own before being
        joined with "/". An empty segment without a path prefix resolves to the
        front page.
        """
        if path_prefix:
            if not path_prefix.startswith("/"):
                path_prefix = f"/{path_prefix}"
            if path_prefix.endswith("/"):
                path_prefix = path_prefix[:-1]

        if isinstance(segment, str):
            parts = [segment] if segment else []
        else:
            parts = list(segment or [])
        path = "/".join(encode_uri_component(part) for part in parts)

        if not path and not path_prefix:
            path = self.front_page

        if path and not path.startswith("/"):
            path = f"/{path}"
        if path.endswith("/"):
            path = path[:-1]

        return self.add_locale_prefix(f"{path_prefix}{path}", locale=locale, default_locale=default_locale)

    def add_locale_prefix(
        self,
        path: str,
        locale: Optional[str] = None,
        default_locale: Optional[str] = None,
    ) -> str:
        """Prefix the path with /{locale} unless it is the default locale or already present."""
        if not path.startswith("/"):
            path = f"/{path}"

        locale_path = f"/{locale}"
        already_prefixed = path == locale_path or path.startswith(f"{locale_path}/")

        if locale and not already_prefixed and locale != default_locale:
            return f"{locale_path}{path}"

        return path
