import logging
from collections.abc import Mapping
from typing import Any, Optional, Sequence, Union

import httpx

from drupal_api_python.auth_resolver import AuthResolver
from drupal_api_python.auth_types import AccessToken, AuthConfig
from drupal_api_python.config import ClientOptions
from drupal_api_python.error_translator import get_errors_from_response, raise_for_json_errors
from drupal_api_python.errors import DrupalError, ErrorDetail, TransportError
from drupal_api_python.fetchers import HttpxFetcher
from drupal_api_python.types import EndpointSearchParams, Fetcher, Logger, RequestInit
from drupal_api_python.url_builder import UrlBuilder

logger = logging.getLogger("drupal_api_python")


class DrupalClient:
    """
    Base client for a Drupal site.

    Sends requests through a pluggable fetcher, attaches Authorization headers on
    demand, builds URLs and paths, and turns error responses into UpstreamHttpError.

        client = DrupalClient("https://example.com", ClientOptions(debug=True))
    """

    def __init__(self, base_url: str, options: Optional[ClientOptions] = None):
        options = options or ClientOptions()

        self.is_debug_enabled = bool(options.debug)
        self.logger: Logger = options.logger or logger
        self.with_auth = options.with_auth
        self.headers = options.headers

        self._urls = UrlBuilder(base_url, api_prefix=options.api_prefix, front_page=options.front_page)
        self._auth = AuthResolver(
            self._urls,
            send=self.fetch,
            debug=self.debug,
            auth=options.auth,
            access_token=options.access_token,
        )

        self._uses_custom_fetcher = options.fetcher is not None
        self.fetcher: Fetcher = options.fetcher or HttpxFetcher()

        self.debug("Debug mode is on.")

    # ============================================================================
    # CONFIGURATION
    # ============================================================================

    @property
    def base_url(self) -> str:
        return self._urls.base_url

    @base_url.setter
    def base_url(self, base_url: str) -> None:
        self._urls.base_url = base_url

    @property
    def api_prefix(self) -> str:
        return self._urls.api_prefix

    @api_prefix.setter
    def api_prefix(self, api_prefix: str) -> None:
        self._urls.api_prefix = api_prefix

    @property
    def front_page(self) -> str:
        return self._urls.front_page

    @front_page.setter
    def front_page(self, front_page: str) -> None:
        self._urls.front_page = front_page

    @property
    def auth(self) -> Optional[AuthConfig]:
        return self._auth.auth

    @auth.setter
    def auth(self, auth: Any) -> None:
        self._auth.auth = auth

    @property
    def access_token(self) -> Optional[AccessToken]:
        return self._auth.access_token

    @access_token.setter
    def access_token(self, access_token: Optional[AccessToken]) -> None:
        self._auth.access_token = access_token

    @property
    def headers(self) -> httpx.Headers:
        return self._headers

    @headers.setter
    def headers(self, headers: Any) -> None:
        self._headers = httpx.Headers(headers)

    @property
    def token(self) -> Optional[AccessToken]:
        """The cached client credentials token, if any."""
        return self._auth.token

    # ============================================================================
    # REQUESTS
    # ============================================================================

    async def fetch(
        self,
        input: Union[str, httpx.URL, httpx.Request],
        with_auth: Any = None,
        **init: Any
    ) -> httpx.Response:
        """
        Fetch a resource from the given URL or path.

        Args:
            input: An absolute URL, a path starting with "/" (resolved against the
                base URL), or an httpx.Request.
            with_auth: True to authenticate with the configured auth, or an auth
                configuration to use instead. False sends no Authorization header,
                None defers to the client's with_auth option, so a client created
                with with_auth=True authenticates every fetch unless told otherwise.
            **init: Request options passed to the fetcher (method, headers, content,
                data, json, params, ...).

        Raises:
            ConfigurationError: If auth is requested but not configured.
            TransportError: If the fetcher fails to produce a response.
        """
        request_init: RequestInit = dict(init)  # type: ignore[assignment]
        request_init["credentials"] = "include"

        headers = httpx.Headers(self.headers)
        for key, value in httpx.Headers(init.get("headers") or {}).items():
            headers[key] = value

        if with_auth is None:
            with_auth = self.with_auth
        if with_auth:
            headers["Authorization"] = await self.get_authorization_header(
                self.auth if with_auth is True else with_auth
            )

        request_init["headers"] = headers

        if isinstance(input, str) and input.startswith("/"):
            input = f"{self.base_url}{input}"

        if self._uses_custom_fetcher:
            self.debug(f"Using custom fetcher, fetching: {input}")
        else:
            self.debug(f"Using default fetch, fetching: {input}")

        try:
            return await self.fetcher(input, request_init)
        except DrupalError:
            raise
        except Exception as e:
            raise TransportError(f"Request to {input} failed: {str(e) or 'Unknown error'}", e) from e

    async def validate_draft_url(self, search_params: Mapping[str, Any]) -> httpx.Response:
        """
        Ask Drupal whether the draft (preview) path in search_params exists.

        Transport failures are not raised: they produce a 401 response whose
        JSON body carries the error message.
        """
        path = search_params.get("path")

        self.debug(f"Fetching draft url validation for {path}.")

        try:
            validate_url = str(self.build_url("/next/draft-url"))
            response = await self.fetch(
                validate_url,
                with_auth=False,
                method="POST",
                headers={
                    "Accept": "application/vnd.api+json",
                    "Content-Type": "application/json",
                },
                json=dict(search_params),
            )
        except TransportError as e:
            response = httpx.Response(401, json={"message": str(e)})

        self.debug(
            f"Could not validate path, {path}" if response.status_code != 200 else f"Validated path, {path}"
        )

        return response

    # ============================================================================
    # AUTH
    # ============================================================================

    async def get_authorization_header(self, auth: Any) -> str:
        return await self._auth.get_authorization_header(auth)

    async def get_access_token(self, client_id_secret: Any = None) -> AccessToken:
        return await self._auth.get_access_token(client_id_secret)

    # ============================================================================
    # URLS
    # ============================================================================

    def build_url(self, path: str, search_params: Optional[EndpointSearchParams] = None) -> httpx.URL:
        return self._urls.build_url(path, search_params)

    def build_endpoint(
        self,
        locale: str = "",
        path: str = "",
        search_params: Optional[EndpointSearchParams] = None,
    ) -> str:
        return self._urls.build_endpoint(locale=locale, path=path, search_params=search_params)

    def construct_path_from_segment(
        self,
        segment: Union[str, Sequence[str], None],
        locale: Optional[str] = None,
        default_locale: Optional[str] = None,
        path_prefix: str = "",
    ) -> str:
        return self._urls.construct_path_from_segment(
            segment, locale=locale, default_locale=default_locale, path_prefix=path_prefix
        )

    def add_locale_prefix(self, path: str, locale: Optional[str] = None, default_locale: Optional[str] = None) -> str:
        return self._urls.add_locale_prefix(path, locale=locale, default_locale=default_locale)

    # ============================================================================
    # ERRORS AND LOGGING
    # ============================================================================

    async def raise_for_json_errors(self, response: httpx.Response, message_prefix: str = "") -> None:
        await raise_for_json_errors(response, message_prefix)

    async def get_errors_from_response(self, response: httpx.Response) -> ErrorDetail:
        return await get_errors_from_response(response)

    def debug(self, message: str) -> None:
        if self.is_debug_enabled:
            self.logger.debug(message)
