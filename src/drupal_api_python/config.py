"""
Configuration classes and defaults for drupal-api-python.
"""

from typing import Any, Mapping, Optional

from drupal_api_python.auth_types import AccessToken
from drupal_api_python.types import Fetcher, Logger

DEFAULT_API_PREFIX = ""
DEFAULT_FRONT_PAGE = "/home"
DEFAULT_WITH_AUTH = False

# See https://jsonapi.org/format/#content-negotiation.
DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class ClientOptions:
    """
    Configuration for the DrupalClient.

    Args:
        access_token: A pre-fetched access token. When set, the client credentials
            flow is skipped entirely and this token is always used.
        api_prefix: Path prepended to every endpoint built with build_endpoint (default: "").
        auth: The auth configuration. One of a username/password, access token or
            client id/secret mapping (or model), a header string, or a callable
            returning a header string.
        debug: Whether debug messages are sent to the logger (default: False).
        fetcher: Optional async callable replacing the default httpx transport.
            Called as fetcher(input, init).
        front_page: Path used when a path is built from an empty segment (default: "/home").
        headers: Default headers sent with every request.
        logger: Object with a debug(message) method (default: the package logger).
        with_auth: Whether resource fetches are authenticated by default (default: False).
    """
    def __init__(
        self,
        access_token: Optional[AccessToken] = None,
        api_prefix: str = DEFAULT_API_PREFIX,
        auth: Any = None,
        debug: bool = False,
        fetcher: Optional[Fetcher] = None,
        front_page: str = DEFAULT_FRONT_PAGE,
        headers: Optional[Mapping[str, str]] = None,
        logger: Optional[Logger] = None,
        with_auth: bool = DEFAULT_WITH_AUTH,
    ):
        if isinstance(access_token, Mapping):
            access_token = AccessToken.model_validate(access_token)
        self.access_token = access_token
        self.api_prefix = api_prefix
        self.auth = auth
        self.debug = debug
        self.fetcher = fetcher
        self.front_page = front_page
        self.headers = dict(DEFAULT_HEADERS) if headers is None else headers
        self.logger = logger
        self.with_auth = with_auth
