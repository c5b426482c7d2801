"""
Resolution of auth configurations into Authorization header values.
Handles the OAuth2 client credentials flow and caches the resulting token.
"""

import asyncio
import json
import time
from typing import Any, Awaitable, Callable, Optional

import httpx
from pydantic import ValidationError

from drupal_api_python.auth_types import (
    AUTH_DOCS,
    AccessToken,
    AccessTokenCredentials,
    AuthConfig,
    BasicAuthCredentials,
    CachedToken,
    ClientIdSecretCredentials,
    parse_auth,
)
from drupal_api_python.error_translator import raise_for_json_errors
from drupal_api_python.errors import ConfigurationError, UpstreamHttpError
from drupal_api_python.url_builder import UrlBuilder
from drupal_api_python.utils import basic_auth_header

Send = Callable[..., Awaitable[httpx.Response]]


class AuthResolver:
    """
    Produces Authorization headers for every supported auth variant.

    Tokens obtained through the client credentials grant are cached together with
    the client id, secret and scope that requested them. A cached token is reused
    only while it is unexpired and the requested credentials are identical.

    Refreshes are serialized by a lock: concurrent callers that need the same
    credentials share a single token request, and when credentials differ the
    last successful fetch owns the cache.
    """

    def __init__(
        self,
        url_builder: UrlBuilder,
        send: Send,
        debug: Callable[[str], None],
        auth: Any = None,
        access_token: Optional[AccessToken] = None,
    ):
        self._url_builder = url_builder
        self._send = send
        self._debug = debug
        self.auth = auth
        self.access_token = access_token
        self._cached_token: Optional[CachedToken] = None
        self._refresh_lock = asyncio.Lock()

    @property
    def auth(self) -> Optional[AuthConfig]:
        return self._auth

    @auth.setter
    def auth(self, auth: Any) -> None:
        self._auth = parse_auth(auth)

    @property
    def token(self) -> Optional[AccessToken]:
        return self._cached_token.token if self._cached_token else None

    @property
    def cached_token(self) -> Optional[CachedToken]:
        return self._cached_token

    async def get_authorization_header(self, auth: Any) -> str:
        """
        Get the Authorization header value for the given auth configuration.

        Raises:
            ConfigurationError: If auth is missing or not a supported variant.
        """
        auth = parse_auth(auth)

        if isinstance(auth, BasicAuthCredentials):
            header = basic_auth_header(auth.username, auth.password)
            self._debug("Using basic authorization header.")
        elif isinstance(auth, ClientIdSecretCredentials):
            # get_access_token() raises if it fails to get an access token.
            token = await self.get_access_token(auth)
            header = f"Bearer {token.access_token}"
            self._debug("Using access token authorization header retrieved from Client Id/Secret.")
        elif isinstance(auth, AccessTokenCredentials):
            header = f"{auth.token_type} {auth.access_token}"
            self._debug("Using access token authorization header.")
        elif isinstance(auth, str):
            header = auth
            self._debug("Using custom authorization header.")
        elif callable(auth):
            header = auth()
            self._debug("Using custom authorization callback.")
        else:
            raise ConfigurationError(f"auth is not configured. {AUTH_DOCS}")

        return header

    async def get_access_token(self, client_id_secret: Any = None) -> AccessToken:
        """
        Retrieve an access token with the client credentials grant.

        Uses client_id_secret when given, otherwise the configured auth. A
        pre-supplied access_token always wins.

        Raises:
            ConfigurationError: If no client id/secret is available.
            UpstreamHttpError: If the token endpoint answers with an error.
        """
        if self.access_token:
            return self.access_token

        auth = self._resolve_client_credentials(client_id_secret)
        url = self._url_builder.build_url(auth.url)

        cached = self._reusable_token(auth)
        if cached:
            return cached

        async with self._refresh_lock:
            cached = self._reusable_token(auth)
            if cached:
                return cached

            self._debug("Fetching new access token.")

            body = {"grant_type": "client_credentials"}
            if auth.scope:
                body["scope"] = auth.scope
                self._debug(f"Using scope: {auth.scope}")

            response = await self._send(
                str(url),
                with_auth=False,
                method="POST",
                headers={
                    "Authorization": basic_auth_header(auth.client_id, auth.client_secret),
                    "Accept": "application/json",
                    "Content-Type": "application/x-www-form-urlencoded",
                },
                data=body,
            )

            await raise_for_json_errors(response, "Error while fetching new access token: ")

            try:
                token = AccessToken.model_validate(response.json())
            except (json.JSONDecodeError, ValidationError) as e:
                raise UpstreamHttpError(
                    f"Invalid token response: {str(e)}",
                    response.status_code,
                    "Error while fetching new access token: ",
                ) from e

            self._cached_token = CachedToken(
                token=token,
                expires_at=time.time() + token.expires_in,
                client_id=auth.client_id,
                client_secret=auth.client_secret,
                scope=auth.scope,
            )

            return token

    def _resolve_client_credentials(self, client_id_secret: Any) -> ClientIdSecretCredentials:
        if client_id_secret is not None:
            auth = parse_auth(client_id_secret)
            if isinstance(auth, ClientIdSecretCredentials):
                return auth
        elif isinstance(self.auth, ClientIdSecretCredentials):
            return self.auth
        elif self.auth is None:
            raise ConfigurationError(f"auth is not configured. {AUTH_DOCS}")

        raise ConfigurationError(f"'client_id' and 'client_secret' required. {AUTH_DOCS}")

    def _reusable_token(self, auth: ClientIdSecretCredentials) -> Optional[AccessToken]:
        cached = self._cached_token
        if cached and cached.is_usable_for(auth, time.time()):
            self._debug("Using existing access token.")
            return cached.token
        return None
