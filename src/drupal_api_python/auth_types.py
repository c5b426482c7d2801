"""
Auth configuration variants and token models.
"""

from collections.abc import Mapping
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from drupal_api_python.errors import ConfigurationError

# From simple_oauth.
DEFAULT_AUTH_URL = "/oauth/token"

AUTH_DOCS = "See https://next-drupal.org/docs/client/auth"


class BasicAuthCredentials(BaseModel):
    username: str
    password: str


class AccessTokenCredentials(BaseModel):
    access_token: str
    token_type: str


class ClientIdSecretCredentials(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    client_id: str = Field(alias="clientId")
    client_secret: str = Field(alias="clientSecret")
    scope: Optional[str] = None
    url: str = DEFAULT_AUTH_URL


AuthConfig = Union[
    BasicAuthCredentials,
    AccessTokenCredentials,
    ClientIdSecretCredentials,
    str,
    Callable[[], str],
]


class AccessToken(BaseModel):
    """Token endpoint response body."""
    model_config = ConfigDict(extra="allow")

    access_token: str
    token_type: str
    expires_in: int
    scope: Optional[str] = None
    refresh_token: Optional[str] = None


class CachedToken(BaseModel):
    """
    An access token together with the request that produced it.

    expires_at is a unix timestamp in seconds.
    """
    token: AccessToken
    expires_at: float
    client_id: str
    client_secret: str
    scope: Optional[str] = None

    def is_usable_for(self, auth: ClientIdSecretCredentials, now: float) -> bool:
        return (
            now < self.expires_at
            and self.client_id == auth.client_id
            and self.client_secret == auth.client_secret
            and self.scope == auth.scope
        )


def _present(value: Mapping[str, Any], *keys: str) -> bool:
    return any(value.get(key) is not None for key in keys)


def parse_auth(value: Any) -> Optional[AuthConfig]:
    """
    Turn a plain mapping into the matching auth variant.

    Variants are discriminated by their required fields. A mapping carrying only
    part of a variant's fields raises ConfigurationError. Models, strings,
    callables and None are returned unchanged.
    """
    if isinstance(value, BaseModel):
        value = value.model_dump()
    if not isinstance(value, Mapping):
        return value

    if _present(value, "username", "password"):
        if not value.get("username") or not value.get("password"):
            raise ConfigurationError(f"'username' and 'password' are required for auth. {AUTH_DOCS}")
        return BasicAuthCredentials(username=value["username"], password=value["password"])

    if _present(value, "access_token", "token_type"):
        if not value.get("access_token") or not value.get("token_type"):
            raise ConfigurationError(f"'access_token' and 'token_type' are required for auth. {AUTH_DOCS}")
        return AccessTokenCredentials(access_token=value["access_token"], token_type=value["token_type"])

    client_id = value.get("client_id", value.get("clientId"))
    client_secret = value.get("client_secret", value.get("clientSecret"))
    if not client_id or not client_secret:
        raise ConfigurationError(f"'client_id' and 'client_secret' are required for auth. {AUTH_DOCS}")

    return ClientIdSecretCredentials(
        client_id=client_id,
        client_secret=client_secret,
        scope=value.get("scope"),
        url=value.get("url") or DEFAULT_AUTH_URL,
    )
