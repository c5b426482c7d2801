from drupal_api_python.auth_resolver import AuthResolver
from drupal_api_python.auth_types import (
    AccessToken,
    AccessTokenCredentials,
    AuthConfig,
    BasicAuthCredentials,
    CachedToken,
    ClientIdSecretCredentials,
    parse_auth,
)
from drupal_api_python.client import DrupalClient
from drupal_api_python.config import ClientOptions
from drupal_api_python.error_translator import get_errors_from_response, raise_for_json_errors
from drupal_api_python.errors import (
    ConfigurationError,
    DrupalError,
    MissingRequiredArgumentError,
    TransportError,
    UpstreamHttpError,
)
from drupal_api_python.fetchers import HttpxFetcher
from drupal_api_python.url_builder import UrlBuilder

__all__ = [
    "AccessToken",
    "AccessTokenCredentials",
    "AuthConfig",
    "AuthResolver",
    "BasicAuthCredentials",
    "CachedToken",
    "ClientIdSecretCredentials",
    "ClientOptions",
    "ConfigurationError",
    "DrupalClient",
    "DrupalError",
    "HttpxFetcher",
    "MissingRequiredArgumentError",
    "TransportError",
    "UpstreamHttpError",
    "UrlBuilder",
    "get_errors_from_response",
    "parse_auth",
    "raise_for_json_errors",
]
