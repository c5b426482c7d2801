"""
Translation of Drupal error responses into UpstreamHttpError.
"""

import json

import httpx

from drupal_api_python.errors import ErrorDetail, UpstreamHttpError
from drupal_api_python.utils import media_type

JSON_CONTENT_TYPE = "application/json"
JSON_API_CONTENT_TYPE = "application/vnd.api+json"


async def get_errors_from_response(response: httpx.Response) -> ErrorDetail:
    """
    Extract the error detail from a response.

    Returns the "message" of an application/json body, the "errors" list of a
    JSON:API body (see https://jsonapi.org/format/#errors), and falls back to the
    status text for anything else.
    """
    content_type = media_type(response.headers.get("content-type"))

    if content_type in (JSON_CONTENT_TYPE, JSON_API_CONTENT_TYPE):
        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            body = None

        if isinstance(body, dict):
            if content_type == JSON_CONTENT_TYPE and body.get("message"):
                return str(body["message"])
            if content_type == JSON_API_CONTENT_TYPE and body.get("errors"):
                return list(body["errors"])

    return response.reason_phrase


async def raise_for_json_errors(response: httpx.Response, message_prefix: str = "") -> None:
    """
    Raise UpstreamHttpError if the response is not a success.

    Raises:
        UpstreamHttpError: With the translated errors, the status code and the prefix.
    """
    if not response.is_success:
        errors = await get_errors_from_response(response)
        raise UpstreamHttpError(errors, response.status_code, message_prefix)
