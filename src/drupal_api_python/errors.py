"""
Custom exceptions for drupal-api-python
"""

from typing import Any, Optional, Union

ErrorDetail = Union[str, list[dict[str, Any]]]


class DrupalError(Exception):
    """Base class for every error raised by this library."""
    code = "drupal_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.name = self.__class__.__name__


class MissingRequiredArgumentError(DrupalError):
    """Error raised when a required argument is missing."""
    code = "missing_required_argument_error"

    def __init__(self, argument: str):
        super().__init__(f"The argument '{argument}' is required but was not provided.")
        self.argument = argument


class ConfigurationError(DrupalError):
    """Error raised when the auth configuration is missing or incomplete."""
    code = "configuration_error"


class TransportError(DrupalError):
    """Error raised when the underlying transport fails to produce a response."""
    code = "transport_error"

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class UpstreamHttpError(DrupalError):
    """
    Error raised when Drupal answers with a non-success status.
    Carries the translated error detail, the status code and the message prefix.
    """
    code = "upstream_http_error"

    def __init__(self, errors: ErrorDetail, status_code: int, message_prefix: str = ""):
        super().__init__(f"{message_prefix}{self.format_message(errors)}")
        self.errors = errors
        self.status_code = status_code
        self.message_prefix = message_prefix

    @staticmethod
    def format_message(errors: ErrorDetail) -> str:
        if isinstance(errors, str):
            return errors

        error = errors[0] if errors else {}
        message = f"{error.get('status', '')} {error.get('title', '')}".strip()
        if error.get("detail"):
            message += f"\n{error['detail']}"
        return message
