"""
Default transport used when no custom fetcher is configured.
"""

from typing import Any, Optional

import httpx

from drupal_api_python.types import RequestInit


class HttpxFetcher:
    """
    Sends requests with httpx.AsyncClient.

    Cookies received from Drupal are kept in a jar and sent back with every
    request made with credentials="include".
    """

    def __init__(self, timeout: Optional[float] = None):
        self.cookies = httpx.Cookies()
        self._timeout = timeout

    async def __call__(self, input: Any, init: RequestInit) -> httpx.Response:
        options = dict(init)
        include_credentials = options.pop("credentials", None) == "include"
        method = options.pop("method", "GET")
        headers = options.pop("headers", None)

        client_options: dict[str, Any] = {}
        if include_credentials:
            client_options["cookies"] = self.cookies
        if self._timeout is not None:
            client_options["timeout"] = self._timeout

        async with httpx.AsyncClient(**client_options) as client:
            if isinstance(input, httpx.Request):
                if headers:
                    input.headers.update(headers)
                if include_credentials:
                    self.cookies.set_cookie_header(input)
                response = await client.send(input)
            else:
                response = await client.request(method, input, headers=headers, **options)

            if include_credentials:
                for cookie in client.cookies.jar:
                    self.cookies.jar.set_cookie(cookie)

        return response
