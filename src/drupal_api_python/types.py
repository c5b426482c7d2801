from collections.abc import Mapping
from typing import Any, Protocol, TypedDict, Union

import httpx


class RequestInit(TypedDict, total=False):
    method:      str
    headers:     httpx.Headers
    credentials: str
    content:     Any
    data:        Any
    json:        Any
    params:      Any


class Fetcher(Protocol):
    async def __call__(self, input: Any, init: RequestInit) -> httpx.Response: ...


class Logger(Protocol):
    def debug(self, message: str) -> Any: ...


class QueryObjectProvider(Protocol):
    def get_query_object(self) -> Mapping[str, Any]: ...


EndpointSearchParams = Union[str, Mapping[str, Any], QueryObjectProvider]
