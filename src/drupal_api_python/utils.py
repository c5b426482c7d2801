"""
Encoding helpers for query strings, path segments and auth headers.
"""

import base64
from collections.abc import Mapping
from typing import Any, Optional
from urllib.parse import quote

# Characters left untouched by JavaScript's encodeURIComponent.
URI_COMPONENT_SAFE = "!~*'()"


def stringify_query(params: Mapping[str, Any]) -> str:
    """
    Serialize a (possibly nested) mapping into a query string using bracket notation.

    {"fields": {"node--article": "title,path"}} and {"fields[node--article]": "title,path"}
    both become "fields%5Bnode--article%5D=title%2Cpath". Sequences use indices
    ("include[0]=a"), None values are skipped and booleans become "true"/"false".
    """
    pairs: list[str] = []
    for key, value in params.items():
        _append_pairs(pairs, str(key), value)
    return "&".join(pairs)


def _append_pairs(pairs: list[str], key: str, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        for child_key, child_value in value.items():
            _append_pairs(pairs, f"{key}[{child_key}]", child_value)
    elif isinstance(value, (list, tuple)):
        for index, child_value in enumerate(value):
            _append_pairs(pairs, f"{key}[{index}]", child_value)
    else:
        pairs.append(f"{quote(key, safe='')}={quote(_scalar_to_str(value), safe='')}")


def _scalar_to_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_uri_component(part: str) -> str:
    """Percent-encode a single path segment, '/' included."""
    return quote(part, safe=URI_COMPONENT_SAFE)


def basic_auth_header(username: str, password: str) -> str:
    credentials = f"{username}:{password}".encode("utf-8")
    return f"Basic {base64.b64encode(credentials).decode('ascii')}"


def media_type(content_type: Optional[str]) -> Optional[str]:
    """Strip parameters such as charset from a Content-Type value."""
    if not content_type:
        return None
    return content_type.split(";", 1)[0].strip().lower()
