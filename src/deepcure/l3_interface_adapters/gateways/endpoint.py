"""Endpoint URL validation shared by the completion gateways."""

from __future__ import annotations

from pydantic import HttpUrl, TypeAdapter, ValidationError

_HTTP_URL = TypeAdapter(HttpUrl)


def is_valid_endpoint(url: str | None) -> bool:
    """True when *url* is an absolute http(s) URL with a host."""
    if not url:
        return False
    try:
        _HTTP_URL.validate_python(url)
    except ValidationError:
        return False
    return True
