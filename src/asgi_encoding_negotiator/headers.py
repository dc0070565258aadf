"""
Helpers for pulling Accept-Encoding out of an ASGI scope.
"""
from __future__ import annotations

from collections.abc import Iterable

from asgi_encoding_negotiator.types import Scope

ACCEPT_ENCODING = b"accept-encoding"


def get_accept_encoding_values(scope: Scope) -> list[str] | None:
    """
    Returns every Accept-Encoding header line in request order.

    None means the client sent no such header at all, which is different from
    sending an empty one.
    """
    values = [
        value.decode("latin-1")
        for key, value in scope.get("headers", [])
        if key.lower() == ACCEPT_ENCODING
    ]
    return values or None


def split_coding_tokens(values: Iterable[str]) -> list[str]:
    """
    Splits comma-joined header lines into individual coding tokens.

    ASGI servers hand over each header line as a single string, so
    ``gzip, deflate`` arrives as one value and has to be split here.
    """
    tokens = []
    for value in values:
        for part in value.split(","):
            if part.strip():
                tokens.append(part)
    return tokens
