"""
Accept-Encoding negotiation between gzip and deflate.

Each raw header token is matched by prefix against the codings we know,
its quality weight is recorded, and the wildcard fills in for codings the
client did not name. Ties are broken by the configured preferred algorithm.
"""
from __future__ import annotations

import enum
import functools
import math
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from asgi_encoding_negotiator.config import NegotiationConfig


class Coding(str, enum.Enum):
    GZIP = "gzip"
    DEFLATE = "deflate"
    STAR = "*"


# Token prefixes (lower-case) that count as a mention of each coding
CODING_PREFIXES: dict[Coding, tuple[str, ...]] = {
    Coding.GZIP: ("gzip", "x-gzip"),
    Coding.DEFLATE: ("deflate",),
    Coding.STAR: ("*",),
}


# Plain decimal number, optionally signed, with an exponent and surrounding blanks
QUALITY_RE = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:e[+-]?\d+)?\s*\Z", re.ASCII)


class ParseError(ValueError):
    """Raised when a token carries a ``q=`` value that is not a number."""

    def __init__(self, token: str) -> None:
        super().__init__(f"malformed quality value in Accept-Encoding token {token!r}")
        self.token = token


@dataclass
class AcceptabilityState:
    found: bool = False
    weight: float = 0.0
    acceptable: bool = False

    def record(self, quality: float) -> None:
        self.found = True
        if quality > self.weight:
            self.weight = quality


def parse_quality(token: str) -> float:
    """
    Returns the quality weight of a trimmed, lower-cased coding token.

    Everything after ``q=`` up to the end of the token is parsed as the
    value, so a token with further parameters after the quality fails.
    """
    index = token.find("q=")
    if index < 0:
        return 1.0

    value = token[index + 2 :]
    if not QUALITY_RE.match(value):
        raise ParseError(token)

    quality = float(value)
    if not math.isfinite(quality):
        raise ParseError(token)
    return quality


def scan_tokens(raw_tokens: Sequence[str]) -> dict[Coding, AcceptabilityState]:
    """
    Accumulates found/weight per coding and derives acceptability.

    Wildcard weight is copied onto gzip/deflate only when the client did
    not name them, so an explicit ``q=0`` always stays rejected.
    """
    states = {coding: AcceptabilityState() for coding in Coding}

    for raw in raw_tokens:
        token = raw.strip().lower()
        for coding, prefixes in CODING_PREFIXES.items():
            if token.startswith(prefixes):
                states[coding].record(parse_quality(token))

    star = states[Coding.STAR]
    star.acceptable = star.found and star.weight > 0

    for coding in (Coding.DEFLATE, Coding.GZIP):
        state = states[coding]
        if state.found:
            state.acceptable = state.weight > 0
        else:
            state.acceptable = star.acceptable
            if state.acceptable:
                state.weight = star.weight

    return states


@functools.lru_cache(maxsize=1024)
def _negotiate(raw_tokens: tuple[str, ...], config: NegotiationConfig) -> Coding | None:
    states = scan_tokens(raw_tokens)
    deflate = states[Coding.DEFLATE]
    gzip = states[Coding.GZIP]

    if deflate.acceptable and (not gzip.acceptable or deflate.weight > gzip.weight):
        return Coding.DEFLATE
    if gzip.acceptable and (not deflate.acceptable or deflate.weight < gzip.weight):
        return Coding.GZIP

    # Equal weights: fall back on what the server prefers
    if deflate.acceptable and config.preferred_algorithm is Coding.DEFLATE:
        return Coding.DEFLATE
    if gzip.acceptable and config.preferred_algorithm is Coding.GZIP:
        return Coding.GZIP

    return None


def negotiate(raw_tokens: Sequence[str], config: NegotiationConfig) -> Coding | None:
    """
    Picks the coding for a response, or None when nothing mutually acceptable exists.

    :param raw_tokens: Accept-Encoding tokens; each element is treated as one
                       token and is never split further.
    :param config: Server configuration supplying the preferred algorithm.
    :raises ParseError: If a gzip, deflate or wildcard token has a malformed
                        quality value.
    """
    return _negotiate(tuple(raw_tokens), config)
