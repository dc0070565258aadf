from __future__ import annotations

import logging

from asgi_encoding_negotiator.compressors import create_compressor
from asgi_encoding_negotiator.config import NegotiationConfig
from asgi_encoding_negotiator.headers import get_accept_encoding_values, split_coding_tokens
from asgi_encoding_negotiator.negotiation import ParseError, negotiate
from asgi_encoding_negotiator.responder import CompressionResponder
from asgi_encoding_negotiator.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)


class CompressionMiddleware:
    """
    Compresses HTTP responses with gzip or deflate, whichever the client's
    Accept-Encoding header makes the better choice.

    :param app: The wrapped ASGI application.
    :param config: Negotiation settings; defaults to preferring gzip at level 6.
    :param minimum_size: Single-shot bodies shorter than this are sent as is.
    """

    def __init__(
        self,
        app: ASGIApp,
        config: NegotiationConfig | None = None,
        minimum_size: int = 500,
    ) -> None:
        self.app = app
        self.config = config if config is not None else NegotiationConfig()
        self.minimum_size = minimum_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        values = get_accept_encoding_values(scope)
        # No header: the client did not ask for compression
        if values is None:
            await self.app(scope, receive, send)
            return

        tokens = split_coding_tokens(values)
        if not tokens:
            await self.app(scope, receive, send)
            return

        try:
            coding = negotiate(tokens, self.config)
        except ParseError as exc:
            logger.info("Serving %s uncompressed: %s", scope.get("path", ""), exc)
            await self.app(scope, receive, send)
            return

        if coding is None:
            logger.debug(
                "No mutually acceptable content coding for Accept-Encoding %r", values
            )
            await self.app(scope, receive, send)
            return

        logger.debug("Selected %s for %s", coding.value, scope.get("path", ""))

        compressor = create_compressor(coding, self.config.compression_level)
        responder = CompressionResponder(
            self.app,
            compressor,
            minimum_size=self.minimum_size,
        )

        await responder(scope, receive, send)
