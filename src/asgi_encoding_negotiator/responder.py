from __future__ import annotations

from asgi_encoding_negotiator.compressors import Compressor
from asgi_encoding_negotiator.types import ASGIApp, Message, RawHeaders, Receive, Scope, Send


class CompressionResponder:
    """
    Wraps ``send`` for a single request and compresses the response body
    with the negotiated compressor.

    The start message is held back until the first body message shows
    whether the response is worth compressing. Responses that already carry
    a Content-Encoding, or whose body arrives as anything other than
    ``http.response.body`` (``http.response.pathsend`` for instance), are
    passed through untouched.
    """

    def __init__(
        self,
        app: ASGIApp,
        compressor: Compressor,
        minimum_size: int,
    ) -> None:
        self.app = app
        self.compressor = compressor
        self.minimum_size = minimum_size

        self.send: Send = self.unattached_send
        self.initial_message: Message = {}
        self.started = False
        self.passthrough = False

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        self.send = send
        await self.app(scope, receive, self.send_with_compression)

        # Responses that never sent a body message still need their start
        if self.initial_message:
            await self._send_start()

    async def send_with_compression(self, message: Message) -> None:
        message_type = message["type"]

        if message_type == "http.response.start":
            self.initial_message = message
            headers = message.get("headers", [])
            self.passthrough = _find_header(headers, b"content-encoding") is not None
            return

        if message_type != "http.response.body":
            self.passthrough = True

        if self.passthrough:
            await self._send_start()
            await self.send(message)
            return

        body = message.get("body", b"")
        more_body = message.get("more_body", False)

        if not self.started:
            if not more_body and len(body) < self.minimum_size:
                self.passthrough = True
                await self._send_start()
                await self.send(message)
                return

            body = self._compress(body, more_body)
            self._mark_encoded(None if more_body else len(body))
            await self._send_start()
        else:
            body = self._compress(body, more_body)

        await self.send({"type": "http.response.body", "body": body, "more_body": more_body})

    async def _send_start(self) -> None:
        if not self.started:
            self.started = True
            await self.send(self.initial_message)

    def _compress(self, body: bytes, more_body: bool) -> bytes:
        compressed = self.compressor.compress(body)
        if not more_body:
            compressed += self.compressor.flush()
        return compressed

    def _mark_encoded(self, content_length: int | None) -> None:
        """Rewrites the held start headers for a compressed body of the given length."""
        headers: RawHeaders = [
            (key, value)
            for key, value in self.initial_message.get("headers", [])
            if key.lower() != b"content-length"
        ]
        if content_length is not None:
            headers.append((b"content-length", str(content_length).encode()))
        headers.append((b"content-encoding", self.compressor.encoding.encode()))

        index = _find_header(headers, b"vary")
        if index is None:
            headers.append((b"vary", b"Accept-Encoding"))
        else:
            key, value = headers[index]
            tokens = {token.strip().lower() for token in value.split(b",")}
            if b"accept-encoding" not in tokens and b"*" not in tokens:
                headers[index] = (key, value + b", Accept-Encoding")

        self.initial_message = {**self.initial_message, "headers": headers}

    async def unattached_send(self, message: Message) -> None:
        raise RuntimeError("send awaitable not set")


def _find_header(headers: RawHeaders, name: bytes) -> int | None:
    for index, (key, _) in enumerate(headers):
        if key.lower() == name:
            return index
    return None
