from collections.abc import Awaitable, Callable
from typing import Any

# ASGI types
Scope = dict[str, Any]
Message = dict[str, Any]
Receive = Callable[[], Awaitable[Message]]
Send = Callable[[Message], Awaitable[None]]
ASGIApp = Callable[[Scope, Receive, Send], Awaitable[None]]

# Raw header pairs as they appear in scope["headers"] and response start messages
RawHeaders = list[tuple[bytes, bytes]]
