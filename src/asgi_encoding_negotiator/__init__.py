from asgi_encoding_negotiator.config import CompressionLevel, ConfigError, NegotiationConfig
from asgi_encoding_negotiator.middleware import CompressionMiddleware
from asgi_encoding_negotiator.negotiation import Coding, ParseError, negotiate, parse_quality

__all__ = [
    "Coding",
    "CompressionLevel",
    "CompressionMiddleware",
    "ConfigError",
    "NegotiationConfig",
    "ParseError",
    "negotiate",
    "parse_quality",
]
