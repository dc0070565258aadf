import zlib
from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable

from asgi_encoding_negotiator.negotiation import Coding


@runtime_checkable
class Compressor(Protocol):
    """
    Interface definition for a compressor.
    Any class implementing these methods can be used by the responder.
    """
    encoding: str

    def compress(self, data: bytes) -> bytes: ...

    def flush(self) -> bytes: ...


class BaseCompressor(ABC):
    encoding: str = ""

    def __init__(self, level: int = 6) -> None:
        self.level = level

    @abstractmethod
    def compress(self, data: bytes) -> bytes:
        """Compresses a chunk of data."""
        raise NotImplementedError

    @abstractmethod
    def flush(self) -> bytes:
        """Flushes any remaining data from the internal buffer."""
        raise NotImplementedError


class GzipCompressor(BaseCompressor):
    encoding = Coding.GZIP.value

    def __init__(self, level: int = 6) -> None:
        super().__init__(level)
        # wbits=31 (16+15): zlib generates gzip header & trailer
        self._compressobj = zlib.compressobj(level, zlib.DEFLATED, 15 + 16)

    def compress(self, data: bytes) -> bytes:
        return self._compressobj.compress(data)

    def flush(self) -> bytes:
        return self._compressobj.flush()


class DeflateCompressor(BaseCompressor):
    encoding = Coding.DEFLATE.value

    def __init__(self, level: int = 6) -> None:
        super().__init__(level)
        # HTTP "deflate" is the zlib format, header and adler32 trailer included
        self._compressobj = zlib.compressobj(level, zlib.DEFLATED, 15)

    def compress(self, data: bytes) -> bytes:
        return self._compressobj.compress(data)

    def flush(self) -> bytes:
        return self._compressobj.flush()


COMPRESSOR_CLASSES: dict[Coding, type[BaseCompressor]] = {
    Coding.GZIP: GzipCompressor,
    Coding.DEFLATE: DeflateCompressor,
}


def create_compressor(coding: Coding, level: int = 6) -> BaseCompressor:
    """Returns a fresh compressor for a negotiated coding."""
    try:
        compressor_class = COMPRESSOR_CLASSES[coding]
    except KeyError:
        raise ValueError(f"no compressor for coding {coding!r}") from None
    return compressor_class(level=level)
