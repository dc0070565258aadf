import pytest
from httpx import ASGITransport, AsyncClient
from starlette.applications import Starlette
from starlette.responses import Response, StreamingResponse
from starlette.routing import Route

from asgi_encoding_negotiator import Coding, CompressionMiddleware, NegotiationConfig


async def small_response(request):
    """Response smaller than minimum_size."""
    return Response("tiny", media_type="text/plain")

async def large_response(request):
    """Large response target for compression."""
    data = "A" * 1000  # 1000 bytes
    return Response(data, media_type="text/plain")

async def streaming_response(request):
    """Streaming response generator."""
    async def generator():
        yield b"chunk1" * 100
        yield b"chunk2" * 100
        yield b"chunk3" * 100

    return StreamingResponse(generator(), media_type="text/plain")

async def error_response(request):
    """400 Bad Request response (for status code preservation test)."""
    return Response("Error occurred", status_code=400)

async def encoded_response(request):
    """Response the app already encoded itself."""
    return Response(
        "B" * 1000,
        media_type="text/plain",
        headers={"Content-Encoding": "identity"},
    )


def build_app(config=None):
    routes = [
        Route("/small", small_response),
        Route("/large", large_response),
        Route("/stream", streaming_response),
        Route("/error", error_response),
        Route("/encoded", encoded_response),
    ]

    application = Starlette(routes=routes)
    application.add_middleware(
        CompressionMiddleware,
        config=config,
        minimum_size=500,        # Do not compress if smaller than 500 bytes
    )
    return application


# --- App Fixtures ---

@pytest.fixture
def app():
    return build_app(NegotiationConfig(preferred_algorithm=Coding.GZIP, compression_level=6))

@pytest.fixture
def deflate_app():
    return build_app(NegotiationConfig(preferred_algorithm=Coding.DEFLATE))

@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver"
    ) as c:
        yield c

@pytest.fixture
async def deflate_client(deflate_app):
    async with AsyncClient(
        transport=ASGITransport(app=deflate_app),
        base_url="http://testserver"
    ) as c:
        yield c
