from __future__ import annotations

import hashlib
import io

import pytest

from etagware import (
    AsyncCachingInterceptor,
    ByteStream,
    CacheControlBuilder,
    CacheOptions,
    FileStream,
    Headers,
    Request,
    Response,
    StreamReadError,
)

BODY = b"test content"
ETAG = f'"{hashlib.md5(BODY).hexdigest()}"'


async def ok_handler(request: Request) -> Response:
    return Response(
        status_code=200,
        headers=Headers({"Content-Length": str(len(BODY))}),
        body=ByteStream(BODY),
    )


@pytest.mark.anyio
async def test_annotates_and_answers_304() -> None:
    interceptor = AsyncCachingInterceptor(
        ok_handler,
        CacheOptions(cache_control=CacheControlBuilder.create().public().max_age(300)),
    )

    first = await interceptor.handle_request(Request(method="GET"))
    second = await interceptor.handle_request(Request(method="GET", headers=Headers({"If-None-Match": ETAG})))

    assert first.status_code == 200
    assert first.header_value("ETag") == ETAG
    assert first.header_value("Cache-Control") == "public, max-age=300"
    assert first.header_value("Content-Length") == str(len(BODY))

    assert second.status_code == 304
    assert second.reason_phrase == "Not Modified"
    assert not second.has_header("Content-Length")
    assert second.header_value("Cache-Control") == "public, max-age=300"


@pytest.mark.anyio
async def test_non_cacheable_method_is_forwarded() -> None:
    calls = []

    async def handler(request: Request) -> Response:
        calls.append(request.method)
        return await ok_handler(request)

    interceptor = AsyncCachingInterceptor(handler)

    response = await interceptor.handle_request(Request(method="DELETE"))

    assert calls == ["DELETE"]
    assert not response.has_header("ETag")


@pytest.mark.anyio
async def test_disabled() -> None:
    interceptor = AsyncCachingInterceptor(ok_handler, CacheOptions(enabled=False))

    response = await interceptor.handle_request(Request(method="GET", headers=Headers({"If-None-Match": "*"})))

    assert response.status_code == 200
    assert not response.has_header("ETag")


@pytest.mark.anyio
async def test_stream_read_error_propagates() -> None:
    class BrokenFile(io.BytesIO):
        def read(self, size=-1):  # type: ignore[no-untyped-def]
            raise OSError("truncated upload")

    async def broken_handler(request: Request) -> Response:
        return Response(status_code=200, body=FileStream(BrokenFile(b"data")))

    interceptor = AsyncCachingInterceptor(broken_handler)

    with pytest.raises(StreamReadError, match="truncated upload"):
        await interceptor.handle_request(Request(method="GET"))
