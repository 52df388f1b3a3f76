from __future__ import annotations

import hashlib
import logging
from typing import List

import pytest

from etagware import (
    ByteStream,
    CacheControlBuilder,
    CacheOptions,
    CachingInterceptor,
    Headers,
    Request,
    Response,
    UnsupportedAlgorithm,
)

BODY = b"test content"
ETAG = f'"{hashlib.md5(BODY).hexdigest()}"'


class RecordingHandler:
    def __init__(self, status_code: int = 200, headers: dict[str, str] | None = None) -> None:
        self.status_code = status_code
        self.headers = headers or {"Content-Type": "text/plain", "Content-Length": str(len(BODY))}
        self.calls: List[Request] = []

    def __call__(self, request: Request) -> Response:
        self.calls.append(request)
        return Response(
            status_code=self.status_code,
            headers=Headers(self.headers),
            body=ByteStream(BODY),
        )


def test_first_request_gets_etag_then_second_gets_304(caplog: pytest.LogCaptureFixture) -> None:
    handler = RecordingHandler()
    interceptor = CachingInterceptor(handler)

    first = interceptor.handle_request(Request(method="GET"))

    assert first.status_code == 200
    assert first.header_value("ETag") == ETAG
    assert first.body.read() == BODY

    with caplog.at_level("DEBUG", logger="etagware"):
        second = interceptor.handle_request(
            Request(method="GET", headers=Headers({"If-None-Match": first.header_value("ETag")}))
        )

    assert second.status_code == 304
    assert not second.has_header("Content-Length")
    assert second.header_value("ETag") == ETAG
    assert "Handling decision: NotModified" in caplog.messages
    # the handler still runs for requests that end up as 304
    assert len(handler.calls) == 2


def test_disabled_interceptor_forwards_untouched() -> None:
    handler = RecordingHandler()
    interceptor = CachingInterceptor(handler, CacheOptions(enabled=False))

    response = interceptor.handle_request(Request(method="GET", headers=Headers({"If-None-Match": "*"})))

    assert response.status_code == 200
    assert not response.has_header("ETag")
    assert len(handler.calls) == 1


def test_post_never_gets_an_etag(caplog: pytest.LogCaptureFixture) -> None:
    handler = RecordingHandler()
    interceptor = CachingInterceptor(
        handler,
        CacheOptions(cache_control=CacheControlBuilder.create().public().max_age(60)),
    )

    with caplog.at_level(logging.DEBUG, logger="etagware"):
        response = interceptor.handle_request(Request(method="POST", headers=Headers({"If-None-Match": "*"})))

    assert response.status_code == 200
    assert not response.has_header("ETag")
    assert not response.has_header("Cache-Control")
    assert len(handler.calls) == 1
    assert "Method POST is not cacheable, forwarding request" in caplog.messages


def test_lowercase_method_is_cacheable() -> None:
    interceptor = CachingInterceptor(RecordingHandler())

    response = interceptor.handle_request(Request(method="head"))

    assert response.header_value("ETag") == ETAG


def test_custom_methods_and_statuses() -> None:
    handler = RecordingHandler(status_code=201)
    interceptor = CachingInterceptor(
        handler,
        CacheOptions(cacheable_methods={"POST"}, cacheable_statuses={201}),
    )

    assert interceptor.handle_request(Request(method="POST")).has_header("ETag")
    assert not interceptor.handle_request(Request(method="GET")).has_header("ETag")


def test_non_cacheable_status_is_untouched() -> None:
    interceptor = CachingInterceptor(
        RecordingHandler(status_code=500),
        CacheOptions(cache_control=CacheControlBuilder.create().public()),
    )

    response = interceptor.handle_request(Request(method="GET", headers=Headers({"If-None-Match": "*"})))

    assert response.status_code == 500
    assert not response.has_header("ETag")
    assert not response.has_header("Cache-Control")


def test_handler_headers_win() -> None:
    handler = RecordingHandler(headers={"ETag": '"custom"', "Cache-Control": "private"})
    interceptor = CachingInterceptor(
        handler,
        CacheOptions(cache_control=CacheControlBuilder.create().public().max_age(60)),
    )

    response = interceptor.handle_request(Request(method="GET", headers=Headers({"If-None-Match": '"custom"'})))

    assert response.status_code == 304
    assert response.header_value("ETag") == '"custom"'
    assert response.header_value("Cache-Control") == "private"


def test_handler_errors_propagate() -> None:
    def failing_handler(request: Request) -> Response:
        raise RuntimeError("boom")

    interceptor = CachingInterceptor(failing_handler)

    with pytest.raises(RuntimeError, match="boom"):
        interceptor.handle_request(Request(method="GET"))


def test_unsupported_algorithm_fails_at_configuration() -> None:
    with pytest.raises(UnsupportedAlgorithm):
        CachingInterceptor(RecordingHandler(), CacheOptions(etag_algorithm="md42"))
