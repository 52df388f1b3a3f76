from __future__ import annotations

import logging
import tempfile
import typing as t

from anyio import to_thread

from etagware._async_interceptor import AsyncCachingInterceptor
from etagware._config import options_from_config
from etagware._core._headers import Headers
from etagware._core._spec import CacheOptions, is_cacheable_method
from etagware._core.models import CHUNK_SIZE, FileStream, Request, Response
from etagware._utils import filter_pairs

# Configure logger for this module
logger = logging.getLogger(__name__)

DEFAULT_SPOOL_MAX_SIZE = 1024 * 1024

# Body-sending extensions whose messages bypass http.response.body
CAPTURE_UNSUPPORTED_EXTENSIONS = frozenset({"http.response.pathsend", "http.response.zerocopysend"})


class _ASGIScope(t.TypedDict, total=False):
    """ASGI HTTP scope type."""

    type: str
    asgi: dict[str, str]
    http_version: str
    method: str
    scheme: str
    path: str
    query_string: bytes
    root_path: str
    headers: list[tuple[bytes, bytes]]
    server: tuple[str, int | None] | None
    client: tuple[str, int] | None
    state: dict[str, t.Any]
    extensions: dict[str, t.Any]


_Scope = _ASGIScope
_Receive = t.Callable[[], t.Awaitable[dict[str, t.Any]]]
_Send = t.Callable[[dict[str, t.Any]], t.Awaitable[None]]
_ASGIApp = t.Callable[[_Scope, _Receive, _Send], t.Awaitable[None]]


class ASGIConditionalCacheMiddleware:
    """
    ASGI middleware that adds ETag and Cache-Control headers and answers
    matching ``If-None-Match`` requests with ``304 Not Modified``.

    Responses of cacheable requests are captured before being sent, because
    the ETag header has to go out before the body. The body is spooled into a
    temporary file that stays in memory up to ``spool_max_size`` bytes and
    moves to disk beyond that, so large responses are never held in memory
    as a whole.

    Requests that can never be annotated (non-HTTP scopes, disabled options,
    methods outside ``cacheable_methods``) are forwarded to the application
    untouched and keep streaming.

    Args:
        app: The ASGI application to wrap.
        options: Caching configuration. Defaults to ``CacheOptions()``.
        spool_max_size: Size in bytes above which a captured body is written
            to disk.

    Example:
        ```python
        from etagware import CacheControlBuilder, CacheOptions
        from etagware.asgi import ASGIConditionalCacheMiddleware

        app = ASGIConditionalCacheMiddleware(
            app=my_asgi_app,
            options=CacheOptions(
                cache_control=CacheControlBuilder.create().public().max_age(3600),
            ),
        )
        ```
    """

    def __init__(
        self,
        app: _ASGIApp,
        options: CacheOptions | None = None,
        spool_max_size: int = DEFAULT_SPOOL_MAX_SIZE,
    ) -> None:
        self.app = app
        self.options = options if options is not None else CacheOptions()
        self.spool_max_size = spool_max_size

        logger.info(
            "Initialized ASGIConditionalCacheMiddleware with enabled=%s, etag_algorithm=%s, weak=%s",
            self.options.enabled,
            self.options.etag_algorithm,
            self.options.use_weak_etag,
        )

    @classmethod
    def from_config(cls, app: _ASGIApp, config: t.Mapping[str, t.Any]) -> "ASGIConditionalCacheMiddleware":
        """Create the middleware from the ``"http_cache"`` section of ``config``."""
        return cls(app, options=options_from_config(config))

    async def __call__(self, scope: _Scope, receive: _Receive, send: _Send) -> None:
        """
        Handle an ASGI request.

        Args:
            scope: The ASGI scope dictionary.
            receive: The ASGI receive callable.
            send: The ASGI send callable.
        """
        # Only handle HTTP requests
        if scope["type"] != "http":
            logger.debug("Skipping non-HTTP request: type=%s", scope["type"])
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "GET")
        path = scope.get("path", "/")

        if not self.options.enabled or not is_cacheable_method(self.options, method):
            logger.debug("Forwarding request without conditional caching: method=%s path=%s", method, path)
            await self.app(scope, receive, send)
            return

        logger.debug("Incoming HTTP request: method=%s path=%s", method, path)

        spool = tempfile.SpooledTemporaryFile(max_size=self.spool_max_size)
        try:
            # Closure over scope, receive and the spool of this request only
            async def send_request_to_app(request: Request) -> Response:
                status_code = 200
                response_headers: list[tuple[bytes, bytes]] = []
                bytes_received = 0

                async def inner_send(message: dict[str, t.Any]) -> None:
                    nonlocal status_code, response_headers, bytes_received
                    if message["type"] == "http.response.start":
                        status_code = message["status"]
                        response_headers = list(message.get("headers", []))
                        logger.debug("Application response started: status=%d", status_code)
                    elif message["type"] == "http.response.body":
                        body_chunk = message.get("body", b"")
                        if body_chunk:
                            await to_thread.run_sync(spool.write, body_chunk)
                            bytes_received += len(body_chunk)

                await self.app(self._capturable_scope(scope), receive, inner_send)
                logger.debug(
                    "Application response complete: status=%d total_bytes=%d",
                    status_code,
                    bytes_received,
                )

                spool.seek(0)
                pairs = [(key.decode("latin1"), value.decode("latin1")) for key, value in response_headers]
                return Response(
                    status_code=status_code,
                    headers=Headers.from_pairs(filter_pairs(pairs, ["Transfer-Encoding"])),
                    body=FileStream(spool),  # type: ignore[arg-type]
                )

            interceptor = AsyncCachingInterceptor(send_request_to_app, self.options)
            request = self._asgi_to_internal_request(scope)
            response = await interceptor.handle_request(request)

            logger.info(
                "Request processed: method=%s path=%s status=%d",
                method,
                path,
                response.status_code,
            )
            await self._send_internal_response(response, send)

        except Exception as e:
            logger.error(
                "Error processing request: method=%s path=%s error=%s",
                method,
                path,
                str(e),
                exc_info=True,
            )
            raise
        finally:
            spool.close()

    def _capturable_scope(self, scope: _Scope) -> _Scope:
        """
        Hide extensions that let the application send its body outside
        ``http.response.body`` messages, which the middleware cannot capture.
        """
        extensions = scope.get("extensions")
        if not extensions or CAPTURE_UNSUPPORTED_EXTENSIONS.isdisjoint(extensions):
            return scope

        app_scope = t.cast(_Scope, dict(scope))
        app_scope["extensions"] = {
            name: value for name, value in extensions.items() if name not in CAPTURE_UNSUPPORTED_EXTENSIONS
        }
        return app_scope

    def _asgi_to_internal_request(self, scope: _Scope) -> Request:
        """
        Convert an ASGI HTTP scope to an internal Request object.

        The request body is never needed, so ``receive`` is left to the
        application.
        """
        scheme = scope.get("scheme", "http")
        server = scope.get("server") or ("localhost", 80)
        host = server[0]
        port = server[1] if server[1] is not None else (443 if scheme == "https" else 80)

        # Add port to host if non-standard
        if (scheme == "http" and port != 80) or (scheme == "https" and port != 443):
            host = f"{host}:{port}"

        path = scope.get("path", "/")
        query_string = scope.get("query_string", b"")
        if query_string:
            path = f"{path}?{query_string.decode('latin1')}"

        return Request(
            method=scope.get("method", "GET"),
            url=f"{scheme}://{host}{path}",
            headers=Headers.from_pairs(
                (key.decode("latin1"), value.decode("latin1")) for key, value in scope.get("headers", [])
            ),
        )

    async def _send_internal_response(self, response: Response, send: _Send) -> None:
        headers: list[tuple[bytes, bytes]] = [
            (key.encode("latin1"), value.encode("latin1")) for key, value in response.headers.pairs()
        ]

        await send(
            {
                "type": "http.response.start",
                "status": response.status_code,
                "headers": headers,
            }
        )

        bytes_sent = 0
        # 304 responses never carry a body
        if response.status_code != 304:
            while True:
                chunk = await to_thread.run_sync(response.body.read_chunk, CHUNK_SIZE)
                if not chunk:
                    break
                await send(
                    {
                        "type": "http.response.body",
                        "body": chunk,
                        "more_body": True,
                    }
                )
                bytes_sent += len(chunk)

        await send(
            {
                "type": "http.response.body",
                "body": b"",
                "more_body": False,
            }
        )
        logger.debug(
            "Response fully sent: status=%d total_bytes=%d",
            response.status_code,
            bytes_sent,
        )
