from __future__ import annotations

import logging
from typing import Awaitable, Callable

from anyio import to_thread

from etagware._core._spec import CacheOptions, decide, is_cacheable_method
from etagware._core.models import Request, Response

logger = logging.getLogger("etagware.interceptor")


class AsyncCachingInterceptor:
    """
    Async counterpart of ``CachingInterceptor``.

    Fingerprinting reads the whole body, which may live in a file on disk, so
    the decision runs in a worker thread instead of blocking the event loop.

    Args:
        request_handler: Coroutine function that handles the request and
            returns the full response.
        options: Caching configuration. Defaults to ``CacheOptions()``.
    """

    def __init__(
        self,
        request_handler: Callable[[Request], Awaitable[Response]],
        options: CacheOptions | None = None,
    ) -> None:
        self.handle = request_handler
        self.options = options if options is not None else CacheOptions()

    async def handle_request(self, request: Request) -> Response:
        if not self.options.enabled:
            logger.debug("Conditional caching is disabled, forwarding request")
            return await self.handle(request)

        if not is_cacheable_method(self.options, request.method):
            logger.debug("Method %s is not cacheable, forwarding request", request.method)
            return await self.handle(request)

        response = await self.handle(request)

        decision = await to_thread.run_sync(decide, self.options, request, response)
        logger.debug("Handling decision: %s", type(decision).__name__)
        return decision.response
