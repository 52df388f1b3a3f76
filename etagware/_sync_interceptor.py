from __future__ import annotations

import logging
from typing import Callable

from etagware._core._spec import CacheOptions, decide, is_cacheable_method
from etagware._core.models import Request, Response

logger = logging.getLogger("etagware.interceptor")


class CachingInterceptor:
    """
    Adds ETag and Cache-Control headers to responses and answers matching
    conditional requests with ``304 Not Modified``.

    This class is independent of any specific web framework and works only with
    internal models. It delegates request handling to a user-provided callable,
    which is called exactly once for every request, including requests that
    end up as ``304``: the body has to exist to be fingerprinted.

    Args:
        request_handler: Callable that handles the request and returns the
            full response.
        options: Caching configuration. Defaults to ``CacheOptions()``.
    """

    def __init__(
        self,
        request_handler: Callable[[Request], Response],
        options: CacheOptions | None = None,
    ) -> None:
        self.handle = request_handler
        self.options = options if options is not None else CacheOptions()

    def handle_request(self, request: Request) -> Response:
        if not self.options.enabled:
            logger.debug("Conditional caching is disabled, forwarding request")
            return self.handle(request)

        if not is_cacheable_method(self.options, request.method):
            logger.debug("Method %s is not cacheable, forwarding request", request.method)
            return self.handle(request)

        response = self.handle(request)

        decision = decide(self.options, request, response)
        logger.debug("Handling decision: %s", type(decision).__name__)
        return decision.response
