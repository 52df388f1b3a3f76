from __future__ import annotations

import typing as t

from etagware._core._directives import CacheControlBuilder

try:
    import fastapi
except ImportError as e:
    raise ImportError(
        "fastapi is required to use etagware.fastapi module. "
        "Please install etagware with the 'fastapi' extra, "
        "e.g., 'pip install etagware[fastapi]'."
    ) from e


def cache(
    *,
    max_age: int | None = None,
    s_maxage: int | None = None,
    public: bool = False,
    private: bool = False,
    no_cache: bool = False,
    no_store: bool = False,
    no_transform: bool = False,
    must_revalidate: bool = False,
    proxy_revalidate: bool = False,
    immutable: bool = False,
    stale_while_revalidate: int | None = None,
    stale_if_error: int | None = None,
) -> t.Any:
    """
    Set a route-specific ``Cache-Control`` header on FastAPI responses.

    ``ASGIConditionalCacheMiddleware`` never replaces a Cache-Control header
    set by the application, so this overrides the middleware's default
    directives for one route while the middleware still adds the ETag.

    Directives are rendered in a fixed order: public or private, no-cache,
    no-store, max-age, s-maxage, must-revalidate, proxy-revalidate,
    no-transform, immutable, stale-while-revalidate, stale-if-error. ``public``
    and ``private`` exclude each other; when both are given, ``private`` wins.

    Args:
        max_age: Seconds the response stays fresh. [RFC 9111, Section 5.2.2.1]
        s_maxage: Freshness for shared caches only. [RFC 9111, Section 5.2.2.10]
        public: Any cache may store the response. [RFC 9111, Section 5.2.2.9]
        private: Only the user's own cache may store it. [RFC 9111, Section 5.2.2.7]
        no_cache: Caches must revalidate before reuse. [RFC 9111, Section 5.2.2.4]
        no_store: Nothing may store the response. [RFC 9111, Section 5.2.2.5]
        no_transform: Intermediaries must not transform it. [RFC 9111, Section 5.2.2.6]
        must_revalidate: Stale copies must be revalidated. [RFC 9111, Section 5.2.2.2]
        proxy_revalidate: Same, for shared caches only. [RFC 9111, Section 5.2.2.8]
        immutable: The body never changes while fresh. [RFC 8246]
        stale_while_revalidate: Seconds a stale copy may be served while
            revalidating. [RFC 5861, Section 3]
        stale_if_error: Seconds a stale copy may be served when the origin
            fails. [RFC 5861, Section 4]

    Returns:
        A dependency that adds the Cache-Control header to the response.

    Examples:
        >>> from fastapi import FastAPI
        >>> from etagware.fastapi import cache
        >>>
        >>> app = FastAPI()
        >>>
        >>> # Versioned static asset, cached for a year
        >>> @app.get("/static/app.v123.js")
        >>> async def get_script(
        ...     _: None = cache(public=True, max_age=31536000, immutable=True)
        ... ):
        ...     return {"script": "app.js"}
    """

    builder = CacheControlBuilder.create()
    if public:
        builder.public()
    if private:
        builder.private()
    if no_cache:
        builder.no_cache()
    if no_store:
        builder.no_store()
    if max_age is not None:
        builder.max_age(max_age)
    if s_maxage is not None:
        builder.s_maxage(s_maxage)
    if must_revalidate:
        builder.must_revalidate()
    if proxy_revalidate:
        builder.proxy_revalidate()
    if no_transform:
        builder.no_transform()
    if immutable:
        builder.immutable()
    if stale_while_revalidate is not None:
        builder.stale_while_revalidate(stale_while_revalidate)
    if stale_if_error is not None:
        builder.stale_if_error(stale_if_error)

    header_value = builder.render()

    def add_cache_headers(response: fastapi.Response) -> t.Any:
        """Add the Cache-Control header to the response."""
        if header_value:
            response.headers["Cache-Control"] = header_value

    return fastapi.Depends(add_cache_headers)
