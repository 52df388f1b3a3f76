from __future__ import annotations

import logging
import os
import typing as t

from etagware._core._directives import CacheControlBuilder
from etagware._core._spec import CacheOptions
from etagware._utils import parse_bool

logger = logging.getLogger("etagware.config")

CONFIG_KEY = "http_cache"
DEFAULT_MAX_AGE = 300


class HttpCacheConfig(t.TypedDict, total=False):
    enabled: bool
    """Turns conditional caching on or off. Defaults to True."""

    max_age: int
    """Freshness lifetime for ``public, max-age=<n>``. Defaults to 300 seconds."""

    use_weak_etag: bool
    """When True, ETags are generated as ``W/"..."``."""

    etag_algorithm: str
    """``hashlib`` algorithm used for ETags. Defaults to ``md5``."""


def _build_options(
    enabled: bool,
    max_age: int,
    use_weak_etag: bool,
    etag_algorithm: str,
) -> CacheOptions:
    options = CacheOptions(
        enabled=enabled,
        cache_control=CacheControlBuilder.create().public().max_age(max_age),
        use_weak_etag=use_weak_etag,
        etag_algorithm=etag_algorithm,
    )
    logger.debug(
        "Built cache options: enabled=%s max_age=%d use_weak_etag=%s etag_algorithm=%s",
        enabled,
        max_age,
        use_weak_etag,
        etag_algorithm,
    )
    return options


def options_from_config(config: t.Mapping[str, t.Any]) -> CacheOptions:
    """
    Build ``CacheOptions`` from an application configuration mapping.

    Only the ``"http_cache"`` section is read. A missing section, or a key set
    to ``None``, means the default applies. With every default
    the result is ``Cache-Control: public, max-age=300`` with strong md5 ETags.

    Example:
        ```python
        options = options_from_config(
            {
                "http_cache": {
                    "enabled": True,
                    "max_age": 3600,
                    "use_weak_etag": False,
                    "etag_algorithm": "sha256",
                }
            }
        )
        ```
    """
    section: HttpCacheConfig = config.get(CONFIG_KEY) or {}
    values = {key: value for key, value in section.items() if value is not None}

    max_age = values.get("max_age", DEFAULT_MAX_AGE)
    if isinstance(max_age, bool) or not isinstance(max_age, int):
        raise TypeError(f"'{CONFIG_KEY}.max_age' must be an integer, got {max_age!r}")

    return _build_options(
        enabled=parse_bool(values.get("enabled", True)),
        max_age=max_age,
        use_weak_etag=parse_bool(values.get("use_weak_etag", False)),
        etag_algorithm=values.get("etag_algorithm", "md5"),
    )


def options_from_environ(
    environ: t.Mapping[str, str] | None = None,
    prefix: str = "HTTP_CACHE_",
) -> CacheOptions:
    """
    Build ``CacheOptions`` from environment variables.

    Reads ``<prefix>ENABLED``, ``<prefix>MAX_AGE``, ``<prefix>USE_WEAK_ETAG``
    and ``<prefix>ETAG_ALGORITHM``. Boolean variables accept
    ``1/true/yes/on`` and ``0/false/no/off``.
    """
    env = os.environ if environ is None else environ

    raw_max_age = env.get(f"{prefix}MAX_AGE")
    try:
        max_age = int(raw_max_age) if raw_max_age is not None else DEFAULT_MAX_AGE
    except ValueError as exc:
        raise ValueError(f"{prefix}MAX_AGE must be an integer, got {raw_max_age!r}") from exc

    return _build_options(
        enabled=parse_bool(env.get(f"{prefix}ENABLED", "true")),
        max_age=max_age,
        use_weak_etag=parse_bool(env.get(f"{prefix}USE_WEAK_ETAG", "false")),
        etag_algorithm=env.get(f"{prefix}ETAG_ALGORITHM", "md5"),
    )
