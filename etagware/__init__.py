from etagware._async_interceptor import AsyncCachingInterceptor as AsyncCachingInterceptor
from etagware._config import (
    HttpCacheConfig as HttpCacheConfig,
    options_from_config as options_from_config,
    options_from_environ as options_from_environ,
)
from etagware._core import (
    CHUNK_SIZE as CHUNK_SIZE,
    Annotate as Annotate,
    BodyStream as BodyStream,
    ByteStream as ByteStream,
    CacheControlBuilder as CacheControlBuilder,
    CacheOptions as CacheOptions,
    CachingDecision as CachingDecision,
    FileStream as FileStream,
    Fingerprint as Fingerprint,
    Headers as Headers,
    NotModified as NotModified,
    PassThrough as PassThrough,
    Request as Request,
    Response as Response,
    compute_fingerprint as compute_fingerprint,
    decide as decide,
    etag_matches as etag_matches,
    extract_hash as extract_hash,
    generate as generate,
    generate_weak as generate_weak,
    generate_with_algorithm as generate_with_algorithm,
    is_cacheable_method as is_cacheable_method,
    is_cacheable_status as is_cacheable_status,
    is_weak as is_weak,
    matches as matches,
)
from etagware._exceptions import (
    EtagwareError as EtagwareError,
    FingerprintError as FingerprintError,
    StreamReadError as StreamReadError,
    UnsupportedAlgorithm as UnsupportedAlgorithm,
)
from etagware._sync_interceptor import CachingInterceptor as CachingInterceptor

__all__ = (
    ## Decisions
    "CachingDecision",
    "PassThrough",
    "Annotate",
    "NotModified",
    "decide",
    "etag_matches",
    "is_cacheable_method",
    "is_cacheable_status",
    ## Options
    "CacheOptions",
    "HttpCacheConfig",
    "options_from_config",
    "options_from_environ",
    ## Fingerprints
    "CHUNK_SIZE",
    "Fingerprint",
    "compute_fingerprint",
    "generate",
    "generate_weak",
    "generate_with_algorithm",
    "is_weak",
    "extract_hash",
    "matches",
    ## Directives
    "CacheControlBuilder",
    ## Models
    "Request",
    "Response",
    "BodyStream",
    "FileStream",
    "ByteStream",
    ## Headers
    "Headers",
    ## Exceptions
    "EtagwareError",
    "FingerprintError",
    "UnsupportedAlgorithm",
    "StreamReadError",
    # Interceptors
    "CachingInterceptor",
    "AsyncCachingInterceptor",
)
