from etagware._core._directives import CacheControlBuilder as CacheControlBuilder
from etagware._core._fingerprint import (
    CHUNK_SIZE as CHUNK_SIZE,
    Fingerprint as Fingerprint,
    compute_fingerprint as compute_fingerprint,
    extract_hash as extract_hash,
    generate as generate,
    generate_weak as generate_weak,
    generate_with_algorithm as generate_with_algorithm,
    is_weak as is_weak,
    matches as matches,
)
from etagware._core._headers import Headers as Headers
from etagware._core._spec import (
    Annotate as Annotate,
    CacheOptions as CacheOptions,
    CachingDecision as CachingDecision,
    NotModified as NotModified,
    PassThrough as PassThrough,
    decide as decide,
    etag_matches as etag_matches,
    is_cacheable_method as is_cacheable_method,
    is_cacheable_status as is_cacheable_status,
)
from etagware._core.models import (
    BodyStream as BodyStream,
    ByteStream as ByteStream,
    FileStream as FileStream,
    Request as Request,
    Response as Response,
)

__all__ = (
    ## Decisions
    "CachingDecision",
    "PassThrough",
    "Annotate",
    "NotModified",
    "CacheOptions",
    "decide",
    "etag_matches",
    "is_cacheable_method",
    "is_cacheable_status",
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
)
