from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from etagware._core.models import CHUNK_SIZE, BodyStream
from etagware._exceptions import StreamReadError, UnsupportedAlgorithm

if TYPE_CHECKING:
    from etagware._core.models import Response

WEAK_PREFIX = "W/"

logger = logging.getLogger("etagware.core.fingerprint")


@dataclass(frozen=True)
class Fingerprint:
    """
    A content fingerprint, rendered on the wire as an ETag.

    Strong fingerprints promise byte-for-byte equality and render as
    ``"<hash>"``; weak ones only promise semantic equality and render as
    ``W/"<hash>"``.

    Examples:
        >>> str(Fingerprint("abc"))
        '"abc"'
        >>> str(Fingerprint("abc", weak=True))
        'W/"abc"'
        >>> Fingerprint.parse('W/"abc"')
        Fingerprint(hash='abc', weak=True)
    """

    hash: str
    weak: bool = False

    @classmethod
    def parse(cls, etag: str) -> "Fingerprint":
        return cls(hash=extract_hash(etag), weak=is_weak(etag))

    def __str__(self) -> str:
        if self.weak:
            return f'{WEAK_PREFIX}"{self.hash}"'
        return f'"{self.hash}"'


def new_digest(algorithm: str) -> "hashlib._Hash":
    """
    Create an incremental digest context for ``algorithm``.

    Raises:
        UnsupportedAlgorithm: when hashlib does not know the algorithm, or when
            it is a variable-length digest (``shake_128``, ``shake_256``) whose
            hex output would need an explicit length.
    """
    try:
        digest = hashlib.new(algorithm.lower())
    except (ValueError, TypeError) as exc:
        raise UnsupportedAlgorithm(f"Unsupported digest algorithm: {algorithm!r}") from exc
    if digest.digest_size == 0:
        raise UnsupportedAlgorithm(f"Variable-length digest algorithms are not supported: {algorithm!r}")
    return digest


def compute_fingerprint(stream: BodyStream, algorithm: str = "md5", weak: bool = False) -> Fingerprint:
    """
    Fingerprint the whole body without holding it in memory.

    The stream is rewound and read in ``CHUNK_SIZE`` chunks into an incremental
    digest. Whatever happens, the stream is moved back to the position it had
    before the call, so the body can still be sent afterwards.

    Args:
        stream: The body to fingerprint.
        algorithm: Any fixed-length ``hashlib`` algorithm name (``md5``,
            ``sha1``, ``sha256``, ...). Case-insensitive.
        weak: Produce a weak fingerprint.

    Raises:
        UnsupportedAlgorithm: The algorithm is unknown.
        StreamReadError: The stream could not be read to the end.
    """
    digest = new_digest(algorithm)

    position = stream.tell()
    total = 0
    try:
        stream.rewind()
        while not stream.at_end():
            chunk = stream.read_chunk(CHUNK_SIZE)
            if not chunk:
                raise StreamReadError("Body stream stopped returning data before reaching its end")
            digest.update(chunk)
            total += len(chunk)
    finally:
        stream.seek(position)

    fingerprint = Fingerprint(hash=digest.hexdigest(), weak=weak)
    logger.debug("Computed fingerprint: algorithm=%s bytes=%d etag=%s", algorithm, total, fingerprint)
    return fingerprint


def generate(response: Response) -> str:
    """Strong md5 ETag for the response body."""
    return str(compute_fingerprint(response.body, "md5"))


def generate_weak(response: Response) -> str:
    """Weak md5 ETag for the response body."""
    return str(compute_fingerprint(response.body, "md5", weak=True))


def generate_with_algorithm(response: Response, algorithm: str = "md5", weak: bool = False) -> str:
    return str(compute_fingerprint(response.body, algorithm, weak=weak))


def is_weak(etag: str) -> bool:
    return etag.startswith(WEAK_PREFIX)


def extract_hash(etag: str) -> str:
    """
    Strip the weak prefix and the surrounding quotes.

    Examples:
        >>> extract_hash('W/"abc"')
        'abc'
        >>> extract_hash('"abc"')
        'abc'
    """
    if is_weak(etag):
        etag = etag[len(WEAK_PREFIX) :]
    return etag.strip('"')


def matches(etag1: str, etag2: str, weak_comparison: bool = True) -> bool:
    """
    Compare two ETags.

    Weak comparison only looks at the hashes, so ``"x"`` and ``W/"x"`` are
    equal. Strong comparison requires the exact same text, prefix included.

    Examples:
        >>> matches('"x"', 'W/"x"')
        True
        >>> matches('"x"', 'W/"x"', weak_comparison=False)
        False
    """
    if weak_comparison:
        return extract_hash(etag1) == extract_hash(etag2)
    return etag1 == etag2
