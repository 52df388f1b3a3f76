from __future__ import annotations

import io
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import IO, Any, Iterator, Mapping

from etagware._core._headers import Headers
from etagware._exceptions import StreamReadError

CHUNK_SIZE = 8192


class BodyStream(ABC):
    """
    Seekable, re-readable response body.

    A body is read at least twice: once to fingerprint it and once to send it,
    so every implementation must be able to rewind.
    """

    @abstractmethod
    def rewind(self) -> None:
        raise NotImplementedError()

    @abstractmethod
    def at_end(self) -> bool:
        raise NotImplementedError()

    @abstractmethod
    def read_chunk(self, max_bytes: int) -> bytes:
        raise NotImplementedError()

    @abstractmethod
    def tell(self) -> int:
        raise NotImplementedError()

    @abstractmethod
    def seek(self, position: int) -> None:
        raise NotImplementedError()

    def close(self) -> None:  # noqa: B027
        pass

    def __iter__(self) -> Iterator[bytes]:
        while True:
            chunk = self.read_chunk(CHUNK_SIZE)
            if not chunk:
                return
            yield chunk

    def read(self) -> bytes:
        """
        Read the whole body from the start without moving the current position.
        """
        position = self.tell()
        try:
            self.rewind()
            return b"".join(self)
        finally:
            self.seek(position)


class FileStream(BodyStream):
    """
    A ``BodyStream`` over any seekable binary file object.

    Works with ``io.BytesIO``, ``tempfile.SpooledTemporaryFile`` or a regular
    file opened in ``"rb"`` mode. Failures of the underlying file are raised
    as ``StreamReadError``.
    """

    def __init__(self, fileobj: IO[bytes]) -> None:
        self._file = fileobj

    def rewind(self) -> None:
        self.seek(0)

    def at_end(self) -> bool:
        try:
            position = self._file.tell()
            self._file.seek(0, io.SEEK_END)
            end = self._file.tell()
            self._file.seek(position)
        except (OSError, ValueError) as exc:
            raise StreamReadError(f"Could not inspect the body stream: {exc}") from exc
        return position >= end

    def read_chunk(self, max_bytes: int) -> bytes:
        try:
            return self._file.read(max_bytes)
        except (OSError, ValueError) as exc:
            raise StreamReadError(f"Could not read the body stream: {exc}") from exc

    def tell(self) -> int:
        try:
            return self._file.tell()
        except (OSError, ValueError) as exc:
            raise StreamReadError(f"Could not inspect the body stream: {exc}") from exc

    def seek(self, position: int) -> None:
        try:
            self._file.seek(position)
        except (OSError, ValueError) as exc:
            raise StreamReadError(f"Could not seek the body stream: {exc}") from exc

    def close(self) -> None:
        self._file.close()


class ByteStream(FileStream):
    def __init__(self, content: bytes = b"") -> None:
        super().__init__(io.BytesIO(content))

    def __eq__(self, value: Any) -> bool:
        return isinstance(value, ByteStream) and self.read() == value.read()


@dataclass
class Request:
    method: str
    url: str = "/"
    headers: Headers = field(default_factory=lambda: Headers({}))
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def header_value(self, name: str) -> str:
        return self.headers.get(name, "")


@dataclass
class Response:
    """
    An outgoing response.

    Treated as immutable: the ``with_*`` helpers return a new ``Response``
    that shares the body stream with the original.
    """

    status_code: int
    headers: Headers = field(default_factory=lambda: Headers({}))
    body: BodyStream = field(default_factory=ByteStream)
    reason_phrase: str = ""
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def has_header(self, name: str) -> bool:
        return name in self.headers

    def header_value(self, name: str) -> str:
        return self.headers.get(name, "")

    def with_header(self, name: str, value: str) -> "Response":
        headers = self.headers.copy()
        if name in headers:
            del headers[name]
        headers[name] = value
        return replace(self, headers=headers)

    def without_header(self, name: str) -> "Response":
        headers = self.headers.copy()
        if name in headers:
            del headers[name]
        return replace(self, headers=headers)

    def with_status(self, status_code: int, reason_phrase: str = "") -> "Response":
        return replace(self, status_code=status_code, reason_phrase=reason_phrase)
