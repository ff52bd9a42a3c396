"""Reader, Writer and Seeker implementations over native Python streams.

``StreamOperations`` holds the single implementation of the capability
methods. It only needs a native stream (anything with ``read``, ``write``
or ``seek``) and a little context for error messages, so it backs both the
``File`` handle and ``StreamAdapter``, which gives the same call surface to
any other stream-like object.

Example:

    >>> import io
    >>> from f9_file_io.streams import adapt
    >>> stream = adapt(io.BytesIO())
    >>> stream.fwrite("hello")
    >>> stream.fseek(0)
    0
    >>> stream.fread()
    'hello'

    >>> # In-memory text streams work through the same interface
    >>> text = adapt(io.StringIO("line"))
    >>> text.fread_u8()
    b'line'

"""

from __future__ import annotations

import errno
import io
import logging
import os
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from .interfaces import (
    FileEncodingError,
    FileError,
    FileIOError,
    Reader,
    SeekFrom,
    Seeker,
    Writer,
)

if TYPE_CHECKING:
    from .interfaces import ByteLike, PathLike
    from .options import FileOptions

logger = logging.getLogger(__name__)

ENCODING = "utf-8"


def is_text_stream(stream: Any) -> bool:
    """Return True if ``stream`` reads and writes ``str`` rather than bytes."""
    if isinstance(stream, io.TextIOBase):
        return True
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        return False
    return isinstance(getattr(stream, "encoding", None), str)


def coerce_seek_target(position: int | SeekFrom) -> SeekFrom:
    """Normalise an absolute offset or a ``SeekFrom`` into a ``SeekFrom``.

    Raises:
        TypeError: If ``position`` is neither an ``int`` nor a ``SeekFrom``.
        ValueError: If an absolute offset is negative.

    Offsets too large for the platform are rejected later by ``fseek``.

    """
    if isinstance(position, SeekFrom):
        return position
    if isinstance(position, bool) or not isinstance(position, int):
        msg = f"Unsupported seek position: {type(position).__name__}"
        raise TypeError(msg)
    return SeekFrom.start(position)


class StreamOperations(ABC):
    """Capability methods shared by every handle wrapping a native stream.

    Subclasses provide ``_native_stream`` plus the ``_path`` and ``_options``
    used to give errors their context.
    """

    _path: str | None = None
    _options: FileOptions | None = None

    @abstractmethod
    def _native_stream(self) -> Any:
        """Return the native stream, raising if it is no longer usable."""

    def _error(
        self,
        error_type: type[FileError],
        message: str,
        cause: BaseException,
    ) -> FileError:
        return error_type(
            message,
            path=self._path,
            options=self._options,
            cause=cause,
        )

    def _read_all(self) -> bytes | str:
        stream = self._native_stream()
        try:
            data = stream.read()
        except OSError as exc:
            raise self._error(FileIOError, "Failed to read file", exc) from exc
        if data is None:
            # Non-blocking raw streams report "no data yet" as None
            data = b""
        if isinstance(data, (bytearray, memoryview)):
            data = bytes(data)
        logger.debug("Read %d items from %s", len(data), self._path or stream)
        return data

    def fread(self) -> str:
        """Read from the cursor to the end of the stream as UTF-8 text.

        Raises:
            FileEncodingError: If the bytes read are not valid UTF-8.
            FileIOError: If the native read fails.

        """
        data = self._read_all()
        if isinstance(data, str):
            return data
        try:
            return data.decode(ENCODING)
        except UnicodeDecodeError as exc:
            raise self._error(
                FileEncodingError,
                "Stream did not contain valid UTF-8",
                exc,
            ) from exc

    def fread_u8(self) -> bytes:
        """Read from the cursor to the end of the stream as raw bytes.

        Raises:
            FileIOError: If the native read fails.

        """
        data = self._read_all()
        if isinstance(data, str):
            return data.encode(ENCODING)
        return data

    def fwrite(self, data: object) -> None:
        """Write the string form of ``data`` at the cursor.

        Raises:
            TypeError: If ``data`` is binary; use ``fwrite_u8`` for bytes.
            FileIOError: If the native write fails or is short.

        """
        if isinstance(data, (bytes, bytearray, memoryview)):
            msg = "fwrite expects text; use fwrite_u8 for binary payloads"
            raise TypeError(msg)
        text = str(data)
        stream = self._native_stream()
        if is_text_stream(stream):
            self._write_payload(stream, text, len(text))
        else:
            payload = text.encode(ENCODING)
            self._write_payload(stream, payload, len(payload))

    def fwrite_u8(self, data: ByteLike) -> None:
        """Write raw bytes at the cursor without any text validation.

        Raises:
            TypeError: If ``data`` is not a bytes-like object.
            FileIOError: If the native write fails or is short, or the
                stream only accepts text.

        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            msg = f"fwrite_u8 expects bytes, got {type(data).__name__}"
            raise TypeError(msg)
        payload = bytes(data)
        stream = self._native_stream()
        if is_text_stream(stream):
            buffer = getattr(stream, "buffer", None)
            if buffer is None:
                raise self._error(
                    FileIOError,
                    "Text stream cannot accept raw bytes",
                    io.UnsupportedOperation("stream has no binary buffer"),
                )
            # Keep pending text ahead of the raw bytes
            self._flush_stream(stream)
            stream = buffer
        self._write_payload(stream, payload, len(payload))

    def fflush(self) -> None:
        """Push buffered writes down to the storage layer.

        Raises:
            FileIOError: If the native flush fails.

        """
        self._flush_stream(self._native_stream())

    def fseek(self, position: int | SeekFrom) -> int:
        """Move the cursor and return the resulting absolute position.

        ``position`` is either a non-negative offset from the start of the
        stream or a ``SeekFrom`` relative to the start, end or cursor.

        Raises:
            TypeError: If ``position`` is neither an ``int`` nor a ``SeekFrom``.
            ValueError: If an absolute ``int`` offset is negative.
            FileIOError: If the native seek fails or the offset does not fit
                the platform offset type.

        """
        target = coerce_seek_target(position)
        stream = self._native_stream()
        try:
            result = stream.seek(target.offset, target.whence)
        except OSError as exc:
            raise self._error(FileIOError, "Failed to seek file", exc) from exc
        except (OverflowError, ValueError) as exc:
            cause = OSError(errno.EINVAL, str(exc))
            raise self._error(FileIOError, "Seek offset out of range", cause) from exc
        logger.debug("Seeked %s to %r -> %s", self._path or stream, target, result)
        return int(result)

    def tell(self) -> int:
        """Return the current cursor position without moving it."""
        stream = self._native_stream()
        try:
            return int(stream.tell())
        except OSError as exc:
            raise self._error(FileIOError, "Failed to query position", exc) from exc

    def _write_payload(self, stream: Any, payload: bytes | str, size: int) -> None:
        try:
            written = stream.write(payload)
        except OSError as exc:
            raise self._error(FileIOError, "Failed to write file", exc) from exc
        if written is not None and written != size:
            short = OSError(errno.EIO, f"short write: {written} of {size}")
            raise self._error(FileIOError, "Failed to write file", short)
        logger.debug("Wrote %d items to %s", size, self._path or stream)

    def _flush_stream(self, stream: Any) -> None:
        flush = getattr(stream, "flush", None)
        if flush is None:
            return
        try:
            flush()
        except OSError as exc:
            raise self._error(FileIOError, "Failed to flush file", exc) from exc


class StreamAdapter(StreamOperations):
    """Gives any native stream the Reader, Writer and Seeker call surface.

    The adapter does not own the stream: closing the underlying object stays
    with the caller.
    """

    def __init__(self, stream: Any, *, name: PathLike | None = None) -> None:
        """Wrap ``stream``, optionally naming it for error messages."""
        if not any(hasattr(stream, attr) for attr in ("read", "write", "seek")):
            msg = f"Object is not a stream: {type(stream).__name__}"
            raise TypeError(msg)
        if name is None:
            native_name = getattr(stream, "name", None)
            if isinstance(native_name, (str, bytes, os.PathLike)):
                name = native_name
        self._stream = stream
        self._path = os.fsdecode(name) if name is not None else None

    @property
    def stream(self) -> Any:
        """The wrapped native stream."""
        return self._stream

    def _native_stream(self) -> Any:
        return self._stream

    def __repr__(self) -> str:
        """Return a representation naming the wrapped stream."""
        return f"StreamAdapter({self._stream!r})"


def adapt(stream: Any, *, name: PathLike | None = None) -> Any:
    """Return ``stream`` with the Reader, Writer and Seeker call surface.

    Objects that already implement all three capabilities, such as ``File``,
    are returned unchanged; anything else with ``read``, ``write`` or
    ``seek`` is wrapped in a ``StreamAdapter``.

    Raises:
        TypeError: If ``stream`` exposes none of the native operations.

    """
    if all(isinstance(stream, trait) for trait in (Reader, Writer, Seeker)):
        return stream
    return StreamAdapter(stream, name=name)
