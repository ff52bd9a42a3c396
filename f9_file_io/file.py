"""File handle produced by opening a ``FileOptions`` value.

A ``File`` owns exactly one native stream, opened with a single ``os.open``
call whose flags come from the option set. Reads, writes and seeks go
straight to that stream. ``close`` and ``delete`` consume the handle: every
call made afterwards raises ``HandleClosedError``.

Example:

    >>> from f9_file_io import FileOptions
    >>> fh = FileOptions.new().create(True).write(True).truncate(True).open("out.bin")
    >>> fh.fwrite_u8(b"\\x00\\xff")
    >>> fh.close()

    >>> fh = FileOptions.READ.open("out.bin")
    >>> fh.fread_u8()
    b'\\x00\\xff'
    >>> fh.delete()

Leaving a ``with`` block releases the stream without the durability sync
that ``close`` performs.

"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, BinaryIO

from .interfaces import FileIOError, HandleClosedError, OpenError
from .streams import StreamOperations
from .validation import DEFAULT_CREATE_MODE, open_flags, stream_mode, validate_options

if TYPE_CHECKING:
    from types import TracebackType

    from .interfaces import PathLike
    from .options import FileOptions

logger = logging.getLogger(__name__)


class File(StreamOperations):
    """Owned handle on one open file, tagged with its name and options."""

    def __init__(self, name: str, options: FileOptions, stream: BinaryIO) -> None:
        """Wrap an already opened stream; use ``FileOptions.open`` instead."""
        self._path = name
        self._options = options
        self._stream: BinaryIO | None = stream

    @classmethod
    def open(cls, options: FileOptions, file_name: PathLike) -> File:
        """Validate ``options`` and open ``file_name`` with one native call.

        Args:
            options: Intents to open the file with.
            file_name: Path of the file to open.

        Returns:
            A handle owning the opened stream.

        Raises:
            InvalidOptionsError: If the options are uninitialized or
                contradictory. Storage is not touched.
            OpenError: If the native open call fails.

        """
        name = os.fsdecode(os.fspath(file_name))
        validate_options(options, name)

        try:
            fd = os.open(name, open_flags(options), DEFAULT_CREATE_MODE)
        except OSError as exc:
            raise OpenError(
                "Failed to open file",
                path=name,
                options=options,
                cause=exc,
            ) from exc

        try:
            stream = os.fdopen(fd, stream_mode(options))
        except OSError as exc:
            os.close(fd)
            raise OpenError(
                "Failed to open file",
                path=name,
                options=options,
                cause=exc,
            ) from exc

        logger.debug("Opened %s with %s", name, options)
        return cls(name, options, stream)

    @property
    def name(self) -> str:
        """Name the file was opened with."""
        return self._path

    @property
    def options(self) -> FileOptions:
        """Options the file was opened with."""
        return self._options

    @property
    def closed(self) -> bool:
        """Whether the handle has been consumed by ``close`` or ``delete``."""
        return self._stream is None

    def close(self) -> None:
        """Flush and sync pending writes to durable storage, consuming the handle.

        Raises:
            HandleClosedError: If the handle was already consumed.
            FileIOError: If flushing, syncing or releasing the stream fails.

        """
        stream = self._take_stream()
        try:
            stream.flush()
            os.fsync(stream.fileno())
        except OSError as exc:
            self._discard(stream)
            raise self._error(FileIOError, "Failed to sync file", exc) from exc
        self._release(stream, "Failed to close file")
        logger.debug("Closed %s", self._path)

    def delete(self) -> None:
        """Remove the file from storage, consuming the handle.

        Raises:
            HandleClosedError: If the handle was already consumed.
            FileIOError: If the file cannot be removed. Pending writes that fail
                to flush are dropped with a warning.

        """
        stream = self._take_stream()
        self._discard(stream)
        try:
            os.remove(self._path)
        except OSError as exc:
            raise self._error(FileIOError, "Failed to delete file", exc) from exc
        logger.debug("Deleted %s", self._path)

    def _native_stream(self) -> BinaryIO:
        if self._stream is None:
            raise HandleClosedError(self._path, options=self._options)
        return self._stream

    def _take_stream(self) -> BinaryIO:
        stream = self._native_stream()
        self._stream = None
        return stream

    def _release(self, stream: BinaryIO, message: str) -> None:
        try:
            stream.close()
        except OSError as exc:
            raise self._error(FileIOError, message, exc) from exc

    def _discard(self, stream: BinaryIO) -> None:
        """Close ``stream``, logging rather than raising a release failure."""
        try:
            stream.close()
        except OSError as exc:
            logger.warning("Failed to release %s: %s", self._path, exc)

    def __enter__(self) -> File:
        """Return the handle itself."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Release the stream unless ``close`` or ``delete`` already did."""
        if self._stream is None:
            return
        stream = self._take_stream()
        if exc_type is None:
            self._release(stream, "Failed to close file")
        else:
            self._discard(stream)

    def __repr__(self) -> str:
        """Return a representation with the name, options and state."""
        return (
            f"File(name={self._path!r}, options={self._options!r}, "
            f"closed={self.closed})"
        )
