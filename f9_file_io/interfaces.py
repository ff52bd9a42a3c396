"""Core interfaces, error types, and seek targets shared by all handles."""

from __future__ import annotations

import errno
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    from .options import FileOptions

PathLike = Union[str, Path, os.PathLike]
ByteLike = Union[bytes, bytearray, memoryview]


class FileError(RuntimeError):
    """Base exception for every fallible file operation.

    Carries the human readable message, the file name and options the handle
    was working with, and the native error that caused the failure.
    """

    def __init__(
        self,
        message: str,
        *,
        path: PathLike | None = None,
        options: FileOptions | None = None,
        cause: BaseException | None = None,
    ) -> None:
        """Initialise the error with optional file, options and cause context."""
        name = os.fspath(path) if path is not None else None
        detail = message if name is None else ": ".join((message, str(name)))
        if cause is not None:
            reason = getattr(cause, "strerror", None) or str(cause)
            if reason:
                detail = f"{detail} ({reason})"
        super().__init__(detail)
        self.message = message
        self.path = name
        self.options = options
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def errno(self) -> int | None:
        """Native error number when the cause is an ``OSError``."""
        return getattr(self.cause, "errno", None)


class InvalidOptionsError(FileError):
    """Raised when an option set cannot be opened, before storage is touched."""

    @classmethod
    def _invalid(
        cls,
        message: str,
        path: PathLike | None,
        options: FileOptions | None,
    ) -> InvalidOptionsError:
        cause = OSError(errno.EINVAL, message)
        return cls(message, path=path, options=options, cause=cause)

    @classmethod
    def uninitialized(
        cls,
        path: PathLike | None,
        options: FileOptions | None,
    ) -> InvalidOptionsError:
        """Return an error for options that never had an intent enabled."""
        return cls._invalid("Options uninitialized", path, options)

    @classmethod
    def no_access_mode(
        cls,
        path: PathLike | None,
        options: FileOptions | None,
    ) -> InvalidOptionsError:
        """Return an error for options without read, write or append."""
        return cls._invalid("Options request no access mode", path, options)

    @classmethod
    def create_without_write(
        cls,
        path: PathLike | None,
        options: FileOptions | None,
    ) -> InvalidOptionsError:
        """Return an error for create intents lacking write access."""
        return cls._invalid(
            "Creating a file requires write or append access",
            path,
            options,
        )

    @classmethod
    def truncate_without_write(
        cls,
        path: PathLike | None,
        options: FileOptions | None,
    ) -> InvalidOptionsError:
        """Return an error for truncation lacking write access."""
        return cls._invalid("Truncation requires write access", path, options)

    @classmethod
    def truncate_with_append(
        cls,
        path: PathLike | None,
        options: FileOptions | None,
    ) -> InvalidOptionsError:
        """Return an error for the contradictory truncate plus append request."""
        return cls._invalid(
            "Truncation cannot be combined with append",
            path,
            options,
        )


class OpenError(FileError):
    """Raised when the native open call fails."""


class FileIOError(FileError):
    """Raised when a read, write, flush, seek, close or delete call fails."""


class FileEncodingError(FileIOError):
    """Raised when text is requested from bytes that are not valid UTF-8."""


class HandleClosedError(FileError):
    """Raised when a handle is used after ``close`` or ``delete``."""

    def __init__(
        self,
        path: PathLike | None = None,
        *,
        options: FileOptions | None = None,
    ) -> None:
        """Create a closed-handle error for the given file."""
        super().__init__("File handle already closed", path=path, options=options)


@dataclass(frozen=True)
class SeekFrom:
    """Seek target relative to the start, the end, or the current position."""

    whence: int
    offset: int

    def __post_init__(self) -> None:
        if self.whence not in (os.SEEK_SET, os.SEEK_CUR, os.SEEK_END):
            msg = f"Unsupported seek origin: {self.whence}"
            raise ValueError(msg)
        if self.whence == os.SEEK_SET and self.offset < 0:
            msg = f"Offset from start cannot be negative: {self.offset}"
            raise ValueError(msg)

    @classmethod
    def start(cls, offset: int) -> SeekFrom:
        """Absolute offset from the beginning of the stream."""
        return cls(os.SEEK_SET, offset)

    @classmethod
    def end(cls, offset: int = 0) -> SeekFrom:
        """Signed offset from the end of the stream."""
        return cls(os.SEEK_END, offset)

    @classmethod
    def current(cls, offset: int) -> SeekFrom:
        """Signed offset from the current cursor."""
        return cls(os.SEEK_CUR, offset)


@runtime_checkable
class Reader(Protocol):
    """Capability to read a stream to its end as text or raw bytes."""

    def fread(self) -> str:
        """Read the remaining contents as UTF-8 text."""
        ...

    def fread_u8(self) -> bytes:
        """Read the remaining contents as raw bytes."""
        ...


@runtime_checkable
class Writer(Protocol):
    """Capability to write text or raw bytes and flush them."""

    def fwrite(self, data: object) -> None:
        """Write the string form of ``data`` encoded as UTF-8."""
        ...

    def fwrite_u8(self, data: ByteLike) -> None:
        """Write raw bytes."""
        ...

    def fflush(self) -> None:
        """Push buffered writes to the storage layer."""
        ...


@runtime_checkable
class Seeker(Protocol):
    """Capability to reposition the stream cursor."""

    def fseek(self, position: int | SeekFrom) -> int:
        """Move the cursor and return the new absolute position."""
        ...


@runtime_checkable
class SupportsRead(Protocol):
    """Native stream contract consumed by the reader capability."""

    def read(self, size: int = -1, /) -> bytes | str:
        """Read up to ``size`` items, or everything when negative."""
        ...


@runtime_checkable
class SupportsWrite(Protocol):
    """Native stream contract consumed by the writer capability."""

    def write(self, data: Any, /) -> int | None:
        """Write ``data`` and return the amount written."""
        ...


@runtime_checkable
class SupportsSeek(Protocol):
    """Native stream contract consumed by the seeker capability."""

    def seek(self, offset: int, whence: int = 0, /) -> int:
        """Reposition the stream and return the new position."""
        ...
