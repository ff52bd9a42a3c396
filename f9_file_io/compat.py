"""Exception translation for code expecting builtin file-operation errors.

``FileError`` keeps the native error as its cause; this module converts it
back into what the builtin ``open()`` and file objects would have raised,
so f9_file_io handles can stand in for builtin files.
"""

from __future__ import annotations

import functools
from contextlib import contextmanager
from typing import TYPE_CHECKING, TypeVar

from f9_file_io.interfaces import (
    FileEncodingError,
    FileError,
    HandleClosedError,
    InvalidOptionsError,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from types import TracebackType

    from f9_file_io.file import File
    from f9_file_io.interfaces import PathLike
    from f9_file_io.options import FileOptions

T = TypeVar("T")


def translate_error(exc: FileError) -> Exception:
    """Convert a FileError to the exception a builtin file would raise.

    Maps:
    - InvalidOptionsError → ValueError (as for an invalid ``open()`` mode)
    - HandleClosedError → ValueError (I/O operation on closed file)
    - FileEncodingError → the original UnicodeDecodeError
    - FileError with an errno → matching OSError subclass, e.g.
      FileNotFoundError, FileExistsError, PermissionError
    - FileError without an errno → OSError

    Args:
        exc: The FileError to translate.

    Returns:
        A builtin exception carrying the original message.

    """
    message = str(exc)

    if isinstance(exc, InvalidOptionsError):
        return ValueError(message)

    if isinstance(exc, HandleClosedError):
        return ValueError(message)

    if isinstance(exc, FileEncodingError) and isinstance(
        exc.cause,
        UnicodeDecodeError,
    ):
        return exc.cause

    if exc.errno is not None:
        # OSError picks the subclass matching the errno
        return OSError(exc.errno, exc.message, exc.path)

    return OSError(message)


@contextmanager
def translate_exceptions() -> Iterator[None]:
    """Context manager for exception translation.

    Example:
        ```python
        with translate_exceptions():
            FileOptions.READ.open("missing.txt")  # Raises FileNotFoundError
        ```

    Raises:
        Exception: Any FileError translated by ``translate_error``.

    """
    try:
        yield
    except FileError as exc:
        raise translate_error(exc) from exc


def translate_method(method: Callable[..., T]) -> Callable[..., T]:
    """Wrap ``method`` so FileError exceptions leave it translated."""

    @functools.wraps(method)
    def wrapper(*args: object, **kwargs: object) -> T:
        with translate_exceptions():
            return method(*args, **kwargs)

    return wrapper


class CompatibleFile:
    """Wrapper handle that raises builtin exceptions instead of FileError.

    Example:
        ```python
        from f9_file_io import FileOptions
        from f9_file_io.compat import CompatibleFile

        fh = CompatibleFile(FileOptions.READ.open("data.txt"))
        fh.close()
        try:
            fh.fread()
        except ValueError:
            print("already closed")
        ```

    """

    def __init__(self, file: File) -> None:
        """Wrap an open ``File`` handle."""
        self._file = file

    @classmethod
    def open(cls, options: FileOptions, file_name: PathLike) -> CompatibleFile:
        """Open ``file_name`` like ``FileOptions.open`` with builtin errors."""
        from f9_file_io.file import File

        with translate_exceptions():
            return cls(File.open(options, file_name))

    def __getattr__(self, name: str) -> object:
        """Delegate to the wrapped handle, translating errors of its methods."""
        attr = getattr(self._file, name)
        if callable(attr):
            return translate_method(attr)
        return attr

    def __enter__(self) -> CompatibleFile:
        """Return the wrapper itself."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Release the wrapped handle, translating release errors."""
        with translate_exceptions():
            self._file.__exit__(exc_type, exc, tb)

    def __repr__(self) -> str:
        """Return string representation of the wrapper."""
        return f"CompatibleFile({self._file!r})"
