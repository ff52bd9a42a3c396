"""Validation and translation of option sets ahead of the native open call.

Every check here runs before storage is touched. The combination rules are
the ones the host open-options primitive enforces; checking them up front
gives a structured ``InvalidOptionsError`` instead of an opaque ``EINVAL``.

Example:
    >>> from f9_file_io import FileOptions
    >>> validate_options(FileOptions.READ, "data.bin")  # passes
    >>> validate_options(FileOptions.new(), "data.bin")  # raises InvalidOptionsError

"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .interfaces import InvalidOptionsError
from .options import FileOptions

if TYPE_CHECKING:
    from .interfaces import PathLike

# New files get read/write for everyone, filtered by the process umask.
DEFAULT_CREATE_MODE = 0o666


def validate_initialized(options: FileOptions, path: PathLike | None) -> None:
    """Validate that at least one intent was enabled.

    Raises:
        InvalidOptionsError: If the uninitialized sentinel is still set.

    """
    if not options.is_initialized:
        raise InvalidOptionsError.uninitialized(path, options)


def validate_access_mode(options: FileOptions, path: PathLike | None) -> None:
    """Validate that the options request read, write or append access.

    Raises:
        InvalidOptionsError: If no access mode is requested.

    """
    if not options & (FileOptions.READ | FileOptions.WRITE | FileOptions.APPEND):
        raise InvalidOptionsError.no_access_mode(path, options)


def validate_creation(options: FileOptions, path: PathLike | None) -> None:
    """Validate that create intents come with write or append access.

    Raises:
        InvalidOptionsError: If a file would be created without write access.

    """
    creating = options & (FileOptions.CREATE | FileOptions.EXCLUSIVE_CREATE)
    writable = options & (FileOptions.WRITE | FileOptions.APPEND)
    if creating and not writable:
        raise InvalidOptionsError.create_without_write(path, options)


def validate_truncation(options: FileOptions, path: PathLike | None) -> None:
    """Validate that truncation is requested together with plain write access.

    Raises:
        InvalidOptionsError: If truncation lacks write access or is combined
            with append.

    """
    if FileOptions.TRUNCATE not in options:
        return
    if FileOptions.APPEND in options:
        raise InvalidOptionsError.truncate_with_append(path, options)
    if FileOptions.WRITE not in options:
        raise InvalidOptionsError.truncate_without_write(path, options)


def validate_options(options: FileOptions, path: PathLike | None) -> None:
    """Run every open-time check, in order, against ``options``."""
    validate_initialized(options, path)
    validate_access_mode(options, path)
    validate_creation(options, path)
    validate_truncation(options, path)


def open_flags(options: FileOptions) -> int:
    """Translate validated options into flags for ``os.open``."""
    readable = FileOptions.READ in options
    writable = bool(options & (FileOptions.WRITE | FileOptions.APPEND))

    if readable and writable:
        flags = os.O_RDWR
    elif writable:
        flags = os.O_WRONLY
    else:
        flags = os.O_RDONLY

    if FileOptions.APPEND in options:
        flags |= os.O_APPEND
    if FileOptions.EXCLUSIVE_CREATE in options:
        # O_EXCL already implies a fresh, empty file
        flags |= os.O_CREAT | os.O_EXCL
    else:
        if FileOptions.CREATE in options:
            flags |= os.O_CREAT
        if FileOptions.TRUNCATE in options:
            flags |= os.O_TRUNC

    return flags | getattr(os, "O_BINARY", 0)


def stream_mode(options: FileOptions) -> str:
    """Return the ``os.fdopen`` mode matching the access granted by ``options``."""
    readable = FileOptions.READ in options
    if FileOptions.APPEND in options:
        return "a+b" if readable else "ab"
    if FileOptions.WRITE in options:
        # fdopen never truncates; O_TRUNC alone decides that
        return "r+b" if readable else "wb"
    return "rb"
