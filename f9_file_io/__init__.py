"""Typed, builder-configured file handles over the host's file I/O.

This package lets callers assemble the access intents for a file (read,
write, create, exclusive create, truncate, append) as a chainable option set,
open the file with a single validated native call, and work with it through
three small capability interfaces shared with any other Python stream.

Core Components:
    - FileOptions: Chainable flag value describing the requested intents
    - File: Handle owning one open native stream
    - Reader, Writer, Seeker: Capability protocols implemented by File and
      by StreamAdapter
    - StreamAdapter / adapt(): The same call surface over any stream-like
      object (io.BytesIO, sockets' makefile(), ...)
    - FileError: Base error carrying message, file name, options and cause

Quick Start:

    >>> from f9_file_io import FileOptions, SeekFrom
    >>> fh = FileOptions.new().create(True).write(True).read(True).open("log.txt")
    >>> fh.fwrite("hello")
    >>> fh.fseek(SeekFrom.end(-5))
    0
    >>> fh.fread()
    'hello'
    >>> fh.close()

    >>> # Combine intents directly with bitwise OR
    >>> fh = (FileOptions.CREATE | FileOptions.WRITE).open("file.txt")

Exception Handling:

    >>> from f9_file_io import InvalidOptionsError, OpenError
    >>> try:
    ...     FileOptions.READ.open("missing.txt")
    ... except OpenError as exc:
    ...     print(exc.errno)
    2

Supported Operations:
    - fread() / fread_u8() - Read to end as text or raw bytes
    - fwrite() / fwrite_u8() - Write text or raw bytes
    - fflush() - Push buffered writes to storage
    - fseek() - Move the cursor, absolute or via SeekFrom
    - close() - Sync to durable storage and consume the handle
    - delete() - Remove the file and consume the handle

"""

from .file import File
from .interfaces import (
    ByteLike,
    FileEncodingError,
    FileError,
    FileIOError,
    HandleClosedError,
    InvalidOptionsError,
    OpenError,
    PathLike,
    Reader,
    SeekFrom,
    Seeker,
    SupportsRead,
    SupportsSeek,
    SupportsWrite,
    Writer,
)
from .modes import mode_for_options, options_from_mode, options_from_names
from .options import FileOptions
from .streams import StreamAdapter, adapt

__all__ = [
    "ByteLike",
    "File",
    "FileEncodingError",
    "FileError",
    "FileIOError",
    "FileOptions",
    "HandleClosedError",
    "InvalidOptionsError",
    "OpenError",
    "PathLike",
    "Reader",
    "SeekFrom",
    "Seeker",
    "StreamAdapter",
    "SupportsRead",
    "SupportsSeek",
    "SupportsWrite",
    "Writer",
    "adapt",
    "mode_for_options",
    "options_from_mode",
    "options_from_names",
]
