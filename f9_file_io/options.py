"""Chainable option set describing how a file should be opened.

``FileOptions`` is a flag value: every builder call returns a new value and
never mutates the receiver, so option sets can be shared and reused freely.

Example:

    >>> from f9_file_io import FileOptions
    >>> options = FileOptions.new().write(True).create(True)
    >>> options == FileOptions.WRITE | FileOptions.CREATE
    True
    >>> FileOptions.new().is_initialized
    False

    >>> with (FileOptions.CREATE | FileOptions.WRITE).open("notes.txt") as fh:
    ...     fh.fwrite("hello")

Setter quirk:
    Passing ``False`` to a setter returns the option set unchanged; it never
    clears a flag that is already enabled. Use ``discard`` to remove an
    intent explicitly.

"""

from __future__ import annotations

from enum import Flag
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .file import File
    from .interfaces import PathLike


class FileOptions(Flag):
    """Set of access intents requested for a file, plus a sentinel bit."""

    READ = 0b00000001
    WRITE = 0b00000010
    CREATE = 0b00000100
    EXCLUSIVE_CREATE = 0b00001000
    TRUNCATE = 0b00010000
    APPEND = 0b00100000

    UNINITIALIZED = 0b10000000

    @classmethod
    def new(cls) -> FileOptions:
        """Return an option set with no intents, which cannot be opened yet."""
        return cls.UNINITIALIZED

    @classmethod
    def from_mode(cls, mode: str) -> FileOptions:
        """Build options from a builtin ``open()`` mode string such as ``"r+b"``."""
        from .modes import options_from_mode

        return options_from_mode(mode)

    @classmethod
    def from_names(cls, spec: str) -> FileOptions:
        """Build options from intent names such as ``"read, write"``."""
        from .modes import options_from_names

        return options_from_names(spec)

    @property
    def is_initialized(self) -> bool:
        """Whether at least one intent has been enabled."""
        return FileOptions.UNINITIALIZED not in self

    @property
    def intents(self) -> tuple[FileOptions, ...]:
        """Individual intent flags enabled in this set, in declaration order."""
        return tuple(flag for flag in INTENT_FLAGS if flag in self)

    def read(self, enabled: bool = True) -> FileOptions:
        """Request read access."""
        return self._enable(FileOptions.READ, enabled)

    def write(self, enabled: bool = True) -> FileOptions:
        """Request write access."""
        return self._enable(FileOptions.WRITE, enabled)

    def create(self, enabled: bool = True) -> FileOptions:
        """Create the file when it does not exist yet."""
        return self._enable(FileOptions.CREATE, enabled)

    def exclusive_create(self, enabled: bool = True) -> FileOptions:
        """Create the file, failing when it already exists."""
        return self._enable(FileOptions.EXCLUSIVE_CREATE, enabled)

    def truncate(self, enabled: bool = True) -> FileOptions:
        """Truncate an existing file to zero length on open."""
        return self._enable(FileOptions.TRUNCATE, enabled)

    def append(self, enabled: bool = True) -> FileOptions:
        """Direct every write to the end of the file."""
        return self._enable(FileOptions.APPEND, enabled)

    def discard(self, flag: FileOptions) -> FileOptions:
        """Return a copy with ``flag`` cleared.

        Clearing the last enabled intent yields the uninitialized sentinel
        again, so the result is rejected by ``open`` until rebuilt.
        """
        remaining = self & ~(flag & ~FileOptions.UNINITIALIZED)
        if not remaining.intents:
            return FileOptions.UNINITIALIZED
        return remaining

    def to_mode(self) -> str:
        """Return the nearest builtin ``open()`` mode string for these options."""
        from .modes import mode_for_options

        return mode_for_options(self)

    def open(self, file_name: PathLike) -> File:
        """Validate the options and open ``file_name`` with a single native call.

        Raises:
            InvalidOptionsError: If the options are uninitialized or contradictory.
            OpenError: If the native open call fails.

        """
        from .file import File

        return File.open(self, file_name)

    def _enable(self, flag: FileOptions, enabled: bool) -> FileOptions:
        if not enabled:
            return self
        return (self & ~FileOptions.UNINITIALIZED) | flag


INTENT_FLAGS = (
    FileOptions.READ,
    FileOptions.WRITE,
    FileOptions.CREATE,
    FileOptions.EXCLUSIVE_CREATE,
    FileOptions.TRUNCATE,
    FileOptions.APPEND,
)
