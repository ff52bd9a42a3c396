"""Build option sets from textual configuration.

Two textual forms are understood:

    - builtin ``open()`` mode strings such as ``"r"``, ``"w+b"`` or ``"a"``,
      plus ``"ax"`` (exclusive create with kernel-enforced append), which the
      builtin cannot express
    - intent name lists such as ``"read, write"`` or ``"create|write|truncate"``,
      convenient for settings files and command line flags

Example:
    >>> from f9_file_io.modes import (
    ...     mode_for_options, options_from_mode, options_from_names,
    ... )
    >>> options_from_mode("w") == options_from_names("write create truncate")
    True
    >>> mode_for_options(options_from_mode("r+"))
    'r+b'

"""

from __future__ import annotations

import re

from .options import INTENT_FLAGS, FileOptions

_MODE_CHARACTERS = frozenset("rwxab+t")

_MODE_BASES = {
    "r": FileOptions.READ,
    "w": FileOptions.WRITE | FileOptions.CREATE | FileOptions.TRUNCATE,
    "x": FileOptions.WRITE | FileOptions.EXCLUSIVE_CREATE,
    "a": FileOptions.APPEND | FileOptions.CREATE,
    "ax": FileOptions.APPEND | FileOptions.EXCLUSIVE_CREATE,
}

INTENT_NAMES = {flag.name.lower(): flag for flag in INTENT_FLAGS}

_NAME_SEPARATORS = re.compile(r"[\s,|]+")


def options_from_mode(mode: str) -> FileOptions:
    """Translate a builtin ``open()`` mode string into options.

    Args:
        mode: Mode string made of one of ``r``, ``w``, ``x``, ``a`` or ``ax``,
            optionally ``+`` and one of ``b`` or ``t``.

    Returns:
        The equivalent option set.

    Raises:
        ValueError: If the mode string is malformed.

    """
    chars = set(mode)
    if not mode or len(chars) != len(mode) or not chars <= _MODE_CHARACTERS:
        msg = f"Invalid mode: {mode!r}"
        raise ValueError(msg)
    if {"b", "t"} <= chars:
        msg = f"Invalid mode: {mode!r} (cannot be both binary and text)"
        raise ValueError(msg)

    base = "".join(c for c in "axrw" if c in chars)
    if base not in _MODE_BASES:
        msg = f"Invalid mode: {mode!r} (needs exactly one of r, w, x, a or ax)"
        raise ValueError(msg)

    options = _MODE_BASES[base]
    if "+" in chars:
        options |= FileOptions.READ
        if FileOptions.APPEND not in options:
            options |= FileOptions.WRITE
    return options


def options_from_names(spec: str) -> FileOptions:
    """Translate a list of intent names into options.

    Names are case-insensitive, may use ``-`` in place of ``_`` and are
    separated by commas, pipes or whitespace.

    Raises:
        ValueError: If the list is empty or contains an unknown name.

    """
    names = [name for name in _NAME_SEPARATORS.split(spec.strip()) if name]
    if not names:
        msg = "No file options given"
        raise ValueError(msg)

    options = FileOptions.new()
    for name in names:
        key = name.lower().replace("-", "_")
        if key not in INTENT_NAMES:
            supported = ", ".join(INTENT_NAMES)
            msg = f"Unknown file option: '{name}'. Supported options: {supported}"
            raise ValueError(msg)
        options = getattr(options, key)(True)
    return options


def mode_for_options(options: FileOptions) -> str:
    """Return the nearest builtin mode string describing ``options``.

    Streams opened by this package are always binary, so the result always
    ends in ``b``. Create and truncate intents that a mode string cannot
    express alongside plain write access are dropped.

    Raises:
        ValueError: If ``options`` is still uninitialized.

    """
    if not options.is_initialized:
        msg = "Uninitialized options have no mode"
        raise ValueError(msg)

    readable = FileOptions.READ in options
    if FileOptions.APPEND in options:
        base = "ax" if FileOptions.EXCLUSIVE_CREATE in options else "a"
        update = readable
    elif FileOptions.EXCLUSIVE_CREATE in options:
        base, update = "x", readable
    elif FileOptions.WRITE in options and FileOptions.TRUNCATE in options:
        base, update = "w", readable
    elif FileOptions.WRITE in options:
        base, update = "r", True
    else:
        base, update = "r", False
    return base + ("+" if update else "") + "b"
