"""Tests for the capability implementations over arbitrary native streams."""

from __future__ import annotations

import errno
import io
from typing import TYPE_CHECKING

import pytest

from f9_file_io import (
    FileEncodingError,
    FileIOError,
    FileOptions,
    Reader,
    SeekFrom,
    Seeker,
    StreamAdapter,
    Writer,
    adapt,
)
from f9_file_io.streams import (
    StreamOperations,
    coerce_seek_target,
    is_text_stream,
)

if TYPE_CHECKING:
    from pathlib import Path


class ShortWriter:
    """Stream stand-in that reports writing one byte less than requested."""

    def write(self, data: bytes) -> int:
        """Pretend to write all but the last byte."""
        return len(data) - 1


class FailingStream:
    """Stream stand-in whose every native call fails."""

    def read(self, size: int = -1) -> bytes:
        """Fail like a broken device."""
        raise OSError(errno.EIO, "Input/output error")

    def write(self, data: bytes) -> int:
        """Fail like a full disk."""
        raise OSError(errno.ENOSPC, "No space left on device")

    def flush(self) -> None:
        """Fail like a full disk."""
        raise OSError(errno.ENOSPC, "No space left on device")


def copy_all(source: Reader, destination: Writer) -> None:
    """Copy everything through the capability protocols only."""
    destination.fwrite_u8(source.fread_u8())
    destination.fflush()


class TestAdapt:
    """Tests for adapt() and StreamAdapter construction."""

    def test_wraps_native_stream(self) -> None:
        """Plain streams are wrapped in a StreamAdapter."""
        stream = io.BytesIO()
        adapter = adapt(stream)
        assert isinstance(adapter, StreamAdapter)
        assert adapter.stream is stream

    def test_returns_file_unchanged(self, tmp_path: Path) -> None:
        """Objects already implementing every capability are not wrapped."""
        with (FileOptions.CREATE | FileOptions.WRITE).open(tmp_path / "a") as fh:
            assert adapt(fh) is fh

    def test_rejects_non_streams(self) -> None:
        """Objects without read, write or seek cannot be adapted."""
        with pytest.raises(TypeError):
            adapt(object())

    def test_adapter_satisfies_protocols(self) -> None:
        """The adapter implements Reader, Writer and Seeker."""
        adapter = adapt(io.BytesIO())
        assert isinstance(adapter, Reader)
        assert isinstance(adapter, Writer)
        assert isinstance(adapter, Seeker)

    def test_name_taken_from_stream(self, tmp_path: Path) -> None:
        """Named native streams lend their name to error messages."""
        path = tmp_path / "named.bin"
        path.write_bytes(b"\xff")
        with open(path, "rb") as native:
            adapter = adapt(native)
            with pytest.raises(FileEncodingError) as excinfo:
                adapter.fread()
        assert excinfo.value.path == str(path)
        assert excinfo.value.options is None

    def test_explicit_name(self) -> None:
        """An explicit name overrides the stream's own."""
        adapter = adapt(FailingStream(), name="device")
        with pytest.raises(FileIOError) as excinfo:
            adapter.fread_u8()
        assert excinfo.value.path == "device"


class TestBinaryStreams:
    """Tests over in-memory binary streams."""

    def test_write_seek_read(self) -> None:
        """Text written to a BytesIO reads back after seeking."""
        adapter = adapt(io.BytesIO())
        adapter.fwrite("hello")
        adapter.fwrite_u8(b"\x00\xff")
        assert adapter.fseek(0) == 0
        assert adapter.fread_u8() == b"hello\x00\xff"

    def test_fread_decodes_utf8(self) -> None:
        """Text reads decode UTF-8 bytes."""
        adapter = adapt(io.BytesIO("naïve".encode()))
        assert adapter.fread() == "naïve"

    def test_fread_invalid_utf8(self) -> None:
        """Text reads of invalid UTF-8 raise an encoding error."""
        adapter = adapt(io.BytesIO(b"\xc3\x28"))
        with pytest.raises(FileEncodingError):
            adapter.fread()

    def test_seek_variants(self) -> None:
        """All three seek origins are honoured."""
        adapter = adapt(io.BytesIO(b"0123456789"))
        assert adapter.fseek(SeekFrom.end(-4)) == 6
        assert adapter.fseek(SeekFrom.current(-2)) == 4
        assert adapter.fseek(SeekFrom.start(1)) == 1
        assert adapter.tell() == 1
        assert adapter.fread() == "123456789"

    def test_out_of_range_seek(self) -> None:
        """Offsets too large for the stream surface as I/O failures."""
        adapter = adapt(io.BytesIO(b"data"))
        with pytest.raises(FileIOError) as excinfo:
            adapter.fseek(2**64)
        assert excinfo.value.errno == errno.EINVAL
        assert adapter.tell() == 0

    def test_short_write_detected(self) -> None:
        """A native write that reports fewer bytes is an I/O failure."""
        adapter = adapt(ShortWriter())
        with pytest.raises(FileIOError) as excinfo:
            adapter.fwrite("abc")
        assert excinfo.value.errno == errno.EIO

    def test_native_failures_wrapped(self) -> None:
        """Native OSErrors surface as FileIOError with the original cause."""
        adapter = adapt(FailingStream())
        with pytest.raises(FileIOError) as excinfo:
            adapter.fread()
        assert excinfo.value.errno == errno.EIO

        with pytest.raises(FileIOError) as excinfo:
            adapter.fwrite_u8(b"data")
        assert excinfo.value.errno == errno.ENOSPC

        with pytest.raises(FileIOError) as excinfo:
            adapter.fflush()
        assert excinfo.value.message == "Failed to flush file"

    def test_flush_without_native_flush(self) -> None:
        """Streams without flush treat fflush as a no-op."""
        adapt(ShortWriter()).fflush()


class TestTextStreams:
    """Tests over in-memory text streams."""

    def test_string_io_round_trip(self) -> None:
        """Text streams read and write str directly."""
        adapter = adapt(io.StringIO())
        adapter.fwrite("line one\n")
        adapter.fseek(0)
        assert adapter.fread() == "line one\n"

    def test_string_io_bytes_read(self) -> None:
        """Raw reads of a text stream return UTF-8 bytes."""
        adapter = adapt(io.StringIO("ü"))
        assert adapter.fread_u8() == "ü".encode()

    def test_string_io_rejects_raw_bytes(self) -> None:
        """Text streams without a binary buffer cannot take raw bytes."""
        adapter = adapt(io.StringIO())
        with pytest.raises(FileIOError) as excinfo:
            adapter.fwrite_u8(b"\xff")
        assert isinstance(excinfo.value.cause, io.UnsupportedOperation)

    def test_text_wrapper_raw_bytes_use_buffer(self) -> None:
        """Raw bytes go through the wrapper's buffer after pending text."""
        raw = io.BytesIO()
        wrapper = io.TextIOWrapper(raw, encoding="utf-8")
        adapter = adapt(wrapper)
        adapter.fwrite("text:")
        adapter.fwrite_u8(b"\xff")
        adapter.fflush()
        assert raw.getvalue() == b"text:\xff"

    def test_unsupported_seek_wrapped(self) -> None:
        """Seeks the native stream refuses surface as I/O failures."""
        adapter = adapt(io.StringIO("abc"))
        with pytest.raises(FileIOError):
            adapter.fseek(SeekFrom.current(1))


class TestHelpers:
    """Tests for the module-level helpers."""

    @pytest.mark.parametrize(
        ("stream", "expected"),
        [
            (io.BytesIO(), False),
            (io.StringIO(), True),
            (io.TextIOWrapper(io.BytesIO(), encoding="utf-8"), True),
            (ShortWriter(), False),
        ],
    )
    def test_is_text_stream(self, stream: object, expected: bool) -> None:
        """Text streams are told apart from binary ones."""
        assert is_text_stream(stream) is expected

    def test_stream_operations_is_abstract(self) -> None:
        """The shared base cannot be used without a native stream hook."""
        with pytest.raises(TypeError):
            StreamOperations()  # type: ignore[abstract]

    def test_coerce_seek_target(self) -> None:
        """Ints become absolute SeekFrom values."""
        assert coerce_seek_target(5) == SeekFrom.start(5)
        target = SeekFrom.end(-1)
        assert coerce_seek_target(target) is target

    def test_seek_from_rejects_negative_start(self) -> None:
        """Offsets from the start cannot be negative."""
        with pytest.raises(ValueError):
            SeekFrom.start(-1)

    def test_seek_from_rejects_unknown_origin(self) -> None:
        """Only the three standard origins exist."""
        with pytest.raises(ValueError):
            SeekFrom(7, 0)


class TestUniformSurface:
    """The same capability calls work across handle types."""

    def test_copy_file_to_memory(self, tmp_path: Path) -> None:
        """A File and a BytesIO adapter interoperate through the protocols."""
        path = tmp_path / "source.bin"
        path.write_bytes(b"\x01\x02\x03")
        destination = io.BytesIO()

        with FileOptions.READ.open(path) as source:
            copy_all(source, adapt(destination))

        assert destination.getvalue() == b"\x01\x02\x03"

    def test_copy_memory_to_file(self, tmp_path: Path) -> None:
        """An adapter can feed a File through the same calls."""
        path = tmp_path / "dest.bin"
        options = FileOptions.new().create(True).write(True)
        with options.open(path) as destination:
            copy_all(adapt(io.BytesIO(b"payload")), destination)

        assert path.read_bytes() == b"payload"
