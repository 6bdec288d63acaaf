import io

import pytest

from pcmkit.byteio import SourceStream
from pcmkit.formats import (
    find_format,
    parse_raw,
    probe_format,
    probe_raw,
    registered_formats,
)
from pcmkit.types import ByteOrder, FileFormat, SampleFormat


class NonSeekable(io.BytesIO):
    def seekable(self):
        return False


def test_probe_raw_accepts_any_bytes():
    assert probe_raw(b"") == 1
    assert probe_raw(b"anything") == 1


def test_probe_raw_rejects_none():
    assert probe_raw(None) == 0


def test_registration_order():
    assert [f.name for f in registered_formats()] == ["raw", "wave", "aiff", "caff"]


@pytest.mark.parametrize(
    "file_format, long_name",
    [
        (FileFormat.RAW, "Raw PCM"),
        (FileFormat.WAVE, "Microsoft WAVE"),
        (FileFormat.AIFF, "Apple AIFF"),
        (FileFormat.CAFF, "Apple CAFF"),
    ],
)
def test_find_format(file_format, long_name):
    fmt = find_format(file_format)
    assert fmt.long_name == long_name
    assert fmt.file_format == file_format


def test_find_format_unknown_returns_none():
    assert find_format(FileFormat.UNKNOWN) is None


@pytest.mark.parametrize(
    "data, name",
    [
        (b"RIFF\x00\x00\x00\x00WAVE", "wave"),
        (b"FORM\x00\x00\x00\x00AIFF", "aiff"),
        (b"caff\x00\x01\x00\x00desc", "caff"),
        (b"some random bytes", "raw"),
        (b"", "raw"),
    ],
)
def test_probe_format_picks_best(data, name):
    assert probe_format(data).name == name


def test_probe_format_none():
    assert probe_format(None) is None


def test_parse_raw_seekable():
    stream = SourceStream(io.BytesIO(bytes(10)))
    info = parse_raw(stream)
    assert info.data_size == 10
    assert info.data_start == 0
    assert info.channels == 1
    assert info.sample_rate == 48000
    assert info.source_format == SampleFormat.S16
    assert info.order == ByteOrder.LE
    assert info.block_align == 2
    assert info.samples == 5
    assert info.read_to_eof is True


def test_parse_raw_non_seekable_has_unknown_size():
    stream = SourceStream(NonSeekable(bytes(10)))
    info = parse_raw(stream)
    assert info.data_size == 0
    assert info.samples == 0
    assert info.read_to_eof is True