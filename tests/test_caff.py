import io
import struct

import pytest

from pcmkit.byteio import SourceStream
from pcmkit.caff import parse_caff, probe_caff
from pcmkit.types import ByteOrder, PcmError, SampleFormat, SampleType


def caff_bytes(payload, channels=2, bits=16, rate=48000.0, flags=0,
               codec=b"lpcm", bytes_per_packet=None, data_size=None,
               extra=b"", version=1, desc_size=32):
    bpp = channels * bits // 8 if bytes_per_packet is None else bytes_per_packet
    desc = struct.pack(">d4sIIIII", rate, codec, flags, bpp, 1, channels, bits)
    head = (b"caff" + struct.pack(">HH", version, 0)
            + b"desc" + struct.pack(">Q", desc_size) + desc)
    size = len(payload) + 4 if data_size is None else data_size
    data = b"data" + struct.pack(">Q", size) + struct.pack(">I", 0) + payload
    return head + extra + data


def parse(data):
    stream = SourceStream(io.BytesIO(data))
    return stream, parse_caff(stream)


def test_probe():
    data = caff_bytes(b"\0" * 4)
    assert probe_caff(data[:6]) == 100
    assert probe_caff(b"caff\0\2") == 0
    assert probe_caff(b"caf") == 0


def test_parse_big_endian_int16():
    payload = struct.pack(">8h", *range(8))
    data = caff_bytes(payload)
    stream, info = parse(data)
    assert info.channels == 2
    assert info.sample_rate == 48000
    assert info.order == ByteOrder.BE
    assert info.source_format == SampleFormat.S16
    assert info.sample_type == SampleType.INT
    assert info.block_align == 4
    assert info.internal_fmt == 0x6C70636D
    assert info.data_start == len(data) - len(payload)
    assert info.data_size == len(payload)
    assert info.samples == len(payload) // 4
    assert stream.read(len(payload)) == payload


def test_parse_little_endian_float():
    payload = struct.pack("<4f", 0.0, 0.5, -0.5, 1.0)
    _, info = parse(caff_bytes(payload, bits=32, flags=3))
    assert info.order == ByteOrder.LE
    assert info.source_format == SampleFormat.FLT
    assert info.sample_type == SampleType.FLOAT
    assert info.samples == 2


def test_parse_double():
    payload = struct.pack(">2d", 0.5, -0.5)
    _, info = parse(caff_bytes(payload, channels=1, bits=64, flags=1))
    assert info.source_format == SampleFormat.DBL
    assert info.samples == 2


def test_parse_8_bit_is_signed():
    payload = b"\0" * 3
    _, info = parse(caff_bytes(payload, channels=1, bits=8))
    assert info.source_format == SampleFormat.S8
    assert info.samples == len(payload)


def test_64_bit_integer_rejected():
    with pytest.raises(PcmError):
        parse(caff_bytes(b"\0" * 8, channels=1, bits=64, flags=0))


def test_unknown_chunk_is_skipped():
    payload = b"\1\2\3\4"
    extra = b"free" + struct.pack(">Q", 6) + b"\0" * 6
    data = caff_bytes(payload, extra=extra)
    stream, info = parse(data)
    assert info.data_start == len(data) - len(payload)
    assert stream.read(4) == payload


def test_unknown_data_size_uses_file_end():
    payload = b"\0" * 12
    _, info = parse(caff_bytes(payload, data_size=0xFFFFFFFFFFFFFFFF))
    assert info.data_size == len(payload)
    assert info.samples == 3


def test_bad_file_type():
    with pytest.raises(PcmError):
        parse(b"caf!" + caff_bytes(b"\0" * 4)[4:])


def test_bad_version():
    with pytest.raises(PcmError):
        parse(caff_bytes(b"\0" * 4, version=2))


def test_bad_desc_size():
    with pytest.raises(PcmError):
        parse(caff_bytes(b"\0" * 4, desc_size=24))


def test_missing_desc_chunk():
    data = bytearray(caff_bytes(b"\0" * 4))
    data[8:12] = b"info"
    with pytest.raises(PcmError):
        parse(bytes(data))


def test_unsupported_codec():
    with pytest.raises(PcmError):
        parse(caff_bytes(b"\0" * 4, codec=b"aac "))


def test_too_many_channels():
    with pytest.raises(PcmError):
        parse(caff_bytes(b"\0" * 14, channels=7))


def test_zero_block_align():
    with pytest.raises(PcmError):
        parse(caff_bytes(b"\0" * 4, bytes_per_packet=0))


def test_sample_rate_below_one():
    with pytest.raises(PcmError):
        parse(caff_bytes(b"\0" * 4, rate=0.5))


def test_truncated_header():
    with pytest.raises(PcmError):
        parse(caff_bytes(b"\0" * 4)[:30])