"""Apple Core Audio Format (CAF) container parsing."""

from __future__ import annotations

import math
import struct

from .byteio import SourceStream
from .types import (
    MAX_CHANNELS,
    ByteOrder,
    PcmError,
    SampleFormat,
    SampleType,
    StreamInfo,
    default_channel_mask,
)
from .wav import _apply_source_format, _limit_to_file, _source_format_for

CAFF_ID = b"caff"
DESC_ID = b"desc"
DATA_ID = b"data"

LPCM_TAG = 0x6C70636D

FLAG_IS_FLOAT = 0x1
FLAG_IS_LITTLEENDIAN = 0x2

PROBE_SCORE = 100

_UINT64_MASK = (1 << 64) - 1


def _read_tag(stream: SourceStream) -> bytes:
    tag = stream.read(4)
    if len(tag) != 4:
        raise PcmError("unexpected end of stream")
    return tag


def _read_double(stream: SourceStream) -> float:
    data = stream.read(8)
    if len(data) != 8:
        raise PcmError("unexpected end of stream")
    return struct.unpack(">d", data)[0]


def probe_caff(data: bytes) -> int:
    """Score how likely ``data`` is the start of a CAF file (0 or 100)."""
    if not data or len(data) < 6:
        return 0
    if data[:4] == CAFF_ID and data[4] == 0 and data[5] == 1:
        return PROBE_SCORE
    return 0


def parse_caff(stream: SourceStream) -> StreamInfo:
    """Read a CAF header and leave the stream at the start of the audio data."""
    if _read_tag(stream) != CAFF_ID:
        raise PcmError("CAFF: file type check failed")
    if stream.read_int(2, ByteOrder.BE) != 1:
        raise PcmError("CAFF: file version check failed")
    stream.read_int(2, ByteOrder.BE)

    if _read_tag(stream) != DESC_ID:
        raise PcmError("CAFF: 'desc' chunk not present")
    if stream.read_int(8, ByteOrder.BE) != 32:
        raise PcmError("CAFF: invalid 'desc' chunk size")

    info = StreamInfo()
    rate = _read_double(stream)
    info.sample_rate = int(rate) if math.isfinite(rate) else 0
    info.internal_fmt = stream.read_int(4, ByteOrder.BE)
    flags = stream.read_int(4, ByteOrder.BE)
    info.order = ByteOrder.LE if flags & FLAG_IS_LITTLEENDIAN else ByteOrder.BE
    info.sample_type = SampleType.FLOAT if flags & FLAG_IS_FLOAT else SampleType.INT
    info.block_align = stream.read_int(4, ByteOrder.BE)
    stream.read_int(4, ByteOrder.BE)
    info.channels = stream.read_int(4, ByteOrder.BE)
    info.ch_mask = default_channel_mask(info.channels)
    info.bit_width = stream.read_int(4, ByteOrder.BE)

    if info.sample_rate < 1:
        raise PcmError(f"CAFF: Invalid sample rate: {info.sample_rate}")
    if info.block_align < 1:
        raise PcmError(f"CAFF: Invalid block align: {info.block_align}")
    if info.channels < 1 or info.channels > MAX_CHANNELS:
        raise PcmError(f"CAFF: Invalid number of channels: {info.channels}")
    if info.internal_fmt != LPCM_TAG:
        raise PcmError(f"CAFF: Unsupported codec: 0x{info.internal_fmt:04X}")

    fmt = _source_format_for(info.bit_width, info.sample_type, SampleFormat.S8)
    _apply_source_format(info, fmt)

    while True:
        chunk_id = _read_tag(stream)
        chunk_size = stream.read_int(8, ByteOrder.BE)
        if chunk_id == DATA_ID:
            stream.read_int(4, ByteOrder.BE)  # edit count
            info.data_size = (chunk_size - 4) & _UINT64_MASK
            info.data_start = stream.filepos
            _limit_to_file(stream, info)
            info.samples = info.data_size // info.block_align
            break
        if chunk_size > 0:
            stream.seek_set(stream.filepos + chunk_size)

    return info