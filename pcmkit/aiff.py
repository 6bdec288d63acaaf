"""Apple AIFF container parsing."""

from __future__ import annotations

from .byteio import SourceStream
from .types import (
    ByteOrder,
    PcmError,
    SampleFormat,
    StreamInfo,
    default_channel_mask,
)
from .wav import _apply_source_format, _limit_to_file

FORM_ID = b"FORM"
AIFF_ID = b"AIFF"
COMM_ID = b"COMM"
SSND_ID = b"SSND"

PROBE_SCORE = 100

_FORMATS = {
    8: SampleFormat.S8,
    16: SampleFormat.S16,
    20: SampleFormat.S20,
    24: SampleFormat.S24,
    32: SampleFormat.S32,
}


def _read_tag(stream: SourceStream) -> bytes:
    tag = stream.read(4)
    if len(tag) != 4:
        raise PcmError("unexpected end of stream")
    return tag


def extended_to_float(data: bytes) -> float:
    """Convert a 10-byte IEEE 80-bit extended float to a Python float.

    The fractional part is truncated; NaN values are returned as 0.0.
    """
    if len(data) != 10:
        raise PcmError("an 80-bit extended float needs exactly 10 bytes")
    mantissa = int.from_bytes(data[2:10], "big")
    exponent = ((data[0] & 0x7F) << 8) | data[1]
    if exponent == 0x7FFF and mantissa:
        return 0.0
    exponent -= 16383 + 63
    if exponent > 0:
        mantissa <<= exponent
    elif exponent < 0:
        mantissa >>= -exponent
    if data[0] & 0x80:
        mantissa = -mantissa
    return float(mantissa)


def probe_aiff(data: bytes) -> int:
    """Score how likely ``data`` is the start of an AIFF file (0 or 100)."""
    if not data or len(data) < 12:
        return 0
    if data[:4] != FORM_ID or data[8:12] != AIFF_ID:
        return 0
    return PROBE_SCORE


def _skip(stream: SourceStream, size: int) -> None:
    stream.seek_set(stream.filepos + size)


def parse_aiff(stream: SourceStream) -> StreamInfo:
    """Read an AIFF header and leave the stream at the start of the audio data."""
    if _read_tag(stream) != FORM_ID:
        raise PcmError("invalid FORM id in aiff header")
    stream.read_int(4, ByteOrder.BE)
    if _read_tag(stream) != AIFF_ID:
        raise PcmError("invalid AIFF id in aiff header")

    channels, sample_rate, block_align, bits = 2, 44100, 4, 16
    info = StreamInfo(order=ByteOrder.BE)
    found_comm = False
    while True:
        chunk_id = _read_tag(stream)
        chunk_size = stream.read_int(4, ByteOrder.BE)
        if chunk_id == COMM_ID:
            if chunk_size < 18:
                raise PcmError("invalid COMM chunk in aiff header")
            channels = stream.read_int(2, ByteOrder.BE)
            info.samples = stream.read_int(4, ByteOrder.BE)
            bits = stream.read_int(2, ByteOrder.BE)
            rate_bytes = stream.read(10)
            if len(rate_bytes) != 10:
                raise PcmError("unexpected end of stream")
            sample_rate = int(extended_to_float(rate_bytes))
            block_align = max(1, ((bits + 7) >> 3) * channels)
            info.ch_mask = default_channel_mask(channels)
            chunk_size -= 18

            if channels == 0:
                raise PcmError("invalid number of channels in aiff header")
            if sample_rate <= 0:
                raise PcmError("invalid sample rate in aiff header")
            if bits == 0:
                raise PcmError("invalid sample bit width in aiff header")

            chunk_size += chunk_size & 1
            _skip(stream, chunk_size)
            found_comm = True
        elif chunk_id == SSND_ID:
            if not found_comm:
                raise PcmError("COMM after SSND in aiff is not supported")
            offset = stream.read_int(4, ByteOrder.BE)
            stream.read_int(4, ByteOrder.BE)
            _skip(stream, offset)
            info.data_size = block_align * info.samples
            info.data_start = stream.filepos
            if stream.seekable and stream.file_size > 0:
                info.data_size = min(info.data_size,
                                     max(stream.file_size - info.data_start, 0))
                info.samples = info.data_size // block_align
            break
        else:
            chunk_size += chunk_size & 1
            if chunk_size > 0:
                _skip(stream, chunk_size)

    fmt = _FORMATS.get(bits)
    if fmt is None:
        raise PcmError(f"unsupported bit depth: {bits}")

    info.internal_fmt = 0
    info.channels = max(channels, 1)
    info.ch_mask = default_channel_mask(channels)
    info.order = ByteOrder.BE
    info.sample_rate = max(sample_rate, 1)
    _apply_source_format(info, fmt)
    return info


# kept for symmetry with the other container parsers
_ = _limit_to_file