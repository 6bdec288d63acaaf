"""Microsoft WAVE (RIFF) container parsing."""

from __future__ import annotations

from .byteio import SourceStream
from .convert import sample_bit_width
from .types import (
    WAVE_FORMAT_EXTENSIBLE,
    WAVE_FORMAT_IEEEFLOAT,
    WAVE_FORMAT_PCM,
    ByteOrder,
    PcmError,
    SampleFormat,
    SampleType,
    StreamInfo,
    default_channel_mask,
)

RIFF_ID = b"RIFF"
WAVE_ID = b"WAVE"
FMT_ID = b"fmt "
DATA_ID = b"data"

PROBE_SCORE = 100


def _read_tag(stream: SourceStream) -> bytes:
    tag = stream.read(4)
    if len(tag) != 4:
        raise PcmError("unexpected end of stream")
    return tag


def _apply_source_format(info: StreamInfo, fmt: SampleFormat) -> None:
    """Fill in the fields that follow from the source sample format."""
    fmt = SampleFormat(min(max(int(fmt), int(SampleFormat.U8)), int(SampleFormat.DBL)))
    info.source_format = fmt
    info.bit_width = sample_bit_width(fmt)
    if fmt in (SampleFormat.FLT, SampleFormat.DBL):
        info.sample_type = SampleType.FLOAT
    else:
        info.sample_type = SampleType.INT
    info.block_align = max(1, ((info.bit_width + 7) >> 3) * info.channels)
    info.samples = info.data_size // info.block_align


def _source_format_for(bit_width: int, sample_type: SampleType,
                       eight_bit: SampleFormat) -> SampleFormat:
    """Pick the sample format for a bit depth and sample type."""
    if bit_width == 8:
        return eight_bit
    if bit_width == 16:
        return SampleFormat.S16
    if bit_width == 20:
        return SampleFormat.S20
    if bit_width == 24:
        return SampleFormat.S24
    if bit_width == 32:
        if sample_type == SampleType.FLOAT:
            return SampleFormat.FLT
        return SampleFormat.S32
    if bit_width == 64:
        if sample_type == SampleType.FLOAT:
            return SampleFormat.DBL
        raise PcmError("64-bit integer samples not supported")
    return SampleFormat.UNKNOWN


def _limit_to_file(stream: SourceStream, info: StreamInfo) -> None:
    if stream.seekable and stream.file_size > 0:
        remaining = max(stream.file_size - info.data_start, 0)
        if info.data_size > 0:
            info.data_size = min(info.data_size, remaining)
        else:
            info.data_size = remaining


def probe_wav(data: bytes) -> int:
    """Score how likely ``data`` is the start of a WAVE file (0 or 100)."""
    if not data or len(data) < 12:
        return 0
    if data[:4] != RIFF_ID or data[8:12] != WAVE_ID:
        return 0
    return PROBE_SCORE


def _read_fmt_chunk(stream: SourceStream, info: StreamInfo, chunk_size: int) -> None:
    if chunk_size < 16:
        raise PcmError("invalid fmt chunk in wav header")
    info.internal_fmt = stream.read_int(2, ByteOrder.LE)
    info.channels = stream.read_int(2, ByteOrder.LE)
    info.ch_mask = default_channel_mask(info.channels)
    info.sample_rate = stream.read_int(4, ByteOrder.LE)
    stream.read_int(4, ByteOrder.LE)
    stream.read_int(2, ByteOrder.LE)
    info.bit_width = stream.read_int(2, ByteOrder.LE)
    info.block_align = max(1, ((info.bit_width + 7) >> 3) * info.channels)
    info.order = ByteOrder.LE
    chunk_size -= 16

    if info.internal_fmt == WAVE_FORMAT_EXTENSIBLE and chunk_size >= 10:
        stream.read_int(4, ByteOrder.LE)  # cbSize and valid bits per sample
        info.ch_mask = stream.read_int(4, ByteOrder.LE)
        info.internal_fmt = stream.read_int(2, ByteOrder.LE)
        chunk_size -= 10

    if info.internal_fmt == WAVE_FORMAT_IEEEFLOAT:
        info.sample_type = SampleType.FLOAT
    elif info.internal_fmt == WAVE_FORMAT_PCM:
        info.sample_type = SampleType.INT
    else:
        raise PcmError(f"unsupported wFormatTag: 0x{info.internal_fmt:02X}")

    if info.channels == 0:
        raise PcmError("invalid number of channels in wav header")
    if info.sample_rate == 0:
        raise PcmError("invalid sample rate in wav header")
    if info.bit_width == 0:
        raise PcmError("invalid sample bit width in wav header")

    stream.seek_set(stream.filepos + chunk_size)


def parse_wav(stream: SourceStream) -> StreamInfo:
    """Read a WAVE header and leave the stream at the start of the audio data."""
    if _read_tag(stream) != RIFF_ID:
        raise PcmError("invalid RIFF id in wav header")
    stream.read_int(4, ByteOrder.LE)
    if _read_tag(stream) != WAVE_ID:
        raise PcmError("invalid WAVE id in wav header")

    info = StreamInfo(order=ByteOrder.LE)
    found_fmt = False
    while True:
        chunk_id = _read_tag(stream)
        chunk_size = stream.read_int(4, ByteOrder.LE)
        if chunk_id == FMT_ID:
            _read_fmt_chunk(stream, info, chunk_size)
            found_fmt = True
        elif chunk_id == DATA_ID:
            if not found_fmt:
                raise PcmError("data chunk found before fmt chunk in wav header")
            if chunk_size == 0:
                info.read_to_eof = True
            info.data_size = chunk_size
            info.data_start = stream.filepos
            _limit_to_file(stream, info)
            info.samples = info.data_size // info.block_align
            break
        elif chunk_size > 0:
            stream.seek_set(stream.filepos + chunk_size)

    fmt = _source_format_for(info.bit_width, info.sample_type, SampleFormat.U8)
    _apply_source_format(info, fmt)
    return info