"""Shared enumerations, limits and stream description for PCM sources."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

# maximum single read size: 5 seconds at 48 kHz
MAX_READ = 240000

# maximum number of supported channels
MAX_CHANNELS = 6

# supported WAVE format tags
WAVE_FORMAT_PCM = 0x0001
WAVE_FORMAT_IEEEFLOAT = 0x0003
WAVE_FORMAT_EXTENSIBLE = 0xFFFE


class PcmError(Exception):
    """Raised when a PCM source cannot be opened, parsed or read."""


class SampleType(IntEnum):
    """Whether samples are integers or floating-point values."""

    INT = 0
    FLOAT = 1


class SampleFormat(IntEnum):
    """Raw audio sample formats."""

    UNKNOWN = -1
    U8 = 0
    S8 = 1
    S16 = 2
    S20 = 3
    S24 = 4
    S32 = 5
    FLT = 6
    DBL = 7


class ByteOrder(IntEnum):
    """Byte order of multi-byte samples and header fields."""

    LE = 0
    BE = 1


class FileFormat(IntEnum):
    """Container formats that can be read."""

    UNKNOWN = -1
    RAW = 0
    WAVE = 1
    AIFF = 2
    CAFF = 3


class Whence(IntEnum):
    """Reference points for seeking, as with file seeking."""

    SET = 0
    CUR = 1
    END = 2


@dataclass
class StreamInfo:
    """Audio parameters and data location found in a container header."""

    channels: int = 0
    sample_rate: int = 0
    ch_mask: int = 0
    bit_width: int = 0
    block_align: int = 0
    order: ByteOrder = ByteOrder.LE
    sample_type: SampleType = SampleType.INT
    source_format: SampleFormat = SampleFormat.UNKNOWN
    internal_fmt: int = 0
    data_start: int = 0
    data_size: int = 0
    samples: int = 0
    read_to_eof: bool = False


_CHANNEL_MASKS = (
    0x04,   # mono         (1/0)
    0x03,   # stereo       (2/0)
    0x103,  # 3.0 surround (2/1)
    0x107,  # 3/1 surround (3/1)
    0x37,   # 5.0 surround (3/2)
    0x3F,   # 5.1 surround (3/2+LFE)
)


def default_channel_mask(channels: int) -> int:
    """Return the default speaker mask for a channel count, or 0 if unknown."""
    if channels < 1 or channels > len(_CHANNEL_MASKS):
        return 0
    return _CHANNEL_MASKS[channels - 1]