"""Reading audio samples from a single PCM source file."""

from __future__ import annotations

from dataclasses import fields
from typing import BinaryIO, List, Optional, Union

from .byteio import SourceStream
from .convert import Number, convert_samples, decode_samples, sample_bit_width
from .formats import ContainerFormat, find_format, probe_format
from .types import (
    MAX_READ,
    ByteOrder,
    FileFormat,
    PcmError,
    SampleFormat,
    SampleType,
    Whence,
    default_channel_mask,
)

_PROBE_SIZE = 12


def _clip(value: int, low: int, high: int) -> int:
    return max(min(value, high), low)


def _div_trunc(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _sample_format(value: Union[int, SampleFormat]) -> SampleFormat:
    try:
        return SampleFormat(value)
    except ValueError as exc:
        raise PcmError(f"invalid sample format: {value}") from exc


class PcmFile:
    """An audio source: a container header followed by PCM sample data."""

    channels: int
    sample_rate: int
    ch_mask: int
    bit_width: int
    block_align: int
    order: ByteOrder
    sample_type: SampleType
    source_format: SampleFormat
    internal_fmt: int
    data_start: int
    data_size: int
    samples: int
    read_to_eof: bool

    def __init__(self, fp: Optional[BinaryIO],
                 read_format: Union[int, SampleFormat],
                 file_format: Union[int, FileFormat] = FileFormat.UNKNOWN) -> None:
        if fp is None:
            raise PcmError("no input file given")
        self.read_format = _sample_format(read_format)
        try:
            self.file_format = FileFormat(file_format)
        except ValueError as exc:
            raise PcmError(f"invalid file format: {file_format}") from exc
        self.closed = False
        self.stream = SourceStream(fp)

        container: Optional[ContainerFormat]
        if self.file_format == FileFormat.UNKNOWN:
            container = probe_format(self.stream.peek(_PROBE_SIZE))
        else:
            container = find_format(self.file_format)
        if container is None:
            raise PcmError("unable to detect file format")
        self.container = container
        self.file_format = container.file_format

        info = container.parse(self.stream)
        for field in fields(info):
            setattr(self, field.name, getattr(info, field.name))

    @property
    def filepos(self) -> int:
        """Current byte position in the input."""
        return self.stream.filepos

    @property
    def seekable(self) -> bool:
        """Whether the input supports random access."""
        return self.stream.seekable

    @property
    def file_size(self) -> int:
        """Total input size in bytes, or 0 when unknown."""
        return self.stream.file_size

    def _check_open(self) -> None:
        if self.closed:
            raise PcmError("file is closed")

    def set_source_format(self, fmt: Union[int, SampleFormat]) -> None:
        """Set the sample format of the data in the file."""
        fmt = SampleFormat(_clip(int(fmt), int(SampleFormat.U8), int(SampleFormat.DBL)))
        self.source_format = fmt
        self.bit_width = sample_bit_width(fmt)
        if fmt in (SampleFormat.FLT, SampleFormat.DBL):
            self.sample_type = SampleType.FLOAT
        else:
            self.sample_type = SampleType.INT
        self.block_align = max(1, ((self.bit_width + 7) >> 3) * self.channels)
        self.samples = self.data_size // self.block_align

    def set_source_params(self, channels: int, fmt: Union[int, SampleFormat],
                          order: Union[int, ByteOrder], sample_rate: int) -> None:
        """Override the channel count, sample format, byte order and rate."""
        self.channels = max(channels, 1)
        self.ch_mask = default_channel_mask(channels)
        self.order = ByteOrder(_clip(int(order), int(ByteOrder.LE), int(ByteOrder.BE)))
        self.sample_rate = max(sample_rate, 1)
        self.set_source_format(fmt)

    def set_read_format(self, read_format: Union[int, SampleFormat]) -> None:
        """Set the sample format that read samples are converted to."""
        self.read_format = SampleFormat(
            _clip(int(read_format), int(SampleFormat.U8), int(SampleFormat.DBL)))
        self.set_source_format(self.source_format)

    def read_samples(self, num_samples: int) -> List[Number]:
        """Read up to ``num_samples`` sample frames, at most MAX_READ at once.

        Returns channel-interleaved values in the read format; the list is
        empty at the end of the data.
        """
        self._check_open()
        if self.read_format == SampleFormat.UNKNOWN:
            raise PcmError("no read format set")
        if self.block_align <= 0:
            raise PcmError("invalid block_align")
        num_samples = min(num_samples, MAX_READ)

        bytes_needed = self.block_align * num_samples
        if not self.read_to_eof:
            data_end = self.data_start + self.data_size
            if self.filepos + bytes_needed >= data_end:
                bytes_needed = max(data_end - self.filepos, 0)
                num_samples = bytes_needed // self.block_align
        if num_samples <= 0:
            return []

        data = self.stream.read(bytes_needed)
        frames = len(data) // self.block_align
        if frames == 0:
            return []
        bytes_per_sample = self.block_align // max(self.channels, 1)
        decoded = decode_samples(data[:frames * self.block_align], bytes_per_sample,
                                 self.bit_width, self.order, self.source_format)
        return convert_samples(decoded, self.source_format, self.read_format)

    def seek_samples(self, offset: int, whence: Union[int, Whence] = Whence.SET) -> None:
        """Seek by sample frames, clamped to the audio data."""
        self._check_open()
        if self.block_align <= 0:
            raise PcmError("invalid block_align")
        if self.filepos < self.data_start:
            raise PcmError("position is before the start of audio data")
        if self.data_size == 0:
            return
        try:
            whence = Whence(whence)
        except ValueError as exc:
            raise PcmError(f"invalid seek origin: {whence}") from exc

        fpos = self.filepos
        start = self.data_start
        size = self.data_size
        byte_offset = offset * self.block_align

        if whence == Whence.SET:
            newpos = start + _clip(byte_offset, 0, size)
        elif whence == Whence.CUR:
            newpos = fpos - min(-byte_offset, fpos - start)
            newpos = min(newpos, start + size)
        else:
            newpos = start + size - _clip(byte_offset, 0, size)

        self.stream.seek_set(newpos)

    def seek_time_ms(self, offset: int, whence: Union[int, Whence] = Whence.SET) -> None:
        """Seek by a time offset in milliseconds."""
        self.seek_samples(_div_trunc(offset * self.sample_rate, 1000), whence)

    def position(self) -> int:
        """Return the current position in sample frames."""
        if self.block_align <= 0:
            raise PcmError("invalid block_align")
        if self.data_start == 0 or self.data_size == 0:
            return 0
        return (self.filepos - self.data_start) // self.block_align

    def position_time_ms(self) -> int:
        """Return the current position in milliseconds."""
        return self.position() * 1000 // self.sample_rate

    def describe(self) -> str:
        """Return a one-line description of the audio format."""
        if self.sample_type == SampleType.INT:
            kind = "Unsigned" if self.source_format == SampleFormat.U8 else "Signed"
        elif self.sample_type == SampleType.FLOAT:
            kind = "Floating-point"
        else:
            kind = "[unsupported type]"

        if self.ch_mask & 0x08:
            lfe_base = self.channels - 1
            if 1 <= lfe_base <= 5:
                layout = f"{lfe_base}.1-channel"
            else:
                layout = "multi-channel with LFE"
        else:
            named = {1: "mono", 2: "stereo"}
            if self.channels in named:
                layout = named[self.channels]
            elif 3 <= self.channels <= 6:
                layout = f"{self.channels}-channel"
            else:
                layout = "multi-channel"

        name = self.container.long_name if self.container else "unknown"
        parts = [name, kind, f"{self.bit_width}-bit"]
        if self.source_format > SampleFormat.S8:
            parts.append("big-endian" if self.order == ByteOrder.BE else "little-endian")
        parts.extend([f"{self.sample_rate} Hz", layout])
        return " ".join(parts)

    def close(self) -> None:
        """Release the input buffer; the underlying file is left open."""
        self.closed = True

    def __enter__(self) -> "PcmFile":
        return self

    def __exit__(self, *args) -> None:
        self.close()