"""Reading interleaved audio from one multichannel or several mono sources."""

from __future__ import annotations

from typing import BinaryIO, List, Sequence, Union

from .convert import Number
from .pcmfile import PcmFile
from .types import (
    MAX_CHANNELS,
    ByteOrder,
    FileFormat,
    PcmError,
    SampleFormat,
    default_channel_mask,
)

_FLOAT_FORMATS = (SampleFormat.FLT, SampleFormat.DBL)


class PcmContext:
    """A set of PCM sources read together as one channel-interleaved stream.

    A single source may hold any number of channels; several sources must
    each be mono and become one channel apiece, in the order given.
    """

    def __init__(self, files: Sequence[BinaryIO],
                 read_format: Union[int, SampleFormat],
                 file_format: Union[int, FileFormat] = FileFormat.UNKNOWN) -> None:
        files = list(files)
        if not 1 <= len(files) <= MAX_CHANNELS:
            raise PcmError(f"invalid number of files: {len(files)}. must be > 0")
        if not int(SampleFormat.U8) <= int(read_format) <= int(SampleFormat.DBL):
            raise PcmError(f"invalid read format: {int(read_format)}")
        if not int(FileFormat.UNKNOWN) <= int(file_format) <= int(FileFormat.CAFF):
            raise PcmError(f"invalid file format: {int(file_format)}")

        self.files: List[PcmFile] = []
        self.read_to_eof = False
        try:
            for index, fp in enumerate(files):
                try:
                    pcm_file = PcmFile(fp, read_format, file_format)
                except PcmError as exc:
                    raise PcmError(f"error initializing file #{index}: {exc}") from exc
                self.files.append(pcm_file)
                if len(files) > 1 and pcm_file.channels != 1:
                    raise PcmError(
                        "all files must be mono when using multiple input files")
        except PcmError:
            self.close()
            raise

        self.samples = max(pcm_file.samples for pcm_file in self.files)
        self.read_format = SampleFormat(read_format)
        if len(self.files) == 1:
            self.channels = self.files[0].channels
            self.ch_mask = self.files[0].ch_mask
        else:
            self.channels = len(self.files)
            self.ch_mask = default_channel_mask(self.channels)
        self.set_sample_rate(self.files[0].sample_rate)

    @property
    def num_files(self) -> int:
        """Number of source files."""
        return len(self.files)

    def close(self) -> None:
        """Close every source and reset the context."""
        for pcm_file in self.files:
            pcm_file.close()
        self.files = []
        self.samples = 0
        self.channels = 0
        self.ch_mask = 0
        self.sample_rate = 0
        self.read_to_eof = False
        self.read_format = SampleFormat.UNKNOWN

    def set_source_format(self, fmt: Union[int, SampleFormat]) -> None:
        """Set the source sample format of every file."""
        for pcm_file in self.files:
            pcm_file.set_source_format(fmt)

    def set_source_params(self, channels: int, fmt: Union[int, SampleFormat],
                          order: Union[int, ByteOrder], sample_rate: int) -> None:
        """Override the source parameters of every file."""
        if len(self.files) > 1 and channels != 1:
            raise PcmError("all files must be mono when using multiple input files")
        for pcm_file in self.files:
            pcm_file.set_source_params(channels, fmt, order, sample_rate)
        self.sample_rate = sample_rate
        if len(self.files) == 1:
            self.channels = self.files[0].channels
            self.ch_mask = default_channel_mask(self.channels)

    def set_sample_rate(self, sample_rate: int) -> None:
        """Set the sample rate of the context and of every file."""
        self.sample_rate = sample_rate
        for pcm_file in self.files:
            pcm_file.sample_rate = sample_rate

    def set_read_to_eof(self, read_to_eof: bool) -> None:
        """Choose whether every file is read to end of input, past its data size."""
        self.read_to_eof = bool(read_to_eof)
        for pcm_file in self.files:
            pcm_file.read_to_eof = self.read_to_eof

    def set_read_format(self, read_format: Union[int, SampleFormat]) -> None:
        """Set the format samples are converted to when read."""
        self.read_format = SampleFormat(read_format)
        for pcm_file in self.files:
            pcm_file.set_read_format(read_format)

    def describe(self) -> str:
        """Return one description line per source file."""
        return "\n".join(pcm_file.describe() for pcm_file in self.files)

    def read_samples(self, num_samples: int) -> List[Number]:
        """Read up to ``num_samples`` frames, channel-interleaved.

        With several sources, a source that runs out early contributes
        zeros for the remaining frames.
        """
        if not self.files:
            raise PcmError("no source files open")
        if len(self.files) == 1:
            return self.files[0].read_samples(num_samples)

        channels = [pcm_file.read_samples(num_samples) for pcm_file in self.files]
        frames = max(len(channel) for channel in channels)
        zero: Number = 0.0 if self.read_format in _FLOAT_FORMATS else 0
        padded = [channel + [zero] * (frames - len(channel)) for channel in channels]
        return [value for frame in zip(*padded) for value in frame]

    def __enter__(self) -> "PcmContext":
        return self

    def __exit__(self, *args) -> None:
        self.close()