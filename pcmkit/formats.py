"""Registry of container formats and format detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Union

from .aiff import parse_aiff, probe_aiff
from .byteio import SourceStream
from .caff import parse_caff, probe_caff
from .types import (
    ByteOrder,
    FileFormat,
    SampleFormat,
    StreamInfo,
    default_channel_mask,
)
from .wav import _apply_source_format, parse_wav, probe_wav

RAW_SAMPLE_RATE = 48000


@dataclass(frozen=True)
class ContainerFormat:
    """A readable container: its names, probe scorer and header parser."""

    name: str
    long_name: str
    file_format: FileFormat
    probe: Callable[[Optional[bytes]], int]
    parse: Callable[[SourceStream], StreamInfo]


def probe_raw(data: Optional[bytes]) -> int:
    """Score raw data: any input is possibly raw PCM, with the lowest score."""
    return 0 if data is None else 1


def parse_raw(stream: SourceStream) -> StreamInfo:
    """Describe headerless input as mono 16-bit little-endian 48 kHz PCM."""
    info = StreamInfo(
        channels=1,
        ch_mask=default_channel_mask(1),
        order=ByteOrder.LE,
        sample_rate=RAW_SAMPLE_RATE,
        read_to_eof=True,
    )
    if stream.seekable and stream.file_size > 0:
        info.data_size = stream.file_size
    _apply_source_format(info, SampleFormat.S16)
    return info


_REGISTRY: Tuple[ContainerFormat, ...] = (
    ContainerFormat("raw", "Raw PCM", FileFormat.RAW, probe_raw, parse_raw),
    ContainerFormat("wave", "Microsoft WAVE", FileFormat.WAVE, probe_wav, parse_wav),
    ContainerFormat("aiff", "Apple AIFF", FileFormat.AIFF, probe_aiff, parse_aiff),
    ContainerFormat("caff", "Apple CAFF", FileFormat.CAFF, probe_caff, parse_caff),
)


def registered_formats() -> Tuple[ContainerFormat, ...]:
    """Return every known container format in registration order."""
    return _REGISTRY


def find_format(file_format: Union[int, FileFormat]) -> Optional[ContainerFormat]:
    """Return the container for a file format identifier, or None."""
    for fmt in _REGISTRY:
        if fmt.file_format == file_format:
            return fmt
    return None


def probe_format(data: Optional[bytes]) -> Optional[ContainerFormat]:
    """Return the container whose probe scores ``data`` highest, or None."""
    best = None
    best_score = 0
    for fmt in _REGISTRY:
        score = fmt.probe(data)
        if score > best_score:
            best_score = score
            best = fmt
    return best