"""Command that estimates the AC-3 dialog normalization level of a WAVE file."""

from __future__ import annotations

import math
import re
import sys
from typing import List, Optional, Sequence, TextIO, Tuple

from .convert import Number
from .pcmfile import PcmFile
from .types import FileFormat, PcmError, SampleFormat, Whence

# frames whose level falls strictly between these bounds count as dialog
_DIALOG_MIN = 15
_DIALOG_MAX = 40

# dialnorm value used as the starting average and as the upper limit
_DIALNORM_MAX = 31

_FRAME_MS = 50

_INTRO = "\nWavRMS: utility program to calculate AC-3 dialnorm.\n\n"
_USAGE = (
    "usage: wavrms <test.wav> [<start> [<end>]]\n"
    "    use '-' to input from stdin.\n"
    "    unit for start and end is seconds.\n"
    "\n"
)


def calculate_rms(samples: Sequence[Number], channels: int, count: int) -> int:
    """Return the negated RMS level, in whole dB, of ``count`` frames.

    Mono input uses its single channel; otherwise only the first two
    channels are measured and their mean-square levels are averaged.
    """
    if count <= 0:
        raise ValueError("at least one sample frame is needed")
    if channels < 1:
        raise ValueError(f"invalid number of channels: {channels}")
    if channels == 1:
        rms_all = sum(float(s) * float(s) for s in samples[:count]) / count
    else:
        end = count * channels
        left = sum(float(s) * float(s) for s in samples[0:end:channels]) / count
        right = sum(float(s) * float(s) for s in samples[1:end:channels]) / count
        rms_all = (left + right) / 2.0

    level = 10.0 * math.log10(rms_all + 1e-10)
    return -int(level + 0.5)


def measure_dialnorm(pcm_file: PcmFile, start_sec: int = 0,
                     end_sec: Optional[int] = None) -> Tuple[int, int, int]:
    """Measure the dialnorm of a file opened with a floating-point read format.

    Audio is analysed in 50 ms frames from ``start_sec`` up to ``end_sec``
    (or the end of the data when it is None). Returns the start and end of
    the analysed range in seconds and the dialnorm value (0 to 31).
    """
    start_sec = max(start_sec, 0)
    if end_sec is not None and end_sec <= start_sec:
        raise PcmError("invalid time range")
    if pcm_file.read_format not in (SampleFormat.FLT, SampleFormat.DBL):
        raise PcmError("a floating-point read format is required")

    channels = pcm_file.channels
    frame_size = pcm_file.sample_rate * _FRAME_MS // 1000
    pcm_file.seek_time_ms(start_sec * 1000, Whence.SET)

    total = _DIALNORM_MAX
    count = 1
    time_ms = pcm_file.position_time_ms()
    samples = pcm_file.read_samples(frame_size)
    while samples:
        if end_sec is not None and time_ms > end_sec * 1000:
            break
        frames = len(samples) // channels
        rms = calculate_rms(samples, channels, frames)
        if _DIALOG_MIN < rms < _DIALOG_MAX:
            total += rms
            count += 1
        time_ms = pcm_file.position_time_ms()
        samples = pcm_file.read_samples(frame_size)

    average = total // count
    time_sec = time_ms // 1000
    return min(start_sec, time_sec), time_sec, min(average, _DIALNORM_MAX)


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def _run(fp, start_sec: int, end_sec: Optional[int], out: TextIO) -> int:
    try:
        pcm_file = PcmFile(fp, SampleFormat.DBL, FileFormat.WAVE)
    except PcmError:
        print("error initializing wav reader\n", file=sys.stderr)
        return 1
    with pcm_file:
        try:
            start, end, dialnorm = measure_dialnorm(pcm_file, start_sec, end_sec)
        except PcmError as exc:
            print(f"error reading audio: {exc}", file=sys.stderr)
            return 1
    out.write(f"Time Range: {start} to {end} sec\n")
    out.write(f"Dialnorm: -{dialnorm} dB\n\n")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Print the time range analysed and the dialnorm of a WAVE file."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not 1 <= len(args) <= 3:
        sys.stderr.write(_INTRO)
        sys.stderr.write(_USAGE)
        return 1
    sys.stdout.write(_INTRO)
    if len(args) == 1 and args[0] == "-h":
        sys.stdout.write(_USAGE)
        return 0

    start_sec = 0
    end_sec: Optional[int] = None
    if len(args) >= 2:
        start_sec = max(_atoi(args[1]), 0)
        if len(args) == 3:
            end_sec = max(_atoi(args[2]), 0)
            if end_sec <= start_sec:
                print("invalid time range", file=sys.stderr)
                return 1

    if args[0] == "-":
        return _run(sys.stdin.buffer, start_sec, end_sec, sys.stdout)
    try:
        fp = open(args[0], "rb")
    except OSError:
        print("cannot open file", file=sys.stderr)
        return 1
    with fp:
        return _run(fp, start_sec, end_sec, sys.stdout)


if __name__ == "__main__":
    sys.exit(main())