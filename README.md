# pcmkit

pcmkit is a small library for reading uncompressed PCM audio. It reads
Microsoft WAVE, Apple AIFF, Apple CAFF and headerless raw PCM. It converts
samples between integer and floating-point formats. It also installs two
command-line tools.

## Installation

```
pip install .
```

To include the test dependencies:

```
pip install ".[test]"
```

## Reading samples

```python
from pcmkit.pcmfile import PcmFile
from pcmkit.types import SampleFormat, FileFormat

with open("speech.wav", "rb") as fp, PcmFile(fp, SampleFormat.FLT, FileFormat.UNKNOWN) as pf:
    print(pf.describe())
    while True:
        samples = pf.read_samples(4096)
        if not samples:
            break
        ...  # channel-interleaved floats
```

With `FileFormat.UNKNOWN`, the reader detects the container from the first
bytes of the input. If no container matches, the input is read as raw PCM:
16-bit little-endian mono at 48 kHz. `set_source_params`,
`set_source_format` and `set_read_format` change these settings.

Each call to `read_samples` returns at most 240000 frames. The samples are
channel-interleaved, in the read format. At the end of the data the call
returns an empty list. When integer samples are read as `FLT` or `DBL`, they
are scaled to the range -1.0 to 1.0.

Seeking:

- `seek_samples` seeks by sample frames.
- `seek_time_ms` seeks by milliseconds.
- Both take `Whence.SET`, `Whence.CUR` or `Whence.END`.
- The target is clamped to the audio data.

`position` and `position_time_ms` report the current position.

`PcmContext` in `pcmkit.pcm` reads several sources together:

- Up to six mono files become one interleaved multichannel stream.
- A single file is read as-is.
- A file that runs out early adds zeros for the remaining frames.

Lower-level pieces:

- `pcmkit.convert.decode_samples` turns raw bytes into sample values.
- `pcmkit.convert.convert_samples` converts values between `SampleFormat`s.
- `pcmkit.formats.probe_format` and `find_format` choose a container parser.
- `pcmkit.wav.parse_wav`, `pcmkit.aiff.parse_aiff` and `pcmkit.caff.parse_caff` read a header from a `pcmkit.byteio.SourceStream`. Each returns a `StreamInfo`.

Bad headers and invalid parameters raise `pcmkit.types.PcmError`.

## Command-line tools

`wavinfo` prints the header details of a WAVE file: format tag name,
channels, rate, block align, channel mask, data start and size, and playing
time. With no argument it reads standard input:

```
wavinfo test.wav
```

`wavrms` estimates the AC-3 dialogue normalisation level (dialnorm) of a
WAVE file:

- It measures the RMS level of 50 ms frames.
- It averages the frames whose level falls in the dialogue range.
- It prints the time range it analysed and the dialnorm, from 0 to 31.
- A start and an end time, in seconds, can limit the analysis.
- `-` reads standard input.

```
wavrms test.wav
wavrms test.wav 10 60
```

The same measurement is available as a function:
`pcmkit.wavrms.measure_dialnorm(pcm_file, start_sec, end_sec)`. It returns
`(start, end, dialnorm)`. The file must be opened with a `FLT` or `DBL`
read format.

## What it does not do

pcmkit only reads audio. It cannot:

- write or encode audio files;
- filter audio (no low-pass or high-pass);
- decode compressed formats.

For WAVE files, only format tags 1 (PCM) and 3 (IEEE float) are read. CAF
files must hold linear PCM.