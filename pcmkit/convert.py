"""Decoding of raw sample bytes and conversion between sample formats."""

from __future__ import annotations

import struct
from array import array
from typing import Iterable, List, Sequence, Union

from .types import ByteOrder, PcmError, SampleFormat

Number = Union[int, float]

_BIT_WIDTHS = (8, 8, 16, 20, 24, 32, 32, 64)

_INT_BITS = {
    SampleFormat.U8: 8,
    SampleFormat.S8: 8,
    SampleFormat.S16: 16,
    SampleFormat.S20: 20,
    SampleFormat.S24: 24,
    SampleFormat.S32: 32,
}

# width of the integer each format is stored in once decoded
_STORAGE_BITS = {
    SampleFormat.S8: 8,
    SampleFormat.S16: 16,
    SampleFormat.S20: 32,
    SampleFormat.S24: 32,
    SampleFormat.S32: 32,
}

_FLOAT_FORMATS = (SampleFormat.FLT, SampleFormat.DBL)


def _clip(value: float, low: float, high: float) -> float:
    # NaN ends up at the lower bound, as with the usual min/max macros
    value = high if value > high else value
    return value if value > low else low


def _sign_extend(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    if value & (1 << (bits - 1)):
        value -= 1 << bits
    return value


def _wrap(value: int, fmt: SampleFormat) -> int:
    if fmt == SampleFormat.U8:
        return value & 0xFF
    return _sign_extend(value, _STORAGE_BITS[fmt])


def _to_float32(values: Iterable[float]) -> List[float]:
    return array("f", values).tolist()


def _as_format(fmt: Union[int, SampleFormat]) -> SampleFormat:
    try:
        result = SampleFormat(fmt)
    except ValueError as exc:
        raise PcmError(f"invalid sample format: {fmt}") from exc
    if result == SampleFormat.UNKNOWN:
        raise PcmError("sample format is unknown")
    return result


def sample_bit_width(fmt: Union[int, SampleFormat]) -> int:
    """Return the nominal bit width of a sample format.

    Values outside the known range are clamped to the nearest format.
    """
    index = int(_clip(int(fmt), int(SampleFormat.U8), int(SampleFormat.DBL)))
    return _BIT_WIDTHS[index]


def _int_to_int(samples: Sequence[Number], src: SampleFormat,
                dst: SampleFormat) -> List[int]:
    shift = _INT_BITS[dst] - _INT_BITS[src]
    offset = 128 if src == SampleFormat.U8 else 0
    result = []
    for sample in samples:
        value = int(sample) - offset
        value = value << shift if shift >= 0 else value >> -shift
        if dst == SampleFormat.U8:
            value += 128
        result.append(_wrap(value, dst))
    return result


def _int_to_float(samples: Sequence[Number], src: SampleFormat,
                  dst: SampleFormat) -> List[float]:
    scale = float(1 << (_INT_BITS[src] - 1))
    offset = 128 if src == SampleFormat.U8 else 0
    values = [(int(sample) - offset) / scale for sample in samples]
    return _to_float32(values) if dst == SampleFormat.FLT else values


def _float_to_int(samples: Sequence[Number], dst: SampleFormat) -> List[int]:
    if dst == SampleFormat.U8:
        return [int(_clip(float(s) * 128 + 128, 0, 255)) for s in samples]
    scale = 1 << (_INT_BITS[dst] - 1)
    return [
        _wrap(int(_clip(float(s) * scale, -scale, scale - 1)), dst)
        for s in samples
    ]


def convert_samples(samples: Sequence[Number],
                    source_format: Union[int, SampleFormat],
                    target_format: Union[int, SampleFormat]) -> List[Number]:
    """Convert decoded samples from one sample format to another.

    Integer formats are rescaled by bit shifts, floating-point values use
    the range -1.0 to 1.0 and are clipped when converted to integers.
    Single-precision results are rounded to 32-bit float precision.
    """
    src = _as_format(source_format)
    dst = _as_format(target_format)

    if src in _FLOAT_FORMATS:
        if dst == SampleFormat.DBL:
            return [float(s) for s in samples]
        if dst == SampleFormat.FLT:
            if src == SampleFormat.FLT:
                return [float(s) for s in samples]
            return _to_float32(float(s) for s in samples)
        return _float_to_int(samples, dst)

    if dst in _FLOAT_FORMATS:
        return _int_to_float(samples, src, dst)
    return _int_to_int(samples, src, dst)


def decode_samples(data: bytes, bytes_per_sample: int, bit_width: int,
                   order: Union[int, ByteOrder],
                   source_format: Union[int, SampleFormat]) -> List[Number]:
    """Decode raw bytes into sample values of the source format.

    Three-byte samples are sign-extended from ``bit_width`` bits. Bytes left
    over after the last whole sample are ignored.
    """
    fmt = _as_format(source_format)
    prefix = ">" if ByteOrder(order) == ByteOrder.BE else "<"
    count = len(data) // bytes_per_sample if bytes_per_sample > 0 else 0
    body = bytes(data[:count * bytes_per_sample])

    if bytes_per_sample == 1:
        code = "B" if fmt == SampleFormat.U8 else "b"
        return list(struct.unpack(f"{count}{code}", body))
    if bytes_per_sample == 2:
        return list(struct.unpack(f"{prefix}{count}h", body))
    if bytes_per_sample == 3:
        if not 1 <= bit_width <= 32:
            raise PcmError(f"invalid bit width for 3-byte samples: {bit_width}")
        byteorder = "big" if prefix == ">" else "little"
        return [
            _sign_extend(int.from_bytes(body[start:start + 3], byteorder), bit_width)
            for start in range(0, len(body), 3)
        ]
    if bytes_per_sample == 4:
        code = "f" if fmt == SampleFormat.FLT else "i"
        return list(struct.unpack(f"{prefix}{count}{code}", body))
    if bytes_per_sample == 8:
        if fmt != SampleFormat.DBL:
            raise PcmError("64-bit integer samples not supported")
        return list(struct.unpack(f"{prefix}{count}d", body))
    raise PcmError(f"unsupported sample size: {bytes_per_sample} bytes")