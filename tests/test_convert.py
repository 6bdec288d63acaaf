import math
import struct

import pytest

from pcmkit.convert import convert_samples, decode_samples, sample_bit_width
from pcmkit.types import ByteOrder, PcmError, SampleFormat

F = SampleFormat

EXTREMES = {
    F.U8: [0, 128, 255],
    F.S8: [-128, 0, 127],
    F.S16: [-32768, 0, 32767],
    F.S20: [-524288, 0, 524287],
    F.S24: [-8388608, 0, 8388607],
    F.S32: [-2147483648, 0, 2147483647],
}

INT_ORDER = [F.U8, F.S8, F.S16, F.S20, F.S24, F.S32]


@pytest.mark.parametrize(
    "fmt, bits",
    [(F.U8, 8), (F.S8, 8), (F.S16, 16), (F.S20, 20), (F.S24, 24),
     (F.S32, 32), (F.FLT, 32), (F.DBL, 64)],
)
def test_sample_bit_width_table(fmt, bits):
    assert sample_bit_width(fmt) == bits


def test_sample_bit_width_clamps_unknown():
    assert sample_bit_width(F.UNKNOWN) == 8
    assert sample_bit_width(99) == 64


@pytest.mark.parametrize(
    "src, dst",
    [(s, d) for i, s in enumerate(INT_ORDER) for d in INT_ORDER[i + 1:]
     if not (s == F.U8 and d == F.S8)],
)
def test_widen_then_narrow_round_trip(src, dst):
    values = EXTREMES[src]
    wide = convert_samples(values, src, dst)
    assert convert_samples(wide, dst, src) == values


def test_u8_s8_round_trip():
    values = EXTREMES[F.U8]
    assert convert_samples(convert_samples(values, F.U8, F.S8), F.S8, F.U8) == values


def test_s16_to_u8_maps_extremes_to_byte_range():
    assert convert_samples(EXTREMES[F.S16], F.S16, F.U8) == EXTREMES[F.U8]


@pytest.mark.parametrize("fmt", INT_ORDER)
def test_int_through_double_round_trip(fmt):
    values = EXTREMES[fmt]
    doubles = convert_samples(values, fmt, F.DBL)
    assert all(-1.0 <= v < 1.0 for v in doubles)
    assert convert_samples(doubles, F.DBL, fmt) == values


@pytest.mark.parametrize("fmt", [F.U8, F.S8, F.S16, F.S20, F.S24])
def test_int_through_float_round_trip(fmt):
    values = EXTREMES[fmt]
    floats = convert_samples(values, fmt, F.FLT)
    assert convert_samples(floats, F.FLT, fmt) == values


@pytest.mark.parametrize("fmt", INT_ORDER)
def test_float_out_of_range_is_clipped(fmt):
    low, _, high = EXTREMES[fmt]
    assert convert_samples([4.0, -4.0], F.DBL, fmt) == [high, low]


def test_nan_goes_to_lower_bound():
    assert convert_samples([math.nan], F.DBL, F.S16) == [-32768]
    assert convert_samples([math.nan], F.DBL, F.U8) == [0]


def test_double_to_float_rounds_to_single_precision():
    result = convert_samples([0.1], F.DBL, F.FLT)
    packed = struct.unpack("<f", struct.pack("<f", 0.1))[0]
    assert result == [packed]
    assert abs(result[0] - 0.1) < 1e-8


def test_float_to_double_preserves_values():
    values = [0.5, -0.25, 0.0]
    assert convert_samples(values, F.FLT, F.DBL) == values


def test_unknown_format_raises():
    with pytest.raises(PcmError):
        convert_samples([0], F.UNKNOWN, F.S16)
    with pytest.raises(PcmError):
        convert_samples([0], F.S16, 42)


def test_decode_u8_and_s8():
    data = bytes([0, 128, 255])
    assert decode_samples(data, 1, 8, ByteOrder.LE, F.U8) == [0, 128, 255]
    assert decode_samples(data, 1, 8, ByteOrder.LE, F.S8) == [0, -128, -1]


@pytest.mark.parametrize("order, prefix", [(ByteOrder.LE, "<"), (ByteOrder.BE, ">")])
def test_decode_s16_round_trip(order, prefix):
    values = EXTREMES[F.S16]
    data = struct.pack(f"{prefix}3h", *values)
    assert decode_samples(data, 2, 16, order, F.S16) == values


@pytest.mark.parametrize("order, prefix", [(ByteOrder.LE, "<"), (ByteOrder.BE, ">")])
def test_decode_s32_and_float_round_trip(order, prefix):
    ints = EXTREMES[F.S32]
    assert decode_samples(struct.pack(f"{prefix}3i", *ints), 4, 32, order, F.S32) == ints
    floats = [0.5, -1.0, 0.25]
    assert decode_samples(struct.pack(f"{prefix}3f", *floats), 4, 32, order, F.FLT) == floats


def test_decode_double():
    values = [0.125, -0.75]
    data = struct.pack(">2d", *values)
    assert decode_samples(data, 8, 64, ByteOrder.BE, F.DBL) == values


def test_decode_24_bit_sign_extension():
    assert decode_samples(b"\xff\xff\xff\x00\x00\x80", 3, 24, ByteOrder.LE, F.S24) == [
        -1, -8388608]
    assert decode_samples(b"\x80\x00\x00", 3, 24, ByteOrder.BE, F.S24) == [-8388608]


def test_decode_24_bit_byte_order():
    assert decode_samples(b"\x01\x02\x03", 3, 24, ByteOrder.LE, F.S24) == [0x030201]
    assert decode_samples(b"\x01\x02\x03", 3, 24, ByteOrder.BE, F.S24) == [0x010203]


def test_decode_20_bit_in_three_bytes_uses_low_bits():
    assert decode_samples(b"\xff\xff\x0f", 3, 20, ByteOrder.LE, F.S20) == [-1]


def test_decode_ignores_trailing_partial_sample():
    data = struct.pack("<2h", 7, -7) + b"\x01"
    assert decode_samples(data, 2, 16, ByteOrder.LE, F.S16) == [7, -7]


def test_decode_rejects_unsupported_sizes():
    with pytest.raises(PcmError):
        decode_samples(b"\x00" * 5, 5, 40, ByteOrder.LE, F.S32)
    with pytest.raises(PcmError):
        decode_samples(b"\x00" * 8, 8, 64, ByteOrder.LE, F.S32)


def test_decode_then_convert_to_float():
    data = struct.pack("<2h", -32768, 0)
    decoded = decode_samples(data, 2, 16, ByteOrder.LE, F.S16)
    assert convert_samples(decoded, F.S16, F.FLT) == [-1.0, 0.0]