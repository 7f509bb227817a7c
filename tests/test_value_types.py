import struct

import pytest

from exifdir.tiff_buffer import ByteOrder
from exifdir.value_types import ExifTagType, ResolvedValue, type_name, type_size


def _value(type_code, count, data, byte_order=ByteOrder.LITTLE):
    return ResolvedValue(type_code, count, data, byte_order)


def test_type_size_accepts_plain_ints() -> None:
    assert type_size(3) == 2
    assert type_size(ExifTagType.SRATIONAL) == 8
    with pytest.raises(KeyError):
        type_size(99)


def test_type_name() -> None:
    assert type_name(4) == 'LONG'
    assert type_name(99) == 'UNKNOWN(99)'


def test_shorts_big_endian() -> None:
    value = _value(ExifTagType.SHORT, 2, b'\x00\x01\x00\x02', ByteOrder.BIG)
    assert value.as_ints() == (1, 2)
    assert value.values() == (1, 2)


def test_signed_types() -> None:
    assert _value(ExifTagType.SBYTE, 1, b'\xff').as_int() == -1
    assert _value(ExifTagType.SSHORT, 1, b'\xfe\xff').as_int() == -2
    assert _value(ExifTagType.SLONG, 1, struct.pack('<i', -5)).as_int() == -5


def test_srational() -> None:
    value = _value(ExifTagType.SRATIONAL, 1, struct.pack('<ii', -1, 3))
    assert value.as_rationals() == ((-1, 3),)


def test_rational_zero_denominator_is_kept() -> None:
    value = _value(ExifTagType.RATIONAL, 1, struct.pack('<II', 5, 0))
    assert value.as_rationals() == ((5, 0),)


def test_rational_array_big_endian() -> None:
    value = _value(
        ExifTagType.RATIONAL, 3, struct.pack('>6I', 35, 1, 41, 1, 1234, 100),
        ByteOrder.BIG,
    )
    assert value.as_rationals() == ((35, 1), (41, 1), (1234, 100))


def test_large_counts() -> None:
    count = 100_000
    value = _value(ExifTagType.SHORT, count, struct.pack(f'<{count}H', *range(count)))
    ints = value.as_ints()
    assert len(ints) == count
    assert ints[-1] == count - 1

    value = _value(ExifTagType.SRATIONAL, count, struct.pack('<i', -1) * (2 * count))
    rationals = value.as_rationals()
    assert len(rationals) == count
    assert rationals[0] == (-1, -1)


def test_floats() -> None:
    value = _value(ExifTagType.FLOAT, 1, struct.pack('<f', 1.5))
    assert value.as_floats() == (1.5,)
    value = _value(ExifTagType.DOUBLE, 1, struct.pack('>d', -2.25), ByteOrder.BIG)
    assert value.values() == (-2.25,)


def test_text_stops_at_nul() -> None:
    value = _value(ExifTagType.ASCII, 8, b'Cam\x00junk')
    assert value.as_text() == 'Cam'
    assert value.values() == 'Cam'


def test_text_without_terminator_and_latin1_fallback() -> None:
    assert _value(ExifTagType.ASCII, 3, b'abc').as_text() == 'abc'
    assert _value(ExifTagType.ASCII, 2, b'\xe9\x00').as_text() == '\xe9'


def test_utf8_text() -> None:
    data = 'café'.encode('utf-8') + b'\x00'
    assert _value(ExifTagType.ASCII, len(data), data).as_text() == 'café'


def test_undefined_returns_bytes() -> None:
    value = _value(ExifTagType.UNDEFINED, 4, b'0230')
    assert value.values() == b'0230'
    assert value.as_bytes() == b'0230'


def test_mismatched_getter_raises_type_error() -> None:
    value = _value(ExifTagType.ASCII, 2, b'N\x00')
    with pytest.raises(TypeError):
        value.as_int()
    with pytest.raises(TypeError):
        _value(ExifTagType.LONG, 1, b'\x00' * 4).as_text()


def test_as_int_on_empty_value() -> None:
    with pytest.raises(ValueError):
        _value(ExifTagType.LONG, 0, b'').as_int()
