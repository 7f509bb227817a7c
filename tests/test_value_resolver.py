import struct

import pytest

from tests.tiff_builder import ASCII, BE, BYTE, DOUBLE, LONG, RATIONAL, SHORT

from exifdir.exceptions import OffsetOutOfRangeError, UnsupportedTypeError
from exifdir.value_resolver import resolve_value
from exifdir.value_types import TAG_SIZES, ExifTagType


def test_type_table_covers_standard_types() -> None:
    assert {int(t): size for t, size in TAG_SIZES.items()} == {
        1: 1, 2: 1, 3: 2, 4: 4, 5: 8, 6: 1,
        7: 1, 8: 2, 9: 4, 10: 8, 11: 4, 12: 8,
    }


def test_inline_value_uses_field_prefix(make_buffer) -> None:
    # Garbage after the header must never be read for inline values
    buffer = make_buffer(b'\xee' * 64)
    value = resolve_value(buffer, SHORT, 1, b'\x06\x00\xaa\xbb')
    assert value.data == b'\x06\x00'
    assert value.as_int() == 6


def test_inline_value_of_exactly_four_bytes(make_buffer) -> None:
    buffer = make_buffer(b'')
    value = resolve_value(buffer, LONG, 1, b'\x01\x02\x03\x04')
    assert value.data == b'\x01\x02\x03\x04'


def test_inline_value_ignores_offset_meaning(make_buffer) -> None:
    # Field reads as offset 0xFFFFFFFF, but 3 bytes fit inline
    buffer = make_buffer(b'\x00' * 8)
    value = resolve_value(buffer, ASCII, 3, b'\xff\xff\xff\xff')
    assert value.data == b'\xff\xff\xff'


def test_indirect_value(make_buffer, endian) -> None:
    payload = struct.pack(f'{endian}II', 10, 3)
    data = b'\x00' * 16 + payload
    buffer = make_buffer(data, endian)
    value = resolve_value(buffer, RATIONAL, 1, struct.pack(f'{endian}I', 16))
    assert value.data == payload
    assert value.as_rationals() == ((10, 3),)


def test_indirect_value_ending_at_buffer_end(make_buffer) -> None:
    buffer = make_buffer(b'\x00' * 4 + b'hello')
    value = resolve_value(buffer, BYTE, 5, struct.pack('<I', 4))
    assert value.data == b'hello'


def test_indirect_value_past_end(make_buffer) -> None:
    buffer = make_buffer(b'\x00' * 20)
    with pytest.raises(OffsetOutOfRangeError) as excinfo:
        resolve_value(buffer, LONG, 2, struct.pack('<I', 16))
    assert excinfo.value.offset == 16


def test_indirect_value_offset_beyond_32_bits(make_buffer) -> None:
    buffer = make_buffer(b'\x00' * 20)
    with pytest.raises(OffsetOutOfRangeError):
        resolve_value(buffer, DOUBLE, 0xFFFFFFFF, struct.pack('<I', 0xFFFFFFFF))


def test_huge_count_is_rejected_without_reading(make_buffer) -> None:
    buffer = make_buffer(b'\x00' * 20)
    with pytest.raises(OffsetOutOfRangeError):
        resolve_value(buffer, RATIONAL, 0xFFFFFFFF, struct.pack('<I', 8))


def test_zero_count_is_empty(make_buffer) -> None:
    buffer = make_buffer(b'')
    value = resolve_value(buffer, LONG, 0, b'\x01\x02\x03\x04')
    assert value.data == b''
    assert value.as_ints() == ()


@pytest.mark.parametrize('type_code', [0, 13, 16, 0xFFFF])
def test_unsupported_type(make_buffer, type_code: int) -> None:
    buffer = make_buffer(b'\x00' * 32)
    with pytest.raises(UnsupportedTypeError) as excinfo:
        resolve_value(buffer, type_code, 1, b'\x00' * 4)
    assert excinfo.value.type_code == type_code


def test_byte_order_applies_to_offset(make_buffer) -> None:
    data = b'\x00' * 8 + b'ABCDEFGH'
    buffer = make_buffer(data, BE)
    value = resolve_value(buffer, ASCII, 8, b'\x00\x00\x00\x08')
    assert value.data == b'ABCDEFGH'
    assert value.type is ExifTagType.ASCII
