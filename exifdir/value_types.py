# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TIFF field types and resolved values

This module holds the standard TIFF type table and the ResolvedValue
container with typed getters. Decoding of the raw bytes into Python
values happens lazily in the getters; the parser itself only
materializes bytes.

Copyright 2025 DNAi inc.
"""

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple, Union

from exifdir.tiff_buffer import ByteOrder


class ExifTagType(IntEnum):
    """EXIF tag data types"""
    BYTE = 1
    ASCII = 2
    SHORT = 3
    LONG = 4
    RATIONAL = 5
    SBYTE = 6
    UNDEFINED = 7
    SSHORT = 8
    SLONG = 9
    SRATIONAL = 10
    FLOAT = 11
    DOUBLE = 12


# EXIF tag sizes in bytes
TAG_SIZES = {
    ExifTagType.BYTE: 1,
    ExifTagType.ASCII: 1,
    ExifTagType.SHORT: 2,
    ExifTagType.LONG: 4,
    ExifTagType.RATIONAL: 8,
    ExifTagType.SBYTE: 1,
    ExifTagType.UNDEFINED: 1,
    ExifTagType.SSHORT: 2,
    ExifTagType.SLONG: 4,
    ExifTagType.SRATIONAL: 8,
    ExifTagType.FLOAT: 4,
    ExifTagType.DOUBLE: 8,
}

# struct format character per element, rationals use two of them
_STRUCT_CODES = {
    ExifTagType.BYTE: 'B',
    ExifTagType.SHORT: 'H',
    ExifTagType.LONG: 'I',
    ExifTagType.RATIONAL: 'I',
    ExifTagType.SBYTE: 'b',
    ExifTagType.SSHORT: 'h',
    ExifTagType.SLONG: 'i',
    ExifTagType.SRATIONAL: 'i',
    ExifTagType.FLOAT: 'f',
    ExifTagType.DOUBLE: 'd',
}

INTEGER_TYPES = frozenset({
    ExifTagType.BYTE, ExifTagType.SHORT, ExifTagType.LONG,
    ExifTagType.SBYTE, ExifTagType.SSHORT, ExifTagType.SLONG,
})
RATIONAL_TYPES = frozenset({ExifTagType.RATIONAL, ExifTagType.SRATIONAL})
FLOAT_TYPES = frozenset({ExifTagType.FLOAT, ExifTagType.DOUBLE})


def type_size(type_code: int) -> int:
    """
    Size in bytes of one element of ``type_code``.

    Raises:
        KeyError: If the type code is not a standard TIFF type
    """
    return TAG_SIZES[type_code]


def type_name(type_code: int) -> str:
    try:
        return ExifTagType(type_code).name
    except ValueError:
        return f'UNKNOWN({type_code})'


@dataclass(frozen=True)
class ResolvedValue:
    """
    The materialized bytes of one directory entry.

    ``data`` always holds exactly ``count * type_size(type_code)`` bytes,
    whether they came from the inline field or from an offset.
    """
    type_code: int
    count: int
    data: bytes
    byte_order: ByteOrder

    @property
    def type(self) -> ExifTagType:
        return ExifTagType(self.type_code)

    def __len__(self) -> int:
        return len(self.data)

    def _require(self, allowed, getter: str) -> None:
        if self.type_code not in allowed:
            raise TypeError(
                f"{getter}() is not valid for {type_name(self.type_code)} values"
            )

    def _unpack(self) -> tuple:
        count = self.count * 2 if self.type in RATIONAL_TYPES else self.count
        return struct.unpack(
            f'{self.byte_order.value}{count}{_STRUCT_CODES[self.type]}', self.data
        )

    def as_bytes(self) -> bytes:
        """Raw value bytes, valid for every type."""
        return self.data

    def as_ints(self) -> Tuple[int, ...]:
        self._require(INTEGER_TYPES, 'as_ints')
        return self._unpack()

    def as_int(self) -> int:
        """
        First integer element.

        Raises:
            TypeError: If the value is not an integer type
            ValueError: If the value has no elements
        """
        values = self.as_ints()
        if not values:
            raise ValueError("value has no elements")
        return values[0]

    def as_rationals(self) -> Tuple[Tuple[int, int], ...]:
        """Numerator/denominator pairs; zero denominators are returned untouched."""
        self._require(RATIONAL_TYPES, 'as_rationals')
        flat = self._unpack()
        return tuple(zip(flat[0::2], flat[1::2]))

    def as_floats(self) -> Tuple[float, ...]:
        self._require(FLOAT_TYPES, 'as_floats')
        return self._unpack()

    def as_text(self, encoding: str = 'utf-8') -> str:
        """
        ASCII value up to the first NUL terminator.

        Exif 3.0 permits UTF-8 in ASCII fields, so decoding tries UTF-8
        and falls back to Latin-1, which never fails.
        """
        self._require({ExifTagType.ASCII}, 'as_text')
        raw = self.data.split(b'\x00', 1)[0]
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            return raw.decode('latin-1')

    def values(self) -> Union[str, bytes, tuple]:
        """Value decoded according to its declared type."""
        if self.type_code == ExifTagType.ASCII:
            return self.as_text()
        if self.type_code == ExifTagType.UNDEFINED:
            return self.data
        if self.type_code in RATIONAL_TYPES:
            return self.as_rationals()
        return self._unpack()
