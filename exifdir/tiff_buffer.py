# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Bounds-checked view over a TIFF buffer

Every read the decoder performs goes through TiffBuffer.span(), which is
the only place range and overflow checks are made. Offsets are absolute
positions from the first byte of the TIFF header.

Copyright 2025 DNAi inc.
"""

import struct
from enum import Enum
from typing import Type

from exifdir.exceptions import ExifDecodeError, OffsetOutOfRangeError

# TIFF offsets are unsigned 32-bit
MAX_OFFSET = 0xFFFFFFFF


class ByteOrder(Enum):
    """TIFF byte order, keyed by its struct prefix."""
    LITTLE = '<'
    BIG = '>'

    @property
    def marker(self) -> bytes:
        """The two header bytes that select this byte order."""
        return b'II' if self is ByteOrder.LITTLE else b'MM'

    @property
    def label(self) -> str:
        if self is ByteOrder.LITTLE:
            return 'Little-endian (Intel, II)'
        return 'Big-endian (Motorola, MM)'


class TiffBuffer:
    """
    Immutable TIFF byte buffer with a fixed byte order.

    The buffer owns a ``bytes`` copy of its input so nothing outside can
    mutate it after parsing starts.
    """

    __slots__ = ('_data', '_byte_order')

    def __init__(self, data: bytes, byte_order: ByteOrder):
        self._data = bytes(data)
        self._byte_order = byte_order

    @property
    def byte_order(self) -> ByteOrder:
        return self._byte_order

    @property
    def endian(self) -> str:
        """struct prefix for the buffer's byte order"""
        return self._byte_order.value

    def __len__(self) -> int:
        return len(self._data)

    def span(
        self,
        offset: int,
        length: int,
        error: Type[ExifDecodeError] = OffsetOutOfRangeError,
    ) -> bytes:
        """
        Return ``length`` bytes starting at ``offset``.

        Args:
            offset: Absolute offset into the buffer
            length: Number of bytes to read
            error: Exception class raised when the range is invalid

        Returns:
            Exactly ``length`` bytes

        Raises:
            error: If the range starts before 0, ends past the buffer, or
                ends past the 32-bit offset space
        """
        if offset < 0 or length < 0:
            raise error(
                f"invalid range: offset {offset}, length {length}",
                offset=offset,
            )
        end = offset + length
        if end > MAX_OFFSET + 1 or end > len(self._data):
            raise error(
                f"range [{offset}, {end}) exceeds buffer of {len(self._data)} bytes",
                offset=offset,
            )
        return self._data[offset:end]

    def uint16(
        self,
        offset: int,
        error: Type[ExifDecodeError] = OffsetOutOfRangeError,
    ) -> int:
        return struct.unpack(f'{self.endian}H', self.span(offset, 2, error))[0]

    def uint32(
        self,
        offset: int,
        error: Type[ExifDecodeError] = OffsetOutOfRangeError,
    ) -> int:
        return struct.unpack(f'{self.endian}I', self.span(offset, 4, error))[0]

    def unpack(self, fmt: str, data: bytes) -> tuple:
        """Unpack ``data`` (already read through span) in the buffer's byte order."""
        return struct.unpack(f'{self.endian}{fmt}', data)
