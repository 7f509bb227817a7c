# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TIFF header reader

Detects the byte order and validates the fixed 8-byte TIFF preamble.

Copyright 2025 DNAi inc.
"""

import struct
from typing import NamedTuple

from exifdir.exceptions import InvalidTiffHeaderError, TruncatedInputError
from exifdir.tiff_buffer import ByteOrder

TIFF_HEADER_SIZE = 8
TIFF_MAGIC = 0x002A


class TiffHeader(NamedTuple):
    byte_order: ByteOrder
    first_ifd_offset: int


def read_tiff_header(data: bytes) -> TiffHeader:
    """
    Read the TIFF header at the start of ``data``.

    The first-IFD offset is returned as-is; it is range checked when the
    directory is actually decoded.

    Args:
        data: TIFF buffer, header at byte 0

    Returns:
        TiffHeader with byte order and first IFD offset

    Raises:
        TruncatedInputError: If fewer than 8 bytes are available
        InvalidTiffHeaderError: If the byte order marker or magic number is wrong
    """
    if len(data) < TIFF_HEADER_SIZE:
        raise TruncatedInputError(
            f"TIFF header needs {TIFF_HEADER_SIZE} bytes, got {len(data)}",
            offset=0,
        )

    if data[:2] == b'II':
        byte_order = ByteOrder.LITTLE
    elif data[:2] == b'MM':
        byte_order = ByteOrder.BIG
    else:
        raise InvalidTiffHeaderError(
            f"invalid byte order marker {bytes(data[:2]).hex()}", offset=0
        )

    magic, first_ifd_offset = struct.unpack(f'{byte_order.value}HI', data[2:8])
    if magic != TIFF_MAGIC:
        raise InvalidTiffHeaderError(
            f"invalid TIFF version 0x{magic:04x}", offset=2
        )

    return TiffHeader(byte_order, first_ifd_offset)
