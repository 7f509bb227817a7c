# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
JPEG APP1/Exif segment locator

Scans the JPEG marker stream for the APP1 segment carrying the
"Exif\\0\\0" identifier and returns the TIFF payload that follows it.

Copyright 2025 DNAi inc.
"""

import struct

from exifdir.exceptions import MalformedMarkerError, TruncatedInputError

SOI_MARKER = b'\xff\xd8'
APP1 = 0xE1
SOS = 0xDA
EOI = 0xD9
EXIF_IDENTIFIER = b'Exif\x00\x00'

# Markers without a length field
STANDALONE_MARKERS = frozenset([0x01] + list(range(0xD0, 0xD8)))

LENGTH_SIZE = 2


def locate_exif_payload(data: bytes) -> bytes:
    """
    Return the TIFF payload of the first Exif APP1 segment.

    The payload length is the segment's declared length minus its own two
    length bytes and the six identifier bytes.

    Args:
        data: JPEG bytes starting at SOI

    Returns:
        TIFF buffer bytes (TIFF header at byte 0)

    Raises:
        MalformedMarkerError: If SOI is missing, a segment does not start
            with 0xFF, a length field is too small, or no Exif APP1 exists
            before the image data
        TruncatedInputError: If a segment's declared length exceeds the data
    """
    if data[:2] != SOI_MARKER:
        raise MalformedMarkerError("SOI marker not found", offset=0)

    offset = 2
    while offset < len(data):
        if data[offset] != 0xFF:
            raise MalformedMarkerError(
                f"expected marker, found 0x{data[offset]:02x}", offset=offset
            )
        # Fill bytes may precede a marker
        while offset + 1 < len(data) and data[offset + 1] == 0xFF:
            offset += 1
        if offset + 1 >= len(data):
            break

        marker = data[offset + 1]
        if marker in (SOS, EOI):
            break
        if marker in STANDALONE_MARKERS:
            offset += 2
            continue

        length_offset = offset + 2
        if length_offset + LENGTH_SIZE > len(data):
            raise TruncatedInputError(
                f"segment 0xff{marker:02x} length field cut off", offset=offset
            )
        length = struct.unpack('>H', data[length_offset:length_offset + LENGTH_SIZE])[0]
        if length < LENGTH_SIZE:
            raise MalformedMarkerError(
                f"segment 0xff{marker:02x} declares length {length}", offset=offset
            )

        content_offset = length_offset + LENGTH_SIZE
        if marker == APP1 and _has_exif_identifier(data, content_offset):
            return _exif_payload(data, offset, content_offset, length)

        segment_end = length_offset + length
        if segment_end > len(data):
            raise TruncatedInputError(
                f"segment 0xff{marker:02x} declares {length} bytes, "
                f"{len(data) - length_offset} available",
                offset=offset,
            )
        offset = segment_end

    raise MalformedMarkerError("no APP1 segment with Exif identifier found")


def _has_exif_identifier(data: bytes, content_offset: int) -> bool:
    return data[content_offset:content_offset + len(EXIF_IDENTIFIER)] == EXIF_IDENTIFIER


def _exif_payload(data: bytes, segment_offset: int, content_offset: int, length: int) -> bytes:
    header_size = LENGTH_SIZE + len(EXIF_IDENTIFIER)
    if length < header_size:
        raise MalformedMarkerError(
            f"APP1 length {length} too small for the Exif identifier",
            offset=segment_offset,
        )
    tiff_offset = content_offset + len(EXIF_IDENTIFIER)
    tiff_length = length - header_size
    available = len(data) - tiff_offset
    if tiff_length > available:
        raise TruncatedInputError(
            f"APP1 declares {tiff_length} bytes of TIFF payload, {available} available",
            offset=segment_offset,
        )
    return bytes(data[tiff_offset:tiff_offset + tiff_length])
