# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Core decoding API

Entry points that turn raw bytes into an ExifDocument:

    JPEG bytes --locate_exif_payload--> TIFF bytes
    TIFF bytes --read_tiff_header--> (byte order, IFD0 offset)
               --IFDWalker--> ExifDocument

Decoding is a pure function of its input; concurrent callers need no
coordination.

Copyright 2025 DNAi inc.
"""

from typing import Optional, Union

from exifdir.exceptions import MalformedMarkerError
from exifdir.ifd_walker import ExifDocument, IFDWalker
from exifdir.options import DecodeOptions
from exifdir.segment_locator import SOI_MARKER, locate_exif_payload
from exifdir.tiff_buffer import TiffBuffer
from exifdir.tiff_header import read_tiff_header

BytesLike = Union[bytes, bytearray, memoryview]


def decode_tiff(data: BytesLike, options: Optional[DecodeOptions] = None) -> ExifDocument:
    """
    Decode a TIFF-structured Exif buffer.

    Args:
        data: Bytes starting at the TIFF header
        options: Decode options (fail-fast by default)

    Returns:
        The decoded ExifDocument

    Raises:
        ExifDecodeError: On any structural error
    """
    data = bytes(data)
    header = read_tiff_header(data)
    buffer = TiffBuffer(data, header.byte_order)
    return IFDWalker(buffer, options).walk(header.first_ifd_offset)


def decode_jpeg(data: BytesLike, options: Optional[DecodeOptions] = None) -> ExifDocument:
    """
    Decode the Exif APP1 segment of a JPEG image.

    Args:
        data: JPEG bytes starting with the SOI marker
        options: Decode options (fail-fast by default)

    Returns:
        The decoded ExifDocument

    Raises:
        ExifDecodeError: On any marker or structural error
    """
    return decode_tiff(locate_exif_payload(bytes(data)), options)


def decode(data: BytesLike, options: Optional[DecodeOptions] = None) -> ExifDocument:
    """Decode JPEG or bare TIFF bytes, detected from the leading bytes."""
    data = bytes(data)
    if data[:2] == SOI_MARKER:
        return decode_jpeg(data, options)
    if data[:2] in (b'II', b'MM'):
        return decode_tiff(data, options)
    raise MalformedMarkerError(
        f"unrecognized leading bytes {data[:2].hex() or '(empty)'}", offset=0
    )
