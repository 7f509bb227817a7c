"""Byte builders for hand-made TIFF and JPEG test inputs."""

import struct
from typing import Iterable, Union

LE = '<'
BE = '>'

# Tag types
BYTE, ASCII, SHORT, LONG, RATIONAL = 1, 2, 3, 4, 5
UNDEFINED, SLONG, SRATIONAL, DOUBLE = 7, 9, 10, 12


def header(endian: str = LE, first_ifd_offset: int = 8, magic: int = 42) -> bytes:
    marker = b'II' if endian == LE else b'MM'
    return marker + struct.pack(f'{endian}HI', magic, first_ifd_offset)


def entry(tag: int, type_code: int, count: int, field: Union[int, bytes], endian: str = LE) -> bytes:
    """12-byte IFD entry; an int field is packed as a uint32 offset."""
    if isinstance(field, int):
        raw = struct.pack(f'{endian}I', field)
    else:
        raw = field.ljust(4, b'\x00')
    return struct.pack(f'{endian}HHI', tag, type_code, count) + raw


def short_field(value: int, endian: str = LE) -> bytes:
    return struct.pack(f'{endian}H', value)


def directory(entries: Iterable[bytes] = (), next_offset: int = 0, endian: str = LE) -> bytes:
    entries = list(entries)
    return (
        struct.pack(f'{endian}H', len(entries))
        + b''.join(entries)
        + struct.pack(f'{endian}I', next_offset)
    )


def ifd_size(entry_count: int) -> int:
    return 2 + 12 * entry_count + 4


def jpeg(tiff: bytes, declared_length: int = None, before: bytes = b'', identifier: bytes = b'Exif\x00\x00') -> bytes:
    """SOI, optional segments, then an APP1 segment wrapping ``tiff``."""
    if declared_length is None:
        declared_length = 2 + len(identifier) + len(tiff)
    return (
        b'\xff\xd8'
        + before
        + b'\xff\xe1'
        + struct.pack('>H', declared_length)
        + identifier
        + tiff
    )


def segment(marker: int, payload: bytes) -> bytes:
    return bytes([0xFF, marker]) + struct.pack('>H', len(payload) + 2) + payload


THUMBNAIL = b'\xff\xd8\xff\xd9'

# Layout of sample_tiff()
IFD0 = 8
MAKE = IFD0 + ifd_size(5)
EXIF = MAKE + 8
EXPOSURE = EXIF + ifd_size(3)
INTEROP = EXPOSURE + 8
GPS = INTEROP + ifd_size(1)
IFD1 = GPS + ifd_size(1)
THUMB = IFD1 + ifd_size(2)
SAMPLE_SIZE = THUMB + len(THUMBNAIL)


def sample_tiff(endian: str = LE) -> bytes:
    """
    A complete document: IFD0 with Make/Orientation and Exif/GPS pointers,
    an Exif IFD holding the Interoperability pointer, and IFD1 with a
    4-byte JPEG thumbnail.
    """
    ifd0 = directory([
        entry(0x010F, ASCII, 8, MAKE, endian),
        entry(0x0112, SHORT, 1, short_field(6, endian), endian),
        entry(0x0131, ASCII, 4, b'abc\x00', endian),
        entry(0x8769, LONG, 1, EXIF, endian),
        entry(0x8825, LONG, 1, GPS, endian),
    ], next_offset=IFD1, endian=endian)
    exif = directory([
        entry(0x829A, RATIONAL, 1, EXPOSURE, endian),
        entry(0x8827, SHORT, 1, short_field(100, endian), endian),
        entry(0xA005, LONG, 1, INTEROP, endian),
    ], endian=endian)
    interop = directory([entry(0x0001, ASCII, 4, b'R98\x00', endian)], endian=endian)
    gps = directory([entry(0x0001, ASCII, 2, b'N\x00', endian)], endian=endian)
    ifd1 = directory([
        entry(0x0201, LONG, 1, THUMB, endian),
        entry(0x0202, LONG, 1, len(THUMBNAIL), endian),
    ], endian=endian)
    data = (
        header(endian, IFD0)
        + ifd0
        + b'TestCam\x00'
        + exif
        + struct.pack(f'{endian}II', 1, 250)
        + interop
        + gps
        + ifd1
        + THUMBNAIL
    )
    assert len(data) == SAMPLE_SIZE
    return data
