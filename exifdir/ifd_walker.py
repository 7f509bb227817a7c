# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
IFD graph walker

Builds the ExifDocument from a TIFF buffer. The traversal is fixed:

    primary (IFD0) --0x8769--> exif --(0xA005)--> interoperability
           |-------0x8825--> gps
           |-------0xA005--> interoperability
           '--next offset--> thumbnail (IFD1)

At most five directories are decoded per document. Next-offset fields
of linked directories are not followed. The exif --> interoperability
edge is only taken with follow_interoperability_in_exif.

Copyright 2025 DNAi inc.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from exifdir.exceptions import ExifDecodeError, MalformedEntryError
from exifdir.exif_tags import (
    EXIF_IFD_POINTER,
    GPS_IFD_POINTER,
    INTEROPERABILITY_IFD_POINTER,
    JPEG_INTERCHANGE_FORMAT,
    JPEG_INTERCHANGE_FORMAT_LENGTH,
)
from exifdir.ifd_decoder import Directory, decode_ifd
from exifdir.options import DEFAULT_OPTIONS, DecodeOptions
from exifdir.tiff_buffer import ByteOrder, TiffBuffer
from exifdir.tiff_header import TIFF_HEADER_SIZE
from exifdir.value_types import ExifTagType

logger = logging.getLogger(__name__)

DIRECTORY_NAMES = ('primary', 'exif', 'gps', 'interoperability', 'thumbnail')
MAX_DIRECTORIES = len(DIRECTORY_NAMES)

# Offsets may be stored as SHORT or LONG
POINTER_TYPES = (ExifTagType.LONG, ExifTagType.SHORT)


@dataclass(frozen=True)
class ExifDocument:
    """
    Decoded Exif directory tree.

    Optional directories are None when their pointer tag or next-offset
    link is absent (or, in tolerant mode, when decoding them failed; the
    error is then listed in ``errors``).
    """
    byte_order: ByteOrder
    primary: Directory
    exif: Optional[Directory] = None
    gps: Optional[Directory] = None
    interoperability: Optional[Directory] = None
    thumbnail: Optional[Directory] = None
    pre_ifd_bytes: bytes = b''
    errors: Tuple[ExifDecodeError, ...] = ()
    buffer: Optional[TiffBuffer] = field(default=None, repr=False, compare=False)

    def directories(self) -> Iterator[Tuple[str, Directory]]:
        """Yield ``(name, directory)`` for every present directory, in walk order."""
        for name in DIRECTORY_NAMES:
            directory = getattr(self, name)
            if directory is not None:
                yield name, directory

    def thumbnail_bytes(self) -> Optional[bytes]:
        """
        Extract the JPEG thumbnail referenced by IFD1.

        Returns:
            Thumbnail bytes, or None if there is no IFD1 or it lacks
            JPEGInterchangeFormat/JPEGInterchangeFormatLength

        Raises:
            OffsetOutOfRangeError: If the thumbnail range is outside the buffer
            TypeError: If either tag is not an integer value
        """
        if self.thumbnail is None or self.buffer is None:
            return None
        start = self.thumbnail.value(JPEG_INTERCHANGE_FORMAT)
        length = self.thumbnail.value(JPEG_INTERCHANGE_FORMAT_LENGTH)
        if start is None or length is None:
            return None
        try:
            return self.buffer.span(start.as_int(), length.as_int())
        except ExifDecodeError as e:
            raise e.annotate(directory='thumbnail', ifd_offset=self.thumbnail.offset)


class IFDWalker:
    """
    Walks the directory graph of one TIFF buffer.

    A walker is single-use: create one per decode.
    """

    def __init__(self, buffer: TiffBuffer, options: Optional[DecodeOptions] = None):
        self.buffer = buffer
        self.options = options or DEFAULT_OPTIONS
        self.errors: List[ExifDecodeError] = []
        self.decoded = 0

    def walk(self, first_ifd_offset: int) -> ExifDocument:
        """
        Decode the primary directory and everything linked from it.

        Args:
            first_ifd_offset: Offset of IFD0 from the TIFF header

        Returns:
            The complete ExifDocument

        Raises:
            ExifDecodeError: On the first structural error (fail-fast), or
                for errors in the primary directory in tolerant mode
        """
        try:
            primary = self._decode(first_ifd_offset)
        except ExifDecodeError as e:
            raise e.annotate(directory='primary')

        exif = self._follow_pointer(primary, EXIF_IFD_POINTER, 'exif')
        gps = self._follow_pointer(primary, GPS_IFD_POINTER, 'gps')

        interop_source = primary
        if (
            INTEROPERABILITY_IFD_POINTER not in primary
            and exif is not None
            and self.options.follow_interoperability_in_exif
        ):
            interop_source = exif
        interoperability = self._follow_pointer(
            interop_source, INTEROPERABILITY_IFD_POINTER, 'interoperability'
        )

        thumbnail = None
        if primary.has_next and self.options.follow_thumbnail:
            thumbnail = self._decode_linked(primary.next_offset, 'thumbnail')

        pre_ifd_bytes = b''
        if first_ifd_offset > TIFF_HEADER_SIZE:
            pre_ifd_bytes = self.buffer.span(
                TIFF_HEADER_SIZE, first_ifd_offset - TIFF_HEADER_SIZE
            )

        return ExifDocument(
            byte_order=self.buffer.byte_order,
            primary=primary,
            exif=exif,
            gps=gps,
            interoperability=interoperability,
            thumbnail=thumbnail,
            pre_ifd_bytes=pre_ifd_bytes,
            errors=tuple(self.errors),
            buffer=self.buffer,
        )

    def _decode(self, offset: int) -> Directory:
        # The traversal shape caps this; the counter keeps it explicit
        if self.decoded >= MAX_DIRECTORIES:
            raise MalformedEntryError(
                f"more than {MAX_DIRECTORIES} directories in one document",
                ifd_offset=offset,
            )
        self.decoded += 1
        return decode_ifd(self.buffer, offset, self.options.trace)

    def _follow_pointer(
        self, parent: Directory, tag: int, name: str
    ) -> Optional[Directory]:
        entry = parent.get(tag)
        if entry is None:
            return None
        if entry.type_code not in POINTER_TYPES or entry.count != 1:
            return self._fail(MalformedEntryError(
                f"{name} pointer must be a single LONG or SHORT, "
                f"got type {entry.type_code} count {entry.count}",
                offset=entry.offset,
                ifd_offset=parent.offset,
                entry_index=entry.index,
                tag=tag,
            ), name)
        return self._decode_linked(entry.value.as_int(), name)

    def _decode_linked(self, offset: int, name: str) -> Optional[Directory]:
        try:
            return self._decode(offset)
        except ExifDecodeError as e:
            return self._fail(e, name)

    def _fail(self, error: ExifDecodeError, name: str) -> None:
        """Raise ``error`` in fail-fast mode, record it in tolerant mode."""
        error.annotate(directory=name)
        if not self.options.tolerant:
            raise error
        logger.warning("Skipping %s directory: %s", name, error)
        self.errors.append(error)
        return None


def walk_ifds(
    buffer: TiffBuffer,
    first_ifd_offset: int,
    options: Optional[DecodeOptions] = None,
) -> ExifDocument:
    """Decode the directory graph of ``buffer`` starting at ``first_ifd_offset``."""
    return IFDWalker(buffer, options).walk(first_ifd_offset)
