# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
exifdir - Exif/TIFF directory decoder

Decodes the TIFF Image File Directory tree stored in a JPEG APP1 Exif
segment: IFD0, the Exif, GPS and Interoperability sub-directories, and
the IFD1 thumbnail directory. Every offset read from the data is bounds
checked before it is dereferenced.

Copyright 2025 DNAi inc.
"""

__version__ = "0.1.0"
__author__ = "DNAi inc."

from exifdir.core import decode, decode_jpeg, decode_tiff
from exifdir.exceptions import (
    ExifDirError,
    ExifDecodeError,
    MalformedMarkerError,
    TruncatedInputError,
    InvalidTiffHeaderError,
    OffsetOutOfRangeError,
    UnsupportedTypeError,
    MalformedEntryError,
)
from exifdir.ifd_decoder import Directory, DirectoryEntry, decode_ifd
from exifdir.ifd_walker import ExifDocument, IFDWalker, walk_ifds
from exifdir.instrumentation import TraceEvent, logging_trace_hook
from exifdir.options import DecodeOptions
from exifdir.segment_locator import locate_exif_payload
from exifdir.tiff_buffer import ByteOrder, TiffBuffer
from exifdir.tiff_header import TiffHeader, read_tiff_header
from exifdir.value_resolver import resolve_value
from exifdir.value_types import ExifTagType, ResolvedValue

__all__ = [
    "decode",
    "decode_jpeg",
    "decode_tiff",
    "ExifDirError",
    "ExifDecodeError",
    "MalformedMarkerError",
    "TruncatedInputError",
    "InvalidTiffHeaderError",
    "OffsetOutOfRangeError",
    "UnsupportedTypeError",
    "MalformedEntryError",
    "Directory",
    "DirectoryEntry",
    "decode_ifd",
    "ExifDocument",
    "IFDWalker",
    "walk_ifds",
    "TraceEvent",
    "logging_trace_hook",
    "DecodeOptions",
    "locate_exif_payload",
    "ByteOrder",
    "TiffBuffer",
    "TiffHeader",
    "read_tiff_header",
    "resolve_value",
    "ExifTagType",
    "ResolvedValue",
]
