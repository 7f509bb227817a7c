# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exception classes for exifdir

This module defines the error taxonomy raised while decoding Exif/TIFF
directory structures. Every structural violation is raised as a subclass
of ExifDecodeError carrying a stable ``kind`` string and the location
(directory, offset, entry index, tag) where it was detected.

Copyright 2025 DNAi inc.
"""

from typing import Optional


class ExifDirError(Exception):
    """
    Base exception for all exifdir errors.

    All exifdir exceptions inherit from this class, allowing
    catch-all error handling for any exifdir-related errors.
    """
    def __init__(self, message: str = ""):
        """
        Initialize the exception with an optional error message.

        Args:
            message: Descriptive error message explaining what went wrong
        """
        self.message = message
        super().__init__(message)


class ExifDecodeError(ExifDirError):
    """
    Raised when the bytes being decoded violate the Exif/TIFF structure.

    Location fields are filled in as the error propagates outwards:
    the buffer accessor knows the offending offset, the directory decoder
    adds its own offset, the entry index and tag, and the walker adds the
    directory name.
    """
    kind = "DecodeError"

    def __init__(
        self,
        message: str = "",
        offset: Optional[int] = None,
        ifd_offset: Optional[int] = None,
        entry_index: Optional[int] = None,
        tag: Optional[int] = None,
        directory: Optional[str] = None,
    ):
        self.offset = offset
        self.ifd_offset = ifd_offset
        self.entry_index = entry_index
        self.tag = tag
        self.directory = directory
        super().__init__(message)

    def annotate(
        self,
        offset: Optional[int] = None,
        ifd_offset: Optional[int] = None,
        entry_index: Optional[int] = None,
        tag: Optional[int] = None,
        directory: Optional[str] = None,
    ) -> "ExifDecodeError":
        """
        Fill in location fields that are not already set.

        Inner layers know the most precise location, so values that are
        already present are never overwritten.

        Returns:
            The same exception, for use in ``raise err.annotate(...)``
        """
        if self.offset is None:
            self.offset = offset
        if self.ifd_offset is None:
            self.ifd_offset = ifd_offset
        if self.entry_index is None:
            self.entry_index = entry_index
        if self.tag is None:
            self.tag = tag
        if self.directory is None:
            self.directory = directory
        return self

    def location(self) -> str:
        """Render the known location fields as a short string."""
        parts = []
        if self.directory is not None:
            parts.append(f"directory={self.directory}")
        if self.ifd_offset is not None:
            parts.append(f"ifd_offset=0x{self.ifd_offset:x}")
        if self.offset is not None:
            parts.append(f"offset=0x{self.offset:x}")
        if self.entry_index is not None:
            parts.append(f"entry={self.entry_index}")
        if self.tag is not None:
            parts.append(f"tag=0x{self.tag:04x}")
        return ", ".join(parts)

    def __str__(self) -> str:
        location = self.location()
        if location:
            return f"{self.kind}: {self.message} ({location})"
        return f"{self.kind}: {self.message}"


class MalformedMarkerError(ExifDecodeError):
    """
    Raised when the JPEG framing around the Exif payload is wrong.

    This exception is raised when:
    - The data does not start with the SOI marker
    - A segment does not start with a 0xFF marker byte
    - No APP1 segment carries the "Exif\\0\\0" identifier
    """
    kind = "MalformedMarker"


class TruncatedInputError(ExifDecodeError):
    """
    Raised when a declared segment or directory length exceeds the
    available bytes.
    """
    kind = "TruncatedInput"


class InvalidTiffHeaderError(ExifDecodeError):
    """
    Raised when the TIFF header has an unknown byte order marker or a
    version constant other than 42.
    """
    kind = "InvalidTiffHeader"


class OffsetOutOfRangeError(ExifDecodeError):
    """
    Raised when a value or directory offset, or offset plus length,
    falls outside the TIFF buffer.
    """
    kind = "OffsetOutOfRange"


class UnsupportedTypeError(ExifDecodeError):
    """Raised when an entry's type code is not a standard TIFF type."""
    kind = "UnsupportedType"

    def __init__(self, message: str = "", type_code: Optional[int] = None, **location):
        self.type_code = type_code
        super().__init__(message, **location)


class MalformedEntryError(ExifDecodeError):
    """
    Raised when a directory entry cannot be interpreted structurally,
    e.g. a slot that is not exactly 12 bytes or a sub-directory pointer
    that is not a single unsigned integer.
    """
    kind = "MalformedEntry"
