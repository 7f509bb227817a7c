# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
IFD (Image File Directory) decoder

An IFD is a 2-byte entry count, ``count`` 12-byte entries and a 4-byte
offset of the next directory in the chain:

    +-------+----------------------------+-------------+
    | count | entry[0] ... entry[count-1] | next offset |
    +-------+----------------------------+-------------+
      2 B          12 B each                  4 B

Each entry is a 2-byte tag, 2-byte type, 4-byte count and a 4-byte field
holding the value itself (when it fits) or the offset of the value.

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from exifdir.exceptions import (
    ExifDecodeError,
    MalformedEntryError,
    OffsetOutOfRangeError,
    TruncatedInputError,
)
from exifdir.instrumentation import (
    DIRECTORY_ENTERED,
    VALUE_RESOLVED,
    TraceEvent,
    TraceHook,
)
from exifdir.tiff_buffer import TiffBuffer
from exifdir.value_resolver import INLINE_FIELD_SIZE, resolve_value
from exifdir.value_types import ResolvedValue

ENTRY_SIZE = 12
COUNT_SIZE = 2
NEXT_OFFSET_SIZE = 4


@dataclass(frozen=True)
class DirectoryEntry:
    """One 12-byte IFD entry with its resolved value."""
    tag: int
    type_code: int
    count: int
    raw_field: bytes
    value: ResolvedValue
    index: int
    offset: int

    @property
    def is_inline(self) -> bool:
        return len(self.value.data) <= INLINE_FIELD_SIZE


@dataclass(frozen=True)
class Directory:
    """
    A decoded IFD.

    Entries keep their on-disk order; ``get`` returns the first entry
    with a given tag.
    """
    offset: int
    entries: Tuple[DirectoryEntry, ...]
    next_offset: int

    def __iter__(self) -> Iterator[DirectoryEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, tag: int) -> bool:
        return self.get(tag) is not None

    def get(self, tag: int) -> Optional[DirectoryEntry]:
        for entry in self.entries:
            if entry.tag == tag:
                return entry
        return None

    def value(self, tag: int) -> Optional[ResolvedValue]:
        entry = self.get(tag)
        return entry.value if entry is not None else None

    def tags(self) -> Tuple[int, ...]:
        return tuple(entry.tag for entry in self.entries)

    @property
    def has_next(self) -> bool:
        return self.next_offset != 0


def directory_size(entry_count: int) -> int:
    return COUNT_SIZE + ENTRY_SIZE * entry_count + NEXT_OFFSET_SIZE


def decode_ifd(
    buffer: TiffBuffer,
    offset: int,
    trace: Optional[TraceHook] = None,
) -> Directory:
    """
    Decode the directory at ``offset``.

    The whole directory (count, entries and trailer) is checked against
    the buffer before any entry is read, so a corrupt entry count can
    never cause more work than the buffer size allows.

    Args:
        buffer: TIFF buffer
        offset: Absolute offset of the directory
        trace: Optional trace hook

    Returns:
        Directory with entries in on-disk order and the raw next offset

    Raises:
        OffsetOutOfRangeError: If ``offset`` is outside the buffer, or an
            entry value does not fit in it
        TruncatedInputError: If the declared directory does not fit
        UnsupportedTypeError: If an entry has an unknown type
        MalformedEntryError: If an entry slot is not 12 bytes
    """
    if offset < 0 or offset >= len(buffer):
        raise OffsetOutOfRangeError(
            f"directory offset {offset} outside buffer of {len(buffer)} bytes",
            offset=offset,
            ifd_offset=offset,
        )

    try:
        entry_count = buffer.uint16(offset, TruncatedInputError)
        # Bounds for the whole structure, including the trailer
        buffer.span(offset, directory_size(entry_count), TruncatedInputError)
    except ExifDecodeError as e:
        raise e.annotate(ifd_offset=offset)

    if trace is not None:
        trace(TraceEvent(DIRECTORY_ENTERED, offset, entry_count=entry_count))

    entries = []
    for index in range(entry_count):
        slot_offset = offset + COUNT_SIZE + ENTRY_SIZE * index
        slot = buffer.span(slot_offset, ENTRY_SIZE, TruncatedInputError)
        if len(slot) != ENTRY_SIZE:
            raise MalformedEntryError(
                f"entry slot is {len(slot)} bytes",
                offset=slot_offset,
                entry_index=index,
            )
        tag, type_code, count = buffer.unpack('HHI', slot[:8])
        raw_field = slot[8:]

        try:
            value = resolve_value(buffer, type_code, count, raw_field)
        except ExifDecodeError as e:
            raise e.annotate(
                offset=slot_offset, ifd_offset=offset, entry_index=index, tag=tag
            )

        entry = DirectoryEntry(
            tag=tag,
            type_code=type_code,
            count=count,
            raw_field=raw_field,
            value=value,
            index=index,
            offset=slot_offset,
        )
        entries.append(entry)

        if trace is not None:
            trace(TraceEvent(
                VALUE_RESOLVED,
                slot_offset,
                entry_index=index,
                tag=tag,
                type_code=type_code,
                count=count,
                length=len(value.data),
                inline=entry.is_inline,
            ))

    next_offset = buffer.uint32(
        offset + COUNT_SIZE + ENTRY_SIZE * entry_count, TruncatedInputError
    )
    return Directory(offset=offset, entries=tuple(entries), next_offset=next_offset)
