# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Directory entry value resolver

Computes a field's byte length from its type and count, then takes the
value either from the entry's 4-byte field (inline) or from the offset
that field holds (indirect).

Copyright 2025 DNAi inc.
"""

from exifdir.exceptions import MalformedEntryError, UnsupportedTypeError
from exifdir.tiff_buffer import TiffBuffer
from exifdir.value_types import ResolvedValue, type_size

INLINE_FIELD_SIZE = 4


def resolve_value(
    buffer: TiffBuffer,
    type_code: int,
    count: int,
    raw_field: bytes,
) -> ResolvedValue:
    """
    Materialize the value of one directory entry.

    Args:
        buffer: TIFF buffer the entry belongs to
        type_code: TIFF field type
        count: Number of elements
        raw_field: The entry's 4-byte value-or-offset field

    Returns:
        ResolvedValue holding exactly ``count * type_size`` bytes

    Raises:
        UnsupportedTypeError: If the type code is not a standard TIFF type
        OffsetOutOfRangeError: If an indirect value does not fit in the buffer
    """
    if len(raw_field) != INLINE_FIELD_SIZE:
        raise MalformedEntryError(
            f"value field must be {INLINE_FIELD_SIZE} bytes, got {len(raw_field)}"
        )
    try:
        size = type_size(type_code)
    except KeyError:
        raise UnsupportedTypeError(
            f"unsupported field type {type_code}", type_code=type_code
        ) from None

    length = count * size
    if length <= INLINE_FIELD_SIZE:
        data = raw_field[:length]
    else:
        value_offset = buffer.unpack('I', raw_field)[0]
        data = buffer.span(value_offset, length)

    return ResolvedValue(type_code, count, data, buffer.byte_order)
