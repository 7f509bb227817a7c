# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Decode options

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass
from typing import Optional

from exifdir.instrumentation import TraceHook


@dataclass(frozen=True)
class DecodeOptions:
    """
    Configuration for a single decode.

    Attributes:
        tolerant: Record errors in linked directories on the document and
            keep going, instead of failing the whole decode. Errors in the
            primary directory are always fatal.
        trace: Optional hook called at directory and value events
        follow_thumbnail: Decode the directory linked from the primary
            directory's next-offset field
        follow_interoperability_in_exif: Look up the Interoperability
            pointer in the Exif directory when the primary directory
            does not carry it
    """
    tolerant: bool = False
    trace: Optional[TraceHook] = None
    follow_thumbnail: bool = True
    follow_interoperability_in_exif: bool = False


DEFAULT_OPTIONS = DecodeOptions()
