# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Decode tracing

The decoder does not log on its own. Callers that want to observe a
decode pass a trace hook, which is called with a TraceEvent when a
directory is entered and when each entry's value is resolved.

Copyright 2025 DNAi inc.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

DIRECTORY_ENTERED = 'directory_entered'
VALUE_RESOLVED = 'value_resolved'

trace_logger = logging.getLogger('exifdir.trace')


@dataclass(frozen=True)
class TraceEvent:
    """One observation point in a decode."""
    event: str
    offset: int
    entry_count: Optional[int] = None
    entry_index: Optional[int] = None
    tag: Optional[int] = None
    type_code: Optional[int] = None
    count: Optional[int] = None
    length: Optional[int] = None
    inline: Optional[bool] = None


TraceHook = Callable[[TraceEvent], None]


def logging_trace_hook(event: TraceEvent) -> None:
    """Trace hook that forwards events to the ``exifdir.trace`` logger at DEBUG."""
    if not trace_logger.isEnabledFor(logging.DEBUG):
        return
    if event.event == DIRECTORY_ENTERED:
        trace_logger.debug(
            "directory at 0x%x: %d entries", event.offset, event.entry_count
        )
    else:
        trace_logger.debug(
            "entry %d tag 0x%04x type %d count %d: %d bytes %s at 0x%x",
            event.entry_index,
            event.tag,
            event.type_code,
            event.count,
            event.length,
            'inline' if event.inline else 'indirect',
            event.offset,
        )
