"""Shared utility functions for the settings store."""

import logging
from typing import BinaryIO, Optional

logger = logging.getLogger(__name__)

COPY_BUFFER_SIZE = 1024

# Control characters and space (U+0000..U+0020) count as blank
_BLANK_CHARS = "".join(chr(code) for code in range(0x21))


def is_not_empty(value: Optional[str]) -> bool:
    """True when value is not None and has a character above U+0020.

    Only space and control characters are trimmed, so a no-break space
    (U+00A0) counts as content.
    """
    return value is not None and value.strip(_BLANK_CHARS) != ""


def copy_stream(
    source: BinaryIO,
    sink: BinaryIO,
    buffer_size: int = COPY_BUFFER_SIZE,
) -> bool:
    """Copy bytes from source to sink, best effort.

    Neither stream is closed; the sink is flushed on success.

    Args:
        source: Readable binary stream.
        sink: Writable binary stream.
        buffer_size: Bytes read per iteration.

    Returns:
        True if everything was copied, False if an I/O error interrupted
        the copy. The error is logged, never raised.
    """
    try:
        while True:
            chunk = source.read(buffer_size)
            if not chunk:
                break
            sink.write(chunk)
        sink.flush()
    except (OSError, ValueError):
        # ValueError covers I/O on a closed file
        logger.exception("Stream copy failed")
        return False
    return True
