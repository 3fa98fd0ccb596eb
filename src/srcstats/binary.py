"""Binary content detection"""

import logging
from typing import BinaryIO

logger = logging.getLogger(__name__)

# Same budget git uses for its "is this binary?" check
BINARY_DETECTION_BYTES = 8000
CHUNK_SIZE = 4096


def is_binary(stream: BinaryIO) -> bool:
    """Guess whether a stream holds binary data.

    Reads up to BINARY_DETECTION_BYTES from the current position (expected to
    be the start of the stream) and reports True if any of them is a null
    byte. The stream is always rewound to offset 0 before returning.

    A failing read is treated as "not binary" so the caller still gets a
    chance to process the file.
    """
    try:
        remaining = BINARY_DETECTION_BYTES
        while remaining > 0:
            try:
                chunk = stream.read(min(CHUNK_SIZE, remaining))
            except OSError as e:
                logger.debug(f'Read failed during binary detection: {e}')
                return False
            if not chunk:
                break
            if b'\x00' in chunk:
                return True
            remaining -= len(chunk)
        return False
    finally:
        stream.seek(0)


__all__ = ['BINARY_DETECTION_BYTES', 'is_binary']
