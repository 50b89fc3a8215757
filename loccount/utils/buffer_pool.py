"""
Read Buffer Pool

Fixed-size ``bytearray`` read buffers shared between file scans. Each scan
borrows one buffer for its whole lifetime and hands it back when it ends, so
peak memory follows the number of concurrent scans rather than the number of
files scanned.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List

LOGGER_NAME = "loccount.buffer_pool"
logger = logging.getLogger(LOGGER_NAME)
logger.setLevel(logging.INFO)

DEFAULT_BUFFER_SIZE = 32 * 1024
DEFAULT_MAX_RETAINED = 64


class BufferPool:
    """
    Pool of reusable read buffers.
    """

    def __init__(
        self,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        max_retained: int = DEFAULT_MAX_RETAINED,
    ) -> None:
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self.buffer_size = buffer_size
        self.max_retained = max_retained
        self._lock = threading.Lock()
        self._free: List[bytearray] = []
        self._in_use = 0
        self._allocated = 0

    def acquire(self) -> bytearray:
        with self._lock:
            self._in_use += 1
            if self._free:
                return self._free.pop()
            self._allocated += 1
        logger.debug("Allocating %d byte read buffer", self.buffer_size)
        return bytearray(self.buffer_size)

    def release(self, buffer: bytearray) -> None:
        with self._lock:
            self._in_use -= 1
            if len(buffer) == self.buffer_size and len(self._free) < self.max_retained:
                self._free.append(buffer)

    @contextmanager
    def borrow(self) -> Iterator[bytearray]:
        """
        Borrow a buffer, returning it to the pool on every exit path.
        """
        buffer = self.acquire()
        try:
            yield buffer
        finally:
            self.release(buffer)

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "buffer_size": self.buffer_size,
                "in_use": self._in_use,
                "free": len(self._free),
                "allocated": self._allocated,
            }


DEFAULT_POOL = BufferPool()
