"""
Line Reader

Splits a binary stream into physical lines using a caller-supplied buffer.
Line terminators (``\\n`` and a preceding ``\\r``) are dropped. A final line
without a terminator is still produced.
"""

from __future__ import annotations

from typing import BinaryIO, Iterator

from loccount.analyzers.loc.errors import LineTooLongError
from loccount.analyzers.loc.models import DEFAULT_MAX_LINE_LENGTH


class LineReader:
    def __init__(
        self,
        stream: BinaryIO,
        buffer: bytearray,
        *,
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
        encoding: str = "utf-8",
        errors: str = "replace",
    ) -> None:
        self.stream = stream
        self.buffer = buffer
        self.max_line_length = max_line_length
        self.encoding = encoding
        self.errors = errors
        self.lines_read = 0

    def _decode(self, data: bytearray) -> str:
        if data.endswith(b"\r"):
            del data[-1]
        return data.decode(self.encoding, errors=self.errors)

    def _fill(self, view: memoryview) -> int:
        readinto = getattr(self.stream, "readinto", None)
        if readinto is not None:
            return readinto(view) or 0

        data = self.stream.read(len(view))
        if not data:
            return 0
        view[: len(data)] = data
        return len(data)

    def _check_length(self, pending: bytearray) -> None:
        length = len(pending)
        if pending.endswith(b"\r"):
            length -= 1
        if length > self.max_line_length:
            raise LineTooLongError(self.lines_read + 1, self.max_line_length)

    def __iter__(self) -> Iterator[str]:
        pending = bytearray()

        with memoryview(self.buffer) as view:
            while True:
                size = self._fill(view)
                if size == 0:
                    break

                start = 0
                while start < size:
                    newline = self.buffer.find(b"\n", start, size)
                    if newline < 0:
                        pending += view[start:size]
                        self._check_length(pending)
                        break

                    pending += view[start:newline]
                    self._check_length(pending)
                    self.lines_read += 1
                    yield self._decode(pending)
                    pending.clear()
                    start = newline + 1

        if pending:
            self._check_length(pending)
            self.lines_read += 1
            yield self._decode(pending)
