"""
Incremental block reader for WebVTT input.

Bytes can arrive in chunks of any size. The reader buffers them and hands
out blocks (runs of non-blank lines separated by blank lines) only once a
block is known to be complete, so feeding a document one byte at a time
produces exactly the same blocks as feeding it all at once.
"""

import logging
import re
from typing import Iterator, List, Optional

logger = logging.getLogger(__name__)

_LINE_END = re.compile(rb'\r\n|\r|\n')


class BlockReader:
    """
    Stateful tokenizer turning pushed bytes into blocks of lines.

    Example:
        >>> reader = BlockReader()
        >>> reader.push_data(b"WEBVTT\\n\\nNOTE hi")
        >>> reader.next_block()
        ['WEBVTT']
        >>> reader.next_block() is None
        True
        >>> reader.flush()
        >>> reader.next_block()
        ['NOTE hi']
    """

    def __init__(self):
        """Initialize an empty reader."""
        self._buffer = bytearray()
        self._flushed = False
        # Lines of the block being assembled, kept across calls
        self._pending: List[str] = []
        # Start of the next unread line
        self._scan_pos = 0
        # Where the search for the next line terminator resumes
        self._search_pos = 0

    def push_data(self, data: bytes) -> None:
        """Append raw bytes to the internal buffer."""
        self._buffer.extend(data)

    def flush(self) -> None:
        """Signal that no more data will be pushed."""
        self._flushed = True

    def next_block(self) -> Optional[List[str]]:
        """
        Remove and return the next complete block.

        Only lines not seen by an earlier call are read, so feeding a block
        in many small pieces costs time linear in its size.

        Returns:
            List of lines without their terminators, or None when no complete
            block is buffered yet (or, after flush, when the input is exhausted)
        """
        while True:
            line = self._read_line()
            if line is None:
                break
            if line:
                self._pending.append(line.decode('utf-8', errors='replace'))
            elif self._pending:
                # Blank line terminates the block
                return self._take_block()

        if not self._flushed:
            return None

        # After flush every buffered line has been read
        if self._pending:
            logger.debug(f"Flushed final unterminated block of {len(self._pending)} line(s)")
            return self._take_block()
        self._discard_consumed()
        return None

    def __iter__(self) -> Iterator[List[str]]:
        while True:
            block = self.next_block()
            if block is None:
                return
            yield block

    def _take_block(self) -> List[str]:
        block = self._pending
        self._pending = []
        self._discard_consumed()
        return block

    def _discard_consumed(self) -> None:
        del self._buffer[:self._scan_pos]
        self._scan_pos = 0
        self._search_pos = 0

    def _read_line(self) -> Optional[bytes]:
        """Return the complete line at the scan position and move past it."""
        size = len(self._buffer)
        if self._scan_pos >= size:
            return None

        match = _LINE_END.search(self._buffer, self._search_pos)
        if match is None:
            if not self._flushed:
                self._search_pos = size
                return None
            end = line_end = size
        elif match.group() == b'\r' and match.end() == size and not self._flushed:
            # A trailing CR may be the first half of CRLF
            self._search_pos = match.start()
            return None
        else:
            line_end, end = match.start(), match.end()

        line = bytes(self._buffer[self._scan_pos:line_end])
        self._scan_pos = self._search_pos = end
        return line
