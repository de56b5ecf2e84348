"""Newline framing for the device's text line protocol.

The device writes one message per line, terminated by ``\\n``. Serial reads
return arbitrary chunks, so a line may arrive split over several reads and
one read may carry several lines. The framer keeps the unterminated tail
between reads.
"""

from __future__ import annotations

import codecs

LINE_TERMINATOR = "\n"
ENCODING = "utf-8"


def split_lines(buffer: str, text: str) -> tuple[str, list[str]]:
    """Append ``text`` to ``buffer`` and cut off every complete line.

    Args:
        buffer: Pending partial line from previous calls (no ``\\n``).
        text: Newly decoded text.

    Returns:
        ``(remainder, lines)`` where ``lines`` are the complete lines in
        arrival order without their terminator and untrimmed, and
        ``remainder`` is everything after the last ``\\n`` (possibly empty).
    """
    data = buffer + text
    *lines, remainder = data.split(LINE_TERMINATOR)
    return remainder, lines


class LineBuffer:
    """Stateful line framer fed with raw bytes or decoded text.

    Bytes go through an incremental UTF-8 decoder so multi-byte characters
    split across reads are reassembled; undecodable bytes are replaced.
    """

    def __init__(self) -> None:
        self._pending = ""
        self._decoder = codecs.getincrementaldecoder(ENCODING)(errors="replace")

    @property
    def pending(self) -> str:
        """The buffered partial line."""
        return self._pending

    def feed(self, text: str) -> list[str]:
        """Add decoded text and return the lines it completed."""
        self._pending, lines = split_lines(self._pending, text)
        return lines

    def feed_bytes(self, data: bytes) -> list[str]:
        """Decode a raw chunk and return the lines it completed."""
        return self.feed(self._decoder.decode(data))

    def reset(self) -> None:
        self._pending = ""
        self._decoder.reset()
