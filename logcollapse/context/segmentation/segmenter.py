"""
Segmenter: Group physical log lines into logical events

A new event starts at every line beginning with a bracketed date,
e.g. `[2024-01-01 12:00:00,123] ERROR ...`. Every other line (message
continuations, stack frames, blank lines) belongs to the event above it.
"""

import re
from typing import Iterable, Iterator, List, Optional

from logcollapse.models import Event


# Line starts with `[YYYY-MM-DD`
LINE_START_PATTERN = re.compile(r'^\[\d{4}-\d{2}-\d{2}', re.ASCII)


def is_event_start(line: str) -> bool:
    """True when `line` opens a new log event."""
    return LINE_START_PATTERN.match(line) is not None


def split_lines(text: str) -> List[str]:
    """
    Split text into physical lines, ending each one only at `\\n`.

    A lone `\\r`, form feed or Unicode line separator stays inside its
    line. The terminator is kept; a trailing fragment without one is
    returned as the last line.

    Example:
        >>> split_lines('a\\rb\\nc')
        ['a\\rb\\n', 'c']
    """
    parts = text.split('\n')
    lines = [part + '\n' for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


class EventSegmenter:
    """
    Push-style segmenter holding one in-progress event.

    Feed lines in file order with `feed()`; a completed Event is returned
    whenever a boundary closes the previous one. Call `finish()` once the
    input is exhausted to collect the trailing event.

    Example:
        >>> seg = EventSegmenter()
        >>> seg.feed('[2024-01-01 00:00:00] INFO a\\n') is None
        True
        >>> seg.feed('  more\\n') is None
        True
        >>> seg.feed('[2024-01-01 00:00:01] INFO b\\n').lines
        ('[2024-01-01 00:00:00] INFO a\\n', '  more\\n')
    """

    def __init__(self):
        self._buffer: List[str] = []

    def feed(self, line: str) -> Optional[Event]:
        if is_event_start(line):
            event = self._flush()
            # fresh list per event, never cleared in place
            self._buffer = [line]
            return event

        self._buffer.append(line)
        return None

    def finish(self) -> Optional[Event]:
        return self._flush()

    def _flush(self) -> Optional[Event]:
        # The very first boundary closes an empty buffer: nothing to emit
        if not self._buffer:
            return None

        event = Event(tuple(self._buffer))
        self._buffer = []
        return event


def segment(lines: Iterable[str]) -> Iterator[Event]:
    """
    Split an iterable of physical lines into Events.

    Args:
        lines: Lines in file order, terminators included

    Yields:
        Non-empty Events in input order
    """
    segmenter = EventSegmenter()
    for line in lines:
        event = segmenter.feed(line)
        if event is not None:
            yield event

    event = segmenter.finish()
    if event is not None:
        yield event
