"""
Event Emitter: write each event in its collapsed form

For every finalized event:
- non-trace event      → written verbatim
- first trace sighting → header, `StackTrace: <fp>`, then the rest as-is
- repeated trace       → header, `StackTrace: <fp>, <first-seen ts>`;
                         the trace itself is dropped

Each event is handed to the sink in a single write, in input order.
"""

from typing import List, Optional

from logcollapse.context.classification import TraceClassifier
from logcollapse.context.fingerprint import FingerprintCache, fingerprint
from logcollapse.models import DEFAULT_TIMESTAMP_WIDTH, Event
from logcollapse.protocols import OutputSinkProtocol
from logcollapse.services.counters import (
    CALL_WRITE,
    EVENTS,
    LINES_READ,
    LINES_REDUCED,
    LINES_WRITTEN,
    MATCHED,
    STACKTRACES,
    Counters,
)


def first_occurrence_marker(key: str) -> str:
    return f"StackTrace: {key}\n"


def duplicate_marker(key: str, first_seen: str) -> str:
    return f"StackTrace: {key}, {first_seen}\n"


class EventEmitter:
    """
    Rewrites events against a fingerprint cache and writes them out.

    The cache and counters are owned by the caller and shared for the
    whole run, so the first event to claim a fingerprint decides the
    timestamp every later duplicate points back to.
    """

    def __init__(
        self,
        sink: OutputSinkProtocol,
        cache: FingerprintCache,
        counters: Counters,
        classifier: Optional[TraceClassifier] = None,
        timestamp_width: int = DEFAULT_TIMESTAMP_WIDTH,
        encoding: str = 'utf-8',
    ):
        self.sink = sink
        self.cache = cache
        self.counters = counters
        self.classifier = classifier or TraceClassifier()
        self.timestamp_width = timestamp_width
        self.encoding = encoding

    def emit(self, event: Event) -> List[str]:
        """
        Classify, look up and write one event.

        Args:
            event: Finalized Event from the segmenter

        Returns:
            The lines handed to the sink (empty for an empty event)
        """
        if not event:
            return []

        classification = self.classifier.classify(event)
        if not classification.is_trace:
            lines = list(event.lines)
        else:
            body = self.classifier.trace_body(event, classification)
            key = fingerprint(body, self.encoding)
            first_seen, found = self.cache.lookup_or_insert(
                key, event.timestamp(self.timestamp_width)
            )

            if found:
                self.counters.increment(MATCHED)
                self.counters.increment(LINES_REDUCED, len(body))
                lines = [event.header, duplicate_marker(key, first_seen)]
            else:
                self.counters.increment(STACKTRACES)
                lines = [event.header, first_occurrence_marker(key), *event.lines[1:]]

        self._write(lines)
        self.counters.increment(EVENTS)
        self.counters.increment(LINES_READ, len(event))
        self.counters.increment(LINES_WRITTEN, len(lines))
        return lines

    def _write(self, lines: List[str]) -> None:
        self.counters.increment(CALL_WRITE)
        self.sink.write(''.join(lines))
