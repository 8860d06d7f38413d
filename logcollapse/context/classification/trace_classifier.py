"""
Trace Classifier: Decide which events carry a stack trace

Pattern-based heuristic, NO parsing of the trace itself:
- Line 0 is the timestamped header
- Line 1 must look like a qualified exception class
  (e.g. `java.lang.NullPointerException: boom`)
- The trace body starts at the first indented line from line 2 onward,
  so message lines sitting between the exception line and the first
  frame (request IDs, "Caused by" summaries) stay out of the fingerprint

False positives and negatives are possible and accepted. The rules are
kept exactly as they are so that output stays comparable between runs.
"""

import re
from typing import Tuple

from logcollapse.models import Event, TraceClassification


# One or more dot-terminated segments, then a final class segment
QUALIFIED_CLASS_PATTERN = re.compile(r'^(?:[a-zA-Z0-9-]+\.)+[A-Za-z0-9$]+')

# Leading whitespace marks a stack frame (`\tat com.foo.Bar...`)
INDENTED_LINE_PATTERN = re.compile(r'^\s+', re.ASCII)

# Header + exception line + at least one more line
MIN_TRACE_LINES = 3

# Body offset used when no indented line is found
DEFAULT_START_INDEX = 2

NOT_A_TRACE = TraceClassification(is_trace=False, start_index=DEFAULT_START_INDEX)


def looks_like_qualified_class(line: str) -> bool:
    return QUALIFIED_CLASS_PATTERN.match(line) is not None


def is_indented(line: str) -> bool:
    return INDENTED_LINE_PATTERN.match(line) is not None


class TraceClassifier:
    """
    Classify events and locate the start of their trace body.

    The classifier is stateless; one instance can be shared freely.
    """

    def classify(self, event: Event) -> TraceClassification:
        """
        Classify a finalized event.

        Args:
            event: Completed Event

        Returns:
            TraceClassification with `is_trace` and the body `start_index`
        """
        lines = event.lines
        if len(lines) < MIN_TRACE_LINES or not looks_like_qualified_class(lines[1]):
            return NOT_A_TRACE

        start_index = DEFAULT_START_INDEX
        for index in range(DEFAULT_START_INDEX, len(lines)):
            if is_indented(lines[index]):
                start_index = index
                break

        return TraceClassification(is_trace=True, start_index=start_index)

    def trace_body(self, event: Event, classification: TraceClassification) -> Tuple[str, ...]:
        """Lines of `event` that make up the fingerprinted trace body."""
        if not classification.is_trace:
            return ()
        return event.lines[classification.start_index:]
