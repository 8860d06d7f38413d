"""
Segmentation context for splitting logs into events.
"""

from logcollapse.context.segmentation.segmenter import (
    LINE_START_PATTERN,
    EventSegmenter,
    is_event_start,
    segment,
    split_lines,
)

__all__ = ['LINE_START_PATTERN', 'EventSegmenter', 'is_event_start', 'segment', 'split_lines']
