"""
Context layer - domain-specific implementations.
"""

from logcollapse.context.segmentation import EventSegmenter, segment
from logcollapse.context.classification import TraceClassifier
from logcollapse.context.fingerprint import FingerprintCache, fingerprint
from logcollapse.context.files import (
    FileOutputSink,
    MemorySink,
    open_line_source,
    reduced_output_path,
)

__all__ = [
    'EventSegmenter',
    'segment',
    'TraceClassifier',
    'FingerprintCache',
    'fingerprint',
    'FileOutputSink',
    'MemorySink',
    'open_line_source',
    'reduced_output_path',
]
