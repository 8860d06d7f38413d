"""
Classification context for recognising stack-trace events.
"""

from logcollapse.context.classification.trace_classifier import (
    DEFAULT_START_INDEX,
    INDENTED_LINE_PATTERN,
    QUALIFIED_CLASS_PATTERN,
    TraceClassifier,
    is_indented,
    looks_like_qualified_class,
)

__all__ = [
    'DEFAULT_START_INDEX',
    'INDENTED_LINE_PATTERN',
    'QUALIFIED_CLASS_PATTERN',
    'TraceClassifier',
    'is_indented',
    'looks_like_qualified_class',
]
