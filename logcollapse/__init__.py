"""
logcollapse - Stack Trace Deduplication for Timestamped Application Logs

Reduces logs dominated by repeated exceptions: every distinct stack trace
is kept once, tagged with a fingerprint, and each repeat is rewritten as a
two-line reference to the timestamp of its first occurrence.

Architecture:
- Models: Pure data structures (Event, TraceClassification, CollapseSettings)
- Protocols: Interface contracts (OutputSinkProtocol)
- Context: Domain implementations (Segmentation, Classification, Fingerprint, Files)
- Services: Run orchestration (LogCollapser, EventEmitter, Counters)
- CLI: User interface (collapse command)
"""

__version__ = "1.0.0"
__license__ = "MIT"

from logcollapse import models, protocols
from logcollapse.errors import CollapseError, InputOpenError, OutputWriteError
from logcollapse.context import EventSegmenter, TraceClassifier, FingerprintCache, fingerprint, segment
from logcollapse.services import Counters, EventEmitter, LogCollapser, collapse_file, collapse_files

__all__ = [
    'models',
    'protocols',
    'CollapseError',
    'InputOpenError',
    'OutputWriteError',
    'EventSegmenter',
    'TraceClassifier',
    'FingerprintCache',
    'fingerprint',
    'segment',
    'Counters',
    'EventEmitter',
    'LogCollapser',
    'collapse_file',
    'collapse_files',
]
