"""
Services layer - application orchestration.
"""

from logcollapse.services.counters import Counters
from logcollapse.services.emitter import EventEmitter
from logcollapse.services.collapser import LogCollapser, collapse_file, collapse_files

__all__ = [
    'Counters',
    'EventEmitter',
    'LogCollapser',
    'collapse_file',
    'collapse_files',
]
