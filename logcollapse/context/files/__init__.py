"""
File context: line sources, output sinks and output naming.
"""

from logcollapse.context.files.log_files import (
    REDUCED_SUFFIX,
    FileOutputSink,
    MemorySink,
    open_line_source,
    reduced_output_path,
)

__all__ = [
    'REDUCED_SUFFIX',
    'FileOutputSink',
    'MemorySink',
    'open_line_source',
    'reduced_output_path',
]
