"""
Data models for logcollapse.

This module contains pure data structures with no business logic.
"""

from dataclasses import dataclass, field as dataclass_field
from pathlib import Path
from typing import Dict, Optional, Tuple

__all__ = [
    'Event',
    'TraceClassification',
    'CollapseSettings',
    'CollapseResult',
    'DEFAULT_TIMESTAMP_WIDTH',
    'DEFAULT_BUFFER_SIZE',
]

# Fixed width of the "[YYYY-MM-DD HH:MM:SS,mmm]" style header prefix
DEFAULT_TIMESTAMP_WIDTH = 25

# ~4MiB, close to a typical st_blksize on large volumes
DEFAULT_BUFFER_SIZE = 4194000


@dataclass(frozen=True)
class Event:
    """
    One logical log record: a header line plus its continuation lines.

    Lines keep their original terminators so that writing them back
    out reproduces the input byte for byte.
    """
    lines: Tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.lines)

    def __bool__(self) -> bool:
        return bool(self.lines)

    @property
    def header(self) -> str:
        return self.lines[0]

    def timestamp(self, width: int = DEFAULT_TIMESTAMP_WIDTH) -> str:
        """
        Leading `width` characters of the header line.

        The terminator is stripped first so a header shorter than the
        timestamp width never drags its newline into the token.
        """
        return self.lines[0].rstrip('\r\n')[:width]


@dataclass(frozen=True)
class TraceClassification:
    """Outcome of running the trace classifier over one Event."""
    is_trace: bool
    start_index: int = 2  # first line of the trace body


@dataclass
class CollapseSettings:
    """Run configuration passed from the CLI down to the services layer."""
    timestamp_width: int = DEFAULT_TIMESTAMP_WIDTH
    encoding: str = 'utf-8'
    buffer_size: int = DEFAULT_BUFFER_SIZE
    jobs: int = 1


@dataclass
class CollapseResult:
    """Summary of collapsing a single input file."""
    input_path: Path
    output_path: Path
    counters: Dict[str, int] = dataclass_field(default_factory=dict)
    elapsed: float = 0.0
    fingerprints: int = 0
    input_size: Optional[int] = None
    output_size: Optional[int] = None

    @property
    def reduction_ratio(self) -> float:
        if not self.input_size or not self.output_size:
            return 0.0
        return self.input_size / self.output_size
