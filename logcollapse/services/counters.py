"""
Run counters.

Thread-safe name → integer accumulator. Values only ever grow during a
run and are read once at the end for the report.
"""

import threading
from collections import defaultdict
from typing import Dict, Mapping, Union

# Counter names
CALL_WRITE = 'call_write'        # sink writes, one per emitted event
STACKTRACES = 'stacktraces'      # first occurrences of a trace body
MATCHED = 'matched'              # duplicates rewritten as references
LINES_REDUCED = 'lines_reduced'  # trace body lines dropped from duplicates
EVENTS = 'events'
LINES_READ = 'lines_read'
LINES_WRITTEN = 'lines_written'

REPORT_ORDER = (
    EVENTS,
    STACKTRACES,
    MATCHED,
    LINES_READ,
    LINES_WRITTEN,
    LINES_REDUCED,
    CALL_WRITE,
)


class Counters:
    def __init__(self):
        self._values: Dict[str, int] = defaultdict(int)
        self._lock = threading.Lock()

    def increment(self, name: str, value: int = 1) -> None:
        if value < 0:
            raise ValueError(f"Counters only grow, got {name}={value}")
        with self._lock:
            self._values[name] += value

    def __getitem__(self, name: str) -> int:
        with self._lock:
            return self._values.get(name, 0)

    def snapshot(self) -> Dict[str, int]:
        """Plain dict copy, known counters first."""
        with self._lock:
            values = dict(self._values)

        ordered = {name: values.pop(name, 0) for name in REPORT_ORDER}
        ordered.update(sorted(values.items()))
        return ordered

    def merge(self, other: Union['Counters', Mapping[str, int]]) -> None:
        """Fold another run's counters (or a snapshot of them) into this one."""
        values = other.snapshot() if isinstance(other, Counters) else other
        for name, value in values.items():
            self.increment(name, value)

    def __repr__(self):
        return f"Counters({self.snapshot()})"
