"""
Fingerprint Cache: Content-addressed index of stack trace bodies

Each trace body is hashed with xxHash64 (non-cryptographic, fast) and
stored against the timestamp of the event where it was first seen.
Later events with the same body are rewritten as references to that
timestamp.

Collisions are treated as matches; at 64 bits the birthday risk is
negligible for a single log file.
"""

import threading
from typing import Dict, Sequence, Tuple

import xxhash


FINGERPRINT_WIDTH = 16  # hex characters in a 64-bit digest


def fingerprint(body: Sequence[str], encoding: str = 'utf-8') -> str:
    """
    Hash a trace body into a fixed-width hex key

    Args:
        body: Trace body lines, terminators included
        encoding: Text encoding used to turn the body into bytes

    Returns:
        16 lowercase hex characters, zero padded

    Examples:
        >>> len(fingerprint(['\\tat Foo.bar(Foo.java:1)\\n']))
        16
    """
    return xxhash.xxh64(''.join(body).encode(encoding)).hexdigest()


class FingerprintCache:
    """
    Map of fingerprint → first-seen timestamp for one collapse run.

    `lookup_or_insert` is the only way to add entries and runs under a
    lock, so the first caller for a fingerprint always wins even when
    several threads share the cache.
    """

    def __init__(self):
        self._entries: Dict[str, str] = {}
        self._lock = threading.Lock()

    def lookup_or_insert(self, key: str, first_seen: str) -> Tuple[str, bool]:
        """
        Atomically look up `key`, inserting it when absent.

        Args:
            key: Trace fingerprint
            first_seen: Timestamp to record if this is the first occurrence

        Returns:
            (stored_timestamp, found). `found` is False when the entry was
            just inserted, in which case the timestamp is `first_seen`.
        """
        with self._lock:
            existing = self._entries.get(key)
            if existing is not None:
                return existing, True
            self._entries[key] = first_seen
            return first_seen, False

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
