"""
Fingerprint context for trace body hashing and first-seen tracking.
"""

from logcollapse.context.fingerprint.cache import (
    FINGERPRINT_WIDTH,
    FingerprintCache,
    fingerprint,
)

__all__ = ['FINGERPRINT_WIDTH', 'FingerprintCache', 'fingerprint']
