"""
Unit tests for trace fingerprinting and the first-seen cache
"""

import threading

from logcollapse.context.fingerprint import FINGERPRINT_WIDTH, FingerprintCache, fingerprint


class TestFingerprint:
    """Test the xxHash64 trace key"""

    def test_empty_body_matches_xxh64_reference(self):
        assert fingerprint([]) == "ef46db3751d8e999"

    def test_fixed_width_lowercase_hex(self):
        fp = fingerprint(["\tat com.example.Foo.bar(Foo.java:10)\n"])

        assert len(fp) == FINGERPRINT_WIDTH
        assert fp == fp.lower()
        int(fp, 16)

    def test_deterministic(self):
        body = ["\tat a.B.c(B.java:1)\n", "\tat a.B.d(B.java:2)\n"]

        assert fingerprint(body) == fingerprint(list(body))

    def test_key_covers_concatenated_bytes(self):
        """Splitting the same bytes differently yields the same key"""
        assert fingerprint(["ab\n", "cd\n"]) == fingerprint(["ab\ncd\n"])

    def test_terminators_are_part_of_the_key(self):
        assert fingerprint(["\tat x\n"]) != fingerprint(["\tat x\r\n"])

    def test_distinct_bodies_over_corpus(self):
        corpus = [
            [f"\tat com.example.Svc{i}.call(Svc{i}.java:{i % 97})\n"] for i in range(2000)
        ]

        keys = {fingerprint(body) for body in corpus}

        assert len(keys) == len(corpus)


class TestFingerprintCache:
    """Test lookup-or-insert semantics"""

    def test_first_insert_reports_not_found(self):
        cache = FingerprintCache()

        assert cache.lookup_or_insert("abc", "[2024-01-01 00:00:01] ERR") == (
            "[2024-01-01 00:00:01] ERR", False
        )
        assert len(cache) == 1

    def test_first_occurrence_wins(self):
        cache = FingerprintCache()
        cache.lookup_or_insert("abc", "first")

        stored, found = cache.lookup_or_insert("abc", "second")

        assert found
        assert stored == "first"
        assert cache.lookup_or_insert("abc", "third") == ("first", True)

    def test_distinct_keys_are_independent(self):
        cache = FingerprintCache()
        cache.lookup_or_insert("a", "1")

        assert cache.lookup_or_insert("b", "2") == ("2", False)
        assert len(cache) == 2

    def test_concurrent_inserts_have_single_winner(self):
        cache = FingerprintCache()
        outcomes = []
        barrier = threading.Barrier(16)

        def claim(n):
            barrier.wait()
            outcomes.append(cache.lookup_or_insert("shared", f"t{n}"))

        threads = [threading.Thread(target=claim, args=(n,)) for n in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        winners = [ts for ts, found in outcomes if not found]
        assert len(winners) == 1
        assert all(ts == winners[0] for ts, _ in outcomes)
