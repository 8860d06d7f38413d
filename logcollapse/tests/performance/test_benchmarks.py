"""
Performance benchmarks for collapsing trace-heavy logs
"""

import pytest
import time
from logcollapse.services import LogCollapser


def _trace_heavy_log(events: int, distinct: int) -> str:
    lines = []
    for i in range(events):
        lines.append(f"[2024-03-05 10:{(i // 60) % 60:02d}:{i % 60:02d},000] ERROR Request failed\n")
        lines.append("java.lang.IllegalStateException: broken pipe\n")
        lines.append(f"request-id={i}\n")
        for depth in range(20):
            lines.append(f"\tat com.example.svc{i % distinct}.Layer{depth}.call(Layer{depth}.java:{depth})\n")
        lines.append(f"[2024-03-05 10:{(i // 60) % 60:02d}:{i % 60:02d},500] INFO  retrying\n")
    return "".join(lines)


@pytest.mark.benchmark
class TestPerformanceBenchmarks:
    """Benchmark collapse throughput"""

    def test_collapse_throughput(self, benchmark):
        text = _trace_heavy_log(events=500, distinct=10)

        def run():
            collapser = LogCollapser()
            collapser.collapse_text(text)
            return collapser

        collapser = benchmark(run)

        assert collapser.counters["stacktraces"] == 10
        assert collapser.counters["matched"] == 490
        assert benchmark.stats.stats.mean < 5.0

    @pytest.mark.parametrize("events", [100, 1000, 5000])
    def test_scalability(self, events):
        """Events per second should stay roughly flat as the log grows"""
        text = _trace_heavy_log(events=events, distinct=25)

        start = time.time()
        collapser = LogCollapser()
        output = collapser.collapse_text(text)
        elapsed = time.time() - start

        throughput = events / max(elapsed, 1e-9)
        assert throughput > 500, f"Throughput {throughput:.0f} events/sec is too low"
        assert len(output) < len(text)
