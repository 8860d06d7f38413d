"""
Pytest configuration and shared fixtures for logcollapse tests
"""

import pytest
from pathlib import Path
from typing import Callable, List, Sequence

from logcollapse.models import CollapseSettings


EXAMPLE_LOG = (
    "[2024-01-01 00:00:00] INFO start\n"
    "[2024-01-01 00:00:01] ERROR\n"
    "com.example.FooException: boom\n"
    "    at com.example.Foo.bar(Foo.java:10)\n"
    "[2024-01-01 00:00:02] ERROR\n"
    "com.example.FooException: boom\n"
    "    at com.example.Foo.bar(Foo.java:10)\n"
)


def build_trace_event(header: str, exception: str, frames: Sequence[str],
                      messages: Sequence[str] = ()) -> List[str]:
    """Lines of a Java-style exception event, terminators included."""
    lines = [f"{header}\n", f"{exception}\n"]
    lines += [f"{m}\n" for m in messages]
    lines += [f"\tat {f}\n" for f in frames]
    return lines


@pytest.fixture
def example_log() -> str:
    """Three events: plain info, first trace, duplicate trace"""
    return EXAMPLE_LOG


@pytest.fixture
def trace_event() -> Callable[..., List[str]]:
    return build_trace_event


@pytest.fixture
def server_log_text() -> str:
    """Realistic log with repeated NPEs, a distinct trace and plain lines"""
    npe_frames = [
        "com.example.api.UserController.get(UserController.java:42)",
        "com.example.api.Dispatcher.dispatch(Dispatcher.java:118)",
        "java.base/java.lang.Thread.run(Thread.java:833)",
    ]
    io_frames = [
        "com.example.db.Pool.borrow(Pool.java:77)",
        "com.example.db.Repository.find(Repository.java:31)",
    ]
    lines: List[str] = []
    lines.append("[2024-03-05 10:00:00,001] INFO  Server started on port 8080\n")
    for i in range(5):
        lines += build_trace_event(
            f"[2024-03-05 10:00:0{i + 1},500] ERROR Request failed",
            "java.lang.NullPointerException: user is null",
            npe_frames,
            messages=[f"request-id={1000 + i}"],
        )
        lines.append(f"[2024-03-05 10:00:0{i + 1},900] INFO  Request {1000 + i} closed\n")
    lines += build_trace_event(
        "[2024-03-05 10:00:07,000] WARN  Pool exhausted",
        "java.io.IOException: no connection",
        io_frames,
    )
    return "".join(lines)


@pytest.fixture
def server_log(tmp_path: Path, server_log_text: str) -> Path:
    log_file = tmp_path / "logs" / "server.log"
    log_file.parent.mkdir()
    log_file.write_text(server_log_text, encoding="utf-8")
    return log_file


@pytest.fixture(scope="session")
def test_data_dir(tmp_path_factory):
    """Two independent service logs sharing the same exception"""
    data_dir = tmp_path_factory.mktemp("test_data")
    trace = build_trace_event(
        "[2024-03-05 11:00:00,000] ERROR Job failed",
        "java.lang.IllegalStateException: closed",
        ["com.example.jobs.Runner.run(Runner.java:12)"],
    )
    for name in ("billing", "orders"):
        (data_dir / f"{name}.log").write_text(
            f"[2024-03-05 10:59:59,000] INFO  {name} up\n" + "".join(trace) * 3,
            encoding="utf-8",
        )
    return data_dir


@pytest.fixture
def default_settings() -> CollapseSettings:
    return CollapseSettings()
