"""
Collapser: Stack trace deduplication for timestamped application logs

Pipeline for one run:
    lines → EventSegmenter → TraceClassifier → FingerprintCache → EventEmitter → sink

Events are handled strictly in input order because the first event to
claim a fingerprint is the one later duplicates refer to. Parallelism is
only applied across independent files, each with its own cache and
counters.

Target: logs dominated by repeated exceptions shrink to one full trace
per distinct stack plus a two-line reference for every repeat.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from logcollapse.context.classification import TraceClassifier
from logcollapse.context.files import (
    FileOutputSink,
    MemorySink,
    open_line_source,
    reduced_output_path,
)
from logcollapse.context.fingerprint import FingerprintCache
from logcollapse.context.segmentation import segment, split_lines
from logcollapse.errors import CollapseError
from logcollapse.models import CollapseResult, CollapseSettings
from logcollapse.protocols import OutputSinkProtocol
from logcollapse.services.counters import Counters
from logcollapse.services.emitter import EventEmitter

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class LogCollapser:
    """
    One collapse run: owns the fingerprint cache and the counters.

    Build a new LogCollapser per run. Feeding several inputs through the
    same instance deduplicates across all of them, with the earliest
    input winning first occurrence.
    """

    def __init__(self, settings: Optional[CollapseSettings] = None):
        self.settings = settings or CollapseSettings()
        self.cache = FingerprintCache()
        self.counters = Counters()
        self.classifier = TraceClassifier()

    def collapse(self, lines: Iterable[str], sink: OutputSinkProtocol) -> Counters:
        """
        Collapse a stream of physical lines into `sink`.

        Args:
            lines: Input lines in file order, terminators included
            sink: Destination for the rewritten events

        Returns:
            The run's counters
        """
        emitter = EventEmitter(
            sink,
            self.cache,
            self.counters,
            classifier=self.classifier,
            timestamp_width=self.settings.timestamp_width,
            encoding=self.settings.encoding,
        )
        for event in segment(lines):
            emitter.emit(event)
        return self.counters

    def collapse_text(self, text: str) -> str:
        """Collapse an in-memory log and return the reduced text."""
        sink = MemorySink()
        self.collapse(split_lines(text), sink)
        return sink.getvalue()


def collapse_file(
    input_path: PathLike,
    output_path: Optional[PathLike] = None,
    settings: Optional[CollapseSettings] = None,
) -> CollapseResult:
    """
    Collapse one log file.

    Args:
        input_path: Log to reduce
        output_path: Destination, defaults to `<stem>-reduced<ext>` beside the input
        settings: Run configuration

    Returns:
        CollapseResult with counters, timing and file sizes

    Raises:
        InputOpenError: Input cannot be opened or read
        OutputWriteError: Output cannot be opened or written
    """
    settings = settings or CollapseSettings()
    input_path = Path(input_path)
    output_path = Path(output_path) if output_path else reduced_output_path(input_path)

    if output_path.resolve() == input_path.resolve():
        raise CollapseError(f"Output would overwrite input: {input_path}")

    collapser = LogCollapser(settings)
    start = time.time()

    with open_line_source(input_path, settings.encoding) as lines:
        with FileOutputSink(output_path, settings.encoding, settings.buffer_size) as sink:
            collapser.collapse(lines, sink)

    elapsed = time.time() - start
    logger.info("writing to file: %s", output_path)
    logger.debug("%s: %s", input_path.name, collapser.counters)

    return CollapseResult(
        input_path=input_path,
        output_path=output_path,
        counters=collapser.counters.snapshot(),
        elapsed=elapsed,
        fingerprints=len(collapser.cache),
        input_size=input_path.stat().st_size,
        output_size=output_path.stat().st_size,
    )


def collapse_files(
    input_paths: Sequence[PathLike],
    settings: Optional[CollapseSettings] = None,
    output_path: Optional[PathLike] = None,
) -> Tuple[List[CollapseResult], Counters]:
    """
    Collapse several independent log files.

    Each file gets its own cache and counters, so files never reference
    each other's traces. With `settings.jobs > 1` files are processed on
    a thread pool; results come back in input order either way.

    Args:
        input_paths: Logs to reduce
        settings: Run configuration
        output_path: Explicit destination, only valid for a single input

    Returns:
        (per-file results, counters summed over all files)
    """
    settings = settings or CollapseSettings()
    if output_path is not None and len(input_paths) != 1:
        raise CollapseError("An explicit output path needs exactly one input file")

    logger.info("collapsing %d file(s) with %d job(s)", len(input_paths), settings.jobs)

    if settings.jobs > 1 and len(input_paths) > 1:
        with ThreadPoolExecutor(max_workers=settings.jobs) as pool:
            results = list(pool.map(lambda p: collapse_file(p, None, settings), input_paths))
    else:
        results = [collapse_file(p, output_path, settings) for p in input_paths]

    totals = Counters()
    for result in results:
        totals.merge(result.counters)
    return results, totals
