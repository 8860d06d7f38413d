"""
Log file adapters: line sources and output sinks

Lines end only at `\\n` and keep their terminators: readers use
`newline='\\n'` (a lone `\\r` stays inside its line) and writers use
`newline=''`, so the collapsed copy is byte-identical wherever nothing
was rewritten.

Supported containers, picked by file suffix:
- plain text
- `.gz`  (gzip)
- `.zst` (Zstandard)
"""

import gzip
import io
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Union

import zstandard as zstd

from logcollapse.context.segmentation import split_lines
from logcollapse.errors import InputOpenError, OutputWriteError
from logcollapse.models import DEFAULT_BUFFER_SIZE
from logcollapse.protocols import OutputSinkProtocol

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

REDUCED_SUFFIX = '-reduced'


def reduced_output_path(input_path: PathLike) -> Path:
    """
    Default output path next to the input file.

    `logs/app.log` becomes `logs/app-reduced.log`; only the last suffix
    is treated as the extension (`app.log.gz` → `app.log-reduced.gz`).
    """
    path = Path(input_path)
    return path.with_name(f"{path.stem}{REDUCED_SUFFIX}{path.suffix}")


def _open_text_reader(path: Path, encoding: str) -> io.TextIOBase:
    suffix = path.suffix.lower()
    if suffix == '.gz':
        return gzip.open(path, 'rt', encoding=encoding, newline='\n')
    if suffix == '.zst':
        return zstd.open(path, 'rt', encoding=encoding, newline='\n')
    return open(path, 'r', encoding=encoding, newline='\n')


def _read_lines(handle: io.TextIOBase, path: Path) -> Iterator[str]:
    try:
        for line in handle:
            yield line
    except (OSError, UnicodeDecodeError, EOFError, zstd.ZstdError) as e:
        raise InputOpenError(f"Failed reading {path}: {e}") from e


@contextmanager
def open_line_source(input_path: PathLike, encoding: str = 'utf-8') -> Iterator[Iterator[str]]:
    """
    Open a log file and yield an iterator over its physical lines.

    Args:
        input_path: Log file, optionally gzip or zstd compressed
        encoding: Text encoding of the log

    Yields:
        Iterator of lines in file order, terminators included

    Raises:
        InputOpenError: The file cannot be opened, or a read fails midway
    """
    path = Path(input_path)
    try:
        handle = _open_text_reader(path, encoding)
    except OSError as e:
        raise InputOpenError(f"Cannot open input {path}: {e}") from e

    logger.debug("reading %s", path)
    try:
        yield _read_lines(handle, path)
    finally:
        handle.close()


def _open_text_appender(path: Path, encoding: str, buffer_size: int) -> io.TextIOBase:
    suffix = path.suffix.lower()
    if suffix == '.gz':
        # Appending adds a new gzip member; readers see one stream
        return gzip.open(path, 'at', encoding=encoding, newline='')
    if suffix == '.zst':
        # Appending adds a new zstd frame; frames decode back to back
        return zstd.open(path, 'at', encoding=encoding, newline='')
    return open(path, 'a', encoding=encoding, newline='', buffering=buffer_size)


class FileOutputSink(OutputSinkProtocol):
    """
    Buffered, append-only text sink backed by a file.

    The file is created when missing and appended to otherwise. Any
    I/O failure is raised as OutputWriteError; whatever was already
    flushed stays on disk.
    """

    def __init__(self, output_path: PathLike, encoding: str = 'utf-8',
                 buffer_size: int = DEFAULT_BUFFER_SIZE):
        self.path = Path(output_path)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._handle = _open_text_appender(self.path, encoding, buffer_size)
        except OSError as e:
            raise OutputWriteError(f"Cannot open output {self.path}: {e}") from e
        self._closed = False

    def write(self, data: str) -> None:
        try:
            self._handle.write(data)
        except (OSError, UnicodeEncodeError, ValueError, zstd.ZstdError) as e:
            raise OutputWriteError(f"Failed writing {self.path}: {e}") from e

    def flush(self) -> None:
        try:
            self._handle.flush()
        except (OSError, zstd.ZstdError) as e:
            raise OutputWriteError(f"Failed flushing {self.path}: {e}") from e

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._handle.close()
        except (OSError, zstd.ZstdError) as e:
            raise OutputWriteError(f"Failed closing {self.path}: {e}") from e


class MemorySink(OutputSinkProtocol):
    """In-memory sink collecting every write; used for collapsing strings."""

    def __init__(self):
        self.chunks: List[str] = []
        self.closed = False

    def write(self, data: str) -> None:
        if self.closed:
            raise OutputWriteError("write to closed sink")
        self.chunks.append(data)

    def flush(self) -> None:
        pass

    def close(self) -> None:
        self.closed = True

    def getvalue(self) -> str:
        return ''.join(self.chunks)

    def lines(self) -> List[str]:
        return split_lines(self.getvalue())
