"""
CLI commands for logcollapse.
"""

import click
import cProfile
import logging
import sys
import time
import tracemalloc
from pathlib import Path
from typing import Dict, List

from rich.console import Console
from rich.table import Table

from logcollapse.errors import CollapseError
from logcollapse.models import DEFAULT_BUFFER_SIZE, DEFAULT_TIMESTAMP_WIDTH, CollapseResult, CollapseSettings
from logcollapse.services import collapse_files


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


def render_report(totals: Dict[str, int], results: List[CollapseResult],
                  elapsed: float, console: Console) -> None:
    """Print the counter snapshot as a rich table."""
    table = Table(title="Collapse Summary")
    table.add_column("Counter", style="cyan")
    table.add_column("Value", justify="right", style="green")
    for name, value in totals.items():
        table.add_row(name, f"{value:,}")
    table.add_row("fingerprints", f"{sum(r.fingerprints for r in results):,}")
    console.print(table)
    console.print(f"logcollapse took {elapsed:.3f}s")


@click.command()
@click.option('--file', '-f', 'files', multiple=True, required=True,
              type=click.Path(dir_okay=False, path_type=Path),
              help='Path to log file (repeatable)')
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Output path (single input only, default: <name>-reduced<ext>)')
@click.option('--jobs', '-j', default=1, show_default=True, type=click.IntRange(min=1),
              help='Files to process in parallel')
@click.option('--encoding', default='utf-8', show_default=True, help='Log text encoding')
@click.option('--buffer-size', default=DEFAULT_BUFFER_SIZE, show_default=True,
              type=click.IntRange(min=1), help='Output write buffer in bytes')
@click.option('--timestamp-width', default=DEFAULT_TIMESTAMP_WIDTH, show_default=True,
              type=click.IntRange(min=1),
              help='Header characters referenced as the first-seen timestamp')
@click.option('--profile', 'profile_path', type=click.Path(dir_okay=False, path_type=Path),
              help='Write cProfile stats to this file')
@click.option('--memprofile', 'memprofile_path', type=click.Path(dir_okay=False, path_type=Path),
              help='Write a tracemalloc heap snapshot to this file')
@click.option('--measure', '-m', is_flag=True, help='Display size reduction per file')
@click.option('--verbose', '-v', is_flag=True, help='Debug logging')
def collapse(files, output, jobs, encoding, buffer_size, timestamp_width,
             profile_path, memprofile_path, measure, verbose):
    """
    Replace repeated stack traces with references to their first occurrence.

    Example:
        logcollapse collapse -f logs/server.log -m
    """
    configure_logging(verbose)
    console = Console(stderr=True)

    for path in files:
        if not path.exists():
            click.echo(f"Error: Input file not found: {path}", err=True)
            sys.exit(1)

    settings = CollapseSettings(
        timestamp_width=timestamp_width,
        encoding=encoding,
        buffer_size=buffer_size,
        jobs=jobs,
    )

    profiler = cProfile.Profile() if profile_path else None
    snapshot = None
    if memprofile_path:
        tracemalloc.start()
    start = time.time()
    try:
        if profiler:
            profiler.enable()
        try:
            results, totals = collapse_files(list(files), settings, output_path=output)
        finally:
            if profiler:
                profiler.disable()
    except CollapseError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    finally:
        if memprofile_path:
            snapshot = tracemalloc.take_snapshot()
            tracemalloc.stop()
    elapsed = time.time() - start

    if profiler:
        profiler.dump_stats(str(profile_path))
        click.echo(f"Profile written to {profile_path}", err=True)
    if snapshot is not None:
        snapshot.dump(str(memprofile_path))
        click.echo(f"Heap snapshot written to {memprofile_path}", err=True)

    for result in results:
        click.echo(f"writing to file: {result.output_path}")
        if measure:
            click.echo(f"  Original size: {result.input_size / 1024 / 1024:.2f} MB")
            click.echo(f"  Reduced size: {result.output_size / 1024 / 1024:.2f} MB")
            click.echo(f"  Reduction ratio: {result.reduction_ratio:.2f}×")

    render_report(totals.snapshot(), results, elapsed, console)


if __name__ == '__main__':
    collapse()
