from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Optional, Sequence

import click
import structlog
from pydantic import ValidationError
from rich.console import Console

from spring_tally.algorithm.backtrack import count
from spring_tally.algorithm.interval_counter import count_scaled
from spring_tally.algorithm.unfold import DEFAULT_REPEAT, unfold
from spring_tally.config import DEFAULT_WORKERS, RunSettings
from spring_tally.dispatcher import Job, WorkerFailure, dispatch, solve_lines
from spring_tally.log import LOG_LEVELS, configure_logging
from spring_tally.models.condition_record import ParseError, parse_record
from spring_tally.progress_queue import LatestQueue
from spring_tally.progress_snapshot import ProgressSnapshot
from spring_tally.ui import render_totals, ui_loop
from spring_tally.utils import load_lines

log = structlog.get_logger()


@click.group()
@click.option("--log-level", type=click.Choice(LOG_LEVELS), default="warning", show_default=True)
@click.option("--log-json", is_flag=True, help="Render log events as JSON.")
def cli(log_level: str, log_json: bool):
    configure_logging(log_level, json=log_json)


def run_part(jobs: Sequence[Job], settings: RunSettings, console: Console) -> int:
    """Dispatch one part's jobs while the live view follows its progress."""
    progress: LatestQueue[ProgressSnapshot] = LatestQueue()

    with ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(dispatch, jobs, settings.workers, progress)

        try:
            ui_loop(progress, console)
        except KeyboardInterrupt:
            progress.close()

        return future.result()


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--workers", "-w", type=int, default=DEFAULT_WORKERS, show_default=True,
              envvar="SPRING_TALLY_WORKERS", help="Size of the counting thread pool.")
@click.option("--repeat", "-r", type=int, default=DEFAULT_REPEAT, show_default=True,
              help="Unfold factor for part two.")
@click.option("--part", "-p", type=click.Choice(["1", "2", "both"]), default="both", show_default=True)
@click.option("--no-ui", is_flag=True, help="Skip the live progress view.")
def solve(input_path: str, workers: int, repeat: int, part: str, no_ui: bool):
    """Sum the arrangement counts of every record in INPUT_PATH."""
    console = Console()
    try:
        settings = RunSettings(workers=workers, repeat=repeat, part=part, show_progress=not no_ui)
        lines = load_lines(input_path)
        log.info("input loaded", path=input_path, lines=len(lines))

        run = partial(run_part, settings=settings, console=console) if settings.show_progress else None
        totals = solve_lines(lines, settings, run)
    except ValidationError as e:
        raise click.ClickException(f"Invalid settings: {e}")
    except ParseError as e:
        log.error("parse failed", path=input_path, line=e.line_number, reason=e.reason)
        raise click.ClickException(f"Could not parse {input_path}: {e}")
    except WorkerFailure as e:
        raise click.ClickException(str(e))

    console.print(render_totals(totals))


@cli.command("count")
@click.argument("line")
@click.option("--repeat", "-r", type=click.IntRange(min=1), default=1, show_default=True,
              help="Unfold the record this many times first.")
def count_line(line: str, repeat: int):
    """Count the arrangements of a single record LINE."""
    try:
        record = parse_record(line)
    except ParseError as e:
        raise click.ClickException(str(e))

    if repeat > 1:
        record = unfold(record, repeat)

    backtracked: Optional[int] = count(record) if repeat == 1 else None
    scaled = count_scaled(record)

    click.echo(f"record:    {record}")
    if backtracked is not None:
        click.echo(f"backtrack: {backtracked}")
    click.echo(f"interval:  {scaled}")


if __name__ == "__main__":
    cli()
