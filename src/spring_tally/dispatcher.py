from __future__ import annotations
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Callable, Iterable, Optional, Sequence

import structlog

from spring_tally.algorithm.backtrack import count
from spring_tally.algorithm.interval_counter import count_scaled
from spring_tally.algorithm.unfold import collapse_operational, unfold
from spring_tally.config import RunSettings
from spring_tally.models.condition_record import ConditionRecord, parse_records
from spring_tally.progress_queue import LatestQueue
from spring_tally.progress_snapshot import ProgressSnapshot

log = structlog.get_logger()

type CountFn = Callable[[ConditionRecord], int]
type PartRunner = Callable[[Sequence["Job"]], int]


class Strategy(Enum):
    BACKTRACK = "backtrack"
    INTERVAL = "interval"

    @property
    def count_fn(self) -> CountFn:
        return count if self is Strategy.BACKTRACK else count_scaled


class WorkerFailure(RuntimeError):
    """A counting job raised instead of producing a result."""

    def __init__(self, job: "Job", cause: BaseException):
        self.job = job
        self.cause = cause
        super().__init__(f"job for line {job.line_number} ({job.record}) failed: {cause!r}")


@dataclass(frozen=True, slots=True)
class Job:
    line_number: int
    record: ConditionRecord
    strategy: Strategy

    def run(self) -> int:
        return self.strategy.count_fn(self.record)


@dataclass(frozen=True, slots=True)
class Totals:
    part_one: Optional[int] = None
    part_two: Optional[int] = None


def prepare_jobs(lines: Iterable[str], strategy: Strategy, repeat: int = 1) -> list[Job]:
    """Parse every line and build one job per record, unfolded when repeat > 1."""
    jobs = []
    for line_number, record in enumerate(parse_records(lines), start=1):
        if repeat > 1:
            record = unfold(record, repeat)
        if strategy is Strategy.BACKTRACK:
            record = collapse_operational(record)
        jobs.append(Job(line_number, record, strategy))
    return jobs


def dispatch(
    jobs: Sequence[Job],
    workers: int,
    progress: Optional[LatestQueue[ProgressSnapshot]] = None,
) -> int:
    """
    Run every job on a bounded thread pool and return the sum of results.

    Jobs share nothing, so results are reduced in completion order. The first
    failure cancels the jobs that have not started and raises WorkerFailure;
    no partial sum is returned. The progress queue, if any, is always closed.
    """
    strategy = jobs[0].strategy.value if jobs else ""
    total = 0
    jobs_done = 0

    def publish(job: Optional[Job] = None, arrangements: int = 0, complete: bool = False) -> None:
        if progress is None:
            return
        progress.publish(
            ProgressSnapshot(
                version=jobs_done + int(complete),
                strategy=strategy,
                jobs_total=len(jobs),
                jobs_done=jobs_done,
                running_total=total,
                last_line_number=job.line_number if job else 0,
                last_arrangements=arrangements,
                complete=complete,
            )
        )

    log.info("dispatch started", strategy=strategy, jobs=len(jobs), workers=workers)
    try:
        publish()
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="spring-tally") as executor:
            futures: dict[Future[int], Job] = {executor.submit(job.run): job for job in jobs}
            try:
                for future in as_completed(futures):
                    job = futures[future]
                    try:
                        arrangements = future.result()
                    except Exception as e:
                        log.error("job failed", line=job.line_number, record=str(job.record), error=repr(e))
                        raise WorkerFailure(job, e) from e

                    total += arrangements
                    jobs_done += 1
                    log.debug("job finished", line=job.line_number, arrangements=arrangements)
                    publish(job, arrangements)
            except WorkerFailure:
                for future in futures:
                    future.cancel()
                raise

        publish(complete=True)
        log.info("dispatch finished", strategy=strategy, total=total)
        return total
    finally:
        if progress is not None:
            progress.close()


def solve_lines(lines: Sequence[str], settings: RunSettings, run: Optional[PartRunner] = None) -> Totals:
    """
    Compute the part one and part two aggregates the settings ask for.
    `run` dispatches one part's jobs; it defaults to a plain dispatch.
    """
    if run is None:
        run = partial(dispatch, workers=settings.workers)

    part_one = part_two = None
    if settings.wants_part_one:
        part_one = run(prepare_jobs(lines, Strategy.BACKTRACK))
    if settings.wants_part_two:
        part_two = run(prepare_jobs(lines, Strategy.INTERVAL, settings.repeat))
    return Totals(part_one=part_one, part_two=part_two)
