from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ProgressSnapshot:
    """Minimal immutable snapshot of a dispatch run."""

    version: int
    strategy: str
    jobs_total: int
    jobs_done: int
    running_total: int
    last_line_number: int = 0
    last_arrangements: int = 0
    complete: bool = False

    @property
    def completion_percent(self) -> float:
        if not self.jobs_total:
            return 100.0
        return self.jobs_done / self.jobs_total * 100
