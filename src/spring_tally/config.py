from typing import Literal

from pydantic import BaseModel, Field

from spring_tally.algorithm.unfold import DEFAULT_REPEAT

DEFAULT_WORKERS = 32

type Part = Literal["1", "2", "both"]


class RunSettings(BaseModel):
    """Validated knobs for one run over an input set."""

    workers: int = Field(default=DEFAULT_WORKERS, ge=1)
    repeat: int = Field(default=DEFAULT_REPEAT, ge=1)
    part: Part = "both"
    show_progress: bool = True

    @property
    def wants_part_one(self) -> bool:
        return self.part in ("1", "both")

    @property
    def wants_part_two(self) -> bool:
        return self.part in ("2", "both")
