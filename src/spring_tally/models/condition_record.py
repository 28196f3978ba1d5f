from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Tuple, Optional


class Cell(Enum):
    OPERATIONAL = "."
    DAMAGED = "#"
    UNKNOWN = "?"

    def __str__(self) -> str:
        return self.value


class ParseError(ValueError):
    """Raised when a line is not a valid condition record."""

    def __init__(self, message: str, line: str, line_number: Optional[int] = None):
        self.reason = message
        self.line = line
        self.line_number = line_number
        super().__init__(self._describe())

    def _describe(self) -> str:
        where = f"line {self.line_number}" if self.line_number is not None else "record"
        return f"{where}: {self.reason} ({self.line!r})"

    def at_line(self, line_number: int) -> "ParseError":
        """Return a copy of this error that knows its source line number."""
        return ParseError(self.reason, self.line, line_number)


@dataclass(frozen=True, slots=True)
class ConditionRecord:
    """A row of springs plus the damaged run lengths it must produce, in order."""

    springs: Tuple[Cell, ...] = field(default_factory=tuple)
    segments: Tuple[int, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "springs", tuple(self.springs))
        object.__setattr__(self, "segments", tuple(self.segments))
        for idx, length in enumerate(self.segments):
            if length < 1:
                raise ValueError(f"segments[{idx}] must be positive, got {length}")

    def __str__(self) -> str:
        pattern = "".join(cell.value for cell in self.springs)
        return f"{pattern} {','.join(str(s) for s in self.segments)}"

    @property
    def minimum_length(self) -> int:
        """Cells needed to hold every run with one separator between runs."""
        if not self.segments:
            return 0
        return sum(self.segments) + len(self.segments) - 1

    @property
    def is_feasible(self) -> bool:
        return self.minimum_length <= len(self.springs)

    @property
    def unknown_count(self) -> int:
        return sum(1 for cell in self.springs if cell is Cell.UNKNOWN)

    def reversed(self) -> "ConditionRecord":
        return ConditionRecord(self.springs[::-1], self.segments[::-1])


def parse_cells(pattern: str) -> Tuple[Cell, ...]:
    cells = []
    for idx, char in enumerate(pattern):
        try:
            cells.append(Cell(char))
        except ValueError:
            raise ParseError(f"invalid spring {char!r} at column {idx + 1}", pattern) from None
    return tuple(cells)


def parse_segments(text: str) -> Tuple[int, ...]:
    if not text:
        return ()

    segments = []
    for token in text.split(","):
        if not (token.isascii() and token.isdigit()) or int(token) < 1:
            raise ParseError(f"run length {token!r} is not a positive integer", text)
        segments.append(int(token))
    return tuple(segments)


def parse_record(line: str) -> ConditionRecord:
    """Parse `<pattern> <comma-separated-run-lengths>` into a record."""
    fields = line.strip().split(" ")
    if len(fields) > 2:
        raise ParseError("expected a pattern and a run-length list", line)

    pattern = fields[0]
    signature = fields[1] if len(fields) == 2 else ""
    try:
        return ConditionRecord(parse_cells(pattern), parse_segments(signature))
    except ParseError as e:
        raise ParseError(e.reason, line) from None


def parse_records(lines: Iterable[str]) -> list[ConditionRecord]:
    """Parse every line, tagging the first failure with its 1-based line number."""
    records = []
    for line_number, line in enumerate(lines, start=1):
        try:
            records.append(parse_record(line))
        except ParseError as e:
            raise e.at_line(line_number) from None
    return records
