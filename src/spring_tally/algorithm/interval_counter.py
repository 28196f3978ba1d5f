"""
Memoized divide-and-conquer counting for unfolded condition records.

Every subproblem is "fill springs[start:] with segments[cursor:]", so the
memo is keyed on the integer pair (start, cursor) into the record's backing
tuples instead of on slice contents.
"""
from __future__ import annotations
from collections import Counter
from typing import NamedTuple

import structlog

from spring_tally.models.condition_record import Cell, ConditionRecord

log = structlog.get_logger()


class Tally(NamedTuple):
    """Arrangement count for a slice, tagged with the damaged cells it accounts for."""

    arrangements: int
    damaged: int


NO_ARRANGEMENTS = Tally(0, 0)


class IntervalCounter:
    """Counts valid assignments of one record. Not shared between jobs."""

    def __init__(self, record: ConditionRecord):
        self.springs = record.springs
        self.segments = record.segments
        self._memo: dict[tuple[int, int], Tally] = {}

        # Prefix tallies so any [start, end) slice is O(1) to inspect.
        self._damaged_prefix = [0]
        self._operational_prefix = [0]
        for cell in self.springs:
            self._damaged_prefix.append(self._damaged_prefix[-1] + (cell is Cell.DAMAGED))
            self._operational_prefix.append(self._operational_prefix[-1] + (cell is Cell.OPERATIONAL))

        # Cells needed by segments[cursor:], separators included.
        self._required = [0] * (len(self.segments) + 1)
        for cursor in reversed(range(len(self.segments))):
            separator = 1 if cursor < len(self.segments) - 1 else 0
            self._required[cursor] = self.segments[cursor] + separator + self._required[cursor + 1]

    @property
    def cache_size(self) -> int:
        return len(self._memo)

    def damaged_between(self, start: int, end: int) -> int:
        return self._damaged_prefix[end] - self._damaged_prefix[start]

    def operational_between(self, start: int, end: int) -> int:
        return self._operational_prefix[end] - self._operational_prefix[start]

    def count(self) -> int:
        return self.tally(0, 0).arrangements

    def tally(self, start: int, cursor: int) -> Tally:
        if not self._memo:
            self._fill()
        return self._memo[(start, cursor)]

    def _fill(self) -> None:
        """
        Solve every (start, cursor) key bottom-up. A placement only reads the
        key (run_end + 1, cursor + 1), which the previous cursor row already
        holds, so no recursion is needed however many segments there are.
        """
        for cursor in reversed(range(len(self.segments) + 1)):
            for start in reversed(range(len(self.springs) + 1)):
                self._memo[(start, cursor)] = self._solve(start, cursor)

    def _solve(self, start: int, cursor: int) -> Tally:
        end = len(self.springs)
        remaining = len(self.segments) - cursor

        if start >= end:
            return Tally(1, 0) if remaining == 0 else NO_ARRANGEMENTS

        target = self.damaged_between(start, end)
        if remaining == 0:
            return Tally(1, 0) if target == 0 else NO_ARRANGEMENTS

        if self._required[cursor] > end - start:
            return NO_ARRANGEMENTS

        if remaining == 1:
            return self.single_run(start, self.segments[cursor])

        if self._required[cursor] == end - start:
            # The segments fill the slice exactly: one fixed placement.
            return self._accounted(self._place(start, cursor), target)

        arrangements = 0
        for offset in range(start, end - self._required[cursor] + 1):
            # Everything left of the first run must be free of damage.
            if offset > start and self.springs[offset - 1] is Cell.DAMAGED:
                break
            placed = self._place(offset, cursor)
            if placed.damaged == target:
                arrangements += placed.arrangements

        return self._accounted(Tally(arrangements, target), target)

    @staticmethod
    def _accounted(result: Tally, target: int) -> Tally:
        if result.arrangements and result.damaged == target:
            return result
        return NO_ARRANGEMENTS

    def _place(self, offset: int, cursor: int) -> Tally:
        """Put segments[cursor] at `offset` and look up the rest to its right."""
        run_end = offset + self.segments[cursor]

        if self.operational_between(offset, run_end):
            return NO_ARRANGEMENTS
        if run_end < len(self.springs) and self.springs[run_end] is Cell.DAMAGED:
            return NO_ARRANGEMENTS

        right = self._memo[(run_end + 1, cursor + 1)]
        if not right.arrangements:
            return NO_ARRANGEMENTS
        return Tally(right.arrangements, self.damaged_between(offset, run_end) + right.damaged)

    def single_run(self, start: int, length: int) -> Tally:
        """
        Slide a window of `length` across springs[start:]. A position counts
        when the window holds no operational cell and covers every damaged
        cell in the slice.
        """
        end = len(self.springs)
        damaged_total = self.damaged_between(start, end)
        window: Counter[Cell] = Counter()
        positions = 0

        for n in range(start, end):
            window[self.springs[n]] += 1
            if n - start >= length:
                window[self.springs[n - length]] -= 1
            if n - start + 1 >= length and window[Cell.OPERATIONAL] == 0 and window[Cell.DAMAGED] >= damaged_total:
                positions += 1

        return Tally(positions, damaged_total)


def count_scaled(record: ConditionRecord) -> int:
    """Count valid assignments without enumerating them."""
    counter = IntervalCounter(record)
    arrangements = counter.count()
    log.debug(
        "interval count finished",
        record=str(record),
        arrangements=arrangements,
        cache_size=counter.cache_size,
    )
    return arrangements
