from dataclasses import dataclass
from typing import Tuple

import structlog

from spring_tally.algorithm.validator import advance
from spring_tally.models.condition_record import Cell, ConditionRecord
from spring_tally.models.validation_state import ValidationState

log = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class Branch:
    """One partially resolved candidate waiting on the work list."""

    state: ValidationState
    cells: Tuple[Cell, ...]


def count(record: ConditionRecord) -> int:
    """
    Count valid assignments by exhaustive search over the unknown cells.

    Branches live on an explicit stack. Each pop advances the validator from
    where the branch left off; stopping on an unknown cell pushes both of its
    resolutions with the state reached so far. Exponential in the number of
    unknowns, so only meant for records as given, not unfolded ones.
    """
    if not record.is_feasible:
        return 0

    arrangements = 0
    stack = [Branch(ValidationState(), record.springs)]

    while stack:
        branch = stack.pop()
        state = advance(branch.state, branch.cells, record.segments)
        if not state.valid:
            continue
        if state.done:
            arrangements += 1
            continue

        i = state.part_index
        for resolved in (Cell.OPERATIONAL, Cell.DAMAGED):
            cells = branch.cells[:i] + (resolved,) + branch.cells[i + 1:]
            stack.append(Branch(state, cells))

    log.debug("backtrack finished", record=str(record), arrangements=arrangements)
    return arrangements
