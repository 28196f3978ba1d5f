from spring_tally.models.condition_record import Cell, ConditionRecord

DEFAULT_REPEAT = 5


def unfold(record: ConditionRecord, times: int = DEFAULT_REPEAT) -> ConditionRecord:
    """
    Repeat the springs `times` times joined by a single unknown cell, and
    repeat the segments `times` times. The input record is left untouched.
    """
    if times < 1:
        raise ValueError(f"times must be at least 1, got {times}")

    springs: list[Cell] = []
    for n in range(times):
        if n > 0:
            springs.append(Cell.UNKNOWN)
        springs.extend(record.springs)

    return ConditionRecord(tuple(springs), record.segments * times)


def collapse_operational(record: ConditionRecord) -> ConditionRecord:
    """ Collapse each run of operational cells into a single operational cell. """
    springs: list[Cell] = []
    for cell in record.springs:
        if cell is Cell.OPERATIONAL and springs and springs[-1] is Cell.OPERATIONAL:
            continue
        springs.append(cell)
    return ConditionRecord(tuple(springs), record.segments)
