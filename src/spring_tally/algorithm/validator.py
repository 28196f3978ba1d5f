from typing import Sequence

from spring_tally.models.condition_record import Cell
from spring_tally.models.validation_state import ValidationState


def advance(state: ValidationState, springs: Sequence[Cell], segments: Sequence[int]) -> ValidationState:
    """
    Consume springs from `state.part_index` until an unknown cell or the end.

    Stopping on an unknown cell returns a valid, not-done state whose
    part_index points at that cell; the caller resolves it and calls again.
    Reaching the end returns done when every segment was matched exactly.
    """
    segment_index = state.segment_index
    completed_segments = state.completed_segments
    current_len = state.current_len
    building = state.building
    part_index = state.part_index

    def snapshot(valid: bool, done: bool = False) -> ValidationState:
        return ValidationState(
            segment_index=segment_index,
            completed_segments=completed_segments,
            current_len=current_len,
            building=building,
            part_index=part_index,
            valid=valid,
            done=done,
        )

    # A run with no segment left to match has a target length of zero.
    target = segments[segment_index] if segment_index < len(segments) else 0

    while part_index < len(springs):
        cell = springs[part_index]
        if cell is Cell.UNKNOWN:
            return snapshot(valid=True)

        if cell is Cell.OPERATIONAL:
            if building:
                if current_len != target:
                    return snapshot(valid=False)
                building = False
                current_len = 0
                segment_index += 1
                completed_segments += 1
                target = segments[segment_index] if segment_index < len(segments) else 0
        else:
            if current_len == target:
                return snapshot(valid=False)
            building = True
            current_len += 1

        part_index += 1

    if building:
        if current_len != target:
            return snapshot(valid=False)
        completed_segments += 1

    if completed_segments != len(segments):
        return snapshot(valid=False)

    return snapshot(valid=True, done=True)
