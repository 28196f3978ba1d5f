from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ValidationState:
    """Immutable progress of the incremental validator over one candidate."""

    segment_index: int = 0
    completed_segments: int = 0
    current_len: int = 0
    building: bool = False
    part_index: int = 0

    valid: bool = True
    done: bool = False
