import pytest
from spring_tally.algorithm.backtrack import count
from spring_tally.algorithm.unfold import collapse_operational, unfold
from spring_tally.models.condition_record import ConditionRecord, parse_cells, parse_record


EXAMPLE_COUNTS = [
    ("???.### 1,1,3", 1),
    (".??..??...?##. 1,1,3", 4),
    ("?#?#?#?#?#?#?#? 1,3,1,6", 1),
    ("????.#...#... 4,1,1", 1),
    ("????.######..#####. 1,6,5", 4),
    ("?###???????? 3,2,1", 10),
]


class TestBacktrackCount:
    """Test suite for the backtracking counter"""

    @pytest.mark.parametrize("line,expected", EXAMPLE_COUNTS)
    def test_examples(self, line, expected):
        """Test the worked example records"""
        assert count(parse_record(line)) == expected

    def test_example_sum(self):
        """Test the example set sums to 21"""
        assert sum(count(parse_record(line)) for line, _ in EXAMPLE_COUNTS) == 21

    def test_two_runs(self):
        """Test a record with a leading and trailing operational cell"""
        assert count(parse_record(".??????. 3,1")) == 3

    def test_fully_known(self):
        """Test a record without unknown cells counts itself once"""
        assert count(parse_record("#.#.### 1,1,3")) == 1
        assert count(parse_record("#.##.## 1,1,3")) == 0

    def test_infeasible(self):
        """Test runs that cannot fit count zero"""
        assert count(parse_record("?? 2,1")) == 0

    def test_zero_segments(self):
        """Test a record without segments counts one only when undamaged"""
        assert count(ConditionRecord(parse_cells("..??.."), ())) == 1
        assert count(ConditionRecord(parse_cells("..?#.."), ())) == 0

    def test_collapse_preserves_count(self):
        """Test collapsing operational runs does not change the count"""
        for line, expected in EXAMPLE_COUNTS:
            assert count(collapse_operational(parse_record(line))) == expected

    def test_small_unfold(self):
        """Test an unfolded record is still tractable when tiny"""
        assert count(unfold(parse_record("???.### 1,1,3"))) == 1

    @pytest.mark.parametrize("line,expected", EXAMPLE_COUNTS)
    def test_reversal_symmetry(self, line, expected):
        """Test reversing springs and segments keeps the count"""
        assert count(parse_record(line).reversed()) == expected
