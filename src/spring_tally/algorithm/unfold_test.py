import pytest
from spring_tally.algorithm.unfold import collapse_operational, unfold
from spring_tally.models.condition_record import parse_record


class TestUnfold:
    """Test suite for unfold"""

    def test_single_cell(self):
        """Test springs are joined by unknown cells and segments repeated"""
        assert unfold(parse_record(".# 1")) == parse_record(".#?.#?.#?.#?.# 1,1,1,1,1")

    def test_example_record(self):
        """Test unfolding a record with several runs"""
        assert unfold(parse_record("???.### 1,1,3")) == parse_record(
            "???.###????.###????.###????.###????.### 1,1,3,1,1,3,1,1,3,1,1,3,1,1,3"
        )

    def test_once_is_identity(self):
        """Test unfolding once leaves the record unchanged"""
        record = parse_record("?###???????? 3,2,1")
        assert unfold(record, 1) == record

    def test_input_untouched(self):
        """Test unfolding returns a new record"""
        record = parse_record("?# 1")
        unfolded = unfold(record, 3)
        assert unfolded is not record
        assert record == parse_record("?# 1")

    def test_rejects_zero(self):
        """Test the repeat count must be positive"""
        with pytest.raises(ValueError, match="at least 1"):
            unfold(parse_record("# 1"), 0)


class TestCollapseOperational:
    """Test suite for collapse_operational"""

    def test_collapse(self):
        """Test consecutive operational cells collapse to one"""
        assert collapse_operational(parse_record("..#...??.. 1,1")) == parse_record(".#.??. 1,1")

    def test_unfolded_collapse_matches(self):
        """Test collapsing removes padding created at repeat boundaries"""
        assert collapse_operational(unfold(parse_record("......# 1"))) == unfold(parse_record(".# 1"))

    def test_nothing_to_collapse(self):
        """Test a record without operational runs is unchanged"""
        record = parse_record("?#?#? 1,1")
        assert collapse_operational(record) == record
