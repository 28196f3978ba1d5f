from rich.panel import Panel
from rich.table import Table
from spring_tally.dispatcher import Totals
from spring_tally.progress_snapshot import ProgressSnapshot
from spring_tally.ui import render, render_totals


class TestRender:
    """Test suite for the progress view"""

    def test_waiting(self):
        """Test the placeholder before any snapshot arrives"""
        assert isinstance(render(None), Panel)

    def test_snapshot(self):
        """Test a snapshot renders as a table"""
        state = ProgressSnapshot(
            version=3,
            strategy="interval",
            jobs_total=4,
            jobs_done=2,
            running_total=99,
            last_line_number=2,
            last_arrangements=40,
        )
        table = render(state)
        assert isinstance(table, Table)
        assert "2 / 4" in table.title
        assert table.row_count == 5

    def test_completion_percent(self):
        """Test percentages, including an empty run"""
        assert ProgressSnapshot(1, "backtrack", 4, 1, 0).completion_percent == 25.0
        assert ProgressSnapshot(1, "backtrack", 0, 0, 0).completion_percent == 100.0


class TestRenderTotals:
    """Test suite for the totals table"""

    def test_rows_follow_parts(self):
        """Test only computed parts get a row"""
        assert render_totals(Totals(part_one=21, part_two=525152)).row_count == 2
        assert render_totals(Totals(part_one=21)).row_count == 1
