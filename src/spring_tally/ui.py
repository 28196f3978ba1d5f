from typing import Optional

from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table

from spring_tally.dispatcher import Totals
from spring_tally.progress_queue import LatestQueue
from spring_tally.progress_snapshot import ProgressSnapshot


COLORS = {
    "label": "cyan",
    "value": "bold spring_green2",
    "pending": "dim",
    "complete": "bright_green",
}


def render(state: Optional[ProgressSnapshot]):
    """Render the dispatch progress snapshot."""
    if state is None:
        return Panel("Waiting for first update…", title="Spring Tally", border_style="dim")

    status = "done" if state.complete else "counting"
    status_style = COLORS["complete"] if state.complete else COLORS["pending"]

    ui_table = Table(
        title=f"{state.strategy}  |  {state.jobs_done} / {state.jobs_total} lines  |  v{state.version}",
        show_header=False,
    )
    ui_table.add_column("Field", justify="right", style=COLORS["label"])
    ui_table.add_column("Value")

    ui_table.add_row("Progress", ProgressBar(total=max(state.jobs_total, 1), completed=state.jobs_done, width=40))
    ui_table.add_row("Complete", f"{state.completion_percent:.1f}%")
    ui_table.add_row("Running total", f"[{COLORS['value']}]{state.running_total}[/{COLORS['value']}]")
    if state.last_line_number:
        ui_table.add_row("Last line", f"{state.last_line_number} → {state.last_arrangements}")
    ui_table.add_row("Status", f"[{status_style}]{status}[/{status_style}]")
    return ui_table


def ui_loop(progress: LatestQueue[ProgressSnapshot], console: Optional[Console] = None) -> None:
    """Loop the UI until the dispatcher closes the queue."""
    with Live(render(None), console=console, refresh_per_second=15, screen=False) as live:
        while True:
            state = progress.get()
            if state is None:
                break
            live.update(render(state))


def render_totals(totals: Totals) -> Table:
    table = Table(title="Arrangements")
    table.add_column("Part", justify="right")
    table.add_column("Strategy")
    table.add_column("Sum", justify="right", style=COLORS["value"])
    if totals.part_one is not None:
        table.add_row("1", "backtrack", str(totals.part_one))
    if totals.part_two is not None:
        table.add_row("2", "interval (unfolded)", str(totals.part_two))
    return table
