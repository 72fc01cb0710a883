"""
Rich-based live progress panel for the long-running build phases.

Reading a multi-million line dump and writing thousands of content
documents both take minutes; the panel shows running counters, elapsed
time and throughput in place instead of scrolling the terminal.
"""

import time
from typing import Any, Dict, Optional

from rich import box
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


class ProgressDisplay:
    """
    Context manager showing live-updating counters.

    Usage:
        with ProgressDisplay("Reading entries") as progress:
            for entry in entries:
                progress.update(Entries=count)

    The first counter passed to update() drives the Rate figure.
    """

    def __init__(self, title: str = "Progress", update_interval: int = 1000,
                 refresh_per_second: int = 4):
        self.title = title
        self.update_interval = update_interval
        self.refresh_per_second = refresh_per_second

        self.metrics: Dict[str, Any] = {}
        self.live: Optional[Live] = None
        self.start_time: float = 0.0
        self.calls: int = 0
        self._rate_metric: Optional[str] = None

    def __enter__(self):
        self.start_time = time.monotonic()
        self.live = Live(self._make_panel(), refresh_per_second=self.refresh_per_second,
                         transient=True)
        self.live.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.live:
            self._refresh()
            self.live.__exit__(exc_type, exc_val, exc_tb)
            self.live = None
        return False

    def update(self, **metrics):
        """Record the latest counter values; redraw every update_interval calls."""
        self.calls += 1
        self.metrics.update(metrics)

        if self._rate_metric is None and metrics:
            self._rate_metric = next(iter(metrics))

        if self.calls % self.update_interval == 0:
            self._refresh()

    def elapsed(self) -> float:
        return time.monotonic() - self.start_time

    def _refresh(self):
        if self.live:
            self.live.update(self._make_panel())

    def _make_panel(self) -> Panel:
        grid = Table.grid(padding=(0, 2))
        grid.add_column(justify="left", no_wrap=True)
        grid.add_column(justify="right", no_wrap=True)

        elapsed = self.elapsed() if self.start_time else 0.0
        rows = dict(self.metrics)
        rows["Elapsed"] = format_duration(elapsed)
        if self._rate_metric and elapsed > 0:
            count = self.metrics.get(self._rate_metric)
            if isinstance(count, (int, float)):
                rows["Rate"] = f"{count / elapsed:,.1f}/s"

        for key, value in rows.items():
            if isinstance(value, int):
                value = f"{value:,}"
            grid.add_row(Text(f"{key}:", style="bold grey50"),
                         Text(str(value), style="bright_cyan"))

        return Panel(grid, title=self.title, box=box.SIMPLE, border_style="bright_black")


def format_duration(seconds: float) -> str:
    """Format seconds as MM:SS, or HH:MM:SS past the hour."""
    seconds = int(seconds)
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"
