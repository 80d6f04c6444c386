from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import TimelineEntry

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]

# (pid, start, stop); pid is None for an idle gap.
Segment = Tuple[Optional[str], int, int]


def layout_segments(timeline: Sequence[TimelineEntry]) -> List[Segment]:
    """
    Lay the timeline out on a single time axis starting at 0.

    Gaps become idle segments. The burst-sorted policies can emit entries
    that overlap earlier ones: the uncovered tail of such an entry is drawn,
    and an entry lying entirely under an earlier bar is dropped, so segment
    widths always add up to the last stop.
    """
    segments: List[Segment] = []
    last_time = 0

    for entry in sorted(timeline, key=lambda e: (e.start, e.stop)):
        if entry.start > last_time:
            segments.append((None, last_time, entry.start))
            last_time = entry.start
        if entry.stop <= last_time:
            continue
        segments.append((entry.pid, max(entry.start, last_time), entry.stop))
        last_time = entry.stop

    return segments


def _time_marks(segments: Sequence[Segment]) -> str:
    return "0" + "".join(f"{stop:>3}" for _, _, stop in segments)


def _label(pid: str, width: int) -> str:
    return pid[:width].ljust(width)


def render_gantt(timeline: Sequence[TimelineEntry]) -> str:
    """
    Plain-text Gantt chart: a bar line, a label line and a time-mark line.

    Busy time is drawn with '=', idle time with '.'; one cell per time unit.
    """
    if not timeline:
        return "(no execution)"

    segments = layout_segments(timeline)
    line = "".join(("=" if pid else ".") * (stop - start) for pid, start, stop in segments)
    labels = "".join(_label(pid or "", stop - start) for pid, start, stop in segments)

    return "\n".join(["Gantt Chart:", f"|{line}|", f" {labels}", _time_marks(segments)])


def build_rich_gantt(timeline: Sequence[TimelineEntry]) -> tuple[Panel, str]:
    """
    Colored version of :func:`render_gantt`, returned as a Panel plus the time-mark line.
    """
    if not timeline:
        return Panel("No execution", title="Gantt Chart"), ""

    segments = layout_segments(timeline)
    colors: Dict[str, str] = {}
    bars = Text()
    labels = Text()

    for pid, start, stop in segments:
        width = stop - start
        if pid is None:
            bars.append(" " * width)
            labels.append(" " * width)
            continue
        color = colors.setdefault(pid, COLORS[len(colors) % len(COLORS)])
        bars.append(" " * width, style=f"on {color}")
        labels.append(_label(pid, width), style="bold")

    grid = Table.grid(padding=(0, 0))
    grid.add_row(bars)
    grid.add_row(labels)

    return Panel.fit(grid, title="Gantt Chart"), _time_marks(segments)


def render_timeline(console: Console, timeline: Sequence[TimelineEntry]) -> None:
    panel, time_marks = build_rich_gantt(timeline)
    console.print(panel)
    if time_marks:
        console.print(time_marks)
    console.print()
