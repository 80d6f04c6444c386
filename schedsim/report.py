"""
Text output for schedule results.

``render_title``, ``render_timeline`` and ``render_table`` write one section
each to a ``rich`` console. The ``*_schedule`` functions run a policy and
write all sections, in that order, to any text sink (``sys.stdout``, an open
file, ``io.StringIO``).
"""

from __future__ import annotations

from typing import Optional, Sequence, TextIO

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .algorithms import run_algorithm
from .gantt import render_gantt, render_timeline
from .models import MetricsRow, Process, ScheduleResult

HEADERS = ["PID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Completion"]


def make_console(sink: TextIO) -> Console:
    return Console(file=sink, highlight=False, soft_wrap=True)


def render_title(console: Console, title: str) -> None:
    console.print(f"[bold]{escape(title)}[/bold]")
    console.print()


def render_table(
    console: Console,
    rows: Sequence[MetricsRow],
    average_waiting: float,
    average_turnaround: float,
    throughput: float,
) -> None:
    table = Table(title="Schedule", box=box.SIMPLE_HEAVY)
    for h in HEADERS:
        table.add_column(h, justify="center" if h in {"PID", "Priority"} else "right")

    for r in rows:
        table.add_row(
            escape(r.pid),
            str(r.priority),
            str(r.burst_time),
            str(r.arrival_time),
            str(r.waiting_time),
            str(r.turnaround_time),
            str(r.completion_time),
        )

    console.print(table)

    footer = Table(box=box.SIMPLE_HEAVY, show_header=False)
    footer.add_column("Metric")
    footer.add_column("Value", justify="right")
    footer.add_row("Average wait", f"{average_waiting:.2f}")
    footer.add_row("Average turnaround", f"{average_turnaround:.2f}")
    footer.add_row("Throughput", f"{throughput:.2f}/t")
    console.print(footer)


def render_result(console: Console, title: str, result: ScheduleResult, plain: bool = False) -> None:
    render_title(console, title)
    # The single-pass Round Robin has no meaningful timeline.
    if result.timeline:
        if plain:
            console.print(render_gantt(result.timeline), markup=False)
            console.print()
        else:
            render_timeline(console, result.timeline)
    render_table(console, result.rows, result.average_waiting, result.average_turnaround, result.throughput)
    for warning in result.warnings:
        console.print(f"[yellow]warning:[/yellow] {escape(warning)}")


def write_schedule(
    sink: TextIO,
    title: str,
    processes: Sequence[Process],
    algorithm: str,
    quantum: Optional[int] = None,
    legacy_wait: bool = True,
    plain: bool = False,
) -> ScheduleResult:
    """
    Run ``algorithm`` over ``processes`` and write the report to ``sink``.

    Validation happens before anything is written, so an invalid batch leaves
    the sink untouched.
    """
    result = run_algorithm(algorithm, processes, quantum=quantum, legacy_wait=legacy_wait)
    render_result(make_console(sink), title, result, plain=plain)
    return result


def fcfs_schedule(sink: TextIO, title: str, processes: Sequence[Process], legacy_wait: bool = True) -> ScheduleResult:
    return write_schedule(sink, title, processes, "fcfs", legacy_wait=legacy_wait)


def sjf_schedule(sink: TextIO, title: str, processes: Sequence[Process], legacy_wait: bool = True) -> ScheduleResult:
    return write_schedule(sink, title, processes, "sjf", legacy_wait=legacy_wait)


def sjf_priority_schedule(
    sink: TextIO, title: str, processes: Sequence[Process], legacy_wait: bool = True
) -> ScheduleResult:
    return write_schedule(sink, title, processes, "sjf-priority", legacy_wait=legacy_wait)


def rr_schedule(sink: TextIO, title: str, processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    return write_schedule(sink, title, processes, "rr", quantum=quantum)
