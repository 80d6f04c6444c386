import io

import pytest

from schedsim.algorithms import schedule_sjf
from schedsim.errors import EmptyBatchError
from schedsim.gantt import build_rich_gantt, layout_segments, render_gantt
from schedsim.models import Process, TimelineEntry
from schedsim.report import fcfs_schedule, rr_schedule, sjf_priority_schedule, sjf_schedule, write_schedule


def _procs():
    return [
        Process("P1", arrival_time=0, burst_time=5, priority=2),
        Process("P2", arrival_time=1, burst_time=3, priority=1),
        Process("P3", arrival_time=2, burst_time=8, priority=3),
    ]


def test_render_gantt_plain():
    chart = render_gantt([TimelineEntry("P1", 0, 5), TimelineEntry("P2", 5, 8), TimelineEntry("P3", 8, 16)])
    lines = chart.splitlines()
    assert lines[0] == "Gantt Chart:"
    assert lines[1] == "|" + "=" * 16 + "|"
    assert lines[2].split() == ["P1", "P2", "P3"]
    assert lines[3].split() == ["0", "5", "8", "16"]


def test_render_gantt_marks_idle_time():
    chart = render_gantt([TimelineEntry("A", 0, 2), TimelineEntry("B", 5, 6)])
    assert chart.splitlines()[1] == "|==...=|"


def test_render_gantt_empty():
    assert render_gantt([]) == "(no execution)"


def test_fcfs_report_sections_in_order():
    sink = io.StringIO()
    result = fcfs_schedule(sink, "First Come First Serve", _procs())
    out = sink.getvalue()

    title_at = out.index("First Come First Serve")
    gantt_at = out.index("Gantt Chart")
    table_at = out.index("Turnaround")
    assert title_at < gantt_at < table_at
    assert "Average wait" in out
    assert "3.33" in out
    assert "0.19/t" in out
    assert result.rows[2].completion_time == 16


def test_sjf_reports_render_timeline():
    sink = io.StringIO()
    sjf_schedule(sink, "SJF", _procs(), legacy_wait=False)
    sjf_priority_schedule(sink, "SJF idle", _procs())
    assert "Gantt Chart" in sink.getvalue()


def test_rr_single_pass_report_has_no_timeline():
    sink = io.StringIO()
    result = rr_schedule(sink, "Round Robin", _procs())
    out = sink.getvalue()
    assert "Gantt Chart" not in out
    assert "negative waiting time" in out
    assert result.warnings


def test_rr_quantum_report_has_timeline():
    sink = io.StringIO()
    rr_schedule(sink, "Round Robin", _procs(), quantum=2)
    assert "Gantt Chart" in sink.getvalue()


def test_invalid_batch_writes_nothing():
    sink = io.StringIO()
    with pytest.raises(EmptyBatchError):
        fcfs_schedule(sink, "empty", [])
    assert sink.getvalue() == ""


def test_plain_report_uses_ascii_chart():
    sink = io.StringIO()
    write_schedule(sink, "FCFS", _procs(), "fcfs", plain=True)
    assert "|" + "=" * 16 + "|" in sink.getvalue()


def test_sjf_chart_cells_follow_time_axis():
    timeline = schedule_sjf(_procs()).timeline
    lines = render_gantt(timeline).splitlines()
    assert lines[1] == "|" + "=" * 5 + "." * 3 + "=" * 8 + "|"
    assert len(lines[1]) - 2 == max(e.stop for e in timeline) == 16
    assert lines[3].split() == ["0", "5", "8", "16"]


def test_rich_chart_uses_same_layout():
    timeline = schedule_sjf(_procs()).timeline
    _, time_marks = build_rich_gantt(timeline)
    assert time_marks == render_gantt(timeline).splitlines()[3]


def test_layout_keeps_uncovered_tail_of_overlapping_entry():
    segments = layout_segments([TimelineEntry("A", 0, 4), TimelineEntry("B", 2, 7)])
    assert segments == [("A", 0, 4), ("B", 4, 7)]


def test_process_ids_are_not_read_as_markup():
    sink = io.StringIO()
    rr_schedule(sink, "ids", [Process("[/job]", 0, 5), Process("[red]x", 1, 3)])
    out = sink.getvalue()
    assert "[/job]" in out
    assert "[red]x" in out
