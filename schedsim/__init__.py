"""
Batch CPU scheduling simulator.

Computes per-process timings, timelines and summary statistics for FCFS,
SJF, idle-aware SJF and Round Robin, and renders them as text.
"""

from .algorithms import (
    ALGORITHMS,
    run_algorithm,
    schedule_fcfs,
    schedule_rr,
    schedule_sjf,
    schedule_sjf_priority,
)
from .models import MetricsRow, Process, ScheduleResult, TimelineEntry

__all__ = [
    "ALGORITHMS",
    "MetricsRow",
    "Process",
    "ScheduleResult",
    "TimelineEntry",
    "run_algorithm",
    "schedule_fcfs",
    "schedule_rr",
    "schedule_sjf",
    "schedule_sjf_priority",
]
