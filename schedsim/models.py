from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Process:
    pid: str
    arrival_time: int
    burst_time: int
    priority: int = 0


@dataclass
class TimelineEntry:
    """
    One contiguous interval in which a single process occupies the CPU.
    """

    pid: str
    start: int
    stop: int


@dataclass
class MetricsRow:
    pid: str
    priority: int
    burst_time: int
    arrival_time: int
    waiting_time: int
    turnaround_time: int
    completion_time: int


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int] = None
    rows: List[MetricsRow] = field(default_factory=list)
    timeline: List[TimelineEntry] = field(default_factory=list)
    average_waiting: float = 0.0
    average_turnaround: float = 0.0
    throughput: float = 0.0
    last_completion: int = 0
    warnings: List[str] = field(default_factory=list)
