from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Dict, List, Optional, Sequence

from .errors import (
    DuplicateProcessIDError,
    EmptyBatchError,
    InvalidArrivalError,
    InvalidBurstError,
    InvalidQuantumError,
    UnknownAlgorithmError,
)
from .metrics import compute_aggregates
from .models import MetricsRow, Process, ScheduleResult, TimelineEntry

logger = logging.getLogger(__name__)


def validate_processes(processes: Sequence[Process]) -> None:
    """
    Reject batches that would produce degenerate schedules.

    Runs before any clock advancement so a failing batch never yields a
    partial result.
    """
    if not processes:
        raise EmptyBatchError()

    seen = set()
    for p in processes:
        if p.burst_time <= 0:
            raise InvalidBurstError(p.pid, p.burst_time)
        if p.arrival_time < 0:
            raise InvalidArrivalError(p.pid, p.arrival_time)
        if p.pid in seen:
            raise DuplicateProcessIDError(p.pid)
        seen.add(p.pid)


def _by_burst(processes: Sequence[Process]) -> List[Process]:
    # sorted() is stable: equal bursts keep their input order.
    return sorted(processes, key=lambda p: p.burst_time)


def _run_in_order(
    ordered: List[Process],
    algorithm: str,
    legacy_wait: bool,
    clamp_wait: bool = False,
    idle_until_arrival: bool = False,
) -> ScheduleResult:
    """
    Serve ``ordered`` one process at a time, non-preemptively.

    With ``legacy_wait`` a process arriving at time 0 reuses the waiting time
    computed for the previous process instead of getting its own.
    """
    service_time = 0
    waiting_time = 0
    timeline: List[TimelineEntry] = []
    rows: List[MetricsRow] = []
    last_completion = 0

    for p in ordered:
        if idle_until_arrival and service_time < p.arrival_time:
            logger.debug("%s: CPU idle from %d to %d waiting for %s", algorithm, service_time, p.arrival_time, p.pid)
            service_time = p.arrival_time

        if p.arrival_time > 0 or not legacy_wait:
            waiting_time = service_time - p.arrival_time
            if (clamp_wait or not legacy_wait) and waiting_time < 0:
                waiting_time = 0

        start = waiting_time + p.arrival_time
        completion = p.burst_time + p.arrival_time + waiting_time
        turnaround = p.burst_time + waiting_time
        last_completion = completion
        service_time += p.burst_time

        logger.debug("%s: %s runs %d-%d (waited %d)", algorithm, p.pid, start, completion, waiting_time)
        timeline.append(TimelineEntry(pid=p.pid, start=start, stop=completion))
        rows.append(
            MetricsRow(
                pid=p.pid,
                priority=p.priority,
                burst_time=p.burst_time,
                arrival_time=p.arrival_time,
                waiting_time=waiting_time,
                turnaround_time=turnaround,
                completion_time=completion,
            )
        )

    result = ScheduleResult(algorithm=algorithm, rows=rows, timeline=timeline, last_completion=last_completion)
    return compute_aggregates(result)


def schedule_fcfs(processes: Sequence[Process], legacy_wait: bool = True) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive), served in the order given.

    The caller's order is the service order; no sort by arrival is applied.
    """
    validate_processes(processes)
    return _run_in_order(list(processes), "FCFS", legacy_wait)


def schedule_sjf(processes: Sequence[Process], legacy_wait: bool = True) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive) with a single global sort by burst.

    Readiness is never re-evaluated, so a job that has not arrived yet still
    runs in its sorted slot without the CPU idling for it. Waiting time is
    clamped at 0.
    """
    validate_processes(processes)
    return _run_in_order(_by_burst(processes), "SJF", legacy_wait, clamp_wait=True)


def schedule_sjf_priority(processes: Sequence[Process], legacy_wait: bool = True) -> ScheduleResult:
    """
    SJF that lets the CPU idle until each job in sorted order has arrived.

    Still one global sort: this matches true dynamic SJF only when no shorter
    job arrives after a longer one has started.
    """
    validate_processes(processes)
    return _run_in_order(
        _by_burst(processes),
        "SJF (idle-aware)",
        legacy_wait,
        clamp_wait=True,
        idle_until_arrival=True,
    )


def _schedule_rr_single_pass(processes: Sequence[Process]) -> ScheduleResult:
    """
    Burst-sorted, run-to-completion pass with no quantum and no timeline.

    Turnaround is measured from each process's arrival against a clock that
    never idles, so a short job that arrives after the clock has started can
    report a negative waiting time. Those are kept and reported as warnings.
    """
    ordered = _by_burst(processes)
    remaining = [p.burst_time for p in ordered]
    turnaround = [0] * len(ordered)
    current_time = 0

    while True:
        done = True
        for i, p in enumerate(ordered):
            if remaining[i] > 0:
                done = False
                current_time += remaining[i]
                turnaround[i] = current_time - p.arrival_time
                remaining[i] = 0
        if done:
            break

    rows: List[MetricsRow] = []
    for i, p in enumerate(ordered):
        waiting_time = turnaround[i] - p.burst_time
        rows.append(
            MetricsRow(
                pid=p.pid,
                priority=p.priority,
                burst_time=p.burst_time,
                arrival_time=p.arrival_time,
                waiting_time=waiting_time,
                turnaround_time=turnaround[i],
                completion_time=p.arrival_time + turnaround[i],
            )
        )

    result = ScheduleResult(algorithm="Round Robin (single pass)", rows=rows, last_completion=current_time)
    return compute_aggregates(result)


def _schedule_rr_quantum(processes: Sequence[Process], quantum: int) -> ScheduleResult:
    """
    Preemptive Round Robin with a fixed time quantum.

    Processes join the ready queue in arrival order (input order on ties).
    After each slice, processes that arrived during it are enqueued before the
    preempted one goes back to the tail.
    """
    by_arrival = sorted(processes, key=lambda p: p.arrival_time)
    remaining: Dict[str, int] = {p.pid: p.burst_time for p in by_arrival}
    completion: Dict[str, int] = {}

    time = 0
    timeline: List[TimelineEntry] = []
    ready: Deque[Process] = deque()
    next_index = 0

    def enqueue_new_arrivals(current_time: int) -> None:
        nonlocal next_index
        while next_index < len(by_arrival) and by_arrival[next_index].arrival_time <= current_time:
            ready.append(by_arrival[next_index])
            next_index += 1

    enqueue_new_arrivals(time)

    while len(completion) < len(by_arrival):
        if not ready:
            # CPU idle: jump to the next arrival.
            time = by_arrival[next_index].arrival_time
            enqueue_new_arrivals(time)
            continue

        p = ready.popleft()
        run_time = min(quantum, remaining[p.pid])
        timeline.append(TimelineEntry(pid=p.pid, start=time, stop=time + run_time))
        logger.debug("RR: %s runs %d-%d", p.pid, time, time + run_time)

        time += run_time
        remaining[p.pid] -= run_time

        enqueue_new_arrivals(time)

        if remaining[p.pid] > 0:
            ready.append(p)
        else:
            completion[p.pid] = time

    rows: List[MetricsRow] = []
    for p in by_arrival:
        turnaround = completion[p.pid] - p.arrival_time
        rows.append(
            MetricsRow(
                pid=p.pid,
                priority=p.priority,
                burst_time=p.burst_time,
                arrival_time=p.arrival_time,
                waiting_time=turnaround - p.burst_time,
                turnaround_time=turnaround,
                completion_time=completion[p.pid],
            )
        )

    result = ScheduleResult(
        algorithm="Round Robin",
        quantum=quantum,
        rows=rows,
        timeline=timeline,
        last_completion=max(completion.values()),
    )
    return compute_aggregates(result)


def schedule_rr(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin.

    Without a quantum this is the historical single-pass behavior: jobs sorted
    by burst and each run to completion, which can yield negative waiting
    times (flagged in ``result.warnings``). With a positive quantum it is real
    preemptive Round Robin.
    """
    if quantum is not None and (isinstance(quantum, bool) or not isinstance(quantum, int) or quantum <= 0):
        raise InvalidQuantumError(quantum)
    validate_processes(processes)

    if quantum is None:
        return _schedule_rr_single_pass(processes)
    return _schedule_rr_quantum(processes, quantum)


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "sjf-priority": schedule_sjf_priority,
    "rr": schedule_rr,
}


def run_algorithm(
    name: str,
    processes: Sequence[Process],
    quantum: Optional[int] = None,
    legacy_wait: bool = True,
) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. ``quantum`` only affects ``rr``;
    ``legacy_wait`` only affects the non-preemptive policies.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise UnknownAlgorithmError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    if name == "rr":
        return schedule_rr(processes, quantum=quantum)
    return ALGORITHMS[name](processes, legacy_wait=legacy_wait)
