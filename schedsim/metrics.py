from __future__ import annotations

import logging
from typing import List

from .errors import EmptyBatchError
from .models import MetricsRow, ScheduleResult

logger = logging.getLogger(__name__)


def compute_aggregates(result: ScheduleResult) -> ScheduleResult:
    """
    Fill in average waiting/turnaround and throughput from the populated rows.

    Throughput is ``len(rows) / result.last_completion``; each policy decides
    what its last completion is, so it must be set before calling this.
    """
    if not result.rows:
        raise EmptyBatchError()

    n = len(result.rows)
    result.average_waiting = sum(r.waiting_time for r in result.rows) / n
    result.average_turnaround = sum(r.turnaround_time for r in result.rows) / n
    result.throughput = n / result.last_completion if result.last_completion > 0 else 0.0

    for row in result.rows:
        if row.waiting_time < 0:
            msg = f"{row.pid} has negative waiting time {row.waiting_time} under {result.algorithm}"
            logger.warning(msg)
            result.warnings.append(msg)

    return result


def invariant_violations(rows: List[MetricsRow]) -> List[str]:
    """
    Return a description of every row breaking the timing identities.

    completion == arrival + waiting + burst, turnaround == waiting + burst.
    """
    problems = []
    for r in rows:
        if r.completion_time != r.arrival_time + r.waiting_time + r.burst_time:
            problems.append(f"{r.pid}: completion {r.completion_time} != arrival + waiting + burst")
        if r.turnaround_time != r.waiting_time + r.burst_time:
            problems.append(f"{r.pid}: turnaround {r.turnaround_time} != waiting + burst")
    return problems


def summarize_results(results: List[ScheduleResult]) -> List[dict]:
    """
    Return one flat dict of averages per result for quick comparison.
    """
    return [
        {
            "algorithm": r.algorithm,
            "quantum": r.quantum,
            "avg_waiting": r.average_waiting,
            "avg_turnaround": r.average_turnaround,
            "throughput": r.throughput,
            "warnings": len(r.warnings),
        }
        for r in results
    ]
